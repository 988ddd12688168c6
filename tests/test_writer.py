"""Tests for themepicker.core.writer."""

import pytest

from themepicker.core.writer import read_template, write_config
from themepicker.errors import ErrorCode, ThemeError


def test_write_creates_parents(tmp_path):
    target = tmp_path / "a" / "b" / "theme.conf"
    assert write_config(target, "x\n") == target
    assert target.read_text(encoding="utf-8") == "x\n"


def test_write_overwrites(tmp_path):
    target = tmp_path / "theme.conf"
    target.write_text("old contents that are longer\n", encoding="utf-8")
    write_config(target, "new\n")
    assert target.read_text(encoding="utf-8") == "new\n"


def test_write_into_file_parent_fails(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    with pytest.raises(ThemeError) as excinfo:
        write_config(blocker / "theme.conf", "x")
    assert excinfo.value.code is ErrorCode.IO_ERROR
    assert excinfo.value.message.startswith("Failed to write config")


def test_read_missing_template(tmp_path):
    with pytest.raises(ThemeError) as excinfo:
        read_template(tmp_path / "missing.conf")
    assert excinfo.value.code is ErrorCode.IO_ERROR
    assert excinfo.value.path == tmp_path / "missing.conf"
