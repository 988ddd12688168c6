"""Tests for the theme picker window."""

import os
from unittest.mock import MagicMock

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
QtWidgets = pytest.importorskip("PySide6.QtWidgets")

from PySide6.QtCore import Qt  # noqa: E402
from PySide6.QtTest import QTest  # noqa: E402

from themepicker.core.switcher import SwitchReport, SwitchState  # noqa: E402
from themepicker.errors import ErrorCode, ThemeError  # noqa: E402
from themepicker.themes.registry import ThemeRegistry  # noqa: E402
from themepicker.ui.picker_window import ThemePickerWindow  # noqa: E402


@pytest.fixture(scope="module")
def qapp():
    return QtWidgets.QApplication.instance() or QtWidgets.QApplication([])


@pytest.fixture
def registry(settings, make_theme):
    make_theme("nord", name="Nord", description="Arctic")
    make_theme("dracula", name="Dracula", description="Dark")
    make_theme("gruvbox", name="Gruvbox", description="Retro")
    return ThemeRegistry(settings.themes_root)


@pytest.fixture
def switcher():
    mock = MagicMock()
    mock.switch.side_effect = lambda path: SwitchReport(theme_dir=path, state=SwitchState.DONE)
    return mock


@pytest.fixture
def window(qapp, registry, switcher):
    widget = ThemePickerWindow(registry, switcher)
    yield widget
    widget.close()
    widget.deleteLater()


class TestThemePickerWindow:
    def test_lists_themes_and_selects_first(self, window):
        assert window.selected_theme().dir_name == "dracula"

    def test_jk_navigation(self, window):
        QTest.keyClick(window, Qt.Key.Key_J)
        assert window.selected_theme().dir_name == "gruvbox"
        QTest.keyClick(window, Qt.Key.Key_K)
        QTest.keyClick(window, Qt.Key.Key_K)
        assert window.selected_theme().dir_name == "dracula"

    def test_top_and_bottom(self, window):
        QTest.keyClick(window, Qt.Key.Key_G, Qt.KeyboardModifier.ShiftModifier)
        assert window.selected_theme().dir_name == "nord"
        QTest.keyClick(window, Qt.Key.Key_G)
        assert window.selected_theme().dir_name == "dracula"

    def test_list_keys_are_intercepted(self, window):
        QTest.keyClick(window._theme_list, Qt.Key.Key_J)
        assert window.selected_theme().dir_name == "gruvbox"

    def test_enter_applies_selection(self, window, switcher, registry):
        applied = []
        window.theme_applied.connect(applied.append)
        QTest.keyClick(window, Qt.Key.Key_Return)
        switcher.switch.assert_called_once_with(registry.get_theme("dracula").path)
        assert applied == ["dracula"]
        assert window.status_text() == "Applied theme: Dracula"

    def test_warnings_shown(self, window, switcher):
        switcher.switch.side_effect = lambda path: SwitchReport(
            theme_dir=path,
            state=SwitchState.DONE,
            warnings=[ThemeError(ErrorCode.PROCESS_SPAWN_FAILED, message="Failed to run kitty")],
        )
        window.apply_selected()
        assert window.status_text() == "Applied Dracula with warnings: Failed to run kitty"

    def test_error_shown(self, window, switcher):
        switcher.switch.side_effect = lambda path: SwitchReport(
            theme_dir=path,
            state=SwitchState.FAILED,
            error=ThemeError(ErrorCode.NO_VARIABLES_FOUND),
        )
        applied = []
        window.theme_applied.connect(applied.append)
        report = window.apply_selected()
        assert report.state is SwitchState.FAILED
        assert window.status_text() == "Error setting theme: No SCSS variables found."
        assert applied == []

    def test_quit_key_closes(self, window):
        window.show()
        QTest.keyClick(window, Qt.Key.Key_Q)
        assert not window.isVisible()

    def test_empty_registry(self, qapp, tmp_path, switcher):
        widget = ThemePickerWindow(ThemeRegistry(tmp_path / "none"), switcher)
        assert widget.selected_theme() is None
        assert widget.apply_selected() is None
        switcher.switch.assert_not_called()
        widget.deleteLater()
