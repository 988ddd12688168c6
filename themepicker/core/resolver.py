"""Resolve ``$name: value;`` assignments from SCSS theme files.

Only a tiny subset of SCSS is understood: variable assignments on a single
line and ``@use "module";`` imports. Everything else (comments, rules, mixins,
blank lines) is skipped without complaint.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
import logging
from pathlib import Path
from typing import Iterator

from themepicker.errors import ErrorCode, ThemeError, io_error

logger = logging.getLogger(__name__)

IMPORT_KEYWORD = "@use"
SCSS_EXTENSION = ".scss"

_MARKER = "$"
_SEPARATOR = ":"
_TERMINATOR = ";"


@dataclass(frozen=True, slots=True)
class VariableTable:
    """Ordered ``(name, value)`` pairs in the order they were resolved.

    Names can repeat when several files define the same variable; lookups
    return the earliest pair.
    """

    pairs: tuple[tuple[str, str], ...] = ()

    def get(self, name: str) -> str | None:
        for key, value in self.pairs:
            if key == name:
                return value
        return None

    def __contains__(self, name: object) -> bool:
        return any(key == name for key, _ in self.pairs)

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(self.pairs)

    def __len__(self) -> int:
        return len(self.pairs)

    def names(self) -> list[str]:
        return [key for key, _ in self.pairs]


class _ScanState(Enum):
    MARKER = auto()
    SEPARATOR = auto()
    TERMINATOR = auto()


def parse_assignment(line: str) -> tuple[str, str] | None:
    """Extract ``(name, value)`` from one trimmed line, or None.

    The marker, separator and terminator must appear in that order. The name
    is trimmed; every whitespace character is removed from the value.
    """
    state = _ScanState.MARKER
    marker = separator = -1
    for index, char in enumerate(line):
        if state is _ScanState.MARKER:
            if char == _MARKER:
                marker = index
                state = _ScanState.SEPARATOR
        elif state is _ScanState.SEPARATOR:
            if char == _SEPARATOR:
                separator = index
                state = _ScanState.TERMINATOR
        elif char == _TERMINATOR:
            name = line[marker + 1:separator].strip()
            value = "".join(line[separator + 1:index].split())
            return name, value
    return None


def split_lines(text: str) -> list[str]:
    r"""Split on ``\n`` only, dropping one trailing ``\r`` from each line.

    A final line ending does not produce an empty last line.
    """
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def parse_import(line: str) -> str | None:
    """Return the module name of an ``@use "name";`` line, or None.

    The whole line must match, so indentation or trailing spaces reject it.
    """
    prefix = f'{IMPORT_KEYWORD} "'
    suffix = '";'
    if not line.startswith(prefix) or not line.endswith(suffix):
        return None
    if len(line) < len(prefix) + len(suffix):
        return None
    return line[len(prefix):len(line) - len(suffix)]


def resolve_variables(path: Path) -> VariableTable:
    """Resolve every variable reachable from ``path``, following imports depth-first."""
    return VariableTable(tuple(_collect(Path(path), ())))


def _collect(path: Path, stack: tuple[Path, ...]) -> list[tuple[str, str]]:
    key = _identity(path)
    if key in stack:
        chain = " -> ".join(str(item) for item in (*stack, key))
        raise ThemeError(ErrorCode.IMPORT_CYCLE, path=path, details={"chain": chain})

    try:
        with path.open(encoding="utf-8", newline="") as handle:
            content = handle.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise io_error("Could not read file", path, exc) from exc

    logger.debug("resolving variables from %s", path)
    variables: list[tuple[str, str]] = []
    for raw_line in split_lines(content):
        line = raw_line.strip()

        if line.startswith(IMPORT_KEYWORD):
            module = parse_import(raw_line)
            if module is None:
                continue
            imported = path.parent / f"{module}{SCSS_EXTENSION}"
            variables.extend(_collect(imported, (*stack, key)))
            continue

        assignment = parse_assignment(line)
        if assignment is not None:
            variables.append(assignment)

    if not variables:
        raise ThemeError(ErrorCode.NO_VARIABLES_FOUND, path=path)
    return variables


def _identity(path: Path) -> Path:
    try:
        return path.resolve()
    except OSError:
        return path.absolute()
