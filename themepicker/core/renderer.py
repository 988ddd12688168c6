"""Render resolved theme variables into downstream config formats."""

from __future__ import annotations

from pathlib import Path

from themepicker.core.colors import to_hex
from themepicker.core.resolver import VariableTable, split_lines
from themepicker.errors import ErrorCode, ThemeError

PLACEHOLDER_FENCE = "__"


def autogenerated_header(source: Path | str) -> str:
    return f"# Autogenerated from {source}\n"


def find_placeholder(line: str) -> tuple[str, str] | None:
    """Return ``(placeholder, name)`` for the placeholder on ``line``, or None.

    The placeholder spans from the first ``__`` to the last ``__`` after it, so
    a line holding two placeholders yields a single name that will not match
    any variable.
    """
    start = line.find(PLACEHOLDER_FENCE)
    if start < 0:
        return None
    end = line.rfind(PLACEHOLDER_FENCE, start + len(PLACEHOLDER_FENCE))
    if end < 0:
        return None
    placeholder = line[start:end + len(PLACEHOLDER_FENCE)]
    name = line[start + len(PLACEHOLDER_FENCE):end]
    return placeholder, name


def render_template(variables: VariableTable, template_text: str) -> str:
    """Substitute ``__name__`` placeholders with hex colors, line by line.

    Lines without a placeholder, or whose placeholder names an unknown
    variable, are copied unchanged. A known variable whose value is not an
    ``rgba()`` color aborts the whole render.
    """
    output: list[str] = []
    for number, line in enumerate(split_lines(template_text), start=1):
        found = find_placeholder(line)
        if found is None:
            output.append(line)
            continue

        placeholder, name = found
        value = variables.get(name)
        if value is None:
            output.append(line)
            continue

        try:
            hex_color = to_hex(value)
        except ThemeError as exc:
            raise ThemeError(
                ErrorCode.COLOR_CONVERSION_FAILED,
                message=f"Cannot convert {placeholder} on line {number}: {exc.message}",
                details={"variable": name, "value": value},
            ) from exc
        output.append(line.replace(placeholder, hex_color, 1))

    return "".join(f"{line}\n" for line in output)


def render_style_variables(variables: VariableTable, source: Path | str) -> str:
    """Emit one ``$name = value`` line per pair, in resolution order."""
    body = "".join(f"${name} = {value}\n" for name, value in variables)
    return autogenerated_header(source) + body


def render_terminal_theme(
    variables: VariableTable,
    template_text: str,
    source: Path | str,
) -> str:
    return autogenerated_header(source) + render_template(variables, template_text)
