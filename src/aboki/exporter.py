"""Render extracted rates as terminal tables or JSON."""

from __future__ import annotations

import json
import sys
from typing import Any, List, Mapping, Sequence, TextIO

OUTPUT_FORMATS = ("table", "json")
PADDING = 2


class UnsupportedOutputFormatError(ValueError):
    """Raised when an output format other than table or json is requested."""

    def __init__(self, output: str) -> None:
        self.output = output
        super().__init__(
            f"{output}(1) does not exist. try --help or run with --output json"
        )


def _cell(value: Any) -> str:
    return "" if value is None else str(value)


def format_table(rows: Sequence[Sequence[Any]], head: Sequence[str] | None = None) -> str:
    """Draw ``rows`` as an ASCII box table; short rows are padded with blanks."""
    body = [[_cell(value) for value in row] for row in rows]
    header = [_cell(value) for value in head] if head else []
    all_rows = ([header] if header else []) + body
    columns = max((len(row) for row in all_rows), default=0)
    if columns == 0:
        return ""

    widths = [0] * columns
    for row in all_rows:
        for idx, value in enumerate(row):
            widths[idx] = max(widths[idx], len(value))

    pad = " " * PADDING
    border = "+" + "+".join("-" * (width + 2 * PADDING) for width in widths) + "+"

    def line(row: List[str]) -> str:
        cells = row + [""] * (columns - len(row))
        return "|" + "|".join(pad + value.ljust(width) + pad for value, width in zip(cells, widths)) + "|"

    lines = [border]
    if header:
        lines.extend([line(header), border])
    lines.extend(line(row) for row in body)
    lines.append(border)
    return "\n".join(lines)


def format_mapping(data: Mapping[str, Any]) -> str:
    """Draw a mapping as a vertical key/value table."""
    return format_table([[key, value] for key, value in data.items()])


def format_json(data: Any) -> str:
    return json.dumps(data, ensure_ascii=False, indent=2)


class Presenter:
    """Writes command output to a stream in the chosen format.

    A new presenter is created for every command so no table state is shared
    between invocations.
    """

    def __init__(self, output: str = "table", stream: TextIO | None = None) -> None:
        normalized = (output or "").strip().lower()
        if normalized not in OUTPUT_FORMATS:
            raise UnsupportedOutputFormatError(output)
        self.output = normalized
        self.stream = stream or sys.stdout

    def line(self, text: str = "") -> None:
        print(text, file=self.stream)

    def message(self, text: str) -> None:
        """Print a human-readable line; suppressed in JSON mode to keep output parseable."""
        if self.output == "table":
            self.line(text)

    def table(self, result: Mapping[str, Any], head: Sequence[str] | None = None) -> None:
        """Show an assembled ``{"title", "rows"}`` result."""
        if self.output == "json":
            self.line(format_json(result))
            return
        self.line(result.get("title", ""))
        rendered = format_table(result.get("rows", []), head=head)
        if rendered:
            self.line(rendered)

    def mapping(self, data: Mapping[str, Any]) -> None:
        if self.output == "json":
            self.line(format_json(dict(data)))
        else:
            self.line(format_mapping(data))
