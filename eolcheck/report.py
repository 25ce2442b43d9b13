"""Static HTML report rendering.

The report is a template file with a ``<!--TABLE_ROWS-->`` marker that is
replaced by one ``<tr>`` per CSV row.
"""

import csv
import html
from importlib import resources
from pathlib import Path
from typing import Iterable, List, Optional, Union

from .exceptions import FileProcessingError, TemplateError
from .logging_config import logger

PLACEHOLDER = "<!--TABLE_ROWS-->"
ROW_INDENT = " " * 8
COLUMN_COUNT = 4

ROW_CLASS = "odd:bg-indigo-50/30 even:bg-white transition-colors hover:bg-indigo-100/70"
CELL_CLASS = "px-4 py-3 align-top whitespace-normal text-gray-700"

DEFAULT_OUTPUT = "index.html"


def default_template_path() -> Path:
    """Path of the template shipped with the package."""
    return Path(str(resources.files("eolcheck").joinpath("templates").joinpath("report.html")))


def parse_csv_line(line: str) -> List[str]:
    """
    Split one quoted CSV line into fields.

    Raises:
        FileProcessingError: If the line has an unterminated quoted field
    """
    try:
        rows = list(csv.reader([line], strict=True))
    except csv.Error as e:
        raise FileProcessingError(f"Malformed CSV line encountered: {line}") from e
    return rows[0] if rows else []


def _render_cell(value: str, colspan: Optional[int] = None) -> str:
    span = f' colspan="{colspan}"' if colspan else ""
    return f'<td class="{CELL_CLASS}"{span}>{html.escape(value, quote=True)}</td>'


def render_row(fields: List[str]) -> str:
    """Render one ``<tr>`` element; only the first four fields are kept when there are more."""
    if len(fields) >= COLUMN_COUNT:
        fields = fields[:COLUMN_COUNT]
    cells = "".join(_render_cell(value) for value in fields)
    return f'<tr class="{ROW_CLASS}">{cells}</tr>'


def render_table_rows(lines: Iterable[str]) -> str:
    """
    Render CSV lines as indented table rows.

    Blank lines are skipped. When no row remains a single "No data" row
    spanning all columns is produced.
    """
    rows = []
    for line in lines:
        line = line.rstrip("\r\n")
        if not line:
            continue
        fields = parse_csv_line(line)
        if not fields:
            continue
        rows.append(render_row(fields))

    if not rows:
        rows.append(f'<tr class="{ROW_CLASS}">{_render_cell("No data", colspan=COLUMN_COUNT)}</tr>')

    return "\n".join(f"{ROW_INDENT}{row}" for row in rows)


def load_template(path: Union[str, Path]) -> str:
    """
    Read a report template.

    Raises:
        TemplateError: If the file is missing or lacks the placeholder
    """
    template_path = Path(path)
    if not template_path.is_file():
        raise TemplateError(f"Template file not found at {template_path}")

    try:
        content = template_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise TemplateError(f"Template file {template_path} is not readable: {e}") from e

    if PLACEHOLDER not in content:
        raise TemplateError(f"Placeholder {PLACEHOLDER} not found in template.")

    return content


def render_report(template: str, lines: Iterable[str]) -> str:
    """Substitute the rendered rows into the template content."""
    return template.replace(PLACEHOLDER, render_table_rows(lines))


def write_report(template: str, lines: Iterable[str], output_path: Union[str, Path]) -> Path:
    """
    Render a report from CSV lines and write it to disk.

    Args:
        template: Template content, as returned by load_template
        lines: CSV lines to render
        output_path: Destination file

    Returns:
        Path of the written report

    Raises:
        FileProcessingError: If a CSV line is malformed or the output cannot be written
    """
    content = render_report(template, lines)

    output = Path(output_path)
    try:
        output.write_text(content, encoding="utf-8")
    except OSError as e:
        raise FileProcessingError(f"Could not write report to {output}: {e}") from e

    logger.info(f"Report written to {output}")
    return output
