"""Input reader for ``product,version`` CSV files.

Input fields are split on commas without quote handling; only the output side
of the tool produces quoted CSV.
"""

from pathlib import Path
from typing import Iterable, Iterator, List, Union

from ..exceptions import FileProcessingError
from ..logging_config import logger
from .models import ProductVersionRequest

# Leading/trailing characters trimmed from every field
ASCII_WHITESPACE = " \t\n\r\x0b\x0c"

HEADER_FIELDS = ("product", "version")


def _split_fields(line: str) -> List[str]:
    return [value.strip(ASCII_WHITESPACE) for value in line.split(",")]


def _is_header(fields: List[str]) -> bool:
    if len(fields) < 2:
        return False
    return fields[0].lower() == HEADER_FIELDS[0] and fields[1].lower() == HEADER_FIELDS[1]


def read_requests(lines: Iterable[str]) -> Iterator[ProductVersionRequest]:
    """
    Yield a request for every data row of the input.

    The first non-empty line is dropped when it is a ``product,version`` header
    (case-insensitive). Columns after the second are ignored, and rows whose
    product or version is empty after trimming are skipped.

    Args:
        lines: Raw input lines, with or without line terminators

    Yields:
        ProductVersionRequest per data row, in input order
    """
    seen_content = False
    for line_number, line in enumerate(lines, start=1):
        if not line.strip(ASCII_WHITESPACE):
            continue

        fields = _split_fields(line)
        if not seen_content:
            seen_content = True
            if _is_header(fields):
                logger.debug(f"Skipping header row on line {line_number}")
                continue

        product = fields[0]
        version = fields[1] if len(fields) > 1 else ""
        if not product or not version:
            logger.debug(f"Skipping incomplete row on line {line_number}")
            continue

        yield ProductVersionRequest(product=product, version=version)


def read_requests_from_file(path: Union[str, Path]) -> List[ProductVersionRequest]:
    """
    Read all requests from a CSV file.

    Raises:
        FileProcessingError: If the file cannot be opened or decoded
    """
    try:
        with open(path, encoding="utf-8-sig", newline="") as f:
            return list(read_requests(f))
    except (OSError, UnicodeDecodeError) as e:
        raise FileProcessingError(f"Input CSV '{path}' not found or not readable.") from e
