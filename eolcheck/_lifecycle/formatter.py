"""Assemble and serialize output rows."""

import csv
import io
from typing import Optional

from .models import NULL_SENTINEL, OutputRow, ProductMetadata, ResolvedRelease


def format_row(
    metadata: Optional[ProductMetadata],
    resolved: Optional[ResolvedRelease],
    original_version: str,
    original_product: str,
) -> OutputRow:
    """
    Build the output row for one request.

    Args:
        metadata: Product label/category, or None when the lookup yielded nothing
        resolved: Matched release fields, or None when no release matched
        original_version: Version string as requested
        original_product: Product name as requested, the label when metadata has none

    Returns:
        OutputRow with every field populated
    """
    if metadata is None:
        metadata = ProductMetadata(label=original_product)

    version_label = original_version
    eol = NULL_SENTINEL
    if resolved is not None:
        version_label = resolved.label or original_version
        eol = resolved.eol if resolved.eol is not None else NULL_SENTINEL

    return OutputRow(
        label=metadata.label or original_product,
        version=version_label,
        category=metadata.category or NULL_SENTINEL,
        eol=eol,
    )


def serialize_row(row: OutputRow) -> str:
    """
    Serialize a row as one CSV line without a line terminator.

    Every field is quoted and embedded quotes are doubled, whether or not the
    value needs it.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="")
    writer.writerow(row.as_tuple())
    return buffer.getvalue()
