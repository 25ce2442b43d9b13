"""Product/version resolution against the endoflife.date API."""

from .client import DEFAULT_TIMEOUT, ENDOFLIFE_API_BASE, LifecycleClient, decode_payload
from .formatter import format_row, serialize_row
from .mapper import map_product
from .models import (
    NULL_SENTINEL,
    ArrayOfReleases,
    ObjectWithReleases,
    OutputRow,
    ProductMetadata,
    ProductVersionRequest,
    ResolvedRelease,
)
from .reader import read_requests, read_requests_from_file
from .resolver import resolve_release

__all__ = [
    "DEFAULT_TIMEOUT",
    "ENDOFLIFE_API_BASE",
    "LifecycleClient",
    "decode_payload",
    "format_row",
    "serialize_row",
    "map_product",
    "NULL_SENTINEL",
    "ArrayOfReleases",
    "ObjectWithReleases",
    "OutputRow",
    "ProductMetadata",
    "ProductVersionRequest",
    "ResolvedRelease",
    "read_requests",
    "read_requests_from_file",
    "resolve_release",
]
