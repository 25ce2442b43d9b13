"""Data model for product/version EOL lookups."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

# Literal the lifecycle API uses for "value not published". It is business data,
# not an absence marker, so it is written out verbatim.
NULL_SENTINEL = "null"

ReleaseRecord = Dict[str, Any]


@dataclass(frozen=True)
class ProductVersionRequest:
    """One (product, version) pair as read from the input CSV."""

    product: str
    version: str


@dataclass(frozen=True)
class ProductMetadata:
    """Display label and category of a product."""

    label: str
    category: str = NULL_SENTINEL


@dataclass
class ArrayOfReleases:
    """Legacy response shape: a bare JSON array of release records."""

    releases: List[ReleaseRecord] = field(default_factory=list)

    def metadata(self, default_label: str) -> ProductMetadata:
        # The bare array carries no product-level fields.
        return ProductMetadata(label=default_label)


@dataclass
class ObjectWithReleases:
    """
    Object response shape: ``{"result": {"releases": [...]}}``.

    The primary (v1) endpoint also fills ``label`` and ``category``; the legacy
    object form usually leaves them unset.
    """

    releases: List[ReleaseRecord] = field(default_factory=list)
    label: Optional[str] = None
    category: Optional[str] = None

    def metadata(self, default_label: str) -> ProductMetadata:
        return ProductMetadata(
            label=self.label or default_label,
            category=self.category or NULL_SENTINEL,
        )


ApiPayload = Union[ArrayOfReleases, ObjectWithReleases]


@dataclass(frozen=True)
class ResolvedRelease:
    """
    Fields extracted from the matched release record.

    ``None`` means the API published no value; the row formatter decides how
    that is rendered.
    """

    label: Optional[str] = None
    eol: Optional[str] = None


@dataclass(frozen=True)
class OutputRow:
    """One line of output. Every field is always populated."""

    label: str
    version: str
    category: str
    eol: str

    def as_tuple(self) -> tuple:
        return (self.label, self.version, self.category, self.eol)
