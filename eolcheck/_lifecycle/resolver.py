"""Release matching and field extraction."""

from typing import Any, Callable, Optional, Sequence

from ..logging_config import logger
from .models import ReleaseRecord, ResolvedRelease

# Release fields carrying a display label, in priority order. "name" is last so
# a record matched only by name prefix still shows its own name.
LABEL_FIELDS = ("releaseLabel", "label", "cycle", "name")

# Release fields carrying an end date, in priority order
EOL_FIELDS = ("eol", "eolFrom", "eoasFrom", "eoesFrom")


def _cycle_equals(release: ReleaseRecord, wanted: str) -> bool:
    return release.get("cycle") == wanted


def _name_equals(release: ReleaseRecord, wanted: str) -> bool:
    return release.get("name") == wanted


def _name_startswith(release: ReleaseRecord, wanted: str) -> bool:
    name = release.get("name")
    if name is None:
        return False
    return str(name).startswith(wanted)


# Match rules, strongest first. Each rule scans the whole list before the next
# one is tried.
MATCH_RULES: Sequence[Callable[[ReleaseRecord, str], bool]] = (
    _cycle_equals,
    _name_equals,
    _name_startswith,
)


def _as_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def find_release(releases: Sequence[ReleaseRecord], wanted_version: str) -> Optional[ReleaseRecord]:
    """Return the first release matching the wanted version, or None."""
    for rule in MATCH_RULES:
        for release in releases:
            if isinstance(release, dict) and rule(release, wanted_version):
                return release
    return None


def extract_label(release: ReleaseRecord) -> Optional[str]:
    """Return the display label of a release, or None when it has none."""
    for field_name in LABEL_FIELDS:
        value = release.get(field_name)
        if value is not None and value != "":
            return _as_text(value)
    return None


def extract_eol(release: ReleaseRecord) -> Optional[str]:
    """
    Return the end date of a release, or None when none is published.

    ``null`` and ``false`` values do not count as present and the next field is
    tried; ``true`` (already end-of-life, date unknown) is returned as "true".
    """
    for field_name in EOL_FIELDS:
        value = release.get(field_name)
        if value is None or value is False:
            continue
        return _as_text(value)
    return None


def resolve_release(releases: Sequence[ReleaseRecord], wanted_version: str) -> Optional[ResolvedRelease]:
    """
    Find the release for a requested version and extract its label and EOL date.

    Matching precedence: exact ``cycle``, then exact ``name``, then ``name``
    prefix. Ties go to the first record in API order.

    Args:
        releases: Release records in the API's native order
        wanted_version: Version string as given in the input file

    Returns:
        ResolvedRelease for the matched record, or None when nothing matches
    """
    release = find_release(releases, wanted_version)
    if release is None:
        logger.debug(f"No release matches version {wanted_version!r}")
        return None

    return ResolvedRelease(label=extract_label(release), eol=extract_eol(release))
