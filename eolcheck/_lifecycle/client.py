"""endoflife.date API client.

Two API generations are queried, one attempt each:

1. Primary: ``{base}/v1/products/{slug}/`` returning
   ``{"result": {"label": ..., "category": ..., "releases": [...]}}``
2. Legacy: ``{base}/{slug}.json`` returning either a bare array of releases or
   ``{"result": {"releases": [...]}}``

The JSON root is decoded into ``ArrayOfReleases`` or ``ObjectWithReleases``
right here so that nothing downstream inspects raw structure.
"""

import json
from typing import Any, Optional
from urllib.parse import quote

import requests

from ..exceptions import APIError, InvalidResponseError
from ..http_client import create_session
from ..logging_config import logger
from .models import ApiPayload, ArrayOfReleases, ObjectWithReleases, ProductMetadata

ENDOFLIFE_API_BASE = "https://endoflife.date/api"
DEFAULT_TIMEOUT = 10  # seconds


def decode_payload(data: Any) -> ApiPayload:
    """
    Decode a parsed JSON body into one of the two response shapes.

    Args:
        data: Parsed JSON body

    Returns:
        ArrayOfReleases for an array root, ObjectWithReleases for an object root

    Raises:
        InvalidResponseError: If the root is neither an array nor an object
    """
    if isinstance(data, list):
        return ArrayOfReleases(releases=[r for r in data if isinstance(r, dict)])

    if isinstance(data, dict):
        result = data.get("result")
        if not isinstance(result, dict):
            return ObjectWithReleases()

        releases = result.get("releases")
        if not isinstance(releases, list):
            releases = []

        return ObjectWithReleases(
            releases=[r for r in releases if isinstance(r, dict)],
            label=_optional_text(result.get("label")),
            category=_optional_text(result.get("category")),
        )

    raise InvalidResponseError(f"Unexpected JSON root of type {type(data).__name__}")


def _optional_text(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)


class LifecycleClient:
    """
    Client for the endoflife.date lifecycle API.

    Each product lookup makes at most two HTTP calls: the primary endpoint and,
    only if that fails, the legacy endpoint. There are no retries.
    """

    def __init__(
        self,
        base_url: str = ENDOFLIFE_API_BASE,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._owns_session = session is None
        self._session = session if session is not None else create_session()

    def primary_url(self, slug: str) -> str:
        return f"{self.base_url}/v1/products/{quote(slug, safe='')}/"

    def legacy_url(self, slug: str) -> str:
        return f"{self.base_url}/{quote(slug, safe='')}.json"

    def fetch_product(self, slug: str) -> ApiPayload:
        """
        Fetch the release data for a product.

        Args:
            slug: API product slug

        Returns:
            Decoded response payload

        Raises:
            InvalidResponseError: If the legacy endpoint answered with a body
                that is not a JSON array or object
            APIError: If both endpoints failed
        """
        try:
            return self._get_payload(self.primary_url(slug))
        except APIError as e:
            logger.debug(f"Primary endpoint failed for {slug}: {e}; trying legacy endpoint")

        return self._get_payload(self.legacy_url(slug))

    def fetch_label(self, slug: str, default_label: str) -> ProductMetadata:
        """
        Fetch the label and category of a product.

        Missing values fall back to ``default_label`` and the "null" category.

        Raises:
            APIError: If both endpoints failed
        """
        return self.fetch_product(slug).metadata(default_label)

    def _get_payload(self, url: str) -> ApiPayload:
        logger.debug(f"GET {url}")
        try:
            response = self._session.get(url, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            raise APIError(f"Timeout fetching {url}") from e
        except requests.exceptions.RequestException as e:
            raise APIError(f"Error fetching {url}: {e}") from e

        if not 200 <= response.status_code < 300:
            raise APIError(f"HTTP {response.status_code} from {url}")

        try:
            data = response.json()
        except (json.JSONDecodeError, ValueError) as e:
            raise InvalidResponseError(f"JSON decode error for {url}: {e}") from e

        return decode_payload(data)

    def close(self) -> None:
        """Close the underlying session if this client created it."""
        if self._owns_session:
            self._session.close()

    def __enter__(self) -> "LifecycleClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
