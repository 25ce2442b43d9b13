"""Tests for the endoflife.date API client."""

import json

import pytest
import requests

from eolcheck._lifecycle.client import DEFAULT_TIMEOUT, LifecycleClient, decode_payload
from eolcheck._lifecycle.models import ArrayOfReleases, ObjectWithReleases, ProductMetadata
from eolcheck.exceptions import APIError, InvalidResponseError

from .conftest import make_response

BASE = "https://endoflife.date/api"

DEBIAN_PRIMARY = {
    "result": {
        "label": "Debian",
        "category": "os",
        "releases": [{"cycle": "13", "releaseLabel": "13 (Trixie)", "eol": "2028-08-09"}],
    }
}


class TestDecodePayload:
    def test_array_root(self):
        payload = decode_payload([{"cycle": "3.19", "eol": "2025-11-01"}])
        assert isinstance(payload, ArrayOfReleases)
        assert payload.releases == [{"cycle": "3.19", "eol": "2025-11-01"}]

    def test_object_root(self):
        payload = decode_payload(DEBIAN_PRIMARY)
        assert isinstance(payload, ObjectWithReleases)
        assert payload.label == "Debian"
        assert payload.category == "os"
        assert payload.releases[0]["cycle"] == "13"

    def test_object_without_releases(self):
        payload = decode_payload({"result": {"label": "Foo"}})
        assert isinstance(payload, ObjectWithReleases)
        assert payload.releases == []

    def test_object_without_result(self):
        payload = decode_payload({"message": "Not found"})
        assert payload == ObjectWithReleases()

    @pytest.mark.parametrize("data", ["text", 42, None, True])
    def test_other_roots_invalid(self, data):
        with pytest.raises(InvalidResponseError) as exc_info:
            decode_payload(data)
        assert exc_info.value.reason == "Invalid JSON"


class TestPayloadMetadata:
    def test_primary_metadata(self):
        assert decode_payload(DEBIAN_PRIMARY).metadata("debian") == ProductMetadata("Debian", "os")

    def test_array_metadata_defaults(self):
        assert decode_payload([]).metadata("My Product") == ProductMetadata("My Product", "null")

    def test_legacy_object_metadata_defaults(self):
        metadata = decode_payload({"result": {"releases": []}}).metadata("ansible")
        assert metadata == ProductMetadata("ansible", "null")

    def test_null_category_defaults_to_sentinel(self):
        metadata = decode_payload({"result": {"label": "Foo", "category": None}}).metadata("foo")
        assert metadata.category == "null"


class TestLifecycleClientUrls:
    def test_urls(self, mock_session):
        client = LifecycleClient(session=mock_session)
        assert client.primary_url("debian") == f"{BASE}/v1/products/debian/"
        assert client.legacy_url("debian") == f"{BASE}/debian.json"

    def test_base_url_trailing_slash(self, mock_session):
        client = LifecycleClient(base_url="http://localhost:8000/api/", session=mock_session)
        assert client.legacy_url("red-hat") == "http://localhost:8000/api/red-hat.json"

    def test_slug_is_quoted(self, mock_session):
        client = LifecycleClient(session=mock_session)
        assert client.legacy_url("a/b") == f"{BASE}/a%2Fb.json"


class TestLifecycleClientFetch:
    def test_primary_success(self, mock_session):
        mock_session.get.return_value = make_response(200, DEBIAN_PRIMARY)
        client = LifecycleClient(session=mock_session)

        payload = client.fetch_product("debian")

        assert isinstance(payload, ObjectWithReleases)
        assert payload.label == "Debian"
        mock_session.get.assert_called_once_with(f"{BASE}/v1/products/debian/", timeout=DEFAULT_TIMEOUT)

    def test_falls_back_to_legacy_on_http_error(self, mock_session):
        mock_session.get.side_effect = [
            make_response(404),
            make_response(200, [{"cycle": "3.19", "eol": "2025-11-01"}]),
        ]
        client = LifecycleClient(session=mock_session)

        payload = client.fetch_product("alpine")

        assert isinstance(payload, ArrayOfReleases)
        urls = [call.args[0] for call in mock_session.get.call_args_list]
        assert urls == [f"{BASE}/v1/products/alpine/", f"{BASE}/alpine.json"]

    def test_falls_back_on_timeout(self, mock_session):
        mock_session.get.side_effect = [
            requests.exceptions.Timeout("timed out"),
            make_response(200, {"result": {"releases": [{"cycle": "1"}]}}),
        ]
        payload = LifecycleClient(session=mock_session).fetch_product("foo")
        assert payload.releases == [{"cycle": "1"}]

    def test_falls_back_on_connection_error(self, mock_session):
        mock_session.get.side_effect = [
            requests.exceptions.ConnectionError("refused"),
            make_response(200, []),
        ]
        assert LifecycleClient(session=mock_session).fetch_product("foo") == ArrayOfReleases()

    def test_falls_back_on_undecodable_primary(self, mock_session):
        mock_session.get.side_effect = [
            make_response(200, json_error=json.JSONDecodeError("bad", "<html>", 0)),
            make_response(200, []),
        ]
        assert isinstance(LifecycleClient(session=mock_session).fetch_product("foo"), ArrayOfReleases)

    def test_both_endpoints_fail(self, mock_session):
        mock_session.get.side_effect = [make_response(500), make_response(404)]

        with pytest.raises(APIError) as exc_info:
            LifecycleClient(session=mock_session).fetch_product("unknownproduct")

        assert exc_info.value.reason == "API request failed"
        assert mock_session.get.call_count == 2

    def test_legacy_invalid_json(self, mock_session):
        mock_session.get.side_effect = [
            make_response(404),
            make_response(200, json_error=ValueError("No JSON object could be decoded")),
        ]

        with pytest.raises(InvalidResponseError) as exc_info:
            LifecycleClient(session=mock_session).fetch_product("foo")

        assert exc_info.value.reason == "Invalid JSON"

    def test_legacy_scalar_root_is_invalid(self, mock_session):
        mock_session.get.side_effect = [make_response(404), make_response(200, "not a product")]

        with pytest.raises(InvalidResponseError):
            LifecycleClient(session=mock_session).fetch_product("foo")

    def test_fetch_label(self, mock_session):
        mock_session.get.return_value = make_response(200, DEBIAN_PRIMARY)
        assert LifecycleClient(session=mock_session).fetch_label("debian", "debian") == ProductMetadata("Debian", "os")

    def test_fetch_label_legacy_defaults(self, mock_session):
        mock_session.get.side_effect = [make_response(404), make_response(200, [])]
        metadata = LifecycleClient(session=mock_session).fetch_label("my-product", "My Product")
        assert metadata == ProductMetadata("My Product", "null")


class TestLifecycleClientSession:
    def test_injected_session_not_closed(self, mock_session):
        with LifecycleClient(session=mock_session):
            pass
        mock_session.close.assert_not_called()

    def test_own_session_closed(self, monkeypatch):
        created = []

        class FakeSession:
            closed = False

            def close(self):
                self.closed = True

        def fake_create_session():
            session = FakeSession()
            created.append(session)
            return session

        monkeypatch.setattr("eolcheck._lifecycle.client.create_session", fake_create_session)
        with LifecycleClient():
            pass

        assert created[0].closed is True
