"""Tests for wpsync.core.exceptions."""

from __future__ import annotations

from wpsync.core.exceptions import (
    ApiResponseError,
    ConfigurationError,
    RecordNotFoundLocally,
    StorageError,
    TransportError,
    WpSyncError,
)


class TestHierarchy:
    def test_all_derive_from_base(self) -> None:
        for exc_type in (ApiResponseError, ConfigurationError, RecordNotFoundLocally, StorageError, TransportError):
            assert issubclass(exc_type, WpSyncError)


class TestApiResponseError:
    def test_carries_status_and_body(self) -> None:
        err = ApiResponseError("http://wp/wp-json/wp/v2/posts", 403, '{"code":"rest_forbidden"}')
        assert err.status_code == 403
        assert err.body == '{"code":"rest_forbidden"}'
        assert "responded 403" in str(err)

    def test_empty_body(self) -> None:
        assert str(ApiResponseError("http://wp/x", 404)) == "WP-API http://wp/x responded 404"


class TestRecordNotFoundLocally:
    def test_message(self) -> None:
        err = RecordNotFoundLocally("pages", "about")
        assert str(err) == "No pages record with id about"


class TestTransportError:
    def test_url_is_optional(self) -> None:
        assert TransportError("boom").url is None
