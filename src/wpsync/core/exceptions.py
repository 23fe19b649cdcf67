"""Custom exceptions.

wpsync separates hard failures (the API could not be reached or answered
with an unacceptable status) from soft not-found conditions, which are
reported through ``SyncOutcome.NOT_FOUND`` instead of raising.

Example:
    >>> from wpsync.core.exceptions import ApiResponseError, WpSyncError
    >>> err = ApiResponseError("http://wp/wp-json/wp/v2/posts", 404, "gone")
    >>> isinstance(err, WpSyncError)
    True
    >>> err.status_code
    404
"""

from __future__ import annotations


class WpSyncError(Exception):
    """Base exception for wpsync.

    Example:
        >>> from wpsync.core.exceptions import WpSyncError
        >>> str(WpSyncError("something went wrong"))
        'something went wrong'
    """


class TransportError(WpSyncError):
    """The API could not be reached (connection, DNS, timeout).

    Example:
        >>> from wpsync.core.exceptions import TransportError
        >>> err = TransportError("connection refused", url="http://wp/posts")
        >>> err.url
        'http://wp/posts'
    """

    def __init__(self, message: str, url: str | None = None) -> None:
        super().__init__(message)
        self.url = url


class ApiResponseError(WpSyncError):
    """The API answered with a status outside the accepted range.

    Carries the status code and body for diagnostics.

    Example:
        >>> from wpsync.core.exceptions import ApiResponseError
        >>> str(ApiResponseError("http://wp/posts", 403, "forbidden"))
        'WP-API http://wp/posts responded 403 forbidden'
    """

    def __init__(self, url: str, status_code: int, body: str = "") -> None:
        super().__init__(f"WP-API {url} responded {status_code} {body}".rstrip())
        self.url = url
        self.status_code = status_code
        self.body = body


class RecordNotFoundLocally(WpSyncError):
    """No local record matches a content type and source id.

    Raised by local lookups for purge and unpublish. The reconciler catches
    it and logs a warning; callers never see it.

    Example:
        >>> from wpsync.core.exceptions import RecordNotFoundLocally
        >>> err = RecordNotFoundLocally("posts", "12")
        >>> (err.content_type, err.source_id)
        ('posts', '12')
    """

    def __init__(self, content_type: str, source_id: str) -> None:
        super().__init__(f"No {content_type} record with id {source_id}")
        self.content_type = content_type
        self.source_id = source_id


class ConfigurationError(WpSyncError):
    """Configuration is invalid.

    Example:
        >>> from wpsync.core.exceptions import ConfigurationError
        >>> raise ConfigurationError("unknown content type")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ConfigurationError: unknown content type
    """


class StorageError(WpSyncError):
    """Record store operation failed.

    Example:
        >>> from wpsync.core.exceptions import StorageError
        >>> raise StorageError("connection lost")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        StorageError: connection lost
    """
