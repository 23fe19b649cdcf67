"""Core configuration, errors and logging.

The orchestrator lives in ``wpsync.core.wpsync`` and is exported from the
top-level package.
"""

from wpsync.core.config import Settings, get_settings
from wpsync.core.exceptions import (
    ApiResponseError,
    ConfigurationError,
    RecordNotFoundLocally,
    StorageError,
    TransportError,
    WpSyncError,
)
from wpsync.core.log import configure_logging

__all__ = [
    # Configuration
    "Settings",
    "get_settings",
    "configure_logging",
    # Errors
    "WpSyncError",
    "TransportError",
    "ApiResponseError",
    "RecordNotFoundLocally",
    "ConfigurationError",
    "StorageError",
]
