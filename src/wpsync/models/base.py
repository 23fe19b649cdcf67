"""Base model configuration shared by wpsync models.

Example:
    >>> from wpsync.models.base import WpSyncModel
    >>> WpSyncModel.model_config["validate_assignment"]
    True
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class WpSyncModel(BaseModel):
    """Base model with standard configuration."""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        str_strip_whitespace=True,
        validate_assignment=True,
        extra="forbid",
    )
