"""
Zip Publish Core Module.

Provides the exception hierarchy shared by all pipeline stages.
"""

__all__ = [
    "ZipPublishError",
    "ConfigurationError",
    "RetentionError",
    "ArchiveError",
    "TransferError",
    "NotificationError",
    "format_exception",
]

from zip_publish.core.exceptions import (
    ArchiveError,
    ConfigurationError,
    NotificationError,
    RetentionError,
    TransferError,
    ZipPublishError,
    format_exception,
)
