"""
Zip Publish Exception Hierarchy.

Defines all custom exceptions raised by the publish pipeline.
Every fatal stage failure surfaces as a subclass of ZipPublishError.
"""

from typing import Any


class ZipPublishError(Exception):
    """
    Base exception for all Zip Publish errors.

    All custom exceptions inherit from this class, allowing
    generic catch blocks and consistent error handling.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None):
        """
        Initialize a ZipPublishError.

        Args:
            message: Human-readable error message
            details: Optional structured data for debugging
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation with details."""
        base = self.message
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{base} ({details_str})"
        return base

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(ZipPublishError):
    """
    Errors in configuration loading or validation.

    Raised when:
    - Configuration files are missing or malformed
    - Configuration values are invalid
    """

    def __init__(
        self,
        message: str,
        *,
        config_file: str | None = None,
        env_var: str | None = None,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        """
        Initialize a ConfigurationError.

        Args:
            message: Human-readable error message
            config_file: Path to configuration file if applicable
            env_var: Environment variable name if applicable
            config_key: Configuration key if applicable
            details: Optional structured data for debugging
        """
        details = details or {}
        if config_file:
            details["config_file"] = config_file
        if env_var:
            details["env_var"] = env_var
        if config_key:
            details["config_key"] = config_key

        super().__init__(message, details=details)
        self.config_file = config_file
        self.env_var = env_var
        self.config_key = config_key


class RetentionError(ZipPublishError):
    """
    Raised when the local artifact directory cannot be reconciled.

    Covers directory creation, listing and deletion of stale
    artifacts. Always fatal: no archive or upload is attempted.
    """

    def __init__(
        self,
        message: str,
        *,
        path: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        details = details or {}
        if path:
            details["path"] = path

        super().__init__(message, details=details)
        self.path = path


class ArchiveError(ZipPublishError):
    """Raised when the archiver fails to produce the versioned archive."""

    def __init__(
        self,
        message: str,
        *,
        source_dir: str | None = None,
        dest_path: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        details = details or {}
        if source_dir:
            details["source_dir"] = source_dir
        if dest_path:
            details["dest_path"] = dest_path

        super().__init__(message, details=details)
        self.source_dir = source_dir
        self.dest_path = dest_path


class TransferError(ZipPublishError):
    """
    Errors during remote transfer.

    The stage attribute names the step that failed:
    "connect", "cleanup" or "upload".
    """

    def __init__(
        self,
        message: str,
        *,
        stage: str | None = None,
        remote_path: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        """
        Initialize a TransferError.

        Args:
            message: Human-readable error message
            stage: Transfer step where the error occurred
            remote_path: Remote file or directory involved
            details: Optional structured data for debugging
        """
        details = details or {}
        if stage:
            details["stage"] = stage
        if remote_path:
            details["remote_path"] = remote_path

        super().__init__(message, details=details)
        self.stage = stage
        self.remote_path = remote_path


class NotificationError(ZipPublishError):
    """
    Raised by notification channels when delivery fails.

    The Notifier catches it: notification is never fatal to a publish.
    """

    def __init__(
        self,
        message: str,
        *,
        channel: str | None = None,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ):
        details = details or {}
        if channel:
            details["channel"] = channel
        if status_code is not None:
            details["status_code"] = status_code

        super().__init__(message, details=details)
        self.channel = channel
        self.status_code = status_code


def format_exception(error: Exception) -> str:
    """
    Format an exception for user-friendly display.

    Args:
        error: The exception to format

    Returns:
        Formatted error message string
    """
    if isinstance(error, ZipPublishError):
        return str(error)
    return f"{error.__class__.__name__}: {error}"
