"""
Base class for remote transfer backends.

All transports must inherit from RemoteTransfer and implement
connect(), delete_files(), upload() and close().
"""

import re
from abc import ABC, abstractmethod
from pathlib import Path


class RemoteTransfer(ABC):
    """
    Abstract base class for remote transfer sessions.

    One instance holds at most one open session. The Publisher always
    calls close() after connect(), whatever the outcome of the upload.
    """

    transport_type: str = "base"

    @abstractmethod
    def connect(self) -> None:
        """Open a session to the remote host."""
        pass

    @abstractmethod
    def delete_files(self, remote_dir: str, keep: re.Pattern[str]) -> list[str]:
        """
        Delete every regular file in remote_dir whose name does not match keep.

        Args:
            remote_dir: Remote directory to clean
            keep: Pattern searched in each filename; matches are preserved

        Returns:
            Names of the deleted files
        """
        pass

    @abstractmethod
    def upload(self, local_path: Path, remote_path: str) -> None:
        """
        Upload a local file.

        Args:
            local_path: File to upload
            remote_path: Destination path on the remote host
        """
        pass

    @abstractmethod
    def close(self) -> None:
        """Close the session. Safe to call when not connected."""
        pass
