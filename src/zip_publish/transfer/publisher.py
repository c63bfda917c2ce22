"""
Publish orchestration.

Sequences connect, remote same-day cleanup, upload and close against a
RemoteTransfer. The session is closed whatever the outcome.
"""

import logging
import re
from pathlib import Path
from typing import Callable

from zip_publish.core.exceptions import TransferError

from .base import RemoteTransfer

logger = logging.getLogger(__name__)


class Publisher:
    """
    Uploads one archive through a RemoteTransfer.

    Steps, each awaited before the next:
    1. connect
    2. delete remote files not matching today's pattern
    3. upload the archive
    4. close (always attempted, failures logged)
    """

    def __init__(self, transfer: RemoteTransfer):
        """
        Initialize the publisher.

        Args:
            transfer: Remote transfer backend
        """
        self._transfer = transfer

    def publish(
        self,
        local_path: Path,
        remote_dir: str,
        filename: str,
        keep_pattern: re.Pattern[str],
    ) -> int:
        """
        Upload local_path to {remote_dir}/{filename}.

        Args:
            local_path: Local archive
            remote_dir: Remote base directory
            filename: Archive filename
            keep_pattern: Remote files matching this pattern survive cleanup

        Returns:
            Size of the uploaded archive in bytes

        Raises:
            TransferError: If connect, cleanup or upload fails
        """
        remote_dir = remote_dir.rstrip("/") or "/"
        remote_path = f"{remote_dir.rstrip('/')}/{filename}"

        try:
            self._run_stage("connect", remote_dir, self._transfer.connect)
            self._run_stage(
                "cleanup",
                remote_dir,
                lambda: self._transfer.delete_files(remote_dir, keep_pattern),
            )
            self._run_stage(
                "upload",
                remote_path,
                lambda: self._transfer.upload(local_path, remote_path),
            )
        finally:
            self._close()

        size = Path(local_path).stat().st_size
        logger.info(f"Published {filename} ({size} bytes) to {remote_path}")
        return size

    def _run_stage(
        self, stage: str, remote_path: str, step: Callable[[], object]
    ) -> None:
        """Run one transfer step, wrapping failures in TransferError."""
        logger.debug(f"Transfer stage: {stage}")
        try:
            step()
        except TransferError:
            raise
        except Exception as e:
            raise TransferError(
                f"Remote {stage} failed: {e}",
                stage=stage,
                remote_path=remote_path,
            ) from e

    def _close(self) -> None:
        """Close the session without masking an in-flight error."""
        try:
            self._transfer.close()
        except Exception as e:
            logger.warning(f"Failed to close {self._transfer.transport_type} session: {e}")
