"""
SFTP transfer backend.

Uploads archives over SSH using paramiko, with password or private key
authentication.
"""

import logging
import re
import stat
from pathlib import Path

import paramiko
from pydantic import BaseModel, Field

from .base import RemoteTransfer

logger = logging.getLogger(__name__)


class SftpSettings(BaseModel):
    """Connection settings for the SFTP transfer."""

    host: str = Field(min_length=1, description="SSH server host name")
    port: int = Field(default=22, ge=1, le=65535)
    username: str = Field(min_length=1)
    password: str | None = None
    private_key_path: Path | None = None
    timeout_seconds: int = Field(default=30, ge=1)

    model_config = {"frozen": True}


class SftpTransfer(RemoteTransfer):
    """
    Remote transfer over SFTP.

    Host keys of unknown servers are accepted automatically.
    """

    transport_type = "sftp"

    def __init__(self, settings: SftpSettings):
        """
        Initialize the SFTP transfer.

        Args:
            settings: Connection settings
        """
        self.settings = settings
        self._client: paramiko.SSHClient | None = None
        self._sftp: paramiko.SFTPClient | None = None

    def _require_sftp(self) -> paramiko.SFTPClient:
        if self._sftp is None:
            raise RuntimeError("SFTP session is not connected")
        return self._sftp

    def connect(self) -> None:
        settings = self.settings
        client = paramiko.SSHClient()
        client.set_missing_host_key_policy(paramiko.AutoAddPolicy())

        logger.info(f"Connecting to sftp://{settings.username}@{settings.host}:{settings.port}")
        client.connect(
            hostname=settings.host,
            port=settings.port,
            username=settings.username,
            password=settings.password,
            key_filename=str(settings.private_key_path) if settings.private_key_path else None,
            timeout=settings.timeout_seconds,
            allow_agent=settings.private_key_path is None and settings.password is None,
            look_for_keys=settings.private_key_path is None and settings.password is None,
        )
        self._client = client
        try:
            self._sftp = client.open_sftp()
        except Exception:
            client.close()
            self._client = None
            raise

    def delete_files(self, remote_dir: str, keep: re.Pattern[str]) -> list[str]:
        sftp = self._require_sftp()

        try:
            entries = sftp.listdir_attr(remote_dir)
        except FileNotFoundError:
            logger.info(f"Creating remote directory {remote_dir}")
            self._makedirs(sftp, remote_dir)
            return []

        deleted = []
        for entry in sorted(entries, key=lambda e: e.filename):
            if entry.st_mode is None or not stat.S_ISREG(entry.st_mode):
                continue
            if keep.search(entry.filename):
                continue
            sftp.remove(f"{remote_dir}/{entry.filename}")
            deleted.append(entry.filename)

        if deleted:
            logger.info(f"Removed {len(deleted)} stale remote file(s) from {remote_dir}")
        return deleted

    @staticmethod
    def _makedirs(sftp: paramiko.SFTPClient, remote_dir: str) -> None:
        """Create remote_dir and any missing parents, one level at a time."""
        current = "/" if remote_dir.startswith("/") else ""
        for part in (p for p in remote_dir.split("/") if p):
            current = f"{current}{part}" if current in ("", "/") else f"{current}/{part}"
            try:
                sftp.stat(current)
            except FileNotFoundError:
                sftp.mkdir(current)

    def upload(self, local_path: Path, remote_path: str) -> None:
        sftp = self._require_sftp()
        logger.info(f"Uploading {local_path} -> {remote_path}")
        sftp.put(str(local_path), remote_path)

    def close(self) -> None:
        if self._sftp is not None:
            self._sftp.close()
            self._sftp = None
        if self._client is not None:
            self._client.close()
            self._client = None
