"""Pytest configuration and fixtures."""

import re
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Generator

import pytest

from zip_publish.artifacts.packager import Archiver
from zip_publish.notifications.channels.base import BaseChannel
from zip_publish.notifications.channels.dingtalk import DingTalkSettings
from zip_publish.notifications.models import CardInfo, DeliveryResult, NotificationCard
from zip_publish.pipeline.config import PublishConfig
from zip_publish.transfer.base import RemoteTransfer
from zip_publish.transfer.sftp import SftpSettings

TODAY = "20261018"
YESTERDAY = "20261017"
FIXED_NOW = datetime(2026, 10, 18, 9, 30, 15)


class FakeArchiver(Archiver):
    """Archiver writing a fixed payload instead of a real zip."""

    def __init__(self, payload: bytes = b"x" * 2048, error: Exception | None = None):
        self.payload = payload
        self.error = error
        self.calls: list[tuple[Path, Path]] = []

    def archive(self, source_dir: Path, dest_path: Path) -> None:
        self.calls.append((source_dir, dest_path))
        if self.error is not None:
            Path(dest_path).write_bytes(b"partial")
            raise self.error
        Path(dest_path).write_bytes(self.payload)


class FakeTransfer(RemoteTransfer):
    """In-memory remote transfer recording every call."""

    transport_type = "fake"

    def __init__(
        self,
        remote_files: list[str] | None = None,
        fail_on: str | None = None,
        fail_close: bool = False,
    ):
        self.remote_files = list(remote_files or [])
        self.fail_on = fail_on
        self.fail_close = fail_close
        self.calls: list[str] = []
        self.uploads: list[tuple[Path, str]] = []
        self.connected = False

    def _maybe_fail(self, stage: str) -> None:
        if self.fail_on == stage:
            raise ConnectionError(f"{stage} exploded")

    def connect(self) -> None:
        self.calls.append("connect")
        self._maybe_fail("connect")
        self.connected = True

    def delete_files(self, remote_dir: str, keep: re.Pattern[str]) -> list[str]:
        self.calls.append("delete_files")
        self._maybe_fail("cleanup")
        deleted = [name for name in self.remote_files if not keep.search(name)]
        self.remote_files = [name for name in self.remote_files if keep.search(name)]
        return deleted

    def upload(self, local_path: Path, remote_path: str) -> None:
        self.calls.append("upload")
        self._maybe_fail("upload")
        self.uploads.append((local_path, remote_path))
        self.remote_files.append(remote_path.rsplit("/", 1)[-1])

    def close(self) -> None:
        self.calls.append("close")
        self.connected = False
        if self.fail_close:
            raise OSError("close exploded")


class FakeChannel(BaseChannel):
    """Channel collecting delivered cards."""

    channel_type = "fake"

    def __init__(self, succeed: bool = True, error: Exception | None = None):
        super().__init__()
        self.succeed = succeed
        self.error = error
        self.cards: list[NotificationCard] = []
        self.closed = False

    def validate_config(self) -> bool:
        return True

    def deliver(self, card: NotificationCard) -> DeliveryResult:
        if self.error is not None:
            raise self.error
        self.cards.append(card)
        return DeliveryResult(
            success=self.succeed,
            channel=self.channel_type,
            error_message=None if self.succeed else "robot offline",
        )

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory that is cleaned up after the test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def source_dir(temp_dir: Path) -> Path:
    """Provide a build output directory with a few files."""
    dist = temp_dir / "dist"
    (dist / "assets").mkdir(parents=True)
    (dist / "index.html").write_text("<html></html>")
    (dist / "assets" / "app.js").write_text("console.log('hi')")
    return dist


@pytest.fixture
def artifact_dir(temp_dir: Path) -> Path:
    """Path of the local artifact directory (not created)."""
    return temp_dir / "artifacts"


@pytest.fixture
def clock():
    """Clock frozen at 2026-10-18 09:30:15."""
    return lambda: FIXED_NOW


@pytest.fixture
def make_config(source_dir: Path, artifact_dir: Path):
    """Factory for PublishConfig with overridable fields."""

    def _make(**overrides) -> PublishConfig:
        values = {
            "app": "shop",
            "source_dir": source_dir,
            "artifact_dir": artifact_dir,
            "remote_dir": "/srv/downloads",
            "host": "https://dl.example.com",
            "fill_width": 2,
            "sftp": SftpSettings(host="sftp.example.com", username="deploy", password="pw"),
            "dingtalk": DingTalkSettings(access_token="token", secret="SECret"),
            "card": CardInfo(title="Shop", subtitle="Nightly build"),
        }
        values.update(overrides)
        return PublishConfig(**values)

    return _make


@pytest.fixture
def config(make_config) -> PublishConfig:
    """Default PublishConfig for app 'shop' with fill width 2."""
    return make_config()
