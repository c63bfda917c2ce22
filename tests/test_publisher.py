"""Tests for the publish orchestrator and the SFTP transfer."""

import re
import stat
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from zip_publish.core.exceptions import TransferError
from zip_publish.transfer import Publisher, SftpSettings, SftpTransfer

from conftest import TODAY, YESTERDAY, FakeTransfer


@pytest.fixture
def archive(temp_dir: Path) -> Path:
    path = temp_dir / f"shop-{TODAY}01.zip"
    path.write_bytes(b"z" * 4096)
    return path


KEEP_TODAY = re.compile(rf"{TODAY}\d+\.zip")


class TestPublisher:
    """Tests for Publisher.publish."""

    def test_steps_run_in_order(self, archive: Path) -> None:
        """Connect, cleanup, upload, then close."""
        transfer = FakeTransfer()

        size = Publisher(transfer).publish(archive, "/srv/dl", archive.name, KEEP_TODAY)

        assert transfer.calls == ["connect", "delete_files", "upload", "close"]
        assert transfer.uploads == [(archive, f"/srv/dl/{archive.name}")]
        assert size == 4096

    def test_remote_cleanup_keeps_today(self, archive: Path) -> None:
        """Remote files from other days are removed; today's files from any app stay."""
        transfer = FakeTransfer(
            remote_files=[f"shop-{YESTERDAY}03.zip", f"other-{TODAY}02.zip", "readme.txt"]
        )

        Publisher(transfer).publish(archive, "/srv/dl", archive.name, KEEP_TODAY)

        assert sorted(transfer.remote_files) == sorted([f"other-{TODAY}02.zip", archive.name])

    def test_trailing_slash_in_remote_dir(self, archive: Path) -> None:
        transfer = FakeTransfer()
        Publisher(transfer).publish(archive, "/srv/dl/", archive.name, KEEP_TODAY)
        assert transfer.uploads[0][1] == f"/srv/dl/{archive.name}"

    @pytest.mark.parametrize("stage", ["connect", "cleanup", "upload"])
    def test_failure_is_fatal_and_closes(self, archive: Path, stage: str) -> None:
        """Every step failure raises TransferError after closing the session."""
        transfer = FakeTransfer(fail_on=stage)

        with pytest.raises(TransferError) as exc_info:
            Publisher(transfer).publish(archive, "/srv/dl", archive.name, KEEP_TODAY)

        assert exc_info.value.stage == stage
        assert transfer.calls[-1] == "close"
        assert isinstance(exc_info.value.__cause__, ConnectionError)

    def test_upload_failure_stops_before_size(self, archive: Path) -> None:
        transfer = FakeTransfer(fail_on="upload")
        with pytest.raises(TransferError):
            Publisher(transfer).publish(archive, "/srv/dl", archive.name, KEEP_TODAY)
        assert transfer.uploads == []

    def test_close_failure_does_not_mask_error(self, archive: Path) -> None:
        """The original error propagates even if close also fails."""
        transfer = FakeTransfer(fail_on="upload", fail_close=True)

        with pytest.raises(TransferError) as exc_info:
            Publisher(transfer).publish(archive, "/srv/dl", archive.name, KEEP_TODAY)

        assert exc_info.value.stage == "upload"

    def test_close_failure_after_success_is_logged(self, archive: Path, caplog) -> None:
        transfer = FakeTransfer(fail_close=True)

        size = Publisher(transfer).publish(archive, "/srv/dl", archive.name, KEEP_TODAY)

        assert size == 4096
        assert "Failed to close" in caplog.text


def _attr(name: str, mode: int) -> MagicMock:
    entry = MagicMock()
    entry.filename = name
    entry.st_mode = mode
    return entry


def _existing(paths: set[str]):
    def _stat(path: str) -> MagicMock:
        if path not in paths:
            raise FileNotFoundError(2, "No such file", path)
        return _attr(path, stat.S_IFDIR | 0o755)

    return _stat


class TestSftpTransfer:
    """Tests for SftpTransfer with paramiko mocked."""

    @pytest.fixture
    def settings(self) -> SftpSettings:
        return SftpSettings(host="sftp.example.com", username="deploy", password="pw")

    @pytest.fixture
    def ssh_client(self):
        with patch("zip_publish.transfer.sftp.paramiko.SSHClient") as client_cls:
            client = client_cls.return_value
            client.open_sftp.return_value = MagicMock()
            yield client

    def test_connect_uses_settings(self, settings: SftpSettings, ssh_client) -> None:
        transfer = SftpTransfer(settings)
        transfer.connect()

        kwargs = ssh_client.connect.call_args.kwargs
        assert kwargs["hostname"] == "sftp.example.com"
        assert kwargs["port"] == 22
        assert kwargs["username"] == "deploy"
        assert kwargs["password"] == "pw"
        assert kwargs["key_filename"] is None
        ssh_client.open_sftp.assert_called_once()

    def test_delete_files_keeps_matching_and_directories(
        self, settings: SftpSettings, ssh_client
    ) -> None:
        sftp = ssh_client.open_sftp.return_value
        sftp.listdir_attr.return_value = [
            _attr(f"shop-{YESTERDAY}01.zip", stat.S_IFREG | 0o644),
            _attr(f"other-{TODAY}02.zip", stat.S_IFREG | 0o644),
            _attr("archive", stat.S_IFDIR | 0o755),
        ]
        transfer = SftpTransfer(settings)
        transfer.connect()

        deleted = transfer.delete_files("/srv/dl", KEEP_TODAY)

        assert deleted == [f"shop-{YESTERDAY}01.zip"]
        sftp.remove.assert_called_once_with(f"/srv/dl/shop-{YESTERDAY}01.zip")

    def test_delete_files_creates_missing_directory(
        self, settings: SftpSettings, ssh_client
    ) -> None:
        sftp = ssh_client.open_sftp.return_value
        sftp.listdir_attr.side_effect = FileNotFoundError(2, "No such file")
        sftp.stat.side_effect = _existing({"/srv"})
        transfer = SftpTransfer(settings)
        transfer.connect()

        assert transfer.delete_files("/srv/dl", KEEP_TODAY) == []
        sftp.mkdir.assert_called_once_with("/srv/dl")

    def test_delete_files_creates_missing_parents(
        self, settings: SftpSettings, ssh_client
    ) -> None:
        sftp = ssh_client.open_sftp.return_value
        sftp.listdir_attr.side_effect = FileNotFoundError(2, "No such file")
        sftp.stat.side_effect = _existing({"/srv"})
        transfer = SftpTransfer(settings)
        transfer.connect()

        transfer.delete_files("/srv/releases/shop/", KEEP_TODAY)

        assert [c.args[0] for c in sftp.mkdir.call_args_list] == [
            "/srv/releases",
            "/srv/releases/shop",
        ]

    def test_upload_and_close(self, settings: SftpSettings, ssh_client, archive: Path) -> None:
        sftp = ssh_client.open_sftp.return_value
        transfer = SftpTransfer(settings)
        transfer.connect()

        transfer.upload(archive, "/srv/dl/a.zip")
        transfer.close()

        sftp.put.assert_called_once_with(str(archive), "/srv/dl/a.zip")
        sftp.close.assert_called_once()
        ssh_client.close.assert_called_once()

    def test_close_without_connect_is_safe(self, settings: SftpSettings) -> None:
        SftpTransfer(settings).close()

    def test_upload_without_connect_fails(self, settings: SftpSettings, archive: Path) -> None:
        with pytest.raises(RuntimeError):
            SftpTransfer(settings).upload(archive, "/srv/dl/a.zip")
