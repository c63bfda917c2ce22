"""
Publish Pipeline - post-build release sequencing.

Runs the stages of a publish in order:
source check -> retention scan -> version allocation -> packaging ->
upload -> notification. Every stage except notification is fatal on
failure; a missing source directory ends the run without side effects.
"""

import logging
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Callable

from pydantic import BaseModel, Field

from zip_publish.artifacts.models import RetentionResult
from zip_publish.artifacts.naming import allocate_version, format_date, today_pattern
from zip_publish.artifacts.packager import Archiver, ArtifactPackager
from zip_publish.artifacts.retention import RetentionScanner
from zip_publish.notifications.channels.base import BaseChannel
from zip_publish.notifications.channels.dingtalk import DingTalkChannel
from zip_publish.notifications.models import DeliveryResult
from zip_publish.notifications.notifier import Notifier
from zip_publish.pipeline.config import PublishConfig
from zip_publish.transfer.base import RemoteTransfer
from zip_publish.transfer.publisher import Publisher
from zip_publish.transfer.sftp import SftpTransfer

logger = logging.getLogger(__name__)


class PublishStatus(Enum):
    """Outcome of a pipeline run that did not raise."""

    PUBLISHED = "published"
    SKIPPED = "skipped"


class PublishResult(BaseModel):
    """Result of a pipeline run."""

    status: PublishStatus
    app: str
    version: str | None = None
    filename: str | None = None
    local_path: Path | None = None
    remote_path: str | None = None
    download_url: str | None = None
    size_bytes: int | None = None
    retention: RetentionResult | None = None
    notification: DeliveryResult | None = None
    skip_reason: str | None = None
    started_at: datetime
    finished_at: datetime | None = Field(default=None)

    @property
    def notified(self) -> bool:
        return self.notification is not None and self.notification.success


class PublishPipeline:
    """
    Publish pipeline for one application.

    Collaborators default to the concrete implementations built from the
    configuration (zip archiver, SFTP transfer, DingTalk robot) and can be
    replaced for tests or other transports.

    At most one pipeline may run against a given artifact directory and
    remote directory at a time.
    """

    def __init__(
        self,
        config: PublishConfig,
        archiver: Archiver | None = None,
        transfer: RemoteTransfer | None = None,
        channel: BaseChannel | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        """
        Initialize the pipeline.

        Args:
            config: Publish configuration
            archiver: Archiver (default: ZipArchiver)
            transfer: Remote transfer (default: SftpTransfer from config.sftp)
            channel: Notification channel (default: DingTalkChannel from config.dingtalk)
            clock: Returns the current local time (default: datetime.now)
        """
        self.config = config
        self._clock = clock or datetime.now
        self._scanner = RetentionScanner(config.artifact_dir, config.app, config.fill_width)
        self._packager = ArtifactPackager(archiver)
        self._publisher = Publisher(transfer or SftpTransfer(config.sftp))
        self._notifier = Notifier(channel or DingTalkChannel(config.dingtalk), config.card)

    def run(self) -> PublishResult:
        """
        Execute one publish.

        Returns:
            PublishResult with status PUBLISHED, or SKIPPED when the
            source directory is missing

        Raises:
            RetentionError: If the local artifact directory cannot be reconciled
            ArchiveError: If packaging fails
            TransferError: If connect, remote cleanup or upload fails
        """
        config = self.config
        now = self._clock()
        date = format_date(now)

        logger.info(f"Publishing {config.app} for {date}")

        if not self._packager.check_source(config.source_dir):
            logger.error(f"Publish of {config.app} skipped: source directory unavailable")
            return PublishResult(
                status=PublishStatus.SKIPPED,
                app=config.app,
                skip_reason=f"Source directory unavailable: {config.source_dir}",
                started_at=now,
                finished_at=self._clock(),
            )

        retention = self._scanner.scan(date)

        version = allocate_version(config.app, date, retention.sequence, config.fill_width)
        local_path = config.artifact_dir / version.filename
        logger.info(f"Allocated version {version.version} ({version.filename})")

        self._packager.package(config.source_dir, local_path)

        size_bytes = self._publisher.publish(
            local_path,
            config.remote_dir,
            version.filename,
            keep_pattern=today_pattern(date),
        )
        remote_path = f"{config.remote_dir.rstrip('/')}/{version.filename}"
        download_url = config.download_url(version.filename)

        try:
            notification = self._notifier.notify(
                version=version.version,
                size_bytes=size_bytes,
                packed_at=now,
                download_url=download_url,
            )
        finally:
            self._notifier.close()

        logger.info(f"Published {version.filename}: {download_url}")
        return PublishResult(
            status=PublishStatus.PUBLISHED,
            app=config.app,
            version=version.version,
            filename=version.filename,
            local_path=local_path,
            remote_path=remote_path,
            download_url=download_url,
            size_bytes=size_bytes,
            retention=retention,
            notification=notification,
            started_at=now,
            finished_at=self._clock(),
        )

    def plan(self) -> tuple[RetentionResult, str]:
        """
        Preview the next publish without side effects.

        Returns:
            Tuple of (dry-run retention result, next archive filename)
        """
        date = format_date(self._clock())
        retention = self._scanner.scan(date, dry_run=True)
        version = allocate_version(
            self.config.app, date, retention.sequence, self.config.fill_width
        )
        return retention, version.filename
