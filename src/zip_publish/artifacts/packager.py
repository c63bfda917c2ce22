"""
Artifact packaging.

Validates the build output directory and compresses it into the
versioned archive through an Archiver.
"""

import logging
import os
import zipfile
from abc import ABC, abstractmethod
from pathlib import Path

from zip_publish.core.exceptions import ArchiveError

logger = logging.getLogger(__name__)


class Archiver(ABC):
    """Produces a compressed archive of a directory."""

    @abstractmethod
    def archive(self, source_dir: Path, dest_path: Path) -> None:
        """
        Compress source_dir into dest_path.

        Args:
            source_dir: Directory to compress
            dest_path: Archive file to write
        """
        pass


class ZipArchiver(Archiver):
    """Writes deflate-compressed zip archives with paths relative to the source."""

    def __init__(self, compression: int = zipfile.ZIP_DEFLATED):
        self.compression = compression

    def archive(self, source_dir: Path, dest_path: Path) -> None:
        source_dir = Path(source_dir).resolve()
        dest_path = Path(dest_path).resolve()

        with zipfile.ZipFile(dest_path, "w", compression=self.compression) as zf:
            for root, dirs, files in os.walk(source_dir):
                dirs.sort()
                for name in sorted(files):
                    full = Path(root) / name
                    if full == dest_path:
                        continue
                    zf.write(full, full.relative_to(source_dir).as_posix())


class ArtifactPackager:
    """
    Packages the configured source directory into an archive.

    A missing source directory is a precondition failure, reported by
    check_source() without raising. Archiver failures are fatal.
    """

    def __init__(self, archiver: Archiver | None = None):
        """
        Initialize the packager.

        Args:
            archiver: Archiver to use (default: ZipArchiver)
        """
        self._archiver = archiver or ZipArchiver()

    def check_source(self, source_dir: Path) -> bool:
        """Return True if source_dir exists and is a directory."""
        source_dir = Path(source_dir)
        if not source_dir.exists():
            logger.error(f"Source directory does not exist: {source_dir}")
            return False
        if not source_dir.is_dir():
            logger.error(f"Source path is not a directory: {source_dir}")
            return False
        return True

    def package(self, source_dir: Path, dest_path: Path) -> Path:
        """
        Compress source_dir into dest_path.

        Args:
            source_dir: Build output directory
            dest_path: Versioned archive path

        Returns:
            The archive path

        Raises:
            ArchiveError: If the archiver fails
        """
        source_dir = Path(source_dir)
        dest_path = Path(dest_path)

        logger.info(f"Packaging {source_dir} -> {dest_path}")
        try:
            self._archiver.archive(source_dir, dest_path)
        except Exception as e:
            # No partial archive may remain in the artifact directory
            dest_path.unlink(missing_ok=True)
            raise ArchiveError(
                f"Archiving failed: {e}",
                source_dir=str(source_dir),
                dest_path=str(dest_path),
            ) from e

        return dest_path
