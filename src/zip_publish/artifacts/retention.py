"""
Local artifact retention.

Reconciles the local artifact directory against today's date: keeps this
app's same-day archives (and counts them), keeps other apps' same-day
archives, and deletes everything else.
"""

import logging
from pathlib import Path

from zip_publish.core.exceptions import RetentionError

from .models import RetentionDecision, RetentionResult
from .naming import family_pattern, today_pattern

logger = logging.getLogger(__name__)


class RetentionScanner:
    """
    Retention scanner for one app's local artifact directory.

    The directory is assumed to be owned by a single running pipeline per
    app per day. Concurrent scans race on counting and deletion.
    """

    def __init__(self, artifact_dir: Path, app: str, fill_width: int):
        """
        Initialize the scanner.

        Args:
            artifact_dir: Local directory holding published archives
            app: Application name (archive family prefix)
            fill_width: Digits of the sequence in family filenames
        """
        self._artifact_dir = Path(artifact_dir)
        self._app = app
        self._fill_width = fill_width

    @property
    def artifact_dir(self) -> Path:
        return self._artifact_dir

    def classify(self, name: str, date: str) -> RetentionDecision:
        """Decide what to do with a directory entry for the given date."""
        if family_pattern(self._app, date, self._fill_width).fullmatch(name):
            return RetentionDecision.SIBLING
        if today_pattern(date).search(name):
            return RetentionDecision.FOREIGN_TODAY
        return RetentionDecision.DELETE

    def scan(self, date: str, dry_run: bool = False) -> RetentionResult:
        """
        Scan the artifact directory and apply the retention policy.

        Args:
            date: Today's YYYYMMDD date stamp
            dry_run: If True, report decisions without creating or deleting

        Returns:
            RetentionResult whose sequence is the next publish ordinal

        Raises:
            RetentionError: If the directory cannot be created or listed,
                or a stale entry cannot be deleted
        """
        result = RetentionResult(sequence=1, dry_run=dry_run)

        if not self._artifact_dir.exists():
            if not dry_run:
                try:
                    self._artifact_dir.mkdir(parents=True, exist_ok=True)
                except OSError as e:
                    raise RetentionError(
                        f"Cannot create artifact directory: {e}",
                        path=str(self._artifact_dir),
                    ) from e
                logger.info(f"Created artifact directory {self._artifact_dir}")
            result.created_dir = True
            return result

        try:
            entries = sorted(self._artifact_dir.iterdir(), key=lambda p: p.name)
        except OSError as e:
            raise RetentionError(
                f"Cannot list artifact directory: {e}",
                path=str(self._artifact_dir),
            ) from e

        for entry in entries:
            decision = self.classify(entry.name, date)
            logger.debug(f"Retention {decision.value}: {entry.name}")

            match decision:
                case RetentionDecision.SIBLING:
                    result.sequence += 1
                    result.siblings.append(entry.name)
                case RetentionDecision.FOREIGN_TODAY:
                    result.foreign.append(entry.name)
                case RetentionDecision.DELETE:
                    if not dry_run:
                        self._delete(entry)
                    result.deleted.append(entry.name)

        logger.info(
            f"Retention scan of {self._artifact_dir}: "
            f"{len(result.siblings)} sibling(s), {len(result.foreign)} foreign, "
            f"{len(result.deleted)} deleted"
        )
        return result

    def _delete(self, entry: Path) -> None:
        """Delete a stale entry; directories are refused by unlink."""
        try:
            entry.unlink()
        except OSError as e:
            raise RetentionError(
                f"Cannot delete stale artifact: {e}",
                path=str(entry),
            ) from e
