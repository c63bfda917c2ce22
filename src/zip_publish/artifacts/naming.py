"""
Artifact naming and version allocation.

Archives are named "{app}-{date}{sequence}.zip". Two patterns drive
retention, both locally and on the remote host:

- the family pattern matches this app's archives for one date with a
  sequence of exactly fill_width digits;
- the today pattern matches any app's archive for one date with a
  sequence of any length.

An overflowed sequence (more digits than fill_width) produces a name the
family pattern no longer matches. Later runs on the same day keep such a
file through the today pattern but do not count it.
"""

import re
from datetime import datetime

from .models import ArtifactVersion

DATE_FORMAT = "%Y%m%d"

_FILENAME_RE = re.compile(r"^(?P<app>.+)-(?P<version>\d{8}\d+)\.zip$")


def format_date(moment: datetime) -> str:
    """Return the YYYYMMDD date stamp used in versions."""
    return moment.strftime(DATE_FORMAT)


def family_pattern(app: str, date: str, fill_width: int) -> re.Pattern[str]:
    """Pattern for this app's archives on the given date."""
    return re.compile(rf"{re.escape(app)}-{date}\d{{{fill_width}}}\.zip")


def today_pattern(date: str) -> re.Pattern[str]:
    """Pattern for any app's archive on the given date."""
    return re.compile(rf"{date}\d+\.zip")


def allocate_version(
    app: str,
    date: str,
    sequence: int,
    fill_width: int,
) -> ArtifactVersion:
    """
    Allocate the version for a publish.

    Args:
        app: Application name
        date: YYYYMMDD date stamp
        sequence: Sibling count plus one, as returned by the retention scan
        fill_width: Digits to pad the sequence to

    Returns:
        ArtifactVersion for the publish
    """
    return ArtifactVersion(
        app=app,
        date=date,
        sequence=sequence,
        fill_width=fill_width,
    )


def build_filename(app: str, version: str) -> str:
    """Return the archive filename for an app and version string."""
    return f"{app}-{version}.zip"


def parse_filename(filename: str) -> tuple[str, str]:
    """
    Split an archive filename into (app, version).

    Raises:
        ValueError: If the name is not an artifact archive name
    """
    match = _FILENAME_RE.match(filename)
    if match is None:
        raise ValueError(f"Not an artifact filename: {filename!r}")
    return match.group("app"), match.group("version")
