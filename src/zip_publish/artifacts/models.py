"""
Pydantic models for versioned artifacts and local retention.

Defines the version identifier computed for each publish and the
outcome of reconciling the local artifact directory.
"""

from enum import Enum

from pydantic import BaseModel, Field


class RetentionDecision(Enum):
    """What the retention scan does with an existing local entry."""

    SIBLING = "sibling"
    FOREIGN_TODAY = "foreign_today"
    DELETE = "delete"


class ArtifactVersion(BaseModel):
    """
    Version identifier for one publish of an application on one day.

    The sequence is the 1-based ordinal of today's publishes for the app.
    It is zero-padded to fill_width digits; a longer number is kept as is.
    """

    app: str = Field(description="Application name, used as archive prefix")
    date: str = Field(description="Calendar date as YYYYMMDD")
    sequence: int = Field(ge=1, description="1-based publish ordinal for the day")
    fill_width: int = Field(ge=1, description="Digits the sequence is padded to")

    model_config = {"frozen": True}

    @property
    def sequence_text(self) -> str:
        """Zero-padded sequence number."""
        return str(self.sequence).zfill(self.fill_width)

    @property
    def version(self) -> str:
        """Date followed by the padded sequence, e.g. 20261018003."""
        return f"{self.date}{self.sequence_text}"

    @property
    def filename(self) -> str:
        """Archive filename, e.g. shop-20261018003.zip."""
        return f"{self.app}-{self.version}.zip"


class RetentionResult(BaseModel):
    """Outcome of a retention scan over the local artifact directory."""

    sequence: int = Field(ge=1, description="Sibling count plus one")
    siblings: list[str] = Field(
        default_factory=list, description="Today's artifacts for this app"
    )
    foreign: list[str] = Field(
        default_factory=list, description="Today's artifacts for other apps, kept"
    )
    deleted: list[str] = Field(
        default_factory=list, description="Entries removed (or to remove on dry run)"
    )
    created_dir: bool = Field(
        default=False, description="Whether the artifact directory was created"
    )
    dry_run: bool = Field(default=False, description="Whether deletions were skipped")
