"""
Notification data models for Zip Publish.

Defines the card template supplied in configuration, the rendered
action card, and the delivery result reported by channels.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Literal

from pydantic import BaseModel, Field, field_validator


def _iso_timestamp() -> str:
    """Get current ISO timestamp."""
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class CardContext:
    """Values available to a computed card body."""

    version: str
    size: str
    # YYYY-MM-DD HH:mm:ss
    date: str


@dataclass(frozen=True)
class LiteralBody:
    """Card body used verbatim."""

    text: str


@dataclass(frozen=True)
class ComputedBody:
    """Card body rendered from the publish context."""

    render: Callable[[CardContext], str]


CardBody = LiteralBody | ComputedBody


class CardInfo(BaseModel):
    """
    Card template from configuration.

    body accepts a string (literal body), a callable taking a CardContext
    (computed body), or nothing. An empty string counts as nothing, and
    the default body listing version, size and pack date is used.
    """

    title: str = Field(description="Main card title")
    subtitle: str = Field(default="", description="Grey subtitle under the title")
    body: CardBody | None = Field(default=None, description="Body override")

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    @field_validator("body", mode="before")
    @classmethod
    def coerce_body(cls, v):
        """Convert strings and callables to body variants."""
        if isinstance(v, LiteralBody) and not v.text:
            return None
        if v is None or isinstance(v, (LiteralBody, ComputedBody)):
            return v
        if isinstance(v, str):
            return LiteralBody(v) if v else None
        if callable(v):
            return ComputedBody(v)
        raise ValueError("body must be a string or a callable")


class CardButton(BaseModel):
    """A button on an action card."""

    title: str
    action_url: str


class NotificationCard(BaseModel):
    """Rendered action card ready for delivery."""

    title: str = Field(description="Title shown in the chat preview")
    text: str = Field(description="Markdown card content")
    hide_avatar: Literal["0", "1"] = "0"
    btn_orientation: Literal["0", "1"] = "0"
    buttons: list[CardButton] = Field(default_factory=list)

    def to_action_card(self) -> dict[str, Any]:
        """Return the card as an actionCard message body."""
        return {
            "title": self.title,
            "text": self.text,
            "hideAvatar": self.hide_avatar,
            "btnOrientation": self.btn_orientation,
            "btns": [
                {"title": button.title, "actionURL": button.action_url}
                for button in self.buttons
            ],
        }


@dataclass
class DeliveryResult:
    """Result of a notification delivery attempt."""

    success: bool
    channel: str
    error_message: str | None = None
    status_code: int | None = None
    response_body: str | None = None
    delivered_at: str = field(default_factory=_iso_timestamp)
