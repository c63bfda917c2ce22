"""
Card template rendering.

Turns the configured CardInfo plus the facts of a publish into the
action card announcing the download.
"""

from datetime import datetime

from zip_publish.notifications.models import (
    CardButton,
    CardContext,
    CardInfo,
    ComputedBody,
    LiteralBody,
    NotificationCard,
)

PACK_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

DOWNLOAD_BUTTON_TITLE = "Download"

CARD_TEMPLATE = """### {title}

<span style="color: #ccc;">{subtitle}</span>

---

{body}
"""

DEFAULT_BODY_TEMPLATE = """```
Version   {version}
Size      {size}
Packed at {date}
```"""


def format_size(size_bytes: int) -> str:
    """Format a byte count as megabytes, e.g. 1.50M."""
    return f"{size_bytes / 1024 / 1024:.2f}M"


def build_context(version: str, size_bytes: int, packed_at: datetime) -> CardContext:
    """Build the context handed to computed bodies."""
    return CardContext(
        version=version,
        size=format_size(size_bytes),
        date=packed_at.strftime(PACK_DATE_FORMAT),
    )


def render_body(card_info: CardInfo, context: CardContext) -> str:
    """Resolve the card body: computed, non-empty literal, or the default block."""
    match card_info.body:
        case ComputedBody(render=render):
            return render(context)
        case LiteralBody(text=text) if text:
            return text
        case _:
            return DEFAULT_BODY_TEMPLATE.format(
                version=context.version,
                size=context.size,
                date=context.date,
            )


def build_card(
    card_info: CardInfo,
    version: str,
    size_bytes: int,
    packed_at: datetime,
    download_url: str,
) -> NotificationCard:
    """
    Build the action card for a publish.

    Args:
        card_info: Configured card template
        version: Published version string
        size_bytes: Archive size
        packed_at: Time the archive was packed
        download_url: Public URL of the archive

    Returns:
        NotificationCard with a single download button
    """
    context = build_context(version, size_bytes, packed_at)
    text = CARD_TEMPLATE.format(
        title=card_info.title,
        subtitle=card_info.subtitle,
        body=render_body(card_info, context),
    )
    return NotificationCard(
        title=card_info.title,
        text=text,
        hide_avatar="0",
        btn_orientation="0",
        buttons=[CardButton(title=DOWNLOAD_BUTTON_TITLE, action_url=download_url)],
    )
