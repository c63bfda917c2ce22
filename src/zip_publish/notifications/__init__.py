"""
Zip Publish Notifications Module.

Renders the download card announcing a publish and delivers it through
a chat channel.

Usage:
    >>> from zip_publish.notifications import CardInfo, Notifier
    >>> from zip_publish.notifications.channels import DingTalkChannel, DingTalkSettings
    >>>
    >>> channel = DingTalkChannel(DingTalkSettings(access_token="...", secret="..."))
    >>> notifier = Notifier(channel, CardInfo(title="Shop", subtitle="Nightly build"))
    >>> notifier.notify("20261018001", 1048576, datetime.now(), "https://dl.example.com/shop-20261018001.zip")
"""

from zip_publish.notifications.models import (
    CardBody,
    CardButton,
    CardContext,
    CardInfo,
    ComputedBody,
    DeliveryResult,
    LiteralBody,
    NotificationCard,
)
from zip_publish.notifications.notifier import Notifier
from zip_publish.notifications.templates import (
    build_card,
    build_context,
    format_size,
    render_body,
)

__all__ = [
    # Models
    "CardBody",
    "CardButton",
    "CardContext",
    "CardInfo",
    "ComputedBody",
    "DeliveryResult",
    "LiteralBody",
    "NotificationCard",
    # Rendering
    "build_card",
    "build_context",
    "format_size",
    "render_body",
    # Delivery
    "Notifier",
]
