"""
Notification channels for Zip Publish.

Available channels:
- DingTalkChannel: DingTalk group robot webhook
"""

from zip_publish.notifications.channels.base import BaseChannel
from zip_publish.notifications.channels.dingtalk import (
    DingTalkChannel,
    DingTalkSettings,
    sign,
)

__all__ = [
    "BaseChannel",
    "DingTalkChannel",
    "DingTalkSettings",
    "sign",
]
