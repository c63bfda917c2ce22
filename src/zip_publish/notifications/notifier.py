"""
Publish announcement.

The Notifier renders the card for a completed publish and hands it to a
channel. Delivery sits outside the publish's consistency boundary: a
publish has succeeded once the upload completes, so nothing here raises.
"""

import logging
from datetime import datetime

from zip_publish.notifications.channels.base import BaseChannel
from zip_publish.notifications.models import CardInfo, DeliveryResult
from zip_publish.notifications.templates import build_card

logger = logging.getLogger(__name__)


class Notifier:
    """Builds and delivers the download card for a publish."""

    def __init__(self, channel: BaseChannel, card_info: CardInfo):
        """
        Initialize the notifier.

        Args:
            channel: Delivery channel
            card_info: Card template
        """
        self._channel = channel
        self._card_info = card_info

    def notify(
        self,
        version: str,
        size_bytes: int,
        packed_at: datetime,
        download_url: str,
    ) -> DeliveryResult:
        """
        Announce a publish.

        Args:
            version: Published version string
            size_bytes: Archive size in bytes
            packed_at: Time the archive was packed
            download_url: Public URL of the archive

        Returns:
            DeliveryResult; failures are reported, never raised
        """
        channel_type = self._channel.channel_type

        if not self._channel.is_enabled():
            logger.info(f"Notification channel {channel_type} is disabled")
            return DeliveryResult(
                success=False,
                channel=channel_type,
                error_message="Channel disabled",
            )

        try:
            card = build_card(
                self._card_info,
                version=version,
                size_bytes=size_bytes,
                packed_at=packed_at,
                download_url=download_url,
            )
            result = self._channel.deliver(card)
        except Exception as e:
            # A failing computed body or channel bug must not fail the publish
            logger.warning(f"Notification for {version} failed: {e}", exc_info=True)
            return DeliveryResult(
                success=False,
                channel=channel_type,
                error_message=f"{e.__class__.__name__}: {e}",
            )

        if not result.success:
            logger.warning(
                f"Notification for {version} not delivered: {result.error_message}"
            )
        return result

    def close(self) -> None:
        """Release the channel's resources."""
        try:
            self._channel.close()
        except Exception as e:
            logger.warning(f"Failed to close {self._channel.channel_type} channel: {e}")
