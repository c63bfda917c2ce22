"""
Base channel class for notification delivery.

All notification channels must inherit from BaseChannel and implement
the deliver() method.
"""

import logging
from abc import ABC, abstractmethod

from zip_publish.notifications.models import DeliveryResult, NotificationCard

logger = logging.getLogger(__name__)


class BaseChannel(ABC):
    """
    Abstract base class for notification channels.

    All channels must implement:
    - deliver(): Send the card, reporting failures in the DeliveryResult
    - validate_config(): Check configuration validity
    """

    channel_type: str = "base"

    def __init__(self, enabled: bool = True):
        self.enabled = enabled

    @abstractmethod
    def validate_config(self) -> bool:
        """
        Validate channel configuration.

        Returns:
            True if configuration is valid
        """
        pass

    @abstractmethod
    def deliver(self, card: NotificationCard) -> DeliveryResult:
        """
        Deliver a card through this channel.

        Args:
            card: Card to deliver

        Returns:
            DeliveryResult with delivery status
        """
        pass

    def is_enabled(self) -> bool:
        """Check if channel is enabled."""
        return self.enabled

    def close(self) -> None:
        """Release any resources held by the channel."""

    def _log_delivery(self, card: NotificationCard, result: DeliveryResult) -> None:
        """Log a delivery attempt."""
        if result.success:
            logger.info(f"[{self.channel_type}] Delivered card {card.title!r}")
        else:
            logger.warning(
                f"[{self.channel_type}] Failed to deliver card {card.title!r}: "
                f"{result.error_message}"
            )
