"""
DingTalk notification channel.

Delivers action cards to a DingTalk group robot through its webhook,
signing requests when the robot has a secret configured.
"""

import base64
import hashlib
import hmac
import time
from typing import Any

import requests
from pydantic import BaseModel, Field

from zip_publish.core.exceptions import NotificationError
from zip_publish.notifications.channels.base import BaseChannel
from zip_publish.notifications.models import DeliveryResult, NotificationCard


class DingTalkSettings(BaseModel):
    """Configuration for the DingTalk robot."""

    access_token: str = Field(default="", description="Robot access token")
    secret: str | None = Field(default=None, description="Signing secret, if enabled")
    webhook_base: str = "https://oapi.dingtalk.com/robot/send"
    timeout_seconds: int = Field(default=10, ge=1)
    enabled: bool = True

    model_config = {"frozen": True}


def sign(timestamp_ms: int, secret: str) -> str:
    """
    Compute the robot request signature.

    The signature is base64(HMAC-SHA256(secret, "{timestamp}\\n{secret}")).
    It is URL-encoded when placed in the query string.
    """
    string_to_sign = f"{timestamp_ms}\n{secret}"
    digest = hmac.new(
        secret.encode("utf-8"),
        string_to_sign.encode("utf-8"),
        hashlib.sha256,
    ).digest()
    return base64.b64encode(digest).decode("utf-8")


class DingTalkChannel(BaseChannel):
    """
    Notification delivery to a DingTalk group robot.

    Sends a single request per card; delivery is never retried.
    """

    channel_type = "dingtalk"

    def __init__(self, settings: DingTalkSettings):
        """
        Initialize DingTalk channel.

        Args:
            settings: Robot configuration
        """
        super().__init__(enabled=settings.enabled)
        self.settings = settings
        self._session: requests.Session | None = None

    def validate_config(self) -> bool:
        """Validate DingTalk configuration."""
        if not self.settings.access_token:
            return False
        if not self.settings.webhook_base.startswith(("http://", "https://")):
            return False
        return True

    def _get_session(self) -> requests.Session:
        if self._session is None:
            self._session = requests.Session()
        return self._session

    def _query_params(self, timestamp_ms: int | None = None) -> dict[str, Any]:
        """Build the webhook query string parameters."""
        params: dict[str, Any] = {"access_token": self.settings.access_token}
        if self.settings.secret:
            timestamp_ms = timestamp_ms or int(time.time() * 1000)
            params["timestamp"] = timestamp_ms
            params["sign"] = sign(timestamp_ms, self.settings.secret)
        return params

    def _prepare_payload(self, card: NotificationCard) -> dict[str, Any]:
        return {"msgtype": "actionCard", "actionCard": card.to_action_card()}

    def _post(self, card: NotificationCard) -> requests.Response:
        """
        Post the card to the robot.

        Raises:
            NotificationError: On transport errors, non-2xx responses or a
                non-zero errcode in the response body
        """
        try:
            response = self._get_session().post(
                self.settings.webhook_base,
                params=self._query_params(),
                json=self._prepare_payload(card),
                timeout=self.settings.timeout_seconds,
            )
        except requests.exceptions.Timeout as e:
            raise NotificationError(
                f"Request timeout after {self.settings.timeout_seconds}s",
                channel=self.channel_type,
            ) from e
        except requests.exceptions.RequestException as e:
            raise NotificationError(
                f"Request error: {e}", channel=self.channel_type
            ) from e

        if not 200 <= response.status_code < 300:
            raise NotificationError(
                f"HTTP {response.status_code}: {response.text[:200]}",
                channel=self.channel_type,
                status_code=response.status_code,
            )

        try:
            body = response.json()
        except ValueError:
            body = {}
        errcode = body.get("errcode", 0) if isinstance(body, dict) else 0
        if errcode != 0:
            raise NotificationError(
                f"Robot rejected message: errcode={errcode} errmsg={body.get('errmsg')}",
                channel=self.channel_type,
                status_code=response.status_code,
            )

        return response

    def deliver(self, card: NotificationCard) -> DeliveryResult:
        """
        Deliver card via the DingTalk robot.

        Args:
            card: Card to deliver

        Returns:
            DeliveryResult with delivery status
        """
        if not self.validate_config():
            result = DeliveryResult(
                success=False,
                channel=self.channel_type,
                error_message="Invalid DingTalk configuration",
            )
            self._log_delivery(card, result)
            return result

        try:
            response = self._post(card)
        except NotificationError as e:
            result = DeliveryResult(
                success=False,
                channel=self.channel_type,
                error_message=e.message,
                status_code=e.status_code,
            )
        else:
            result = DeliveryResult(
                success=True,
                channel=self.channel_type,
                status_code=response.status_code,
                response_body=response.text[:1000] if response.text else None,
            )

        self._log_delivery(card, result)
        return result

    def close(self) -> None:
        """Close the requests session."""
        if self._session:
            self._session.close()
            self._session = None
