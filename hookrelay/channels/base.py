"""Base class for chat-bot channels."""

import logging
from abc import ABC, abstractmethod
from typing import Any

import httpx

from hookrelay.errors import DeliveryError
from hookrelay.models.messages import OutboundMessage

logger = logging.getLogger(__name__)


class BaseChannel(ABC):
    """A chat-bot intake URL plus the message shape it accepts."""

    def __init__(
        self,
        webhook_url: str,
        timeout: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._webhook_url = webhook_url
        self._timeout = timeout
        self._transport = transport

    @property
    @abstractmethod
    def name(self) -> str:
        """Channel name for logging."""
        ...

    @property
    def enabled(self) -> bool:
        return bool(self._webhook_url)

    def _wire_body(self, message: OutboundMessage) -> dict[str, Any]:
        return message.to_wire()

    def _check_result(self, result: Any) -> bool:
        """Inspect the decoded robot response. Channels override this."""
        return True

    async def send(self, message: OutboundMessage) -> Any:
        """POST the message and return the decoded response.

        Raises ``DeliveryError`` on transport failure, timeout or a non-2xx
        status. A response body that is not JSON is logged and returned as text.
        """
        body = self._wire_body(message)
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.post(self._webhook_url, json=body)
                response.raise_for_status()
        except httpx.HTTPError as e:
            raise DeliveryError(f"POST to {self.name} robot failed: {e}") from e

        try:
            return response.json()
        except ValueError:
            logger.warning(f"Undecodable response from {self.name} robot: {response.text!r}")
            return response.text

    async def send_safe(self, message: OutboundMessage) -> bool:
        """Send with error handling. Never raises."""
        if not self.enabled:
            logger.error(f"Channel {self.name} has no robot URL, message dropped")
            return False
        try:
            result = await self.send(message)
        except Exception as e:
            logger.exception(f"Failed to send to channel {self.name}: {e}")
            return False

        logger.info(f"result: {result}")
        return self._check_result(result)
