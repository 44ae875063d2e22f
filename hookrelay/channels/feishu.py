"""Feishu (Lark) custom bot channel."""

import base64
import hashlib
import hmac
import logging
import time
from typing import Any

import httpx

from hookrelay.channels.base import BaseChannel
from hookrelay.models.messages import OutboundMessage

logger = logging.getLogger(__name__)


class FeishuChannel(BaseChannel):
    """Feishu webhook bot channel, rich-text ``post`` messages."""

    def __init__(
        self,
        webhook_url: str,
        secret: str | None = None,
        timeout: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(webhook_url, timeout=timeout, transport=transport)
        self._secret = secret or ""

    @property
    def name(self) -> str:
        return "feishu"

    def _generate_signature(self, timestamp: str) -> str:
        string_to_sign = f"{timestamp}\n{self._secret}"
        hmac_code = hmac.new(
            string_to_sign.encode("utf-8"),
            digestmod=hashlib.sha256,
        ).digest()
        return base64.b64encode(hmac_code).decode("utf-8")

    def _wire_body(self, message: OutboundMessage) -> dict[str, Any]:
        body = message.to_wire()
        if self._secret:
            timestamp = str(int(time.time()))
            body["timestamp"] = timestamp
            body["sign"] = self._generate_signature(timestamp)
        return body

    def _check_result(self, result: Any) -> bool:
        if isinstance(result, dict) and result.get("code", 0) != 0:
            logger.error(f"Feishu API error: {result}")
            return False
        return True
