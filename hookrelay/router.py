"""Payload classification and dispatch to the configured chat-bot channel."""

import json
import logging
from dataclasses import dataclass
from datetime import tzinfo
from typing import Mapping
from zoneinfo import ZoneInfo

import httpx
from pydantic import BaseModel

from hookrelay.channels.base import BaseChannel
from hookrelay.channels.feishu import FeishuChannel
from hookrelay.channels.wechat import WeChatChannel
from hookrelay.config import Settings, SourceType, TargetType
from hookrelay.errors import DeliveryError, PayloadDecodeError, RelayError
from hookrelay.formatters import format_alert, format_source_event, format_text
from hookrelay.models.alert import AlertPayload
from hookrelay.models.messages import OutboundMessage
from hookrelay.sources.base import BaseSource
from hookrelay.sources.gitlab import GitLabSource
from hookrelay.sources.grafana import GrafanaSource

logger = logging.getLogger(__name__)

SOURCES: dict[str, type[BaseSource]] = {
    "grafana": GrafanaSource,
    "gitlab": GitLabSource,
}


def create_source(kind: SourceType) -> BaseSource:
    source_cls = SOURCES.get(kind)
    if source_cls is None:
        raise ValueError(f"Unknown source type: {kind}")
    return source_cls()


def create_channel(
    settings: Settings, transport: httpx.AsyncBaseTransport | None = None
) -> BaseChannel:
    """Create the channel for the configured target platform."""
    if settings.target == "feishu":
        return FeishuChannel(
            webhook_url=settings.robot_url,
            secret=settings.feishu_secret or None,
            timeout=settings.timeout,
            transport=transport,
        )
    elif settings.target == "weixin":
        return WeChatChannel(
            webhook_url=settings.robot_url,
            timeout=settings.timeout,
            transport=transport,
        )
    else:
        raise ValueError(f"Unknown target platform: {settings.target}")


def classify_payload(
    body: str | bytes,
    kind: SourceType = "grafana",
    headers: Mapping[str, str] | None = None,
) -> BaseModel:
    """Decode ``body`` as the payload of source ``kind``.

    Raises ``PayloadDecodeError`` when it does not match.
    """
    return create_source(kind).parse(body, headers)


def route(
    payload: BaseModel, target: TargetType, tz: tzinfo | None = None
) -> OutboundMessage:
    """Format a decoded payload for the target platform."""
    if isinstance(payload, AlertPayload):
        return format_alert(payload, target, tz)
    return format_text(format_source_event(payload), target)


def apply_rewrites(body: bytes, rewrites: Mapping[str, str]) -> str:
    text = body.decode("utf-8", errors="replace")
    for old, new in rewrites.items():
        text = text.replace(old, new)
    return text


@dataclass(frozen=True)
class DispatchResult:
    """Outcome of relaying one webhook body."""

    message: OutboundMessage | None = None
    delivered: bool = False
    error: RelayError | None = None


class Relay:
    """Relays webhook bodies from one source to one chat-bot channel."""

    def __init__(
        self,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._settings = settings
        self._source = create_source(settings.source)
        self._channel = create_channel(settings, transport)
        self._tz = ZoneInfo(settings.display_timezone) if settings.display_timezone else None

        logger.info(
            f"Relay initialized: source={self._source.name}, target={self._channel.name}"
        )

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def channel(self) -> BaseChannel:
        return self._channel

    @property
    def source(self) -> BaseSource:
        return self._source

    async def dispatch(
        self, body: bytes, headers: Mapping[str, str] | None = None
    ) -> DispatchResult:
        """Decode, format and deliver one body. Never raises ``RelayError``."""
        text = apply_rewrites(body, self._settings.payload_rewrites)
        logger.debug(f"{self._source.name} payload: {text}")

        try:
            payload = self._source.parse(text, headers)
        except PayloadDecodeError as e:
            logger.warning(f"Dropping request: {e}")
            return DispatchResult(error=e)

        message = route(payload, self._settings.target, self._tz)
        title = getattr(payload, "title", "") or self._source.name
        logger.info(f"{title} msg: {json.dumps(message.to_wire(), ensure_ascii=False)}")

        delivered = await self._channel.send_safe(message)
        if delivered:
            logger.info(f"Message sent to {self._channel.name}")
            return DispatchResult(message=message, delivered=True)

        logger.error(f"Failed to send message to {self._channel.name}")
        return DispatchResult(
            message=message,
            error=DeliveryError(f"Delivery to {self._channel.name} failed"),
        )
