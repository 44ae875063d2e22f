"""WeChat Work group robot channel."""

import logging
from typing import Any

from hookrelay.channels.base import BaseChannel

logger = logging.getLogger(__name__)


class WeChatChannel(BaseChannel):
    """WeChat Work robot channel, markdown messages."""

    @property
    def name(self) -> str:
        return "weixin"

    def _check_result(self, result: Any) -> bool:
        if isinstance(result, dict) and result.get("errcode", 0) != 0:
            logger.error(f"WeChat API error: {result}")
            return False
        return True
