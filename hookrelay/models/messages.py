"""Outbound chat-bot message bodies.

``OutboundMessage`` is a union of exactly two variants: a WeChat Work markdown
message and a Feishu rich-text ``post`` message. Each variant dumps to the
JSON body its robot expects.
"""

from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class _Message(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


class MarkdownContent(_Message):
    content: str = ""


class WeChatMessage(_Message):
    msgtype: Literal["markdown"] = "markdown"
    markdown: MarkdownContent = Field(default_factory=MarkdownContent)

    @classmethod
    def markdown_text(cls, text: str) -> "WeChatMessage":
        return cls(markdown=MarkdownContent(content=text))


class TextSpan(_Message):
    tag: str = "text"
    text: str = ""


class FeishuPost(_Message):
    title: str = ""
    content: list[list[TextSpan]] = Field(default_factory=list)


class FeishuLocales(_Message):
    zh_cn: FeishuPost = Field(default_factory=FeishuPost)


class FeishuContent(_Message):
    post: FeishuLocales = Field(default_factory=FeishuLocales)


class FeishuMessage(_Message):
    msg_type: Literal["post"] = "post"
    content: FeishuContent = Field(default_factory=FeishuContent)

    @classmethod
    def from_lines(cls, title: str, lines: list[str]) -> "FeishuMessage":
        """Build a post with a single paragraph holding one span per line."""
        paragraph = [TextSpan(text=line) for line in lines]
        return cls(
            content=FeishuContent(
                post=FeishuLocales(zh_cn=FeishuPost(title=title, content=[paragraph]))
            )
        )

    @property
    def post(self) -> FeishuPost:
        return self.content.post.zh_cn


OutboundMessage = Union[WeChatMessage, FeishuMessage]

outbound_adapter: TypeAdapter[OutboundMessage] = TypeAdapter(OutboundMessage)


def decode_message(data: str | bytes) -> OutboundMessage:
    """Decode a wire JSON body back into its message variant."""
    return outbound_adapter.validate_json(data)
