"""Pure payload-to-message formatting.

Nothing here performs I/O; every function maps a decoded payload to text or to
an ``OutboundMessage`` for the configured target platform.
"""

from datetime import datetime, timezone, tzinfo

from hookrelay.config import TargetType
from hookrelay.models.alert import AlertItem, AlertPayload, is_zero_time
from hookrelay.models.gitlab import Label, MergeEvent, PushEvent, SourceEvent
from hookrelay.models.messages import FeishuMessage, OutboundMessage, WeChatMessage

RULE = "----------------------"


def format_time(value: datetime, tz: tzinfo | None = None) -> str:
    """Render ``YYYY-MM-DD HH:MM:SS``, optionally converted to ``tz`` first."""
    if tz is not None and not is_zero_time(value):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        value = value.astimezone(tz)
    # strftime does not zero-pad years below 1000 on every platform
    return (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d} "
        f"{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
    )


def _mapping_lines(header: str, values: dict[str, str]) -> list[str]:
    if not values:
        return []
    return [header] + [f"  - {key}: {values[key]}" for key in sorted(values)]


def _alert_item_lines(index: int, alert: AlertItem, tz: tzinfo | None) -> list[str]:
    lines = [f"\n---\n**Alert #{index}**"]
    lines.append("Status: 🚨 Firing" if alert.is_firing else "Status: ✅ Resolved")
    lines.extend(_mapping_lines("Labels:", alert.labels))
    lines.extend(_mapping_lines("Annotations:", alert.annotations))
    lines.append(f"Start time: {format_time(alert.starts_at, tz)}")
    if alert.has_ended:
        lines.append(f"End time: {format_time(alert.ends_at, tz)}")
    return lines


def alert_lines(payload: AlertPayload, tz: tzinfo | None = None) -> list[str]:
    """Text lines of the detailed alert message, one Feishu span each."""
    lines = [f"## {payload.title}"]
    lines.append("Status: 🚨 Alerting" if payload.is_firing else "Status: ✅ Resolved")

    if payload.message:
        lines.append("\n" + payload.message)

    if payload.alerts:
        lines.append("\n### Alert details:")
        for i, alert in enumerate(payload.alerts, start=1):
            lines.extend(_alert_item_lines(i, alert, tz))

    return lines


def format_alert(
    payload: AlertPayload, target: TargetType, tz: tzinfo | None = None
) -> OutboundMessage:
    """Format an alert notification for ``target``.

    Only the Feishu message carries the per-alert details. The WeChat message
    is the bare ``payload.message``.
    """
    if target == "feishu":
        return FeishuMessage.from_lines(payload.title, alert_lines(payload, tz))
    if target == "weixin":
        return WeChatMessage.markdown_text(payload.message)
    raise ValueError(f"Unknown target platform: {target}")


def format_text(text: str, target: TargetType, title: str = "") -> OutboundMessage:
    """Wrap free text in the message shape of ``target``."""
    if target == "feishu":
        return FeishuMessage.from_lines(title, [text])
    if target == "weixin":
        return WeChatMessage.markdown_text(text)
    raise ValueError(f"Unknown target platform: {target}")


def format_push_event(event: PushEvent) -> str:
    msg = f"Project: {event.project.name}\n"
    msg += f"Repository: [{event.repository.url}]({event.repository.url})\n"
    msg += f"Commit: {event.checkout_sha}\n"
    for commit in event.commits:
        msg += f"{RULE}\n"
        msg += f"Title: {commit.title}\n"
        msg += f"ID: {commit.id}\n"
        msg += f"Message: {commit.message}\n"
        timestamp = commit.timestamp.isoformat(sep=" ") if commit.timestamp else ""
        msg += f"Timestamp: {timestamp}\n"
        msg += f"URL: [{commit.url}]({commit.url})\n"
        msg += f"Author: {commit.author.name}\n"
        for path in commit.added:
            msg += f"Added: {path}\n"
        for path in commit.modified:
            msg += f"Modified: {path}\n"
        for path in commit.removed:
            msg += f"Removed: {path}\n"
    return msg


def _label_change_lines(prefix: str, label: Label) -> str:
    project_id = "" if label.project_id is None else label.project_id
    return (
        f"{prefix} ID: {label.id}\n"
        f"{prefix} Title: {label.title}\n"
        f"{prefix} ProjectID: {project_id}\n"
        f"{prefix} CreatedAt: {label.created_at}\n"
        f"{prefix} UpdatedAt: {label.updated_at}\n"
        f"{prefix} Description: {label.description}\n"
        f"{prefix} Type: {label.type}\n"
    )


def format_merge_event(event: MergeEvent) -> str:
    msg = f"Project: {event.project.name}\n"
    msg += f"Repository: [{event.repository.url}]({event.repository.url})\n"
    msg += f"Kind: {event.object_kind}\n"
    msg += f"User: {event.user.username}\n"
    msg += f"{RULE}\n"
    for label in event.changes.labels.previous:
        msg += _label_change_lines("Previous", label)
    msg += "--\n"
    for label in event.changes.labels.current:
        msg += _label_change_lines("Current", label)
    return msg


def format_source_event(event: SourceEvent) -> str:
    if isinstance(event, PushEvent):
        return format_push_event(event)
    return format_merge_event(event)
