"""GitLab push / merge request webhook parser."""

import json
from typing import Mapping

from pydantic import ValidationError

from hookrelay.errors import PayloadDecodeError
from hookrelay.models.gitlab import MergeEvent, PushEvent, SourceEvent
from hookrelay.sources.base import BaseSource

# X-Gitlab-Event header value -> object_kind
_EVENT_HEADERS = {
    "Push Hook": "push",
    "Merge Request Hook": "merge_request",
}

_EVENT_MODELS: dict[str, type[PushEvent] | type[MergeEvent]] = {
    "push": PushEvent,
    "merge_request": MergeEvent,
}


class GitLabSource(BaseSource):
    """Parser for GitLab project webhooks (push and merge request only)."""

    @property
    def name(self) -> str:
        return "gitlab"

    def parse(
        self, body: str | bytes, headers: Mapping[str, str] | None = None
    ) -> SourceEvent:
        try:
            data = json.loads(body)
        except ValueError as e:
            raise PayloadDecodeError(f"Invalid JSON body: {e}") from e
        if not isinstance(data, dict):
            raise PayloadDecodeError("GitLab payload must be a JSON object")

        kind = data.get("object_kind")
        if not kind and headers:
            kind = _EVENT_HEADERS.get(headers.get("x-gitlab-event", ""))
        if kind is not None and not isinstance(kind, str):
            raise PayloadDecodeError(f"Invalid GitLab object_kind: {kind!r}")

        model = _EVENT_MODELS.get(kind or "")
        if model is None:
            raise PayloadDecodeError(f"Unsupported GitLab event: {kind!r}")

        data["object_kind"] = kind
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise PayloadDecodeError(f"Failed to parse GitLab {kind} payload: {e}") from e
