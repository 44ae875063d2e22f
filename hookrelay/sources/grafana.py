"""Grafana alerting webhook parser."""

from typing import Mapping

from pydantic import ValidationError

from hookrelay.errors import PayloadDecodeError
from hookrelay.models.alert import AlertPayload
from hookrelay.sources.base import BaseSource


class GrafanaSource(BaseSource):
    """Parser for Grafana Unified Alerting webhooks."""

    @property
    def name(self) -> str:
        return "grafana"

    def parse(
        self, body: str | bytes, headers: Mapping[str, str] | None = None
    ) -> AlertPayload:
        try:
            return AlertPayload.model_validate_json(body)
        except ValidationError as e:
            raise PayloadDecodeError(f"Failed to parse Grafana alert payload: {e}") from e
