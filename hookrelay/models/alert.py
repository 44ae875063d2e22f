"""Grafana alerting webhook payload models."""

from datetime import datetime, timezone

from pydantic import Field

from hookrelay.models.base import WireModel

# Grafana marks an unset timestamp with Go's zero time
ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)


def is_zero_time(value: datetime) -> bool:
    return value.replace(tzinfo=None) == datetime(1, 1, 1)


class AlertItem(WireModel):
    """A single alert instance inside a notification."""

    status: str = ""
    labels: dict[str, str] = Field(default_factory=dict)
    annotations: dict[str, str] = Field(default_factory=dict)
    starts_at: datetime = Field(default=ZERO_TIME, alias="startsAt")
    ends_at: datetime = Field(default=ZERO_TIME, alias="endsAt")
    generator_url: str = Field(default="", alias="generatorURL")
    fingerprint: str = ""

    @property
    def is_firing(self) -> bool:
        return self.status == "firing"

    @property
    def has_ended(self) -> bool:
        return not is_zero_time(self.ends_at)


class AlertPayload(WireModel):
    """Grafana webhook notification. Only ``status`` is mandatory."""

    receiver: str = ""
    status: str
    alerts: list[AlertItem] = Field(default_factory=list)
    group_labels: dict[str, str] = Field(default_factory=dict, alias="groupLabels")
    common_labels: dict[str, str] = Field(default_factory=dict, alias="commonLabels")
    common_annotations: dict[str, str] = Field(
        default_factory=dict, alias="commonAnnotations"
    )
    external_url: str = Field(default="", alias="externalURL")
    version: str = ""
    group_key: str = Field(default="", alias="groupKey")
    truncated_alerts: int = Field(default=0, alias="truncatedAlerts")
    org_id: int = Field(default=0, alias="orgId")
    title: str = ""
    state: str = ""
    message: str = ""

    @property
    def is_firing(self) -> bool:
        return self.status == "firing"
