"""Shared fixtures for hookrelay tests."""

from __future__ import annotations

import json
from typing import Any

import httpx
import pytest
from fastapi.testclient import TestClient

from hookrelay.config import Settings
from hookrelay.main import create_app

ROBOT_URL = "https://robot.example.com/hook/abc"


class RobotStub:
    """Stand-in robot endpoint that records every request it receives."""

    def __init__(self, reply: Any = None, status_code: int = 200):
        self.requests: list[httpx.Request] = []
        self.reply = {"code": 0, "msg": "success"} if reply is None else reply
        self.status_code = status_code
        self.error: Exception | None = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if isinstance(self.reply, (bytes, str)):
            return httpx.Response(self.status_code, content=self.reply)
        return httpx.Response(self.status_code, json=self.reply)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def bodies(self) -> list[dict[str, Any]]:
        return [json.loads(r.content) for r in self.requests]


def make_settings(**overrides: Any) -> Settings:
    values: dict[str, Any] = {"robot_url": ROBOT_URL, "target": "feishu"}
    values.update(overrides)
    return Settings(**values)


def alert_item(**overrides: Any) -> dict[str, Any]:
    item: dict[str, Any] = {
        "status": "firing",
        "labels": {"alertname": "DiskFull", "host": "db1"},
        "annotations": {"summary": "disk almost full"},
        "startsAt": "2024-01-01T00:00:00Z",
        "endsAt": "0001-01-01T00:00:00Z",
        "generatorURL": "http://localhost:3000/alerting/grafana/abc/view",
        "fingerprint": "57c6d9296de2ad39",
    }
    item.update(overrides)
    return item


def alert_payload(**overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "receiver": "ops",
        "status": "firing",
        "alerts": [alert_item()],
        "groupLabels": {"alertname": "DiskFull"},
        "commonLabels": {"alertname": "DiskFull"},
        "commonAnnotations": {},
        "externalURL": "http://localhost:3000/",
        "version": "1",
        "groupKey": "{}:{alertname=\"DiskFull\"}",
        "truncatedAlerts": 0,
        "orgId": 1,
        "title": "[FIRING:1] DiskFull",
        "state": "alerting",
        "message": "disk at 95%",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def robot() -> RobotStub:
    return RobotStub()


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def client(settings: Settings, robot: RobotStub) -> TestClient:
    return TestClient(create_app(settings, transport=robot.transport))
