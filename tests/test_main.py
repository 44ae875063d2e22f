from __future__ import annotations

import json

import pytest
from fastapi.testclient import TestClient

from conftest import RobotStub, alert_payload, make_settings
from hookrelay.main import create_app


def _client(robot: RobotStub, **overrides) -> TestClient:
    return TestClient(create_app(make_settings(**overrides), transport=robot.transport))


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "healthy"}


def test_alert_is_forwarded_to_feishu(client, robot):
    resp = client.post("/webhook", content=json.dumps(alert_payload()))

    assert resp.status_code == 200
    assert resp.content == b""
    assert len(robot.requests) == 1
    body = robot.bodies[0]
    assert body["msg_type"] == "post"
    spans = body["content"]["post"]["zh_cn"]["content"][0]
    assert {"tag": "text", "text": "Status: 🚨 Alerting"} in spans
    assert {"tag": "text", "text": "  - host: db1"} in spans


def test_alert_is_forwarded_to_wechat(robot):
    client = _client(robot, target="weixin")
    client.post("/webhook", content=json.dumps(alert_payload()))
    assert robot.bodies == [{"msgtype": "markdown", "markdown": {"content": "disk at 95%"}}]


def test_any_content_type_is_accepted(client, robot):
    client.post(
        "/webhook",
        content=json.dumps(alert_payload()),
        headers={"Content-Type": "text/plain"},
    )
    assert len(robot.requests) == 1


@pytest.mark.parametrize("method", ["GET", "PUT", "DELETE"])
def test_non_post_never_calls_robot(client, robot, method):
    resp = client.request(method, "/webhook", content=json.dumps(alert_payload()))
    assert resp.status_code == 200
    assert robot.requests == []


def test_empty_body_never_calls_robot(client, robot):
    resp = client.post("/webhook", content=b"")
    assert resp.status_code == 200
    assert robot.requests == []


def test_undecodable_body_is_dropped(client, robot):
    resp = client.post("/webhook", content=b'{"title": "missing status"}')
    assert resp.status_code == 200
    assert resp.content == b""
    assert robot.requests == []


def test_delivery_failure_not_reported_to_caller(robot):
    robot.status_code = 500
    client = _client(robot)
    resp = client.post("/webhook", content=json.dumps(alert_payload()))
    assert resp.status_code == 200
    assert len(robot.requests) == 1


def test_payload_rewrites_applied_before_decoding(robot):
    client = _client(robot, payload_rewrites={"localhost:3000": "grafana.example.com"})
    client.post(
        "/webhook",
        content=json.dumps(alert_payload(message="see http://localhost:3000/d/abc")),
    )
    spans = robot.bodies[0]["content"]["post"]["zh_cn"]["content"][0]
    assert {"tag": "text", "text": "\nsee http://grafana.example.com/d/abc"} in spans


def test_custom_hook_path(robot):
    client = _client(robot, hook_path="alerts")
    assert client.post("/webhook", content=json.dumps(alert_payload())).status_code == 404
    assert client.post("/alerts", content=json.dumps(alert_payload())).status_code == 200
    assert len(robot.requests) == 1


def test_gitlab_source_forwards_formatted_text(robot):
    client = _client(robot, source="gitlab", target="weixin")
    client.post(
        "/webhook",
        content=json.dumps({"object_kind": "push", "project": {"name": "demo"}}),
        headers={"X-Gitlab-Event": "Push Hook"},
    )
    content = robot.bodies[0]["markdown"]["content"]
    assert content.startswith("Project: demo\n")


def test_unexpected_error_is_recovered(client, robot, monkeypatch):
    async def boom(*args, **kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr(client.app.state.relay, "dispatch", boom)
    resp = client.post("/webhook", content=json.dumps(alert_payload()))
    assert resp.status_code == 200


class TestSurfaceErrors:
    @pytest.fixture
    def strict(self, robot) -> TestClient:
        return _client(robot, surface_errors=True)

    def test_method_error(self, strict, robot):
        resp = strict.get("/webhook")
        assert resp.status_code == 405
        assert resp.json()["status"] == "error"
        assert robot.requests == []

    def test_empty_body(self, strict):
        assert strict.post("/webhook", content=b"").status_code == 400

    def test_decode_error(self, strict):
        assert strict.post("/webhook", content=b"nope").status_code == 400

    def test_delivery_error(self, strict, robot):
        robot.reply = {"code": 9499, "msg": "Bad Request"}
        resp = strict.post("/webhook", content=json.dumps(alert_payload()))
        assert resp.status_code == 502

    def test_success(self, strict, robot):
        resp = strict.post("/webhook", content=json.dumps(alert_payload()))
        assert resp.status_code == 200
        assert len(robot.requests) == 1


def test_malformed_gitlab_kind_is_a_decode_error(robot):
    client = _client(robot, source="gitlab", surface_errors=True)
    resp = client.post("/webhook", content=b'{"object_kind": ["push"]}')
    assert resp.status_code == 400
    assert robot.requests == []
