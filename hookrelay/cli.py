"""Command line entry point: ``hookrelay <port> <weixin|feishu> <robotUrl>``."""

import argparse
import sys

from pydantic import ValidationError

from hookrelay.config import VERSION, Settings
from hookrelay.main import run

USAGE = """webhook:
    hook grafana alerts (or gitlab push/merge events), and forward them to a [weixin/feishu] robot
    config webhook url: http://[webhook deploy ip:port]/webhook
    config addr: grafana -> Alerting -> Contact points -> Webhook
                 gitlab -> project -> Settings -> Webhooks

run cmd:
    hookrelay [port] ["weixin"/"feishu"] [robotUrl]
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hookrelay",
        description="Relay webhooks to a WeChat Work or Feishu robot.",
    )
    parser.add_argument("port", type=int, help="Port to listen on")
    parser.add_argument("target", choices=["weixin", "feishu"], help="Robot platform")
    parser.add_argument("robot_url", help="Robot webhook URL")
    parser.add_argument("--host", default=None, help="Address to bind (default 0.0.0.0)")
    parser.add_argument("--path", dest="hook_path", default=None, help="Webhook path")
    parser.add_argument(
        "--source",
        choices=["grafana", "gitlab"],
        default=None,
        help="Inbound payload type (default grafana)",
    )
    return parser


def parse_settings(argv: list[str]) -> Settings:
    """Build settings from arguments on top of the environment.

    Exits through argparse on malformed arguments.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.robot_url:
        parser.error("please add port and webhook.")

    overrides = {k: v for k, v in vars(args).items() if v is not None}
    try:
        return Settings(**overrides)
    except ValidationError as e:
        parser.error(str(e))


def main(argv: list[str] | None = None) -> int:
    argv = sys.argv[1:] if argv is None else argv

    if argv in (["--version"], ["version"]):
        print(VERSION)
        return 0

    if not argv or argv in (["--help"], ["help"], ["-h"]):
        print(USAGE)
        return 0

    settings = parse_settings(argv)

    run(settings)
    return 0


if __name__ == "__main__":
    sys.exit(main())
