"""Post a sample OneBot group message event to a running relay.

Usage:
    1. Start the server:   python -m onebot_relay.main
    2. Send an event:      python scripts/send_sample_event.py [--base-url URL] [--message TEXT]
"""

from __future__ import annotations

import argparse
import json
import time

import httpx

DEFAULT_BASE_URL = "http://localhost:8000"


def build_event(message: str, group_id: int, user_id: int) -> dict:
    raw = f"[CQ:at,qq=10000]{message}"
    return {
        "post_type": "message",
        "message_type": "group",
        "sub_type": "normal",
        "time": int(time.time()),
        "self_id": 10000,
        "message_id": 1,
        "raw_message": raw,
        "message": raw,
        "group_id": group_id,
        "user_id": user_id,
        "font": 0,
        "sender": {"user_id": user_id, "nickname": "sample", "role": "member"},
        "anonymous": None,
    }


def main() -> None:
    parser = argparse.ArgumentParser(description="Send a sample group message event")
    parser.add_argument("--base-url", default=DEFAULT_BASE_URL)
    parser.add_argument("--message", default="你好")
    parser.add_argument("--group-id", type=int, default=100)
    parser.add_argument("--user-id", type=int, default=12345)
    parser.add_argument("--timeout", type=float, default=300.0)
    args = parser.parse_args()

    event = build_event(args.message, args.group_id, args.user_id)
    with httpx.Client(base_url=args.base_url, timeout=httpx.Timeout(args.timeout)) as client:
        response = client.post("/onebot/event", content=json.dumps(event, ensure_ascii=False))
    print(f"HTTP {response.status_code}")
    print(json.dumps(response.json(), indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
