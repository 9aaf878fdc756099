#!/usr/bin/env python3
"""End-to-end smoke for the SearchBrief API.

Runs search → summarize against a running backend and fails fast on regressions.
Set SEARCHBRIEF_URL to point at a non-local deployment.
"""

from __future__ import annotations

import json
import os
import sys
from dataclasses import dataclass, field

import httpx

BASE_URL = os.environ.get("SEARCHBRIEF_URL", "http://127.0.0.1:8000")
TIMEOUT = 30.0
QUERY = "東京 天気"


@dataclass
class SmokeState:
    results: list[dict] = field(default_factory=list)
    summary: str = ""


def expect(condition: bool, message: str) -> None:
    if not condition:
        raise AssertionError(message)


def get(client: httpx.Client, path: str, expected: int = 200, **kwargs):
    resp = client.get(f"{BASE_URL}{path}", **kwargs)
    expect(resp.status_code == expected, f"GET {path} -> {resp.status_code} != {expected}; body={resp.text[:500]}")
    return resp


def post(client: httpx.Client, path: str, expected: int = 200, **kwargs):
    resp = client.post(f"{BASE_URL}{path}", **kwargs)
    expect(resp.status_code == expected, f"POST {path} -> {resp.status_code} != {expected}; body={resp.text[:500]}")
    return resp


def main() -> int:
    state = SmokeState()
    with httpx.Client(timeout=TIMEOUT) as client:
        # 1) Health + key status
        _ = get(client, "/api/health/live").json()
        key_status = get(client, "/api/settings/api-key-status").json()
        expect(key_status.get("status") == "valid", f"search key not usable: {key_status.get('message')}")

        # 2) Search
        search = post(client, "/api/search", json={"query": QUERY}).json()
        state.results = search.get("results", [])
        expect(len(state.results) > 0, "search returned zero results")

        # 3) Summarize
        summary = post(client, "/api/summarize", json={"query": QUERY, "results": state.results}).json()
        state.summary = summary.get("summary", "")
        expect(state.summary.startswith(f"「{QUERY}」"), "summary header missing")
        expect(len(state.summary) <= 500, "summary exceeds 500 chars")
        expect(summary.get("sourceCount") == len(state.results), "sourceCount mismatch")

        # 4) Negative test sanity
        _ = post(client, "/api/summarize", expected=400, json={"query": QUERY, "results": []})
        _ = post(client, "/api/search", expected=400, json={"query": ""})

    print(json.dumps({"ok": True, "message": "SearchBrief smoke passed", "summary_length": len(state.summary)}))
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except Exception as exc:  # noqa: BLE001
        print(json.dumps({"ok": False, "error": str(exc)}))
        sys.exit(1)
