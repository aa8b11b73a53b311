from __future__ import annotations

import argparse
import json
import time
import urllib.error
import urllib.request
from pathlib import Path

EXAMPLE_PATH = Path(__file__).resolve().parents[1] / "examples" / "timeline" / "client_day.json"


def fetch(url: str, body: bytes | None = None) -> tuple[int, bytes]:
    headers = {"Content-Type": "application/json"} if body is not None else {}
    req = urllib.request.Request(url, data=body, headers=headers)
    with urllib.request.urlopen(req, timeout=10) as resp:
        return resp.status, resp.read()


def wait_for(url: str, timeout: int) -> bytes:
    deadline = time.time() + timeout
    last_error: Exception | None = None
    while time.time() < deadline:
        try:
            status, body = fetch(url)
            if status == 200:
                return body
        except (urllib.error.URLError, OSError) as exc:
            last_error = exc
        time.sleep(1)
    raise RuntimeError(f"Timed out waiting for {url}: {last_error}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Smoke test for a running timeline server.")
    parser.add_argument("--server", default="http://localhost:8080")
    parser.add_argument("--timeout", type=int, default=60)
    args = parser.parse_args()

    base = args.server.rstrip("/")
    wait_for(f"{base}/api/health", args.timeout)

    status, body = fetch(f"{base}/api/layout", EXAMPLE_PATH.read_bytes())
    if status != 200:
        raise RuntimeError(f"Layout request failed with {status}")
    plan = json.loads(body.decode("utf-8"))
    entries = plan.get("entries", [])
    if not entries:
        raise RuntimeError("Layout plan has no entries")
    for entry in entries:
        if entry["left"] + entry["width"] > 100 + 1e-9:
            raise RuntimeError(f"Entry {entry['id']} overflows the track")

    print(f"Smoke test passed: {len(entries)} entries.")


if __name__ == "__main__":
    main()
