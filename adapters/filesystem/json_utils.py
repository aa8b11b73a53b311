from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import orjson


def load_json_object(path: Path) -> dict[str, Any]:
    data = orjson.loads(path.read_bytes())
    if not isinstance(data, dict):
        msg = f"{path} must contain a JSON object, got {type(data).__name__}"
        raise ValueError(msg)
    return data


def dump_plan_bytes(payload: Any) -> bytes:
    try:
        return orjson.dumps(payload, option=orjson.OPT_INDENT_2 | orjson.OPT_NON_STR_KEYS)
    except TypeError:
        # Record payloads are caller-owned and may hold values orjson cannot encode.
        return json.dumps(payload, ensure_ascii=False, indent=2, default=str).encode("utf-8")


def replace_file_bytes(target: Path, data: bytes) -> None:
    """Write next to ``target`` and rename, so readers never see a partial plan."""
    target.parent.mkdir(parents=True, exist_ok=True)
    staging = target.parent / f".{target.name}.partial"
    staging.write_bytes(data)
    staging.replace(target)
