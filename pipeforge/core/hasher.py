"""Plan fingerprints over canonical JSON.

Two assemblies of the same definition must hash identically, so the JSON is
canonical: sorted keys, compact separators, ASCII only.  Pydantic models are
dumped in JSON mode first, which turns enums into their values.
"""

from __future__ import annotations

import hashlib
import json
from typing import Any

from pydantic import BaseModel

FINGERPRINT_PREFIX = "sha256:"


def canonical_json_bytes(obj: Any) -> bytes:
    """Serialize *obj* (a model or plain JSON data) to canonical UTF-8 bytes."""
    if isinstance(obj, BaseModel):
        obj = obj.model_dump(mode="json")
    return json.dumps(obj, sort_keys=True, separators=(",", ":"), ensure_ascii=True).encode(
        "utf-8"
    )


def fingerprint(obj: Any) -> str:
    """Return ``"sha256:<hex>"`` of the canonical form of *obj*."""
    return FINGERPRINT_PREFIX + hashlib.sha256(canonical_json_bytes(obj)).hexdigest()
