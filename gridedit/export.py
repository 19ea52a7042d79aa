"""
Scene snapshot export.

The snapshot is the ordered object list only; avatar, camera and
selection are not part of it. It is a one-way export, there is no
loader.

Format:
    [
      {"assetKey": "3f7a...", "x": 100.0, "y": 50.0, "w": 50.0, "h": 50.0},
      ...
    ]
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable

import jsonschema

from gridedit.model import SceneObject

logger = logging.getLogger(__name__)


SNAPSHOT_SCHEMA: dict[str, Any] = {
    "type": "array",
    "items": {
        "type": "object",
        "required": ["assetKey", "x", "y", "w", "h"],
        "additionalProperties": False,
        "properties": {
            "assetKey": {"type": "string", "minLength": 1},
            "x": {"type": "number"},
            "y": {"type": "number"},
            "w": {"type": "number"},
            "h": {"type": "number"},
        },
    },
}


def snapshot_records(objects: Iterable[SceneObject]) -> list[dict[str, Any]]:
    """Object list -> plain records, in draw order."""
    return [
        {"assetKey": obj.asset_key, "x": obj.x, "y": obj.y, "w": obj.w, "h": obj.h}
        for obj in objects
    ]


def export_snapshot(objects: Iterable[SceneObject]) -> str:
    """Serialize the object list to pretty-printed JSON text."""
    return json.dumps(snapshot_records(objects), indent=2)


def validate_snapshot(data: Any) -> None:
    """
    Check parsed snapshot data against the schema.

    Raises:
        jsonschema.ValidationError: If the data is not a valid snapshot
    """
    jsonschema.validate(instance=data, schema=SNAPSHOT_SCHEMA)


def write_snapshot(path: str | Path, text: str) -> bool:
    """
    Validate snapshot text and write it to a file.

    Returns:
        True if written; False for invalid text or an I/O error
    """
    path = Path(path)
    try:
        validate_snapshot(json.loads(text))
    except (json.JSONDecodeError, jsonschema.ValidationError) as e:
        logger.error(f"Not saving invalid snapshot to {path}: {e}")
        return False

    try:
        with open(path, 'w', encoding='utf-8') as f:
            f.write(text)
    except OSError as e:
        logger.error(f"Failed to write snapshot {path}: {e}")
        return False

    logger.info(f"Snapshot saved: {path}")
    return True
