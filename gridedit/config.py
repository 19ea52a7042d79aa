"""
Editor configuration.

Settings live in an optional JSON file validated against a schema.
A missing or invalid file falls back to the defaults; the editor
never refuses to start because of its configuration.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any

import jsonschema

logger = logging.getLogger(__name__)


CONFIG_SCHEMA: dict[str, Any] = {
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "window_title": {"type": "string"},
        "window_width": {"type": "integer", "minimum": 320},
        "window_height": {"type": "integer", "minimum": 240},
        "sidebar_width": {"type": "integer", "minimum": 0},
        "grid_size": {"type": "number", "exclusiveMinimum": 0},
        "zoom_step": {"type": "number", "exclusiveMinimum": 1},
        "initial_zoom": {"type": "number", "exclusiveMinimum": 0},
        "handle_size": {"type": "number", "exclusiveMinimum": 0},
        "size_step": {"type": "number", "exclusiveMinimum": 0},
        "min_object_size": {"type": "number", "exclusiveMinimum": 0},
        "avatar_x": {"type": "number"},
        "avatar_y": {"type": "number"},
        "avatar_size": {"type": "number", "exclusiveMinimum": 0},
        "avatar_step": {"type": "number", "exclusiveMinimum": 0},
        "thumbnail_size": {"type": "integer", "minimum": 1},
        "asset_dirs": {"type": "array", "items": {"type": "string"}},
        "log_level": {"enum": ["DEBUG", "INFO", "WARNING", "ERROR"]},
    },
}


@dataclass
class EditorConfig:
    """Editor configuration."""
    window_title: str = "Grid Scene Editor"
    window_width: int = 1280
    window_height: int = 720
    sidebar_width: int = 260

    # Scene
    grid_size: float = 50
    zoom_step: float = 1.25
    initial_zoom: float = 1.0

    # Object editing (world units, except handle_size which is screen pixels)
    handle_size: float = 8
    size_step: float = 10
    min_object_size: float = 10

    # Play mode
    avatar_x: float = 100
    avatar_y: float = 100
    avatar_size: float = 40
    avatar_step: float = 10

    # Assets
    thumbnail_size: int = 128
    asset_dirs: list[str] = field(default_factory=lambda: ["assets"])

    log_level: str = "INFO"

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> EditorConfig:
        """Build a config from already validated data; unknown keys are ignored."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})


def load_config(path: str | Path | None) -> EditorConfig:
    """
    Load configuration from a JSON file.

    Args:
        path: Config file path, or None for defaults

    Returns:
        The loaded config, or defaults if the file is missing or invalid
    """
    if path is None:
        return EditorConfig()

    path = Path(path)
    if not path.exists():
        logger.warning(f"Config file not found, using defaults: {path}")
        return EditorConfig()

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        jsonschema.validate(instance=data, schema=CONFIG_SCHEMA)
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in config {path}: {e}")
        return EditorConfig()
    except jsonschema.ValidationError as e:
        logger.error(f"Validation error in config {path}: {e.message}")
        return EditorConfig()
    except OSError as e:
        logger.error(f"Failed to read config {path}: {e}")
        return EditorConfig()

    logger.info(f"Loaded config: {path}")
    return EditorConfig.from_dict(data)
