"""
Schema Validation Utilities

Validates picture definition JSON (the fully qualified form written by
Picture.to_dict()) before it is resolved.

Two levels:
- Basic structural checks (always): top-level containers have the right
  types, so obviously broken files fail with a clear path.
- Full JSON Schema validation (strict=True) against picture.schema.json
  using jsonschema.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping

import jsonschema

from ..exceptions import PictureError


# Schemas are loaded lazily and cached
_SCHEMAS: dict[str, dict] = {}


def _load_schema(name: str) -> dict:
    """Load a schema from the schemas directory."""
    if name not in _SCHEMAS:
        schema_path = Path(__file__).parent / f"{name}.schema.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")
        with open(schema_path, "r", encoding="utf-8") as f:
            _SCHEMAS[name] = json.load(f)
    return _SCHEMAS[name]


class ValidationError(PictureError):
    """Raised when definition data fails validation."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []


def validate_definition(data: Any, *, strict: bool = False) -> None:
    """
    Validate a fully qualified picture definition.

    Args:
        data: Parsed JSON definition
        strict: If True, also validate against picture.schema.json

    Raises:
        ValidationError: If data is invalid
    """
    if not isinstance(data, Mapping):
        raise ValidationError(
            f"Definition must be an object, got {type(data).__name__}",
            path="",
        )

    img = data.get("img", {})
    if not isinstance(img, Mapping):
        raise ValidationError("img must be an object", path="img")
    if "srcset" in img and img["srcset"] is not None and not isinstance(img["srcset"], list):
        raise ValidationError("img.srcset must be a list", path="img.srcset")

    sources = data.get("sources", [])
    if not isinstance(sources, list):
        raise ValidationError("sources must be a list", path="sources")
    for i, source in enumerate(sources):
        if not isinstance(source, Mapping):
            raise ValidationError(
                f"Source {i} must be an object",
                path=f"sources[{i}]",
            )

    for key in ("attributes", "options"):
        if key in data and not isinstance(data[key], Mapping):
            raise ValidationError(f"{key} must be an object", path=key)

    if strict:
        schema = _load_schema("picture")
        try:
            jsonschema.validate(data, schema)
        except jsonschema.ValidationError as e:
            raise ValidationError(
                f"Schema validation failed: {e.message}",
                path=".".join(str(p) for p in e.absolute_path),
                errors=[e.message],
            ) from e
