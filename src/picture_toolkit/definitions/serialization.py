"""
Serialization Utilities

Provides to/from JSON utilities for pictures in the fully qualified form.

- `serialize_picture` / `deserialize_picture` convert between Picture and
  plain dicts
- `load_picture_json` / `save_picture_json` read and write definition
  files under a file lock
- Validation runs before deserialization so broken files fail with a path
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

from picture_toolkit.core.models import Picture
from picture_toolkit.core.schemas.validator import validate_definition
from picture_toolkit.core.utils.file_locking import locked_read_json, locked_write_json

from .resolver import resolve_factory


def serialize_picture(picture: Picture) -> dict[str, Any]:
    """
    Serialize a Picture to a dictionary.

    The output can be written to JSON and resolved again with
    deserialize_picture().
    """
    return picture.to_dict()


def deserialize_picture(
    data: Mapping[str, Any],
    *,
    validate: bool = True,
    strict: bool = False,
) -> Picture:
    """
    Deserialize a Picture from a dictionary.

    Args:
        data: Dictionary from JSON
        validate: Whether to run validation first
        strict: Use full JSON Schema validation and fail on malformed
            variants instead of dropping them

    Returns:
        Picture instance

    Raises:
        ValidationError: If validate=True and data is invalid
        TypeError: If strict=True and a variant is malformed
    """
    if validate:
        validate_definition(data, strict=strict)
    return resolve_factory(data, strict=strict)


def load_picture_json(path: Path, *, validate: bool = True, strict: bool = False) -> Picture:
    """
    Load a Picture from a definition JSON file.

    Raises:
        FileNotFoundError: If file doesn't exist
        json.JSONDecodeError: If the file is not valid JSON
        ValidationError: If the definition is invalid
    """
    if not path.exists():
        raise FileNotFoundError(f"Definition file not found: {path}")

    return deserialize_picture(locked_read_json(path), validate=validate, strict=strict)


def save_picture_json(picture: Picture, path: Path) -> None:
    """Save a Picture as a definition JSON file."""
    locked_write_json(path, serialize_picture(picture))
