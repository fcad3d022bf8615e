"""
Module: creator.config

Purpose:
    Configuration dataclass for the picture creator. Immutable
    configuration with validation on construction.

Key Classes:
    - CreatorConfig: Supported formats, action denylist, upsize policy,
      size checks and worker count

Dependencies:
    - dataclasses (std)

Used By:
    - creator.creator: PictureCreator
    - cli: Built from flags and --config JSON files
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping, Optional

from .mime import IMAGE_FORMATS

DEFAULT_SUPPORTED_MIME_TYPES: tuple[str, ...] = (
    "image/png",
    "image/jpeg",
    "image/gif",
    "image/webp",
)


@dataclass(frozen=True)
class CreatorConfig:
    """
    Configuration for creating pictures (immutable).

    Attributes:
        supported_mime_types: Mime types the creator reads and writes
        disallowed_actions: Action names rejected from definitions, on top
            of "save" and "encode" which are always rejected
        upsize: Maximum scale factor when enlarging (None = unlimited)
        skip_smaller_sized_src: Drop srcset variants the source is too
            small to produce at the requested size
        verify_sizes: Fail when any variant is larger than the source
        max_workers: Encoder threads per call (1 = sequential)

    Example:
        >>> config = CreatorConfig(skip_smaller_sized_src=True)
        >>> config.effective_upsize
        1.0
    """

    supported_mime_types: tuple[str, ...] = DEFAULT_SUPPORTED_MIME_TYPES
    disallowed_actions: tuple[str, ...] = ()
    upsize: Optional[float] = None
    skip_smaller_sized_src: bool = False
    verify_sizes: bool = False
    max_workers: int = 1

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        for name in ("supported_mime_types", "disallowed_actions"):
            value = getattr(self, name)
            if not isinstance(value, (list, tuple)) or not all(isinstance(v, str) for v in value):
                raise ValueError(f"{name} must be a list of strings: {value!r}")
            object.__setattr__(self, name, tuple(value))
        if not self.supported_mime_types:
            raise ValueError("supported_mime_types must not be empty")
        unknown = [m for m in self.supported_mime_types if m not in IMAGE_FORMATS]
        if unknown:
            raise ValueError(f"Unknown image mime types: {unknown}")
        if self.upsize is not None:
            if isinstance(self.upsize, bool) or not isinstance(self.upsize, (int, float)):
                raise ValueError(f"upsize must be a number: {self.upsize!r}")
            if self.upsize <= 0:
                raise ValueError(f"upsize must be positive: {self.upsize}")
        if isinstance(self.max_workers, bool) or not isinstance(self.max_workers, int):
            raise ValueError(f"max_workers must be an integer: {self.max_workers!r}")
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be at least 1: {self.max_workers}")

    @property
    def effective_upsize(self) -> Optional[float]:
        """Upsize passed to sizing actions; skipping smaller sources forbids enlarging."""
        if self.skip_smaller_sized_src and (self.upsize is None or self.upsize < 1):
            return 1.0
        return self.upsize

    def is_supported(self, mime_type: object) -> bool:
        return isinstance(mime_type, str) and mime_type in self.supported_mime_types

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CreatorConfig:
        """
        Build from a JSON mapping using the field names as keys.

        Raises:
            ValueError: On unknown keys or invalid values
        """
        names = {f.name for f in fields(cls)}
        unknown = sorted(key for key in data if key not in names)
        if unknown:
            raise ValueError(f"Unknown creator config keys: {unknown}")
        return cls(**dict(data))
