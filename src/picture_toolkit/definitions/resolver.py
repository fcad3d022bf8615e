"""
Module: definitions.resolver

Purpose:
    Turn loosely typed, nested definition data (hand-written Python dicts
    or parsed JSON) into a well-formed Picture. Malformed parts are
    dropped or defaulted; strict mode turns them into errors instead.

    Two conventions are supported:

    - "array" (positional): hand-authored definitions where variants are
      [width, height] lists and the srcset is a mapping of descriptor to
      dimensions. Remaining img/source keys become attributes.

          {
              "img": {"src": [600], "srcset": {"480w": [480], "800w": [800]},
                      "alt": "Hero", "loading": "lazy"},
              "sources": [{"srcset": {"": [600]}, "type": "image/webp"}],
              "options": {"quality": {"image/webp": 80}},
          }

    - "factory" (fully qualified): the serialized form produced by
      Picture.to_dict(); variants are mappings of their own fields and
      attributes live under explicit "attributes" keys.

Key Classes:
    - DefinitionResolver: Resolver with a mode flag and strict switch

Key Functions:
    - resolve_array(data): Positional convention
    - resolve_factory(data, strict=False): Fully qualified convention

Dependencies:
    - core.models: Picture tree
    - core.exceptions: MissingPrimarySourceError

Used By:
    - definitions.definition: ArrayDefinition
    - definitions.serialization: JSON file loading
"""

from __future__ import annotations

import logging
from typing import Any, Literal, Mapping, Optional, Sequence

from picture_toolkit.core.exceptions import MissingPrimarySourceError
from picture_toolkit.core.models import Img, Picture, Source, Sources, Srcset, Variant

logger = logging.getLogger(__name__)

ResolveMode = Literal["array", "factory"]


def _int_or_none(value: Any) -> Optional[int]:
    """Keep ints, map everything else (including bools) to None."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return None


def _is_positional(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def _mapping_or_empty(value: Any) -> dict[str, Any]:
    return dict(value) if isinstance(value, Mapping) else {}


class DefinitionResolver:
    """
    Resolve nested definition data into a Picture.

    Attributes:
        mode: "array" for positional definitions, "factory" for the fully
            qualified form
        strict: In factory mode, re-raise variant construction errors
            instead of defaulting/dropping

    Example:
        >>> picture = DefinitionResolver("array").resolve({"img": {"src": [600]}})
        >>> picture.img.src.width
        600
    """

    def __init__(self, mode: ResolveMode = "array", *, strict: bool = False) -> None:
        if mode not in ("array", "factory"):
            raise ValueError(f"Unknown resolve mode: {mode!r}")
        self.mode = mode
        self.strict = strict

    def resolve(self, data: Mapping[str, Any]) -> Picture:
        """
        Resolve definition data into a Picture.

        Args:
            data: Mapping with optional keys img, sources, attributes, options

        Returns:
            Picture

        Raises:
            MissingPrimarySourceError: array mode without img.src
            TypeError: factory strict mode with a malformed variant
        """
        if not isinstance(data, Mapping):
            raise TypeError(f"Definition data must be a mapping: {type(data).__name__}")

        return Picture(
            img=self._create_img(data.get("img")),
            sources=self._create_sources(data.get("sources")),
            attributes=_mapping_or_empty(data.get("attributes")),
            options=_mapping_or_empty(data.get("options")),
        )

    # ─────────────────────────────────────────────────────────────────────────
    # Img
    # ─────────────────────────────────────────────────────────────────────────

    def _create_img(self, img: Any) -> Img:
        img = img if isinstance(img, Mapping) else {}

        if self.mode == "array":
            if "src" not in img:
                raise MissingPrimarySourceError()
            src = self._positional_variant(img["src"])
            attributes = {
                key: value for key, value in img.items() if key not in ("src", "srcset")
            }
        else:
            src = self._qualified_variant(img.get("src"))
            if src is None:
                src = Variant()
            attributes = _mapping_or_empty(img.get("attributes"))

        return Img(
            src=src,
            srcset=self._create_srcset(img.get("srcset")),
            attributes=attributes,
        )

    # ─────────────────────────────────────────────────────────────────────────
    # Sources
    # ─────────────────────────────────────────────────────────────────────────

    def _create_sources(self, sources: Any) -> Sources:
        if not _is_positional(sources):
            return Sources()

        created = []
        for index, source in enumerate(sources):
            if not isinstance(source, Mapping):
                logger.debug(f"Skipped source {index}: not a mapping")
                continue

            srcset = self._create_srcset(source.get("srcset"))
            if srcset is None or len(srcset) == 0:
                logger.debug(f"Skipped source {index}: empty srcset")
                continue

            if self.mode == "array":
                attributes = {key: value for key, value in source.items() if key != "srcset"}
            else:
                attributes = _mapping_or_empty(source.get("attributes"))

            created.append(Source(srcset=srcset, attributes=attributes))

        return Sources(tuple(created))

    # ─────────────────────────────────────────────────────────────────────────
    # Srcset / Variants
    # ─────────────────────────────────────────────────────────────────────────

    def _create_srcset(self, srcset: Any) -> Optional[Srcset]:
        """Return None when srcset is absent or of the wrong container type."""
        if self.mode == "array":
            if not isinstance(srcset, Mapping):
                return None
            variants = []
            for descriptor, dimensions in srcset.items():
                if isinstance(dimensions, Variant):
                    variants.append(dimensions)
                    continue
                if not isinstance(descriptor, str) or not _is_positional(dimensions):
                    continue
                variants.append(
                    self._positional_variant(dimensions).with_descriptor(descriptor)
                )
            return Srcset(tuple(variants))

        if not _is_positional(srcset):
            return None
        variants = []
        for entry in srcset:
            variant = self._qualified_variant(entry)
            if variant is not None:
                variants.append(variant)
        return Srcset(tuple(variants))

    def _positional_variant(self, value: Any) -> Variant:
        if isinstance(value, Variant):
            return value
        if not _is_positional(value):
            return Variant()
        width = value[0] if len(value) > 0 else None
        height = value[1] if len(value) > 1 else None
        return Variant(width=_int_or_none(width), height=_int_or_none(height))

    def _qualified_variant(self, value: Any) -> Optional[Variant]:
        """Return None for absent or malformed input (unless strict)."""
        if isinstance(value, Variant):
            return value
        if value is None:
            return None
        try:
            return Variant.from_dict(value)
        except (TypeError, ValueError) as e:
            if self.strict:
                raise
            logger.debug(f"Dropped malformed variant {value!r}: {e}")
            return None


def resolve_array(data: Mapping[str, Any]) -> Picture:
    """Resolve a positional ("array") definition."""
    return DefinitionResolver("array").resolve(data)


def resolve_factory(data: Mapping[str, Any], *, strict: bool = False) -> Picture:
    """Resolve a fully qualified ("factory") definition."""
    return DefinitionResolver("factory", strict=strict).resolve(data)
