"""
Module: variant

Purpose:
    Provides the Variant dataclass - one candidate output image of a
    picture (requested dimensions, format, quality, actions, descriptor) -
    and EncodedResult, the binary produced for a variant by the image
    processor.

Key Functions:
    - Variant.with_*(): Copy-on-write updates
    - Variant.quality / Variant.actions: Option accessors
    - Variant.to_dict(): Wire projection (width, height, descriptor,
      mimeType, url, path, options)
    - Variant.from_dict(data): Build from the fully qualified wire form
    - EncodedResult.data_url(): Base64 data URL of the encoded image

Dependencies:
    - dataclasses (std)
    - base64 (std)

Used By:
    - core.models.picture
    - definitions.resolver
    - creator.creator
    - markup.factory

Invariants:
    - Rendering source priority is url > encoded > path
    - Instances are never mutated; every with_* returns a new instance
"""

from __future__ import annotations

import base64
from dataclasses import dataclass, field, replace
from typing import Any, Mapping, Optional


# Wire names of the Variant fields, in serialization order
VARIANT_FIELDS: tuple[str, ...] = (
    "width",
    "height",
    "descriptor",
    "mimeType",
    "url",
    "path",
    "options",
)


@dataclass(frozen=True, slots=True)
class EncodedResult:
    """
    Encoded image produced by the image processor.

    Attributes:
        data: Encoded bytes
        mime_type: Mime type of the encoded bytes, e.g. "image/webp"
        extension: File extension without dot, e.g. "webp"
        width: Resulting pixel width
        height: Resulting pixel height
        size_bytes: Length of data in bytes
        actions: Descriptors of the actions applied, in order

    Example:
        >>> encoded.data_url()
        'data:image/jpeg;base64,/9j/4AAQ...'
    """

    data: bytes
    mime_type: str
    extension: str
    width: int
    height: int
    size_bytes: int
    actions: tuple[Mapping[str, Any], ...] = ()

    def __post_init__(self) -> None:
        """Validate dimensions on construction."""
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Encoded size must be non-negative: {self.width}x{self.height}")
        if self.size_bytes < 0:
            raise ValueError(f"size_bytes must be non-negative: {self.size_bytes}")

    def data_url(self) -> str:
        """Return the encoded image as a base64 data URL."""
        encoded = base64.b64encode(self.data).decode("ascii")
        return f"data:{self.mime_type};base64,{encoded}"

    def to_dict(self) -> dict[str, Any]:
        """Serialize without raw bytes (the data URL stands in for them)."""
        return {
            "mimeType": self.mime_type,
            "extension": self.extension,
            "width": self.width,
            "height": self.height,
            "size": self.size_bytes,
            "actions": [dict(action) for action in self.actions],
            "dataUrl": self.data_url(),
        }

    def __repr__(self) -> str:
        return (
            f"EncodedResult({self.mime_type}, {self.width}x{self.height}, "
            f"{self.size_bytes} bytes)"
        )


@dataclass(frozen=True, slots=True)
class Variant:
    """
    One candidate image of a picture (immutable).

    A variant either points at an existing image (url or path) or describes
    an image still to be generated (width/height/mime_type/options). After
    generation the encoded field holds the result.

    Attributes:
        width: Requested width in pixels (None = natural width)
        height: Requested height in pixels (None = natural height)
        descriptor: srcset descriptor such as "2x" or "480w"
        mime_type: Target mime type (None = decide at generation time)
        url: Absolute or relative URL of an existing image
        path: Filesystem path of an existing image
        encoded: Encoded result once generated
        options: Variant options; recognized keys are "quality" (int) and
            "actions" (ordered mapping of action name to parameters)

    Example:
        >>> v = Variant(width=600)
        >>> v.with_mime_type("image/webp").mime_type
        'image/webp'
        >>> v.mime_type is None
        True
    """

    width: Optional[int] = None
    height: Optional[int] = None
    descriptor: Optional[str] = None
    mime_type: Optional[str] = None
    url: Optional[str] = None
    path: Optional[str] = None
    encoded: Optional[EncodedResult] = None
    options: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate field types on construction."""
        for name in ("width", "height"):
            value = getattr(self, name)
            if value is not None and (isinstance(value, bool) or not isinstance(value, int)):
                raise TypeError(f"{name} must be an int or None: {value!r}")
        for name in ("descriptor", "mime_type", "url", "path"):
            value = getattr(self, name)
            if value is not None and not isinstance(value, str):
                raise TypeError(f"{name} must be a str or None: {value!r}")
        if self.encoded is not None and not isinstance(self.encoded, EncodedResult):
            raise TypeError(f"encoded must be an EncodedResult or None: {self.encoded!r}")
        if not isinstance(self.options, Mapping):
            raise TypeError(f"options must be a mapping: {self.options!r}")
        object.__setattr__(self, "options", dict(self.options))

    # ─────────────────────────────────────────────────────────────────────────
    # Option Accessors
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def quality(self) -> Optional[int]:
        """Encode quality from options, if any."""
        return self.options.get("quality")

    @property
    def actions(self) -> Optional[Mapping[str, Any]]:
        """Ordered action mapping from options, if any."""
        return self.options.get("actions")

    # ─────────────────────────────────────────────────────────────────────────
    # Copy-on-write Updates
    # ─────────────────────────────────────────────────────────────────────────

    def with_width(self, width: Optional[int]) -> Variant:
        return replace(self, width=width)

    def with_height(self, height: Optional[int]) -> Variant:
        return replace(self, height=height)

    def with_descriptor(self, descriptor: Optional[str]) -> Variant:
        return replace(self, descriptor=descriptor)

    def with_mime_type(self, mime_type: Optional[str]) -> Variant:
        return replace(self, mime_type=mime_type)

    def with_url(self, url: Optional[str]) -> Variant:
        return replace(self, url=url)

    def with_path(self, path: Optional[str]) -> Variant:
        return replace(self, path=path)

    def with_encoded(self, encoded: Optional[EncodedResult]) -> Variant:
        return replace(self, encoded=encoded)

    def with_options(self, options: Mapping[str, Any]) -> Variant:
        return replace(self, options=options)

    def with_option(self, key: str, value: Any) -> Variant:
        """Return a copy with a single option set, keeping the others."""
        return replace(self, options={**self.options, key: value})

    # ─────────────────────────────────────────────────────────────────────────
    # Serialization
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> dict[str, Any]:
        """
        Serialize to the wire projection.

        When the variant is encoded, url carries the data URL and
        mimeType/width/height come from the encoded result.

        Returns:
            Ordered dict with keys width, height, descriptor, mimeType,
            url, path, options
        """
        data = {
            "width": self.width,
            "height": self.height,
            "descriptor": self.descriptor,
            "mimeType": self.mime_type,
            "url": self.url,
            "path": self.path,
            "options": dict(self.options),
        }
        if self.encoded is not None:
            data["url"] = self.encoded.data_url()
            data["mimeType"] = self.encoded.mime_type
            data["width"] = self.encoded.width
            data["height"] = self.encoded.height
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Variant:
        """
        Deserialize from the fully qualified wire form.

        Args:
            data: Mapping using the keys of VARIANT_FIELDS (all optional)

        Returns:
            Variant instance

        Raises:
            TypeError: If data is not a mapping, has unknown keys or
                carries values of the wrong type
        """
        if not isinstance(data, Mapping):
            raise TypeError(f"Variant data must be a mapping: {data!r}")
        unknown = [key for key in data if key not in VARIANT_FIELDS]
        if unknown:
            raise TypeError(f"Unexpected variant fields: {unknown}")
        options = data.get("options")
        return cls(
            width=data.get("width"),
            height=data.get("height"),
            descriptor=data.get("descriptor"),
            mime_type=data.get("mimeType"),
            url=data.get("url"),
            path=data.get("path"),
            options={} if options is None else options,
        )

    def __repr__(self) -> str:
        parts = [
            f"{name}={getattr(self, name)!r}"
            for name in ("width", "height", "descriptor", "mime_type", "url", "path")
            if getattr(self, name) is not None
        ]
        if self.encoded is not None:
            parts.append(repr(self.encoded))
        return f"Variant({', '.join(parts)})"
