"""
Module: picture

Purpose:
    Provides the resolved picture tree: Srcset, Source, Sources, Img,
    Picture and CreatedPicture. A Picture is the canonical, immutable
    form of a definition; a CreatedPicture is the same tree after the
    variants have been encoded.

Key Functions:
    - Picture.srces(): Iterate img src, img srcset, then source srcsets
    - Picture.to_dict(): Wire projection
    - Picture.render(): Render <picture> markup
    - Srcset.of(*variants): Build a srcset from variants

Dependencies:
    - dataclasses (std)
    - .variant.Variant

Used By:
    - definitions.resolver
    - creator.creator
    - markup.factory
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any, Iterator, Mapping, Optional

from .variant import Variant

if TYPE_CHECKING:
    from picture_toolkit.markup.picture_tag import PictureTag


@dataclass(frozen=True, slots=True)
class Srcset:
    """
    Ordered, immutable sequence of variants.

    Rendering order is insertion order.

    Example:
        >>> srcset = Srcset.of(Variant(width=320, descriptor="1x"))
        >>> len(srcset)
        1
    """

    variants: tuple[Variant, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "variants", tuple(self.variants))

    @classmethod
    def of(cls, *variants: Variant) -> Srcset:
        return cls(variants)

    def all(self) -> list[Variant]:
        return list(self.variants)

    def __iter__(self) -> Iterator[Variant]:
        return iter(self.variants)

    def __len__(self) -> int:
        return len(self.variants)

    def to_list(self) -> list[dict[str, Any]]:
        return [variant.to_dict() for variant in self.variants]


@dataclass(frozen=True, slots=True)
class Source:
    """
    A <source> alternative: a srcset plus pass-through attributes
    such as media and type.
    """

    srcset: Srcset
    attributes: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "attributes", dict(self.attributes))

    def with_srcset(self, srcset: Srcset) -> Source:
        return replace(self, srcset=srcset)

    def with_attributes(self, attributes: Mapping[str, Any]) -> Source:
        return replace(self, attributes=attributes)

    def to_dict(self) -> dict[str, Any]:
        return {
            "srcset": self.srcset.to_list(),
            "attributes": dict(self.attributes),
        }


@dataclass(frozen=True, slots=True)
class Sources:
    """Ordered, immutable sequence of Source entries."""

    sources: tuple[Source, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "sources", tuple(self.sources))

    @classmethod
    def of(cls, *sources: Source) -> Sources:
        return cls(sources)

    def all(self) -> list[Source]:
        return list(self.sources)

    def __iter__(self) -> Iterator[Source]:
        return iter(self.sources)

    def __len__(self) -> int:
        return len(self.sources)

    def srces(self) -> Iterator[Variant]:
        """Yield every variant of every source, in order."""
        for source in self.sources:
            yield from source.srcset

    def to_list(self) -> list[dict[str, Any]]:
        return [source.to_dict() for source in self.sources]


@dataclass(frozen=True, slots=True)
class Img:
    """
    The primary <img> of a picture.

    Attributes:
        src: Primary variant (required)
        srcset: Optional responsive alternates
        attributes: Pass-through attributes (never src/srcset, which
            are computed)
    """

    src: Variant
    srcset: Optional[Srcset] = None
    attributes: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "attributes", dict(self.attributes))

    def with_src(self, src: Variant) -> Img:
        return replace(self, src=src)

    def with_srcset(self, srcset: Optional[Srcset]) -> Img:
        return replace(self, srcset=srcset)

    def with_attributes(self, attributes: Mapping[str, Any]) -> Img:
        return replace(self, attributes=attributes)

    def to_dict(self) -> dict[str, Any]:
        return {
            "src": self.src.to_dict(),
            "srcset": None if self.srcset is None else self.srcset.to_list(),
            "attributes": dict(self.attributes),
        }


@dataclass(frozen=True, slots=True)
class Picture:
    """
    Resolved picture definition (immutable).

    Attributes:
        img: The primary image
        sources: Alternate <source> groups
        attributes: Attributes of the <picture> tag
        options: Picture-wide options; recognized keys are
            "quality" (mime type -> int), "convert" (source mime type ->
            target mime type) and "actions" (ordered action mapping)

    Example:
        >>> picture = Picture(img=Img(src=Variant(path="image.jpg")))
        >>> str(picture)
        '<picture><img src="image.jpg"></picture>'
    """

    img: Img
    sources: Sources = field(default_factory=Sources)
    attributes: Mapping[str, Any] = field(default_factory=dict)
    options: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "attributes", dict(self.attributes))
        object.__setattr__(self, "options", dict(self.options))

    def with_img(self, img: Img) -> Picture:
        return replace(self, img=img)

    def with_sources(self, sources: Sources) -> Picture:
        return replace(self, sources=sources)

    def with_attributes(self, attributes: Mapping[str, Any]) -> Picture:
        return replace(self, attributes=attributes)

    def with_options(self, options: Mapping[str, Any]) -> Picture:
        return replace(self, options=options)

    def srces(self) -> Iterator[Variant]:
        """
        Iterate every variant of the picture.

        Order is fixed: img src, img srcset entries, then each source's
        srcset entries.
        """
        yield self.img.src
        if self.img.srcset is not None:
            yield from self.img.srcset
        yield from self.sources.srces()

    def to_dict(self) -> dict[str, Any]:
        return {
            "img": self.img.to_dict(),
            "sources": self.sources.to_list(),
            "attributes": dict(self.attributes),
            "options": dict(self.options),
        }

    def to_tag(self) -> PictureTag:
        from picture_toolkit.markup.factory import PictureTagFactory

        return PictureTagFactory().create_from_picture(self)

    def render(self) -> str:
        return self.to_tag().render()

    def __str__(self) -> str:
        return self.render()


@dataclass(frozen=True, slots=True)
class CreatedPicture(Picture):
    """
    Picture whose retained variants have been encoded.

    Produced by PictureCreator only.
    """
