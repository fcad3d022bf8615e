"""
Module: markup.picture_tag

Purpose:
    Renderable <picture> element: the picture tag itself, its <source>
    children and the <img> fallback.

Key Classes:
    - PictureTag: Immutable picture markup with attr()/img_attr() helpers
    - NullPictureTag: Stand-in for pictures without an img src; renders ""

Used By:
    - markup.factory: PictureTagFactory
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any

from .tag import Tag


@dataclass(frozen=True)
class PictureTag:
    """
    Picture markup (immutable).

    The outer tag is always named "picture" and the img tag "img"; child
    tags not named "source" are not rendered.

    Example:
        >>> tag = PictureTag(Tag("picture"), Tag("img", {"src": "image.jpg"}))
        >>> tag.attr("class", "foo").render()
        '<picture class="foo"><img src="image.jpg"></picture>'
    """

    tag: Tag = field(default_factory=lambda: Tag("picture"))
    img: Tag = field(default_factory=lambda: Tag("img"))
    sources: tuple[Tag, ...] = ()

    def __post_init__(self) -> None:
        if self.tag.name != "picture":
            object.__setattr__(self, "tag", self.tag.with_name("picture"))
        if self.img.name != "img":
            object.__setattr__(self, "img", self.img.with_name("img"))
        object.__setattr__(self, "sources", tuple(self.sources))

    def with_tag(self, tag: Tag) -> PictureTag:
        return replace(self, tag=tag)

    def with_img(self, img: Tag) -> PictureTag:
        return replace(self, img=img)

    def with_sources(self, *sources: Tag) -> PictureTag:
        return replace(self, sources=sources)

    def attr(self, name: str, value: Any = None) -> PictureTag:
        """
        Return a copy with a <picture> attribute set.

        A string "class" value is added to the existing classes.
        """
        if name == "class" and isinstance(value, str):
            return self.with_tag(self.tag.with_class(value))
        return self.with_tag(self.tag.with_attr(name, value))

    def img_attr(self, name: str, value: Any = None) -> PictureTag:
        """Same as attr(), for the <img> tag."""
        if name == "class" and isinstance(value, str):
            return self.with_img(self.img.with_class(value))
        return self.with_img(self.img.with_attr(name, value))

    def render(self) -> str:
        if not self.img.attributes.get("src"):
            return ""
        inner = "".join(source.render() for source in self.sources if source.name == "source")
        return self.tag.with_html(inner + self.img.render()).render()

    def __str__(self) -> str:
        return self.render()


@dataclass(frozen=True)
class NullPictureTag(PictureTag):
    """Picture markup that always renders an empty string."""

    def render(self) -> str:
        return ""
