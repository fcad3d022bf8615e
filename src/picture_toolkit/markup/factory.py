"""
Module: markup.factory

Purpose:
    Project a Picture (or CreatedPicture) onto <picture> markup. Pure
    function of the picture; never raises and does no I/O.

Key Classes:
    - PictureTagFactory: create_from_picture(picture)

Rules:
    - Variant path priority: url > encoded data URL > path > ""
    - Sources with an empty srcset are skipped
    - A source "type" is dropped when its variants disagree on the mime
      type and corrected when they agree on a different one
    - Missing img width/height are filled from the encoded (else
      requested) dimensions
    - An img without src yields a NullPictureTag

Used By:
    - core.models.picture: Picture.to_tag() / render()
    - cli: render command
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from picture_toolkit.core.models import Picture, Source, Variant

from .picture_tag import NullPictureTag, PictureTag
from .tag import Tag

logger = logging.getLogger(__name__)


def variant_path(variant: Variant, with_descriptor: bool = False) -> str:
    """
    Return the path a variant renders as.

    Example:
        >>> variant_path(Variant(path="a.jpg", descriptor="2x"), with_descriptor=True)
        'a.jpg 2x'
    """
    path = variant.url or (variant.encoded.data_url() if variant.encoded is not None else None) or variant.path or ""
    if with_descriptor and variant.descriptor:
        return f"{path} {variant.descriptor}"
    return path


def variant_width(variant: Variant) -> Optional[int]:
    if variant.encoded is not None:
        return variant.encoded.width
    return variant.width


def variant_height(variant: Variant) -> Optional[int]:
    if variant.encoded is not None:
        return variant.encoded.height
    return variant.height


def srcset_attribute(variants: Iterable[Variant]) -> str:
    return ", ".join(variant_path(v, with_descriptor=True) for v in variants)


class PictureTagFactory:
    """
    Build PictureTag instances from pictures.

    Example:
        >>> picture = Picture(img=Img(src=Variant(path="image.jpg"), attributes={"loading": "lazy"}))
        >>> PictureTagFactory().create_from_picture(picture).render()
        '<picture><img loading="lazy" src="image.jpg"></picture>'
    """

    def create_from_picture(self, picture: Picture) -> PictureTag:
        sources = [tag for tag in (self._create_source(s) for s in picture.sources) if tag is not None]

        img_src = variant_path(picture.img.src)
        if img_src == "":
            logger.debug("No img src to render, returning null picture tag")
            return NullPictureTag()

        attributes = dict(picture.img.attributes)
        attributes["src"] = img_src

        if "width" not in attributes:
            width = variant_width(picture.img.src)
            if width is not None:
                attributes["width"] = str(width)

        if "height" not in attributes:
            height = variant_height(picture.img.src)
            if height is not None:
                attributes["height"] = str(height)

        if picture.img.srcset is not None and len(picture.img.srcset) > 0:
            attributes["srcset"] = srcset_attribute(picture.img.srcset)

        return PictureTag(
            tag=Tag("picture", picture.attributes, render_empty_tag=False),
            img=Tag("img", attributes),
            sources=tuple(sources),
        )

    def _create_source(self, source: Source) -> Optional[Tag]:
        if len(source.srcset) == 0:
            return None

        mime_types = list(dict.fromkeys(v.mime_type for v in source.srcset if v.mime_type))
        attributes = dict(source.attributes)

        if attributes.get("type") is not None:
            if len(mime_types) > 1:
                del attributes["type"]
            elif len(mime_types) == 1 and mime_types[0] != attributes["type"]:
                attributes["type"] = mime_types[0]

        attributes["srcset"] = srcset_attribute(source.srcset)
        return Tag("source", attributes)
