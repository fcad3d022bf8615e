"""
Markup Package

Projects pictures onto HTML <picture> markup.
"""

from .factory import PictureTagFactory, srcset_attribute, variant_path
from .picture_tag import NullPictureTag, PictureTag
from .tag import Tag, VOID_ELEMENTS, render_attributes

__all__ = [
    "PictureTagFactory",
    "srcset_attribute",
    "variant_path",
    "NullPictureTag",
    "PictureTag",
    "Tag",
    "VOID_ELEMENTS",
    "render_attributes",
]
