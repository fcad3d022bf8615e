"""
Picture Toolkit Core Package

Shared data models, error taxonomy, schema validation and serialization
helpers. Every other subpackage (definitions, creator, markup) builds on
the types defined here.
"""

from .exceptions import (
    ActionCreateError,
    DefinitionNotFoundError,
    ImageProcessorError,
    MimeDetectionError,
    MissingPrimarySourceError,
    PictureCreateError,
    PictureError,
    ResourceTooSmallError,
    UnsupportedMimeTypeError,
)
from .models import (
    CreatedPicture,
    EncodedResult,
    Img,
    Picture,
    Source,
    Sources,
    Srcset,
    Variant,
)

__all__ = [
    "ActionCreateError",
    "DefinitionNotFoundError",
    "ImageProcessorError",
    "MimeDetectionError",
    "MissingPrimarySourceError",
    "PictureCreateError",
    "PictureError",
    "ResourceTooSmallError",
    "UnsupportedMimeTypeError",
    "CreatedPicture",
    "EncodedResult",
    "Img",
    "Picture",
    "Source",
    "Sources",
    "Srcset",
    "Variant",
]
