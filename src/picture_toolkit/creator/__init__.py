"""
Creator Package

Variant generation: turns a picture definition plus a source image into a
CreatedPicture whose variants carry encoded images.

- `PictureCreator` runs the pipeline
- `CreatorConfig` holds formats, upsize policy and size checks
- `PillowImageProcessor` decodes, transforms and encodes with Pillow
- `MimeDetector` sniffs the source type with filetype
"""

from .actions import (
    Action,
    ActionFactory,
    Blur,
    Crop,
    Encode,
    Fit,
    Flip,
    Gamma,
    Greyscale,
    Resize,
    Rotate,
    Save,
)
from .config import CreatorConfig, DEFAULT_SUPPORTED_MIME_TYPES
from .creator import PictureCreator
from .mime import IMAGE_FORMATS, ImageFormat, MimeDetector, get_image_format
from .processor import ImageProcessor, PillowImageProcessor
from .resources import (
    Base64Resource,
    BinaryResource,
    FileResource,
    Resource,
    StreamResource,
    as_resource,
)

__all__ = [
    "Action",
    "ActionFactory",
    "Blur",
    "Crop",
    "Encode",
    "Fit",
    "Flip",
    "Gamma",
    "Greyscale",
    "Resize",
    "Rotate",
    "Save",
    "CreatorConfig",
    "DEFAULT_SUPPORTED_MIME_TYPES",
    "PictureCreator",
    "IMAGE_FORMATS",
    "ImageFormat",
    "MimeDetector",
    "get_image_format",
    "ImageProcessor",
    "PillowImageProcessor",
    "Base64Resource",
    "BinaryResource",
    "FileResource",
    "Resource",
    "StreamResource",
    "as_resource",
]
