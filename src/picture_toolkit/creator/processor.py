"""
Module: creator.processor

Purpose:
    Image processor boundary. Decodes a resource, runs an action list over
    it and encodes the result. The creator only talks to the abstract
    ImageProcessor; PillowImageProcessor is the default implementation.

Key Classes:
    - ImageProcessor: apply(resource, actions) / probe_dimensions(resource)
    - PillowImageProcessor: Pillow backed implementation

Dependencies:
    - PIL: Decoding, transforms, encoding

Used By:
    - creator.creator: Variant encoding and size verification
"""

from __future__ import annotations

import io
import logging
import math
from abc import ABC, abstractmethod
from typing import Optional, Sequence, Tuple

from PIL import Image, ImageFilter, ImageOps, UnidentifiedImageError

from picture_toolkit.core.exceptions import ImageProcessorError
from picture_toolkit.core.models import EncodedResult

from .actions import (
    Action,
    Blur,
    Crop,
    Encode,
    Fit,
    Flip,
    Gamma,
    Greyscale,
    Resize,
    Rotate,
)
from .mime import get_image_format
from .resources import Resource

logger = logging.getLogger(__name__)

# Modes each encoder accepts without conversion
_ENCODER_MODES = {
    "JPEG": ("RGB", "L", "CMYK"),
    "WEBP": ("RGB", "RGBA"),
    "PNG": ("RGB", "RGBA", "L", "LA", "P", "1"),
    "GIF": ("P", "L", "RGB", "RGBA"),
    "BMP": ("RGB", "L", "P", "1"),
    "TIFF": ("RGB", "RGBA", "L", "LA", "CMYK", "1"),
}

_QUALITY_FORMATS = ("JPEG", "WEBP")


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _has_alpha(image: Image.Image) -> bool:
    return image.mode in ("RGBA", "LA") or (image.mode == "P" and "transparency" in image.info)


class ImageProcessor(ABC):
    """Abstract image processor."""

    @abstractmethod
    def apply(self, resource: Resource, actions: Sequence[Action]) -> EncodedResult:
        """
        Run actions over the resource; the last action must be Encode.

        Raises:
            ImageProcessorError: If decoding, an action or encoding fails
        """

    @abstractmethod
    def probe_dimensions(self, resource: Resource) -> Tuple[int, int]:
        """
        Return the (width, height) of the resource image.

        Raises:
            ImageProcessorError: If the image cannot be read
        """


class PillowImageProcessor(ImageProcessor):
    """
    Pillow implementation of ImageProcessor.

    Each action kind is dispatched to a ``_apply_<kind>`` method taking
    and returning a PIL image.

    Example:
        >>> processor = PillowImageProcessor()
        >>> encoded = processor.apply(FileResource(path), [Resize(width=50), Encode("image/png")])
        >>> encoded.width
        50
    """

    def __init__(self, resample: Image.Resampling = Image.Resampling.LANCZOS) -> None:
        self.resample = resample

    def apply(self, resource: Resource, actions: Sequence[Action]) -> EncodedResult:
        if not actions or not isinstance(actions[-1], Encode):
            raise ImageProcessorError("Action list must end with an encode action")

        image = self._open(resource)
        for action in actions[:-1]:
            handler = getattr(self, f"_apply_{action.kind}", None)
            if handler is None:
                raise ImageProcessorError(f"Unsupported action {action.kind!r}")
            try:
                image = handler(image, action)
            except (OSError, ValueError, TypeError) as e:
                raise ImageProcessorError(f"Action {action.kind} failed: {e}") from e

        return self._encode(image, actions[-1], actions)

    def probe_dimensions(self, resource: Resource) -> Tuple[int, int]:
        image = self._open(resource)
        return image.size

    # ─────────────────────────────────────────────────────────────────────────
    # Decode / Encode
    # ─────────────────────────────────────────────────────────────────────────

    def _open(self, resource: Resource) -> Image.Image:
        try:
            path = resource.file_path
            source = path if path is not None else io.BytesIO(resource.read_bytes())
            with Image.open(source) as image:
                image.load()
                if image.mode == "P":
                    return image.convert("RGBA" if _has_alpha(image) else "RGB")
                return image.copy()
        except (OSError, UnidentifiedImageError, Image.DecompressionBombError) as e:
            raise ImageProcessorError(f"Unable to decode image: {e}") from e

    def _encode(self, image: Image.Image, action: Encode, actions: Sequence[Action]) -> EncodedResult:
        image_format = get_image_format(action.mime_type)
        if image_format is None:
            raise ImageProcessorError(f"Unsupported encode mime type {action.mime_type!r}")

        image = self._convert_for(image, image_format.pil_format)
        save_kwargs = {}
        if action.quality is not None and image_format.pil_format in _QUALITY_FORMATS:
            save_kwargs["quality"] = action.quality

        buffer = io.BytesIO()
        try:
            image.save(buffer, format=image_format.pil_format, **save_kwargs)
        except (OSError, ValueError, KeyError) as e:
            raise ImageProcessorError(f"Unable to encode {action.mime_type}: {e}") from e

        data = buffer.getvalue()
        logger.debug(f"Encoded {image.width}x{image.height} {action.mime_type} ({len(data)} bytes)")
        return EncodedResult(
            data=data,
            mime_type=image_format.mime_type,
            extension=image_format.extension,
            width=image.width,
            height=image.height,
            size_bytes=len(data),
            actions=tuple(a.to_dict() for a in actions),
        )

    def _convert_for(self, image: Image.Image, pil_format: str) -> Image.Image:
        if image.mode in _ENCODER_MODES.get(pil_format, (image.mode,)):
            return image
        if pil_format == "JPEG" or (pil_format == "BMP" and _has_alpha(image)):
            # Flatten transparency onto white
            rgba = image.convert("RGBA")
            background = Image.new("RGB", rgba.size, (255, 255, 255))
            background.paste(rgba, mask=rgba.getchannel("A"))
            return background
        if _has_alpha(image):
            return image.convert("RGBA")
        return image.convert("RGB")

    # ─────────────────────────────────────────────────────────────────────────
    # Actions
    # ─────────────────────────────────────────────────────────────────────────

    def _apply_crop(self, image: Image.Image, action: Crop) -> Image.Image:
        right = min(action.x + action.width, image.width)
        bottom = min(action.y + action.height, image.height)
        if action.x >= right or action.y >= bottom:
            raise ValueError(
                f"Crop box ({action.x}, {action.y}, {action.width}x{action.height}) "
                f"outside image {image.width}x{image.height}"
            )
        return image.crop((action.x, action.y, right, bottom))

    def _apply_greyscale(self, image: Image.Image, action: Greyscale) -> Image.Image:
        return image.convert("LA" if _has_alpha(image) else "L")

    def _apply_gamma(self, image: Image.Image, action: Gamma) -> Image.Image:
        table = [_round_half_up(255 * (value / 255) ** (1 / action.gamma)) for value in range(256)]
        if image.mode not in ("L", "LA", "RGB", "RGBA"):
            image = image.convert("RGBA" if _has_alpha(image) else "RGB")
        bands = image.split()
        colour_bands = len(bands) - 1 if image.mode in ("LA", "RGBA") else len(bands)
        adjusted = [band.point(table) if i < colour_bands else band for i, band in enumerate(bands)]
        return Image.merge(image.mode, adjusted)

    def _apply_rotate(self, image: Image.Image, action: Rotate) -> Image.Image:
        return image.rotate(action.degrees, resample=Image.Resampling.BICUBIC, expand=True)

    def _apply_flip(self, image: Image.Image, action: Flip) -> Image.Image:
        if action.direction == "vertical":
            return ImageOps.flip(image)
        return ImageOps.mirror(image)

    def _apply_blur(self, image: Image.Image, action: Blur) -> Image.Image:
        return image.filter(ImageFilter.GaussianBlur(action.radius))

    def _apply_resize(self, image: Image.Image, action: Resize) -> Image.Image:
        scale = self._resize_scale(image.size, action.width, action.height)
        if scale is None:
            return image
        if action.upsize is not None:
            scale = min(scale, action.upsize)
        size = (
            max(1, _round_half_up(image.width * scale)),
            max(1, _round_half_up(image.height * scale)),
        )
        if size == image.size:
            return image
        return image.resize(size, self.resample)

    def _apply_fit(self, image: Image.Image, action: Fit) -> Image.Image:
        width, height = action.width, action.height
        scale = max(width / image.width, height / image.height)
        if action.upsize is not None and scale > action.upsize:
            # Keep the aspect ratio of the box, shrink it to what upsize allows
            shrink = action.upsize / scale
            width = max(1, _round_half_up(width * shrink))
            height = max(1, _round_half_up(height * shrink))
        if (width, height) == image.size:
            return image
        return ImageOps.fit(image, (width, height), self.resample)

    @staticmethod
    def _resize_scale(size: Tuple[int, int], width: Optional[int], height: Optional[int]) -> Optional[float]:
        src_width, src_height = size
        if width is not None and height is not None:
            return min(width / src_width, height / src_height)
        if width is not None:
            return width / src_width
        if height is not None:
            return height / src_height
        return None
