"""
Module: creator.mime

Purpose:
    Mime type sniffing of source images and the table of image formats
    the encoder knows about.

Key Classes:
    - ImageFormat: Pillow format name + file extension for a mime type
    - MimeDetector: Sniffs bytes/files with filetype

Key Functions:
    - get_image_format(mime_type): Known format for a mime type, or None

Dependencies:
    - filetype: Signature based type detection

Used By:
    - creator.creator: Resource mime verification
    - creator.processor: Encode format lookup
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Union

import filetype

from picture_toolkit.core.exceptions import MimeDetectionError

from .resources import Resource

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ImageFormat:
    """Encoder format for a mime type."""

    mime_type: str
    pil_format: str
    extension: str


IMAGE_FORMATS: Dict[str, ImageFormat] = {
    fmt.mime_type: fmt
    for fmt in (
        ImageFormat("image/jpeg", "JPEG", "jpg"),
        ImageFormat("image/png", "PNG", "png"),
        ImageFormat("image/gif", "GIF", "gif"),
        ImageFormat("image/webp", "WEBP", "webp"),
        ImageFormat("image/bmp", "BMP", "bmp"),
        ImageFormat("image/tiff", "TIFF", "tiff"),
    )
}


def get_image_format(mime_type: object) -> Optional[ImageFormat]:
    if not isinstance(mime_type, str):
        return None
    return IMAGE_FORMATS.get(mime_type)


class MimeDetector:
    """
    Detect the mime type of image data.

    Example:
        >>> MimeDetector().detect_from_bytes(jpeg_bytes)
        'image/jpeg'
    """

    def detect_from_bytes(self, data: bytes) -> str:
        """
        Raises:
            MimeDetectionError: If the type cannot be determined
        """
        kind = filetype.guess(data)
        if kind is None:
            raise MimeDetectionError("Unable to detect mime type from data")
        return kind.mime

    def detect_from_file(self, path: Union[str, Path]) -> str:
        """
        Raises:
            MimeDetectionError: If the file is unreadable or of unknown type
        """
        try:
            kind = filetype.guess(str(path))
        except OSError as e:
            raise MimeDetectionError(f"Unable to read {path}: {e}") from e
        if kind is None:
            raise MimeDetectionError(f"Unable to detect mime type of {path}")
        return kind.mime

    def detect(self, resource: Resource) -> str:
        """Detect the mime type of any resource kind."""
        if resource.file_path is not None:
            return self.detect_from_file(resource.file_path)
        try:
            data = resource.read_bytes()
        except OSError as e:
            raise MimeDetectionError(f"Unable to read resource: {e}") from e
        return self.detect_from_bytes(data)
