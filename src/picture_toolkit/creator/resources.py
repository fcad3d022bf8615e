"""
Module: creator.resources

Purpose:
    Source image resources. A resource is one of four kinds - a file, raw
    bytes, a binary stream or a base64 string - and every kind exposes the
    same two capabilities: read_bytes() and an optional file_path, so mime
    detection, size probing and encoding never branch on the kind.

Key Classes:
    - Resource: Abstract base
    - FileResource, BinaryResource, StreamResource, Base64Resource

Key Functions:
    - as_resource(value): Coerce a path/bytes/stream into a Resource

Used By:
    - creator.mime: Mime detection
    - creator.processor: Decode and size probing
    - creator.creator: Entry points
"""

from __future__ import annotations

import base64
import binascii
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Optional, Union


class Resource(ABC):
    """A source image the picture is generated from."""

    @abstractmethod
    def read_bytes(self) -> bytes:
        """
        Return the raw image bytes.

        Raises:
            OSError: If the bytes cannot be read
        """

    @property
    def file_path(self) -> Optional[Path]:
        """Filesystem path when the resource is a file, else None."""
        return None


@dataclass(frozen=True)
class FileResource(Resource):
    """Image stored on disk."""

    path: Path

    def __post_init__(self) -> None:
        object.__setattr__(self, "path", Path(self.path))

    def read_bytes(self) -> bytes:
        return self.path.read_bytes()

    @property
    def file_path(self) -> Optional[Path]:
        return self.path


@dataclass(frozen=True)
class BinaryResource(Resource):
    """Image held in memory."""

    data: bytes

    def read_bytes(self) -> bytes:
        return self.data

    def __repr__(self) -> str:
        return f"BinaryResource({len(self.data)} bytes)"


@dataclass(frozen=True)
class Base64Resource(Resource):
    """Image given as a base64 string (optionally a data URL)."""

    data: str

    def read_bytes(self) -> bytes:
        payload = self.data
        if payload.startswith("data:") and "," in payload:
            payload = payload.split(",", 1)[1]
        try:
            return base64.b64decode(payload, validate=True)
        except binascii.Error as e:
            raise OSError(f"Invalid base64 image data: {e}") from e

    def __repr__(self) -> str:
        return f"Base64Resource({len(self.data)} chars)"


class StreamResource(Resource):
    """
    Image read from a binary stream.

    The stream is read once; later reads return the cached bytes, so the
    resource is safe to share between encoder threads.
    """

    def __init__(self, stream: BinaryIO) -> None:
        self.stream = stream
        self._data: Optional[bytes] = None
        self._lock = threading.Lock()

    def read_bytes(self) -> bytes:
        with self._lock:
            if self._data is None:
                if self.stream.seekable():
                    self.stream.seek(0)
                self._data = self.stream.read()
            return self._data

    def __repr__(self) -> str:
        return f"StreamResource({self.stream!r})"


def as_resource(value: Union[Resource, str, Path, bytes, BinaryIO]) -> Resource:
    """
    Coerce common inputs into a Resource.

    Strings and paths become FileResource, bytes become BinaryResource and
    objects with a read() method become StreamResource.
    """
    if isinstance(value, Resource):
        return value
    if isinstance(value, (str, Path)):
        return FileResource(Path(value))
    if isinstance(value, (bytes, bytearray)):
        return BinaryResource(bytes(value))
    if hasattr(value, "read"):
        return StreamResource(value)
    raise TypeError(f"Unsupported resource: {type(value).__name__}")
