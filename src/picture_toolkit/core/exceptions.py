"""
Module: core.exceptions

Purpose:
    Error taxonomy shared by every stage of the picture pipeline.
    Resolution, creation and lookup failures all derive from PictureError
    so callers can catch the whole family with one clause.

Key Classes:
    - PictureError: Base class
    - MissingPrimarySourceError: Definition has no usable img.src
    - PictureCreateError: Variant generation aborted (carries the resource)
    - UnsupportedMimeTypeError: Resource mime type not allowed
    - ResourceTooSmallError: Requested size exceeds the resource size
    - DefinitionNotFoundError: Registry lookup miss
    - ActionCreateError: Action name/params could not be turned into an action
    - ImageProcessorError: Image processor failed to decode/transform/encode
    - MimeDetectionError: Mime type could not be sniffed

Used By:
    - definitions.resolver
    - definitions.registry
    - creator.*
"""

from __future__ import annotations

from typing import Any, Optional


class PictureError(Exception):
    """Base class for all picture toolkit errors."""


class MissingPrimarySourceError(PictureError, ValueError):
    """Raised when a positional definition does not define img.src."""

    def __init__(self, message: str = "Undefined img src") -> None:
        super().__init__(message)


class PictureCreateError(PictureError):
    """
    Raised when a picture could not be created from a resource.

    Attributes:
        resource: The resource that was being processed
    """

    def __init__(self, message: str, resource: Any = None) -> None:
        super().__init__(message)
        self.resource = resource


class UnsupportedMimeTypeError(PictureCreateError):
    """Resource mime type is undetectable or not in the supported set."""

    def __init__(
        self,
        message: str = "Unsupported mime type",
        resource: Any = None,
        mime_type: Optional[str] = None,
    ) -> None:
        super().__init__(message, resource)
        self.mime_type = mime_type


class ResourceTooSmallError(PictureCreateError):
    """A requested variant dimension exceeds the resource dimension."""

    def __init__(self, message: str, resource: Any = None, dimension: str = "width") -> None:
        super().__init__(message, resource)
        self.dimension = dimension


class DefinitionNotFoundError(PictureError, KeyError):
    """
    Raised when a named definition is not in a registry.

    Attributes:
        definition: The requested definition name
    """

    def __init__(self, definition: str, message: str = "") -> None:
        if not message:
            message = f"Picture definition {definition} not found"
        super().__init__(message)
        self.definition = definition

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0])


class ActionCreateError(PictureError):
    """An action could not be created from a name and parameters."""

    def __init__(self, message: str, action: str = "") -> None:
        super().__init__(message)
        self.action = action


class ImageProcessorError(PictureError):
    """The image processor failed on a resource."""


class MimeDetectionError(PictureError):
    """The mime type of a resource could not be determined."""
