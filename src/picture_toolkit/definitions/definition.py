"""
Module: definitions.definition

Purpose:
    Named picture definitions. A definition binds a name to a lazily
    produced Picture.

Key Classes:
    - Definition: Abstract base (name + to_picture())
    - ArrayDefinition: Positional definition data, resolved on demand
    - PictureDefinition: Already resolved Picture

Used By:
    - definitions.registry
    - creator.creator
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Mapping

from picture_toolkit.core.models import Picture

from .resolver import resolve_array


class Definition(ABC):
    """
    Named picture definition.

    Implementations expose a ``name`` attribute and build the Picture in
    ``to_picture()``.
    """

    name: str

    @abstractmethod
    def to_picture(self) -> Picture:
        """
        Resolve the definition.

        Returns:
            Picture described by this definition
        """


@dataclass(frozen=True)
class ArrayDefinition(Definition):
    """
    Definition written in the positional convention.

    Example:
        >>> definition = ArrayDefinition("hero", {"img": {"src": [1200, 600]}})
        >>> definition.to_picture().img.src.height
        600
    """

    name: str
    definition: Mapping[str, Any] = field(default_factory=dict)

    def to_picture(self) -> Picture:
        return resolve_array(self.definition)


@dataclass(frozen=True)
class PictureDefinition(Definition):
    """Definition wrapping an already resolved Picture."""

    name: str
    picture: Picture

    def to_picture(self) -> Picture:
        return self.picture
