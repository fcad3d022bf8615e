"""
Module: definitions

Purpose:
    Picture definitions: resolving loosely typed definition data into
    Picture trees, named definitions, and registries to look them up.

Key Classes:
    - DefinitionResolver: Positional ("array") / fully qualified ("factory")
    - ArrayDefinition, PictureDefinition: Named definitions
    - Definitions, JsonFilesDefinitions, StackDefinitions: Registries

Key Functions:
    - resolve_array(), resolve_factory(): Resolver shortcuts
    - load_picture_json(), save_picture_json(): Definition files

Used By:
    - creator.creator: Definition -> Picture
    - cli: Named lookups
"""

from .resolver import DefinitionResolver, resolve_array, resolve_factory
from .definition import ArrayDefinition, Definition, PictureDefinition
from .serialization import (
    deserialize_picture,
    load_picture_json,
    save_picture_json,
    serialize_picture,
)
from .registry import (
    DefinitionRegistry,
    Definitions,
    JsonFilesDefinitions,
    StackDefinitions,
    sanitize_definition_name,
)

__all__ = [
    # Resolution
    "DefinitionResolver",
    "resolve_array",
    "resolve_factory",
    # Definitions
    "Definition",
    "ArrayDefinition",
    "PictureDefinition",
    # Serialization
    "serialize_picture",
    "deserialize_picture",
    "load_picture_json",
    "save_picture_json",
    # Registries
    "DefinitionRegistry",
    "Definitions",
    "JsonFilesDefinitions",
    "StackDefinitions",
    "sanitize_definition_name",
]
