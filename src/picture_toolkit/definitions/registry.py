"""
Module: definitions.registry

Purpose:
    Named lookup of picture definitions.

Key Classes:
    - DefinitionRegistry: Abstract interface (has/get/add/filter/all)
    - Definitions: In-memory registry
    - JsonFilesDefinitions: Lazily loads <name>.json files from a list of
      directories, with a positive cache and a "not found" negative cache
    - StackDefinitions: Layers several registries; earlier layers win

Dependencies:
    - threading (std): Cache guard for JsonFilesDefinitions
    - definitions.serialization: Locked JSON loading

Used By:
    - cli: Definition lookup by name
"""

from __future__ import annotations

import json
import logging
import re
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, Iterator, List, Mapping, Optional, Set, Union

from picture_toolkit.core.exceptions import DefinitionNotFoundError
from picture_toolkit.core.schemas.validator import ValidationError

from .definition import ArrayDefinition, Definition, PictureDefinition
from .serialization import load_picture_json

logger = logging.getLogger(__name__)

DefinitionPredicate = Callable[[Definition], bool]

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9_\-']")


def sanitize_definition_name(name: str) -> str:
    """
    Map a definition name to a safe file stem.

    Every character outside [A-Za-z0-9_-'] becomes "-".

    Example:
        >>> sanitize_definition_name("blog/hero image")
        'blog-hero-image'
    """
    return _UNSAFE_FILENAME_CHARS.sub("-", name.strip())


class DefinitionRegistry(ABC):
    """Abstract interface for definition registries."""

    name: str

    @abstractmethod
    def add(self, definition: Union[Definition, DefinitionRegistry]) -> DefinitionRegistry:
        """Add a definition, or every definition of another registry. Returns self."""

    @abstractmethod
    def has(self, definition: str) -> bool:
        """Check whether a definition name is known."""

    @abstractmethod
    def get(self, definition: str) -> Definition:
        """
        Get a definition by name.

        Raises:
            DefinitionNotFoundError: If the name is unknown
        """

    @abstractmethod
    def filter(self, predicate: DefinitionPredicate) -> DefinitionRegistry:
        """Return a new registry holding the definitions matching predicate."""

    @abstractmethod
    def __iter__(self) -> Iterator[Definition]:
        """Iterate over all definitions."""

    def all(self) -> List[Definition]:
        return list(self)

    def __contains__(self, definition: object) -> bool:
        return isinstance(definition, str) and self.has(definition)


class Definitions(DefinitionRegistry):
    """
    In-memory registry. Later additions shadow earlier ones of the same name.

    Example:
        >>> defs = Definitions("app", ArrayDefinition("thumb", {"img": {"src": [120]}}))
        >>> defs.get("thumb").to_picture().img.src.width
        120
    """

    def __init__(self, name: str, *definitions: Definition) -> None:
        self.name = name
        self._definitions: Dict[str, Definition] = {}
        for definition in definitions:
            self.add(definition)

    @classmethod
    def from_arrays(cls, name: str, definitions: Mapping[str, Mapping[str, Any]]) -> Definitions:
        """Build a registry of ArrayDefinitions from a name -> definition mapping."""
        return cls(name, *(ArrayDefinition(key, value) for key, value in definitions.items()))

    def add(self, definition: Union[Definition, DefinitionRegistry]) -> Definitions:
        if isinstance(definition, DefinitionRegistry):
            for item in definition:
                self._definitions[item.name] = item
        else:
            self._definitions[definition.name] = definition
        return self

    def has(self, definition: str) -> bool:
        return definition in self._definitions

    def get(self, definition: str) -> Definition:
        try:
            return self._definitions[definition]
        except KeyError:
            raise DefinitionNotFoundError(definition) from None

    def filter(self, predicate: DefinitionPredicate) -> Definitions:
        return Definitions(self.name, *(d for d in self._definitions.values() if predicate(d)))

    def __iter__(self) -> Iterator[Definition]:
        return iter(list(self._definitions.values()))

    def __len__(self) -> int:
        return len(self._definitions)


class JsonFilesDefinitions(DefinitionRegistry):
    """
    Registry backed by "<name>.json" files in one or more directories.

    Files hold the fully qualified form (Picture.to_dict()). A lookup
    probes each directory in order for the sanitized name; the first file
    that loads wins. Files that fail to parse or validate count as absent.
    Hits are cached, misses are remembered so repeated lookups of an
    unknown name never touch the filesystem again.

    Attributes:
        name: Registry name
        dirs: Directories probed in order
        strict: Use full schema validation when loading files

    Example:
        >>> defs = JsonFilesDefinitions("files", [Path("definitions")])
        >>> defs.has("hero")  # loads definitions/hero.json on first call
        True
    """

    def __init__(self, name: str, dirs: Iterable[Union[str, Path]], *, strict: bool = False) -> None:
        self.name = name
        self.dirs: tuple[Path, ...] = tuple(Path(d) for d in dirs)
        self.strict = strict
        self._definitions: Dict[str, Definition] = {}
        self._not_found: Set[str] = set()
        self._collected = False
        self._lock = threading.RLock()

    def add(self, definition: Union[Definition, DefinitionRegistry]) -> JsonFilesDefinitions:
        with self._lock:
            if isinstance(definition, DefinitionRegistry):
                for item in definition:
                    self._definitions[item.name] = item
            else:
                self._definitions[definition.name] = definition
        return self

    def has(self, definition: str) -> bool:
        return self._lookup(definition) is not None

    def get(self, definition: str) -> Definition:
        found = self._lookup(definition)
        if found is None:
            raise DefinitionNotFoundError(definition)
        return found

    def filter(self, predicate: DefinitionPredicate) -> Definitions:
        return Definitions(self.name, *(d for d in self if predicate(d)))

    def __iter__(self) -> Iterator[Definition]:
        self._collect_definitions()
        with self._lock:
            return iter(list(self._definitions.values()))

    # ─────────────────────────────────────────────────────────────────────────
    # File Lookup
    # ─────────────────────────────────────────────────────────────────────────

    def _lookup(self, definition: str) -> Optional[Definition]:
        with self._lock:
            if definition in self._definitions:
                return self._definitions[definition]
            if definition in self._not_found:
                return None

            found = self._find_definition(definition)
            if found is None:
                self._not_found.add(definition)
            else:
                self._definitions[definition] = found
            return found

    def _find_definition(self, definition: str) -> Optional[Definition]:
        filename = Path(sanitize_definition_name(definition)).name
        for directory in self.dirs:
            path = directory / f"{filename}.json"
            if not path.is_file():
                continue
            loaded = self._load(definition, path)
            if loaded is not None:
                return loaded
        logger.debug(f"Definition {definition!r} not found in {len(self.dirs)} directories")
        return None

    def _load(self, name: str, path: Path) -> Optional[Definition]:
        try:
            picture = load_picture_json(path, validate=True, strict=self.strict)
        except (OSError, json.JSONDecodeError, ValidationError, TypeError, ValueError) as e:
            logger.warning(f"Skipped definition file {path}: {e}")
            return None
        logger.debug(f"Loaded definition {name!r} from {path}")
        return PictureDefinition(name=name, picture=picture)

    def _collect_definitions(self) -> None:
        """Load every *.json file of every directory (once)."""
        with self._lock:
            if self._collected:
                return
            for directory in self.dirs:
                if not directory.is_dir():
                    continue
                for path in sorted(directory.glob("*.json")):
                    name = path.stem
                    if name in self._definitions:
                        continue
                    loaded = self._load(name, path)
                    if loaded is not None:
                        self._definitions[name] = loaded
                        self._not_found.discard(name)
            self._collected = True


class StackDefinitions(DefinitionRegistry):
    """
    Layered registry.

    Lookups consult the stacked registries in order, then the definitions
    added directly to the stack.

    Example:
        >>> stack = StackDefinitions("all", JsonFilesDefinitions("files", [d]), Definitions("defaults"))
        >>> stack.get("hero")  # from files if present there, else defaults
    """

    def __init__(self, name: str, *registries: DefinitionRegistry) -> None:
        self.name = name
        self._registries: List[DefinitionRegistry] = list(registries)
        self._own = Definitions(name)

    def add(self, definition: Union[Definition, DefinitionRegistry]) -> StackDefinitions:
        if isinstance(definition, DefinitionRegistry):
            self._registries.append(definition)
        else:
            self._own.add(definition)
        return self

    def has(self, definition: str) -> bool:
        return any(registry.has(definition) for registry in self._layers())

    def get(self, definition: str) -> Definition:
        for registry in self._layers():
            if registry.has(definition):
                return registry.get(definition)
        raise DefinitionNotFoundError(definition)

    def filter(self, predicate: DefinitionPredicate) -> StackDefinitions:
        return StackDefinitions(self.name, *(r.filter(predicate) for r in self._layers()))

    def __iter__(self) -> Iterator[Definition]:
        for registry in self._layers():
            yield from registry

    def _layers(self) -> List[DefinitionRegistry]:
        return [*self._registries, self._own]
