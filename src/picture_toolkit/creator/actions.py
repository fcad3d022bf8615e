"""
Module: creator.actions

Purpose:
    Image actions applied by the image processor, and the factory that
    builds them from the "actions" option of a variant
    (ordered mapping of action name -> keyword parameters).

Key Classes:
    - Action: Base class; subclasses declare a ``kind`` name
    - Crop, Greyscale, Gamma, Rotate, Flip, Blur: User actions
    - Fit, Resize: Sizing actions appended by the creator
    - Encode, Save: Output actions (never accepted from definitions)
    - ActionFactory: name + params -> Action

Used By:
    - creator.creator: Builds the per-variant action list
    - creator.processor: Executes actions
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any, ClassVar, Dict, Mapping, Optional, Type

from picture_toolkit.core.exceptions import ActionCreateError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Action:
    """Base class of all image actions."""

    kind: ClassVar[str] = ""

    def to_dict(self) -> dict[str, Any]:
        """Descriptor recorded on the encoded result."""
        return {"name": self.kind, **asdict(self)}


# ─────────────────────────────────────────────────────────────────────────────
# User Actions
# ─────────────────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Crop(Action):
    """Crop a width x height box at (x, y)."""

    kind: ClassVar[str] = "crop"

    width: int
    height: int
    x: int = 0
    y: int = 0

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Crop size must be positive: {self.width}x{self.height}")
        if self.x < 0 or self.y < 0:
            raise ValueError(f"Crop offset must be non-negative: ({self.x}, {self.y})")


@dataclass(frozen=True)
class Greyscale(Action):
    kind: ClassVar[str] = "greyscale"


@dataclass(frozen=True)
class Gamma(Action):
    kind: ClassVar[str] = "gamma"

    gamma: float = 1.0

    def __post_init__(self) -> None:
        if self.gamma <= 0:
            raise ValueError(f"gamma must be positive: {self.gamma}")


@dataclass(frozen=True)
class Rotate(Action):
    """Rotate counter clockwise by degrees, expanding the canvas."""

    kind: ClassVar[str] = "rotate"

    degrees: float = 0.0

    def __post_init__(self) -> None:
        if isinstance(self.degrees, bool) or not isinstance(self.degrees, (int, float)):
            raise ValueError(f"degrees must be a number: {self.degrees!r}")


@dataclass(frozen=True)
class Flip(Action):
    kind: ClassVar[str] = "flip"

    direction: str = "horizontal"

    def __post_init__(self) -> None:
        if self.direction not in ("horizontal", "vertical"):
            raise ValueError(f"direction must be 'horizontal' or 'vertical': {self.direction!r}")


@dataclass(frozen=True)
class Blur(Action):
    kind: ClassVar[str] = "blur"

    radius: float = 2.0

    def __post_init__(self) -> None:
        if self.radius < 0:
            raise ValueError(f"radius must be non-negative: {self.radius}")


# ─────────────────────────────────────────────────────────────────────────────
# Sizing and Output Actions
# ─────────────────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Resize(Action):
    """
    Scale keeping the aspect ratio.

    With only one dimension given the other follows the ratio; with none
    the image keeps its size. upsize caps the scale factor (None = no cap).
    """

    kind: ClassVar[str] = "resize"

    width: Optional[int] = None
    height: Optional[int] = None
    upsize: Optional[float] = None


@dataclass(frozen=True)
class Fit(Action):
    """Scale and centre crop to exactly width x height, capped by upsize."""

    kind: ClassVar[str] = "fit"

    width: int
    height: int
    upsize: Optional[float] = None

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Fit size must be positive: {self.width}x{self.height}")


@dataclass(frozen=True)
class Encode(Action):
    kind: ClassVar[str] = "encode"

    mime_type: str
    quality: Optional[int] = None

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.kind, "mimeType": self.mime_type, "quality": self.quality}


@dataclass(frozen=True)
class Save(Action):
    kind: ClassVar[str] = "save"

    filename: str
    quality: Optional[int] = None


DEFAULT_ACTIONS: tuple[Type[Action], ...] = (
    Crop,
    Greyscale,
    Gamma,
    Rotate,
    Flip,
    Blur,
    Resize,
    Fit,
    Encode,
    Save,
)


class ActionFactory:
    """
    Build actions from their name and keyword parameters.

    Example:
        >>> ActionFactory().create_action("crop", {"width": 40, "height": 20})
        Crop(width=40, height=20, x=0, y=0)
    """

    def __init__(self, actions: Optional[Mapping[str, Type[Action]]] = None) -> None:
        self._actions: Dict[str, Type[Action]] = {cls.kind: cls for cls in DEFAULT_ACTIONS}
        if actions:
            self._actions.update(actions)

    def register(self, name: str, action: Type[Action]) -> None:
        self._actions[name] = action

    def has(self, name: str) -> bool:
        return name in self._actions

    def create_action(self, name: str, params: Optional[Mapping[str, Any]] = None) -> Action:
        """
        Create an action.

        Raises:
            ActionCreateError: If the name is unknown or the parameters
                do not fit the action
        """
        action_class = self._actions.get(name)
        if action_class is None:
            raise ActionCreateError(f"Unknown action {name}", action=name)
        try:
            return action_class(**dict(params or {}))
        except (TypeError, ValueError) as e:
            raise ActionCreateError(f"Invalid parameters for action {name}: {e}", action=name) from e
