"""
Module: markup.tag

Purpose:
    Minimal immutable HTML element used to build <picture> markup.

Key Classes:
    - Tag: Element name, ordered attributes, inner HTML

Key Functions:
    - render_attributes(attributes): ' name="value"' sequence

Rendering Rules:
    - None, False and "" values are omitted
    - True renders as a bare attribute name
    - Lists and tuples are joined with spaces
    - Values are HTML escaped; insertion order is kept

Used By:
    - markup.picture_tag
    - markup.factory
"""

from __future__ import annotations

import html
from dataclasses import dataclass, field, replace
from typing import Any, Mapping

VOID_ELEMENTS = frozenset({"img", "source", "br", "hr", "input", "link", "meta", "wbr"})


def _attribute_value(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return " ".join(str(item) for item in value if item is not None and item != "")
    return str(value)


def render_attributes(attributes: Mapping[str, Any]) -> str:
    """
    Render attributes in insertion order.

    Example:
        >>> render_attributes({"class": "foo", "hidden": True, "title": None})
        ' class="foo" hidden'
    """
    parts = []
    for name, value in attributes.items():
        if value is None or value is False or value == "":
            continue
        if value is True:
            parts.append(f" {html.escape(name)}")
            continue
        parts.append(f' {html.escape(name)}="{html.escape(_attribute_value(value))}"')
    return "".join(parts)


@dataclass(frozen=True)
class Tag:
    """
    HTML element (immutable).

    Attributes:
        name: Element name
        attributes: Ordered attribute mapping
        html: Inner HTML, inserted unescaped
        render_empty_tag: Render the element when it has no inner HTML;
            when False an empty non-void element renders as ""

    Example:
        >>> str(Tag("img", {"src": "a.jpg", "alt": ""}))
        '<img src="a.jpg">'
    """

    name: str
    attributes: Mapping[str, Any] = field(default_factory=dict)
    html: str = ""
    render_empty_tag: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "attributes", dict(self.attributes))

    def with_name(self, name: str) -> Tag:
        return replace(self, name=name)

    def with_html(self, html: str) -> Tag:
        return replace(self, html=html)

    def with_attr(self, name: str, value: Any = None) -> Tag:
        """Return a copy with an attribute set (or overwritten in place)."""
        return replace(self, attributes={**self.attributes, name: value})

    def with_class(self, value: str) -> Tag:
        """Return a copy with a class appended to the existing classes."""
        existing = self.attributes.get("class")
        if isinstance(existing, (list, tuple)):
            existing = _attribute_value(existing)
        if isinstance(existing, str) and existing:
            value = f"{existing} {value}"
        return self.with_attr("class", value)

    def render(self) -> str:
        attributes = render_attributes(self.attributes)
        if self.name in VOID_ELEMENTS:
            return f"<{self.name}{attributes}>"
        if not self.html and not self.render_empty_tag:
            return ""
        return f"<{self.name}{attributes}>{self.html}</{self.name}>"

    def __str__(self) -> str:
        return self.render()
