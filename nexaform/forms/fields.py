"""
NexaForm Field Model
====================

Immutable description of one declared form entry: a control, a layout
boundary or a piece of static content.

Fields are created by FieldRegistry and read by renderers; nothing
changes them after they are appended.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Collection, Mapping, Optional, Union


class HTTPMethod(str, Enum):
    """Methods a form can submit with."""
    GET = "GET"
    POST = "POST"

    @classmethod
    def parse(cls, value: Union[str, "HTTPMethod"]) -> "HTTPMethod":
        if isinstance(value, cls):
            return value
        return cls(str(value).upper())


class FieldKind(str, Enum):
    """Kinds of form entries."""
    INPUT = "input"
    NUMBER = "number"
    TEXTAREA = "textarea"
    SELECT = "select"
    CHECKBOX = "checkbox"
    HIDDEN = "hidden"
    SUBMIT = "submit"
    STATIC_TEXT = "span"
    GROUP_START = "group-start"
    GROUP_STOP = "group-stop"
    TITLE = "title"
    RAW = "raw"

    @property
    def needs_path(self) -> bool:
        """Whether declaring the entry requires a field path."""
        return self in PATH_KINDS


PATH_KINDS = frozenset({
    FieldKind.INPUT,
    FieldKind.NUMBER,
    FieldKind.TEXTAREA,
    FieldKind.SELECT,
    FieldKind.CHECKBOX,
})

Selection = Union[None, str, Collection[str]]


@dataclass(frozen=True)
class SelectOptions:
    """
    Choices of a select field.

    Example:
        options = SelectOptions({"pl": "Polish", "en": "English"}, selected="en")
        options.is_selected("en")  # True
    """
    choices: Mapping[Any, Any]
    selected: Any = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "choices", MappingProxyType(dict(self.choices)))
        if isinstance(self.selected, (list, tuple, set, frozenset)):
            object.__setattr__(self, "selected", frozenset(str(key) for key in self.selected))

    @property
    def multiple(self) -> bool:
        return isinstance(self.selected, frozenset)

    def is_selected(self, key: Any) -> bool:
        if self.selected is None:
            return False
        if isinstance(self.selected, frozenset):
            return str(key) in self.selected
        return str(self.selected) == str(key)


@dataclass(frozen=True)
class Group:
    """Column layout opened by start_group()."""
    columns: int = 6
    row_attributes: Mapping[str, Any] = field(default_factory=dict)
    col_attributes: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "row_attributes", MappingProxyType(dict(self.row_attributes)))
        object.__setattr__(self, "col_attributes", MappingProxyType(dict(self.col_attributes)))


@dataclass(frozen=True)
class Field:
    """
    One declared form entry.

    Attributes keep declaration order and are read-only; renderers copy
    them before adding their own.
    """
    kind: FieldKind
    path: Optional[str] = None
    label: Optional[str] = None
    attributes: Mapping[str, Any] = field(default_factory=dict)
    options: Optional[SelectOptions] = None
    css_class: Optional[str] = None
    content: Optional[str] = None
    group: Optional[Group] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "kind", FieldKind(self.kind))
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))

    @property
    def value(self) -> Any:
        """Bound or declared value attribute."""
        return self.attributes.get("value")

    @property
    def checked(self) -> bool:
        return "checked" in self.attributes
