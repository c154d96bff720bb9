"""
NexaForm Validation Rules
=========================

Built-in field rules.

A rule looks at one bound value and either returns quietly or raises
ValidationFailure with the message to show next to the field. Messages
come from the MessageCatalog handed in by the validator, so the same
rule objects work for every language.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, FrozenSet, Iterable, Optional, Pattern, Union

from nexaform.exceptions import RuleSpecError, ValidationFailure
from nexaform.utils.helpers import as_text, is_truthy
from nexaform.validation.messages import MessageCatalog


class Rule(ABC):
    """
    Abstract validation rule.

    Implement `validate` to create custom rules.

    Example:
        class NotAdmin(Rule):
            name = "notAdmin"

            def validate(self, value: Any, catalog: MessageCatalog) -> None:
                if as_text(value).strip() == "admin":
                    raise ValidationFailure("This name is reserved.")
    """

    name: str = "rule"

    @abstractmethod
    def validate(self, value: Any, catalog: MessageCatalog) -> None:
        """
        Check the value.

        Args:
            value: Bound value (may be ABSENT)
            catalog: Messages for the active language

        Raises:
            ValidationFailure: The value does not pass
        """
        ...

    def fail(self, catalog: MessageCatalog, key: str, **params: Any) -> None:
        """Raise a failure with a catalog message."""
        raise ValidationFailure(catalog.format(key, **params))

    def __call__(self, value: Any, catalog: Optional[MessageCatalog] = None) -> None:
        """Allow rule to be called directly."""
        self.validate(value, catalog or MessageCatalog())


@dataclass
class Required(Rule):
    """Require field to be present and not blank."""

    name = "required"

    def validate(self, value: Any, catalog: MessageCatalog) -> None:
        if isinstance(value, (list, tuple, set, dict)):
            if not value:
                self.fail(catalog, "required")
            return
        if as_text(value).strip() == "":
            self.fail(catalog, "required")


@dataclass
class Checked(Rule):
    """Require a checkbox to be ticked."""

    name = "checked"

    def validate(self, value: Any, catalog: MessageCatalog) -> None:
        if not is_truthy(value):
            self.fail(catalog, "checked")


@dataclass
class Length(Rule):
    """
    String length bounds.

    A bound of 0 or None is not checked.

    Example:
        Length(min=3, max=20)
    """

    min: Optional[int] = None
    max: Optional[int] = None
    name = "length"

    def __post_init__(self) -> None:
        for bound in (self.min, self.max):
            if bound is not None and (isinstance(bound, bool) or not isinstance(bound, int) or bound < 0):
                raise RuleSpecError(f"Length bounds must be non-negative integers, got {bound!r}")
        if self.min is None and self.max is None:
            raise RuleSpecError("Length rule needs 'min' or 'max'")

    def validate(self, value: Any, catalog: MessageCatalog) -> None:
        length = len(as_text(value))

        if self.min and length < self.min:
            self.fail(catalog, "length_min", length=self.min)

        if self.max and length > self.max:
            self.fail(catalog, "length_max", length=self.max)


@dataclass
class IsEmail(Rule):
    """Validate e-mail address syntax."""

    name = "isEmail"

    _pattern: Pattern = field(
        default=re.compile(
            r"^[A-Za-z0-9!#$%&'*+/=?^_`{|}~-]+(?:\.[A-Za-z0-9!#$%&'*+/=?^_`{|}~-]+)*"
            r"@(?:[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?\.)+[A-Za-z]{2,}$"
        ),
        repr=False,
    )

    def validate(self, value: Any, catalog: MessageCatalog) -> None:
        if not self._pattern.match(as_text(value).strip()):
            self.fail(catalog, "isEmail")


@dataclass
class IsInteger(Rule):
    """Value must be a whole number, e.g. "42" or "-7"."""

    name = "isInteger"

    _pattern: Pattern = field(default=re.compile(r"^[+-]?(?:0|[1-9]\d*)$"), repr=False)

    def validate(self, value: Any, catalog: MessageCatalog) -> None:
        if isinstance(value, bool):
            self.fail(catalog, "isInteger")
        if isinstance(value, int):
            return
        if not self._pattern.match(as_text(value).strip()):
            self.fail(catalog, "isInteger")


@dataclass
class IsDecimal(Rule):
    """
    Decimal number with limited fractional digits.

    A decimal comma is accepted: "12,5" is read as 12.5.
    """

    max_places: int = 2
    name = "isDecimal"

    _numeric: Pattern = field(
        default=re.compile(r"^\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?\s*$"),
        repr=False,
    )

    def __post_init__(self) -> None:
        if isinstance(self.max_places, bool) or not isinstance(self.max_places, int) or self.max_places < 0:
            raise RuleSpecError(f"maxPlaces must be a non-negative integer, got {self.max_places!r}")

    def validate(self, value: Any, catalog: MessageCatalog) -> None:
        text = as_text(value).replace(",", ".")

        if not self._numeric.match(text):
            self.fail(catalog, "invalidInt")

        if "." not in text:
            return

        fraction = text.split(".")[1].strip()

        if len(fraction) > self.max_places:
            self.fail(catalog, "decimalMax", decimal=self.max_places)


class EnumRule(Rule):
    """
    Value must name one member of an enumeration.

    Accepts an Enum class (member names are used) or any iterable of
    allowed names.

    Example:
        class Status(Enum):
            DRAFT = 1
            PUBLISHED = 2

        EnumRule(Status)  # accepts "DRAFT" and "PUBLISHED"
    """

    name = "enum"

    def __init__(self, choices: Union[type, Iterable[str]]) -> None:
        if isinstance(choices, type) and issubclass(choices, Enum):
            names = choices.__members__.keys()
        elif isinstance(choices, (str, bytes)) or not isinstance(choices, Iterable):
            raise RuleSpecError(f"Enum rule needs an Enum class or a list of names, got {choices!r}")
        else:
            names = choices

        self.names: FrozenSet[str] = frozenset(str(name) for name in names)

    def validate(self, value: Any, catalog: MessageCatalog) -> None:
        if isinstance(value, Enum):
            value = value.name
        if as_text(value) not in self.names:
            self.fail(catalog, "invalidEnum")

    def __repr__(self) -> str:
        return f"EnumRule({sorted(self.names)!r})"


class CallableRule(Rule):
    """
    Rule wrapper for custom callables.

    The callable receives the bound value and raises ValidationFailure
    to reject it. Its return value is ignored.
    """

    name = "custom"

    def __init__(self, func: Callable[[Any], Any]) -> None:
        self.func = func

    def validate(self, value: Any, catalog: MessageCatalog) -> None:
        self.func(value)

    def __repr__(self) -> str:
        return f"CallableRule({getattr(self.func, '__name__', self.func)!r})"
