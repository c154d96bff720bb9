"""
NexaForm Validation Messages
============================

Message catalogs for built-in rules.

Templates may contain a number followed by a bracketed list of word
forms. After the number has been substituted, the list collapses to the
form matching that number:

    "at least 5 [znak,znaki,znaków]"  ->  "at least 5 znaków"
    "at least 3 [znak,znaki,znaków]"  ->  "at least 3 znaki"

Form selection follows the Slavic plural rule: last digit 1 (but not
11) picks the first form, last digit 2-4 (but not 12-14) the second,
anything else the third.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Dict, Optional, Sequence, Union

from nexaform.exceptions import LocaleNotSupportedError

_INFLECTION = re.compile(r"(\d+)\s*\[([^\]]+)\]")


class Locale(str, Enum):
    """Supported message languages."""

    EN = "EN"
    PL = "PL"


DEFAULT_MESSAGES: Dict[str, str] = {
    "required": "This field cannot be empty.",
    "checked": "The checkbox must be checked.",
    "length_min": "The field cannot have fewer than {length} [character,characters,characters].",
    "length_max": "The field cannot have more than {length} [character,characters,characters].",
    "isEmail": "The provided email address is invalid.",
    "isInteger": "The provided value must be an integer.",
    "invalidInt": "Invalid numeric value.",
    "decimalMax": "The field may not have more than {decimal} [decimal place,decimal places,decimal places].",
    "invalidEnum": "Incorrect value.",
}

CATALOGS: Dict[Locale, Dict[str, str]] = {
    Locale.EN: DEFAULT_MESSAGES,
    Locale.PL: {
        "required": "Pole nie może być puste.",
        "checked": "Pole musi zostać zaznaczone.",
        "length_min": "Pole nie może mieć mniej niż {length} [znak,znaki,znaków].",
        "length_max": "Pole nie może mieć więcej niż {length} [znak,znaki,znaków].",
        "isEmail": "Podany adres e-mail jest niepoprawny.",
        "isInteger": "Podana wartość musi być liczbą całkowitą.",
        "invalidInt": "Niepoprawna wartość liczbowa.",
        "decimalMax": "Pole nie może mieć więcej niż {decimal} [miejsce,miejsca,miejsc] po przecinku.",
        "invalidEnum": "Nieprawidłowa wartość pola.",
    },
}


def plural_index(number: int) -> int:
    """
    Index of the word form for a count.

    Example:
        >>> [plural_index(n) for n in (1, 2, 5, 11, 12, 21, 22, 25)]
        [0, 1, 2, 2, 2, 0, 1, 2]
    """
    number = abs(int(number))
    last_digit = number % 10
    last_two_digits = number % 100

    if last_digit == 1 and last_two_digits != 11:
        return 0
    if last_digit in (2, 3, 4) and last_two_digits not in (12, 13, 14):
        return 1
    return 2


def inflect_word(number: Union[int, str], forms: Sequence[str]) -> str:
    """
    Join a number with the matching word form.

    Lists shorter than three forms reuse their last form.

    Example:
        >>> inflect_word(3, ["znak", "znaki", "znaków"])
        '3 znaki'
    """
    if not forms:
        return str(number)

    index = min(plural_index(int(number)), len(forms) - 1)
    return f"{number} {forms[index].strip()}"


def replace_inflections(text: str) -> str:
    """Collapse every "<number> [a,b,c]" group in text."""
    return _INFLECTION.sub(
        lambda match: inflect_word(match.group(1), match.group(2).split(",")),
        text,
    )


class MessageCatalog:
    """
    Rule messages for one language.

    Each validator owns its catalog, so changing a message for one form
    never leaks into another.

    Example:
        catalog = MessageCatalog(Locale.PL)
        catalog.format("length_min", length=5)
        # 'Pole nie może mieć mniej niż 5 znaków.'

        catalog.override(required="Please fill this in.")
    """

    def __init__(self, locale: Union[Locale, str] = Locale.EN) -> None:
        self.locale = self.parse_locale(locale)
        # Keys missing from a translation fall back to English
        self._messages: Dict[str, str] = {**DEFAULT_MESSAGES, **CATALOGS[self.locale]}

    @staticmethod
    def parse_locale(locale: Union[Locale, str]) -> Locale:
        if isinstance(locale, Locale):
            return locale
        try:
            return Locale(str(locale).strip().upper())
        except ValueError:
            raise LocaleNotSupportedError(str(locale)) from None

    @classmethod
    def from_name(cls, name: Optional[str]) -> "MessageCatalog":
        """Build a catalog from a config value; None gives English."""
        return cls(name or Locale.EN)

    def override(self, **messages: str) -> "MessageCatalog":
        """Replace individual message templates."""
        self._messages.update(messages)
        return self

    def get(self, key: str) -> str:
        return self._messages[key]

    def format(self, key: str, **params: object) -> str:
        """
        Render a message with its parameters and plural forms.

        Args:
            key: Message key, e.g. "length_min"
            **params: Values for {placeholders}

        Returns:
            Final message text
        """
        text = self._messages[key]

        for name, value in params.items():
            text = text.replace("{" + name + "}", str(value))

        return replace_inflections(text)

    def __contains__(self, key: str) -> bool:
        return key in self._messages

    def __repr__(self) -> str:
        return f"<MessageCatalog {self.locale.value}>"
