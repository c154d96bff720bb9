"""
NexaForm Exceptions
===================

Configuration problems are raised to the caller immediately. Field
failures travel as ValidationFailure from a rule to the validator,
which turns them into entries of the error map.
"""

from __future__ import annotations

from typing import Dict, Optional


class NexaFormError(Exception):
    """Base class for all package errors."""


class FormConfigurationError(NexaFormError):
    """A form, rule list or locale was declared incorrectly."""


class RuleSpecError(FormConfigurationError):
    """A rule entry could not be turned into a rule."""

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        if field is not None:
            message = f"{message} (field '{field}')"
        super().__init__(message)
        self.field = field


class LocaleNotSupportedError(FormConfigurationError):
    """Requested message catalog does not exist."""

    def __init__(self, locale: str) -> None:
        super().__init__(f"Language not supported: {locale}")
        self.locale = locale


class FormNotFoundError(NexaFormError, LookupError):
    """No form builder is registered under the given name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Form not found: {name}")
        self.name = name


class ValidationFailure(NexaFormError):
    """
    Raised by a rule when the value does not pass.

    Custom rules raise it with their own message:

        def no_admin(value):
            if value == "admin":
                raise ValidationFailure("This name is reserved.")
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(NexaFormError):
    """
    Validation failed exception.

    Carries the whole error map, one message per field.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        errors: Optional[Dict[str, str]] = None,
    ) -> None:
        super().__init__(message)
        self.errors = errors or {}

    def __str__(self) -> str:
        if self.errors:
            lines = [f"  - {path}: {text}" for path, text in self.errors.items()]
            return "Validation failed:\n" + "\n".join(lines)
        return "Validation failed"

    def first(self, path: Optional[str] = None) -> Optional[str]:
        """Get first error message, optionally for one field."""
        if path is not None:
            return self.errors.get(path)
        for text in self.errors.values():
            return text
        return None
