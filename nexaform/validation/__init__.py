"""
NexaForm Validation System
==========================

Rule-based validation of submitted form data.

Features:
- Ordered rules per field, first failure wins
- Built-in rules: required, checked, length, isEmail, isInteger,
  isDecimal, enum
- Custom callables raising ValidationFailure
- English and Polish messages with plural-aware wording
"""

from nexaform.exceptions import ValidationError, ValidationFailure
from nexaform.validation.messages import (
    Locale,
    MessageCatalog,
    inflect_word,
    plural_index,
    replace_inflections,
)
from nexaform.validation.rules import (
    CallableRule,
    Checked,
    EnumRule,
    IsDecimal,
    IsEmail,
    IsInteger,
    Length,
    Required,
    Rule,
)
from nexaform.validation.validator import (
    RuleSpec,
    Validator,
    validate,
    validate_or_fail,
)

__all__ = [
    # Core
    "Validator",
    "RuleSpec",
    "ValidationError",
    "ValidationFailure",
    "validate",
    "validate_or_fail",
    # Rules
    "Rule",
    "Required",
    "Checked",
    "Length",
    "IsEmail",
    "IsInteger",
    "IsDecimal",
    "EnumRule",
    "CallableRule",
    # Messages
    "Locale",
    "MessageCatalog",
    "inflect_word",
    "plural_index",
    "replace_inflections",
]
