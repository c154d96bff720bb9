"""
NexaForm Validator
==================

Core validation engine.

Runs an ordered rule list per field against the submitted payload and
returns one message per failing field. The first failing rule of a
field stops that field; the remaining fields are still checked.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from nexaform.core.paths import resolve
from nexaform.exceptions import RuleSpecError, ValidationError, ValidationFailure
from nexaform.utils.logger import get_logger
from nexaform.validation.messages import Locale, MessageCatalog
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

# One entry of a field's rule list
RuleEntry = Union[str, Rule, Callable[[Any], Any], Mapping[str, Any], Tuple[str, Any]]

# Field path -> ordered rule entries
RuleSpec = Mapping[str, Sequence[RuleEntry]]

logger = get_logger("nexaform.validation")


def _length(params: Any) -> Rule:
    if not isinstance(params, Mapping) or not ({"min", "max"} & set(params)):
        raise RuleSpecError("length expects a mapping with 'min' and/or 'max'")
    return Length(min=params.get("min"), max=params.get("max"))


def _decimal(params: Any) -> Rule:
    if params is None:
        return IsDecimal()
    if not isinstance(params, Mapping):
        raise RuleSpecError("isDecimal expects a mapping like {'maxPlaces': 2}")
    return IsDecimal(max_places=params.get("maxPlaces", params.get("max_places", 2)))


def _no_params(factory: Callable[[], Rule]) -> Callable[[Any], Rule]:
    def create(params: Any) -> Rule:
        if params is not None:
            raise RuleSpecError(f"rule takes no parameters, got {params!r}")
        return factory()
    return create


def _enum(params: Any) -> Rule:
    if params is None:
        raise RuleSpecError("enum expects an Enum class or a list of names")
    return EnumRule(params)


class Validator:
    """
    Main validation class.

    Validates a nested payload against rules keyed by field path.

    Example:
        validator = Validator(
            {
                "user/name": ["required", {"length": {"min": 3, "max": 50}}],
                "user/email": ["required", "isEmail"],
                "price": [{"isDecimal": {"maxPlaces": 2}}],
                "terms": ["checked"],
            },
            data,
        )

        errors = validator.run()
        # {"user/email": "The provided email address is invalid."}
    """

    # Built-in rule names
    RULE_ALIASES: Dict[str, Callable[[Any], Rule]] = {
        "required": _no_params(Required),
        "checked": _no_params(Checked),
        "length": _length,
        "isEmail": _no_params(IsEmail),
        "is_email": _no_params(IsEmail),
        "isInteger": _no_params(IsInteger),
        "is_integer": _no_params(IsInteger),
        "isDecimal": _decimal,
        "is_decimal": _decimal,
        "enum": _enum,
    }

    def __init__(
        self,
        rules: RuleSpec,
        data: Optional[Mapping[str, Any]] = None,
        catalog: Optional[MessageCatalog] = None,
    ) -> None:
        """
        Initialize validator.

        Args:
            rules: Ordered rule entries per field path
            data: Escaped submission payload
            catalog: Messages for built-in rules (English by default)

        Raises:
            RuleSpecError: A rule entry cannot be understood
        """
        self.rules = self._parse_rules(rules)
        self.data: Mapping[str, Any] = data or {}
        self.catalog = catalog or MessageCatalog()

    def _parse_rules(self, rules: RuleSpec) -> Dict[str, List[Rule]]:
        """Parse rule specifications into Rule objects."""
        if not isinstance(rules, Mapping):
            raise RuleSpecError(f"rules must map field paths to rule lists, got {type(rules).__name__}")

        parsed: Dict[str, List[Rule]] = {}

        for path, entries in rules.items():
            if not isinstance(path, str) or not path:
                raise RuleSpecError(f"field path must be a non-empty string, got {path!r}")

            if isinstance(entries, (str, bytes)) or not isinstance(entries, Sequence):
                raise RuleSpecError("rules for a field must be a list", field=path)

            parsed[path] = [self._parse_entry(path, entry) for entry in entries]

        return parsed

    def _parse_entry(self, path: str, entry: RuleEntry) -> Rule:
        """Parse a single rule entry."""
        if isinstance(entry, Rule):
            return entry

        if isinstance(entry, str):
            return self._create_rule(path, entry, None)

        if isinstance(entry, tuple):
            if len(entry) != 2 or not isinstance(entry[0], str):
                raise RuleSpecError(f"rule tuple must be (name, params), got {entry!r}", field=path)
            return self._create_rule(path, entry[0], entry[1])

        if isinstance(entry, Mapping):
            if len(entry) != 1:
                raise RuleSpecError(f"rule mapping must hold exactly one rule, got {list(entry)!r}", field=path)
            name, params = next(iter(entry.items()))
            return self._create_rule(path, name, params)

        if callable(entry):
            return CallableRule(entry)

        raise RuleSpecError(f"unsupported rule entry {entry!r}", field=path)

    def _create_rule(self, path: str, name: str, params: Any) -> Rule:
        """Create rule from name and parameters."""
        creator = self.RULE_ALIASES.get(name)

        if creator is None:
            raise RuleSpecError(f"unknown rule '{name}'", field=path)

        try:
            return creator(params)
        except RuleSpecError as exc:
            if exc.field is None:
                raise RuleSpecError(str(exc), field=path) from exc
            raise

    @property
    def fields(self) -> List[str]:
        """Field paths in validation order."""
        return list(self.rules)

    def value(self, path: str) -> Any:
        """Bound value of a field (ABSENT if not submitted)."""
        return resolve(path, self.data)

    def run(self) -> Dict[str, str]:
        """
        Validate every field.

        Returns:
            Field path -> first failure message. Empty when all pass.
        """
        errors: Dict[str, str] = {}

        for path, rules in self.rules.items():
            message = self._validate_field(path, rules)
            if message is not None:
                errors[path] = message

        logger.debug(
            "Validation finished",
            fields=len(self.rules),
            failed=len(errors),
            locale=self.catalog.locale.value,
        )

        return errors

    def _validate_field(self, path: str, rules: List[Rule]) -> Optional[str]:
        """Return the first failure message for one field, if any."""
        value = self.value(path)

        for rule in rules:
            try:
                rule.validate(value, self.catalog)
            except ValidationFailure as failure:
                logger.debug("Field rejected", field=path, rule=rule.name)
                return failure.message

        return None


# Convenience functions

def validate(
    data: Mapping[str, Any],
    rules: RuleSpec,
    locale: Union[Locale, str] = Locale.EN,
) -> Dict[str, str]:
    """
    Validate data with rules.

    Example:
        errors = validate(
            {"email": "not-an-address"},
            {"email": ["required", "isEmail"]},
        )
    """
    return Validator(rules, data, MessageCatalog(locale)).run()


def validate_or_fail(
    data: Mapping[str, Any],
    rules: RuleSpec,
    locale: Union[Locale, str] = Locale.EN,
) -> Mapping[str, Any]:
    """
    Validate data and raise on failure.

    Returns the data unchanged when every field passes.

    Raises:
        ValidationError: At least one field failed
    """
    errors = validate(data, rules, locale)

    if errors:
        raise ValidationError(errors=errors)

    return data
