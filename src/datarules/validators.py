"""Validators for the built-in datarules types.

Every scalar validator wraps the shared protocol ``valid_value`` around a
type-specific parser:

1. Absent field: apply the default, or report "<name> is required"
2. Present field: parse it, or report "<name> is not a valid <type>"
3. Write the parsed value back into the record (coercion)

Validators that accept bounds then run a constrain phase on the coerced
value. Relational validators (compare, enum, regex) add their own checks on
top of the same protocol.

All validators share one signature: ``(rule, data, errors, context) -> bool``.
"""

from __future__ import annotations

import re
from functools import lru_cache, partial
from typing import TYPE_CHECKING, Any, Callable

from datarules.errors import RuleDefinitionError
from datarules.parsers import (
    auth_role_parser,
    boolean_parser,
    date_parser,
    email_parser,
    enum_parser,
    float_parser,
    integer_parser,
    password_parser,
    string_parser,
    time_parser,
)
from datarules.strings import CASINGS
from datarules.types import INVALID, Rule, Validator, ValidatorKind

if TYPE_CHECKING:
    from datarules.context import ValidationContext
    from datarules.registry import TypeRegistry

Parser = Callable[[Any], Any]


# =============================================================================
# Shared Protocol
# =============================================================================


def apply_absence(rule: Rule, data: dict[str, Any], errors: list[str]) -> bool:
    """Handle a field missing from the record.

    A default is written as-is and never parsed. Without a default, a
    required field is an error and an optional one is left absent.
    """
    if rule.has_default:
        data[rule.name] = rule.default_value
        return True
    if rule.required:
        errors.append(f"{rule.name} is required")
        return False
    return True


def valid_value(
    rule: Rule,
    data: dict[str, Any],
    parser: Parser,
    errors: list[str],
    label: str | None = None,
) -> bool:
    """Validate one field with a parser and coerce it in place.

    Args:
        rule: The field rule
        data: The record, mutated in place
        parser: Returns the canonical value or INVALID
        errors: Error sink, appended to on failure
        label: Type name used in the error message (defaults to rule.type)

    Returns:
        True if the field is absent-but-acceptable or parsed successfully
    """
    if rule.name not in data:
        return apply_absence(rule, data, errors)

    value = parser(data[rule.name])
    if value is INVALID:
        errors.append(f"{rule.name} is not a valid {label or rule.type}")
        return False

    data[rule.name] = value
    return True


# =============================================================================
# Constrain Phase
# =============================================================================


def _time_key(value: str) -> tuple[int, ...]:
    parts = [int(part) for part in value.split(":")]
    return tuple(parts + [0] * (3 - len(parts)))


def _naive(value: Any) -> Any:
    # Aware and naive datetimes cannot be ordered against each other
    return value.replace(tzinfo=None)


def _bound(rule: Rule, index: int, parser: Parser) -> tuple[Any, str | None]:
    raw = rule.param(index)
    if raw is None:
        return None, None
    value = parser(raw)
    if value is INVALID:
        which = "minimum" if index == 0 else "maximum"
        raise RuleDefinitionError(
            f"'{rule.name}' has an invalid {which} '{raw}' for type '{rule.type}'"
        )
    return value, raw


def check_range(
    rule: Rule,
    value: Any,
    errors: list[str],
    parser: Parser,
    key: Callable[[Any], Any] = lambda v: v,
) -> bool:
    """Check a coerced value against the rule's min/max params."""
    low, low_raw = _bound(rule, 0, parser)
    high, high_raw = _bound(rule, 1, parser)

    if low is not None and key(value) < key(low):
        errors.append(f"{rule.name} cannot be less than {low_raw}")
        return False
    if high is not None and key(value) > key(high):
        errors.append(f"{rule.name} cannot be greater than {high_raw}")
        return False
    return True


def check_length(rule: Rule, value: str, errors: list[str]) -> bool:
    """Check a coerced string's length against the rule's min/max params."""
    low, _ = _bound(rule, 0, integer_parser)
    high, _ = _bound(rule, 1, integer_parser)

    if low is not None and len(value) < low:
        errors.append(f"{rule.name} must be at least {low} characters")
        return False
    if high is not None and len(value) > high:
        errors.append(f"{rule.name} must be no more than {high} characters")
        return False
    return True


def _bounded(
    rule: Rule,
    data: dict[str, Any],
    errors: list[str],
    parser: Parser,
    check: Callable[[Rule, Any, list[str]], bool],
) -> bool:
    present = rule.name in data
    if not valid_value(rule, data, parser, errors):
        return False
    if not present:
        return True
    return check(rule, data[rule.name], errors)


# =============================================================================
# Scalar Validators
# =============================================================================


def valid_auth_role(
    rule: Rule, data: dict[str, Any], errors: list[str], context: ValidationContext
) -> bool:
    parser = partial(auth_role_parser, roles=context.config.auth_roles)
    return valid_value(rule, data, parser, errors)


def valid_boolean(
    rule: Rule, data: dict[str, Any], errors: list[str], context: ValidationContext
) -> bool:
    return valid_value(rule, data, boolean_parser, errors)


def valid_date(
    rule: Rule, data: dict[str, Any], errors: list[str], context: ValidationContext
) -> bool:
    return _bounded(
        rule, data, errors, date_parser,
        lambda r, v, e: check_range(r, v, e, date_parser, key=_naive),
    )


def valid_email(
    rule: Rule, data: dict[str, Any], errors: list[str], context: ValidationContext
) -> bool:
    return _bounded(rule, data, errors, email_parser, check_length)


def valid_float(
    rule: Rule, data: dict[str, Any], errors: list[str], context: ValidationContext
) -> bool:
    return _bounded(
        rule, data, errors, float_parser,
        lambda r, v, e: check_range(r, v, e, float_parser),
    )


def valid_integer(
    rule: Rule, data: dict[str, Any], errors: list[str], context: ValidationContext
) -> bool:
    return _bounded(
        rule, data, errors, integer_parser,
        lambda r, v, e: check_range(r, v, e, float_parser),
    )


def valid_password(
    rule: Rule, data: dict[str, Any], errors: list[str], context: ValidationContext
) -> bool:
    parser = partial(password_parser, policy=context.config.password)
    return _bounded(rule, data, errors, parser, check_length)


def valid_string(
    rule: Rule, data: dict[str, Any], errors: list[str], context: ValidationContext
) -> bool:
    """String with optional length bounds and a casing conversion.

    Params: min length, max length, casing (upper, lower, title or first).
    """
    casing = rule.param(2)
    convert = None
    if casing is not None:
        convert = CASINGS.get(casing.lower())
        if convert is None:
            raise RuleDefinitionError(
                f"'{rule.name}' cannot be converted to '{casing}'. "
                "Valid casings: " + ", ".join(CASINGS)
            )

    present = rule.name in data
    if not valid_value(rule, data, string_parser, errors):
        return False
    if not present:
        return True

    if convert is not None:
        data[rule.name] = convert(data[rule.name])
    return check_length(rule, data[rule.name], errors)


def valid_time(
    rule: Rule, data: dict[str, Any], errors: list[str], context: ValidationContext
) -> bool:
    return _bounded(
        rule, data, errors, time_parser,
        lambda r, v, e: check_range(r, v, e, time_parser, key=_time_key),
    )


# =============================================================================
# Relational Validators
# =============================================================================


def valid_compare(
    rule: Rule, data: dict[str, Any], errors: list[str], context: ValidationContext
) -> bool:
    """Require the field to equal another field, with no type coercion.

    Params: name of the other field.
    """
    other = rule.param(0)
    if other is None:
        raise RuleDefinitionError(
            f"'{rule.name}' is type '{rule.type}' and must specify the field to compare with"
        )

    if rule.name not in data:
        return apply_absence(rule, data, errors)

    value = data[rule.name]
    if other not in data or not _strict_equal(value, data[other]):
        errors.append(f"{rule.name} does not match {other}")
        return False
    return True


def _strict_equal(left: Any, right: Any) -> bool:
    return type(left) is type(right) and left == right


def valid_enum(
    rule: Rule, data: dict[str, Any], errors: list[str], context: ValidationContext
) -> bool:
    """Match the field against a registered enumeration.

    Params: enumeration name.

    Raises:
        NotRegisteredError: If the enumeration is not registered
    """
    enum_name = rule.param(0)
    if enum_name is None:
        raise RuleDefinitionError(
            f"'{rule.name}' is type '{rule.type}' and must specify an enumeration name"
        )

    entry = context.enums.get(enum_name)
    parser = partial(enum_parser, allowed=entry.values)
    return valid_value(rule, data, parser, errors, label=entry.name)


@lru_cache(maxsize=256)
def compile_pattern(pattern: str) -> re.Pattern[str]:
    try:
        return re.compile(pattern)
    except re.error as e:
        raise RuleDefinitionError(f"Invalid regular expression '{pattern}': {e}") from e


def valid_regex(
    rule: Rule, data: dict[str, Any], errors: list[str], context: ValidationContext
) -> bool:
    """String that must contain a match for a pattern.

    Params: regular expression.
    """
    pattern = rule.param(0, strip=False)
    if pattern is None:
        raise RuleDefinitionError(
            f"'{rule.name}' is type '{rule.type}' and must specify a regular expression pattern"
        )
    compiled = compile_pattern(pattern)

    present = rule.name in data
    if not valid_value(rule, data, string_parser, errors):
        return False
    if not present:
        return True

    if not compiled.search(data[rule.name]):
        errors.append(f"{rule.name} does not match pattern {pattern}")
        return False
    return True


# =============================================================================
# Registration
# =============================================================================

BUILTIN_VALIDATORS: dict[ValidatorKind, Validator] = {
    ValidatorKind.AUTH_ROLE: valid_auth_role,
    ValidatorKind.BOOLEAN: valid_boolean,
    ValidatorKind.COMPARE: valid_compare,
    ValidatorKind.DATE: valid_date,
    ValidatorKind.EMAIL: valid_email,
    ValidatorKind.ENUM: valid_enum,
    ValidatorKind.FLOAT: valid_float,
    ValidatorKind.INTEGER: valid_integer,
    ValidatorKind.PASSWORD: valid_password,
    ValidatorKind.REGEX: valid_regex,
    ValidatorKind.STRING: valid_string,
    ValidatorKind.TIME: valid_time,
}


def register_builtin_types(types: TypeRegistry) -> None:
    """Register every built-in type with a type registry."""
    for kind, validator in BUILTIN_VALIDATORS.items():
        types.add(kind.value, validator, kind=kind)
