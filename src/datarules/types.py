"""Core types for the datarules validation engine.

- Rule / RuleSet: declarative field rules, grouped under a title
- TypeEntry / EnumEntry: registry records
- INVALID: the parse-failure sentinel returned by every parser
- ValidatorKind: discriminator for built-in and custom validators
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable

if TYPE_CHECKING:
    from datarules.context import ValidationContext


class _Invalid:
    """Marker returned by parsers when a value cannot be converted.

    There is exactly one instance, ``INVALID``. It is falsy but is not equal
    to ``None``, ``0``, ``False`` or NaN, so a parse failure can never be
    confused with a legitimate parsed value.
    """

    _instance: _Invalid | None = None

    def __new__(cls) -> _Invalid:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "INVALID"

    def __reduce__(self) -> str:
        return "INVALID"


INVALID = _Invalid()


def is_invalid(value: Any) -> bool:
    """Return True if a parser result is the INVALID marker."""
    return value is INVALID


@dataclass(frozen=True)
class Rule:
    """Validation rule for a single field.

    Attributes:
        name: Field name looked up in the record
        type: Type name resolved in the type registry at validation time
        required: Absence is an error unless a default is present
        default_value: Written verbatim (never parsed) when the field is absent
        params: Type-specific parameters, kept as the raw strings
    """

    name: str
    type: str
    required: bool = True
    default_value: Any = None
    params: tuple[str, ...] = ()

    @property
    def has_default(self) -> bool:
        return self.default_value is not None

    def param(self, index: int, strip: bool = True) -> str | None:
        """Return a parameter by position, or None when missing or blank.

        Names and bounds are read stripped; pass ``strip=False`` for values
        where surrounding whitespace is significant, such as regex patterns.
        """
        if index >= len(self.params):
            return None
        value = self.params[index]
        if not value.strip():
            return None
        return value.strip() if strip else value


@dataclass(frozen=True)
class RuleSet:
    """A named, ordered collection of rules."""

    title: str
    rules: tuple[Rule, ...] = ()

    @property
    def field_names(self) -> list[str]:
        return [rule.name for rule in self.rules]

    def __len__(self) -> int:
        return len(self.rules)


# Validator signature: (rule, record, errors, context) -> passed
Validator = Callable[[Rule, "dict[str, Any]", "list[str]", "ValidationContext"], bool]


class ValidatorKind(Enum):
    """Kind of a registered validator.

    Built-in types have their own member; anything registered at runtime
    through ``TypeRegistry.add`` or ``TypeRegistry.update`` is CUSTOM.
    """

    AUTH_ROLE = "authRole"
    BOOLEAN = "boolean"
    COMPARE = "compare"
    DATE = "date"
    EMAIL = "email"
    ENUM = "enum"
    FLOAT = "float"
    INTEGER = "integer"
    PASSWORD = "password"
    REGEX = "regex"
    STRING = "string"
    TIME = "time"
    CUSTOM = "custom"

    @property
    def is_builtin(self) -> bool:
        return self is not ValidatorKind.CUSTOM


@dataclass
class TypeEntry:
    """A registered type and the validator that handles it."""

    type: str
    validator: Validator
    kind: ValidatorKind = ValidatorKind.CUSTOM


@dataclass
class EnumEntry:
    """A named enumeration and its allowed values, in declared order."""

    name: str
    values: tuple[str, ...] = field(default_factory=tuple)
