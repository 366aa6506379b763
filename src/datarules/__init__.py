"""datarules: declarative record validation.

A rule set is a titled list of rule strings. Each rule names a field, its
type, whether it is required, an optional default, and type-specific params.
Validation dispatches each rule to the validator registered for its type,
coerces values in place and collects human-readable error messages.

Usage:
    from datarules import ValidationContext

    ctx = ValidationContext()
    ctx.enums.add("Colors", ["Red", "Green", "Blue"])
    ctx.add_rules("paint", [
        "color,enum,required,,Colors",
        "coats,integer,optional,1,1,5",
    ])

    record = {"color": "red", "coats": "2"}
    errors = ctx.validate("paint", record)
    # errors == [], record == {"color": "Red", "coats": 2}
"""

from datarules.config import PasswordPolicy, ValidationConfig
from datarules.confirm import Confirm
from datarules.context import (
    ValidationContext,
    add_rules,
    find_rules,
    get_default_context,
    set_default_context,
    validate,
)
from datarules.errors import (
    ConfigurationError,
    DuplicateEntryError,
    NotRegisteredError,
    RegistryFrozenError,
    RuleDefinitionError,
)
from datarules.loader import load_rules, load_rules_file
from datarules.registry import EnumRegistry, RuleRegistry, TypeRegistry
from datarules.rules import parse_rule, parse_rules
from datarules.types import (
    INVALID,
    EnumEntry,
    Rule,
    RuleSet,
    TypeEntry,
    Validator,
    ValidatorKind,
    is_invalid,
)
from datarules.validators import valid_value

__all__ = [
    # Types
    "INVALID",
    "EnumEntry",
    "Rule",
    "RuleSet",
    "TypeEntry",
    "Validator",
    "ValidatorKind",
    "is_invalid",
    # Errors
    "ConfigurationError",
    "DuplicateEntryError",
    "NotRegisteredError",
    "RegistryFrozenError",
    "RuleDefinitionError",
    # Configuration
    "PasswordPolicy",
    "ValidationConfig",
    # Registries
    "EnumRegistry",
    "RuleRegistry",
    "TypeRegistry",
    # Rules
    "parse_rule",
    "parse_rules",
    "valid_value",
    # Context
    "ValidationContext",
    "add_rules",
    "find_rules",
    "get_default_context",
    "set_default_context",
    "validate",
    # Front ends
    "Confirm",
    "load_rules",
    "load_rules_file",
]
