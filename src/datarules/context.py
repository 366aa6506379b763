"""Validation context: the registries and configuration a validation runs against.

A ValidationContext owns its own type, enum and rule set registries, so
separate contexts never see each other's registrations. Most applications
use the process-wide default context through the module-level helpers:

    from datarules import add_rules, validate

    add_rules("userRegister", [
        "email,email,required",
        "password,password,required",
        "confirmpassword,compare,required,,password",
    ])
    errors = validate("userRegister", request_body)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from datarules.config import ValidationConfig
from datarules.registry import EnumRegistry, RuleRegistry, TypeRegistry
from datarules.types import Rule, RuleSet
from datarules.validators import register_builtin_types

logger = logging.getLogger(__name__)


class ValidationContext:
    """Holds the registries and configuration used by validators.

    Attributes:
        config: Auth roles and password policy
        types: Type name -> validator
        enums: Enumeration name -> allowed values
        rules: Rule set title -> rules
    """

    def __init__(
        self,
        config: ValidationConfig | None = None,
        builtins: bool = True,
    ):
        self.config = config if config is not None else ValidationConfig()
        self.types = TypeRegistry()
        self.enums = EnumRegistry()
        self.rules = RuleRegistry()
        if builtins:
            register_builtin_types(self.types)

    @classmethod
    def from_env(cls) -> ValidationContext:
        """Create a context whose configuration is read from the environment."""
        return cls(config=ValidationConfig.from_env())

    def add_rules(self, title: str, rule_strings: Iterable[str]) -> RuleSet:
        """Parse and register a rule set. See RuleRegistry.add."""
        return self.rules.add(title, rule_strings)

    def validate_rule(self, rule: Rule, data: dict[str, Any], errors: list[str]) -> bool:
        """Validate a single rule by dispatching on its type."""
        return self.types.validate(rule, data, errors, self)

    def validate(self, title: str, data: dict[str, Any]) -> list[str]:
        """Validate a record against a registered rule set.

        Every rule runs in declared order, whatever earlier rules reported.
        Coerced values are written back into ``data``.

        Args:
            title: Rule set title (normalized before lookup)
            data: The record to validate, mutated in place

        Returns:
            Error messages in rule order. Empty means valid.

        Raises:
            NotRegisteredError: If the title or a rule's type is not registered
        """
        rule_set = self.rules.get(title)
        errors: list[str] = []
        for rule in rule_set.rules:
            self.validate_rule(rule, data, errors)

        if errors:
            logger.debug("Rule set '%s' reported %d error(s)", rule_set.title, len(errors))
        return errors

    def freeze(self) -> ValidationContext:
        """Make every registry read-only.

        A frozen context can validate different records from several threads.
        """
        self.types.freeze()
        self.enums.freeze()
        self.rules.freeze()
        return self

    @property
    def frozen(self) -> bool:
        return self.types.frozen and self.enums.frozen and self.rules.frozen


# =============================================================================
# Default Context
# =============================================================================

_default_context: ValidationContext | None = None


def get_default_context() -> ValidationContext:
    """Return the process-wide context, creating it from the environment on first use."""
    global _default_context
    if _default_context is None:
        _default_context = ValidationContext.from_env()
        logger.debug("Created default validation context")
    return _default_context


def set_default_context(context: ValidationContext | None) -> None:
    """Replace the process-wide context. None resets it. Primarily for testing."""
    global _default_context
    _default_context = context


def add_rules(title: str, rule_strings: Iterable[str]) -> RuleSet:
    """Register a rule set in the default context."""
    return get_default_context().add_rules(title, rule_strings)


def find_rules(title: str) -> RuleSet | None:
    """Find a rule set in the default context."""
    return get_default_context().rules.find(title)


def validate(title: str, data: dict[str, Any]) -> list[str]:
    """Validate a record against a rule set of the default context."""
    return get_default_context().validate(title, data)
