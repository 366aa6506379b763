"""Registries for datarules.

Provides registration and lookup for:
- Types (type name -> validator)
- Enums (enum name -> allowed values)
- Rule sets (title -> parsed rules)

Each registry is an in-memory, insertion-ordered store owned by a
ValidationContext. Keys are matched case-insensitively.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from datarules.errors import DuplicateEntryError, NotRegisteredError, RegistryFrozenError
from datarules.rules import normalize_title, parse_rules
from datarules.types import EnumEntry, Rule, RuleSet, TypeEntry, Validator, ValidatorKind

if TYPE_CHECKING:
    from datarules.context import ValidationContext

logger = logging.getLogger(__name__)

E = TypeVar("E")


class _Registry(Generic[E]):
    """Insertion-ordered store keyed by a case-insensitive name."""

    kind = "entry"

    def __init__(self) -> None:
        self._entries: dict[str, E] = {}
        self._frozen = False

    @staticmethod
    def _key(name: str) -> str:
        return name.strip().lower()

    def _check_mutable(self) -> None:
        if self._frozen:
            raise RegistryFrozenError(f"{self.kind.capitalize()} registry is frozen")

    def _insert(self, name: str, entry: E) -> E:
        self._check_mutable()
        key = self._key(name)
        if key in self._entries:
            raise DuplicateEntryError(f"{self.kind.capitalize()} '{name}' is already defined")
        self._entries[key] = entry
        logger.debug("Registered %s '%s'", self.kind, name)
        return entry

    def _lookup(self, name: str) -> E | None:
        return self._entries.get(self._key(name))

    def _require(self, name: str) -> E:
        entry = self._lookup(name)
        if entry is None:
            raise NotRegisteredError(f"{self.kind.capitalize()} '{name}' is not defined")
        return entry

    def remove(self, name: str) -> None:
        """Remove an entry.

        Raises:
            NotRegisteredError: If nothing is registered under the name
        """
        self._check_mutable()
        self._require(name)
        del self._entries[self._key(name)]
        logger.debug("Removed %s '%s'", self.kind, name)

    def is_registered(self, name: str) -> bool:
        return self._key(name) in self._entries

    def freeze(self) -> None:
        """Make the registry read-only for the rest of its life."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def clear(self) -> None:
        """Clear all registrations. Primarily for testing."""
        self._check_mutable()
        self._entries.clear()

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.is_registered(name)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[E]:
        return iter(list(self._entries.values()))


class TypeRegistry(_Registry[TypeEntry]):
    """Registry mapping type names to validators.

    Example:
        types.add("zipcode", zipcode_validator)
        entry = types.find("zipcode")
        entry.validator(rule, record, errors, ctx)
    """

    kind = "type"

    def add(
        self,
        type_name: str,
        validator: Validator,
        kind: ValidatorKind = ValidatorKind.CUSTOM,
    ) -> TypeEntry:
        """Register a validator for a new type.

        Raises:
            DuplicateEntryError: If the type is already defined
        """
        return self._insert(type_name, TypeEntry(type=type_name, validator=validator, kind=kind))

    def find(self, type_name: str) -> TypeEntry | None:
        """Find a type entry, or None if the type is not registered."""
        return self._lookup(type_name)

    def update(self, type_name: str, validator: Validator) -> TypeEntry:
        """Replace the validator of an existing type.

        The entry becomes CUSTOM, even if it was a built-in.

        Raises:
            NotRegisteredError: If the type is not defined
        """
        self._check_mutable()
        entry = self._require(type_name)
        entry.validator = validator
        entry.kind = ValidatorKind.CUSTOM
        logger.debug("Updated type '%s'", type_name)
        return entry

    def list_registered(self) -> list[str]:
        """List registered type names in registration order."""
        return [entry.type for entry in self._entries.values()]

    def validate(
        self,
        rule: Rule,
        data: dict[str, Any],
        errors: list[str],
        context: ValidationContext,
    ) -> bool:
        """Run the validator registered for the rule's type.

        Raises:
            NotRegisteredError: If the rule's type is not defined
        """
        entry = self._lookup(rule.type)
        if entry is None:
            raise NotRegisteredError(
                f"Type '{rule.type}' of property '{rule.name}' is not defined. "
                "Available types: " + ", ".join(self.list_registered())
            )
        return entry.validator(rule, data, errors, context)


class EnumRegistry(_Registry[EnumEntry]):
    """Registry mapping enumeration names to their allowed values."""

    kind = "enum"

    def add(self, name: str, values: Iterable[str]) -> EnumEntry:
        """Register a new enumeration.

        Raises:
            DuplicateEntryError: If the enum is already defined
        """
        return self._insert(name, EnumEntry(name=name, values=_as_values(name, values)))

    def find(self, name: str) -> EnumEntry | None:
        """Find an enum entry, or None if it is not registered."""
        return self._lookup(name)

    def get(self, name: str) -> EnumEntry:
        """Get an enum entry.

        Raises:
            NotRegisteredError: If the enum is not defined
        """
        return self._require(name)

    def update(self, name: str, values: Iterable[str]) -> EnumEntry:
        """Replace the values of an existing enumeration.

        Raises:
            NotRegisteredError: If the enum is not defined
        """
        self._check_mutable()
        entry = self._require(name)
        entry.values = _as_values(name, values)
        logger.debug("Updated enum '%s'", name)
        return entry

    def list_registered(self) -> list[str]:
        return [entry.name for entry in self._entries.values()]


class RuleRegistry(_Registry[RuleSet]):
    """Registry of titled rule sets.

    Titles are normalized (stripped, lowercased). Rule sets are immutable
    once added; there is no update.
    """

    kind = "rule set"

    @staticmethod
    def _key(name: str) -> str:
        return normalize_title(name)

    def add(self, title: str, rule_strings: Iterable[str]) -> RuleSet:
        """Parse and register a rule set.

        Raises:
            DuplicateEntryError: If a set with the same title exists; the
                existing set is left untouched
            RuleDefinitionError: If any rule string is malformed
        """
        self._check_mutable()
        if self.is_registered(title):
            raise DuplicateEntryError(f"[{title}] Duplicate definition of rules")
        rule_set = parse_rules(title, rule_strings)
        return self._insert(title, rule_set)

    def find(self, title: str) -> RuleSet | None:
        """Find a rule set, or None if the title is not registered."""
        return self._lookup(title)

    def get(self, title: str) -> RuleSet:
        """Get a rule set.

        Raises:
            NotRegisteredError: If the title is not registered
        """
        rule_set = self._lookup(title)
        if rule_set is None:
            raise NotRegisteredError(f"\"{title}\" rules not defined")
        return rule_set

    def list_registered(self) -> list[str]:
        return [rule_set.title for rule_set in self._entries.values()]


def _as_values(name: str, values: Iterable[str]) -> tuple[str, ...]:
    if isinstance(values, str):
        raise TypeError(f"Enum '{name}' values must be a list of strings, not a string")
    return tuple(values)
