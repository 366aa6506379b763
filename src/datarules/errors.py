"""Configuration errors for datarules.

Validation failures caused by bad input data are never raised; they are
collected as strings and returned by ``validate``. The exceptions in this
module signal that the engine itself is mis-wired: an unknown rule set or
type, a malformed rule string, a duplicate registration, and so on.
"""


class ConfigurationError(ValueError):
    """Base class for setup mistakes (programmer errors, not data errors)."""


class RuleDefinitionError(ConfigurationError):
    """A rule string or rule parameter is malformed."""


class DuplicateEntryError(ConfigurationError):
    """A type, enum or rule set with the same key is already registered."""


class NotRegisteredError(ConfigurationError, LookupError):
    """A type, enum or rule set was referenced but never registered."""


class RegistryFrozenError(ConfigurationError):
    """A frozen registry was asked to change."""
