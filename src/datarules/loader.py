"""Load enums and rule sets from YAML files.

File layout:

    enums:
      Colors: [Red, Green, Blue]

    ruleSets:
      userRegister:
        - firstname,string,required,,1,20
        - email,email,required
        - color,enum,optional,Red,Colors

Enums are registered before rule sets so rules may refer to them.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from datarules.context import ValidationContext, get_default_context
from datarules.errors import ConfigurationError
from datarules.types import RuleSet

logger = logging.getLogger(__name__)


def load_rules(data: Any, context: ValidationContext | None = None) -> list[RuleSet]:
    """Register the enums and rule sets of an already-parsed document.

    Args:
        data: Mapping with optional ``enums`` and ``ruleSets`` keys
        context: Target context (defaults to the process-wide one)

    Returns:
        The rule sets that were registered, in file order

    Raises:
        ConfigurationError: If the document does not have the expected shape
    """
    context = context if context is not None else get_default_context()

    if data is None:
        return []
    if not isinstance(data, dict):
        raise ConfigurationError("Rules document must be a mapping")

    enums = data.get("enums") or {}
    rule_sets = data.get("ruleSets") or {}
    if not isinstance(enums, dict):
        raise ConfigurationError("'enums' must map enum names to lists of values")
    if not isinstance(rule_sets, dict):
        raise ConfigurationError("'ruleSets' must map titles to lists of rule strings")

    for name, values in enums.items():
        if not isinstance(values, list):
            raise ConfigurationError(f"Enum '{name}' must be a list of values")
        context.enums.add(str(name), [str(v) for v in values])

    registered = []
    for title, rule_strings in rule_sets.items():
        if not isinstance(rule_strings, list):
            raise ConfigurationError(f"Rule set '{title}' must be a list of rule strings")
        registered.append(context.add_rules(str(title), [str(r) for r in rule_strings]))

    logger.debug("Loaded %d enum(s) and %d rule set(s)", len(enums), len(registered))
    return registered


def load_rules_file(path: Path | str, context: ValidationContext | None = None) -> list[RuleSet]:
    """Load a YAML rules file into a context."""
    path = Path(path)
    with open(path) as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Cannot parse rules file {path}: {e}") from e

    logger.info("Loading rules from %s", path)
    return load_rules(data, context)
