"""Parse rule strings into Rule objects.

Rule string format (comma-separated, keywords case-insensitive):

    name,type,required|optional,default,param1,param2,...

Examples:
    "firstname,string,required,,1,20"
    "active,boolean,optional,true"
    "role,enum,required,,Roles"
    "confirmpassword,compare,required,,password"
"""

from __future__ import annotations

from collections.abc import Iterable

from datarules.errors import RuleDefinitionError
from datarules.types import Rule, RuleSet

# Types whose validators cannot run without a first parameter
PARAM_REQUIRED_TYPES = {
    "compare": "the name of the field to compare with",
    "enum": "an enumeration name",
    "regex": "a regular expression pattern",
}


def normalize_title(title: str) -> str:
    """Normalize a rule set title for registration and lookup."""
    return title.strip().lower()


def parse_rule(text: str) -> Rule:
    """Parse a single rule string.

    Raises:
        RuleDefinitionError: If the name, type or existence keyword is missing
            or malformed, or a type that needs a parameter has none.
    """
    parts = text.split(",")
    if len(parts) < 3:
        raise RuleDefinitionError(
            f"Rule '{text}' must have at least name, type and required/optional"
        )

    name = parts[0].strip().lower()
    if not name:
        raise RuleDefinitionError("Name of property is missing")

    type_name = parts[1].strip()
    if not type_name:
        raise RuleDefinitionError(f"Type of property '{name}' is missing")

    exists = parts[2].strip().lower()
    if not exists:
        raise RuleDefinitionError(f"Required/optional of property '{name}' is missing")
    if exists not in ("required", "optional"):
        raise RuleDefinitionError(
            f"Property '{name}' must be \"required\" or \"optional\", got '{exists}'"
        )

    default_value = parts[3] if len(parts) > 3 and parts[3] != "" else None
    params = tuple(parts[4:])

    needs = PARAM_REQUIRED_TYPES.get(type_name.lower())
    if needs and (not params or not params[0].strip()):
        raise RuleDefinitionError(
            f"'{name}' is type '{type_name}' and must specify {needs}"
        )

    return Rule(
        name=name,
        type=type_name,
        required=exists == "required",
        default_value=default_value,
        params=params,
    )


def parse_rules(title: str, rule_strings: Iterable[str]) -> RuleSet:
    """Parse a titled list of rule strings into a RuleSet.

    Errors from individual rules are re-raised prefixed with the title.
    """
    if isinstance(rule_strings, str):
        raise RuleDefinitionError(f"[{title}] Rules must be a list of rule strings")

    rule_strings = list(rule_strings or [])
    if not rule_strings:
        raise RuleDefinitionError(f"[{title}] Must define one or more property rules")

    rules = []
    for text in rule_strings:
        try:
            rules.append(parse_rule(text))
        except RuleDefinitionError as e:
            raise RuleDefinitionError(f"[{title}] {e}") from e

    return RuleSet(title=normalize_title(title), rules=tuple(rules))
