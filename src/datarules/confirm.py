"""Method-chaining front end for one-off validation.

Confirm builds a Rule for each call and runs it through the same validators
that rule sets use, so both styles report identical messages:

    result = (
        Confirm(body)
        .is_string("name", min_length=1, max_length=20, casing="title")
        .is_integer("age", minimum=13)
        .is_duplicate("confirmPassword", "password")
    )
    if not result.valid:
        return result.errors
"""

from __future__ import annotations

from functools import partial
from typing import Any

from datarules.context import ValidationContext, get_default_context
from datarules.parsers import enum_parser
from datarules.types import Rule
from datarules.validators import valid_value


def _param(value: Any) -> str:
    return "" if value is None else str(value)


class Confirm:
    """Validate fields of a record one call at a time."""

    def __init__(self, data: dict[str, Any], context: ValidationContext | None = None):
        self.data = data
        self.errors: list[str] = []
        self.context = context if context is not None else get_default_context()

    @property
    def valid(self) -> bool:
        return not self.errors

    def _check(
        self,
        type_name: str,
        name: str,
        default: Any = None,
        required: bool = True,
        *params: Any,
    ) -> Confirm:
        rule = Rule(
            name=name,
            type=type_name,
            required=required,
            default_value=default,
            params=tuple(_param(p) for p in params),
        )
        self.context.validate_rule(rule, self.data, self.errors)
        return self

    def is_auth_role(self, name: str, default: str | None = None, required: bool = True) -> Confirm:
        return self._check("authRole", name, default, required)

    def is_boolean(self, name: str, default: bool | None = None, required: bool = True) -> Confirm:
        return self._check("boolean", name, default, required)

    def is_date(
        self,
        name: str,
        default: Any = None,
        minimum: Any = None,
        maximum: Any = None,
        required: bool = True,
    ) -> Confirm:
        return self._check("date", name, default, required, minimum, maximum)

    def is_duplicate(self, name: str, other: str, required: bool = True) -> Confirm:
        """Require ``name`` to equal the value of ``other``."""
        return self._check("compare", name, None, required, other)

    def is_email(self, name: str, default: str | None = None, required: bool = True) -> Confirm:
        return self._check("email", name, default, required)

    def is_enum(
        self,
        name: str,
        values: list[str] | str,
        default: str | None = None,
        required: bool = True,
    ) -> Confirm:
        """Match against inline values, or the name of a registered enum."""
        if isinstance(values, str):
            return self._check("enum", name, default, required, values)

        rule = Rule(name=name, type="enum", required=required, default_value=default)
        parser = partial(enum_parser, allowed=tuple(values))
        valid_value(rule, self.data, parser, self.errors)
        return self

    def is_float(
        self,
        name: str,
        default: float | None = None,
        minimum: float | None = None,
        maximum: float | None = None,
        required: bool = True,
    ) -> Confirm:
        return self._check("float", name, default, required, minimum, maximum)

    def is_integer(
        self,
        name: str,
        default: int | None = None,
        minimum: int | None = None,
        maximum: int | None = None,
        required: bool = True,
    ) -> Confirm:
        return self._check("integer", name, default, required, minimum, maximum)

    def is_password(self, name: str, required: bool = True) -> Confirm:
        return self._check("password", name, None, required)

    def is_regex(
        self,
        name: str,
        pattern: str,
        default: str | None = None,
        required: bool = True,
    ) -> Confirm:
        return self._check("regex", name, default, required, pattern)

    def is_string(
        self,
        name: str,
        default: str | None = None,
        min_length: int | None = None,
        max_length: int | None = None,
        casing: str | None = None,
        required: bool = True,
    ) -> Confirm:
        return self._check("string", name, default, required, min_length, max_length, casing)

    def is_time(
        self,
        name: str,
        default: str | None = None,
        minimum: str | None = None,
        maximum: str | None = None,
        required: bool = True,
    ) -> Confirm:
        return self._check("time", name, default, required, minimum, maximum)
