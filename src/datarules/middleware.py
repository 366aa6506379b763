"""FastAPI dependencies that validate request bodies against rule sets.

    @app.post("/register")
    async def register(errors: list[str] = Depends(validate_body("userRegister"))):
        ...

The JSON body is validated (and coerced) in place, then attached to
``request.state`` alongside the error list.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from fastapi import HTTPException, Request

from datarules.context import ValidationContext, get_default_context

logger = logging.getLogger(__name__)


async def _read_body(request: Request) -> dict[str, Any]:
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return {}
    return body if isinstance(body, dict) else {}


def validate_body(
    title: str,
    context: ValidationContext | None = None,
) -> Callable[[Request], Awaitable[list[str]]]:
    """Create a dependency that validates the body and attaches the results.

    Sets ``request.state.validated_body`` (the coerced body) and
    ``request.state.validation_errors``; the request always continues.
    A missing or non-object JSON body is validated as an empty record.

    Args:
        title: Rule set title
        context: Context holding the rule set (defaults to the process-wide one)

    Returns:
        A FastAPI dependency returning the error list
    """

    async def dependency(request: Request) -> list[str]:
        ctx = context if context is not None else get_default_context()
        body = await _read_body(request)
        errors = ctx.validate(title, body)
        request.state.validated_body = body
        request.state.validation_errors = errors
        if errors:
            logger.debug("%s %s failed '%s' rules", request.method, request.url.path, title)
        return errors

    return dependency


def require_valid_body(
    title: str,
    context: ValidationContext | None = None,
) -> Callable[[Request], Awaitable[dict[str, Any]]]:
    """Create a dependency that rejects invalid bodies with a 422.

    Returns:
        A FastAPI dependency returning the coerced body

    Raises:
        HTTPException 422 with the error list as detail
    """
    check = validate_body(title, context)

    async def dependency(request: Request) -> dict[str, Any]:
        errors = await check(request)
        if errors:
            raise HTTPException(status_code=422, detail=errors)
        return request.state.validated_body

    return dependency


def get_validation_errors(request: Request) -> list[str] | None:
    """Get the error list attached by validate_body, or None if it never ran."""
    return getattr(request.state, "validation_errors", None)


def get_validated_body(request: Request) -> dict[str, Any] | None:
    """Get the coerced body attached by validate_body, or None if it never ran."""
    return getattr(request.state, "validated_body", None)
