"""Engine configuration read from the environment."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

DEFAULT_AUTH_ROLES = ("Guest", "Subscriber", "Admin")


def _env_int(name: str, default: int) -> int:
    """Read an integer environment variable, falling back to the default."""
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw.strip())
    except ValueError:
        logger.warning("Ignoring %s=%r: not an integer, using %d", name, raw, default)
        return default


def _env_list(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = os.environ.get(name)
    if not raw:
        return default
    values = tuple(part.strip() for part in raw.split(",") if part.strip())
    return values or default


@dataclass(frozen=True)
class PasswordPolicy:
    """Minimum password length and character-class counts."""

    min_length: int = 8
    min_upper: int = 1
    min_lower: int = 1
    min_digit: int = 1
    min_symbol: int = 1

    @classmethod
    def from_env(cls) -> PasswordPolicy:
        """Create a policy from PASSWORD_MIN_* environment variables."""
        return cls(
            min_length=_env_int("PASSWORD_MIN_LENGTH", cls.min_length),
            min_upper=_env_int("PASSWORD_MIN_UPPER", cls.min_upper),
            min_lower=_env_int("PASSWORD_MIN_LOWER", cls.min_lower),
            min_digit=_env_int("PASSWORD_MIN_DIGIT", cls.min_digit),
            min_symbol=_env_int("PASSWORD_MIN_SYMBOL", cls.min_symbol),
        )


@dataclass(frozen=True)
class ValidationConfig:
    """Configuration shared by every validator of a context.

    Attributes:
        auth_roles: Allowed values for the authRole type
        password: Password policy for the password type
    """

    auth_roles: tuple[str, ...] = DEFAULT_AUTH_ROLES
    password: PasswordPolicy = field(default_factory=PasswordPolicy)

    @classmethod
    def from_env(cls) -> ValidationConfig:
        """Create config from environment variables.

        Reads:
        - AUTH_ROLES: comma-separated role list (default Guest,Subscriber,Admin)
        - PASSWORD_MIN_LENGTH, PASSWORD_MIN_UPPER, PASSWORD_MIN_LOWER,
          PASSWORD_MIN_DIGIT, PASSWORD_MIN_SYMBOL
        """
        return cls(
            auth_roles=_env_list("AUTH_ROLES", DEFAULT_AUTH_ROLES),
            password=PasswordPolicy.from_env(),
        )
