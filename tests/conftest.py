"""Shared fixtures for datarules tests."""

import pytest

from datarules.context import ValidationContext, set_default_context

ENV_VARS = [
    "AUTH_ROLES",
    "PASSWORD_MIN_LENGTH",
    "PASSWORD_MIN_UPPER",
    "PASSWORD_MIN_LOWER",
    "PASSWORD_MIN_DIGIT",
    "PASSWORD_MIN_SYMBOL",
]


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Run every test without configuration from the developer's shell."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def reset_default_context():
    """Drop the process-wide context before and after each test."""
    set_default_context(None)
    yield
    set_default_context(None)


@pytest.fixture
def ctx():
    """A fresh context with the built-in types registered."""
    return ValidationContext()


@pytest.fixture
def user_register_rules():
    return [
        "firstname,string,required,,1,20",
        "lastname,string,required,,1,20",
        "active,boolean,optional,true",
        "email,email,required,,1,100",
        "confirmemail,compare,required,,email",
        "password,password,required,,8,60",
        "confirmpassword,compare,required,,password",
    ]


@pytest.fixture
def user_register_data():
    return {
        "firstname": "Sherlock",
        "lastname": "Holmes",
        "active": "yes",
        "email": "sherlock.holmes@email.com",
        "confirmemail": "sherlock.holmes@email.com",
        "password": "Abcd-1234",
        "confirmpassword": "Abcd-1234",
    }
