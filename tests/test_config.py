"""Tests for environment-driven configuration."""

import logging

from datarules.config import DEFAULT_AUTH_ROLES, PasswordPolicy, ValidationConfig


class TestValidationConfig:
    def test_defaults(self):
        config = ValidationConfig.from_env()
        assert config.auth_roles == DEFAULT_AUTH_ROLES == ("Guest", "Subscriber", "Admin")
        assert config.password == PasswordPolicy(
            min_length=8, min_upper=1, min_lower=1, min_digit=1, min_symbol=1
        )

    def test_auth_roles_from_env(self, monkeypatch):
        monkeypatch.setenv("AUTH_ROLES", " Viewer, Editor ,,Owner")
        assert ValidationConfig.from_env().auth_roles == ("Viewer", "Editor", "Owner")

    def test_empty_auth_roles_uses_default(self, monkeypatch):
        monkeypatch.setenv("AUTH_ROLES", "")
        assert ValidationConfig.from_env().auth_roles == DEFAULT_AUTH_ROLES

    def test_password_policy_from_env(self, monkeypatch):
        monkeypatch.setenv("PASSWORD_MIN_LENGTH", "12")
        monkeypatch.setenv("PASSWORD_MIN_UPPER", "2")
        monkeypatch.setenv("PASSWORD_MIN_LOWER", "3")
        monkeypatch.setenv("PASSWORD_MIN_DIGIT", "0")
        monkeypatch.setenv("PASSWORD_MIN_SYMBOL", "0")
        assert ValidationConfig.from_env().password == PasswordPolicy(
            min_length=12, min_upper=2, min_lower=3, min_digit=0, min_symbol=0
        )

    def test_non_integer_falls_back_with_warning(self, monkeypatch, caplog):
        monkeypatch.setenv("PASSWORD_MIN_LENGTH", "long")
        with caplog.at_level(logging.WARNING, logger="datarules.config"):
            policy = PasswordPolicy.from_env()
        assert policy.min_length == 8
        assert "PASSWORD_MIN_LENGTH" in caplog.text
