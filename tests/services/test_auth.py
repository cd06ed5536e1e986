"""Tests for app/services/auth.py."""

import pytest
from pydantic import SecretStr

from app.configs import Settings
from app.services.auth import ApiKeyAuthenticator, AuthConfig, AuthStatus, authenticate


class TestAuthenticate:
    @pytest.mark.parametrize("constant_time", [True, False])
    def test_exact_match_authorized(self, constant_time: bool) -> None:
        result = authenticate("s3cret", "s3cret", constant_time=constant_time)
        assert result.status is AuthStatus.AUTHORIZED
        assert result.authorized is True

    @pytest.mark.parametrize("presented", [None, ""])
    def test_missing(self, presented: str | None) -> None:
        assert authenticate(presented, "s3cret").status is AuthStatus.MISSING

    @pytest.mark.parametrize("constant_time", [True, False])
    @pytest.mark.parametrize("presented", ["wrong", "s3cre", "s3cret ", "S3CRET"])
    def test_mismatch(self, presented: str, constant_time: bool) -> None:
        result = authenticate(presented, "s3cret", constant_time=constant_time)
        assert result.status is AuthStatus.MISMATCH
        assert result.authorized is False

    def test_unconfigured_secret_rejects_everything(self) -> None:
        assert authenticate("anything", None).status is AuthStatus.MISMATCH
        assert authenticate("anything", "").status is AuthStatus.MISMATCH

    def test_missing_wins_over_unconfigured(self) -> None:
        assert authenticate(None, None).status is AuthStatus.MISSING

    def test_non_ascii_keys_compare(self) -> None:
        assert authenticate("clé", "clé").authorized is True
        assert authenticate("cle", "clé").authorized is False


class TestAuthConfig:
    def test_from_settings(self) -> None:
        settings = Settings(API_SECRET="abc", AUTH_CONSTANT_TIME_COMPARE=False)
        config = AuthConfig.from_settings(settings)
        assert config.api_secret is not None
        assert config.api_secret.get_secret_value() == "abc"
        assert config.constant_time is False
        assert config.is_configured is True

    def test_empty_secret_is_not_configured(self) -> None:
        assert AuthConfig(api_secret=SecretStr("")).is_configured is False
        assert AuthConfig().is_configured is False

    def test_secret_not_in_repr(self) -> None:
        assert "abc" not in repr(AuthConfig(api_secret=SecretStr("abc")))


class TestApiKeyAuthenticator:
    def test_uses_configured_secret(self) -> None:
        authenticator = ApiKeyAuthenticator(AuthConfig(api_secret=SecretStr("key")))
        assert authenticator.authenticate("key").authorized is True
        assert authenticator.authenticate("nope").status is AuthStatus.MISMATCH
        assert authenticator.authenticate(None).status is AuthStatus.MISSING

    def test_unconfigured_rejects(self) -> None:
        authenticator = ApiKeyAuthenticator(AuthConfig())
        assert authenticator.authenticate("key").status is AuthStatus.MISMATCH
