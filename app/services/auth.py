"""
API key authentication for write operations.

Two failure modes are kept apart so the HTTP layer can answer them
differently: a request with no key (401) and a request with the wrong key
(403).

Comparison defaults to ``secrets.compare_digest``, which does not leak how
many leading characters matched through its timing. Setting
``AUTH_CONSTANT_TIME_COMPARE=false`` falls back to plain ``==``.
"""

from dataclasses import dataclass
from enum import StrEnum
from secrets import compare_digest

from pydantic import SecretStr

from app.configs.settings import Settings
from app.monitoring.logging import get_logger

logger = get_logger(__name__)


class AuthStatus(StrEnum):
    """Outcome of comparing a presented credential with the secret."""

    AUTHORIZED = "authorized"
    MISSING = "missing"
    MISMATCH = "mismatch"


@dataclass(frozen=True, slots=True)
class AuthResult:
    status: AuthStatus

    @property
    def authorized(self) -> bool:
        return self.status is AuthStatus.AUTHORIZED


AUTHORIZED = AuthResult(AuthStatus.AUTHORIZED)
MISSING = AuthResult(AuthStatus.MISSING)
MISMATCH = AuthResult(AuthStatus.MISMATCH)


@dataclass(frozen=True, slots=True)
class AuthConfig:
    """Authentication configuration handed to the authenticator."""

    api_secret: SecretStr | None = None
    constant_time: bool = True

    @classmethod
    def from_settings(cls, settings: Settings) -> "AuthConfig":
        return cls(
            api_secret=settings.API_SECRET,
            constant_time=settings.AUTH_CONSTANT_TIME_COMPARE,
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.api_secret and self.api_secret.get_secret_value())


def authenticate(
    presented: str | None,
    configured_secret: str | None,
    *,
    constant_time: bool = True,
) -> AuthResult:
    """
    Compare a presented credential with the configured secret.

    An empty or absent credential is ``MISSING``. When no secret is
    configured every presented credential is a ``MISMATCH``.
    """
    if not presented:
        return MISSING
    if not configured_secret:
        return MISMATCH

    if constant_time:
        matches = compare_digest(presented.encode("utf-8"), configured_secret.encode("utf-8"))
    else:
        matches = presented == configured_secret

    return AUTHORIZED if matches else MISMATCH


class ApiKeyAuthenticator:
    """Checks ``X-API-Key`` values against an explicit ``AuthConfig``."""

    def __init__(self, config: AuthConfig) -> None:
        self.config = config
        if not config.is_configured:
            logger.warning("API_SECRET is not set; all write operations will be rejected")

    def authenticate(self, presented: str | None) -> AuthResult:
        secret = self.config.api_secret.get_secret_value() if self.config.api_secret else None
        result = authenticate(presented, secret, constant_time=self.config.constant_time)
        if not result.authorized:
            logger.info("API key rejected", reason=str(result.status))
        return result
