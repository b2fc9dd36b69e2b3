"""Bearer token resolution against the hosted identity service."""
from __future__ import annotations

import logging
from functools import lru_cache
from typing import Protocol

import requests

from liftlog.config import get_settings


logger = logging.getLogger(__name__)


class AuthenticationError(RuntimeError):
    """Raised when a bearer token cannot be resolved to a user."""


class TokenResolver(Protocol):
    def resolve(self, token: str) -> str:
        """Return the user id the token belongs to or raise AuthenticationError."""
        ...


class RemoteTokenResolver:
    """Resolve tokens through the identity service's ``/auth/v1/user`` endpoint."""

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout_seconds: int | None = None,
        session: requests.Session | None = None,
    ) -> None:
        settings = get_settings()
        self.base_url = (base_url or settings.identity_url).rstrip("/")
        self.api_key = api_key or settings.identity_api_key
        self.timeout_seconds = timeout_seconds or settings.identity_timeout_seconds
        self._session = session or requests.Session()

    def resolve(self, token: str) -> str:
        try:
            response = self._session.get(
                f"{self.base_url}/auth/v1/user",
                headers={
                    "Authorization": f"Bearer {token}",
                    "apikey": self.api_key,
                },
                timeout=self.timeout_seconds,
            )
        except requests.RequestException as err:
            logger.warning("Identity service request failed: %s", err)
            raise AuthenticationError("Identity service unavailable") from err

        if not response.ok:
            logger.info("Token rejected by identity service | status=%s", response.status_code)
            raise AuthenticationError(f"Token rejected with HTTP {response.status_code}")

        try:
            payload = response.json()
        except ValueError as err:
            raise AuthenticationError("Identity service returned invalid JSON") from err

        user_id = payload.get("id") if isinstance(payload, dict) else None
        if not user_id:
            raise AuthenticationError("Identity service returned no user")
        return str(user_id)


@lru_cache()
def get_token_resolver() -> TokenResolver:
    """FastAPI dependency returning the shared token resolver."""
    return RemoteTokenResolver()
