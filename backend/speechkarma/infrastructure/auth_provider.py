"""Hosted Auth Provider Client - wraps the provider's REST auth API with error mapping.

Invariants:
    - Token lookup never raises: any failure means "not authenticated" (None)
    - sign_up / sign_in / sign_out failures are raised as AuthProviderError whose
      message has been passed through map_auth_error
    - 429 from the provider maps to RATE_LIMIT_EXCEEDED; 5xx and network
      failures map to 502 INTERNAL_ERROR; rejected credentials on sign-in to 401
    - No retries: every failure is terminal for the request

Design Decisions:
    - httpx.AsyncClient per request (async context manager), injected through a
      FastAPI dependency so route tests can substitute an in-process fake
    - Endpoints follow the GoTrue REST contract (/auth/v1/user, /signup,
      /token?grant_type=password, /logout)
"""

import logging
import uuid
from dataclasses import dataclass, field
from typing import Any

import httpx

from speechkarma.core.auth_errors import map_auth_error
from speechkarma.core.domain_types import ErrorCode
from speechkarma.core.errors import AuthProviderError, RateLimitExceededError

logger = logging.getLogger(__name__)

_NETWORK_ERROR = "Network error: connection to auth provider failed"


@dataclass
class AuthenticatedUser:
    """Identity resolved from a bearer token."""
    id: uuid.UUID
    email: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: dict) -> "AuthenticatedUser":
        return cls(
            id=uuid.UUID(str(payload["id"])),
            email=payload.get("email"),
            metadata=payload.get("user_metadata") or {},
        )


@dataclass
class AuthSession:
    """Result of sign-up / sign-in. session is None when email confirmation is pending."""
    user: AuthenticatedUser
    session: dict[str, Any] | None = None


def extract_error_message(body: Any) -> str | None:
    """Pull the human-readable message out of a provider error body."""
    if not isinstance(body, dict):
        return None
    for key in ("error_description", "msg", "message"):
        if isinstance(body.get(key), str):
            return body[key]
    error = body.get("error")
    if isinstance(error, str):
        return error
    if isinstance(error, dict) and isinstance(error.get("message"), str):
        return error["message"]
    return None


def provider_error(
    status: int | None, raw_message: str, credentials_check: bool = False,
) -> AuthProviderError:
    """Build the AuthProviderError for a failed provider response."""
    message = map_auth_error(raw_message)
    if status == 429:
        return RateLimitExceededError(message, raw_message, status)
    if status is None or status >= 500:
        return AuthProviderError(
            message, raw_message, status, 502, ErrorCode.INTERNAL_ERROR,
        )
    if credentials_check and status in (400, 401):
        return AuthProviderError(
            message, raw_message, status, 401, ErrorCode.AUTHENTICATION_REQUIRED,
        )
    return AuthProviderError(message, raw_message, status)


def _session_fields(body: dict) -> dict[str, Any] | None:
    if not body.get("access_token"):
        return None
    return {
        "access_token": body["access_token"],
        "refresh_token": body.get("refresh_token"),
        "expires_in": body.get("expires_in"),
        "token_type": body.get("token_type", "bearer"),
    }


class AuthProviderClient:
    """Async client for the hosted auth provider."""

    def __init__(
        self,
        base_url: str,
        anon_key: str,
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/") + "/auth/v1",
            headers={"apikey": anon_key},
            timeout=timeout_seconds,
            transport=transport,
        )

    async def __aenter__(self) -> "AuthProviderClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get_user(self, access_token: str) -> AuthenticatedUser | None:
        """Resolve a bearer token to a user, or None if it is not valid."""
        try:
            response = await self._client.get(
                "/user", headers={"Authorization": f"Bearer {access_token}"},
            )
        except httpx.HTTPError as e:
            logger.error(f"Auth provider unreachable during token lookup: {e}")
            return None
        if response.status_code != 200:
            logger.warning(
                "Failed to authenticate user",
                extra={"provider_status": response.status_code},
            )
            return None
        try:
            return AuthenticatedUser.from_payload(response.json())
        except (ValueError, KeyError) as e:
            logger.error(f"Malformed user payload from auth provider: {e}")
            return None

    async def sign_up(
        self, email: str, password: str, display_name: str | None = None,
    ) -> AuthSession:
        payload: dict[str, Any] = {"email": email, "password": password}
        if display_name:
            payload["data"] = {"display_name": display_name}
        body = await self._post("/signup", payload)
        user_payload = body.get("user") or body
        return AuthSession(
            user=AuthenticatedUser.from_payload(user_payload),
            session=_session_fields(body),
        )

    async def sign_in(self, email: str, password: str) -> AuthSession:
        body = await self._post(
            "/token",
            {"email": email, "password": password},
            params={"grant_type": "password"},
            credentials_check=True,
        )
        return AuthSession(
            user=AuthenticatedUser.from_payload(body["user"]),
            session=_session_fields(body),
        )

    async def sign_out(self, access_token: str) -> None:
        await self._post(
            "/logout", None,
            headers={"Authorization": f"Bearer {access_token}"},
        )

    async def _post(
        self,
        path: str,
        payload: dict | None,
        params: dict | None = None,
        headers: dict | None = None,
        credentials_check: bool = False,
    ) -> dict:
        try:
            response = await self._client.post(
                path, json=payload, params=params, headers=headers,
            )
        except httpx.HTTPError as e:
            logger.error(f"Auth provider request {path} failed: {e}")
            raise provider_error(None, _NETWORK_ERROR)

        if response.status_code >= 400:
            try:
                raw = extract_error_message(response.json())
            except ValueError:
                raw = None
            raw = raw or f"Auth provider returned HTTP {response.status_code}"
            logger.warning(
                f"Auth provider rejected {path}: {raw}",
                extra={"provider_status": response.status_code},
            )
            raise provider_error(response.status_code, raw, credentials_check)

        if response.status_code == 204 or not response.content:
            return {}
        return response.json()
