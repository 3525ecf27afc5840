"""Request Dependencies - auth provider, caller identity, path ids, services.

Invariants:
    - One AuthProviderClient (and summarizer client) per request, closed when
      the request ends
    - Optional auth: a missing, malformed or rejected bearer token means anonymous
    - Required auth: same lookup, but anonymous raises AuthenticationRequiredError
    - Path ids are validated before any query, with a resource-specific message
"""

import uuid
from typing import AsyncGenerator

from fastapi import Depends, Request

from speechkarma.config import Settings, get_settings
from speechkarma.core.errors import AuthenticationRequiredError, RequestValidationFailed
from speechkarma.core.validation import is_valid_uuid
from speechkarma.infrastructure.auth_provider import AuthenticatedUser, AuthProviderClient
from speechkarma.services.summarize_statement import StatementSummarizer


async def get_auth_provider(
    settings: Settings = Depends(get_settings),
) -> AsyncGenerator[AuthProviderClient, None]:
    async with AuthProviderClient(
        settings.auth_provider_url,
        settings.auth_provider_anon_key,
        timeout_seconds=settings.auth_provider_timeout_seconds,
    ) as client:
        yield client


def extract_bearer_token(authorization: str | None) -> str | None:
    """Token from an `Authorization: Bearer <token>` header, else None."""
    if not authorization or not authorization.startswith("Bearer "):
        return None
    token = authorization[len("Bearer "):].strip()
    return token or None


async def get_optional_user(
    request: Request,
    auth: AuthProviderClient = Depends(get_auth_provider),
) -> AuthenticatedUser | None:
    token = extract_bearer_token(request.headers.get("Authorization"))
    if token is None:
        return None
    return await auth.get_user(token)


async def require_user(
    user: AuthenticatedUser | None = Depends(get_optional_user),
) -> AuthenticatedUser:
    if user is None:
        raise AuthenticationRequiredError()
    return user


async def get_summarizer(
    settings: Settings = Depends(get_settings),
) -> AsyncGenerator[StatementSummarizer, None]:
    summarizer = StatementSummarizer.from_settings(settings)
    try:
        yield summarizer
    finally:
        await summarizer.aclose()


def get_grace_period_minutes(settings: Settings = Depends(get_settings)) -> int:
    return settings.grace_period_minutes


def parse_resource_id(value: str | None, resource: str) -> uuid.UUID:
    """Validate a path or query id, raising 400 with the offending value."""
    if not is_valid_uuid(value):
        raise RequestValidationFailed(
            f"Invalid {resource} ID format", field="id", value=value,
        )
    return uuid.UUID(value)
