"""Auth Routes - sign-up, sign-in and sign-out against the hosted auth provider.

Invariants:
    - Provider errors reach the client as mapped, user-friendly messages
    - Sign-up provisions the caller's Profile (display name or email prefix)
    - Sign-out always ends in a 303 redirect to "/" with auth cookies cleared,
      even when the provider call fails
"""

import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from speechkarma.api.dependencies import extract_bearer_token, get_auth_provider
from speechkarma.api.presenters import present_user
from speechkarma.core.errors import AuthProviderError
from speechkarma.infrastructure.auth_provider import AuthProviderClient
from speechkarma.infrastructure.database import get_db
from speechkarma.schemas.auth import SignInRequest, SignUpRequest
from speechkarma.services.profile_service import ProfileService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/auth", tags=["auth"])

AUTH_COOKIES = ("sb-access-token", "sb-refresh-token", "supabase-auth-token")


@router.post("/signup", status_code=status.HTTP_201_CREATED)
async def sign_up(
    body: SignUpRequest,
    db: AsyncSession = Depends(get_db),
    auth: AuthProviderClient = Depends(get_auth_provider),
):
    result = await auth.sign_up(body.email, body.password, body.display_name)
    await ProfileService(db).ensure_profile(result.user, body.display_name)
    logger.info("User signed up", extra={"user_id": result.user.id})
    return {"data": {"user": present_user(result.user), "session": result.session}}


@router.post("/signin")
async def sign_in(
    body: SignInRequest,
    auth: AuthProviderClient = Depends(get_auth_provider),
):
    result = await auth.sign_in(body.email, body.password)
    logger.info("User signed in", extra={"user_id": result.user.id})
    return {"data": {"user": present_user(result.user), "session": result.session}}


@router.post("/signout")
async def sign_out(
    request: Request,
    auth: AuthProviderClient = Depends(get_auth_provider),
):
    token = (
        extract_bearer_token(request.headers.get("Authorization"))
        or request.cookies.get("sb-access-token")
    )
    if token:
        try:
            await auth.sign_out(token)
        except AuthProviderError as e:
            logger.error(f"Error signing out: {e.raw_message}")

    response = RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)
    for name in AUTH_COOKIES:
        response.delete_cookie(name, path="/")
    return response
