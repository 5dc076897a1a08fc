from urllib.parse import urljoin

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import RedirectResponse
from app.config import settings
from app.core.dependencies import (
    get_auth_service, get_profile_service, get_access_token, get_current_user
)
from app.core.rate_limit import limiter
from app.database.supabase_client import RequestAuthStorage, get_auth_storage
from app.modules.auth.schemas import (
    SignInRequest, SignInResponse, SignUpRequest, SignUpResponse, CurrentUserResponse
)
from app.modules.auth.service import AuthService
from app.modules.profiles.service import ProfileService
from typing import Dict, Optional

router = APIRouter(prefix="/auth", tags=["auth"])


def build_redirect_url(request: Request, path: str) -> str:
    """Absolute URL for a site path, on site_url when configured"""
    return urljoin(settings.site_url or str(request.base_url), path)


@router.get("/callback")
async def auth_callback(
    request: Request,
    code: Optional[str] = None,
    service: AuthService = Depends(get_auth_service)
):
    """OAuth callback: exchange the code, bootstrap the profile, redirect by role"""
    path = service.handle_callback(code)
    response = RedirectResponse(build_redirect_url(request, path), status_code=302)
    response.delete_cookie(settings.pkce_cookie_name, path=f"{settings.api_prefix}/auth")
    return response


@router.post("/signin", response_model=SignInResponse)
@limiter.limit(settings.auth_rate_limit)
async def sign_in(
    request: Request,
    sign_in_data: SignInRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Sign in with email and password"""
    return service.sign_in(sign_in_data)


@router.post("/signup", response_model=SignUpResponse)
@limiter.limit(settings.auth_rate_limit)
async def sign_up(
    request: Request,
    sign_up_data: SignUpRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Register a new user with a name and role"""
    return service.sign_up(sign_up_data)


@router.post("/signout", status_code=200)
async def sign_out(
    token: Optional[str] = Depends(get_access_token),
    service: AuthService = Depends(get_auth_service)
):
    """Revoke the caller's session"""
    if not token:
        raise HTTPException(status_code=401, detail="Unauthorized")
    service.sign_out(token)
    return {"success": True, "message": "Signed out successfully"}


@router.get("/me", response_model=CurrentUserResponse)
async def me(
    current_user: Dict = Depends(get_current_user),
    profile_service: ProfileService = Depends(get_profile_service)
):
    """Get current authenticated user and their profile (null before bootstrap)"""
    return {"user": current_user, "profile": profile_service.get_profile_row(current_user["id"])}


@router.get("/oauth/{provider}")
async def oauth_sign_in(
    provider: str,
    request: Request,
    storage: RequestAuthStorage = Depends(get_auth_storage),
    service: AuthService = Depends(get_auth_service)
):
    """Redirect to the provider's consent page; it returns to /auth/callback"""
    callback_url = build_redirect_url(request, f"{settings.api_prefix}/auth/callback")
    response = RedirectResponse(service.get_oauth_url(provider, callback_url), status_code=302)
    if storage.code_verifier:
        # The callback runs on a fresh client and needs this to finish the PKCE exchange
        response.set_cookie(
            settings.pkce_cookie_name,
            storage.code_verifier,
            max_age=600,
            path=f"{settings.api_prefix}/auth",
            httponly=True,
            secure=settings.is_production,
            samesite="lax",
        )
    return response
