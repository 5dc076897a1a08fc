import logging
from supabase import Client
from fastapi import HTTPException
from fastapi.encoders import jsonable_encoder
from app.config.settings import settings
from app.modules.auth.schemas import (
    SignInRequest, SignInResponse, SignUpRequest, SignUpResponse, OAUTH_PROVIDERS
)
from app.modules.profiles.schemas import ROLE_BRAND
from app.modules.profiles.service import ProfileService
from typing import Dict, Any, Optional

logger = logging.getLogger(__name__)

CALLBACK_ERROR_FLAG = "callback_error"


def _error_message(exc: Exception, default: str) -> str:
    """Upstream message of an auth/store error, or the default when it carries none."""
    return getattr(exc, "message", None) or str(exc) or default


def _user_to_dict(user) -> Dict[str, Any]:
    return {
        "id": user.id,
        "email": user.email,
        "user_metadata": user.user_metadata or {},
        "app_metadata": getattr(user, "app_metadata", None) or {},
        "created_at": getattr(user, "created_at", None),
        "updated_at": getattr(user, "updated_at", None),
    }


def dashboard_path_for_role(role: Optional[str]) -> str:
    if role == ROLE_BRAND:
        return settings.brand_dashboard_path
    return settings.influencer_dashboard_path


class AuthService:
    def __init__(self, supabase: Client, profile_service: ProfileService):
        self.supabase = supabase
        self.profile_service = profile_service

    def handle_callback(self, code: Optional[str]) -> str:
        """
        Exchange an OAuth code for a session, bootstrap the user's profile and
        return the path to redirect to.

        Never raises: every failure degrades to the sign-in page (with an
        error flag when the exchange itself failed) or, after a failed
        profile bootstrap, to the default-role dashboard.
        """
        if not code:
            return settings.auth_fallback_path

        try:
            auth_response = self.supabase.auth.exchange_code_for_session({"auth_code": code})
        except Exception as e:
            logger.error("Auth callback error: %s", e)
            return f"{settings.auth_fallback_path}?error={CALLBACK_ERROR_FLAG}"

        if not auth_response.user:
            return settings.auth_fallback_path

        user = _user_to_dict(auth_response.user)
        try:
            profile = self.profile_service.bootstrap_profile(user)
        except Exception:
            logger.exception("Profile bootstrap error for user %s", user["id"])
            profile = None

        return dashboard_path_for_role(profile.get("role") if profile else None)

    def sign_in(self, sign_in_data: SignInRequest) -> SignInResponse:
        """Authenticate user using Supabase Auth"""
        if not sign_in_data.email or not sign_in_data.password:
            raise HTTPException(status_code=400, detail="Email and password are required")

        try:
            auth_response = self.supabase.auth.sign_in_with_password({
                "email": sign_in_data.email,
                "password": sign_in_data.password
            })
        except Exception as e:
            raise HTTPException(status_code=401, detail=_error_message(e, "Failed to sign in"))

        if not auth_response.user:
            raise HTTPException(status_code=401, detail="Failed to sign in")

        return SignInResponse(
            user=jsonable_encoder(_user_to_dict(auth_response.user)),
            session=jsonable_encoder(auth_response.session) if auth_response.session else None,
            message="Signed in successfully"
        )

    def sign_up(self, sign_up_data: SignUpRequest) -> SignUpResponse:
        """Register a new user and create their profile with the requested role"""
        if not (sign_up_data.email and sign_up_data.password and sign_up_data.name and sign_up_data.role):
            raise HTTPException(status_code=400, detail="Missing required fields")

        try:
            auth_response = self.supabase.auth.sign_up({
                "email": sign_up_data.email,
                "password": sign_up_data.password,
                "options": {
                    "data": {"full_name": sign_up_data.name, "role": sign_up_data.role}
                }
            })

            user = None
            if auth_response.user:
                user = _user_to_dict(auth_response.user)
                self.profile_service.create_profile_if_absent({
                    "id": user["id"],
                    "email": user["email"] or sign_up_data.email,
                    "name": sign_up_data.name,
                    "role": sign_up_data.role,
                })
        except Exception as e:
            raise HTTPException(status_code=400, detail=_error_message(e, "Failed to create account"))

        return SignUpResponse(
            user=jsonable_encoder(user) if user else None,
            message="Account created successfully"
        )

    def get_current_user(self, token: str) -> Dict[str, Any]:
        """Get current user details from a Supabase Auth access token"""
        try:
            user_response = self.supabase.auth.get_user(jwt=token)
        except Exception as e:
            logger.info("Rejected access token: %s", e)
            raise HTTPException(status_code=401, detail="Unauthorized")
        if not user_response or not user_response.user:
            raise HTTPException(status_code=401, detail="Unauthorized")
        return _user_to_dict(user_response.user)

    def sign_out(self, token: str) -> bool:
        """Revoke the caller's session; 401 unless the token is a live access token"""
        user = self.get_current_user(token)
        try:
            self.supabase.auth.admin.sign_out(token)
        except Exception as e:
            logger.warning("Sign out failed for user %s: %s", user["id"], e)
            return False
        logger.info("User %s signed out", user["id"])
        return True

    def get_oauth_url(self, provider: str, redirect_to: str) -> str:
        """Provider consent URL whose redirect lands on the callback route"""
        if provider not in OAUTH_PROVIDERS:
            raise HTTPException(status_code=400, detail=f"Unsupported provider: {provider}")
        try:
            oauth_response = self.supabase.auth.sign_in_with_oauth({
                "provider": provider,
                "options": {"redirect_to": redirect_to}
            })
        except Exception as e:
            raise HTTPException(status_code=400, detail=_error_message(e, "Failed to start OAuth sign in"))
        return oauth_response.url
