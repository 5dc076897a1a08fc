"""
Core dependencies for route protection and role checking
"""

from fastapi import Depends, HTTPException, Request, Security, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from app.config import settings
from app.database.supabase_client import get_auth_supabase, get_service_supabase
from app.modules.auth.service import AuthService
from app.modules.profiles.service import ProfileService
from supabase import Client
from typing import Dict, Any, Optional
import logging

logger = logging.getLogger(__name__)

# auto_error is off so a missing token is a 401, not HTTPBearer's 403
security = HTTPBearer(auto_error=False)


def get_profile_service(supabase: Client = Depends(get_service_supabase)) -> ProfileService:
    return ProfileService(supabase)


def get_auth_service(
    supabase: Client = Depends(get_auth_supabase),
    profile_service: ProfileService = Depends(get_profile_service)
) -> AuthService:
    return AuthService(supabase, profile_service)


def get_access_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security)
) -> Optional[str]:
    """Bearer token from the Authorization header, else the session cookie"""
    if credentials and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(settings.session_cookie_name)


def get_current_user(
    token: Optional[str] = Depends(get_access_token),
    auth_service: AuthService = Depends(get_auth_service)
) -> Dict[str, Any]:
    """Resolve the caller's auth user; 401 when there is no active session"""
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized"
        )
    return auth_service.get_current_user(token)


def require_profile_role(required_role: str, detail: str):
    """Factory function to create a role check dependency"""
    def check_role(
        user_data: Dict[str, Any] = Depends(get_current_user),
        profile_service: ProfileService = Depends(get_profile_service)
    ) -> Dict[str, Any]:
        """Dependency to check the caller's profile role"""
        role = profile_service.get_profile_role(user_data["id"])
        if role != required_role:
            logger.info("User %s with role %s denied (requires %s)", user_data["id"], role, required_role)
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=detail
            )
        return user_data
    return check_role
