from pydantic import BaseModel
from typing import Optional, Dict, Any
from app.modules.profiles.schemas import ProfileResponse

OAUTH_PROVIDERS = ("google", "kakao")


class SignInRequest(BaseModel):
    # Presence is checked by AuthService so that missing fields map to 400, not 422
    email: Optional[str] = None
    password: Optional[str] = None


class SignInResponse(BaseModel):
    success: bool = True
    user: Dict[str, Any]
    session: Optional[Dict[str, Any]] = None
    message: str


class SignUpRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None
    name: Optional[str] = None
    role: Optional[str] = None


class SignUpResponse(BaseModel):
    success: bool = True
    user: Optional[Dict[str, Any]] = None
    message: str


class CurrentUserResponse(BaseModel):
    user: Dict[str, Any]
    profile: Optional[ProfileResponse] = None
