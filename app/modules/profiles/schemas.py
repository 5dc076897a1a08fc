from pydantic import BaseModel
from typing import Optional, List, Dict, Any
from datetime import datetime

ROLE_BRAND = "brand"
ROLE_INFLUENCER = "influencer"
PROFILE_ROLES = (ROLE_BRAND, ROLE_INFLUENCER)
DEFAULT_PROFILE_ROLE = ROLE_INFLUENCER


class ProfileUpdate(BaseModel):
    name: Optional[str] = None
    bio: Optional[str] = None
    website: Optional[str] = None
    avatar_url: Optional[str] = None
    social_links: Optional[Dict[str, Any]] = None


class ProfileResponse(BaseModel):
    id: str
    email: Optional[str] = None
    name: Optional[str] = None
    role: Optional[str] = None  # not validated against PROFILE_ROLES; sign-up forwards any value
    bio: Optional[str] = None
    website: Optional[str] = None
    avatar_url: Optional[str] = None
    social_links: Optional[Dict[str, Any]] = None
    verified: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ProfileEnvelope(BaseModel):
    profile: ProfileResponse


class ProfileListResponse(BaseModel):
    profiles: List[ProfileResponse]
