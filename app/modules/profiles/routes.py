from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.profiles.schemas import ProfileUpdate, ProfileEnvelope, ProfileListResponse
from app.modules.profiles.service import ProfileService
from app.core.dependencies import get_current_user, get_profile_service
from supabase import Client
from typing import Dict, Optional

router = APIRouter(prefix="/profiles", tags=["profiles"])


def get_public_profile_service(supabase: Client = Depends(get_supabase)) -> ProfileService:
    return ProfileService(supabase)


@router.get("", response_model=ProfileListResponse)
async def list_profiles(
    role: Optional[str] = None,
    verified: Optional[str] = None,
    service: ProfileService = Depends(get_public_profile_service)
):
    """List profiles, newest first. Public; role and verified are equality filters."""
    return {"profiles": service.list_profiles(role=role, verified=verified)}


@router.put("", response_model=ProfileEnvelope)
@router.post("", response_model=ProfileEnvelope)
async def update_profile(
    profile_data: ProfileUpdate,
    user_data: Dict = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service)
):
    """Update the caller's own profile"""
    return {"profile": service.update_profile(user_data["id"], profile_data)}


@router.get("/{profile_id}", response_model=ProfileEnvelope)
async def get_profile(
    profile_id: str,
    service: ProfileService = Depends(get_public_profile_service)
):
    """Get a single profile by ID"""
    return {"profile": service.get_profile(profile_id)}
