import logging
from supabase import Client
from postgrest.exceptions import APIError
from app.modules.profiles.schemas import (
    ProfileUpdate, ProfileResponse, DEFAULT_PROFILE_ROLE
)
from typing import List, Optional, Dict, Any
from fastapi import HTTPException

logger = logging.getLogger(__name__)


def default_profile_name(user: Dict[str, Any]) -> str:
    """full_name from the auth user's metadata, else the local part of the email."""
    full_name = (user.get("user_metadata") or {}).get("full_name")
    if full_name:
        return full_name
    return user["email"].split("@")[0]


class ProfileService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_profile_row(self, profile_id: str) -> Optional[Dict[str, Any]]:
        """Single-row lookup by id; None when the row does not exist."""
        result = self.supabase.table("profiles")\
            .select("*")\
            .eq("id", profile_id)\
            .limit(1)\
            .execute()
        return result.data[0] if result.data else None

    def get_profile_role(self, profile_id: str) -> Optional[str]:
        profile = self.get_profile_row(profile_id)
        return profile.get("role") if profile else None

    def create_profile_if_absent(self, record: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Atomic insert-if-absent keyed by id (ON CONFLICT DO NOTHING).

        A conflict is not an error: the row another request created first is
        read back and returned. Store failures raise APIError.
        """
        result = self.supabase.table("profiles")\
            .upsert(record, on_conflict="id", ignore_duplicates=True)\
            .execute()
        if result.data:
            logger.info("Created profile %s with role %s", record["id"], record.get("role"))
            return result.data[0]
        logger.info("Profile %s already exists, keeping stored row", record["id"])
        return self.get_profile_row(record["id"])

    def bootstrap_profile(self, user: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Make sure the authenticated user has a profile row.

        Returns the existing row untouched, or creates one with the default
        role. Creation failures are logged and swallowed: the caller gets None
        and falls back to the default role.
        """
        existing = self.get_profile_row(user["id"])
        if existing:
            return existing

        if not user.get("email"):
            raise ValueError(f"Auth user {user['id']} has no email; cannot create profile")

        record = {
            "id": user["id"],
            "email": user["email"],
            "name": default_profile_name(user),
            "role": DEFAULT_PROFILE_ROLE,
        }
        try:
            return self.create_profile_if_absent(record)
        except APIError as e:
            logger.error("Profile creation error for user %s: %s", user["id"], e.message)
            return None

    def list_profiles(self, role: Optional[str] = None, verified: Optional[str] = None) -> List[ProfileResponse]:
        """List profiles newest first, with optional equality filters on role and verified"""
        try:
            query = self.supabase.table("profiles").select("*")
            if role:
                query = query.eq("role", role)
            if verified:
                query = query.eq("verified", verified == "true")
            result = query.order("created_at", desc=True).execute()
            return [ProfileResponse(**profile) for profile in result.data]
        except APIError as e:
            raise HTTPException(status_code=400, detail=e.message)

    def get_profile(self, profile_id: str) -> ProfileResponse:
        """Get profile by ID"""
        try:
            profile = self.get_profile_row(profile_id)
        except APIError as e:
            raise HTTPException(status_code=400, detail=e.message)
        if not profile:
            raise HTTPException(status_code=404, detail="Profile not found")
        return ProfileResponse(**profile)

    def update_profile(self, user_id: str, profile_data: ProfileUpdate) -> ProfileResponse:
        """Apply the supplied fields to the caller's own row; the id filter is the ownership check."""
        update_data = profile_data.model_dump(exclude_unset=True)
        if not update_data:
            return self.get_profile(user_id)
        try:
            result = self.supabase.table("profiles")\
                .update(update_data)\
                .eq("id", user_id)\
                .execute()
        except APIError as e:
            raise HTTPException(status_code=400, detail=e.message)

        if not result.data:
            raise HTTPException(status_code=404, detail="Profile not found")

        return ProfileResponse(**result.data[0])
