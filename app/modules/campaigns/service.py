import logging
from datetime import datetime, timezone
from supabase import Client
from postgrest.exceptions import APIError
from app.modules.campaigns.schemas import (
    CampaignCreate, CampaignUpdate, CampaignResponse,
    ApplicationCreate, ApplicationReview, ApplicationResponse, REVIEW_STATUSES
)
from typing import List, Dict, Any
from fastapi import HTTPException

logger = logging.getLogger(__name__)

CAMPAIGN_SELECT = "*, profiles:brand_id(name, avatar_url, verified)"
APPLICATION_SELECT = (
    "*, profiles:influencer_id(name, avatar_url, bio, follower_count, engagement_rate, verified)"
)


class CampaignService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_campaign_row(self, campaign_id: str, columns: str = CAMPAIGN_SELECT) -> Dict[str, Any]:
        result = self.supabase.table("campaigns")\
            .select(columns)\
            .eq("id", campaign_id)\
            .limit(1)\
            .execute()
        if not result.data:
            raise HTTPException(status_code=404, detail="Campaign not found")
        return result.data[0]

    def get_owned_campaign(self, campaign_id: str, user_id: str) -> Dict[str, Any]:
        """Campaign row, 404 if missing, 403 unless the caller is its brand"""
        campaign = self.get_campaign_row(campaign_id)
        if campaign.get("brand_id") != user_id:
            raise HTTPException(status_code=403, detail="Forbidden")
        return campaign

    def list_campaigns(self, status: str = "active", limit: int = 10, offset: int = 0) -> List[CampaignResponse]:
        """List campaigns with a given status, newest first"""
        try:
            result = self.supabase.table("campaigns")\
                .select(CAMPAIGN_SELECT)\
                .eq("status", status)\
                .order("created_at", desc=True)\
                .range(offset, offset + limit - 1)\
                .execute()
            return [CampaignResponse(**campaign) for campaign in result.data]
        except APIError as e:
            raise HTTPException(status_code=400, detail=e.message)

    def get_campaign(self, campaign_id: str) -> CampaignResponse:
        """Get campaign by ID"""
        try:
            return CampaignResponse(**self.get_campaign_row(campaign_id))
        except APIError as e:
            raise HTTPException(status_code=400, detail=e.message)

    def create_campaign(self, campaign_data: CampaignCreate, brand_id: str) -> CampaignResponse:
        """Create a draft campaign owned by the calling brand"""
        try:
            result = self.supabase.table("campaigns").insert({
                "brand_id": brand_id,
                "title": campaign_data.title,
                "description": campaign_data.description,
                "budget": campaign_data.budget,
                "requirements": campaign_data.requirements,
                "deliverables": campaign_data.deliverables or [],
                "start_date": campaign_data.start_date,
                "end_date": campaign_data.end_date,
                "tags": campaign_data.tags or [],
                "target_audience": campaign_data.target_audience or {},
                "status": "draft",
            }).execute()
        except APIError as e:
            raise HTTPException(status_code=400, detail=e.message)

        if not result.data:
            raise HTTPException(status_code=500, detail="Failed to create campaign")

        logger.info("Brand %s created campaign %s", brand_id, result.data[0].get("id"))
        return CampaignResponse(**result.data[0])

    def update_campaign(self, campaign_id: str, campaign_data: CampaignUpdate, user_id: str) -> CampaignResponse:
        """Update a campaign owned by the caller"""
        try:
            campaign = self.get_owned_campaign(campaign_id, user_id)
            update_data = campaign_data.model_dump(exclude_unset=True)
            if not update_data:
                return CampaignResponse(**campaign)
            update_data["updated_at"] = datetime.now(timezone.utc).isoformat()

            result = self.supabase.table("campaigns")\
                .update(update_data)\
                .eq("id", campaign_id)\
                .execute()
        except APIError as e:
            raise HTTPException(status_code=400, detail=e.message)

        if not result.data:
            raise HTTPException(status_code=404, detail="Campaign not found")

        return CampaignResponse(**result.data[0])


class ApplicationService:
    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.campaigns = CampaignService(supabase)

    def list_applications(self, campaign_id: str, user_id: str) -> List[ApplicationResponse]:
        """Applications for a campaign, newest first; only the owning brand may read them"""
        try:
            self.campaigns.get_owned_campaign(campaign_id, user_id)
            result = self.supabase.table("campaign_applications")\
                .select(APPLICATION_SELECT)\
                .eq("campaign_id", campaign_id)\
                .order("applied_at", desc=True)\
                .execute()
            return [ApplicationResponse(**application) for application in result.data]
        except APIError as e:
            raise HTTPException(status_code=400, detail=e.message)

    def apply(self, campaign_id: str, influencer_id: str, application_data: ApplicationCreate) -> ApplicationResponse:
        """Submit an application to an active campaign, once per influencer"""
        try:
            campaign = self.campaigns.get_campaign_row(campaign_id, columns="status, brand_id")
            if campaign.get("status") != "active":
                raise HTTPException(status_code=400, detail="Campaign is not active")

            existing = self.supabase.table("campaign_applications")\
                .select("id")\
                .eq("campaign_id", campaign_id)\
                .eq("influencer_id", influencer_id)\
                .limit(1)\
                .execute()
            if existing.data:
                raise HTTPException(status_code=400, detail="You have already applied to this campaign")

            result = self.supabase.table("campaign_applications").insert({
                "campaign_id": campaign_id,
                "influencer_id": influencer_id,
                "proposal": application_data.proposal,
                "proposed_rate": application_data.proposed_rate,
                "status": "pending",
            }).select(APPLICATION_SELECT).execute()
        except APIError as e:
            raise HTTPException(status_code=400, detail=e.message)

        if not result.data:
            raise HTTPException(status_code=500, detail="Failed to submit application")

        # TODO: notify the campaign's brand once the notifications table has a writer
        logger.info("Influencer %s applied to campaign %s", influencer_id, campaign_id)
        return ApplicationResponse(**result.data[0])

    def review(self, campaign_id: str, user_id: str, review_data: ApplicationReview) -> ApplicationResponse:
        """Approve or reject an application; only the owning brand may review"""
        if not review_data.application_id or not review_data.status:
            raise HTTPException(status_code=400, detail="Application ID and status are required")
        if review_data.status not in REVIEW_STATUSES:
            raise HTTPException(status_code=400, detail="Status must be 'approved' or 'rejected'")

        try:
            self.campaigns.get_owned_campaign(campaign_id, user_id)
            result = self.supabase.table("campaign_applications")\
                .update({
                    "status": review_data.status,
                    "reviewed_at": datetime.now(timezone.utc).isoformat(),
                    "feedback": review_data.feedback or None,
                })\
                .eq("id", review_data.application_id)\
                .eq("campaign_id", campaign_id)\
                .select(APPLICATION_SELECT)\
                .execute()
        except APIError as e:
            raise HTTPException(status_code=400, detail=e.message)

        if not result.data:
            raise HTTPException(status_code=404, detail="Application not found")

        return ApplicationResponse(**result.data[0])
