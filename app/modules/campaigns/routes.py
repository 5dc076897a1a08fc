from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.campaigns.schemas import (
    CampaignCreate, CampaignUpdate, CampaignEnvelope, CampaignListResponse,
    ApplicationCreate, ApplicationReview, ApplicationEnvelope, ApplicationListResponse
)
from app.modules.campaigns.service import CampaignService, ApplicationService
from app.modules.profiles.schemas import ROLE_BRAND, ROLE_INFLUENCER
from app.core.dependencies import get_current_user, require_profile_role
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/campaigns", tags=["campaigns"])


def get_campaign_service(supabase: Client = Depends(get_supabase)) -> CampaignService:
    return CampaignService(supabase)


def get_application_service(supabase: Client = Depends(get_supabase)) -> ApplicationService:
    return ApplicationService(supabase)


@router.get("", response_model=CampaignListResponse)
async def list_campaigns(
    status: str = "active",
    limit: int = 10,
    offset: int = 0,
    service: CampaignService = Depends(get_campaign_service)
):
    """List campaigns by status (active by default)"""
    return {"campaigns": service.list_campaigns(status=status, limit=limit, offset=offset)}


@router.post("", response_model=CampaignEnvelope, status_code=201)
async def create_campaign(
    campaign_data: CampaignCreate,
    user_data: Dict = Depends(require_profile_role(ROLE_BRAND, "Only brands can create campaigns")),
    service: CampaignService = Depends(get_campaign_service)
):
    """Create a draft campaign (brands only)"""
    return {"campaign": service.create_campaign(campaign_data, user_data["id"])}


@router.get("/{campaign_id}", response_model=CampaignEnvelope)
async def get_campaign(
    campaign_id: str,
    service: CampaignService = Depends(get_campaign_service)
):
    """Get campaign by ID"""
    return {"campaign": service.get_campaign(campaign_id)}


@router.put("/{campaign_id}", response_model=CampaignEnvelope)
async def update_campaign(
    campaign_id: str,
    campaign_data: CampaignUpdate,
    user_data: Dict = Depends(get_current_user),
    service: CampaignService = Depends(get_campaign_service)
):
    """Update campaign (owning brand only)"""
    return {"campaign": service.update_campaign(campaign_id, campaign_data, user_data["id"])}


@router.get("/{campaign_id}/applications", response_model=ApplicationListResponse)
async def list_applications(
    campaign_id: str,
    user_data: Dict = Depends(get_current_user),
    service: ApplicationService = Depends(get_application_service)
):
    """Get all applications for a campaign (owning brand only)"""
    return {"applications": service.list_applications(campaign_id, user_data["id"])}


@router.post("/{campaign_id}/applications", response_model=ApplicationEnvelope, status_code=201)
async def apply_to_campaign(
    campaign_id: str,
    application_data: ApplicationCreate,
    user_data: Dict = Depends(require_profile_role(ROLE_INFLUENCER, "Only influencers can apply to campaigns")),
    service: ApplicationService = Depends(get_application_service)
):
    """Submit an application to an active campaign (influencers only)"""
    application = service.apply(campaign_id, user_data["id"], application_data)
    return {"application": application, "message": "Application submitted successfully"}


@router.put("/{campaign_id}/applications", response_model=ApplicationEnvelope)
async def review_application(
    campaign_id: str,
    review_data: ApplicationReview,
    user_data: Dict = Depends(get_current_user),
    service: ApplicationService = Depends(get_application_service)
):
    """Approve or reject an application (owning brand only)"""
    application = service.review(campaign_id, user_data["id"], review_data)
    return {"application": application, "message": f"Application {review_data.status} successfully"}
