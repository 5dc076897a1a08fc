from pydantic import BaseModel
from typing import Optional, List, Dict, Any, Literal
from datetime import datetime

CampaignStatus = Literal["draft", "active", "paused", "completed", "cancelled"]
REVIEW_STATUSES = ("approved", "rejected")


class CampaignCreate(BaseModel):
    title: str
    description: Optional[str] = None
    budget: Optional[float] = None
    requirements: Optional[str] = None
    deliverables: Optional[List[str]] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    tags: Optional[List[str]] = None
    target_audience: Optional[Dict[str, Any]] = None


class CampaignUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    budget: Optional[float] = None
    requirements: Optional[str] = None
    deliverables: Optional[List[str]] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    status: Optional[CampaignStatus] = None
    tags: Optional[List[str]] = None
    target_audience: Optional[Dict[str, Any]] = None


class CampaignResponse(BaseModel):
    id: str
    brand_id: str
    title: str
    description: Optional[str] = None
    budget: Optional[float] = None
    requirements: Optional[str] = None
    deliverables: List[str] = []
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    status: str
    tags: List[str] = []
    target_audience: Dict[str, Any] = {}
    profiles: Optional[Dict[str, Any]] = None  # embedded brand: name, avatar_url, verified
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class CampaignEnvelope(BaseModel):
    campaign: CampaignResponse


class CampaignListResponse(BaseModel):
    campaigns: List[CampaignResponse]


class ApplicationCreate(BaseModel):
    proposal: Optional[str] = None
    proposed_rate: Optional[float] = None


class ApplicationReview(BaseModel):
    # Checked in ApplicationService so that bad input maps to the documented 400 messages
    application_id: Optional[str] = None
    status: Optional[str] = None
    feedback: Optional[str] = None


class ApplicationResponse(BaseModel):
    id: str
    campaign_id: str
    influencer_id: str
    status: str
    proposal: Optional[str] = None
    proposed_rate: Optional[float] = None
    feedback: Optional[str] = None
    profiles: Optional[Dict[str, Any]] = None  # embedded influencer profile
    applied_at: Optional[datetime] = None
    reviewed_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ApplicationEnvelope(BaseModel):
    application: ApplicationResponse
    message: str


class ApplicationListResponse(BaseModel):
    applications: List[ApplicationResponse]
