"""
Contribution (donation) and campaign API endpoints
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List
import logging

from app.api.records import build_record_router
from app.database import get_db
from app.models import Campaign
from app.schemas.records import BulkContributionIn, CampaignOut, ContributionIn, ContributionOut
from app.services.records_service import CONTRIBUTIONS, records_service
from app.utils.auth import CurrentUser, require_permission
from app.utils.exceptions import ValidationError

logger = logging.getLogger(__name__)

router = build_record_router(CONTRIBUTIONS, ContributionIn, ContributionOut, "page:contributions:view")


@router.post("/bulk", response_model=List[ContributionOut], status_code=201)
async def bulk_create_contributions(
    payload: BulkContributionIn,
    user: CurrentUser = Depends(require_permission("action:create")),
    db: Session = Depends(get_db),
):
    """
    Insert many contributions atomically; either all rows are stored or none
    """
    if not payload.contributions:
        raise ValidationError("Contributions array is required.")

    return records_service.create_many(
        db, CONTRIBUTIONS, [item.model_dump(by_alias=True) for item in payload.contributions]
    )


campaigns_router = APIRouter(prefix="/api/campaigns", tags=["campaigns"])


@campaigns_router.get("", response_model=List[CampaignOut])
async def list_campaigns(
    user: CurrentUser = Depends(require_permission("page:campaigns:view")),
    db: Session = Depends(get_db),
):
    """Active campaigns, newest first"""
    return (
        db.query(Campaign)
        .filter(Campaign.deleted_at.is_(None))
        .order_by(Campaign.id.desc())
        .all()
    )
