"""
AI insight API endpoints backed by Gemini
"""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
import logging

from app.database import get_db
from app.models import Campaign, Contribution
from app.schemas.ai import NoteRequest, NoteResponse, SummaryRequest, SummaryResponse
from app.services.gemini_service import gemini_service
from app.utils.auth import CurrentUser, require_permission

router = APIRouter(prefix="/api/ai", tags=["ai"])
logger = logging.getLogger(__name__)

SUMMARY_CONTRIBUTION_LIMIT = 100


@router.post("/summary", response_model=SummaryResponse)
async def contribution_summary(
    request: SummaryRequest,
    user: CurrentUser = Depends(require_permission("page:ai-insights:view")),
    db: Session = Depends(get_db),
):
    """
    Summarize recent contributions for a manager

    Uses the most recent active contributions and all active campaigns.
    """
    contributions = (
        db.query(Contribution)
        .filter(Contribution.deleted_at.is_(None))
        .order_by(Contribution.date.desc(), Contribution.id.desc())
        .limit(SUMMARY_CONTRIBUTION_LIMIT)
        .all()
    )
    campaigns = db.query(Campaign).filter(Campaign.deleted_at.is_(None)).all()

    try:
        summary = gemini_service.generate_contribution_summary(
            period=request.period,
            contributions=[
                {
                    "donor": c.donor_name,
                    "amount": float(c.amount),
                    "campaign_id": c.campaign_id,
                    "date": c.date.isoformat() if c.date else None,
                    "status": c.status,
                }
                for c in contributions
            ],
            campaigns=[{"id": c.id, "name": c.name, "goal": float(c.goal)} for c in campaigns],
        )
    except Exception as e:
        logger.error(f"AI summary failed: {str(e)}")
        raise HTTPException(status_code=500, detail="AI analysis failed.")

    return SummaryResponse(summary=summary)


@router.post("/note", response_model=NoteResponse)
async def thank_you_note(
    request: NoteRequest,
    user: CurrentUser = Depends(require_permission("page:contributions:view")),
):
    """Draft a short thank-you note for a donor"""
    try:
        note = gemini_service.generate_thank_you_note(
            donor_name=request.donor_name,
            amount=request.amount,
            campaign_name=request.campaign_name,
        )
    except Exception as e:
        logger.error(f"AI note generation failed: {str(e)}")
        raise HTTPException(status_code=500, detail="AI note generation failed.")

    return NoteResponse(note=note)
