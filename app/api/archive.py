"""
Archive API endpoints: browse soft-deleted records and restore them
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List
import logging

from app.database import get_db
from app.schemas.base import MessageResponse
from app.schemas.records import ArchivedItem
from app.services.records_service import records_service
from app.utils.auth import CurrentUser, require_permission

router = APIRouter(prefix="/api/archive", tags=["archive"])
logger = logging.getLogger(__name__)


@router.get("", response_model=List[ArchivedItem])
async def list_archive(
    user: CurrentUser = Depends(require_permission("page:archive:view")),
    db: Session = Depends(get_db),
):
    """Archived items across all record types, most recently archived first"""
    return records_service.list_archived(db)


@router.post("/{record_type}/{record_id}/restore", response_model=MessageResponse)
async def restore_item(
    record_type: str,
    record_id: int,
    user: CurrentUser = Depends(require_permission("action:restore")),
    db: Session = Depends(get_db),
):
    records_service.restore(db, record_type, record_id, user.id)
    return MessageResponse(message="Item restored successfully.")
