"""
Router factory for archivable dashboard records

Every resource gets the same five endpoints:
list, create, audited update, archive (soft delete) and history.
"""
from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session
from typing import List, Type
import logging

from app.database import get_db
from app.schemas.base import CamelModel
from app.schemas.records import HistoryEntry
from app.services.records_service import RecordKind, records_service
from app.utils.auth import CurrentUser, get_current_user, require_permission

logger = logging.getLogger(__name__)


def build_record_router(
    kind: RecordKind,
    schema_in: Type[CamelModel],
    schema_out: Type[CamelModel],
    view_permission: str,
) -> APIRouter:
    router = APIRouter(prefix=f"/api/{kind.record_type}", tags=[kind.record_type])

    @router.get("", response_model=List[schema_out])
    async def list_records(
        user: CurrentUser = Depends(require_permission(view_permission)),
        db: Session = Depends(get_db),
    ):
        return records_service.list_active(db, kind)

    @router.post("", response_model=schema_out, status_code=201)
    async def create_record(
        payload: schema_in,
        user: CurrentUser = Depends(require_permission("action:create")),
        db: Session = Depends(get_db),
    ):
        return records_service.create(db, kind, payload.model_dump(by_alias=True))

    @router.put("/{record_id}", response_model=schema_out)
    async def update_record(
        record_id: int,
        payload: schema_in,
        user: CurrentUser = Depends(require_permission("action:edit")),
        db: Session = Depends(get_db),
    ):
        # Only fields the client sent take part in the write and the audit diff
        values = payload.model_dump(by_alias=True, exclude_unset=True)
        return records_service.update(db, kind, record_id, values, user.id)

    @router.delete("/{record_id}", status_code=204)
    async def archive_record(
        record_id: int,
        user: CurrentUser = Depends(require_permission("action:delete")),
        db: Session = Depends(get_db),
    ):
        records_service.archive(db, kind, record_id, user.id)
        return Response(status_code=204)

    @router.get("/{record_id}/history", response_model=List[HistoryEntry])
    async def record_history(
        record_id: int,
        user: CurrentUser = Depends(get_current_user),
        db: Session = Depends(get_db),
    ):
        return records_service.history(db, kind, record_id)

    return router
