"""
Vendor API endpoints
"""
from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session
from typing import List
import logging

from app.database import get_db
from app.schemas.records import HistoryEntry, VendorIn, VendorOut
from app.services.records_service import VENDORS, records_service
from app.services.vendor_service import vendor_service
from app.utils.auth import CurrentUser, get_current_user, require_permission

router = APIRouter(prefix="/api/vendors", tags=["vendors"])
logger = logging.getLogger(__name__)


@router.get("", response_model=List[VendorOut])
async def list_vendors(
    user: CurrentUser = Depends(require_permission("page:vendors:view")),
    db: Session = Depends(get_db),
):
    """Active vendors by name, each with its contact persons"""
    return records_service.list_active(db, VENDORS)


@router.post("", response_model=VendorOut, status_code=201)
async def create_vendor(
    payload: VendorIn,
    user: CurrentUser = Depends(require_permission("action:create")),
    db: Session = Depends(get_db),
):
    values = payload.model_dump(by_alias=True, exclude={"contacts"})
    contacts = [contact.model_dump() for contact in payload.contacts]
    return vendor_service.create(db, values, contacts)


@router.put("/{vendor_id}", response_model=VendorOut)
async def update_vendor(
    vendor_id: int,
    payload: VendorIn,
    user: CurrentUser = Depends(require_permission("action:edit")),
    db: Session = Depends(get_db),
):
    """
    Update a vendor

    Changed fields are written to the vendor history. Sending `contacts`
    replaces the whole contact list; omitting it leaves contacts untouched.
    """
    values = payload.model_dump(by_alias=True, exclude_unset=True, exclude={"contacts"})
    contacts = None
    if "contacts" in payload.model_fields_set:
        contacts = [contact.model_dump() for contact in payload.contacts]

    return vendor_service.update(db, vendor_id, values, contacts, user.id)


@router.delete("/{vendor_id}", status_code=204)
async def archive_vendor(
    vendor_id: int,
    user: CurrentUser = Depends(require_permission("action:delete")),
    db: Session = Depends(get_db),
):
    """Archive a vendor; refused while an active expense references it"""
    vendor_service.archive(db, vendor_id, user.id)
    return Response(status_code=204)


@router.get("/{vendor_id}/history", response_model=List[HistoryEntry])
async def vendor_history(
    vendor_id: int,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return records_service.history(db, VENDORS, vendor_id)
