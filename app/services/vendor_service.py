"""
Vendor service: vendor records plus their contact persons
"""
import json
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

from sqlalchemy.orm import Session

from app.models import ContactPerson, Expense, Quotation, Vendor
from app.services.history_service import history_service
from app.services.records_service import VENDORS, records_service
from app.utils.exceptions import ValidationError

logger = logging.getLogger(__name__)


def contacts_signature(contacts: Iterable[Mapping[str, Any]]) -> str:
    """
    Order-independent text form of a contact list

    A JSON array of sorted [name, number] pairs, so names or numbers
    containing separators cannot make two different lists look equal.
    """
    pairs = sorted([c["name"], c["contact_number"]] for c in contacts)
    return json.dumps(pairs, ensure_ascii=False)


class VendorService:

    def create(self, db: Session, values: Mapping[str, Any], contacts: List[Dict[str, Any]]) -> Vendor:
        vendor = records_service.build(VENDORS, values)
        vendor.contacts = [ContactPerson(name=c["name"], contact_number=c["contact_number"]) for c in contacts]
        db.add(vendor)
        try:
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(vendor)
        logger.info(f"Created vendor {vendor.id} with {len(contacts)} contact(s)")
        return vendor

    def update(
        self,
        db: Session,
        vendor_id: int,
        values: Mapping[str, Any],
        contacts: Optional[List[Dict[str, Any]]],
        user_id: int,
    ) -> Vendor:
        """
        Update vendor fields and, when given, replace its contacts

        The contact rows are always replaced when `contacts` is given; a
        'contacts' history row is written only if the set actually changed.
        """
        try:
            vendor = records_service.lock_active(db, VENDORS, vendor_id)
            records_service.apply_update(db, VENDORS, vendor, values, user_id)

            if contacts is not None:
                old_signature = contacts_signature(
                    {"name": c.name, "contact_number": c.contact_number} for c in vendor.contacts
                )
                history_service.log_changes(
                    db, VENDORS.history_model, vendor.id, user_id,
                    {"contacts": old_signature}, {"contacts": contacts_signature(contacts)},
                    {"contacts": "contacts"},
                )
                vendor.contacts = [
                    ContactPerson(name=c["name"], contact_number=c["contact_number"]) for c in contacts
                ]

            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(vendor)
        return vendor

    def archive(self, db: Session, vendor_id: int, user_id: int) -> None:
        """Archive a vendor unless an active expense or quotation still references it"""
        for model, label in ((Expense, "expenses"), (Quotation, "quotations")):
            in_use = (
                db.query(model.id)
                .filter(model.vendor_id == vendor_id, model.deleted_at.is_(None))
                .first()
            )
            if in_use is not None:
                raise ValidationError(f"Cannot archive vendor. It is associated with one or more active {label}.")
        records_service.archive(db, VENDORS, vendor_id, user_id)


# Global instance
vendor_service = VendorService()
