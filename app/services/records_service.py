"""
Generic persistence for archivable dashboard records

Each resource is described by a RecordKind: its model, history table,
the API-field -> column mapping used both for writes and for audit
diffs, the column shown in the archive, and its list ordering.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Type

from sqlalchemy.orm import Session

from app.models import (
    Contribution, ContributionHistory,
    Vendor, VendorHistory,
    Expense, ExpenseHistory,
    Budget, BudgetHistory,
    Task, TaskHistory,
    Event, EventHistory,
    Sponsor, SponsorHistory,
    Quotation, QuotationHistory,
)
from app.services.history_service import history_service, record_snapshot
from app.utils.exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecordKind:
    record_type: str
    model: Type
    history_model: Type
    field_mapping: Mapping[str, str]
    label_column: str
    order_by: Callable[[], List[Any]] = field(default=lambda: [])


CONTRIBUTIONS = RecordKind(
    record_type="contributions",
    model=Contribution,
    history_model=ContributionHistory,
    field_mapping={
        "donorName": "donor_name", "donorEmail": "donor_email", "mobileNumber": "mobile_number",
        "towerNumber": "tower_number", "flatNumber": "flat_number", "amount": "amount",
        "numberOfCoupons": "number_of_coupons", "campaignId": "campaign_id", "date": "date",
        "status": "status", "type": "type", "image": "image",
    },
    label_column="donor_name",
    order_by=lambda: [Contribution.date.desc(), Contribution.id.desc()],
)

VENDORS = RecordKind(
    record_type="vendors",
    model=Vendor,
    history_model=VendorHistory,
    field_mapping={"name": "name", "business": "business", "address": "address"},
    label_column="name",
    order_by=lambda: [Vendor.name.asc()],
)

EXPENSES = RecordKind(
    record_type="expenses",
    model=Expense,
    history_model=ExpenseHistory,
    field_mapping={
        "name": "name", "vendorId": "vendor_id", "totalCost": "total_cost",
        "billDate": "bill_date", "expenseHead": "expense_head", "expenseBy": "expense_by",
    },
    label_column="name",
    order_by=lambda: [Expense.bill_date.desc(), Expense.id.desc()],
)

BUDGETS = RecordKind(
    record_type="budgets",
    model=Budget,
    history_model=BudgetHistory,
    field_mapping={"itemName": "item_name", "budgetedAmount": "budgeted_amount", "expenseHead": "expense_head"},
    label_column="item_name",
    order_by=lambda: [Budget.item_name.asc()],
)

TASKS = RecordKind(
    record_type="tasks",
    model=Task,
    history_model=TaskHistory,
    field_mapping={
        "title": "title", "description": "description", "status": "status",
        "dueDate": "due_date", "assigneeName": "assignee_name",
    },
    label_column="title",
    order_by=lambda: [Task.due_date.asc(), Task.id.asc()],
)

EVENTS = RecordKind(
    record_type="events",
    model=Event,
    history_model=EventHistory,
    field_mapping={
        "name": "name", "eventDate": "event_date", "startTime": "start_time", "endTime": "end_time",
        "venue": "venue", "description": "description", "image": "image",
    },
    label_column="name",
    order_by=lambda: [Event.event_date.asc(), Event.start_time.asc(), Event.id.asc()],
)

SPONSORS = RecordKind(
    record_type="sponsors",
    model=Sponsor,
    history_model=SponsorHistory,
    field_mapping={
        "name": "name", "contactNumber": "contact_number", "address": "address", "email": "email",
        "businessCategory": "business_category", "businessInfo": "business_info",
        "sponsorshipAmount": "sponsorship_amount", "sponsorshipType": "sponsorship_type",
        "datePaid": "date_paid", "paymentReceivedBy": "payment_received_by", "image": "image",
    },
    label_column="name",
    order_by=lambda: [Sponsor.name.asc()],
)

QUOTATIONS = RecordKind(
    record_type="quotations",
    model=Quotation,
    history_model=QuotationHistory,
    field_mapping={"quotationFor": "quotation_for", "vendorId": "vendor_id", "cost": "cost", "date": "date"},
    label_column="quotation_for",
    order_by=lambda: [Quotation.date.desc(), Quotation.id.desc()],
)

ARCHIVABLE: Dict[str, RecordKind] = {
    kind.record_type: kind
    for kind in (CONTRIBUTIONS, SPONSORS, VENDORS, EXPENSES, QUOTATIONS, BUDGETS, TASKS, EVENTS)
}


class RecordsService:
    """List / create / audited update / archive / restore for any RecordKind"""

    def list_active(self, db: Session, kind: RecordKind) -> List[Any]:
        return (
            db.query(kind.model)
            .filter(kind.model.deleted_at.is_(None))
            .order_by(*kind.order_by())
            .all()
        )

    def build(self, kind: RecordKind, values: Mapping[str, Any]):
        """Instantiate a model from API-keyed values, ignoring unmapped keys"""
        columns = {kind.field_mapping[key]: value for key, value in values.items() if key in kind.field_mapping}
        return kind.model(**columns)

    def create(self, db: Session, kind: RecordKind, values: Mapping[str, Any]):
        record = self.build(kind, values)
        db.add(record)
        try:
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(record)
        logger.info(f"Created {kind.record_type} record {record.id}")
        return record

    def create_many(self, db: Session, kind: RecordKind, rows: List[Mapping[str, Any]]) -> List[Any]:
        """Insert all rows in one transaction; any failure inserts none"""
        records = [self.build(kind, values) for values in rows]
        db.add_all(records)
        try:
            db.commit()
        except Exception:
            db.rollback()
            raise
        for record in records:
            db.refresh(record)
        logger.info(f"Bulk created {len(records)} {kind.record_type} records")
        return records

    def lock_active(self, db: Session, kind: RecordKind, record_id: int):
        """SELECT ... FOR UPDATE on an active record"""
        record = (
            db.query(kind.model)
            .filter(kind.model.id == record_id, kind.model.deleted_at.is_(None))
            .with_for_update()
            .first()
        )
        if record is None:
            raise NotFoundError(f"{kind.record_type[:-1].capitalize()} not found")
        return record

    def apply_update(
        self,
        db: Session,
        kind: RecordKind,
        record,
        values: Mapping[str, Any],
        user_id: Optional[int],
    ) -> List[Any]:
        """Write mapped values onto a locked record and queue its history rows"""
        old = record_snapshot(record)
        for key, value in values.items():
            column = kind.field_mapping.get(key)
            if column is not None:
                setattr(record, column, value)
        return history_service.log_changes(
            db, kind.history_model, record.id, user_id, old, values, kind.field_mapping
        )

    def update(self, db: Session, kind: RecordKind, record_id: int, values: Mapping[str, Any], user_id: int):
        """
        Read, write and audit a record in one transaction

        Args:
            values: API-keyed fields to change; keys not in the mapping are ignored
        """
        try:
            record = self.lock_active(db, kind, record_id)
            self.apply_update(db, kind, record, values, user_id)
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(record)
        return record

    def archive(self, db: Session, kind: RecordKind, record_id: int, user_id: int) -> None:
        try:
            history_service.archive(db, kind.model, kind.history_model, record_id, user_id)
            db.commit()
        except Exception:
            db.rollback()
            raise

    def history(self, db: Session, kind: RecordKind, record_id: int) -> List[Dict[str, Any]]:
        return history_service.get_history(db, kind.history_model, record_id)

    def list_archived(self, db: Session) -> List[Dict[str, Any]]:
        """Archived items of every type, most recently archived first"""
        items = []
        for kind in ARCHIVABLE.values():
            label = getattr(kind.model, kind.label_column)
            rows = (
                db.query(kind.model.id, label, kind.model.deleted_at)
                .filter(kind.model.deleted_at.isnot(None))
                .all()
            )
            items.extend(
                {"id": record_id, "name": name, "deleted_at": deleted_at, "type": kind.record_type}
                for record_id, name, deleted_at in rows
            )
        items.sort(key=lambda item: item["deleted_at"], reverse=True)
        return items

    def restore(self, db: Session, record_type: str, record_id: int, user_id: int) -> None:
        kind = ARCHIVABLE.get(record_type)
        if kind is None:
            raise ValidationError("Invalid record type for restoration.")
        try:
            history_service.restore(db, kind.model, kind.history_model, record_id, user_id)
            db.commit()
        except Exception:
            db.rollback()
            raise
        logger.info(f"Restored {record_type} record {record_id}")


# Global instance
records_service = RecordsService()
