"""
Audit history service

Diffs an old record against proposed new values and appends one history
row per changed field. Also owns the archive/restore status transitions,
which are logged to the same history tables.
"""
import logging
from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Mapping, Optional, Type

from sqlalchemy.orm import Session
from sqlalchemy import func

from app.models import User
from app.utils.exceptions import NotFoundError

logger = logging.getLogger(__name__)

STATUS_FIELD = "status"
ACTIVE = "active"
ARCHIVED = "archived"


@dataclass(frozen=True)
class FieldChange:
    """A single field transition, values already stringified"""
    field: str
    old_value: Optional[str]
    new_value: Optional[str]


def stringify(value: Any) -> Optional[str]:
    """
    Canonical text form used both for comparison and for storage.

    None stays None, booleans are lower-case, numbers compare by value
    (100 == 100.0 == Decimal("100.00")) and dates and times use ISO format.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float, Decimal)):
        try:
            normalized = Decimal(str(value)).normalize()
        except InvalidOperation:
            return str(value)
        # normalize() turns 100 into 1E+2
        return format(normalized, "f")
    if isinstance(value, (date, datetime, time)):
        return value.isoformat()
    return str(value)


class HistoryService:
    """Service for field-level audit logging on archivable records"""

    def diff_records(
        self,
        old_record: Mapping[str, Any],
        new_record: Mapping[str, Any],
        field_mapping: Mapping[str, str],
    ) -> List[FieldChange]:
        """
        Compute the changed fields between a stored row and an update

        Args:
            old_record: Stored values keyed by column name
            new_record: Proposed values keyed by logical (API) field name
            field_mapping: Logical field name -> column name

        Returns:
            One FieldChange per mapped field whose text form differs
        """
        changes = []
        for field, value in new_record.items():
            column = field_mapping.get(field)
            if column is None:
                continue
            old_text = stringify(old_record.get(column))
            new_text = stringify(value)
            if old_text != new_text:
                changes.append(FieldChange(field, old_text, new_text))
        return changes

    def log_changes(
        self,
        db: Session,
        history_model: Type,
        record_id: int,
        changed_by_user_id: Optional[int],
        old_record: Mapping[str, Any],
        new_record: Mapping[str, Any],
        field_mapping: Mapping[str, str],
    ) -> List[Any]:
        """
        Add one history row per changed field to the session

        Nothing is committed here; the rows are persisted by the caller's
        commit together with the record update.
        """
        rows = [
            history_model(
                record_id=record_id,
                field_changed=change.field,
                old_value=change.old_value,
                new_value=change.new_value,
                changed_by_user_id=changed_by_user_id,
            )
            for change in self.diff_records(old_record, new_record, field_mapping)
        ]
        db.add_all(rows)

        if rows:
            logger.info(
                f"{history_model.__tablename__}: record {record_id} changed "
                f"{[row.field_changed for row in rows]} by user {changed_by_user_id}"
            )
        return rows

    def get_history(self, db: Session, history_model: Type, record_id: int) -> List[Dict[str, Any]]:
        """History rows for a record, newest first, with the changer's username"""
        rows = (
            db.query(history_model, User.username)
            .outerjoin(User, history_model.changed_by_user_id == User.id)
            .filter(history_model.record_id == record_id)
            .order_by(history_model.changed_at.desc(), history_model.id.desc())
            .all()
        )
        return [
            {
                "id": entry.id,
                "field_changed": entry.field_changed,
                "old_value": entry.old_value,
                "new_value": entry.new_value,
                "changed_by_user": username,
                "changed_at": entry.changed_at,
            }
            for entry, username in rows
        ]

    def archive(self, db: Session, model: Type, history_model: Type, record_id: int, user_id: int):
        """Soft-delete an active record and log the status transition"""
        record = (
            db.query(model)
            .filter(model.id == record_id, model.deleted_at.is_(None))
            .with_for_update()
            .first()
        )
        if record is None:
            raise NotFoundError("Item not found")

        record.deleted_at = func.now()
        record.updated_at = func.now()
        self._log_status(db, history_model, record_id, user_id, ACTIVE, ARCHIVED)
        return record

    def restore(self, db: Session, model: Type, history_model: Type, record_id: int, user_id: int):
        """Clear the soft-delete marker and log the status transition"""
        record = (
            db.query(model)
            .filter(model.id == record_id, model.deleted_at.isnot(None))
            .with_for_update()
            .first()
        )
        if record is None:
            raise NotFoundError("Item not found or not archived.")

        record.deleted_at = None
        record.updated_at = func.now()
        self._log_status(db, history_model, record_id, user_id, ARCHIVED, ACTIVE)
        return record

    def _log_status(self, db, history_model, record_id, user_id, old, new):
        db.add(
            history_model(
                record_id=record_id,
                field_changed=STATUS_FIELD,
                old_value=old,
                new_value=new,
                changed_by_user_id=user_id,
            )
        )
        logger.info(f"{history_model.__tablename__}: record {record_id} {old} -> {new} by user {user_id}")


def record_snapshot(record) -> Dict[str, Any]:
    """Column name -> value for an ORM row, the 'old record' side of a diff"""
    return {column.name: getattr(record, column.key) for column in record.__table__.columns}


# Global instance
history_service = HistoryService()
