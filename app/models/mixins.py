"""
Shared column sets for audited records and their history tables
"""
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, func
from sqlalchemy.orm import declared_attr


class RecordMixin:
    """Timestamps plus the soft-delete marker used by every archivable record"""

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
    deleted_at = Column(DateTime(timezone=True), nullable=True, index=True)

    @property
    def is_archived(self) -> bool:
        return self.deleted_at is not None


class HistoryMixin:
    """
    Append-only audit rows: one row per changed field.

    Values are stored as text; see app.services.history_service for how
    they are stringified.
    """

    id = Column(Integer, primary_key=True)
    record_id = Column(Integer, nullable=False, index=True)
    field_changed = Column(String(255), nullable=False)
    old_value = Column(Text)
    new_value = Column(Text)
    changed_at = Column(DateTime(timezone=True), server_default=func.now())

    @declared_attr
    def changed_by_user_id(cls):
        return Column(Integer, ForeignKey("users.id", ondelete="SET NULL"))

    def __repr__(self):
        return (
            f"<{type(self).__name__}(record_id={self.record_id}, "
            f"field={self.field_changed}, {self.old_value!r} -> {self.new_value!r})>"
        )
