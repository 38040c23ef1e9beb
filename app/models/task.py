"""
Task model - volunteer work items
"""
from sqlalchemy import Column, Integer, String, Text, Date
from app.database import Base
from app.models.mixins import RecordMixin, HistoryMixin


class Task(RecordMixin, Base):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True)
    title = Column(String(255), nullable=False)
    description = Column(Text)
    status = Column(String(50), nullable=False, default="To Do")
    due_date = Column(Date, nullable=False)
    assignee_name = Column(String(255), nullable=False)

    def __repr__(self):
        return f"<Task(id={self.id}, title={self.title}, status={self.status})>"


class TaskHistory(HistoryMixin, Base):
    __tablename__ = "tasks_history"
