"""
Festival event and sponsor models
"""
from sqlalchemy import Column, Integer, String, Text, Date, Time, Numeric
from app.database import Base
from app.models.mixins import RecordMixin, HistoryMixin


class Event(RecordMixin, Base):
    """
    Events table - scheduled programmes at a venue
    """
    __tablename__ = "events"

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False)
    event_date = Column(Date, nullable=False)
    start_time = Column(Time)
    end_time = Column(Time)
    venue = Column(String(255))
    description = Column(Text)
    image = Column(Text)

    def __repr__(self):
        return f"<Event(id={self.id}, name={self.name}, date={self.event_date})>"


class Sponsor(RecordMixin, Base):
    __tablename__ = "sponsors"

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False)
    contact_number = Column(String(20))
    address = Column(Text)
    email = Column(String(255))
    business_category = Column(String(100))
    business_info = Column(Text)
    sponsorship_amount = Column(Numeric(12, 2), nullable=False)
    sponsorship_type = Column(String(50))
    date_paid = Column(Date)
    payment_received_by = Column(String(100))
    image = Column(Text)

    def __repr__(self):
        return f"<Sponsor(id={self.id}, name={self.name}, amount={self.sponsorship_amount})>"


class EventHistory(HistoryMixin, Base):
    __tablename__ = "events_history"


class SponsorHistory(HistoryMixin, Base):
    __tablename__ = "sponsors_history"
