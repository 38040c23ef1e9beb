"""
Vendor and vendor contact models
"""
from sqlalchemy import Column, Integer, String, Text, ForeignKey
from sqlalchemy.orm import relationship
from app.database import Base
from app.models.mixins import RecordMixin, HistoryMixin


class Vendor(RecordMixin, Base):
    __tablename__ = "vendors"

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False)
    business = Column(Text)
    address = Column(Text)

    contacts = relationship(
        "ContactPerson",
        back_populates="vendor",
        cascade="all, delete-orphan",
        order_by="ContactPerson.id",
    )

    def __repr__(self):
        return f"<Vendor(id={self.id}, name={self.name})>"


class ContactPerson(Base):
    __tablename__ = "contact_persons"

    id = Column(Integer, primary_key=True)
    vendor_id = Column(Integer, ForeignKey("vendors.id", ondelete="CASCADE"), nullable=False)
    name = Column(String(255), nullable=False)
    contact_number = Column(String(20), nullable=False)

    vendor = relationship("Vendor", back_populates="contacts")


class VendorHistory(HistoryMixin, Base):
    __tablename__ = "vendors_history"
