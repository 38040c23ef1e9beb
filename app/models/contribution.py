"""
Campaign and contribution (donation) models
"""
from sqlalchemy import Column, Integer, String, Text, Date, Numeric, ForeignKey
from app.database import Base
from app.models.mixins import RecordMixin, HistoryMixin


class Campaign(RecordMixin, Base):
    __tablename__ = "campaigns"

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False)
    goal = Column(Numeric(15, 2), nullable=False)
    description = Column(Text)

    def __repr__(self):
        return f"<Campaign(id={self.id}, name={self.name})>"


class Contribution(RecordMixin, Base):
    """
    Contributions table - donations collected from residents
    """
    __tablename__ = "contributions"

    id = Column(Integer, primary_key=True)
    donor_name = Column(String(255), nullable=False)
    donor_email = Column(String(255))
    mobile_number = Column(String(20))
    tower_number = Column(String(50), nullable=False)
    flat_number = Column(String(50), nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    number_of_coupons = Column(Integer, nullable=False, default=0)
    campaign_id = Column(Integer, ForeignKey("campaigns.id"))
    date = Column(Date, nullable=False)
    status = Column(String(20), nullable=False, default="Completed")
    type = Column(String(20))
    image = Column(Text)

    def __repr__(self):
        return f"<Contribution(id={self.id}, donor={self.donor_name}, amount={self.amount})>"


class ContributionHistory(HistoryMixin, Base):
    __tablename__ = "contributions_history"
