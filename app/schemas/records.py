"""
Pydantic schemas for the audited dashboard records

Input limits mirror the column sizes in app.models so oversized values are
rejected with a 400 before they reach the database.
"""
import datetime as dt
from datetime import date, datetime, time
from decimal import Decimal
from pydantic import Field
from typing import List, Optional

from app.schemas.base import CamelModel

NAME_LENGTH = 255
PHONE_LENGTH = 20
HEAD_LENGTH = 100


def money(max_digits: int = 12, **kwargs):
    """Non-negative amount with two decimal places"""
    return Field(..., ge=0, max_digits=max_digits, decimal_places=2, **kwargs)


class RecordOut(CamelModel):
    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CampaignOut(RecordOut):
    name: str
    goal: float
    description: Optional[str] = None


class ContributionIn(CamelModel):
    donor_name: str = Field(..., min_length=1, max_length=NAME_LENGTH)
    donor_email: Optional[str] = Field(None, max_length=NAME_LENGTH)
    mobile_number: Optional[str] = Field(None, max_length=PHONE_LENGTH)
    tower_number: str = Field(..., max_length=50)
    flat_number: str = Field(..., max_length=50)
    amount: Decimal = money(max_digits=10)
    number_of_coupons: int = Field(0, ge=0)
    campaign_id: Optional[int] = None
    date: dt.date = Field(default_factory=dt.date.today)
    status: str = Field("Completed", max_length=20)
    type: Optional[str] = Field(None, max_length=20)
    image: Optional[str] = None


class ContributionOut(RecordOut):
    donor_name: str
    donor_email: Optional[str] = None
    mobile_number: Optional[str] = None
    tower_number: str
    flat_number: str
    amount: float
    number_of_coupons: int
    campaign_id: Optional[int] = None
    date: dt.date
    status: str
    type: Optional[str] = None
    image: Optional[str] = None


class BulkContributionIn(CamelModel):
    contributions: List[ContributionIn]


class VendorContact(CamelModel):
    name: str = Field(..., min_length=1, max_length=NAME_LENGTH)
    contact_number: str = Field(..., min_length=1, max_length=PHONE_LENGTH)


class VendorIn(CamelModel):
    name: str = Field(..., min_length=1, max_length=NAME_LENGTH)
    business: Optional[str] = None
    address: Optional[str] = None
    contacts: List[VendorContact] = []


class VendorOut(RecordOut):
    name: str
    business: Optional[str] = None
    address: Optional[str] = None
    contacts: List[VendorContact]


class ExpenseIn(CamelModel):
    name: str = Field(..., min_length=1, max_length=NAME_LENGTH)
    vendor_id: Optional[int] = None
    total_cost: Decimal = money()
    bill_date: date
    expense_head: str = Field(..., max_length=HEAD_LENGTH)
    expense_by: str = Field(..., max_length=HEAD_LENGTH)


class ExpenseOut(RecordOut):
    name: str
    vendor_id: Optional[int] = None
    total_cost: float
    bill_date: date
    expense_head: str
    expense_by: str


class QuotationIn(CamelModel):
    quotation_for: str = Field(..., min_length=1, max_length=NAME_LENGTH)
    vendor_id: Optional[int] = None
    cost: Decimal = money()
    date: dt.date


class QuotationOut(RecordOut):
    quotation_for: str
    vendor_id: Optional[int] = None
    cost: float
    date: dt.date


class BudgetIn(CamelModel):
    item_name: str = Field(..., min_length=1, max_length=NAME_LENGTH)
    budgeted_amount: Decimal = money()
    expense_head: str = Field(..., max_length=HEAD_LENGTH)


class BudgetOut(RecordOut):
    item_name: str
    budgeted_amount: float
    expense_head: str


class SponsorIn(CamelModel):
    name: str = Field(..., min_length=1, max_length=NAME_LENGTH)
    contact_number: Optional[str] = Field(None, max_length=PHONE_LENGTH)
    address: Optional[str] = None
    email: Optional[str] = Field(None, max_length=NAME_LENGTH)
    business_category: Optional[str] = Field(None, max_length=HEAD_LENGTH)
    business_info: Optional[str] = None
    sponsorship_amount: Decimal = money()
    sponsorship_type: Optional[str] = Field(None, max_length=50)
    date_paid: Optional[date] = None
    payment_received_by: Optional[str] = Field(None, max_length=HEAD_LENGTH)
    image: Optional[str] = None


class SponsorOut(RecordOut):
    name: str
    contact_number: Optional[str] = None
    address: Optional[str] = None
    email: Optional[str] = None
    business_category: Optional[str] = None
    business_info: Optional[str] = None
    sponsorship_amount: float
    sponsorship_type: Optional[str] = None
    date_paid: Optional[date] = None
    payment_received_by: Optional[str] = None
    image: Optional[str] = None


class EventIn(CamelModel):
    name: str = Field(..., min_length=1, max_length=NAME_LENGTH)
    event_date: date
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    venue: Optional[str] = Field(None, max_length=NAME_LENGTH)
    description: Optional[str] = None
    image: Optional[str] = None


class EventOut(RecordOut):
    name: str
    event_date: date
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    venue: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None


class TaskIn(CamelModel):
    title: str = Field(..., min_length=1, max_length=NAME_LENGTH)
    description: Optional[str] = None
    status: str = Field("To Do", max_length=50)
    due_date: date
    assignee_name: str = Field(..., max_length=NAME_LENGTH)


class TaskOut(RecordOut):
    title: str
    description: Optional[str] = None
    status: str
    due_date: date
    assignee_name: str


class HistoryEntry(CamelModel):
    """One audited field change"""
    id: int
    field_changed: str
    old_value: Optional[str] = None
    new_value: Optional[str] = None
    changed_by_user: Optional[str] = None
    changed_at: Optional[datetime] = None


class ArchivedItem(CamelModel):
    id: int
    name: str
    deleted_at: datetime
    type: str
