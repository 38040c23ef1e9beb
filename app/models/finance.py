"""
Expense and budget models
"""
from sqlalchemy import Column, Integer, String, Date, Numeric, ForeignKey
from app.database import Base
from app.models.mixins import RecordMixin, HistoryMixin


class Expense(RecordMixin, Base):
    """
    Expenses table - bills paid to vendors, grouped by expense head
    """
    __tablename__ = "expenses"

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False)
    vendor_id = Column(Integer, ForeignKey("vendors.id"), index=True)
    total_cost = Column(Numeric(12, 2), nullable=False)
    bill_date = Column(Date, nullable=False)
    expense_head = Column(String(100), nullable=False)
    expense_by = Column(String(100), nullable=False)

    def __repr__(self):
        return f"<Expense(id={self.id}, name={self.name}, total={self.total_cost})>"


class Budget(RecordMixin, Base):
    __tablename__ = "budgets"

    id = Column(Integer, primary_key=True)
    item_name = Column(String(255), nullable=False)
    budgeted_amount = Column(Numeric(12, 2), nullable=False)
    expense_head = Column(String(100), nullable=False)

    def __repr__(self):
        return f"<Budget(id={self.id}, item={self.item_name})>"


class ExpenseHistory(HistoryMixin, Base):
    __tablename__ = "expenses_history"


class BudgetHistory(HistoryMixin, Base):
    __tablename__ = "budgets_history"


class Quotation(RecordMixin, Base):
    """
    Quotations table - vendor price quotes gathered before an expense
    """
    __tablename__ = "quotations"

    id = Column(Integer, primary_key=True)
    quotation_for = Column(String(255), nullable=False)
    vendor_id = Column(Integer, ForeignKey("vendors.id"), index=True)
    cost = Column(Numeric(12, 2), nullable=False)
    date = Column(Date, nullable=False)

    def __repr__(self):
        return f"<Quotation(id={self.id}, for={self.quotation_for}, cost={self.cost})>"


class QuotationHistory(HistoryMixin, Base):
    __tablename__ = "quotations_history"
