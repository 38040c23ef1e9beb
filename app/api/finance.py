"""
Expense, quotation and budget API endpoints
"""
from app.api.records import build_record_router
from app.schemas.records import BudgetIn, BudgetOut, ExpenseIn, ExpenseOut, QuotationIn, QuotationOut
from app.services.records_service import BUDGETS, EXPENSES, QUOTATIONS

expenses_router = build_record_router(EXPENSES, ExpenseIn, ExpenseOut, "page:expenses:view")
quotations_router = build_record_router(QUOTATIONS, QuotationIn, QuotationOut, "page:quotations:view")
budgets_router = build_record_router(BUDGETS, BudgetIn, BudgetOut, "page:budget:view")
