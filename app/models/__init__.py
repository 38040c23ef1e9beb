"""
Database models package
"""
from app.models.user import User, Role, Permission, UserSession, LoginHistory, PageAccessHistory
from app.models.quiz import Quiz, Question, Option
from app.models.participant import Participant
from app.models.contribution import Campaign, Contribution, ContributionHistory
from app.models.vendor import Vendor, ContactPerson, VendorHistory
from app.models.finance import Expense, Budget, Quotation, ExpenseHistory, BudgetHistory, QuotationHistory
from app.models.event import Event, Sponsor, EventHistory, SponsorHistory
from app.models.task import Task, TaskHistory

__all__ = [
    "User", "Role", "Permission", "UserSession", "LoginHistory", "PageAccessHistory",
    "Quiz", "Question", "Option", "Participant",
    "Campaign", "Contribution", "ContributionHistory",
    "Vendor", "ContactPerson", "VendorHistory",
    "Expense", "Budget", "Quotation", "ExpenseHistory", "BudgetHistory", "QuotationHistory",
    "Event", "Sponsor", "EventHistory", "SponsorHistory",
    "Task", "TaskHistory",
]
