"""
Task API endpoints
"""
from app.api.records import build_record_router
from app.schemas.records import TaskIn, TaskOut
from app.services.records_service import TASKS

router = build_record_router(TASKS, TaskIn, TaskOut, "page:tasks:view")
