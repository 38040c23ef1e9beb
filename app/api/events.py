"""
Festival event and sponsor API endpoints
"""
from app.api.records import build_record_router
from app.schemas.records import EventIn, EventOut, SponsorIn, SponsorOut
from app.services.records_service import EVENTS, SPONSORS

events_router = build_record_router(EVENTS, EventIn, EventOut, "page:events:view")
sponsors_router = build_record_router(SPONSORS, SponsorIn, SponsorOut, "page:sponsors:view")
