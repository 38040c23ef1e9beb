from datetime import date
from decimal import Decimal

from app.models import Campaign, Contribution
from app.services.gemini_service import gemini_service


def test_summary_passes_recent_contributions(client, db, viewer_headers, monkeypatch):
    campaign = Campaign(name="Diwali", goal=Decimal("10000"))
    db.add(campaign)
    db.commit()
    db.add(Contribution(
        donor_name="Asha", tower_number="A", flat_number="101",
        amount=Decimal("250.00"), date=date(2024, 1, 15), campaign_id=campaign.id,
    ))
    db.commit()

    seen = {}

    def fake_summary(period, contributions, campaigns):
        seen.update(period=period, contributions=contributions, campaigns=campaigns)
        return "Strong month."

    monkeypatch.setattr(gemini_service, "generate_contribution_summary", fake_summary)

    response = client.post("/api/ai/summary", json={"period": "January"}, headers=viewer_headers)

    assert response.status_code == 200
    assert response.json() == {"summary": "Strong month."}
    assert seen["period"] == "January"
    assert seen["contributions"][0]["amount"] == 250.0
    assert seen["campaigns"] == [{"id": campaign.id, "name": "Diwali", "goal": 10000.0}]


def test_summary_failure_is_server_error(client, viewer_headers, monkeypatch):
    def broken(**kwargs):
        raise RuntimeError("quota exceeded")

    monkeypatch.setattr(gemini_service, "generate_contribution_summary", broken)

    response = client.post("/api/ai/summary", json={"period": "January"}, headers=viewer_headers)

    assert response.status_code == 500
    assert response.json()["message"] == "AI analysis failed."


def test_thank_you_note(client, viewer_headers, monkeypatch):
    monkeypatch.setattr(
        gemini_service, "generate_thank_you_note",
        lambda donor_name, amount, campaign_name: f"Thank you {donor_name}!",
    )

    response = client.post(
        "/api/ai/note",
        json={"donorName": "Asha", "amount": 250, "campaignName": "Diwali"},
        headers=viewer_headers,
    )

    assert response.json() == {"note": "Thank you Asha!"}


def test_ai_requires_login(client):
    assert client.post("/api/ai/note", json={"donorName": "A", "amount": 1, "campaignName": "C"}).status_code == 401
