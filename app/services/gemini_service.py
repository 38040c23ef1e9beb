"""
Gemini AI service for contribution insights and donor notes
"""
import google.generativeai as genai
from app.config import settings
import json
import logging
from typing import List, Dict, Any

logger = logging.getLogger(__name__)

# Configure Gemini API
genai.configure(api_key=settings.GEMINI_API_KEY)


class GeminiService:
    """Service for all Gemini AI operations"""

    def __init__(self):
        self.model = genai.GenerativeModel(settings.GEMINI_MODEL)

    def generate_contribution_summary(
        self,
        period: str,
        contributions: List[Dict[str, Any]],
        campaigns: List[Dict[str, Any]]
    ) -> str:
        """
        Summarize contribution data for a non-profit manager

        Args:
            period: Human-readable reporting period
            contributions: Contribution dictionaries (donor, amount, campaign_id, date, status)
            campaigns: Campaign dictionaries (id, name, goal)

        Returns:
            Summary text
        """
        prompt = f"""
Analyze the following contribution data for the period: {period}.
Provide a concise, insightful summary for a non-profit manager.
Include total contributions, top campaign, trends, and average contribution.

Campaigns: {json.dumps(campaigns)}
Contributions: {json.dumps(contributions)}
"""
        try:
            response = self.model.generate_content(
                prompt,
                generation_config={"temperature": 0.3}
            )
            return response.text.strip()

        except Exception as e:
            logger.error(f"Failed to generate contribution summary: {str(e)}")
            raise

    def generate_thank_you_note(
        self,
        donor_name: str,
        amount: float,
        campaign_name: str
    ) -> str:
        """
        Draft a warm 3-4 sentence thank-you note

        Returns:
            Note text
        """
        prompt = (
            f"Generate a warm, personal 3-4 sentence thank you note to {donor_name} "
            f"for their contribution of ₹{amount:,.2f} to the \"{campaign_name}\" campaign."
        )
        try:
            response = self.model.generate_content(
                prompt,
                generation_config={"temperature": 0.7}
            )
            return response.text.strip()

        except Exception as e:
            logger.error(f"Failed to generate thank you note: {str(e)}")
            raise


# Global instance
gemini_service = GeminiService()
