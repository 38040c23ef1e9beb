"""
Pydantic schemas for the quiz challenge endpoints
"""
from pydantic import Field
from typing import List, Optional

from app.schemas.base import CamelModel

MOBILE_PATTERN = r"^[0-9]{10}$"


class QuizUser(CamelModel):
    """Participant identity; mobile must be exactly 10 digits"""
    name: str = Field(..., min_length=1, max_length=255)
    mobile: str = Field(..., pattern=MOBILE_PATTERN)


class QuizSummary(CamelModel):
    id: int
    name: str
    description: Optional[str] = None
    completed: bool


class StartRequest(CamelModel):
    user: QuizUser
    quiz_id: int


class SessionQuestion(CamelModel):
    """A sampled question; options carry no correctness flag"""
    id: int
    question_text: str
    options: List[str]


class AnswerIn(CamelModel):
    question_id: int
    answer: str


class SubmitRequest(CamelModel):
    user: QuizUser
    answers: List[AnswerIn]
    time_taken: int = Field(..., ge=0, description="Elapsed time in seconds")
    quiz_id: int


class SubmitResponse(CamelModel):
    score: int


class LeaderboardEntry(CamelModel):
    name: str
    score: int
    time_taken: int
    rank: int
