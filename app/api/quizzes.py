"""
Quiz challenge API endpoints
"""

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.orm import Session
from typing import List
import logging

from app.database import get_db
from app.schemas.quiz import (
    MOBILE_PATTERN,
    QuizSummary,
    StartRequest,
    SessionQuestion,
    SubmitRequest,
    SubmitResponse,
    LeaderboardEntry,
)
from app.services.quiz_service import quiz_service
from app.utils.exceptions import AlreadySubmittedError


router = APIRouter(prefix="/api", tags=["quiz"])
logger = logging.getLogger(__name__)


@router.get("/quizzes", response_model=List[QuizSummary])
async def list_quizzes(
    mobile: str = Query(..., pattern=MOBILE_PATTERN, description="10-digit mobile number"),
    db: Session = Depends(get_db),
):
    """
    List quizzes, flagging the ones this mobile number has completed
    """
    return quiz_service.list_quizzes(db, mobile)


@router.post("/start", response_model=List[SessionQuestion])
async def start_quiz(request: StartRequest, db: Session = Depends(get_db)):
    """
    Start a quiz attempt

    - Samples a fixed number of the quiz's questions at random
    - Shuffles each question's options
    - Never reveals which option is correct
    """
    if quiz_service.has_submitted(db, request.user.mobile, request.quiz_id):
        raise AlreadySubmittedError()

    return quiz_service.start_session(db, request.quiz_id)


@router.post("/submit", response_model=SubmitResponse, status_code=201)
async def submit_quiz(submission: SubmitRequest, db: Session = Depends(get_db)):
    """
    Submit answers and record the participation

    One point per answer whose text matches an option flagged correct.
    A second submission for the same mobile and quiz is rejected with 409.
    """
    score = quiz_service.submit(
        db,
        name=submission.user.name,
        mobile=submission.user.mobile,
        quiz_id=submission.quiz_id,
        answers=[answer.model_dump() for answer in submission.answers],
        time_taken=submission.time_taken,
    )
    return SubmitResponse(score=score)


@router.get("/leaderboard/{quiz_id}", response_model=List[LeaderboardEntry])
async def get_leaderboard(quiz_id: int = Path(...), db: Session = Depends(get_db)):
    """
    Ranked results: score descending, then fastest time, then earliest submission
    """
    return quiz_service.get_leaderboard(db, quiz_id)
