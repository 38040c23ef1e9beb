"""
Quiz challenge service
Session sampling, answer scoring and leaderboard ranking
"""
import logging
import random
from collections import defaultdict
from typing import Any, Dict, Iterable, List, Optional, Set

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.config import settings
from app.models import Quiz, Question, Option, Participant
from app.models.participant import PARTICIPATION_UNIQUE
from app.utils.cache import cache_service
from app.utils.exceptions import AlreadySubmittedError, NotFoundError

logger = logging.getLogger(__name__)


def is_duplicate_participation(error: IntegrityError) -> bool:
    """True when an insert failed on the (mobile, quiz_id) unique constraint"""
    diag = getattr(error.orig, "diag", None)
    constraint = getattr(diag, "constraint_name", None)
    if constraint:
        return constraint == PARTICIPATION_UNIQUE
    # SQLite reports the columns instead of the constraint name
    message = str(error.orig)
    return PARTICIPATION_UNIQUE in message or "participants.mobile, participants.quiz_id" in message


class QuizService:
    """
    Service for running quiz sessions

    - Start: random sample of the quiz's questions, options shuffled,
      correctness withheld
    - Submit: one point per answer matching a correct option, then a
      single insert gated by the (mobile, quiz) unique constraint
    - Leaderboard: score desc, time asc, earliest submission first
    """

    def __init__(self, question_count: int = 5, rng: Optional[random.Random] = None):
        self.question_count = question_count
        self.rng = rng or random.Random()

    def list_quizzes(self, db: Session, mobile: str) -> List[Dict[str, Any]]:
        """All quizzes with whether this mobile has already completed each"""
        completed_ids = {
            quiz_id
            for (quiz_id,) in db.query(Participant.quiz_id).filter(Participant.mobile == mobile).all()
        }
        quizzes = db.query(Quiz).order_by(Quiz.id).all()

        return [
            {
                "id": quiz.id,
                "name": quiz.name,
                "description": quiz.description,
                "completed": quiz.id in completed_ids,
            }
            for quiz in quizzes
        ]

    def has_submitted(self, db: Session, mobile: str, quiz_id: int) -> bool:
        return db.query(Participant.id).filter(
            Participant.mobile == mobile,
            Participant.quiz_id == quiz_id,
        ).first() is not None

    def start_session(self, db: Session, quiz_id: int) -> List[Dict[str, Any]]:
        """
        Sample questions for a new attempt

        Args:
            db: Database session
            quiz_id: Quiz to draw from

        Returns:
            List of {id, question_text, options}; options are texts only

        Raises:
            NotFoundError: the quiz has no questions
        """
        question_ids = [
            question_id
            for (question_id,) in db.query(Question.id).filter(Question.quiz_id == quiz_id).all()
        ]
        if not question_ids:
            raise NotFoundError("No questions found for this quiz.")

        sample_size = min(self.question_count, len(question_ids))
        selected_ids = self.rng.sample(question_ids, sample_size)

        questions = {
            question.id: question
            for question in db.query(Question).filter(Question.id.in_(selected_ids)).all()
        }
        options = defaultdict(list)
        for question_id, option_text in (
            db.query(Option.question_id, Option.option_text)
            .filter(Option.question_id.in_(selected_ids))
            .order_by(Option.id)
            .all()
        ):
            options[question_id].append(option_text)

        session_questions = []
        for question_id in selected_ids:
            texts = list(options[question_id])
            self.rng.shuffle(texts)
            session_questions.append({
                "id": question_id,
                "question_text": questions[question_id].question_text,
                "options": texts,
            })

        logger.info(f"Started quiz {quiz_id} with questions {selected_ids}")
        return session_questions

    def score_answers(self, db: Session, quiz_id: int, answers: Iterable[Dict[str, Any]]) -> int:
        """
        Count answers whose chosen text matches an option flagged correct

        Unknown questions, questions from other quizzes and unmatched
        option texts score 0. A question answered more than once counts
        only its first answer.
        """
        chosen: Dict[int, str] = {}
        for answer in answers:
            chosen.setdefault(answer["question_id"], answer["answer"])
        if not chosen:
            return 0

        correct: Dict[int, Set[str]] = defaultdict(set)
        rows = (
            db.query(Option.question_id, Option.option_text)
            .join(Question, Question.id == Option.question_id)
            .filter(
                Question.quiz_id == quiz_id,
                Option.question_id.in_(list(chosen)),
                Option.is_correct.is_(True),
            )
            .all()
        )
        for question_id, option_text in rows:
            correct[question_id].add(option_text)

        return sum(1 for question_id, text in chosen.items() if text in correct[question_id])

    def submit(
        self,
        db: Session,
        name: str,
        mobile: str,
        quiz_id: int,
        answers: Iterable[Dict[str, Any]],
        time_taken: int,
    ) -> int:
        """
        Score a submission and record the participation

        Returns:
            The computed score

        Raises:
            NotFoundError: unknown quiz
            AlreadySubmittedError: (mobile, quiz) already has a participation
        """
        if db.get(Quiz, quiz_id) is None:
            raise NotFoundError("Quiz not found")

        score = self.score_answers(db, quiz_id, answers)

        participant = Participant(
            name=name,
            mobile=mobile,
            quiz_id=quiz_id,
            score=score,
            time_taken_seconds=time_taken,
        )
        db.add(participant)
        try:
            db.commit()
        except IntegrityError as e:
            db.rollback()
            if not is_duplicate_participation(e):
                raise
            logger.info(f"Duplicate submission rejected: quiz={quiz_id}, mobile={mobile}")
            raise AlreadySubmittedError()

        cache_service.delete(self._leaderboard_key(quiz_id))
        logger.info(f"Quiz {quiz_id} submitted: mobile={mobile}, score={score}, time={time_taken}s")
        return score

    def get_leaderboard(self, db: Session, quiz_id: int) -> List[Dict[str, Any]]:
        """Ranked participations, served from cache when available"""
        cache_key = self._leaderboard_key(quiz_id)
        cached = cache_service.get(cache_key)
        if cached is not None:
            return cached

        participants = (
            db.query(Participant)
            .filter(Participant.quiz_id == quiz_id)
            .order_by(
                Participant.score.desc(),
                Participant.time_taken_seconds.asc(),
                Participant.submitted_at.asc(),
                Participant.id.asc(),
            )
            .all()
        )
        leaderboard = [
            {
                "name": participant.name,
                "score": participant.score,
                "time_taken": participant.time_taken_seconds,
                "rank": position,
            }
            for position, participant in enumerate(participants, start=1)
        ]

        cache_service.set(cache_key, leaderboard, ttl=settings.LEADERBOARD_CACHE_TTL)
        return leaderboard

    @staticmethod
    def _leaderboard_key(quiz_id: int) -> str:
        return f"leaderboard:{quiz_id}"


# Global instance
quiz_service = QuizService(question_count=settings.QUIZ_QUESTION_COUNT)
