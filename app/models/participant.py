"""
Participant model - one scored attempt per (mobile, quiz)
"""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint, CheckConstraint, func
from app.database import Base


PARTICIPATION_UNIQUE = "uq_participants_mobile_quiz"


class Participant(Base):
    """
    Participants table - the unique constraint is the duplicate-submission gate
    """
    __tablename__ = "participants"
    __table_args__ = (
        UniqueConstraint("mobile", "quiz_id", name=PARTICIPATION_UNIQUE),
        CheckConstraint("score >= 0", name="ck_participants_score_non_negative"),
    )

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False)
    mobile = Column(String(10), nullable=False, index=True)
    quiz_id = Column(Integer, ForeignKey("quizzes.id", ondelete="CASCADE"), nullable=False, index=True)
    score = Column(Integer, nullable=False, default=0)
    time_taken_seconds = Column(Integer, nullable=False)
    submitted_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<Participant(mobile={self.mobile}, quiz_id={self.quiz_id}, score={self.score})>"
