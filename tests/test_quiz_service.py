import random

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models import Option, Participant, Question, Quiz
from app.services.quiz_service import QuizService, is_duplicate_participation
from app.utils.exceptions import AlreadySubmittedError, NotFoundError


@pytest.fixture
def service():
    return QuizService(question_count=5, rng=random.Random(42))


def question_ids(quiz):
    return sorted(question.id for question in quiz.questions)


def test_session_samples_distinct_questions_with_all_options(db, quiz, service):
    session = service.start_session(db, quiz.id)

    assert len(session) == 5
    assert len({question["id"] for question in session}) == 5
    for question in session:
        n = question["question_text"].split()[1].rstrip("?")
        assert sorted(question["options"]) == sorted(
            [f"right-{n}", f"wrong-{n}-a", f"wrong-{n}-b", f"wrong-{n}-c"]
        )
        assert set(question) == {"id", "question_text", "options"}


def test_small_quiz_returns_every_question(db, service):
    quiz = Quiz(name="Tiny")
    quiz.questions = [
        Question(question_text="Only?", options=[Option(option_text="yes", is_correct=True)])
    ]
    db.add(quiz)
    db.commit()

    session = service.start_session(db, quiz.id)

    assert [question["question_text"] for question in session] == ["Only?"]


def test_quiz_without_questions_is_not_found(db, service):
    quiz = Quiz(name="Empty")
    db.add(quiz)
    db.commit()

    with pytest.raises(NotFoundError):
        service.start_session(db, quiz.id)


def test_score_counts_exact_correct_matches(db, quiz, service):
    ids = question_ids(quiz)
    answers = [
        {"question_id": ids[0], "answer": "right-1"},
        {"question_id": ids[1], "answer": "wrong-2-a"},
        {"question_id": ids[2], "answer": "RIGHT-3"},
        {"question_id": ids[3], "answer": "right-4"},
    ]

    assert service.score_answers(db, quiz.id, answers) == 2


def test_repeated_question_counts_once(db, quiz, service):
    first = question_ids(quiz)[0]
    answers = [
        {"question_id": first, "answer": "right-1"},
        {"question_id": first, "answer": "right-1"},
        {"question_id": first, "answer": "right-1"},
    ]

    assert service.score_answers(db, quiz.id, answers) == 1


def test_answers_to_other_quizzes_score_nothing(db, quiz, service):
    other = Quiz(name="Other")
    other.questions = [
        Question(question_text="Elsewhere?", options=[Option(option_text="yes", is_correct=True)])
    ]
    db.add(other)
    db.commit()
    foreign_id = other.questions[0].id

    answers = [
        {"question_id": foreign_id, "answer": "yes"},
        {"question_id": 999999, "answer": "right-1"},
    ]

    assert service.score_answers(db, quiz.id, answers) == 0
    assert service.score_answers(db, quiz.id, []) == 0


def test_second_submission_is_rejected(db, quiz, service):
    service.submit(db, "Ravi", "9876543210", quiz.id, [], 40)

    with pytest.raises(AlreadySubmittedError):
        service.submit(db, "Ravi again", "9876543210", quiz.id, [], 10)

    assert db.query(Participant).filter(Participant.quiz_id == quiz.id).count() == 1


def test_submit_unknown_quiz_is_not_found(db, service):
    with pytest.raises(NotFoundError):
        service.submit(db, "Ravi", "9876543210", 12345, [], 40)


def test_leaderboard_orders_by_score_then_time_then_submission(db, quiz, service):
    ids = question_ids(quiz)
    two_right = [
        {"question_id": ids[0], "answer": "right-1"},
        {"question_id": ids[1], "answer": "right-2"},
    ]
    one_right = two_right[:1]

    service.submit(db, "slow-two", "1000000001", quiz.id, two_right, 90)
    service.submit(db, "fast-one", "1000000002", quiz.id, one_right, 5)
    service.submit(db, "fast-two", "1000000003", quiz.id, two_right, 30)
    service.submit(db, "fast-two-later", "1000000004", quiz.id, two_right, 30)

    leaderboard = service.get_leaderboard(db, quiz.id)

    assert [entry["name"] for entry in leaderboard] == ["fast-two", "fast-two-later", "slow-two", "fast-one"]
    assert [entry["rank"] for entry in leaderboard] == [1, 2, 3, 4]
    assert leaderboard[0] == {"name": "fast-two", "score": 2, "time_taken": 30, "rank": 1}


def test_list_quizzes_flags_completed(db, quiz, service):
    other = Quiz(name="Second")
    db.add(other)
    db.commit()
    service.submit(db, "Ravi", "9876543210", quiz.id, [], 40)

    listing = {item["name"]: item["completed"] for item in service.list_quizzes(db, "9876543210")}

    assert listing == {"General Knowledge": True, "Second": False}
    assert all(not item["completed"] for item in service.list_quizzes(db, "1111111111"))


def test_ranking_example(db, quiz, service):
    for name, mobile, score, seconds in [("A", "2000000001", 5, 30), ("B", "2000000002", 5, 20), ("C", "2000000003", 3, 10)]:
        db.add(Participant(name=name, mobile=mobile, quiz_id=quiz.id, score=score, time_taken_seconds=seconds))
    db.commit()

    leaderboard = service.get_leaderboard(db, quiz.id)

    assert [(entry["name"], entry["rank"]) for entry in leaderboard] == [("B", 1), ("A", 2), ("C", 3)]


def test_three_of_five_correct_in_any_order(db, quiz, service):
    ids = question_ids(quiz)
    answers = [
        {"question_id": ids[4], "answer": "wrong-5-a"},
        {"question_id": ids[2], "answer": "right-3"},
        {"question_id": ids[0], "answer": "right-1"},
        {"question_id": ids[3], "answer": "wrong-4-b"},
        {"question_id": ids[1], "answer": "right-2"},
    ]

    assert service.score_answers(db, quiz.id, answers) == 3
    assert service.score_answers(db, quiz.id, list(reversed(answers))) == 3


def test_only_the_participation_constraint_counts_as_duplicate():
    duplicate = IntegrityError(
        "INSERT INTO participants", {},
        Exception("UNIQUE constraint failed: participants.mobile, participants.quiz_id"),
    )
    foreign_key = IntegrityError("INSERT INTO participants", {}, Exception("FOREIGN KEY constraint failed"))

    assert is_duplicate_participation(duplicate)
    assert not is_duplicate_participation(foreign_key)


def test_other_integrity_errors_are_not_reported_as_resubmission(db, quiz, service, monkeypatch):
    def commit(self):
        raise IntegrityError("INSERT INTO participants", {}, Exception("NOT NULL constraint failed: participants.name"))

    monkeypatch.setattr(Session, "commit", commit)

    with pytest.raises(IntegrityError):
        service.submit(db, "Ravi", "9876543210", quiz.id, [], 40)
