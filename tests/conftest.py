import os

# Settings are read at import time; point everything at throwaway backends first
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["GEMINI_API_KEY"] = "test-key"
os.environ["REDIS_URL"] = "redis://localhost:6399/15"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
from fastapi.testclient import TestClient
from werkzeug.security import generate_password_hash

from app.database import Base, SessionLocal, engine
from app.main import app
from app.models import Option, Question, Quiz, Role, User
from app.services.rbac_service import rbac_service
from app.utils.cache import cache_service
from app.utils.rate_limiter import rate_limiter

PASSWORD = "s3cret-pass"


@pytest.fixture(autouse=True)
def database(monkeypatch):
    monkeypatch.setattr(cache_service, "redis_client", None)
    rate_limiter.reset()

    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    rbac_service.seed(session)
    session.commit()
    session.close()

    yield

    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db(database):
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def client():
    return TestClient(app)


def create_user(db, username, role_names=(), password=PASSWORD):
    roles = db.query(Role).filter(Role.name.in_(list(role_names))).all() if role_names else []
    user = User(username=username, password_hash=generate_password_hash(password), roles=roles)
    db.add(user)
    db.commit()
    return user.id


def login(client, username, password=PASSWORD):
    response = client.post("/api/auth/login", json={"username": username, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
def auth_headers(db, client):
    """Factory: create a user holding the given roles and return bearer headers"""
    def make(*role_names, username=None):
        username = username or f"{'-'.join(role_names).lower() or 'nobody'}@example.com"
        create_user(db, username, role_names)
        return login(client, username)
    return make


@pytest.fixture
def admin_headers(auth_headers):
    return auth_headers("Admin")


@pytest.fixture
def manager_headers(auth_headers):
    return auth_headers("Manager")


@pytest.fixture
def viewer_headers(auth_headers):
    return auth_headers("Viewer")


@pytest.fixture
def quiz(db):
    """A quiz of seven questions; option 'right-N' is the correct one for question N"""
    quiz = Quiz(name="General Knowledge", description="Seven questions")
    for n in range(1, 8):
        question = Question(question_text=f"Question {n}?")
        question.options = [
            Option(option_text=f"right-{n}", is_correct=True),
            Option(option_text=f"wrong-{n}-a", is_correct=False),
            Option(option_text=f"wrong-{n}-b", is_correct=False),
            Option(option_text=f"wrong-{n}-c", is_correct=False),
        ]
        quiz.questions.append(question)
    db.add(quiz)
    db.commit()
    db.refresh(quiz)
    return quiz
