import os
import uuid

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from app.auth.jwt import create_access_token
from app.database import Base, get_db
from app.main import app
from app.models import User, Quiz, QuizQuestion, QuizAnswer


@pytest.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'quiz.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def quiz_factory():
    """
    Builds an unsaved quiz. correct[i] is the right choice of question i,
    answer_counts[i] how many choices it has (2 by default).
    """
    def build(
        correct,
        answer_counts=None,
        allow_multiple_responses=False,
        show_correct_answers=False,
        owner_id=None,
    ):
        answer_counts = answer_counts or [2] * len(correct)
        return Quiz(
            id=uuid.uuid4(),
            owner_id=owner_id,
            title="Quiz",
            allow_multiple_responses=allow_multiple_responses,
            show_correct_answers=show_correct_answers,
            questions=[
                QuizQuestion(
                    question_text=f"Question {i + 1}",
                    correct_answer_index=index,
                    answers=[
                        QuizAnswer(answer_text=f"Answer {j + 1}")
                        for j in range(count)
                    ],
                )
                for i, (index, count) in enumerate(zip(correct, answer_counts))
            ],
        )

    return build


@pytest.fixture
def saved_quiz(db, quiz_factory):
    async def save(*args, **kwargs):
        quiz = quiz_factory(*args, **kwargs)
        db.add(quiz)
        await db.commit()
        return quiz

    return save


@pytest.fixture
def saved_user(db):
    async def save(username):
        user = User(id=uuid.uuid4(), username=username)
        db.add(user)
        await db.commit()
        return user

    return save


@pytest.fixture
def auth_header():
    def build(user):
        token = create_access_token({"user_id": str(user.id)})
        return {"Authorization": f"Bearer {token}"}

    return build


@pytest.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
