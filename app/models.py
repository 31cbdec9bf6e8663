import uuid
from datetime import datetime
from sqlalchemy import Column, String, Boolean, DateTime, Integer, Float, ForeignKey, Table, Text, UniqueConstraint, Uuid
from sqlalchemy.ext.orderinglist import ordering_list
from sqlalchemy.orm import relationship
from app.database import Base


# ---------------------------
# User Model
# ---------------------------
class User(Base):
    __tablename__ = "users"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    username = Column(String(100), unique=True, nullable=False)
    email = Column(String(255), unique=True, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)


# ---------------------------
# Aggregate Tables
# ---------------------------
quiz_results = Table(
    "quiz_results",
    Base.metadata,
    Column("quiz_id", Uuid(as_uuid=True), ForeignKey("quizzes.id"), primary_key=True),
    Column("result_id", Uuid(as_uuid=True), ForeignKey("results.id"), primary_key=True),
)

user_results = Table(
    "user_results",
    Base.metadata,
    Column("user_id", Uuid(as_uuid=True), ForeignKey("users.id"), primary_key=True),
    Column("result_id", Uuid(as_uuid=True), ForeignKey("results.id"), primary_key=True),
)


# ---------------------------
# Quiz Model
# ---------------------------
class Quiz(Base):
    __tablename__ = "quizzes"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    owner_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=True)

    title = Column(String(255), nullable=False)
    allow_multiple_responses = Column(Boolean, default=False, nullable=False)
    show_correct_answers = Column(Boolean, default=False, nullable=False)

    # Visibility metadata, carried through untouched
    is_public = Column(Boolean, default=True, nullable=False)
    expires_at = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)

    questions = relationship(
        "QuizQuestion",
        back_populates="quiz",
        order_by="QuizQuestion.position",
        collection_class=ordering_list("position"),
        cascade="all, delete-orphan",
    )


class QuizQuestion(Base):
    __tablename__ = "quiz_questions"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    quiz_id = Column(Uuid(as_uuid=True), ForeignKey("quizzes.id"), nullable=False)

    position = Column(Integer, nullable=False)
    question_text = Column(Text, nullable=False)
    correct_answer_index = Column(Integer, nullable=False)

    quiz = relationship("Quiz", back_populates="questions")
    answers = relationship(
        "QuizAnswer",
        back_populates="question",
        order_by="QuizAnswer.position",
        collection_class=ordering_list("position"),
        cascade="all, delete-orphan",
    )


class QuizAnswer(Base):
    __tablename__ = "quiz_answers"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    question_id = Column(Uuid(as_uuid=True), ForeignKey("quiz_questions.id"), nullable=False)

    position = Column(Integer, nullable=False)
    answer_text = Column(Text, nullable=False)

    question = relationship("QuizQuestion", back_populates="answers")


# ---------------------------
# Result Model
# ---------------------------
class QuizResult(Base):
    __tablename__ = "results"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    quiz_id = Column(Uuid(as_uuid=True), ForeignKey("quizzes.id"), nullable=False, index=True)
    quiz_owner_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=True, index=True)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=True, index=True)

    score = Column(Float, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    answers = relationship(
        "QuizResultAnswer",
        back_populates="result",
        order_by="QuizResultAnswer.position",
        collection_class=ordering_list("position"),
        cascade="all, delete-orphan",
    )


class QuizResultAnswer(Base):
    __tablename__ = "result_answers"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    result_id = Column(Uuid(as_uuid=True), ForeignKey("results.id"), nullable=False)

    position = Column(Integer, nullable=False)
    choice = Column(Integer, nullable=False)
    is_correct = Column(Boolean, nullable=False)
    correct_answer = Column(Integer, nullable=True)

    result = relationship("QuizResult", back_populates="answers")


class SingleResponseClaim(Base):
    """
    One row per (quiz, user) for quizzes that accept a single response.
    Written together with the result so a concurrent second insert fails.
    """
    __tablename__ = "single_response_claims"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    quiz_id = Column(Uuid(as_uuid=True), ForeignKey("quizzes.id"), nullable=False)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False)
    result_id = Column(Uuid(as_uuid=True), ForeignKey("results.id"), nullable=False)

    __table_args__ = (
        UniqueConstraint("quiz_id", "user_id", name="unique_quiz_user_response"),
    )
