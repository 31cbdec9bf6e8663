import uuid

import pytest
from sqlalchemy import func, select

from app.helpers.submission_errors import DuplicateResultError, StorageError
from app.models import QuizResult, SingleResponseClaim
from app.repositories.result import ResultRepository


async def count_claims(db):
    result = await db.execute(select(func.count()).select_from(SingleResponseClaim))
    return result.scalar_one()


class TestInsert:
    async def test_claim_is_written_with_result(self, db, saved_quiz):
        quiz = await saved_quiz(correct=[0])

        await ResultRepository(db).insert(
            QuizResult(quiz_id=quiz.id, user_id=uuid.uuid4(), score=1.0),
            claim=True,
        )

        assert await count_claims(db) == 1

    async def test_second_claim_is_a_duplicate(self, db, saved_quiz):
        quiz = await saved_quiz(correct=[0])
        user_id = uuid.uuid4()
        results = ResultRepository(db)
        await results.insert(QuizResult(quiz_id=quiz.id, user_id=user_id, score=1.0), claim=True)

        with pytest.raises(DuplicateResultError) as exc_info:
            await results.insert(QuizResult(quiz_id=quiz.id, user_id=user_id, score=0.0), claim=True)

        assert exc_info.value.user_id == user_id

    async def test_other_constraint_failure_is_not_a_duplicate(self, db, saved_quiz):
        quiz = await saved_quiz(correct=[0])

        # score is NOT NULL; no claim exists for this user
        with pytest.raises(StorageError) as exc_info:
            await ResultRepository(db).insert(
                QuizResult(quiz_id=quiz.id, user_id=uuid.uuid4(), score=None),
                claim=True,
            )

        assert not isinstance(exc_info.value, DuplicateResultError)
        assert await count_claims(db) == 0

    async def test_constraint_failure_without_claim(self, db, saved_quiz):
        quiz = await saved_quiz(correct=[0])

        with pytest.raises(StorageError) as exc_info:
            await ResultRepository(db).insert(QuizResult(quiz_id=quiz.id, score=None))

        assert not isinstance(exc_info.value, DuplicateResultError)
