import uuid
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select, delete
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.helpers.submission_errors import DuplicateResultError, StorageError
from app.models import QuizResult, QuizResultAnswer, SingleResponseClaim


class ResultRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_id(self, result_id: UUID) -> Optional[QuizResult]:
        try:
            result = await self.db.execute(
                select(QuizResult)
                .options(selectinload(QuizResult.answers))
                .where(QuizResult.id == result_id)
            )
        except SQLAlchemyError as e:
            raise StorageError(f"Could not load result {result_id}") from e

        return result.scalar_one_or_none()

    async def find_by_user_and_quiz(self, user_id: UUID, quiz_id: UUID) -> Optional[QuizResult]:
        """
        Latest result a user has for a quiz, or None.
        """
        try:
            result = await self.db.execute(
                select(QuizResult)
                .options(selectinload(QuizResult.answers))
                .where(
                    QuizResult.user_id == user_id,
                    QuizResult.quiz_id == quiz_id,
                )
                .order_by(QuizResult.created_at.desc())
                .limit(1)
            )
        except SQLAlchemyError as e:
            raise StorageError(f"Could not load result of user {user_id} for quiz {quiz_id}") from e

        return result.scalar_one_or_none()

    async def list_for_quiz(self, quiz_id: UUID) -> List[QuizResult]:
        try:
            result = await self.db.execute(
                select(QuizResult)
                .where(QuizResult.quiz_id == quiz_id)
                .order_by(QuizResult.created_at.desc())
            )
        except SQLAlchemyError as e:
            raise StorageError(f"Could not list results for quiz {quiz_id}") from e

        return list(result.scalars().all())

    async def insert(self, quiz_result: QuizResult, claim: bool = False) -> QuizResult:
        """
        Persist a result and its answers in one transaction.

        With claim=True a (quiz, user) claim row is written alongside it;
        if one already exists the insert is refused with DuplicateResultError.
        """
        if quiz_result.id is None:
            quiz_result.id = uuid.uuid4()

        self.db.add(quiz_result)
        if claim:
            self.db.add(
                SingleResponseClaim(
                    quiz_id=quiz_result.quiz_id,
                    user_id=quiz_result.user_id,
                    result_id=quiz_result.id,
                )
            )

        quiz_id, user_id = quiz_result.quiz_id, quiz_result.user_id

        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            # Only a conflicting claim is a duplicate; other constraint failures are not
            if claim and await self._has_claim(quiz_id, user_id):
                raise DuplicateResultError(quiz_id, user_id) from e
            raise StorageError("Could not insert result") from e
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StorageError("Could not insert result") from e

        return quiz_result

    async def _has_claim(self, quiz_id: UUID, user_id: UUID) -> bool:
        try:
            result = await self.db.execute(
                select(SingleResponseClaim.id).where(
                    SingleResponseClaim.quiz_id == quiz_id,
                    SingleResponseClaim.user_id == user_id,
                )
            )
        except SQLAlchemyError as e:
            raise StorageError(f"Could not check claim for quiz {quiz_id}") from e

        return result.first() is not None

    async def delete(self, quiz_result: QuizResult) -> None:
        """
        Remove a result, its answers and its single-response claim.
        Aggregate links are removed separately by the aggregate repository.
        """
        try:
            await self.db.execute(
                delete(SingleResponseClaim).where(SingleResponseClaim.result_id == quiz_result.id)
            )
            await self.db.execute(
                delete(QuizResultAnswer).where(QuizResultAnswer.result_id == quiz_result.id)
            )
            await self.db.execute(
                delete(QuizResult).where(QuizResult.id == quiz_result.id)
            )
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StorageError(f"Could not delete result {quiz_result.id}") from e
