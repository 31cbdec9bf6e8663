from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.helpers.submission_errors import StorageError
from app.models import Quiz, QuizQuestion


class QuizRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_id(self, quiz_id: UUID) -> Optional[Quiz]:
        """
        Fetch a quiz with its questions and answer choices loaded in order.
        Returns None if no quiz matches.
        """
        try:
            result = await self.db.execute(
                select(Quiz)
                .options(
                    selectinload(Quiz.questions)
                    .selectinload(QuizQuestion.answers)
                )
                .where(Quiz.id == quiz_id)
            )
        except SQLAlchemyError as e:
            raise StorageError(f"Could not load quiz {quiz_id}") from e

        return result.scalar_one_or_none()
