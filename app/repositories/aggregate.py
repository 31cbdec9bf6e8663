from typing import List
from uuid import UUID

from sqlalchemy import Column, Table, select, insert, delete
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.helpers.submission_errors import StorageError
from app.models import QuizResult, quiz_results, user_results


class AggregateRepository:
    """
    Keeps the quiz -> results and user -> results relations.
    Adding a result is a set insert: adding one that is already present is a no-op.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def add_result_to_quiz(self, quiz_id: UUID, result_id: UUID) -> None:
        await self._add_member(quiz_results, quiz_results.c.quiz_id, quiz_id, result_id)

    async def add_result_to_user(self, user_id: UUID, result_id: UUID) -> None:
        await self._add_member(user_results, user_results.c.user_id, user_id, result_id)

    async def quiz_result_ids(self, quiz_id: UUID) -> List[UUID]:
        try:
            result = await self.db.execute(
                select(quiz_results.c.result_id).where(quiz_results.c.quiz_id == quiz_id)
            )
        except SQLAlchemyError as e:
            raise StorageError(f"Could not list results linked to quiz {quiz_id}") from e

        return list(result.scalars().all())

    async def user_result_ids(self, user_id: UUID) -> List[UUID]:
        try:
            result = await self.db.execute(
                select(user_results.c.result_id).where(user_results.c.user_id == user_id)
            )
        except SQLAlchemyError as e:
            raise StorageError(f"Could not list results linked to user {user_id}") from e

        return list(result.scalars().all())

    async def remove_result(self, quiz_result: QuizResult) -> None:
        try:
            await self.db.execute(
                delete(quiz_results).where(quiz_results.c.result_id == quiz_result.id)
            )
            await self.db.execute(
                delete(user_results).where(user_results.c.result_id == quiz_result.id)
            )
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StorageError(f"Could not unlink result {quiz_result.id}") from e

    async def _has_member(self, table: Table, owner_column: Column, owner_id: UUID, result_id: UUID) -> bool:
        result = await self.db.execute(
            select(table).where(
                owner_column == owner_id,
                table.c.result_id == result_id,
            )
        )
        return result.first() is not None

    async def _add_member(self, table: Table, owner_column: Column, owner_id: UUID, result_id: UUID) -> None:
        try:
            if await self._has_member(table, owner_column, owner_id, result_id):
                return

            await self.db.execute(
                insert(table).values({owner_column.name: owner_id, "result_id": result_id})
            )
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            # A concurrent link of the same pair is fine; anything else is not
            if not await self._has_member(table, owner_column, owner_id, result_id):
                raise StorageError(f"Could not add result {result_id} to {table.name}") from e
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StorageError(f"Could not add result {result_id} to {table.name}") from e
