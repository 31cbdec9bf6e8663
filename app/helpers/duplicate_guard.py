from typing import Optional
from uuid import UUID

from app.models import Quiz
from app.repositories.aggregate import AggregateRepository
from app.repositories.result import ResultRepository


class DuplicateGuard:
    """
    Decides whether a user already holds a result for a single-response quiz.

    The check and the later insert are separate steps, so two concurrent
    submissions can both pass here. The single-response claim written with
    the result closes that gap at the storage layer.
    """

    def __init__(
        self,
        results: ResultRepository,
        aggregates: AggregateRepository,
        use_index: bool = False,
    ):
        self.results = results
        self.aggregates = aggregates
        self.use_index = use_index

    def applies_to(self, quiz: Quiz, user_id: Optional[UUID]) -> bool:
        # Anonymous respondents are never checked
        return user_id is not None and not quiz.allow_multiple_responses

    async def has_existing_result(self, quiz: Quiz, user_id: UUID) -> bool:
        if self.use_index:
            existing = await self.results.find_by_user_and_quiz(user_id, quiz.id)
            return existing is not None

        for result_id in await self.aggregates.quiz_result_ids(quiz.id):
            result = await self.results.find_by_id(result_id)
            # Deleted results are not duplicates
            if result is not None and result.user_id == user_id:
                return True

        return False
