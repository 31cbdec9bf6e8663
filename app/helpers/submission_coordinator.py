import enum
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.config import DUPLICATE_CHECK_USE_INDEX
from app.helpers.duplicate_guard import DuplicateGuard
from app.helpers.response_validator import validate_answers
from app.helpers.scoring_engine import score_answers
from app.helpers.submission_errors import DuplicateResultError, ResultLinkError, StorageError
from app.models import Quiz, QuizResult, QuizResultAnswer
from app.repositories.aggregate import AggregateRepository
from app.repositories.result import ResultRepository
from app.schemas.quiz_submission import AnswerChoice

logger = logging.getLogger(__name__)

DUPLICATE_ERROR = "duplicate"


class SubmissionStage(str, enum.Enum):
    DUPLICATE_REJECTED = "duplicate_rejected"
    VALIDATION_REJECTED = "validation_rejected"
    PERSISTED = "persisted"
    LINKED = "linked"


@dataclass
class SubmissionOutcome:
    stage: SubmissionStage
    result_id: Optional[UUID] = None
    errors: List[str] = field(default_factory=list)
    result: Optional[QuizResult] = None

    @property
    def accepted(self) -> bool:
        return self.result_id is not None


class SubmissionCoordinator:
    """
    Runs one submission through duplicate check, validation, scoring,
    persistence and aggregate linking, strictly in that order.

    Rejections come back as data on the outcome. Storage failures are
    raised: StorageError before the result exists, ResultLinkError after.
    """

    def __init__(
        self,
        results: ResultRepository,
        aggregates: AggregateRepository,
        guard: DuplicateGuard,
    ):
        self.results = results
        self.aggregates = aggregates
        self.guard = guard

    @classmethod
    def for_session(cls, db: AsyncSession) -> "SubmissionCoordinator":
        results = ResultRepository(db)
        aggregates = AggregateRepository(db)
        return cls(
            results=results,
            aggregates=aggregates,
            guard=DuplicateGuard(results, aggregates, use_index=DUPLICATE_CHECK_USE_INDEX),
        )

    async def submit(
        self,
        quiz: Quiz,
        user_id: Optional[UUID],
        answers: Sequence[AnswerChoice],
    ) -> SubmissionOutcome:
        # A failed write rolls the session back and expires loaded objects
        quiz_id = quiz.id
        single_response = self.guard.applies_to(quiz, user_id)

        # --------------------------
        # Duplicate check
        # --------------------------
        if single_response and await self.guard.has_existing_result(quiz, user_id):
            logger.info("Rejected duplicate submission for quiz %s by user %s", quiz_id, user_id)
            return SubmissionOutcome(
                stage=SubmissionStage.DUPLICATE_REJECTED,
                errors=[DUPLICATE_ERROR],
            )

        # --------------------------
        # Validate
        # --------------------------
        validation = validate_answers(quiz, answers)
        if not validation.is_valid:
            logger.info("Rejected submission for quiz %s: %s", quiz_id, validation.codes())
            return SubmissionOutcome(
                stage=SubmissionStage.VALIDATION_REJECTED,
                errors=validation.codes(),
            )

        # --------------------------
        # Score
        # --------------------------
        scored, score = score_answers(quiz, answers)

        quiz_result = QuizResult(
            quiz_id=quiz_id,
            quiz_owner_id=quiz.owner_id,
            user_id=user_id,
            score=score,
            answers=[
                QuizResultAnswer(
                    choice=answer.choice,
                    is_correct=answer.is_correct,
                    correct_answer=answer.correct_answer,
                )
                for answer in scored
            ],
        )

        # --------------------------
        # Persist
        # --------------------------
        try:
            await self.results.insert(quiz_result, claim=single_response)
        except DuplicateResultError:
            logger.info("Storage refused duplicate result for quiz %s by user %s", quiz_id, user_id)
            return SubmissionOutcome(
                stage=SubmissionStage.DUPLICATE_REJECTED,
                errors=[DUPLICATE_ERROR],
            )
        except StorageError:
            logger.error("Could not persist result for quiz %s", quiz_id, exc_info=True)
            raise

        # --------------------------
        # Link
        # --------------------------
        result_id = quiz_result.id
        await self.link(quiz_result)

        logger.info("Accepted submission %s for quiz %s with score %.3f", result_id, quiz_id, score)
        return SubmissionOutcome(
            stage=SubmissionStage.LINKED,
            result_id=result_id,
            result=quiz_result,
        )

    async def link(self, quiz_result: QuizResult) -> None:
        """
        Add a persisted result to its quiz and, for known users, to the user.
        Safe to call again for a result that is already (partly) linked.
        """
        result_id, quiz_id, user_id = quiz_result.id, quiz_result.quiz_id, quiz_result.user_id

        try:
            await self.aggregates.add_result_to_quiz(quiz_id, result_id)
            if user_id is not None:
                await self.aggregates.add_result_to_user(user_id, result_id)
        except StorageError as e:
            logger.error("Result %s persisted but not linked", result_id, exc_info=True)
            raise ResultLinkError(result_id, quiz_id, user_id, stage=SubmissionStage.PERSISTED) from e
