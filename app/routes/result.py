from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.auth.dependencies import get_current_user, get_optional_user
from app.helpers.submission_coordinator import SubmissionCoordinator
from app.models import QuizResult, User
from app.repositories.aggregate import AggregateRepository
from app.repositories.result import ResultRepository
from app.schemas.quiz_submission import ResultDetailView

router = APIRouter(
    prefix="/results",
    tags=["Quiz Result Endpoints"]
)


def ensure_result_access(quiz_result: QuizResult, current_user: Optional[User]):
    """
    Results of anonymous respondents are readable by id.
    Otherwise only the respondent and the quiz owner may access one.
    """
    if quiz_result.user_id is None:
        return

    if current_user is None:
        raise HTTPException(401, "You must be logged in to access this result")

    if current_user.id not in (quiz_result.user_id, quiz_result.quiz_owner_id):
        raise HTTPException(403, "You are not allowed to access this result")


async def get_requested_result(
    result_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> QuizResult:
    quiz_result = await ResultRepository(db).find_by_id(result_id)
    if not quiz_result:
        raise HTTPException(404, "Result not found")
    return quiz_result


@router.get(
    "/{result_id}",
    response_model=ResultDetailView,
    response_model_exclude_none=True,
)
async def get_result(
    quiz_result: QuizResult = Depends(get_requested_result),
    current_user: Optional[User] = Depends(get_optional_user),
):
    ensure_result_access(quiz_result, current_user)
    return quiz_result


@router.post(
    "/{result_id}/link",
    status_code=204,
)
async def relink_result(
    quiz_result: QuizResult = Depends(get_requested_result),
    current_user: Optional[User] = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db),
):
    # --------------------------
    # Retry aggregate linking
    # --------------------------
    ensure_result_access(quiz_result, current_user)
    await SubmissionCoordinator.for_session(db).link(quiz_result)


@router.delete(
    "/{result_id}",
    status_code=204,
)
async def delete_result(
    quiz_result: QuizResult = Depends(get_requested_result),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    if current_user.id not in (quiz_result.user_id, quiz_result.quiz_owner_id):
        raise HTTPException(403, "You are not allowed to delete this result")

    # --------------------------
    # Unlink, then delete
    # --------------------------
    await AggregateRepository(db).remove_result(quiz_result)
    await ResultRepository(db).delete(quiz_result)
