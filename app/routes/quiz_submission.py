from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.auth.dependencies import get_current_user, get_optional_user
from app.helpers.submission_coordinator import SubmissionCoordinator
from app.models import User
from app.repositories.quiz import QuizRepository
from app.repositories.result import ResultRepository
from app.schemas.quiz_submission import (
    QuizSubmitRequest, QuizSubmitResponse, QuizSubmitErrors,
    ResultDetailView, ResultListItem
)

router = APIRouter(
    prefix="/quiz",
    tags=["Quiz Submission Endpoints"]
)


@router.post(
    "/{quiz_id}/submit",
    response_model=QuizSubmitResponse,
    status_code=201,
    responses={400: {"model": QuizSubmitErrors}},
)
async def submit_quiz(
    quiz_id: UUID,
    payload: QuizSubmitRequest,
    current_user: Optional[User] = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db),
):
    # --------------------------
    # Fetch quiz with questions
    # --------------------------
    quiz = await QuizRepository(db).find_by_id(quiz_id)
    if not quiz:
        raise HTTPException(404, "Quiz not found")

    # --------------------------
    # Grade and persist
    # --------------------------
    coordinator = SubmissionCoordinator.for_session(db)
    outcome = await coordinator.submit(
        quiz=quiz,
        user_id=current_user.id if current_user else None,
        answers=payload.answers,
    )

    if not outcome.accepted:
        return JSONResponse(
            status_code=400,
            content={"errors": outcome.errors},
        )

    return {"result_id": outcome.result_id}


@router.get(
    "/{quiz_id}/my-result",
    response_model=ResultDetailView,
    response_model_exclude_none=True,
)
async def get_my_quiz_result(
    quiz_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    quiz_result = await ResultRepository(db).find_by_user_and_quiz(current_user.id, quiz_id)

    if not quiz_result:
        raise HTTPException(404, "You have not submitted this quiz")

    return quiz_result


@router.get(
    "/{quiz_id}/results",
    response_model=list[ResultListItem],
)
async def list_quiz_results(
    quiz_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    quiz = await QuizRepository(db).find_by_id(quiz_id)
    if not quiz:
        raise HTTPException(404, "Quiz not found")

    # --------------------------
    # Owner check
    # --------------------------
    if quiz.owner_id != current_user.id:
        raise HTTPException(403, "You are not the owner of this quiz")

    return await ResultRepository(db).list_for_quiz(quiz.id)
