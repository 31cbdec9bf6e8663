from pydantic import BaseModel, StrictInt
from typing import List, Optional
from uuid import UUID
from datetime import datetime

#for respondents
class AnswerChoice(BaseModel):
    choice: StrictInt


class QuizSubmitRequest(BaseModel):
    answers: List[AnswerChoice]


class QuizSubmitResponse(BaseModel):
    result_id: UUID


class QuizSubmitErrors(BaseModel):
    errors: List[str]


#graded results
class ResultAnswerView(BaseModel):
    choice: int
    is_correct: bool
    correct_answer: Optional[int] = None

    model_config = {"from_attributes": True}


class ResultDetailView(BaseModel):
    id: UUID
    quiz_id: UUID
    quiz_owner_id: Optional[UUID]
    user_id: Optional[UUID]
    score: float
    created_at: datetime
    answers: List[ResultAnswerView]

    model_config = {"from_attributes": True}


#for quiz owners
class ResultListItem(BaseModel):
    id: UUID
    user_id: Optional[UUID]
    score: float
    created_at: datetime

    model_config = {"from_attributes": True}
