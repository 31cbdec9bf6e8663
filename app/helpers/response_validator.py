from dataclasses import dataclass, field
from typing import List, Sequence, Union

from app.models import Quiz
from app.schemas.quiz_submission import AnswerChoice


# ---------------------------
# Validation errors
# ---------------------------
@dataclass(frozen=True)
class AnswerCountMismatch:
    expected: int
    received: int

    @property
    def code(self) -> str:
        return "answers"


@dataclass(frozen=True)
class AnswerIndexOutOfRange:
    question_index: int
    choice: int

    @property
    def code(self) -> str:
        # Question numbers are 1-based for respondents
        return f"answer {self.question_index + 1}"


ValidationError = Union[AnswerCountMismatch, AnswerIndexOutOfRange]


@dataclass
class ValidationOutcome:
    errors: List[ValidationError] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def codes(self) -> List[str]:
        return [error.code for error in self.errors]


def validate_answers(quiz: Quiz, answers: Sequence[AnswerChoice]) -> ValidationOutcome:
    """
    Checks a submission's shape against the quiz.

    A length mismatch is reported alone since positions cannot be paired.
    Otherwise every question is checked and all out-of-range choices are
    collected, so the caller gets the full report in one pass.
    """
    questions = quiz.questions
    outcome = ValidationOutcome()

    if len(answers) != len(questions):
        outcome.errors.append(
            AnswerCountMismatch(expected=len(questions), received=len(answers))
        )
        return outcome

    for index, (question, answer) in enumerate(zip(questions, answers)):
        if answer.choice < 0 or answer.choice >= len(question.answers):
            outcome.errors.append(
                AnswerIndexOutOfRange(question_index=index, choice=answer.choice)
            )

    return outcome
