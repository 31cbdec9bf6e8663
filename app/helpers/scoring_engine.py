from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from app.models import Quiz
from app.schemas.quiz_submission import AnswerChoice


@dataclass(frozen=True)
class ScoredAnswer:
    choice: int
    is_correct: bool
    correct_answer: Optional[int] = None


def score_answers(
    quiz: Quiz,
    answers: Sequence[AnswerChoice],
) -> Tuple[List[ScoredAnswer], float]:
    """
    Grades a submission that already passed validation.

    Returns:
    - one ScoredAnswer per question, in question order
    - score in [0, 1], each question worth 1/N

    The correct index is only disclosed when the quiz shows correct answers.
    A quiz without questions scores 0.
    """
    questions = quiz.questions
    scored: List[ScoredAnswer] = []
    correct_count = 0

    for question, answer in zip(questions, answers):
        is_correct = answer.choice == question.correct_answer_index
        if is_correct:
            correct_count += 1

        scored.append(
            ScoredAnswer(
                choice=answer.choice,
                is_correct=is_correct,
                correct_answer=(
                    question.correct_answer_index
                    if quiz.show_correct_answers
                    else None
                ),
            )
        )

    if not questions:
        return scored, 0.0

    return scored, correct_count / len(questions)
