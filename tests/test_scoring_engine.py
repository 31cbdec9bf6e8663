import pytest

from app.helpers.scoring_engine import ScoredAnswer, score_answers
from app.schemas.quiz_submission import AnswerChoice


def choices(*values):
    return [AnswerChoice(choice=value) for value in values]


class TestScoreAnswers:
    def test_all_correct_scores_one(self, quiz_factory):
        quiz = quiz_factory(correct=[0, 1])

        scored, score = score_answers(quiz, choices(0, 1))

        assert score == 1.0
        assert all(answer.is_correct for answer in scored)

    def test_half_correct(self, quiz_factory):
        quiz = quiz_factory(correct=[0, 1])

        scored, score = score_answers(quiz, choices(1, 1))

        assert score == 0.5
        assert scored == [
            ScoredAnswer(choice=1, is_correct=False),
            ScoredAnswer(choice=1, is_correct=True),
        ]

    def test_none_correct_scores_zero(self, quiz_factory):
        quiz = quiz_factory(correct=[0, 0, 0])

        _, score = score_answers(quiz, choices(1, 1, 1))

        assert score == 0.0

    def test_each_question_weighs_the_same(self, quiz_factory):
        # Answer counts differ, weights must not
        quiz = quiz_factory(correct=[0, 3, 1], answer_counts=[2, 6, 3])

        _, score = score_answers(quiz, choices(0, 0, 0))

        assert score == pytest.approx(1 / 3)

    @pytest.mark.parametrize("correct_count", range(0, 8))
    def test_score_is_multiple_of_one_over_n(self, quiz_factory, correct_count):
        n = 7
        quiz = quiz_factory(correct=[0] * n)
        answers = choices(*([0] * correct_count + [1] * (n - correct_count)))

        _, score = score_answers(quiz, answers)

        assert 0.0 <= score <= 1.0
        assert score == pytest.approx(correct_count / n)

    def test_correct_answer_hidden_by_default(self, quiz_factory):
        quiz = quiz_factory(correct=[0, 1], show_correct_answers=False)

        scored, _ = score_answers(quiz, choices(1, 0))

        assert [answer.correct_answer for answer in scored] == [None, None]

    def test_correct_answer_disclosed_when_enabled(self, quiz_factory):
        quiz = quiz_factory(correct=[0, 1], show_correct_answers=True)

        scored, _ = score_answers(quiz, choices(1, 0))

        assert [answer.correct_answer for answer in scored] == [0, 1]

    def test_zero_question_quiz_scores_zero(self, quiz_factory):
        quiz = quiz_factory(correct=[])

        scored, score = score_answers(quiz, choices())

        assert scored == []
        assert score == 0.0
