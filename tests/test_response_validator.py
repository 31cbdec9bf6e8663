from app.helpers.response_validator import (
    AnswerCountMismatch,
    AnswerIndexOutOfRange,
    validate_answers,
)
from app.schemas.quiz_submission import AnswerChoice


def choices(*values):
    return [AnswerChoice(choice=value) for value in values]


class TestValidateAnswers:
    def test_valid_submission_has_no_errors(self, quiz_factory):
        quiz = quiz_factory(correct=[0, 1])

        outcome = validate_answers(quiz, choices(0, 1))

        assert outcome.is_valid
        assert outcome.codes() == []

    def test_count_mismatch_is_reported_alone(self, quiz_factory):
        quiz = quiz_factory(correct=[0])

        outcome = validate_answers(quiz, choices(0, 1))

        assert outcome.errors == [AnswerCountMismatch(expected=1, received=2)]
        assert outcome.codes() == ["answers"]

    def test_count_mismatch_skips_per_question_checks(self, quiz_factory):
        quiz = quiz_factory(correct=[0, 0, 0])

        outcome = validate_answers(quiz, choices(99, 99))

        assert outcome.codes() == ["answers"]

    def test_too_few_answers_is_a_count_mismatch(self, quiz_factory):
        quiz = quiz_factory(correct=[0, 1])

        assert validate_answers(quiz, choices()).codes() == ["answers"]

    def test_out_of_range_choice_names_question_number(self, quiz_factory):
        quiz = quiz_factory(correct=[0, 1])

        outcome = validate_answers(quiz, choices(5, 1))

        assert outcome.errors == [AnswerIndexOutOfRange(question_index=0, choice=5)]
        assert outcome.codes() == ["answer 1"]

    def test_negative_choice_is_out_of_range(self, quiz_factory):
        quiz = quiz_factory(correct=[0, 1])

        assert validate_answers(quiz, choices(0, -1)).codes() == ["answer 2"]

    def test_all_out_of_range_choices_are_collected_once(self, quiz_factory):
        quiz = quiz_factory(correct=[0, 0, 0, 0], answer_counts=[2, 3, 4, 2])

        outcome = validate_answers(quiz, choices(2, 2, 4, -7))

        assert outcome.codes() == ["answer 1", "answer 3", "answer 4"]

    def test_last_choice_of_each_question_is_in_range(self, quiz_factory):
        quiz = quiz_factory(correct=[0, 0], answer_counts=[3, 5])

        assert validate_answers(quiz, choices(2, 4)).is_valid

    def test_empty_quiz_accepts_empty_submission(self, quiz_factory):
        quiz = quiz_factory(correct=[])

        assert validate_answers(quiz, choices()).is_valid
