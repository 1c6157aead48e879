"""
Tests for AnswerValidator

The submitted question ids must match the quiz's question ids as a set.
"""

import pytest
from bson import ObjectId

from lms.helpers.AnswerValidator import AnswerValidator
from lms.helpers.Exceptions import IncompleteSubmission, InvalidInput, InvalidQuestionReference
from lms.schemas.Courses import Quiz
from lms.schemas.Progress import AnswerSubmission


def _answers(question_ids, selected=0):
    return [AnswerSubmission(questionId=str(question_id), selectedOption=selected) for question_id in question_ids]


class TestCompleteSubmissions:

    def test_every_question_answered_passes(self, quiz_factory):
        quiz = quiz_factory()
        assert AnswerValidator.validate(quiz, _answers(quiz.question_ids())) is None

    def test_submission_order_is_irrelevant(self, quiz_factory):
        quiz = quiz_factory()
        AnswerValidator.validate(quiz, _answers(reversed(quiz.question_ids())))

    def test_selected_option_is_not_checked(self, quiz_factory):
        """Out-of-range options are a scoring concern, not a validation failure."""
        quiz = quiz_factory()
        AnswerValidator.validate(quiz, _answers(quiz.question_ids(), selected=9))


class TestRejectedSubmissions:

    def test_three_of_four_answered_is_incomplete(self, quiz_factory):
        quiz = quiz_factory()
        with pytest.raises(IncompleteSubmission):
            AnswerValidator.validate(quiz, _answers(quiz.question_ids()[:3]))

    def test_unknown_question_id_is_rejected(self, quiz_factory):
        quiz = quiz_factory()
        answers = _answers(quiz.question_ids() + [ObjectId()])
        with pytest.raises(InvalidQuestionReference):
            AnswerValidator.validate(quiz, answers)

    def test_malformed_question_id_is_rejected(self, quiz_factory):
        quiz = quiz_factory()
        answers = _answers(quiz.question_ids()) + [AnswerSubmission(questionId="not-an-id", selectedOption=0)]
        with pytest.raises(InvalidQuestionReference):
            AnswerValidator.validate(quiz, answers)

    def test_missing_questions_reported_before_unknown_ids(self, quiz_factory):
        quiz = quiz_factory()
        answers = _answers(quiz.question_ids()[:2] + [ObjectId()])
        with pytest.raises(IncompleteSubmission):
            AnswerValidator.validate(quiz, answers)

    def test_duplicate_answers_are_rejected(self, quiz_factory):
        quiz = quiz_factory()
        ids = quiz.question_ids()
        with pytest.raises(InvalidQuestionReference) as excinfo:
            AnswerValidator.validate(quiz, _answers(ids + [ids[0]]))
        assert ids[0] in excinfo.value.message

    def test_quiz_without_questions_cannot_be_submitted(self):
        quiz = Quiz(title="Empty", order=1, questions=[])
        with pytest.raises(InvalidInput):
            AnswerValidator.validate(quiz, _answers([ObjectId()]))
