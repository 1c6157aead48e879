"""
Tests for QuizScoring

Tests cover:
- per-answer correctness and the lenient out-of-range policy
- score rounding and pass/fail threshold
- best score / latest attempt queries over attempt history
"""

from datetime import datetime, timedelta

import pytest
from bson import ObjectId

from lms.helpers.QuizScoring import QuizScoring
from lms.helpers.Utilities import Utils
from lms.schemas.Progress import AnswerSubmission, QuizAttempt


def _submit(quiz, selections):
    return [
        AnswerSubmission(questionId=str(question.id), selectedOption=selected)
        for question, selected in zip(quiz.questions, selections)
    ]


def _attempt(quiz_id, score, attempted_at):
    return QuizAttempt(
        quizId=quiz_id,
        score=score,
        totalQuestions=4,
        correctAnswers=score // 25,
        isPassed=score >= 70,
        attemptedAt=attempted_at,
    )


class TestScoreAttempt:

    def test_all_correct_scores_100_and_passes(self, quiz_factory):
        quiz = quiz_factory(passing_score=100)
        attempt = QuizScoring.score_attempt(quiz, _submit(quiz, [0, 1, 0, 1]))

        assert attempt.score == 100
        assert attempt.correctAnswers == 4
        assert attempt.totalQuestions == 4
        assert attempt.isPassed is True
        assert all(answer.isCorrect for answer in attempt.answers)

    def test_out_of_range_option_is_scored_incorrect(self, quiz_factory):
        quiz = quiz_factory()
        attempt = QuizScoring.score_attempt(quiz, _submit(quiz, [9, 1, 0, 1]))

        assert attempt.answers[0].isCorrect is False
        assert attempt.answers[0].selectedOption == 9
        assert attempt.correctAnswers == 3
        assert attempt.score == 75

    def test_wrong_answers_fail_below_threshold(self, quiz_factory):
        quiz = quiz_factory(passing_score=70)
        attempt = QuizScoring.score_attempt(quiz, _submit(quiz, [1, 0, 0, 1]))

        assert attempt.score == 50
        assert attempt.isPassed is False

    def test_score_equal_to_threshold_passes(self, quiz_factory):
        quiz = quiz_factory(passing_score=75)
        attempt = QuizScoring.score_attempt(quiz, _submit(quiz, [0, 1, 0, 0]))

        assert attempt.score == 75
        assert attempt.isPassed is True

    def test_zero_passing_score_always_passes(self, quiz_factory):
        quiz = quiz_factory(passing_score=0)
        attempt = QuizScoring.score_attempt(quiz, _submit(quiz, [1, 0, 1, 0]))

        assert attempt.score == 0
        assert attempt.isPassed is True

    @pytest.mark.parametrize(
        "correct, total, expected",
        [(7, 8, 88), (1, 8, 13), (1, 3, 33), (2, 3, 67), (0, 5, 0), (5, 5, 100)],
    )
    def test_score_rounds_half_up(self, quiz_factory, correct, total, expected):
        quiz = quiz_factory(correct_indexes=[0] * total)
        selections = [0] * correct + [1] * (total - correct)
        attempt = QuizScoring.score_attempt(quiz, _submit(quiz, selections))
        assert attempt.score == expected

    def test_answers_keep_submission_order(self, quiz_factory):
        quiz = quiz_factory()
        answers = list(reversed(_submit(quiz, [0, 1, 0, 1])))
        attempt = QuizScoring.score_attempt(quiz, answers)

        assert [str(record.questionId) for record in attempt.answers] == list(reversed(quiz.question_ids()))
        assert attempt.correctAnswers == 4

    def test_time_spent_defaults_to_zero(self, quiz_factory):
        quiz = quiz_factory()
        attempt = QuizScoring.score_attempt(quiz, _submit(quiz, [0, 1, 0, 1]))
        assert attempt.timeSpent == 0

    def test_attempt_carries_quiz_id_and_given_time(self, quiz_factory):
        quiz = quiz_factory()
        now = datetime(2024, 5, 1, 12, 0, 0)
        attempt = QuizScoring.score_attempt(quiz, _submit(quiz, [0, 1, 0, 1]), time_spent=240, now=now)

        assert attempt.quizId == quiz.id
        assert attempt.timeSpent == 240
        assert attempt.attemptedAt == now


class TestAttemptHistory:

    def test_best_and_latest_over_increasing_timestamps(self):
        quiz_id = ObjectId()
        start = Utils.utc_now()
        attempts = [
            _attempt(quiz_id, score, start + timedelta(minutes=offset))
            for offset, score in enumerate([60, 90, 75])
        ]

        assert QuizScoring.best_score(attempts, quiz_id) == 90
        assert QuizScoring.latest_attempt(attempts, quiz_id).score == 75

    def test_latest_uses_timestamp_not_insertion_order(self):
        quiz_id = ObjectId()
        start = Utils.utc_now()
        attempts = [
            _attempt(quiz_id, 80, start + timedelta(minutes=5)),
            _attempt(quiz_id, 40, start),
        ]
        assert QuizScoring.latest_attempt(attempts, quiz_id).score == 80

    def test_latest_tie_goes_to_last_inserted(self):
        quiz_id = ObjectId()
        same_time = Utils.utc_now()
        first = _attempt(quiz_id, 50, same_time)
        second = _attempt(quiz_id, 70, same_time)

        assert QuizScoring.latest_attempt([first, second], quiz_id) is second

    def test_no_attempts_returns_none(self):
        quiz_id = ObjectId()
        other = _attempt(ObjectId(), 100, Utils.utc_now())

        assert QuizScoring.best_score([other], quiz_id) is None
        assert QuizScoring.latest_attempt([other], quiz_id) is None

    def test_attempts_for_other_quizzes_are_ignored(self):
        quiz_id = ObjectId()
        now = Utils.utc_now()
        attempts = [
            _attempt(quiz_id, 40, now),
            _attempt(ObjectId(), 100, now + timedelta(minutes=1)),
        ]

        assert QuizScoring.best_score(attempts, str(quiz_id)) == 40
        assert len(QuizScoring.attempts_for(attempts, quiz_id)) == 1

    def test_quiz_summary_reports_any_pass(self, quiz_factory):
        quiz = quiz_factory()
        now = Utils.utc_now()
        attempts = [
            _attempt(quiz.id, 75, now),
            _attempt(quiz.id, 25, now + timedelta(minutes=1)),
        ]
        summary = QuizScoring.quiz_summary(attempts, quiz)

        assert summary["bestScore"] == 75
        assert summary["totalAttempts"] == 2
        assert summary["passed"] is True
        assert summary["latestAttempt"]["score"] == 25

    def test_quiz_summary_without_attempts(self, quiz_factory):
        summary = QuizScoring.quiz_summary([], quiz_factory())

        assert summary["bestScore"] is None
        assert summary["latestAttempt"] is None
        assert summary["totalAttempts"] == 0
        assert summary["passed"] is False
