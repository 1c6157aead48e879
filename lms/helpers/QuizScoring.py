from datetime import datetime
from typing import List, Optional

from lms.helpers.Utilities import Utils
from lms.schemas.Courses import Quiz
from lms.schemas.Progress import AnswerRecord, AnswerSubmission, QuizAttempt


class QuizScoring:

    @staticmethod
    def score_attempt(
        quiz: Quiz,
        answers: List[AnswerSubmission],
        time_spent: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> QuizAttempt:
        """
        Score an answer set that already passed AnswerValidator.

        Each answer is correct when its selected option exists on the question
        and is flagged correct; an index outside the option list counts as a
        wrong answer. score = round(100 * correct / total), half rounded up.
        """
        records = []
        correct_answers = 0
        for answer in answers:
            question = quiz.get_question(answer.questionId)
            is_correct = question is not None and question.is_correct_option(answer.selectedOption)
            if is_correct:
                correct_answers += 1
            records.append(
                AnswerRecord(
                    questionId=answer.questionId,
                    selectedOption=answer.selectedOption,
                    isCorrect=is_correct,
                )
            )

        total_questions = len(quiz.questions)
        score = Utils.percentage(correct_answers, total_questions)
        return QuizAttempt(
            quizId=quiz.id,
            answers=records,
            score=score,
            totalQuestions=total_questions,
            correctAnswers=correct_answers,
            timeSpent=time_spent or 0,
            isPassed=score >= quiz.passingScore,
            attemptedAt=now or Utils.utc_now(),
        )

    @staticmethod
    def attempts_for(attempts: List[QuizAttempt], quiz_id) -> List[QuizAttempt]:
        return [attempt for attempt in attempts if str(attempt.quizId) == str(quiz_id)]

    @classmethod
    def best_score(cls, attempts: List[QuizAttempt], quiz_id) -> Optional[int]:
        matching = cls.attempts_for(attempts, quiz_id)
        if not matching:
            return None
        return max(attempt.score for attempt in matching)

    @classmethod
    def latest_attempt(cls, attempts: List[QuizAttempt], quiz_id) -> Optional[QuizAttempt]:
        # ties on attemptedAt go to the attempt appended last
        latest = None
        for attempt in cls.attempts_for(attempts, quiz_id):
            if latest is None or attempt.attemptedAt >= latest.attemptedAt:
                latest = attempt
        return latest

    @classmethod
    def quiz_summary(cls, attempts: List[QuizAttempt], quiz: Quiz) -> dict:
        matching = cls.attempts_for(attempts, quiz.id)
        latest = cls.latest_attempt(matching, quiz.id)
        return {
            "quizId": str(quiz.id),
            "title": quiz.title,
            "bestScore": cls.best_score(matching, quiz.id),
            "latestAttempt": latest.model_dump(mode="json", by_alias=True) if latest else None,
            "totalAttempts": len(matching),
            "passed": any(attempt.isPassed for attempt in matching),
        }
