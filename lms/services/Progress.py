import logging
from typing import Optional

from lms.helpers.AnswerValidator import AnswerValidator
from lms.helpers.Exceptions import LMSError, NotFound
from lms.helpers.ProgressTracker import ProgressTracker
from lms.helpers.QuizScoring import QuizScoring
from lms.helpers.Utilities import Utils
from lms.models.Courses import CourseModel
from lms.models.Progress import ProgressModel
from lms.schemas.Courses import Course, Quiz
from lms.schemas.Progress import Progress, QuizSubmission

logger = logging.getLogger(__name__)


class ProgressService:
    def __init__(self):
        self.progress_model = ProgressModel()
        self.course_model = CourseModel()

    def _get_progress(self, user_id: str, course_id: str) -> Progress:
        progress = self.progress_model.find_progress(
            Utils.validate_object_id(user_id, "user ID"),
            Utils.validate_object_id(course_id, "course ID"),
        )
        if not progress:
            raise NotFound("Enrollment not found")
        return progress

    def _get_course(self, course_id: str) -> Course:
        course = self.course_model.get_course({"_id": Utils.validate_object_id(course_id, "course ID")})
        if not course:
            raise NotFound("Course not found")
        return course

    def _get_quiz(self, course: Course, quiz_id: str) -> Quiz:
        quiz = course.get_quiz(quiz_id)
        if not quiz:
            raise NotFound("Quiz not found")
        return quiz

    def _lesson_result(self, progress: Progress, lesson) -> dict:
        return {
            "lessonProgress": lesson.model_dump(mode="json", by_alias=True),
            "overallProgress": progress.overallProgress,
            "isCompleted": progress.isCompleted,
        }

    def mark_lesson_complete(self, user_id: str, course_id: str, lesson_id: str,
                             watch_time: Optional[float] = None) -> dict:
        try:
            progress = self._get_progress(user_id, course_id)
            was_completed = progress.isCompleted
            lesson = ProgressTracker.mark_lesson_complete(progress, lesson_id, watch_time)
            self.progress_model.save_progress(progress)
            if progress.isCompleted and not was_completed:
                logger.info("User %s completed course %s", user_id, course_id)
            return Utils.success(self._lesson_result(progress, lesson))
        except LMSError as e:
            logger.warning("Unable to mark lesson %s complete: %s", lesson_id, e.message)
            return Utils.failure(e)

    def mark_lesson_incomplete(self, user_id: str, course_id: str, lesson_id: str) -> dict:
        try:
            progress = self._get_progress(user_id, course_id)
            lesson = ProgressTracker.mark_lesson_incomplete(progress, lesson_id)
            self.progress_model.save_progress(progress)
            return Utils.success(self._lesson_result(progress, lesson))
        except LMSError as e:
            logger.warning("Unable to mark lesson %s incomplete: %s", lesson_id, e.message)
            return Utils.failure(e)

    def update_watch_time(self, user_id: str, course_id: str, lesson_id: str, watch_time) -> dict:
        try:
            progress = self._get_progress(user_id, course_id)
            lesson = ProgressTracker.update_watch_time(progress, lesson_id, watch_time)
            self.progress_model.save_progress(progress)
            return Utils.success({"lessonProgress": lesson.model_dump(mode="json", by_alias=True)})
        except LMSError as e:
            logger.warning("Unable to update watch time for lesson %s: %s", lesson_id, e.message)
            return Utils.failure(e)

    def submit_quiz_attempt(self, user_id: str, course_id: str, quiz_id: str,
                            submission: QuizSubmission) -> dict:
        try:
            course = self._get_course(course_id)
            quiz = self._get_quiz(course, quiz_id)
            progress = self._get_progress(user_id, course_id)

            AnswerValidator.validate(quiz, submission.answers)
            attempt = QuizScoring.score_attempt(quiz, submission.answers, submission.timeSpent)
            ProgressTracker.record_attempt(progress, attempt)
            self.progress_model.save_progress(progress)

            logger.info(
                "User %s scored %s on quiz %s (passed=%s)",
                user_id, attempt.score, quiz_id, attempt.isPassed,
            )
            return Utils.success({
                "attempt": attempt.model_dump(mode="json", by_alias=True),
                "bestScore": QuizScoring.best_score(progress.quizAttempts, quiz.id),
                "totalAttempts": len(QuizScoring.attempts_for(progress.quizAttempts, quiz.id)),
            })
        except LMSError as e:
            logger.warning("Quiz submission for %s rejected: %s", quiz_id, e.message)
            return Utils.failure(e)

    def get_quiz_attempts(self, user_id: str, course_id: str, quiz_id: str) -> dict:
        try:
            progress = self._get_progress(user_id, course_id)
            attempts = QuizScoring.attempts_for(progress.quizAttempts, quiz_id)
            # latest first; sorted() is stable so equal timestamps keep newest-inserted first
            ordered = sorted(reversed(attempts), key=lambda attempt: attempt.attemptedAt, reverse=True)
            latest = QuizScoring.latest_attempt(attempts, quiz_id)
            return Utils.success({
                "attempts": [attempt.model_dump(mode="json", by_alias=True) for attempt in ordered],
                "bestScore": QuizScoring.best_score(attempts, quiz_id),
                "latestAttempt": latest.model_dump(mode="json", by_alias=True) if latest else None,
                "totalAttempts": len(attempts),
            })
        except LMSError as e:
            return Utils.failure(e)

    def get_course_progress(self, user_id: str, course_id: str) -> dict:
        try:
            progress = self._get_progress(user_id, course_id)
            course = self._get_course(course_id)
            return Utils.success({
                "course": {
                    "id": str(course.id),
                    "title": course.title,
                    "description": course.description,
                    "instructor": course.instructor,
                },
                "enrolledAt": progress.enrolledAt.isoformat(),
                "lastAccessedAt": progress.lastAccessedAt.isoformat(),
                "overallProgress": progress.overallProgress,
                "isCompleted": progress.isCompleted,
                "completedAt": progress.completedAt.isoformat() if progress.completedAt else None,
                "lessonProgress": [
                    lesson.model_dump(mode="json", by_alias=True) for lesson in progress.lessonProgress
                ],
                "quizStats": [QuizScoring.quiz_summary(progress.quizAttempts, quiz) for quiz in course.quizzes],
            })
        except LMSError as e:
            return Utils.failure(e)

    def get_attempt_detail(self, user_id: str, course_id: str, quiz_id: str, attempt_id: str) -> dict:
        try:
            progress = self._get_progress(user_id, course_id)
            attempt = None
            for candidate in progress.quizAttempts:
                if str(candidate.id) == str(attempt_id) and str(candidate.quizId) == str(quiz_id):
                    attempt = candidate
                    break
            if not attempt:
                raise NotFound("Quiz attempt not found")

            quiz = self._get_quiz(self._get_course(course_id), quiz_id)
            answers = []
            for answer in attempt.answers:
                question = quiz.get_question(answer.questionId)
                answers.append({
                    "question": {
                        "id": str(question.id),
                        "questionText": question.questionText,
                        "explanation": question.explanation,
                        "options": [option.model_dump() for option in question.options],
                    } if question else None,
                    "selectedOption": answer.selectedOption,
                    "isCorrect": answer.isCorrect,
                })

            return Utils.success({
                "attempt": {
                    "_id": str(attempt.id),
                    "score": attempt.score,
                    "totalQuestions": attempt.totalQuestions,
                    "correctAnswers": attempt.correctAnswers,
                    "timeSpent": attempt.timeSpent,
                    "isPassed": attempt.isPassed,
                    "attemptedAt": attempt.attemptedAt.isoformat(),
                    "answers": answers,
                },
                "quiz": {
                    "title": quiz.title,
                    "passingScore": quiz.passingScore,
                },
            })
        except LMSError as e:
            return Utils.failure(e)
