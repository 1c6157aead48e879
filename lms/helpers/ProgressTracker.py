"""
Per-user, per-course progress state.

All functions mutate the given Progress in place and return the value the
caller usually wants next; persisting the result is the caller's job.
"""
from datetime import datetime
from numbers import Number
from typing import Optional

from lms.helpers.Exceptions import InvalidInput, LessonNotInProgress
from lms.helpers.Utilities import Utils
from lms.schemas.Courses import Course
from lms.schemas.Progress import LessonProgress, Progress, QuizAttempt


class ProgressTracker:

    @staticmethod
    def recompute_progress(progress: Progress, now: Optional[datetime] = None) -> int:
        """
        overallProgress = round(100 * completed / total), 0 without lessons.

        Completion is monotonic: the first time the course reaches 100 it is
        marked complete and completedAt is stamped; later drops below 100
        leave both untouched.
        """
        now = now or Utils.utc_now()
        total = len(progress.lessonProgress)
        completed = sum(1 for lesson in progress.lessonProgress if lesson.isCompleted)
        progress.overallProgress = Utils.percentage(completed, total)

        if progress.overallProgress == 100 and not progress.isCompleted:
            progress.isCompleted = True
            progress.completedAt = now

        progress.lastAccessedAt = now
        return progress.overallProgress

    @staticmethod
    def find_lesson_progress(progress: Progress, lesson_id: str) -> LessonProgress:
        for lesson in progress.lessonProgress:
            if str(lesson.lessonId) == str(lesson_id):
                return lesson
        raise LessonNotInProgress("Lesson not found in progress")

    @classmethod
    def mark_lesson_complete(
        cls,
        progress: Progress,
        lesson_id: str,
        watch_time: Optional[float] = None,
        now: Optional[datetime] = None,
    ) -> LessonProgress:
        now = now or Utils.utc_now()
        lesson = cls.find_lesson_progress(progress, lesson_id)
        lesson.isCompleted = True
        lesson.completedAt = now
        if cls._is_watch_time(watch_time):
            lesson.watchTime = watch_time
        cls.recompute_progress(progress, now)
        return lesson

    @classmethod
    def mark_lesson_incomplete(
        cls, progress: Progress, lesson_id: str, now: Optional[datetime] = None
    ) -> LessonProgress:
        lesson = cls.find_lesson_progress(progress, lesson_id)
        lesson.isCompleted = False
        lesson.completedAt = None
        cls.recompute_progress(progress, now)
        return lesson

    @classmethod
    def update_watch_time(
        cls, progress: Progress, lesson_id: str, watch_time, now: Optional[datetime] = None
    ) -> LessonProgress:
        if not cls._is_watch_time(watch_time):
            raise InvalidInput("Watch time must be a non-negative number")
        lesson = cls.find_lesson_progress(progress, lesson_id)
        lesson.watchTime = watch_time
        progress.lastAccessedAt = now or Utils.utc_now()
        return lesson

    @staticmethod
    def initialize_for_enrollment(course: Course, user_id, now: Optional[datetime] = None) -> Progress:
        """Fresh progress holding a snapshot of the course's current lessons."""
        now = now or Utils.utc_now()
        return Progress(
            user=user_id,
            course=course.id,
            enrolledAt=now,
            lastAccessedAt=now,
            lessonProgress=[
                LessonProgress(lessonId=lesson.id, isCompleted=False, watchTime=0)
                for lesson in course.lessons
            ],
            quizAttempts=[],
            overallProgress=0,
            isCompleted=False,
        )

    @staticmethod
    def record_attempt(progress: Progress, attempt: QuizAttempt, now: Optional[datetime] = None) -> QuizAttempt:
        progress.quizAttempts.append(attempt)
        progress.lastAccessedAt = now or attempt.attemptedAt
        return attempt

    @staticmethod
    def _is_watch_time(value) -> bool:
        return (
            value is not None
            and isinstance(value, Number)
            and not isinstance(value, bool)
            and value >= 0
        )
