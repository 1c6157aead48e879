import logging
import re
from typing import Optional

from lms.helpers.Exceptions import InvalidInput, LMSError, NotFound
from lms.helpers.Utilities import Utils
from lms.models.Courses import CourseModel
from lms.schemas.Courses import (
    Course,
    CourseCreate,
    CourseUpdate,
    LessonCreate,
    LessonUpdate,
    Question,
    QuizCreate,
    QuizUpdate,
)

logger = logging.getLogger(__name__)


class CourseService:
    def __init__(self):
        self.course_model = CourseModel()

    def _get_course(self, course_id: str) -> Course:
        course = self.course_model.get_course({"_id": Utils.validate_object_id(course_id, "course ID")})
        if not course:
            raise NotFound("Course not found")
        return course

    def list_courses(self, page: int = 1, limit: int = 10, category: Optional[str] = None,
                     level: Optional[str] = None) -> dict:
        try:
            if page < 1:
                raise InvalidInput("Page must be a positive integer")
            if limit < 1 or limit > 100:
                raise InvalidInput("Limit must be between 1 and 100")

            filters = {"isPublished": True}
            if category:
                filters["category"] = {"$regex": re.escape(category), "$options": "i"}
            if level:
                filters["level"] = level

            total = self.course_model.count_courses(filters)
            courses = self.course_model.list_courses(filters, (page - 1) * limit, limit)
            return Utils.success({
                "courses": [course.summary() for course in courses],
                "pagination": {
                    "page": page,
                    "limit": limit,
                    "total": total,
                    "pages": (total + limit - 1) // limit,
                },
            })
        except LMSError as e:
            return Utils.failure(e)

    def get_course(self, course_id: str) -> dict:
        try:
            course = self._get_course(course_id)
            if not course.isPublished:
                raise NotFound("Course not available")
            return Utils.success({"course": course.public_view()})
        except LMSError as e:
            return Utils.failure(e)

    def create_course(self, data: CourseCreate) -> dict:
        try:
            course = data.to_course()
            self.course_model.create_course(course)
            logger.info("Created course %s", course.id)
            return Utils.success({"course": course.admin_view()})
        except LMSError as e:
            return Utils.failure(e)

    def update_course(self, course_id: str, updates: CourseUpdate) -> dict:
        try:
            course_oid = Utils.validate_object_id(course_id, "course ID")
            fields = updates.model_dump(exclude_unset=True)
            if not self.course_model.update_course(course_oid, fields):
                raise NotFound("Course not found")
            return Utils.success({"course": self._get_course(course_id).admin_view()})
        except LMSError as e:
            return Utils.failure(e)

    def delete_course(self, course_id: str) -> dict:
        try:
            if not self.course_model.delete_course(Utils.validate_object_id(course_id, "course ID")):
                raise NotFound("Course not found")
            logger.info("Deleted course %s", course_id)
            return Utils.success("Course deleted successfully")
        except LMSError as e:
            return Utils.failure(e)

    def add_lesson(self, course_id: str, data: LessonCreate) -> dict:
        try:
            course_oid = Utils.validate_object_id(course_id, "course ID")
            if not self.course_model.add_lesson(course_oid, data.to_lesson()):
                raise NotFound("Course not found")
            return Utils.success({"course": self._get_course(course_id).admin_view()})
        except LMSError as e:
            return Utils.failure(e)

    def update_lesson(self, course_id: str, lesson_id: str, updates: LessonUpdate) -> dict:
        try:
            course = self._get_course(course_id)
            if not course.get_lesson(lesson_id):
                raise NotFound("Lesson not found")
            fields = updates.model_dump(exclude_unset=True)
            self.course_model.update_lesson(course.id, Utils.validate_object_id(lesson_id, "lesson ID"), fields)
            return Utils.success({"course": self._get_course(course_id).admin_view()})
        except LMSError as e:
            return Utils.failure(e)

    def delete_lesson(self, course_id: str, lesson_id: str) -> dict:
        try:
            course = self._get_course(course_id)
            if not course.get_lesson(lesson_id):
                raise NotFound("Lesson not found")
            self.course_model.remove_lesson(course.id, Utils.validate_object_id(lesson_id, "lesson ID"))
            return Utils.success({"course": self._get_course(course_id).admin_view()})
        except LMSError as e:
            return Utils.failure(e)

    def add_quiz(self, course_id: str, data: QuizCreate) -> dict:
        try:
            course_oid = Utils.validate_object_id(course_id, "course ID")
            if not self.course_model.add_quiz(course_oid, data.to_quiz()):
                raise NotFound("Course not found")
            return Utils.success({"course": self._get_course(course_id).admin_view()})
        except LMSError as e:
            return Utils.failure(e)

    def update_quiz(self, course_id: str, quiz_id: str, updates: QuizUpdate) -> dict:
        try:
            course = self._get_course(course_id)
            if not course.get_quiz(quiz_id):
                raise NotFound("Quiz not found")
            fields = updates.model_dump(exclude_unset=True)
            if updates.questions is not None:
                # replacement questions get fresh ids
                fields["questions"] = [
                    Question(**question.model_dump()).model_dump(by_alias=True)
                    for question in updates.questions
                ]
            self.course_model.update_quiz(course.id, Utils.validate_object_id(quiz_id, "quiz ID"), fields)
            return Utils.success({"course": self._get_course(course_id).admin_view()})
        except LMSError as e:
            return Utils.failure(e)

    def delete_quiz(self, course_id: str, quiz_id: str) -> dict:
        try:
            course = self._get_course(course_id)
            if not course.get_quiz(quiz_id):
                raise NotFound("Quiz not found")
            self.course_model.remove_quiz(course.id, Utils.validate_object_id(quiz_id, "quiz ID"))
            return Utils.success({"course": self._get_course(course_id).admin_view()})
        except LMSError as e:
            return Utils.failure(e)
