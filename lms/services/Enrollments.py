import logging

from lms.helpers.Exceptions import (
    AlreadyEnrolled,
    ConstraintViolation,
    CourseNotAvailable,
    LMSError,
    NotFound,
)
from lms.helpers.ProgressTracker import ProgressTracker
from lms.helpers.Utilities import Utils
from lms.models.Courses import CourseModel
from lms.models.Progress import ProgressModel
from lms.models.User import UserModel
from lms.schemas.User import Enrollment, UserSchema

logger = logging.getLogger(__name__)


class EnrollmentService:
    def __init__(self):
        self.course_model = CourseModel()
        self.progress_model = ProgressModel()
        self.user_model = UserModel()

    def _get_user(self, user_id) -> UserSchema:
        user = self.user_model.get_user({"_id": user_id})
        if not user:
            raise NotFound("User not found")
        return user

    def enroll(self, user_id: str, course_id: str) -> dict:
        try:
            user_oid = Utils.validate_object_id(user_id, "user ID")
            course_oid = Utils.validate_object_id(course_id, "course ID")

            course = self.course_model.get_course({"_id": course_oid})
            if not course:
                raise NotFound("Course not found")
            if not course.isPublished:
                raise CourseNotAvailable("Course is not available for enrollment")

            user = self._get_user(user_oid)
            if user.get_enrollment(course_oid) or self.progress_model.find_progress(user_oid, course_oid):
                raise AlreadyEnrolled("Already enrolled in this course")

            now = Utils.utc_now()
            progress = ProgressTracker.initialize_for_enrollment(course, user_oid, now)
            try:
                self.progress_model.create_progress(progress)
            except ConstraintViolation:
                # lost a race with a concurrent enrollment for the same pair
                raise AlreadyEnrolled("Already enrolled in this course")

            self.user_model.push_enrollment(user_oid, Enrollment(course=course_oid, enrolledAt=now))
            self.course_model.add_student(course_oid, user_oid)
            logger.info("User %s enrolled in course %s", user_id, course_id)

            return Utils.success({
                "enrollment": {
                    "course": {
                        "id": str(course.id),
                        "title": course.title,
                        "instructor": course.instructor,
                        "price": course.price,
                    },
                    "enrolledAt": now.isoformat(),
                    "progress": progress.overallProgress,
                }
            })
        except LMSError as e:
            logger.warning("Enrollment of %s in %s rejected: %s", user_id, course_id, e.message)
            return Utils.failure(e)

    def list_enrollments(self, user_id: str) -> dict:
        try:
            user_oid = Utils.validate_object_id(user_id, "user ID")
            user = self._get_user(user_oid)
            progress_by_course = {
                str(progress.course): progress for progress in self.progress_model.list_progress(user_oid)
            }

            enrollments = []
            for enrollment in user.enrolledCourses:
                course = self.course_model.get_course({"_id": enrollment.course})
                progress = progress_by_course.get(str(enrollment.course))
                enrollments.append({
                    "course": course.summary() if course else {"_id": str(enrollment.course)},
                    "enrolledAt": enrollment.enrolledAt.isoformat(),
                    "progress": progress.overallProgress if progress else 0,
                    "isCompleted": progress.isCompleted if progress else False,
                    "lastAccessedAt": progress.lastAccessedAt.isoformat() if progress else None,
                })
            return Utils.success({"enrollments": enrollments})
        except LMSError as e:
            return Utils.failure(e)

    def get_enrollment(self, user_id: str, course_id: str) -> dict:
        try:
            user_oid = Utils.validate_object_id(user_id, "user ID")
            course_oid = Utils.validate_object_id(course_id, "course ID")
            user = self._get_user(user_oid)
            enrollment = user.get_enrollment(course_oid)
            if not enrollment:
                raise NotFound("Not enrolled in this course")

            course = self.course_model.get_course({"_id": course_oid})
            if not course:
                raise NotFound("Course not found")
            progress = self.progress_model.find_progress(user_oid, course_oid)

            details = course.info()
            details.update(course.counts())
            details["lessons"] = [lesson.model_dump(mode="json", by_alias=True) for lesson in course.lessons]
            details["quizzes"] = [quiz.summary() for quiz in course.quizzes]

            return Utils.success({
                "enrollment": {
                    "course": details,
                    "enrolledAt": enrollment.enrolledAt.isoformat(),
                    "progress": {
                        "overallProgress": progress.overallProgress if progress else 0,
                        "isCompleted": progress.isCompleted if progress else False,
                        "lastAccessedAt": progress.lastAccessedAt.isoformat() if progress else None,
                        "lessonProgress": [
                            lesson.model_dump(mode="json", by_alias=True) for lesson in progress.lessonProgress
                        ] if progress else [],
                        "quizAttempts": [
                            attempt.model_dump(mode="json", by_alias=True) for attempt in progress.quizAttempts
                        ] if progress else [],
                    },
                }
            })
        except LMSError as e:
            return Utils.failure(e)

    def unenroll(self, user_id: str, course_id: str) -> dict:
        """Irreversible: the progress record and its attempt history are deleted."""
        try:
            user_oid = Utils.validate_object_id(user_id, "user ID")
            course_oid = Utils.validate_object_id(course_id, "course ID")
            user = self._get_user(user_oid)
            if not user.get_enrollment(course_oid):
                raise NotFound("Not enrolled in this course")

            self.user_model.pull_enrollment(user_oid, course_oid)
            self.course_model.remove_student(course_oid, user_oid)
            self.progress_model.delete_progress(user_oid, course_oid)
            logger.info("User %s unenrolled from course %s", user_id, course_id)
            return Utils.success("Successfully unenrolled from course")
        except LMSError as e:
            logger.warning("Unenrollment of %s from %s rejected: %s", user_id, course_id, e.message)
            return Utils.failure(e)
