"""
Singleton dependencies for resource management.
Services hold their model classes, which bind to the Mongo client on creation,
so they are created lazily after startup and reset on shutdown.
"""
from typing import Optional, TYPE_CHECKING

# Avoid circular imports
if TYPE_CHECKING:
    from lms.services.Courses import CourseService
    from lms.services.Enrollments import EnrollmentService
    from lms.services.Progress import ProgressService

_course_service: Optional['CourseService'] = None
_enrollment_service: Optional['EnrollmentService'] = None
_progress_service: Optional['ProgressService'] = None


def get_course_service():
    """Get singleton CourseService instance"""
    global _course_service
    if _course_service is None:
        from lms.services.Courses import CourseService
        _course_service = CourseService()
    return _course_service


def get_enrollment_service():
    """Get singleton EnrollmentService instance"""
    global _enrollment_service
    if _enrollment_service is None:
        from lms.services.Enrollments import EnrollmentService
        _enrollment_service = EnrollmentService()
    return _enrollment_service


def get_progress_service():
    """Get singleton ProgressService instance"""
    global _progress_service
    if _progress_service is None:
        from lms.services.Progress import ProgressService
        _progress_service = ProgressService()
    return _progress_service


def cleanup_resources():
    """
    Cleanup all singleton resources. Call this on application shutdown.
    """
    global _course_service, _enrollment_service, _progress_service
    _course_service = None
    _enrollment_service = None
    _progress_service = None
