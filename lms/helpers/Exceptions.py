"""
Error taxonomy shared by the engine, the services and the HTTP layer.

Every error carries a ``code`` discriminant and the HTTP status the
controllers answer with. Domain errors mean the request was rejected;
``StorageError`` means the operation must be treated as not applied.
"""


class LMSError(Exception):
    code = "LMS_ERROR"
    status_code = 500

    def __init__(self, message: str = None):
        self.message = message or self.__class__.__name__
        super().__init__(self.message)


class DomainError(LMSError):
    code = "DOMAIN_ERROR"
    status_code = 400


class NotFound(DomainError):
    code = "NOT_FOUND"
    status_code = 404


class AlreadyEnrolled(DomainError):
    code = "ALREADY_ENROLLED"
    status_code = 400


class CourseNotAvailable(DomainError):
    code = "COURSE_NOT_AVAILABLE"
    status_code = 400


class IncompleteSubmission(DomainError):
    code = "INCOMPLETE_SUBMISSION"
    status_code = 400


class InvalidQuestionReference(DomainError):
    code = "INVALID_QUESTION_REFERENCE"
    status_code = 400


class InvalidInput(DomainError):
    code = "INVALID_INPUT"
    status_code = 400


class LessonNotInProgress(DomainError):
    code = "LESSON_NOT_IN_PROGRESS"
    status_code = 404


class ConstraintViolation(DomainError):
    code = "CONSTRAINT_VIOLATION"
    status_code = 409


class Unauthorized(DomainError):
    code = "UNAUTHORIZED"
    status_code = 401


class Forbidden(DomainError):
    code = "FORBIDDEN"
    status_code = 403


class StorageError(LMSError):
    code = "STORAGE_ERROR"
    status_code = 503
