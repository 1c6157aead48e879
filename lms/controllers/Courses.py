from typing import Optional

from fastapi import APIRouter, Depends, Query

from lms.dependencies import get_course_service
from lms.helpers.Utilities import Utils
from lms.middleware.JWTVerification import admin_validator
from lms.schemas.Courses import CourseCreate, CourseUpdate, LessonCreate, LessonUpdate, QuizCreate, QuizUpdate
from lms.schemas.ServerResponse import ServerResponse
from lms.services.Courses import CourseService

router = APIRouter(prefix="/api/v1/courses", tags=["Courses"])


@router.get("", response_model=ServerResponse)
def list_courses(
    page: int = Query(1),
    limit: int = Query(10),
    category: Optional[str] = None,
    level: Optional[str] = None,
    service: CourseService = Depends(get_course_service),
):
    return Utils.send(service.list_courses(page, limit, category, level))


@router.get("/{course_id}", response_model=ServerResponse)
def get_course(course_id: str, service: CourseService = Depends(get_course_service)):
    return Utils.send(service.get_course(course_id))


@router.post("", response_model=ServerResponse, status_code=201)
def create_course(
    body: CourseCreate,
    service: CourseService = Depends(get_course_service),
    jwt_payload: dict = Depends(admin_validator),
):
    return Utils.send(service.create_course(body), 201)


@router.put("/{course_id}", response_model=ServerResponse)
def update_course(
    course_id: str,
    body: CourseUpdate,
    service: CourseService = Depends(get_course_service),
    jwt_payload: dict = Depends(admin_validator),
):
    return Utils.send(service.update_course(course_id, body))


@router.delete("/{course_id}", response_model=ServerResponse)
def delete_course(
    course_id: str,
    service: CourseService = Depends(get_course_service),
    jwt_payload: dict = Depends(admin_validator),
):
    return Utils.send(service.delete_course(course_id))


@router.post("/{course_id}/lessons", response_model=ServerResponse, status_code=201)
def add_lesson(
    course_id: str,
    body: LessonCreate,
    service: CourseService = Depends(get_course_service),
    jwt_payload: dict = Depends(admin_validator),
):
    return Utils.send(service.add_lesson(course_id, body), 201)


@router.put("/{course_id}/lessons/{lesson_id}", response_model=ServerResponse)
def update_lesson(
    course_id: str,
    lesson_id: str,
    body: LessonUpdate,
    service: CourseService = Depends(get_course_service),
    jwt_payload: dict = Depends(admin_validator),
):
    return Utils.send(service.update_lesson(course_id, lesson_id, body))


@router.delete("/{course_id}/lessons/{lesson_id}", response_model=ServerResponse)
def delete_lesson(
    course_id: str,
    lesson_id: str,
    service: CourseService = Depends(get_course_service),
    jwt_payload: dict = Depends(admin_validator),
):
    return Utils.send(service.delete_lesson(course_id, lesson_id))


@router.post("/{course_id}/quizzes", response_model=ServerResponse, status_code=201)
def add_quiz(
    course_id: str,
    body: QuizCreate,
    service: CourseService = Depends(get_course_service),
    jwt_payload: dict = Depends(admin_validator),
):
    return Utils.send(service.add_quiz(course_id, body), 201)


@router.put("/{course_id}/quizzes/{quiz_id}", response_model=ServerResponse)
def update_quiz(
    course_id: str,
    quiz_id: str,
    body: QuizUpdate,
    service: CourseService = Depends(get_course_service),
    jwt_payload: dict = Depends(admin_validator),
):
    return Utils.send(service.update_quiz(course_id, quiz_id, body))


@router.delete("/{course_id}/quizzes/{quiz_id}", response_model=ServerResponse)
def delete_quiz(
    course_id: str,
    quiz_id: str,
    service: CourseService = Depends(get_course_service),
    jwt_payload: dict = Depends(admin_validator),
):
    return Utils.send(service.delete_quiz(course_id, quiz_id))
