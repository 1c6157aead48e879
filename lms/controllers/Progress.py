from typing import Optional

from fastapi import APIRouter, Depends

from lms.dependencies import get_progress_service
from lms.helpers.Utilities import Utils
from lms.middleware.JWTVerification import jwt_validator
from lms.schemas.Progress import LessonCompleteRequest, QuizSubmission, WatchTimeUpdate
from lms.schemas.ServerResponse import ServerResponse
from lms.services.Progress import ProgressService

router = APIRouter(prefix="/api/v1/progress", tags=["Progress"])


@router.get("/{course_id}", response_model=ServerResponse)
def get_course_progress(
    course_id: str,
    service: ProgressService = Depends(get_progress_service),
    jwt_payload: dict = Depends(jwt_validator),
):
    return Utils.send(service.get_course_progress(jwt_payload["id"], course_id))


@router.put("/{course_id}/lessons/{lesson_id}/complete", response_model=ServerResponse)
def mark_lesson_complete(
    course_id: str,
    lesson_id: str,
    body: Optional[LessonCompleteRequest] = None,
    service: ProgressService = Depends(get_progress_service),
    jwt_payload: dict = Depends(jwt_validator),
):
    watch_time = body.watchTime if body else None
    return Utils.send(service.mark_lesson_complete(jwt_payload["id"], course_id, lesson_id, watch_time))


@router.put("/{course_id}/lessons/{lesson_id}/incomplete", response_model=ServerResponse)
def mark_lesson_incomplete(
    course_id: str,
    lesson_id: str,
    service: ProgressService = Depends(get_progress_service),
    jwt_payload: dict = Depends(jwt_validator),
):
    return Utils.send(service.mark_lesson_incomplete(jwt_payload["id"], course_id, lesson_id))


@router.put("/{course_id}/lessons/{lesson_id}/watch-time", response_model=ServerResponse)
def update_watch_time(
    course_id: str,
    lesson_id: str,
    body: WatchTimeUpdate,
    service: ProgressService = Depends(get_progress_service),
    jwt_payload: dict = Depends(jwt_validator),
):
    return Utils.send(service.update_watch_time(jwt_payload["id"], course_id, lesson_id, body.watchTime))


@router.post("/{course_id}/quizzes/{quiz_id}/attempt", response_model=ServerResponse, status_code=201)
def submit_quiz_attempt(
    course_id: str,
    quiz_id: str,
    body: QuizSubmission,
    service: ProgressService = Depends(get_progress_service),
    jwt_payload: dict = Depends(jwt_validator),
):
    return Utils.send(service.submit_quiz_attempt(jwt_payload["id"], course_id, quiz_id, body), 201)


@router.get("/{course_id}/quizzes/{quiz_id}/attempts", response_model=ServerResponse)
def get_quiz_attempts(
    course_id: str,
    quiz_id: str,
    service: ProgressService = Depends(get_progress_service),
    jwt_payload: dict = Depends(jwt_validator),
):
    return Utils.send(service.get_quiz_attempts(jwt_payload["id"], course_id, quiz_id))


@router.get("/{course_id}/quizzes/{quiz_id}/attempts/{attempt_id}", response_model=ServerResponse)
def get_attempt_detail(
    course_id: str,
    quiz_id: str,
    attempt_id: str,
    service: ProgressService = Depends(get_progress_service),
    jwt_payload: dict = Depends(jwt_validator),
):
    return Utils.send(service.get_attempt_detail(jwt_payload["id"], course_id, quiz_id, attempt_id))
