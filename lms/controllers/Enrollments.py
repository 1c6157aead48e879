from fastapi import APIRouter, Depends

from lms.dependencies import get_enrollment_service
from lms.helpers.Utilities import Utils
from lms.middleware.JWTVerification import jwt_validator
from lms.schemas.ServerResponse import ServerResponse
from lms.services.Enrollments import EnrollmentService

router = APIRouter(prefix="/api/v1/enrollments", tags=["Enrollments"])


@router.post("/{course_id}", response_model=ServerResponse, status_code=201)
def enroll(
    course_id: str,
    service: EnrollmentService = Depends(get_enrollment_service),
    jwt_payload: dict = Depends(jwt_validator),
):
    user_id = jwt_payload["id"]
    return Utils.send(service.enroll(user_id, course_id), 201)


@router.get("", response_model=ServerResponse)
def list_enrollments(
    service: EnrollmentService = Depends(get_enrollment_service),
    jwt_payload: dict = Depends(jwt_validator),
):
    return Utils.send(service.list_enrollments(jwt_payload["id"]))


@router.get("/{course_id}", response_model=ServerResponse)
def get_enrollment(
    course_id: str,
    service: EnrollmentService = Depends(get_enrollment_service),
    jwt_payload: dict = Depends(jwt_validator),
):
    return Utils.send(service.get_enrollment(jwt_payload["id"], course_id))


@router.delete("/{course_id}", response_model=ServerResponse)
def unenroll(
    course_id: str,
    service: EnrollmentService = Depends(get_enrollment_service),
    jwt_payload: dict = Depends(jwt_validator),
):
    return Utils.send(service.unenroll(jwt_payload["id"], course_id))
