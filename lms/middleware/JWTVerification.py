from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from lms.helpers.Exceptions import Forbidden, Unauthorized
from lms.helpers.Utilities import Utils

bearer_scheme = HTTPBearer(auto_error=False)


def jwt_validator(credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme)) -> dict:
    """
    Decode the bearer token issued by the identity service.
    The payload must carry the user's ``id``; ``role`` defaults to student.
    """
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise Unauthorized("Not authorized, no token")
    payload = Utils.decode_jwt_token(credentials.credentials)
    if not payload.get("id"):
        raise Unauthorized("Token payload has no user id")
    payload.setdefault("role", "student")
    return payload


def admin_validator(jwt_payload: dict = Depends(jwt_validator)) -> dict:
    if jwt_payload.get("role") != "admin":
        raise Forbidden("User role is not authorized to access this route")
    return jwt_payload
