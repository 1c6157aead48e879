import os
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import jwt
from bson import ObjectId
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from lms.helpers.Exceptions import InvalidInput, LMSError, Unauthorized
from lms.schemas.ServerResponse import ServerResponse


class Utils:

    @staticmethod
    def utc_now() -> datetime:
        """Naive UTC timestamp, the form pymongo hands back from the database."""
        return datetime.now(timezone.utc).replace(tzinfo=None)

    @staticmethod
    def percentage(part: int, whole: int) -> int:
        """
        100 * part / whole rounded half up (87.5 -> 88), 0 when whole is 0.
        Integer arithmetic keeps .5 boundaries exact.
        """
        if whole <= 0:
            return 0
        return (200 * part + whole) // (2 * whole)

    @staticmethod
    def validate_object_id(value: str, name: str = "id") -> ObjectId:
        if isinstance(value, ObjectId):
            return value
        if not value or not ObjectId.is_valid(str(value)):
            raise InvalidInput(f"Invalid {name}")
        return ObjectId(str(value))

    @staticmethod
    def success(data: Any) -> dict:
        return {"success": True, "data": data}

    @staticmethod
    def failure(error: LMSError) -> dict:
        return {
            "success": False,
            "data": None,
            "error": error.message,
            "code": error.code,
            "status": error.status_code,
        }

    @staticmethod
    def create_response(data: Any, success: bool, error: str = "", code: Optional[str] = None,
                        status_code: Optional[int] = None) -> JSONResponse:
        body = ServerResponse(data=data, success=success, error=error or None, code=code)
        if status_code is None:
            status_code = 200 if success else 400
        return JSONResponse(status_code=status_code, content=jsonable_encoder(body.model_dump(), custom_encoder={ObjectId: str}))

    @staticmethod
    def send(result: dict, status_code: int = 200) -> JSONResponse:
        """Turn a service result dict into the response envelope."""
        if result["success"]:
            return Utils.create_response(result["data"], True, status_code=status_code)
        return Utils.create_response(
            None,
            False,
            result.get("error", ""),
            result.get("code"),
            result.get("status", 400),
        )

    @staticmethod
    def create_jwt_token(payload: dict, expires_minutes: int = 60) -> str:
        secret = os.getenv("JWT_SECRET")
        if not secret:
            raise RuntimeError("JWT_SECRET environment variable is not set")
        claims = dict(payload)
        claims["exp"] = datetime.now(timezone.utc) + timedelta(minutes=expires_minutes)
        return jwt.encode(claims, secret, algorithm=os.getenv("JWT_ALGORITHM", "HS256"))

    @staticmethod
    def decode_jwt_token(token: str) -> dict:
        secret = os.getenv("JWT_SECRET")
        if not secret:
            raise Unauthorized("Token verification is not configured")
        try:
            return jwt.decode(token, secret, algorithms=[os.getenv("JWT_ALGORITHM", "HS256")])
        except jwt.ExpiredSignatureError:
            raise Unauthorized("Token has expired")
        except jwt.InvalidTokenError:
            raise Unauthorized("Invalid token")
