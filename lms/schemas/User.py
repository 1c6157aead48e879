from pydantic import BaseModel, Field
from typing import List, Literal, Optional
from bson import ObjectId
from datetime import datetime

from lms.helpers.Utilities import Utils
from lms.schemas.PyObjectId import PyObjectId


class Enrollment(BaseModel):
    course: PyObjectId
    enrolledAt: datetime = Field(default_factory=Utils.utc_now)

    class Config:
        arbitrary_types_allowed = True
        json_encoders = {ObjectId: str}


class UserSchema(BaseModel):
    id: Optional[PyObjectId] = Field(default_factory=ObjectId, alias="_id")
    name: Optional[str] = None
    email: Optional[str] = None
    role: Literal["student", "admin"] = "student"
    enrolledCourses: List[Enrollment] = []
    createdOn: Optional[datetime] = None
    updatedOn: Optional[datetime] = None

    class Config:
        populate_by_name = True
        arbitrary_types_allowed = True
        json_encoders = {ObjectId: str}

    def get_enrollment(self, course_id: str) -> Optional[Enrollment]:
        for enrollment in self.enrolledCourses:
            if str(enrollment.course) == str(course_id):
                return enrollment
        return None
