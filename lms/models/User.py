from typing import Optional
from bson import ObjectId
from pymongo.errors import PyMongoError
import os

from lms.helpers.Database import MongoDB
from lms.helpers.Exceptions import StorageError
from lms.helpers.Utilities import Utils
from lms.schemas.User import Enrollment, UserSchema


class UserModel:
    def __init__(self, db_name: Optional[str] = None, collection_name: str = "Users"):
        database = MongoDB.get_database(db_name or os.getenv("DB_NAME", "lms"))
        self.collection = database[collection_name]

    def get_user(self, filters: dict) -> Optional[UserSchema]:
        """
        Retrieve a single user matching the given filters.
        """
        try:
            document = self.collection.find_one(filters)
        except PyMongoError as e:
            raise StorageError(f"Unable to load user: {e}")
        if document:
            return UserSchema(**document)
        return None

    def push_enrollment(self, user_id: ObjectId, enrollment: Enrollment) -> bool:
        """
        Record an enrollment on the user's profile.
        """
        try:
            result = self.collection.update_one(
                {"_id": ObjectId(user_id)},
                {
                    "$push": {"enrolledCourses": enrollment.model_dump()},
                    "$set": {"updatedOn": Utils.utc_now()},
                },
            )
        except PyMongoError as e:
            raise StorageError(f"Unable to record enrollment: {e}")
        return result.matched_count > 0

    def pull_enrollment(self, user_id: ObjectId, course_id: ObjectId) -> bool:
        """
        Remove every enrollment entry for the course from the user's profile.
        """
        try:
            result = self.collection.update_one(
                {"_id": ObjectId(user_id)},
                {
                    "$pull": {"enrolledCourses": {"course": ObjectId(course_id)}},
                    "$set": {"updatedOn": Utils.utc_now()},
                },
            )
        except PyMongoError as e:
            raise StorageError(f"Unable to remove enrollment: {e}")
        return result.modified_count > 0
