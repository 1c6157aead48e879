import os
from typing import List, Optional

from bson import ObjectId
from pymongo.errors import DuplicateKeyError, PyMongoError

from lms.helpers.Database import MongoDB
from lms.helpers.Exceptions import ConstraintViolation, StorageError
from lms.helpers.Utilities import Utils
from lms.schemas.Progress import Progress


class ProgressModel:
    def __init__(self, db_name: Optional[str] = None, collection_name: str = "Progress") -> None:
        database = MongoDB.get_database(db_name or os.getenv("DB_NAME", "lms"))
        self.collection = database[collection_name]
        # at most one progress record per (user, course)
        self.collection.create_index([("user", 1), ("course", 1)], unique=True)

    def find_progress(self, user_id: ObjectId, course_id: ObjectId) -> Optional[Progress]:
        try:
            document = self.collection.find_one({"user": ObjectId(user_id), "course": ObjectId(course_id)})
        except PyMongoError as e:
            raise StorageError(f"Unable to load progress: {e}")
        if document:
            return Progress(**document)
        return None

    def list_progress(self, user_id: ObjectId) -> List[Progress]:
        try:
            cursor = self.collection.find({"user": ObjectId(user_id)})
            return [Progress(**doc) for doc in cursor]
        except PyMongoError as e:
            raise StorageError(f"Unable to list progress: {e}")

    def create_progress(self, progress: Progress) -> ObjectId:
        try:
            result = self.collection.insert_one(progress.model_dump(by_alias=True))
        except DuplicateKeyError:
            raise ConstraintViolation("Progress already exists for this user and course")
        except PyMongoError as e:
            raise StorageError(f"Unable to create progress: {e}")
        return result.inserted_id

    def save_progress(self, progress: Progress) -> bool:
        """Replace the stored document; concurrent saves resolve as last write wins."""
        progress.updatedOn = Utils.utc_now()
        try:
            result = self.collection.replace_one({"_id": progress.id}, progress.model_dump(by_alias=True))
        except DuplicateKeyError:
            raise ConstraintViolation("Progress already exists for this user and course")
        except PyMongoError as e:
            raise StorageError(f"Unable to save progress: {e}")
        return result.matched_count > 0

    def delete_progress(self, user_id: ObjectId, course_id: ObjectId) -> bool:
        try:
            result = self.collection.delete_one({"user": ObjectId(user_id), "course": ObjectId(course_id)})
        except PyMongoError as e:
            raise StorageError(f"Unable to delete progress: {e}")
        return result.deleted_count > 0
