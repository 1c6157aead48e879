import os
from typing import List, Optional

from bson import ObjectId
from pymongo.errors import PyMongoError

from lms.helpers.Database import MongoDB
from lms.helpers.Exceptions import StorageError
from lms.helpers.Utilities import Utils
from lms.schemas.Courses import Course, Lesson, Quiz


class CourseModel:
    def __init__(self, db_name: Optional[str] = None, collection_name: str = "Courses") -> None:
        database = MongoDB.get_database(db_name or os.getenv("DB_NAME", "lms"))
        self.collection = database[collection_name]

    def create_course(self, course: Course) -> ObjectId:
        try:
            result = self.collection.insert_one(course.model_dump(by_alias=True))
        except PyMongoError as e:
            raise StorageError(f"Unable to create course: {e}")
        return result.inserted_id

    def list_courses(self, filters: dict = None, skip: int = 0, limit: int = 10) -> List[Course]:
        try:
            cursor = self.collection.find(filters or {}).sort("createdOn", -1).skip(skip).limit(limit)
            return [Course(**doc) for doc in cursor]
        except PyMongoError as e:
            raise StorageError(f"Unable to list courses: {e}")

    def count_courses(self, filters: dict = None) -> int:
        try:
            return self.collection.count_documents(filters or {})
        except PyMongoError as e:
            raise StorageError(f"Unable to count courses: {e}")

    def get_course(self, filters: dict) -> Optional[Course]:
        try:
            document = self.collection.find_one(filters)
        except PyMongoError as e:
            raise StorageError(f"Unable to load course: {e}")
        if document:
            return Course(**document)
        return None

    def update_course(self, course_id: ObjectId, updates: dict) -> bool:
        """Returns False when no course matched."""
        updates = dict(updates)
        updates["updatedOn"] = Utils.utc_now()
        try:
            result = self.collection.update_one({"_id": ObjectId(course_id)}, {"$set": updates})
        except PyMongoError as e:
            raise StorageError(f"Unable to update course: {e}")
        return result.matched_count > 0

    def delete_course(self, course_id: ObjectId) -> bool:
        try:
            result = self.collection.delete_one({"_id": ObjectId(course_id)})
        except PyMongoError as e:
            raise StorageError(f"Unable to delete course: {e}")
        return result.deleted_count > 0

    def add_lesson(self, course_id: ObjectId, lesson: Lesson) -> bool:
        return self._push(course_id, "lessons", lesson.model_dump(by_alias=True))

    def update_lesson(self, course_id: ObjectId, lesson_id: ObjectId, updates: dict) -> bool:
        return self._set_embedded(course_id, "lessons", lesson_id, updates)

    def remove_lesson(self, course_id: ObjectId, lesson_id: ObjectId) -> bool:
        return self._pull(course_id, "lessons", lesson_id)

    def add_quiz(self, course_id: ObjectId, quiz: Quiz) -> bool:
        return self._push(course_id, "quizzes", quiz.model_dump(by_alias=True))

    def update_quiz(self, course_id: ObjectId, quiz_id: ObjectId, updates: dict) -> bool:
        return self._set_embedded(course_id, "quizzes", quiz_id, updates)

    def remove_quiz(self, course_id: ObjectId, quiz_id: ObjectId) -> bool:
        return self._pull(course_id, "quizzes", quiz_id)

    def add_student(self, course_id: ObjectId, user_id: ObjectId) -> bool:
        try:
            result = self.collection.update_one(
                {"_id": ObjectId(course_id)},
                {"$addToSet": {"enrolledStudents": ObjectId(user_id)}},
            )
        except PyMongoError as e:
            raise StorageError(f"Unable to add student to course: {e}")
        return result.matched_count > 0

    def remove_student(self, course_id: ObjectId, user_id: ObjectId) -> bool:
        try:
            result = self.collection.update_one(
                {"_id": ObjectId(course_id)},
                {"$pull": {"enrolledStudents": ObjectId(user_id)}},
            )
        except PyMongoError as e:
            raise StorageError(f"Unable to remove student from course: {e}")
        return result.matched_count > 0

    def _push(self, course_id: ObjectId, field: str, document: dict) -> bool:
        try:
            result = self.collection.update_one(
                {"_id": ObjectId(course_id)},
                {"$push": {field: document}, "$set": {"updatedOn": Utils.utc_now()}},
            )
        except PyMongoError as e:
            raise StorageError(f"Unable to add to {field}: {e}")
        return result.matched_count > 0

    def _set_embedded(self, course_id: ObjectId, field: str, item_id: ObjectId, updates: dict) -> bool:
        """
        Update one embedded lesson/quiz using dot notation, touching only the given fields.
        """
        now = Utils.utc_now()
        set_updates = {f"{field}.$.{key}": value for key, value in updates.items()}
        set_updates[f"{field}.$.updatedOn"] = now
        set_updates["updatedOn"] = now
        try:
            result = self.collection.update_one(
                {"_id": ObjectId(course_id), f"{field}._id": ObjectId(item_id)},
                {"$set": set_updates},
            )
        except PyMongoError as e:
            raise StorageError(f"Unable to update {field}: {e}")
        return result.matched_count > 0

    def _pull(self, course_id: ObjectId, field: str, item_id: ObjectId) -> bool:
        try:
            result = self.collection.update_one(
                {"_id": ObjectId(course_id)},
                {"$pull": {field: {"_id": ObjectId(item_id)}}, "$set": {"updatedOn": Utils.utc_now()}},
            )
        except PyMongoError as e:
            raise StorageError(f"Unable to remove from {field}: {e}")
        return result.modified_count > 0
