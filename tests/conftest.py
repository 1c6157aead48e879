import os

import mongomock
import pytest
from bson import ObjectId

os.environ.setdefault("DB_NAME", "lms_test")
os.environ.setdefault("JWT_SECRET", "test-secret")

from lms import dependencies
from lms.helpers.Database import MongoDB
from lms.helpers.Utilities import Utils
from lms.models.Courses import CourseModel
from lms.schemas.Courses import CourseCreate, Quiz


def _question(text, correct_index, option_count=2):
    return {
        "questionText": text,
        "options": [
            {"text": f"{text} option {index}", "isCorrect": index == correct_index}
            for index in range(option_count)
        ],
        "explanation": f"Because option {correct_index} is right",
    }


@pytest.fixture
def quiz_factory():
    """Build a Quiz whose question i has its correct option at correct_indexes[i]."""

    def build(correct_indexes=(0, 1, 0, 1), passing_score=70, option_count=2):
        return Quiz(
            title="Basics Quiz",
            order=1,
            passingScore=passing_score,
            questions=[
                _question(f"Question {number}", correct, option_count)
                for number, correct in enumerate(correct_indexes, start=1)
            ],
        )

    return build


@pytest.fixture
def course_payload():
    def build(lessons=2, published=True, passing_score=70):
        return CourseCreate(
            title="JavaScript Fundamentals",
            description="Learn the basics of JavaScript programming.",
            instructor="John Smith",
            price=99.99,
            category="Programming",
            isPublished=published,
            lessons=[
                {"title": f"Lesson {number}", "videoUrl": f"https://example.com/video{number}.mp4", "order": number}
                for number in range(1, lessons + 1)
            ],
            quizzes=[
                {
                    "title": "JavaScript Basics Quiz",
                    "order": 1,
                    "passingScore": passing_score,
                    "questions": [_question(f"Question {number}", number % 2) for number in range(1, 5)],
                }
            ],
        )

    return build


@pytest.fixture
def mongo():
    MongoDB.client = mongomock.MongoClient()
    dependencies.cleanup_resources()
    yield MongoDB.client
    dependencies.cleanup_resources()
    MongoDB.client = None


@pytest.fixture
def db(mongo):
    return mongo[os.environ["DB_NAME"]]


@pytest.fixture
def create_course(mongo, course_payload):
    def create(**kwargs):
        course = course_payload(**kwargs).to_course()
        model = CourseModel()
        model.create_course(course)
        return model.get_course({"_id": course.id})

    return create


@pytest.fixture
def course(create_course):
    return create_course()


@pytest.fixture
def create_user(db):
    def create(role="student", name="Jane Smith"):
        user_id = ObjectId()
        db["Users"].insert_one({
            "_id": user_id,
            "name": name,
            "email": f"{user_id}@example.com",
            "role": role,
            "enrolledCourses": [],
        })
        return str(user_id)

    return create


@pytest.fixture
def student(create_user):
    return create_user()


@pytest.fixture
def admin(create_user):
    return create_user(role="admin", name="Admin User")


@pytest.fixture
def auth_headers():
    def build(user_id, role="student"):
        token = Utils.create_jwt_token({"id": user_id, "role": role})
        return {"Authorization": f"Bearer {token}"}

    return build


@pytest.fixture
def client(mongo):
    from fastapi.testclient import TestClient
    from lms.main import app

    return TestClient(app)


def correct_answers(quiz):
    return [
        {
            "questionId": str(question.id),
            "selectedOption": next(index for index, option in enumerate(question.options) if option.isCorrect),
        }
        for question in quiz.questions
    ]


@pytest.fixture
def answer_key():
    """Answer every question of a quiz correctly."""
    return correct_answers
