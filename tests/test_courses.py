"""
Tests for CourseService

Catalog listing, learner views and admin maintenance of embedded
lessons and quizzes.
"""

from bson import ObjectId

from lms.schemas.Courses import CourseUpdate, LessonCreate, LessonUpdate, QuizCreate, QuizUpdate
from lms.services.Courses import CourseService


class TestCatalog:

    def test_create_course_returns_admin_view(self, mongo, course_payload):
        result = CourseService().create_course(course_payload())
        course = result["data"]["course"]

        assert result["success"] is True
        assert course["title"] == "JavaScript Fundamentals"
        assert course["totalLessons"] == 2
        assert course["quizzes"][0]["questions"][0]["options"][1]["isCorrect"] is True

    def test_list_only_published_with_pagination(self, create_course):
        for _ in range(3):
            create_course()
        create_course(published=False)

        result = CourseService().list_courses(page=2, limit=2)
        data = result["data"]

        assert len(data["courses"]) == 1
        assert data["pagination"] == {"page": 2, "limit": 2, "total": 3, "pages": 2}
        assert "questions" not in data["courses"][0]["quizzes"][0]

    def test_category_filter_is_case_insensitive(self, create_course):
        create_course()
        service = CourseService()

        assert service.list_courses(category="programming")["data"]["pagination"]["total"] == 1
        assert service.list_courses(category="Design")["data"]["pagination"]["total"] == 0

    def test_level_filter(self, create_course):
        create_course()
        service = CourseService()

        assert service.list_courses(level="Beginner")["data"]["pagination"]["total"] == 1
        assert service.list_courses(level="Advanced")["data"]["pagination"]["total"] == 0

    def test_invalid_paging_is_rejected(self, mongo):
        service = CourseService()

        assert service.list_courses(page=0)["code"] == "INVALID_INPUT"
        assert service.list_courses(limit=101)["code"] == "INVALID_INPUT"

    def test_public_view_hides_answer_key(self, course):
        result = CourseService().get_course(str(course.id))
        quiz = result["data"]["course"]["quizzes"][0]

        assert quiz["totalQuestions"] == 4
        for question in quiz["questions"]:
            assert "explanation" not in question
            assert all(set(option) == {"text"} for option in question["options"])

    def test_unpublished_course_is_hidden(self, create_course):
        course = create_course(published=False)
        result = CourseService().get_course(str(course.id))

        assert result["code"] == "NOT_FOUND"
        assert result["error"] == "Course not available"

    def test_missing_course(self, mongo):
        result = CourseService().get_course(str(ObjectId()))
        assert result["code"] == "NOT_FOUND"


class TestCourseMaintenance:

    def test_update_touches_only_given_fields(self, course):
        result = CourseService().update_course(str(course.id), CourseUpdate(price=49.5, level="Advanced"))
        updated = result["data"]["course"]

        assert updated["price"] == 49.5
        assert updated["level"] == "Advanced"
        assert updated["title"] == course.title

    def test_update_missing_course(self, mongo):
        result = CourseService().update_course(str(ObjectId()), CourseUpdate(price=10))
        assert result["code"] == "NOT_FOUND"

    def test_delete_course(self, db, course):
        result = CourseService().delete_course(str(course.id))

        assert result["success"] is True
        assert db["Courses"].find_one({"_id": course.id}) is None
        assert CourseService().delete_course(str(course.id))["code"] == "NOT_FOUND"


class TestEmbeddedContent:

    def test_add_update_and_delete_lesson(self, course):
        service = CourseService()
        added = service.add_lesson(
            str(course.id), LessonCreate(title="Closures", videoUrl="https://example.com/closures.mp4", order=3)
        )
        lesson_id = added["data"]["course"]["lessons"][-1]["_id"]
        assert added["data"]["course"]["totalLessons"] == 3

        updated = service.update_lesson(str(course.id), lesson_id, LessonUpdate(title="Closures in depth"))
        lessons = updated["data"]["course"]["lessons"]
        assert lessons[-1]["title"] == "Closures in depth"
        assert lessons[-1]["videoUrl"] == "https://example.com/closures.mp4"
        assert lessons[0]["title"] == "Lesson 1"

        removed = service.delete_lesson(str(course.id), lesson_id)
        assert removed["data"]["course"]["totalLessons"] == 2

    def test_unknown_lesson(self, course):
        result = CourseService().update_lesson(str(course.id), str(ObjectId()), LessonUpdate(order=5))
        assert result["code"] == "NOT_FOUND"
        assert result["error"] == "Lesson not found"

    def test_add_quiz(self, course):
        quiz = QuizCreate(
            title="Final Quiz",
            order=2,
            questions=[{
                "questionText": "What is 1 + 1?",
                "options": [{"text": "1"}, {"text": "2", "isCorrect": True}],
            }],
        )
        result = CourseService().add_quiz(str(course.id), quiz)
        quizzes = result["data"]["course"]["quizzes"]

        assert [entry["title"] for entry in quizzes] == ["JavaScript Basics Quiz", "Final Quiz"]
        assert quizzes[-1]["passingScore"] == 70

    def test_replacing_questions_assigns_new_ids(self, course):
        quiz = course.quizzes[0]
        replacement = QuizUpdate(questions=[{
            "questionText": "Is JavaScript typed?",
            "options": [{"text": "Dynamically", "isCorrect": True}, {"text": "Statically"}],
        }])

        result = CourseService().update_quiz(str(course.id), str(quiz.id), replacement)
        questions = result["data"]["course"]["quizzes"][0]["questions"]

        assert len(questions) == 1
        assert questions[0]["_id"] not in quiz.question_ids()
        assert result["data"]["course"]["quizzes"][0]["title"] == quiz.title

    def test_delete_quiz(self, course):
        service = CourseService()
        result = service.delete_quiz(str(course.id), str(course.quizzes[0].id))

        assert result["data"]["course"]["quizzes"] == []
        assert service.delete_quiz(str(course.id), str(course.quizzes[0].id))["error"] == "Quiz not found"
