from datetime import datetime
from typing import List, Literal, Optional

from bson import ObjectId
from pydantic import BaseModel, Field

from lms.helpers.Utilities import Utils
from lms.schemas.PyObjectId import PyObjectId

Level = Literal["Beginner", "Intermediate", "Advanced"]
URL_PATTERN = r"^https?://\S+$"


class ResourceLink(BaseModel):
    title: Optional[str] = None
    url: Optional[str] = None


class Lesson(BaseModel):
    id: PyObjectId = Field(default_factory=ObjectId, alias="_id")
    title: str
    videoUrl: str
    resourceLinks: List[ResourceLink] = []
    order: int
    createdOn: Optional[datetime] = Field(default_factory=Utils.utc_now)
    updatedOn: Optional[datetime] = Field(default_factory=Utils.utc_now)

    class Config:
        populate_by_name = True
        arbitrary_types_allowed = True
        json_encoders = {ObjectId: str}


class LessonCreate(BaseModel):
    title: str = Field(..., min_length=1)
    videoUrl: str = Field(..., pattern=URL_PATTERN)
    resourceLinks: List[ResourceLink] = []
    order: int = Field(..., ge=1)

    def to_lesson(self) -> Lesson:
        return Lesson(**self.model_dump())


class LessonUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    videoUrl: Optional[str] = Field(None, pattern=URL_PATTERN)
    resourceLinks: Optional[List[ResourceLink]] = None
    order: Optional[int] = Field(None, ge=1)


class Option(BaseModel):
    text: str
    isCorrect: bool = False


class Question(BaseModel):
    id: PyObjectId = Field(default_factory=ObjectId, alias="_id")
    questionText: str
    options: List[Option] = []
    explanation: Optional[str] = None

    class Config:
        populate_by_name = True
        arbitrary_types_allowed = True
        json_encoders = {ObjectId: str}

    def is_correct_option(self, selected_option: int) -> bool:
        """Out-of-range indexes are simply wrong answers."""
        if not isinstance(selected_option, int) or isinstance(selected_option, bool):
            return False
        if selected_option < 0 or selected_option >= len(self.options):
            return False
        return self.options[selected_option].isCorrect


class QuestionCreate(BaseModel):
    questionText: str = Field(..., min_length=1)
    options: List[Option] = Field(..., min_length=2, max_length=6)
    explanation: Optional[str] = None


class Quiz(BaseModel):
    id: PyObjectId = Field(default_factory=ObjectId, alias="_id")
    title: str
    description: Optional[str] = None
    questions: List[Question] = []
    passingScore: int = Field(70, ge=0, le=100)
    timeLimit: int = 30
    order: int
    createdOn: Optional[datetime] = Field(default_factory=Utils.utc_now)
    updatedOn: Optional[datetime] = Field(default_factory=Utils.utc_now)

    class Config:
        populate_by_name = True
        arbitrary_types_allowed = True
        json_encoders = {ObjectId: str}

    def question_ids(self) -> List[str]:
        return [str(question.id) for question in self.questions]

    def get_question(self, question_id: str) -> Optional[Question]:
        for question in self.questions:
            if str(question.id) == str(question_id):
                return question
        return None

    def summary(self) -> dict:
        return {
            "_id": str(self.id),
            "title": self.title,
            "description": self.description,
            "passingScore": self.passingScore,
            "timeLimit": self.timeLimit,
            "order": self.order,
            "totalQuestions": len(self.questions),
        }

    def public_view(self) -> dict:
        """Quiz as learners see it: no answer key, no explanations."""
        data = self.summary()
        data["questions"] = [
            {
                "_id": str(question.id),
                "questionText": question.questionText,
                "options": [{"text": option.text} for option in question.options],
            }
            for question in self.questions
        ]
        return data


class QuizCreate(BaseModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    questions: List[QuestionCreate] = Field(..., min_length=1)
    passingScore: int = Field(70, ge=0, le=100)
    timeLimit: int = Field(30, ge=1)
    order: int = Field(..., ge=1)

    def to_quiz(self) -> Quiz:
        return Quiz(**self.model_dump())


class QuizUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    questions: Optional[List[QuestionCreate]] = Field(None, min_length=1)
    passingScore: Optional[int] = Field(None, ge=0, le=100)
    timeLimit: Optional[int] = Field(None, ge=1)
    order: Optional[int] = Field(None, ge=1)


class Course(BaseModel):
    id: PyObjectId = Field(default_factory=ObjectId, alias="_id")
    title: str
    description: str
    instructor: str
    price: float
    category: str
    thumbnail: Optional[str] = None
    lessons: List[Lesson] = []
    quizzes: List[Quiz] = []
    enrolledStudents: List[PyObjectId] = []
    isPublished: bool = True
    duration: float = 0
    level: Level = "Beginner"
    createdOn: Optional[datetime] = Field(default_factory=Utils.utc_now)
    updatedOn: Optional[datetime] = Field(default_factory=Utils.utc_now)

    class Config:
        populate_by_name = True
        arbitrary_types_allowed = True
        json_encoders = {ObjectId: str}

    def get_lesson(self, lesson_id: str) -> Optional[Lesson]:
        for lesson in self.lessons:
            if str(lesson.id) == str(lesson_id):
                return lesson
        return None

    def get_quiz(self, quiz_id: str) -> Optional[Quiz]:
        for quiz in self.quizzes:
            if str(quiz.id) == str(quiz_id):
                return quiz
        return None

    def counts(self) -> dict:
        return {
            "totalLessons": len(self.lessons),
            "totalQuizzes": len(self.quizzes),
            "enrollmentCount": len(self.enrolledStudents),
        }

    def info(self) -> dict:
        return {
            "_id": str(self.id),
            "title": self.title,
            "description": self.description,
            "instructor": self.instructor,
            "price": self.price,
            "category": self.category,
            "thumbnail": self.thumbnail,
            "level": self.level,
            "duration": self.duration,
            "isPublished": self.isPublished,
        }

    def summary(self) -> dict:
        """Catalog listing entry: lessons without resources, quizzes without questions."""
        data = self.info()
        data["lessons"] = [
            lesson.model_dump(mode="json", by_alias=True, exclude={"resourceLinks"})
            for lesson in self.lessons
        ]
        data["quizzes"] = [quiz.summary() for quiz in self.quizzes]
        data["createdOn"] = self.createdOn.isoformat() if self.createdOn else None
        data.update(self.counts())
        return data

    def public_view(self) -> dict:
        data = self.info()
        data["lessons"] = [lesson.model_dump(mode="json", by_alias=True) for lesson in self.lessons]
        data["quizzes"] = [quiz.public_view() for quiz in self.quizzes]
        data.update(self.counts())
        return data

    def admin_view(self) -> dict:
        data = self.model_dump(mode="json", by_alias=True)
        data.update(self.counts())
        return data


class CourseCreate(BaseModel):
    title: str = Field(..., min_length=3, max_length=100)
    description: str = Field(..., min_length=10, max_length=1000)
    instructor: str = Field(..., min_length=1)
    price: float = Field(..., ge=0)
    category: str = Field(..., min_length=1)
    thumbnail: Optional[str] = None
    level: Level = "Beginner"
    duration: float = Field(0, ge=0)
    isPublished: bool = True
    lessons: List[LessonCreate] = []
    quizzes: List[QuizCreate] = []

    def to_course(self) -> Course:
        return Course(**self.model_dump())


class CourseUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=3, max_length=100)
    description: Optional[str] = Field(None, min_length=10, max_length=1000)
    instructor: Optional[str] = Field(None, min_length=1)
    price: Optional[float] = Field(None, ge=0)
    category: Optional[str] = Field(None, min_length=1)
    thumbnail: Optional[str] = None
    level: Optional[Level] = None
    duration: Optional[float] = Field(None, ge=0)
    isPublished: Optional[bool] = None
