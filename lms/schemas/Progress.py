from datetime import datetime
from typing import Any, List, Optional

from bson import ObjectId
from pydantic import BaseModel, Field

from lms.helpers.Utilities import Utils
from lms.schemas.PyObjectId import PyObjectId


class LessonProgress(BaseModel):
    id: PyObjectId = Field(default_factory=ObjectId, alias="_id")
    lessonId: PyObjectId
    isCompleted: bool = False
    completedAt: Optional[datetime] = None
    watchTime: float = 0

    class Config:
        populate_by_name = True
        arbitrary_types_allowed = True
        json_encoders = {ObjectId: str}


class AnswerRecord(BaseModel):
    questionId: PyObjectId
    selectedOption: int
    isCorrect: bool

    class Config:
        arbitrary_types_allowed = True
        json_encoders = {ObjectId: str}


class QuizAttempt(BaseModel):
    id: PyObjectId = Field(default_factory=ObjectId, alias="_id")
    quizId: PyObjectId
    answers: List[AnswerRecord] = []
    score: int = Field(..., ge=0, le=100)
    totalQuestions: int
    correctAnswers: int
    timeSpent: int = 0
    isPassed: bool = False
    attemptedAt: datetime = Field(default_factory=Utils.utc_now)

    class Config:
        populate_by_name = True
        arbitrary_types_allowed = True
        json_encoders = {ObjectId: str}


class Progress(BaseModel):
    id: PyObjectId = Field(default_factory=ObjectId, alias="_id")
    user: PyObjectId
    course: PyObjectId
    enrolledAt: datetime = Field(default_factory=Utils.utc_now)
    lastAccessedAt: datetime = Field(default_factory=Utils.utc_now)
    lessonProgress: List[LessonProgress] = []
    quizAttempts: List[QuizAttempt] = []
    overallProgress: int = Field(0, ge=0, le=100)
    isCompleted: bool = False
    completedAt: Optional[datetime] = None
    certificateIssued: bool = False
    createdOn: Optional[datetime] = Field(default_factory=Utils.utc_now)
    updatedOn: Optional[datetime] = Field(default_factory=Utils.utc_now)

    class Config:
        populate_by_name = True
        arbitrary_types_allowed = True
        json_encoders = {ObjectId: str}


class AnswerSubmission(BaseModel):
    questionId: str
    selectedOption: int = Field(..., ge=0)


class QuizSubmission(BaseModel):
    answers: List[AnswerSubmission] = Field(..., min_length=1)
    timeSpent: Optional[int] = Field(None, ge=0)


class LessonCompleteRequest(BaseModel):
    # negative or non-numeric values are ignored by ProgressTracker
    watchTime: Any = None


class WatchTimeUpdate(BaseModel):
    # passed through unchanged so ProgressTracker can reject strings and booleans
    watchTime: Any = None
