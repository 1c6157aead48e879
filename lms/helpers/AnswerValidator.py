from typing import List

from lms.helpers.Exceptions import IncompleteSubmission, InvalidInput, InvalidQuestionReference
from lms.schemas.Courses import Quiz
from lms.schemas.Progress import AnswerSubmission


class AnswerValidator:
    """
    Checks a submitted answer set against a quiz before it is scored.

    The submitted question ids must equal the quiz's question ids as a set,
    each question answered exactly once. Order does not matter.
    """

    @staticmethod
    def validate(quiz: Quiz, answers: List[AnswerSubmission]) -> None:
        question_ids = quiz.question_ids()
        if not question_ids:
            raise InvalidInput("Quiz has no questions")

        submitted_ids = [str(answer.questionId) for answer in answers]
        submitted = set(submitted_ids)

        missing = [question_id for question_id in question_ids if question_id not in submitted]
        if missing:
            raise IncompleteSubmission("All questions must be answered")

        known = set(question_ids)
        extra = [question_id for question_id in submitted_ids if question_id not in known]
        if extra:
            raise InvalidQuestionReference(f"Invalid question IDs found: {', '.join(extra)}")

        if len(submitted_ids) != len(submitted):
            seen = set()
            duplicates = []
            for question_id in submitted_ids:
                if question_id in seen and question_id not in duplicates:
                    duplicates.append(question_id)
                seen.add(question_id)
            raise InvalidQuestionReference(
                f"Question answered more than once: {', '.join(duplicates)}"
            )
