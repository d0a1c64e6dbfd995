from dataclasses import dataclass

from app.domain.entities.question import QuestionType


@dataclass(frozen=True)
class SubmissionOutcome:
    question_id: str
    user_id: str
    question_type: QuestionType
    is_correct: bool
    score: int
    correct_answer: str
    feedback: str | None = None
