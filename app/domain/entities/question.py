from dataclasses import dataclass
from enum import Enum
from typing import Any, Tuple


class QuestionType(str, Enum):
    multiple_choice = "multiple-choice"
    open_ended = "open-ended"


@dataclass(frozen=True)
class Question:
    id: str
    question: str
    type: QuestionType
    correct_answer: str
    options: Tuple[str, ...] = ()
    subject: str | None = None
    bundle_id: str | None = None
    created_by: str | None = None
    order_index: int | None = None

    @staticmethod
    def from_record(data: dict[str, Any]) -> "Question":
        return Question(
            id=str(data["id"]),
            question=str(data.get("question") or ""),
            type=QuestionType(data.get("type") or QuestionType.open_ended.value),
            correct_answer=str(data.get("correct_answer") or ""),
            options=tuple(str(o) for o in (data.get("options") or [])),
            subject=data.get("subject"),
            bundle_id=data.get("bundle_id"),
            created_by=data.get("created_by"),
            order_index=data.get("order_index"),
        )

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "question": self.question,
            "type": self.type.value,
            "correct_answer": self.correct_answer,
            "options": list(self.options) or None,
            "subject": self.subject,
            "bundle_id": self.bundle_id,
            "created_by": self.created_by,
            "order_index": self.order_index,
        }
