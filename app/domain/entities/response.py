from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class QuestionResponse:
    question_id: str
    user_id: str
    response: str
    score: int | None = None
    feedback: str | None = None
    created_at: str | None = None

    @staticmethod
    def from_record(data: dict[str, Any]) -> "QuestionResponse":
        score = data.get("score")
        return QuestionResponse(
            question_id=str(data["question_id"]),
            user_id=str(data["user_id"]),
            response=str(data.get("response") or ""),
            score=int(score) if score is not None else None,
            feedback=data.get("feedback"),
            created_at=data.get("created_at"),
        )

    def to_record(self) -> dict[str, Any]:
        return {
            "question_id": self.question_id,
            "user_id": self.user_id,
            "response": self.response,
            "score": self.score,
            "feedback": self.feedback,
            "created_at": self.created_at,
        }
