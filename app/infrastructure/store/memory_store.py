from __future__ import annotations

import threading
from dataclasses import replace

from app.application.ports.question_store import QuestionStorePort
from app.application.ports.response_store import ResponseStorePort
from app.domain.entities.question import Question
from app.domain.entities.response import QuestionResponse


class MemoryRecordStore(QuestionStorePort, ResponseStorePort):
    def __init__(self, questions: list[Question] | None = None) -> None:
        self._questions: dict[str, Question] = {q.id: q for q in (questions or [])}
        self._responses: dict[tuple[str, str], QuestionResponse] = {}
        self._lock = threading.Lock()

    def get_question(self, question_id: str) -> Question | None:
        return self._questions.get(question_id)

    def save_question(self, question: Question) -> None:
        with self._lock:
            self._questions[question.id] = question

    def save_response(self, response: QuestionResponse) -> QuestionResponse:
        with self._lock:
            self._responses[(response.question_id, response.user_id)] = response
        return response

    def get_response(self, question_id: str, user_id: str) -> QuestionResponse | None:
        return self._responses.get((question_id, user_id))

    def update_evaluation(self, question_id: str, user_id: str, score: int, feedback: str | None) -> int:
        key = (question_id, user_id)
        with self._lock:
            current = self._responses.get(key)
            if current is None:
                return 0
            self._responses[key] = replace(current, score=score, feedback=feedback)
        return 1
