from abc import ABC, abstractmethod

from app.domain.entities.response import QuestionResponse


class ResponseStorePort(ABC):
    @abstractmethod
    def save_response(self, response: QuestionResponse) -> QuestionResponse:
        """
        Store a raw response keyed by (question_id, user_id).

        An existing row for the same pair is replaced, including any previous score.
        Returns the stored row.
        """
        raise NotImplementedError

    @abstractmethod
    def get_response(self, question_id: str, user_id: str) -> QuestionResponse | None:
        raise NotImplementedError

    @abstractmethod
    def update_evaluation(self, question_id: str, user_id: str, score: int, feedback: str | None) -> int:
        """
        Write score and feedback onto the row for (question_id, user_id).

        Returns the number of rows updated (0 when no response was stored).
        Writing the same values twice leaves the row unchanged.
        """
        raise NotImplementedError
