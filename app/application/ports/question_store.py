from abc import ABC, abstractmethod

from app.domain.entities.question import Question


class QuestionStorePort(ABC):
    @abstractmethod
    def get_question(self, question_id: str) -> Question | None:
        """
        Look up a question by id.

        Returns None when the id is unknown. Backend failures raise RecordStoreError.
        """
        raise NotImplementedError

    @abstractmethod
    def save_question(self, question: Question) -> None:
        raise NotImplementedError
