import logging
import uuid
from dataclasses import dataclass
from typing import Sequence

from app.application.ports.question_store import QuestionStorePort
from app.domain.entities.question import Question, QuestionType


logger = logging.getLogger(__name__)

MIN_OPTIONS = 2


@dataclass
class CreateQuestionUseCase:
    """
    Author a question so students can answer it.

    Multiple-choice questions need at least two non-blank options, and the
    correct answer must be one of them. Open-ended questions need a reference
    answer to grade against; any options sent with them are dropped.
    """

    questions: QuestionStorePort

    def execute(
        self,
        question: str,
        question_type: QuestionType,
        correct_answer: str,
        options: Sequence[str] | None = None,
        subject: str | None = None,
        bundle_id: str | None = None,
        created_by: str | None = None,
        order_index: int | None = None,
        question_id: str | None = None,
    ) -> Question:
        if not (question or "").strip():
            raise ValueError("Question text is required.")
        if not (correct_answer or "").strip():
            raise ValueError("A correct answer is required.")

        if question_type == QuestionType.multiple_choice:
            options = tuple(options or ())
            if len(options) < MIN_OPTIONS:
                raise ValueError(f"Multiple-choice questions need at least {MIN_OPTIONS} options.")
            if any(not option.strip() for option in options):
                raise ValueError("All options must have content.")
            if correct_answer not in options:
                raise ValueError("The correct answer must be one of the options.")
        else:
            options = ()

        created = Question(
            id=(question_id or "").strip() or str(uuid.uuid4()),
            question=question,
            type=question_type,
            correct_answer=correct_answer,
            options=options,
            subject=(subject or "").strip() or None,
            bundle_id=bundle_id,
            created_by=created_by,
            order_index=order_index,
        )
        self.questions.save_question(created)
        logger.info("Question created", extra={"question_id": created.id, "user_id": created_by})
        return created
