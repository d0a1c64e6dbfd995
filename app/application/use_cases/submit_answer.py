import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from app.application.exceptions import QuestionNotFoundError
from app.application.ports.question_store import QuestionStorePort
from app.application.ports.response_store import ResponseStorePort
from app.application.use_cases.evaluate_answer import EvaluateAnswerUseCase
from app.domain.entities.question import Question, QuestionType
from app.domain.entities.response import QuestionResponse
from app.domain.entities.submission import SubmissionOutcome


logger = logging.getLogger(__name__)


@dataclass
class SubmitAnswerUseCase:
    """
    Student-side flow: store the raw response, grade it, then write the grade back.

    Multiple-choice answers are graded by exact option match (score 1 or 0).
    Open-ended answers go through EvaluateAnswerUseCase; a score above 3 counts
    as correct. If grading fails the raw response stays stored without a score.
    """

    questions: QuestionStorePort
    responses: ResponseStorePort
    evaluator: EvaluateAnswerUseCase

    def execute(
        self,
        question_id: str,
        user_id: str,
        answer: str | None = None,
        selected_option: int | None = None,
    ) -> SubmissionOutcome:
        if not (user_id or "").strip():
            raise ValueError("A user id is required to submit an answer.")

        question = self.questions.get_question(question_id)
        if question is None:
            raise QuestionNotFoundError(question_id)

        if question.type == QuestionType.multiple_choice:
            return self._submit_choice(question, user_id, selected_option)
        return self._submit_open_ended(question, user_id, answer)

    def _submit_choice(self, question: Question, user_id: str, selected_option: int | None) -> SubmissionOutcome:
        if selected_option is None:
            raise ValueError("selected_option is required for multiple-choice questions.")
        if not 0 <= selected_option < len(question.options):
            raise ValueError(
                f"selected_option must be between 0 and {len(question.options) - 1}, got {selected_option}."
            )

        chosen = question.options[selected_option]
        is_correct = chosen == question.correct_answer
        score = 1 if is_correct else 0

        self.responses.save_response(
            QuestionResponse(
                question_id=question.id,
                user_id=user_id,
                response=chosen,
                score=score,
                created_at=_now_iso(),
            )
        )
        logger.info(
            "Multiple-choice answer graded",
            extra={"question_id": question.id, "user_id": user_id, "score": score},
        )

        return SubmissionOutcome(
            question_id=question.id,
            user_id=user_id,
            question_type=question.type,
            is_correct=is_correct,
            score=score,
            correct_answer=question.correct_answer,
        )

    def _submit_open_ended(self, question: Question, user_id: str, answer: str | None) -> SubmissionOutcome:
        if not (answer or "").strip():
            raise ValueError("An answer is required for open-ended questions.")
        if not question.correct_answer.strip():
            raise ValueError(f"Question {question.id} has no reference answer to grade against.")

        # The raw answer must be stored before it is graded.
        self.responses.save_response(
            QuestionResponse(
                question_id=question.id,
                user_id=user_id,
                response=answer,
                created_at=_now_iso(),
            )
        )

        result = self.evaluator.execute(
            question_id=question.id,
            user_answer=answer,
            correct_answer=question.correct_answer,
            user_id=user_id,
        )

        return SubmissionOutcome(
            question_id=question.id,
            user_id=user_id,
            question_type=question.type,
            is_correct=result.is_correct,
            score=result.score,
            correct_answer=question.correct_answer,
            feedback=result.feedback,
        )


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()
