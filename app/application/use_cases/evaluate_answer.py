import logging
from dataclasses import dataclass

from app.application.exceptions import QuestionLookupError, QuestionNotFoundError, RecordStoreError
from app.application.ports.question_store import QuestionStorePort
from app.application.ports.response_store import ResponseStorePort
from app.application.utils.answer_scoring import compute_match_ratio, score_for_ratio
from app.domain.entities.evaluation import EvaluationResult


logger = logging.getLogger(__name__)


@dataclass
class EvaluateAnswerUseCase:
    questions: QuestionStorePort
    responses: ResponseStorePort

    def execute(
        self,
        question_id: str,
        user_answer: str,
        correct_answer: str,
        user_id: str | None = None,
    ) -> EvaluationResult:
        missing = [
            name
            for name, value in (
                ("question_id", question_id),
                ("user_answer", user_answer),
                ("correct_answer", correct_answer),
            )
            if not (value or "").strip()
        ]
        if missing:
            raise ValueError(f"Missing required fields: {missing}")

        try:
            question = self.questions.get_question(question_id)
        except RecordStoreError as e:
            raise QuestionLookupError(question_id, details=e.details if e.details is not None else str(e)) from e
        if question is None:
            raise QuestionNotFoundError(question_id)

        match_ratio = compute_match_ratio(user_answer, correct_answer)
        result = score_for_ratio(match_ratio)
        logger.info(
            "Answer evaluated",
            extra={"question_id": question_id, "score": result.score, "match_ratio": round(match_ratio, 3)},
        )

        if not (user_id or "").strip():
            logger.warning("No user id supplied; score not written back", extra={"question_id": question_id})
            return result

        updated = self.responses.update_evaluation(
            question_id,
            user_id,
            score=result.score,
            feedback=result.feedback,
        )
        if updated == 0:
            logger.warning(
                "No stored response to attach score to",
                extra={"question_id": question_id, "user_id": user_id},
            )

        return result
