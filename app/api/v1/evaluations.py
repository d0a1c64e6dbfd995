from __future__ import annotations

import json
import logging
from typing import Any, TypeVar

from fastapi import APIRouter, Depends, Header, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError

from app.api.v1.schemas import (
    CreateQuestionRequestSchema,
    ErrorResponseSchema,
    EvaluateAnswerRequestSchema,
    EvaluateAnswerResponseSchema,
    QuestionSchema,
    SubmitAnswerRequestSchema,
    SubmitAnswerResponseSchema,
)
from app.application.exceptions import QuestionLookupError, QuestionNotFoundError, RecordStoreError
from app.application.use_cases.create_question import CreateQuestionUseCase
from app.application.use_cases.evaluate_answer import EvaluateAnswerUseCase
from app.application.use_cases.submit_answer import SubmitAnswerUseCase
from app.wiring.dependencies import (
    get_create_question_use_case,
    get_evaluate_answer_use_case,
    get_submit_answer_use_case,
)


router = APIRouter()
logger = logging.getLogger(__name__)

SchemaT = TypeVar("SchemaT", bound=BaseModel)


class _BadRequest(Exception):
    def __init__(self, error: str, details: Any | None = None) -> None:
        super().__init__(error)
        self.error = error
        self.details = details


def _error(status_code: int, error: str, details: Any | None = None) -> JSONResponse:
    body = ErrorResponseSchema(error=error, details=details)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


async def _parse_body(request: Request, schema: type[SchemaT], error: str) -> SchemaT:
    body = await request.body()
    try:
        payload = json.loads(body.decode("utf-8")) if body else None
    except (UnicodeDecodeError, json.JSONDecodeError):
        raise _BadRequest("Invalid JSON body")
    if not isinstance(payload, dict):
        raise _BadRequest("Invalid JSON body")

    try:
        return schema.model_validate(payload)
    except ValidationError as e:
        details = [
            {"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]}
            for err in e.errors()
        ]
        raise _BadRequest(error, details)


@router.post("/evaluate-answer", response_model=EvaluateAnswerResponseSchema)
async def evaluate_answer(
    request: Request,
    x_user_id: str | None = Header(None),
    uc: EvaluateAnswerUseCase = Depends(get_evaluate_answer_use_case),
):
    try:
        req = await _parse_body(request, EvaluateAnswerRequestSchema, "Missing required fields")
    except _BadRequest as e:
        return _error(400, e.error, e.details)

    try:
        result = await run_in_threadpool(
            uc.execute,
            question_id=req.question_id,
            user_answer=req.user_answer,
            correct_answer=req.correct_answer,
            user_id=x_user_id,
        )
    except ValueError as e:
        return _error(400, "Missing required fields", str(e))
    except QuestionLookupError as e:
        logger.warning("Question lookup failed", extra={"question_id": req.question_id, "error": str(e)})
        return _error(500, "Failed to fetch question", e.details if e.details is not None else str(e))
    except RecordStoreError as e:
        logger.error("Score write-back failed", extra={"question_id": req.question_id, "user_id": x_user_id, "error": str(e)})
        return _error(500, "Internal server error", e.details if e.details is not None else str(e))
    except Exception as e:
        logger.exception("Error evaluating answer", extra={"question_id": req.question_id, "error": str(e)})
        return _error(500, "Internal server error", str(e))

    return EvaluateAnswerResponseSchema(score=result.score, feedback=result.feedback)


@router.post("/questions/{question_id}/responses", response_model=SubmitAnswerResponseSchema)
async def submit_answer(
    question_id: str,
    request: Request,
    x_user_id: str | None = Header(None),
    uc: SubmitAnswerUseCase = Depends(get_submit_answer_use_case),
):
    if not (x_user_id or "").strip():
        return _error(400, "Missing x-user-id header")

    try:
        req = await _parse_body(request, SubmitAnswerRequestSchema, "Invalid submission")
    except _BadRequest as e:
        return _error(400, e.error, e.details)

    try:
        outcome = await run_in_threadpool(
            uc.execute,
            question_id=question_id,
            user_id=x_user_id,
            answer=req.answer,
            selected_option=req.selected_option,
        )
    except ValueError as e:
        return _error(400, "Invalid submission", str(e))
    except QuestionNotFoundError as e:
        return _error(404, "Question not found", str(e))
    except QuestionLookupError as e:
        logger.warning("Question lookup failed", extra={"question_id": question_id, "error": str(e)})
        return _error(500, "Failed to fetch question", e.details if e.details is not None else str(e))
    except RecordStoreError as e:
        logger.error(
            "Record store failure during submission",
            extra={"question_id": question_id, "user_id": x_user_id, "error": str(e)},
        )
        return _error(500, "Internal server error", e.details if e.details is not None else str(e))
    except Exception as e:
        logger.exception("Error submitting answer", extra={"question_id": question_id, "error": str(e)})
        return _error(500, "Internal server error", str(e))

    body = SubmitAnswerResponseSchema(
        question_id=outcome.question_id,
        user_id=outcome.user_id,
        question_type=outcome.question_type.value,
        is_correct=outcome.is_correct,
        score=outcome.score,
        feedback=outcome.feedback,
        correct_answer=outcome.correct_answer,
    )
    return body


@router.post("/questions", response_model=QuestionSchema, status_code=201)
async def create_question(
    request: Request,
    x_user_id: str | None = Header(None),
    uc: CreateQuestionUseCase = Depends(get_create_question_use_case),
):
    try:
        req = await _parse_body(request, CreateQuestionRequestSchema, "Invalid question")
    except _BadRequest as e:
        return _error(400, e.error, e.details)

    try:
        question = await run_in_threadpool(
            uc.execute,
            question=req.question,
            question_type=req.type,
            correct_answer=req.correct_answer,
            options=req.options,
            subject=req.subject,
            bundle_id=req.bundle_id,
            created_by=(x_user_id or "").strip() or None,
            order_index=req.order_index,
            question_id=req.id,
        )
    except ValueError as e:
        return _error(400, "Invalid question", str(e))
    except RecordStoreError as e:
        logger.error("Failed to save question", extra={"user_id": x_user_id, "error": str(e)})
        return _error(500, "Internal server error", e.details if e.details is not None else str(e))
    except Exception as e:
        logger.exception("Error creating question", extra={"error": str(e)})
        return _error(500, "Internal server error", str(e))

    return QuestionSchema(
        id=question.id,
        question=question.question,
        type=question.type.value,
        correct_answer=question.correct_answer,
        options=list(question.options) or None,
        subject=question.subject,
        bundle_id=question.bundle_id,
        created_by=question.created_by,
        order_index=question.order_index,
    )
