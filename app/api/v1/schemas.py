from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, field_validator

from app.domain.entities.question import QuestionType


class EvaluateAnswerRequestSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    question_id: StrictStr = Field(alias="questionId")
    user_answer: StrictStr = Field(alias="userAnswer")
    correct_answer: StrictStr = Field(alias="correctAnswer")

    @field_validator("question_id", "user_answer", "correct_answer")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value


class EvaluateAnswerResponseSchema(BaseModel):
    score: int
    feedback: str


class SubmitAnswerRequestSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    answer: StrictStr | None = None
    selected_option: StrictInt | None = Field(default=None, alias="selectedOption")


class SubmitAnswerResponseSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    question_id: str = Field(alias="questionId")
    user_id: str = Field(alias="userId")
    question_type: str = Field(alias="questionType")
    is_correct: bool = Field(alias="isCorrect")
    score: int
    feedback: str | None = None
    correct_answer: str = Field(alias="correctAnswer")


class ErrorResponseSchema(BaseModel):
    error: str
    details: Any | None = None


class CreateQuestionRequestSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: StrictStr | None = None
    question: StrictStr
    type: QuestionType
    correct_answer: StrictStr = Field(alias="correctAnswer")
    options: list[StrictStr] | None = None
    subject: StrictStr | None = None
    bundle_id: StrictStr | None = Field(default=None, alias="bundleId")
    order_index: StrictInt | None = Field(default=None, alias="orderIndex")


class QuestionSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    question: str
    type: str
    correct_answer: str = Field(alias="correctAnswer")
    options: list[str] | None = None
    subject: str | None = None
    bundle_id: str | None = Field(default=None, alias="bundleId")
    created_by: str | None = Field(default=None, alias="createdBy")
    order_index: int | None = Field(default=None, alias="orderIndex")
