from __future__ import annotations

import logging
from typing import Any

import httpx

from app.application.exceptions import RecordStoreError
from app.application.ports.question_store import QuestionStorePort
from app.application.ports.response_store import ResponseStorePort
from app.core.config import settings
from app.domain.entities.question import Question
from app.domain.entities.response import QuestionResponse


QUESTIONS_TABLE = "questions"
RESPONSES_TABLE = "question_responses"


class SupabaseRecordStore(QuestionStorePort, ResponseStorePort):
    """Record store backed by the Supabase PostgREST API, authenticated with the service-role key."""

    def __init__(
        self,
        url: str | None = None,
        service_key: str | None = None,
        timeout: float | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self._url = (url or settings.SUPABASE_URL or "").rstrip("/")
        self._service_key = service_key or settings.SUPABASE_SERVICE_ROLE_KEY
        self._client = client or httpx.Client(timeout=timeout or settings.SUPABASE_TIMEOUT_SECONDS)
        self._logger = logging.getLogger(__name__)

        if not self._url:
            raise ValueError("SUPABASE_URL is required for the supabase record store")
        if not self._service_key:
            raise ValueError("SUPABASE_SERVICE_ROLE_KEY is required for the supabase record store")

    def _headers(self, prefer: str | None = None) -> dict[str, str]:
        headers = {
            "apikey": self._service_key,
            "Authorization": f"Bearer {self._service_key}",
            "Content-Type": "application/json",
        }
        if prefer:
            headers["Prefer"] = prefer
        return headers

    def _request(
        self,
        method: str,
        table: str,
        params: dict[str, str] | None = None,
        json: Any = None,
        prefer: str | None = None,
    ) -> Any:
        url = f"{self._url}/rest/v1/{table}"
        try:
            resp = self._client.request(method, url, params=params, json=json, headers=self._headers(prefer))
        except httpx.HTTPError as e:
            self._logger.error("Record store request failed", extra={"table": table, "error": str(e)})
            raise RecordStoreError(f"{method} {table} failed", details=str(e)) from e

        if resp.status_code >= 400:
            try:
                details: Any = resp.json()
            except ValueError:
                details = resp.text
            self._logger.error(
                "Record store rejected request",
                extra={"table": table, "status": resp.status_code, "error": details},
            )
            raise RecordStoreError(f"{method} {table} returned {resp.status_code}", details=details)

        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as e:
            raise RecordStoreError(f"{method} {table} returned invalid JSON", details=resp.text) from e

    def get_question(self, question_id: str) -> Question | None:
        rows = self._request("GET", QUESTIONS_TABLE, params={"id": f"eq.{question_id}", "select": "*"})
        if not rows:
            return None
        try:
            return Question.from_record(rows[0])
        except (KeyError, ValueError) as e:
            raise RecordStoreError(f"Malformed question record {question_id}", details=str(e)) from e

    def save_question(self, question: Question) -> None:
        self._request(
            "POST",
            QUESTIONS_TABLE,
            json=[question.to_record()],
            prefer="resolution=merge-duplicates,return=minimal",
        )

    def save_response(self, response: QuestionResponse) -> QuestionResponse:
        # question_responses has no unique key on (question_id, user_id); replace by delete + insert.
        self._request("DELETE", RESPONSES_TABLE, params=_response_filter(response.question_id, response.user_id))
        payload = {k: v for k, v in response.to_record().items() if v is not None}
        rows = self._request("POST", RESPONSES_TABLE, json=[payload], prefer="return=representation")
        if rows:
            return QuestionResponse.from_record(rows[0])
        return response

    def get_response(self, question_id: str, user_id: str) -> QuestionResponse | None:
        params = _response_filter(question_id, user_id)
        params["select"] = "*"
        rows = self._request("GET", RESPONSES_TABLE, params=params)
        if not rows:
            return None
        return QuestionResponse.from_record(rows[0])

    def update_evaluation(self, question_id: str, user_id: str, score: int, feedback: str | None) -> int:
        rows = self._request(
            "PATCH",
            RESPONSES_TABLE,
            params=_response_filter(question_id, user_id),
            json={"score": score, "feedback": feedback},
            prefer="return=representation",
        )
        return len(rows or [])


def _response_filter(question_id: str, user_id: str) -> dict[str, str]:
    return {"question_id": f"eq.{question_id}", "user_id": f"eq.{user_id}"}
