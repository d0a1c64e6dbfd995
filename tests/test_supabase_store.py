"""
Tests for the Supabase REST record store using httpx.MockTransport.
"""

from __future__ import annotations

import json

import httpx
import pytest

from app.application.exceptions import RecordStoreError
from app.domain.entities.question import QuestionType
from app.domain.entities.response import QuestionResponse
from app.infrastructure.supabase.rest_store import SupabaseRecordStore


BASE_URL = "https://project.supabase.co"
SERVICE_KEY = "service-role-key"


def _store(handler) -> SupabaseRecordStore:
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return SupabaseRecordStore(url=BASE_URL + "/", service_key=SERVICE_KEY, client=client)


def test_get_question_queries_by_id():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json=[
                {
                    "id": "q1",
                    "question": "Pick pi",
                    "type": "multiple-choice",
                    "correct_answer": "3.14",
                    "options": ["3.12", "3.14"],
                    "created_by": "admin",
                    "bundle_id": None,
                }
            ],
        )

    question = _store(handler).get_question("q1")

    assert question.type == QuestionType.multiple_choice
    assert question.options == ("3.12", "3.14")

    request = seen[0]
    assert request.method == "GET"
    assert request.url.path == "/rest/v1/questions"
    assert request.url.params["id"] == "eq.q1"
    assert request.headers["apikey"] == SERVICE_KEY
    assert request.headers["authorization"] == f"Bearer {SERVICE_KEY}"


def test_get_question_missing_returns_none():
    store = _store(lambda request: httpx.Response(200, json=[]))
    assert store.get_question("nope") is None


def test_update_evaluation_patches_by_question_and_user():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json=[{"question_id": "q1", "user_id": "u1", "response": "x", "score": 4, "feedback": "Good"}],
        )

    updated = _store(handler).update_evaluation("q1", "u1", score=4, feedback="Good")

    assert updated == 1
    request = seen[0]
    assert request.method == "PATCH"
    assert request.url.path == "/rest/v1/question_responses"
    assert request.url.params["question_id"] == "eq.q1"
    assert request.url.params["user_id"] == "eq.u1"
    assert request.headers["prefer"] == "return=representation"
    assert json.loads(request.content) == {"score": 4, "feedback": "Good"}


def test_update_evaluation_with_no_matching_row():
    store = _store(lambda request: httpx.Response(200, json=[]))
    assert store.update_evaluation("q1", "u1", score=2, feedback="x") == 0


def test_save_response_replaces_existing_row():
    methods: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        methods.append(request.method)
        if request.method == "DELETE":
            return httpx.Response(204)
        body = json.loads(request.content)
        assert body == [{"question_id": "q1", "user_id": "u1", "response": "my answer"}]
        return httpx.Response(201, json=[{**body[0], "created_at": "2024-01-26T09:00:00+00:00"}])

    stored = _store(handler).save_response(QuestionResponse(question_id="q1", user_id="u1", response="my answer"))

    assert methods == ["DELETE", "POST"]
    assert stored.created_at == "2024-01-26T09:00:00+00:00"


def test_error_status_raises_record_store_error():
    store = _store(lambda request: httpx.Response(401, json={"message": "Invalid API key"}))

    with pytest.raises(RecordStoreError) as exc_info:
        store.get_question("q1")

    assert exc_info.value.details == {"message": "Invalid API key"}


def test_transport_failure_raises_record_store_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(RecordStoreError):
        _store(handler).update_evaluation("q1", "u1", score=1, feedback="x")


def test_requires_url_and_key():
    with pytest.raises(ValueError):
        SupabaseRecordStore(url="", service_key=SERVICE_KEY, client=httpx.Client())
    with pytest.raises(ValueError):
        SupabaseRecordStore(url=BASE_URL, service_key="", client=httpx.Client())
