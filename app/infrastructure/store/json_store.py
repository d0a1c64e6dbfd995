from __future__ import annotations

import json
import logging
import threading
from dataclasses import replace
from pathlib import Path
from typing import Any

from app.application.exceptions import RecordStoreError
from app.application.ports.question_store import QuestionStorePort
from app.application.ports.response_store import ResponseStorePort
from app.domain.entities.question import Question
from app.domain.entities.response import QuestionResponse


logger = logging.getLogger(__name__)

QUESTIONS_TABLE = "questions"
RESPONSES_TABLE = "question_responses"


class JsonRecordStore(QuestionStorePort, ResponseStorePort):
    """
    File-backed store for local development.

    Each table lives in its own JSON document under data_dir:
    questions.json maps question id -> record, question_responses.json holds
    a list of response records.
    """

    def __init__(self, data_dir: str = "./data/records") -> None:
        self._data_dir = Path(data_dir)
        self._data_dir.mkdir(parents=True, exist_ok=True)
        self._locks: dict[str, threading.Lock] = {
            QUESTIONS_TABLE: threading.Lock(),
            RESPONSES_TABLE: threading.Lock(),
        }

    def _get_file_path(self, table: str) -> Path:
        return self._data_dir / f"{table}.json"

    def _load_table(self, table: str, default: Any) -> Any:
        """Load a table document, return default if missing or corrupted."""
        file_path = self._get_file_path(table)
        if not file_path.exists():
            return default

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (ValueError, OSError) as e:
            logger.warning("Unreadable table file, treating as empty", extra={"table": table, "error": str(e)})
            return default

        if not isinstance(data, type(default)):
            logger.warning("Unexpected table layout, treating as empty", extra={"table": table})
            return default
        return data

    def _save_table(self, table: str, data: Any) -> None:
        """Save a table document atomically."""
        file_path = self._get_file_path(table)
        temp_path = file_path.with_suffix(".json.tmp")

        try:
            with open(temp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            temp_path.replace(file_path)
        except OSError as e:
            if temp_path.exists():
                temp_path.unlink(missing_ok=True)
            raise RecordStoreError(f"Failed to write {table}", details=str(e)) from e

    def _load_responses(self) -> list[dict[str, Any]]:
        rows = self._load_table(RESPONSES_TABLE, [])
        kept = [row for row in rows if isinstance(row, dict)]
        if len(kept) != len(rows):
            logger.warning("Skipping malformed response rows", extra={"table": RESPONSES_TABLE})
        return kept

    def get_question(self, question_id: str) -> Question | None:
        with self._locks[QUESTIONS_TABLE]:
            records = self._load_table(QUESTIONS_TABLE, {})
        record = records.get(question_id)
        if record is None:
            return None
        try:
            return Question.from_record(record)
        except (KeyError, TypeError, ValueError) as e:
            raise RecordStoreError(f"Malformed question record {question_id}", details=str(e)) from e

    def save_question(self, question: Question) -> None:
        with self._locks[QUESTIONS_TABLE]:
            records = self._load_table(QUESTIONS_TABLE, {})
            records[question.id] = question.to_record()
            self._save_table(QUESTIONS_TABLE, records)

    def save_response(self, response: QuestionResponse) -> QuestionResponse:
        with self._locks[RESPONSES_TABLE]:
            rows = [
                row
                for row in self._load_responses()
                if (row.get("question_id"), row.get("user_id")) != (response.question_id, response.user_id)
            ]
            rows.append(response.to_record())
            self._save_table(RESPONSES_TABLE, rows)
        return response

    def get_response(self, question_id: str, user_id: str) -> QuestionResponse | None:
        with self._locks[RESPONSES_TABLE]:
            rows = self._load_responses()
        for row in rows:
            if row.get("question_id") == question_id and row.get("user_id") == user_id:
                return QuestionResponse.from_record(row)
        return None

    def update_evaluation(self, question_id: str, user_id: str, score: int, feedback: str | None) -> int:
        updated = 0
        with self._locks[RESPONSES_TABLE]:
            rows = self._load_responses()
            for i, row in enumerate(rows):
                if row.get("question_id") == question_id and row.get("user_id") == user_id:
                    current = QuestionResponse.from_record(row)
                    rows[i] = replace(current, score=score, feedback=feedback).to_record()
                    updated += 1
            if updated:
                self._save_table(RESPONSES_TABLE, rows)
        return updated
