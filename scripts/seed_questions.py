#!/usr/bin/env python3
from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

"""
Load questions from a JSON file into the configured record store.

Usage:
  STORE_PROVIDER=json python3 scripts/seed_questions.py questions.json

The file holds a list of objects shaped like the POST /questions body
(question, type, correctAnswer, options, subject, bundleId, orderIndex, id).
"""

import argparse
import json

from pydantic import ValidationError

from app.api.v1.schemas import CreateQuestionRequestSchema
from app.wiring.dependencies import get_create_question_use_case


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed the question store from a JSON file.")
    parser.add_argument("path", help="JSON file with a list of questions")
    parser.add_argument("--author", default=None, help="created_by for every seeded question")
    args = parser.parse_args()

    items = json.loads(Path(args.path).read_text(encoding="utf-8"))
    if not isinstance(items, list):
        sys.exit("Expected a JSON list of questions.")

    use_case = get_create_question_use_case()
    failed = 0
    for index, item in enumerate(items):
        try:
            req = CreateQuestionRequestSchema.model_validate(item)
            question = use_case.execute(
                question=req.question,
                question_type=req.type,
                correct_answer=req.correct_answer,
                options=req.options,
                subject=req.subject,
                bundle_id=req.bundle_id,
                created_by=args.author,
                order_index=req.order_index,
                question_id=req.id,
            )
        except (ValidationError, ValueError) as e:
            failed += 1
            print(f"[{index}] skipped: {e}")
            continue
        print(f"[{index}] saved {question.id} ({question.type.value})")

    print(f"\nSeeded {len(items) - failed} of {len(items)} questions.")
    if failed:
        sys.exit(1)


if __name__ == "__main__":
    main()
