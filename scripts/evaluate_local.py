#!/usr/bin/env python3
from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

"""
Interactive local grading harness (no HTTP).

Usage:
  python3 scripts/evaluate_local.py "reference answer text"

Each line you type is graded against the reference answer through the same
SubmitAnswerUseCase the API uses, backed by an in-memory store.
"""

import argparse

from app.application.use_cases.evaluate_answer import EvaluateAnswerUseCase
from app.application.use_cases.submit_answer import SubmitAnswerUseCase
from app.application.utils.answer_scoring import compute_match_ratio, extract_keywords
from app.domain.entities.question import Question, QuestionType
from app.infrastructure.store.memory_store import MemoryRecordStore


def _build_use_case(reference: str) -> tuple[SubmitAnswerUseCase, MemoryRecordStore]:
    question = Question(
        id="local_question",
        question="Local practice question",
        type=QuestionType.open_ended,
        correct_answer=reference,
    )
    store = MemoryRecordStore(questions=[question])
    use_case = SubmitAnswerUseCase(
        questions=store,
        responses=store,
        evaluator=EvaluateAnswerUseCase(questions=store, responses=store),
    )
    return use_case, store


def main() -> None:
    parser = argparse.ArgumentParser(description="Grade free-text answers against a reference answer.")
    parser.add_argument("reference", help="Reference answer to grade against")
    parser.add_argument("--user", default="local_user_1", help="User id for stored responses")
    args = parser.parse_args()

    use_case, store = _build_use_case(args.reference)

    print("\nLocal Grading Harness")
    print("-" * 60)
    print(f"keywords: {extract_keywords(args.reference)}")
    print("Type an answer and press Enter. Commands: /stored, /quit")
    print("-" * 60)

    while True:
        try:
            answer = input("\n> ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nBye!")
            return

        if not answer:
            continue
        if answer.lower() in ("/quit", "/exit"):
            print("Bye!")
            return
        if answer.lower() == "/stored":
            print(store.get_response("local_question", args.user))
            continue

        outcome = use_case.execute("local_question", args.user, answer=answer)
        ratio = compute_match_ratio(answer, args.reference)
        print(f"score: {outcome.score}  ratio: {ratio:.2f}  correct: {outcome.is_correct}")
        print(f"feedback: {outcome.feedback}")


if __name__ == "__main__":
    main()
