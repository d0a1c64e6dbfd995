from __future__ import annotations

from app.domain.entities.evaluation import EvaluationResult

MIN_KEYWORD_LENGTH = 4

# (exclusive lower bound on match ratio, score, feedback), checked top-down.
SCORE_BANDS = (
    (0.8, 5, "Excellent answer! You've covered all the key points accurately."),
    (0.6, 4, "Good answer with most key points covered. There's room for a bit more detail."),
    (0.4, 3, "Partially correct. You've covered some important points, but missed others."),
    (0.2, 2, "Your answer contains some relevant information but misses most key points."),
)

FALLBACK_SCORE = 1
FALLBACK_FEEDBACK = "Your answer doesn't match the expected response. Review the material and try again."


def extract_keywords(reference: str) -> list[str]:
    """
    Split the lower-cased reference answer on whitespace and keep tokens
    of at least MIN_KEYWORD_LENGTH characters. Repeated words are kept,
    each one counts towards the ratio.
    """
    return [word for word in reference.lower().split() if len(word) >= MIN_KEYWORD_LENGTH]


def compute_match_ratio(user_answer: str, correct_answer: str) -> float:
    keywords = extract_keywords(correct_answer)
    if not keywords:
        return 0.0
    normalized = user_answer.lower()
    # Plain containment: "class" matches inside "classroom".
    matches = sum(1 for keyword in keywords if keyword in normalized)
    return matches / len(keywords)


def score_for_ratio(match_ratio: float) -> EvaluationResult:
    for lower_bound, score, feedback in SCORE_BANDS:
        if match_ratio > lower_bound:
            return EvaluationResult(score=score, feedback=feedback)
    return EvaluationResult(score=FALLBACK_SCORE, feedback=FALLBACK_FEEDBACK)


def evaluate_answer(user_answer: str, correct_answer: str) -> EvaluationResult:
    return score_for_ratio(compute_match_ratio(user_answer, correct_answer))


def all_feedback_messages() -> tuple[str, ...]:
    return tuple(feedback for _, _, feedback in SCORE_BANDS) + (FALLBACK_FEEDBACK,)
