"""
Tests for keyword-overlap answer scoring.
"""

from __future__ import annotations

import pytest

from app.application.utils.answer_scoring import (
    all_feedback_messages,
    compute_match_ratio,
    evaluate_answer,
    extract_keywords,
    score_for_ratio,
)


def test_mitochondria_answer_scores_four():
    """The word "that" is four letters long, so it is a keyword too: 4 of 6 matched."""
    reference = "The mitochondria is the powerhouse that produces energy for the cell"
    answer = "The mitochondria produces energy for the cell"

    assert extract_keywords(reference) == [
        "mitochondria",
        "powerhouse",
        "that",
        "produces",
        "energy",
        "cell",
    ]
    assert compute_match_ratio(answer, reference) == pytest.approx(4 / 6)

    result = evaluate_answer(answer, reference)
    assert result.score == 4
    assert result.feedback.startswith("Good answer")


def test_unrelated_answer_scores_one():
    """No keyword overlap maps to the lowest score."""
    reference = "Photosynthesis converts light energy into chemical energy"

    assert extract_keywords(reference) == [
        "photosynthesis",
        "converts",
        "light",
        "energy",
        "into",
        "chemical",
        "energy",
    ]
    result = evaluate_answer("I don't know", reference)
    assert result.score == 1
    assert result.feedback == "Your answer doesn't match the expected response. Review the material and try again."


def test_repeated_keywords_count_separately():
    """A repeated reference word counts once per occurrence."""
    reference = "energy energy water"
    assert compute_match_ratio("energy", reference) == pytest.approx(2 / 3)


def test_deterministic():
    reference = "Gravity pulls objects toward the earth"
    answer = "Objects fall toward the earth because of gravity"
    assert evaluate_answer(answer, reference) == evaluate_answer(answer, reference)


def test_case_insensitive():
    reference = "Gravity pulls objects toward the earth"
    answer = "gravity PULLS things down"
    assert evaluate_answer(answer, reference) == evaluate_answer(answer.upper(), reference.upper())
    assert evaluate_answer(answer, reference) == evaluate_answer(answer.lower(), reference.lower())


@pytest.mark.parametrize(
    "answer, reference",
    [
        ("x", "y"),
        ("a long answer", "is a be to"),
        ("everything matches here", "everything matches here"),
        ("half of words", "half words missing entirely"),
    ],
)
def test_score_in_range(answer, reference):
    result = evaluate_answer(answer, reference)
    assert result.score in {1, 2, 3, 4, 5}
    assert result.feedback in all_feedback_messages()


def test_more_keywords_never_lower_score():
    """Adding keyword occurrences to an answer never decreases its score."""
    reference = "Rivers carry sediment downstream toward deltas near oceans"
    words = ["rivers", "carry", "sediment", "downstream", "toward", "deltas", "near", "oceans"]

    previous = 0
    for i in range(len(words) + 1):
        score = evaluate_answer(" ".join(words[:i]), reference).score
        assert score >= previous
        previous = score
    assert previous == 5


def test_only_short_words_in_reference_scores_one():
    """With no keyword longer than three characters the ratio is 0, whatever the answer."""
    assert extract_keywords("is a be to") == []
    assert compute_match_ratio("is a be to", "is a be to") == 0.0
    assert evaluate_answer("is a be to", "is a be to").score == 1


def test_short_words_do_not_affect_ratio():
    reference = "the cat sat on a warm blanket"
    # Keywords are "warm" and "blanket"; the short words are absent from the answer.
    assert compute_match_ratio("warm blanket", reference) == 1.0
    assert evaluate_answer("warm blanket", reference).score == 5


def test_substring_matching():
    """Keywords match inside longer words, not only on word boundaries."""
    assert compute_match_ratio("I am contesting this", "testing") == 1.0
    assert compute_match_ratio("the classroom", "class") == 1.0


@pytest.mark.parametrize(
    "ratio, expected",
    [
        (1.0, 5),
        (0.81, 5),
        (0.8, 4),
        (0.61, 4),
        (0.6, 3),
        (0.41, 3),
        (0.4, 2),
        (0.21, 2),
        (0.2, 1),
        (0.0, 1),
    ],
)
def test_threshold_bands(ratio, expected):
    assert score_for_ratio(ratio).score == expected


def test_each_score_has_distinct_feedback():
    messages = {score_for_ratio(ratio).feedback for ratio in (1.0, 0.7, 0.5, 0.3, 0.0)}
    assert messages == set(all_feedback_messages())
    assert len(messages) == 5


def test_passing_threshold():
    """Scores above 3 count as a correct answer."""
    assert score_for_ratio(0.7).is_correct is True
    assert score_for_ratio(0.5).is_correct is False
