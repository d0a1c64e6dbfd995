from dataclasses import dataclass

PASSING_SCORE = 3


@dataclass(frozen=True)
class EvaluationResult:
    score: int
    feedback: str

    @property
    def is_correct(self) -> bool:
        return self.score > PASSING_SCORE
