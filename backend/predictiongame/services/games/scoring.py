from dataclasses import dataclass
from typing import Iterable

from . import EXPECTED_CONFIDENCE


def is_correct(answer) -> bool:
    """Return True if the submitted range captures any part of the true range.

    Bounds are inclusive, so touching the true range at a single point counts.
    Inverted submissions (lower > upper) are evaluated as given.
    """
    q_low = answer.question.bound_low
    q_high = answer.question.bound_high
    a_low = answer.lower_bound
    a_high = answer.upper_bound
    return (
        (a_low >= q_low and a_high <= q_high)
        or (a_low <= q_low and a_high >= q_low)
        or (a_low <= q_high and a_high >= q_high)
    )


@dataclass(frozen=True)
class ScoreCard:
    correct: int
    total: int
    expected_confidence: float = EXPECTED_CONFIDENCE

    @property
    def hit_rate(self) -> float:
        if not self.total:
            return 0.0
        return self.correct / self.total

    @property
    def calibration_gap(self) -> float:
        """Positive when the player was under-confident (ranges too wide)."""
        return self.hit_rate - self.expected_confidence

    def to_dict(self):
        return {
            'correct': self.correct,
            'total': self.total,
            'hit_rate': self.hit_rate,
            'expected_confidence': self.expected_confidence,
            'calibration_gap': self.calibration_gap,
        }


def score_answers(answers: Iterable) -> ScoreCard:
    """Count the correct answers of a round."""
    answers = list(answers)
    return ScoreCard(
        correct=sum(1 for a in answers if is_correct(a)),
        total=len(answers),
    )
