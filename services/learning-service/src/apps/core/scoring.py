"""
Scoring rules shared by grading, the result ledger and certificates.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

# Minimum percentage for a quiz attempt to pass. Fixed for every lesson.
PASSING_SCORE = 70

# Minimum overall course score for certificate eligibility.
CERTIFICATE_PASSING_SCORE = 70


def round_half_up(value, places: int = 0) -> Decimal:
    """Round a number half away from zero (0.5 -> 1, 2.345 -> 2.35)."""
    quantum = Decimal(1).scaleb(-places)
    return Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)


def calculate_score(correct_answers: int, total_questions: int) -> int:
    """Integer percentage of correct answers, rounded half-up."""
    if total_questions <= 0:
        raise ValueError("total_questions must be positive")
    percentage = Decimal(100 * correct_answers) / Decimal(total_questions)
    return int(percentage.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def is_passing(score: int) -> bool:
    return score >= PASSING_SCORE


def mean_score(scores: Iterable, places: int = 0) -> Decimal:
    """Arithmetic mean rounded half-up; 0 for an empty sequence."""
    scores = list(scores)
    if not scores:
        return Decimal(0)
    total = sum(Decimal(str(s)) for s in scores)
    return round_half_up(total / len(scores), places)
