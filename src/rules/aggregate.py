"""Session-level aggregation of per-item validation results."""

from typing import Sequence

from .models import AggregatedResult, ValidationResult


def aggregate_results(results: Sequence[ValidationResult]) -> AggregatedResult:
    """
    Fold an ordered list of item results into one session summary.

    The percentage is the unweighted mean of each item's own percentage
    (items without one count as 100 or 0 from their correctness), so a
    short word weighs as much as a long one. Rounded to two decimals.
    """
    if not results:
        return AggregatedResult()

    total_correct = sum(1 for r in results if r.passed())
    mean_percentage = sum(r.item_percentage() for r in results) / len(results)

    return AggregatedResult(
        total_score=sum(r.score for r in results),
        total_correct=total_correct,
        total_incorrect=len(results) - total_correct,
        total_errors=sum(r.error_total() for r in results),
        percentage=round(mean_percentage, 2),
        items=list(results),
    )
