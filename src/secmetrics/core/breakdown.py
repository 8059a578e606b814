"""
Breakdown and rate arithmetic shared by the aggregators.
"""

from typing import Callable, Iterable, List, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class BreakdownEntry(BaseModel):
    """
    One group of a breakdown.

    The percentage keeps full precision; rounding happens at display time.
    """

    name: str = Field(..., description="Group key (blank values form their own group)")
    value: int = Field(..., ge=0, description="Number of records in the group")
    percentage: float = Field(..., ge=0.0, description="Share of the breakdown total, 0-100")

    class Config:
        frozen = True


def safe_rate(numerator: float, denominator: float) -> float:
    """Return ``100 * numerator / denominator``, or 0.0 when the denominator is 0."""
    if not denominator:
        return 0.0
    return (numerator / denominator) * 100


def compute_breakdown(records: Iterable[T], key: Callable[[T], str]) -> List[BreakdownEntry]:
    """
    Group records by a categorical field and compute count and percentage.

    Groups are listed in order of first appearance.

    Args:
        records: Records to group
        key: Function extracting the group key from a record

    Returns:
        List of breakdown entries whose percentages sum to 100
        (empty list for no records)
    """
    counts: dict = {}
    total = 0
    for record in records:
        name = key(record)
        counts[name] = counts.get(name, 0) + 1
        total += 1

    return [
        BreakdownEntry(name=name, value=count, percentage=safe_rate(count, total))
        for name, count in counts.items()
    ]
