"""
stats_service.py — Today's dashboard numbers.
Pure arithmetic over counts already loaded by the ledger; no I/O.
"""

from dataclasses import dataclass, asdict
from decimal import Decimal, ROUND_HALF_UP


@dataclass(frozen=True)
class DailyStats:
    completed_today: int
    total_habits: int
    completion_rate: int

    def to_dict(self) -> dict:
        return asdict(self)


def completion_rate(completed_today: int, total_habits: int) -> int:
    """Percentage rounded half-up; 0 when there are no habits."""
    if total_habits <= 0:
        return 0
    ratio = Decimal(completed_today) * 100 / Decimal(total_habits)
    return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def today_stats(total_habits: int, completed_today: int) -> DailyStats:
    # Every log for today counts, archived habits included
    return DailyStats(
        completed_today=completed_today,
        total_habits=total_habits,
        completion_rate=completion_rate(completed_today, total_habits),
    )
