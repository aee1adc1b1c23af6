from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from schemas.view import SessionStats


def _round_half_up(value: Decimal, places: str = "1") -> Decimal:
    return value.quantize(Decimal(places), rounding=ROUND_HALF_UP)


class SessionTracker:
    """
    Running score for one quiz run. Purely additive: every accepted answer is
    recorded once and nothing is ever taken back.
    """

    def __init__(self) -> None:
        self.answered_count = 0
        self.total_error = 0
        self.within_one_order_count = 0

    def record(self, error: int) -> None:
        if error < 0:
            raise ValueError(f"order error cannot be negative: {error}")
        self.answered_count += 1
        self.total_error += error
        if error <= 1:
            self.within_one_order_count += 1

    @property
    def average_error(self) -> float:
        if not self.answered_count:
            return 0.0
        mean = Decimal(self.total_error) / Decimal(self.answered_count)
        return float(_round_half_up(mean, "0.1"))

    @property
    def accuracy(self) -> int:
        if not self.answered_count:
            return 0
        pct = Decimal(100 * self.within_one_order_count) / Decimal(self.answered_count)
        return int(_round_half_up(pct))

    def snapshot(self) -> SessionStats:
        return SessionStats(
            answered=self.answered_count,
            average_error=self.average_error,
            accuracy=self.accuracy,
            answered_str=f"{self.answered_count:03d}",
            average_error_str=f"{self.average_error:.1f}",
            accuracy_str=f"{self.accuracy:03d}%",
        )
