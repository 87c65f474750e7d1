"""On-site execution time heuristics.

Two estimators are in use: the shopping estimate
drives route display and daily scheduling, the mission estimate drives the
clustered optimizer's scoring.
"""

from __future__ import annotations

from typing import Callable

from .traffic import round_half_up

ExecutionStrategy = Callable[[int], float]


def shopping_minutes(item_count: int) -> int | float:
    """10 minutes base plus 3 minutes per item."""

    return round_half_up(item_count * 3 + 10)


def mission_execution_minutes(item_count: int) -> float:
    """2 minutes per item, bounded to the 10-30 minute window."""

    return max(10, min(30, item_count * 2))


EXECUTION_STRATEGIES: dict[str, ExecutionStrategy] = {
    "shopping": shopping_minutes,
    "mission": mission_execution_minutes,
}
