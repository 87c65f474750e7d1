"""Travel-time and on-site time estimation."""

from .execution import EXECUTION_STRATEGIES, mission_execution_minutes, shopping_minutes
from .traffic import (
    simple_eta_minutes,
    traffic_band,
    traffic_multiplier,
    traffic_travel_minutes,
)

__all__ = [
    "EXECUTION_STRATEGIES",
    "mission_execution_minutes",
    "shopping_minutes",
    "simple_eta_minutes",
    "traffic_band",
    "traffic_multiplier",
    "traffic_travel_minutes",
]
