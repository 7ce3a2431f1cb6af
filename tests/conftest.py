from __future__ import annotations

from datetime import date, datetime, time, timezone
from typing import Callable, List

import pytest


def _stamp(day: date, hour: int) -> int:
    return int(datetime.combine(day, time(hour), tzinfo=timezone.utc).timestamp())


@pytest.fixture
def three_hour_day() -> Callable[..., List[dict]]:
    """Three OpenWeather 3-hour entries for ``day``: morning low, midday high, evening."""

    def build(day: date, high: float, low: float, pop: float = 0.0, description: str = "clear sky") -> List[dict]:
        return [
            {
                "dt": _stamp(day, 6),
                "main": {"temp": low},
                "weather": [{"description": "few clouds", "icon": "02d"}],
                "pop": 0.0,
            },
            {
                "dt": _stamp(day, 12),
                "main": {"temp": high},
                "weather": [{"description": description, "icon": "01d"}],
                "pop": pop,
            },
            {
                "dt": _stamp(day, 18),
                "main": {"temp": (high + low) / 2},
                "weather": [{"description": "few clouds", "icon": "02n"}],
                "pop": 0.0,
            },
        ]

    return build
