from __future__ import annotations

from typing import Any, Dict, Optional

FALLBACK_PACKING = ("Pack comfortable clothes", "Check local forecast before departure")


def build_fallback(
    check_in_date: Optional[str] = None,
    check_out_date: Optional[str] = None,
    city: Optional[str] = None,
) -> Dict[str, Any]:
    """Provider-independent response used whenever real data is unavailable."""
    where = f" in {city}" if city else ""
    return {
        "success": False,
        "show_weather": False,
        "summary": f"We hope you have wonderful weather during your stay{where}!",
        "packing_recommendations": list(FALLBACK_PACKING),
        "stats": {"check_in_date": check_in_date, "check_out_date": check_out_date},
        "fallback": True,
    }


__all__ = ["build_fallback"]
