"""Price estimation for scrap listings."""

from __future__ import annotations

import math
from typing import Any, Dict, Optional, Tuple

DEFAULT_PRICING: Dict[str, Any] = {
    "currency_symbol": "₹",
    "default_rate": 5,
    "spread": {"low": 0.8, "high": 1.2},
    "base_rates": {
        "Paper": 3,
        "Plastic": 12,
        "Metal": 45,
        "Electronics": 150,
        "Glass": 2,
        "Cardboard": 4,
    },
}


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _parse_quantity(quantity: Any) -> float:
    try:
        qty = float(quantity)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(qty):
        return 0.0
    return qty


def base_rate(category: str, pricing: Optional[Dict[str, Any]] = None) -> float:
    pricing = pricing or DEFAULT_PRICING
    rates = pricing.get("base_rates", {})
    return float(rates.get(category, pricing.get("default_rate", 5)))


def price_range(
    category: str,
    quantity: Any,
    pricing: Optional[Dict[str, Any]] = None,
) -> Tuple[int, int]:
    pricing = pricing or DEFAULT_PRICING
    spread = pricing.get("spread", {})
    low_factor = float(spread.get("low", 0.8))
    high_factor = float(spread.get("high", 1.2))
    value = base_rate(category, pricing) * _parse_quantity(quantity)
    # Quantities near the float limit overflow once scaled
    if not math.isfinite(value * max(low_factor, high_factor)):
        value = 0.0
    low = _round_half_up(value * low_factor)
    high = _round_half_up(value * high_factor)
    return low, high


def estimate_price(
    category: str,
    quantity: Any,
    pricing: Optional[Dict[str, Any]] = None,
) -> str:
    """
    Estimate the price range a dealer would pay.

    Unknown categories fall back to the default rate and quantities that do
    not parse as numbers count as zero.

    Returns:
        Currency range such as "₹120-180"
    """
    pricing = pricing or DEFAULT_PRICING
    low, high = price_range(category, quantity, pricing)
    symbol = pricing.get("currency_symbol", "₹")
    return f"{symbol}{low}-{high}"
