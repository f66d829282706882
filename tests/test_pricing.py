from scrapconnect.pricing import DEFAULT_PRICING, base_rate, estimate_price, price_range


def test_paper_fifty_kg():
    """Test the documented Paper scenario: base rate 3, quantity 50."""
    assert price_range("Paper", 50) == (120, 180)
    assert estimate_price("Paper", 50) == "₹120-180"


def test_quantity_as_string():
    """Test that quantities typed into a form are parsed."""
    assert estimate_price("Metal", "2") == "₹72-108"


def test_unknown_category_uses_default_rate():
    """Test that unrecognized categories fall back to the generic rate."""
    assert base_rate("Other") == 5
    assert base_rate("Textiles") == 5
    assert price_range("Textiles", 10) == (40, 60)


def test_invalid_quantity_counts_as_zero():
    """Test that a quantity that does not parse gives a zero range."""
    assert estimate_price("Electronics", "lots") == "₹0-0"
    assert estimate_price("Electronics", None) == "₹0-0"


def test_rounds_half_up():
    """Test that x.5 rounds up instead of to even."""
    # Plastic: 12 * 0.3125 = 3.75 -> 3.0 low, 4.5 high
    assert price_range("Plastic", 0.3125) == (3, 5)
    # Cardboard: 4 * 0.625 = 2.5 -> 2.0 low, 3.0 high
    assert price_range("Cardboard", 0.625) == (2, 3)


def test_range_properties_hold_for_all_categories():
    """Test min <= max, non-negative ints and the 0.8/1.2 spread."""
    categories = list(DEFAULT_PRICING["base_rates"]) + ["Other"]
    for category in categories:
        for qty in (0, 1, 3.3, 17, 250):
            low, high = price_range(category, qty)
            assert isinstance(low, int) and isinstance(high, int)
            assert 0 <= low <= high
            value = base_rate(category) * qty
            assert abs(low - value * 0.8) <= 0.5
            assert abs(high - value * 1.2) <= 0.5


def test_custom_pricing_config():
    """Test pricing driven by a loaded config mapping."""
    pricing = {
        "currency_symbol": "$",
        "default_rate": 1,
        "spread": {"low": 0.5, "high": 1.5},
        "base_rates": {"Paper": 10},
    }
    assert estimate_price("Paper", 2, pricing) == "$10-30"
    assert estimate_price("Glass", 2, pricing) == "$1-3"


def test_non_finite_quantity_counts_as_zero():
    """Test that infinite or overflowing quantities give a zero range."""
    assert estimate_price("Paper", "inf") == "₹0-0"
    assert estimate_price("Paper", "nan") == "₹0-0"
    assert price_range("Paper", "1e400") == (0, 0)


def test_huge_quantity_that_overflows_when_scaled():
    """Test that a finite quantity too large to scale gives a zero range."""
    assert price_range("Electronics", 1e308) == (0, 0)
