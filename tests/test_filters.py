from scrapconnect.filters import apply_filters, clean_filters
from scrapconnect.models import Listing


def make_listing(listing_id, category="Paper", phone="+91-9876543210", status="available"):
    return Listing(
        id=listing_id,
        category=category,
        customer_name="Test",
        customer_phone=phone,
        quantity=1.0,
        unit="kg",
        description="",
        address="Somewhere",
        estimated_price="₹2-4",
        status=status,
    )


LISTINGS = [
    make_listing("1"),
    make_listing("2", category="Metal", status="completed"),
    make_listing("3", phone="+91-1111111111"),
    make_listing("4", category="Electronics", phone="+91-1111111111", status="completed"),
]


def test_empty_filters_is_identity():
    """Test that no filters returns every listing in order."""
    assert apply_filters(LISTINGS, {}) == LISTINGS
    assert apply_filters(LISTINGS, None) == LISTINGS


def test_single_key_filters():
    """Test filtering on each supported key."""
    assert [l.id for l in apply_filters(LISTINGS, {"status": "completed"})] == ["2", "4"]
    assert [l.id for l in apply_filters(LISTINGS, {"category": "Paper"})] == ["1", "3"]
    assert [l.id for l in apply_filters(LISTINGS, {"customerPhone": "+91-1111111111"})] == ["3", "4"]


def test_all_keys_must_match():
    """Test that multiple filters are combined with AND."""
    result = apply_filters(LISTINGS, {"customerPhone": "+91-1111111111", "status": "completed"})
    assert [l.id for l in result] == ["4"]


def test_match_is_exact_and_case_sensitive():
    """Test that partial or differently cased values do not match."""
    assert apply_filters(LISTINGS, {"category": "paper"}) == []
    assert apply_filters(LISTINGS, {"category": "Pap"}) == []
    assert apply_filters(LISTINGS, {"customerPhone": "9876543210"}) == []


def test_unset_values_are_not_constraints():
    """Test that None or empty filter values are ignored."""
    assert clean_filters({"status": None, "category": "", "customerPhone": "x"}) == {"customerPhone": "x"}
    assert apply_filters(LISTINGS, {"status": None, "category": ""}) == LISTINGS
