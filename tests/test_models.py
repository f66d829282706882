"""Tests for data models."""

from scrapconnect.models import GeoPoint, Listing, Role, User


def test_listing_from_seed_record():
    """Test reading a seed record that uses the photos key and string quantity."""
    listing = Listing.from_dict(
        {
            "id": "DEMO001",
            "category": "Paper",
            "customerName": "Raj Kumar",
            "customerPhone": "+91-9876543210",
            "quantity": "50",
            "unit": "kg",
            "description": "Old newspapers and magazines",
            "address": "MG Road",
            "estimatedPrice": "₹150-200",
            "status": "available",
            "postedDate": "2025-08-17",
            "photos": [],
            "lat": 28.4595,
            "lng": 77.0266,
        }
    )
    assert listing.quantity == 50.0
    assert listing.image_refs == []
    assert listing.lat == 28.4595


def test_listing_from_sheet_row():
    """Test reading a spreadsheet row with blank coordinates and joined images."""
    listing = Listing.from_dict(
        {
            "id": "SC1",
            "quantity": 2,
            "imageUrls": "a.png\nb.png\n",
            "lat": "",
            "lng": "",
            "status": "",
        }
    )
    assert listing.image_refs == ["a.png", "b.png"]
    assert listing.lat is None and listing.lng is None
    assert listing.status == "available"


def test_listing_to_dict_uses_wire_keys():
    """Test the camelCase wire representation."""
    listing = Listing(
        id="LOCAL1",
        category="Glass",
        customer_name="A",
        customer_phone="+91-1",
        quantity=4.0,
        unit="kg",
        description="Bottles",
        address="X",
        estimated_price="₹6-10",
        image_refs=["ref"],
    )
    data = listing.to_dict()
    assert data["customerPhone"] == "+91-1"
    assert data["imageUrls"] == ["ref"]
    assert data["estimatedPrice"] == "₹6-10"
    assert data["status"] == "available"


def test_user_from_sheet_row():
    """Test reading a user with flattened location and a TRUE cell."""
    user = User.from_dict({"phone": "+91-1", "role": "dealer", "name": "D", "isVerified": "TRUE", "lat": 1, "lng": 2})
    assert user.is_verified is True
    assert user.location == GeoPoint(lat=1.0, lng=2.0)


def test_user_round_trip_fields():
    """Test that a user written to the cache reads back the same."""
    user = User(phone="+91-1", role=Role.CUSTOMER.value, name="C", is_verified=True)
    assert User.from_dict(user.to_dict()) == user


def test_geopoint_missing_values():
    """Test that incomplete points are treated as absent."""
    assert GeoPoint.from_dict(None) is None
    assert GeoPoint.from_dict({"lat": 1}) is None
    assert GeoPoint.from_dict({"lat": "", "lng": 2}) is None


def test_junk_wire_fields_are_tolerated():
    """Test that unparseable coordinates and image fields do not raise."""
    assert GeoPoint.from_dict({"lat": "north", "lng": 2}) is None
    assert GeoPoint.from_dict("28.4,77.0") is None
    listing = Listing.from_dict({"id": "SC1", "imageUrls": 7, "lat": "n/a"})
    assert listing.image_refs == []
    assert listing.lat is None
