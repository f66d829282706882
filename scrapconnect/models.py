"""Data models used across modules."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class Role(str, Enum):
    CUSTOMER = "customer"
    DEALER = "dealer"


class Category(str, Enum):
    PAPER = "Paper"
    PLASTIC = "Plastic"
    METAL = "Metal"
    ELECTRONICS = "Electronics"
    GLASS = "Glass"
    CARDBOARD = "Cardboard"
    OTHER = "Other"


class ListingStatus(str, Enum):
    AVAILABLE = "available"
    COMPLETED = "completed"


@dataclass(frozen=True)
class GeoPoint:
    lat: float
    lng: float

    def to_dict(self) -> Dict[str, float]:
        return {"lat": self.lat, "lng": self.lng}

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional["GeoPoint"]:
        if not isinstance(data, dict):
            return None
        lat, lng = _to_float(data.get("lat")), _to_float(data.get("lng"))
        if lat is None or lng is None:
            return None
        return cls(lat=lat, lng=lng)


# Gurgaon centroid, used when no location was resolved
DEFAULT_LOCATION = GeoPoint(lat=28.4595, lng=77.0266)


def _to_float(value: Any, default: Optional[float] = None) -> Optional[float]:
    if value in (None, ""):
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


@dataclass
class User:
    phone: str
    role: str
    name: str
    is_verified: bool = False
    location: Optional[GeoPoint] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "phone": self.phone,
            "role": self.role,
            "name": self.name,
            "isVerified": self.is_verified,
            "location": self.location.to_dict() if self.location else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "User":
        location = data.get("location")
        if isinstance(location, dict):
            point = GeoPoint.from_dict(location)
        else:
            # Sheet rows carry the location flattened into lat/lng columns
            point = GeoPoint.from_dict({"lat": data.get("lat"), "lng": data.get("lng")})
        verified = data.get("isVerified", False)
        if isinstance(verified, str):
            verified = verified.strip().upper() == "TRUE"
        return cls(
            phone=str(data.get("phone", "")),
            role=str(data.get("role", "")),
            name=str(data.get("name", "")),
            is_verified=bool(verified),
            location=point,
        )


@dataclass
class Listing:
    id: str
    category: str
    customer_name: str
    customer_phone: str
    quantity: float
    unit: str
    description: str
    address: str
    estimated_price: str
    status: str = ListingStatus.AVAILABLE.value
    posted_date: str = ""
    image_refs: List[str] = field(default_factory=list)
    lat: Optional[float] = None
    lng: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        """Wire representation, keyed the way the remote API and cache expect."""
        return {
            "id": self.id,
            "category": self.category,
            "customerName": self.customer_name,
            "customerPhone": self.customer_phone,
            "quantity": self.quantity,
            "unit": self.unit,
            "description": self.description,
            "address": self.address,
            "imageUrls": list(self.image_refs),
            "lat": self.lat,
            "lng": self.lng,
            "estimatedPrice": self.estimated_price,
            "status": self.status,
            "postedDate": self.posted_date,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Listing":
        images = data.get("imageUrls", data.get("photos")) or []
        if isinstance(images, str):
            images = [line for line in images.splitlines() if line.strip()]
        elif not isinstance(images, list):
            images = []
        return cls(
            id=str(data.get("id", "")),
            category=str(data.get("category", "")),
            customer_name=str(data.get("customerName", "")),
            customer_phone=str(data.get("customerPhone", "")),
            quantity=_to_float(data.get("quantity"), 0.0),
            unit=str(data.get("unit", "")),
            description=str(data.get("description", "")),
            address=str(data.get("address", "")),
            estimated_price=str(data.get("estimatedPrice", "")),
            status=str(data.get("status") or ListingStatus.AVAILABLE.value),
            posted_date=str(data.get("postedDate", "")),
            image_refs=[str(ref) for ref in images],
            lat=_to_float(data.get("lat")),
            lng=_to_float(data.get("lng")),
        )


@dataclass
class Notice:
    """Advisory message for the presentation layer; never an error."""

    kind: str
    message: str


# Notice kinds
SYNCED = "synced"
LOCAL_FALLBACK = "local-fallback"
DEGRADED_READ = "degraded-read"
