"""In-memory session state."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .models import GeoPoint, Listing, User


@dataclass
class SessionState:
    current_user: Optional[User] = None
    listings: List[Listing] = field(default_factory=list)
    is_logged_in: bool = False
    user_location: Optional[GeoPoint] = None

    def hydrate(self, other: "SessionState") -> None:
        self.current_user = other.current_user
        self.listings = list(other.listings)
        self.is_logged_in = other.is_logged_in
        self.user_location = other.user_location

    def login(self, user: User) -> None:
        self.current_user = user
        self.is_logged_in = True

    def add_listing(self, listing: Listing) -> None:
        self.listings.append(listing)

    def replace_listing(self, listing: Listing) -> bool:
        for i, existing in enumerate(self.listings):
            if existing.id == listing.id:
                self.listings[i] = listing
                return True
        return False

    def find_listing(self, listing_id: str) -> Optional[Listing]:
        return next((l for l in self.listings if l.id == listing_id), None)

    def set_location(self, point: Optional[GeoPoint]) -> None:
        self.user_location = point

    def logout(self) -> None:
        # Locally created listings survive logout, so the next user on the
        # device still sees them merged into offline reads.
        self.current_user = None
        self.is_logged_in = False
        self.user_location = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "currentUser": self.current_user.to_dict() if self.current_user else None,
            "listings": [l.to_dict() for l in self.listings],
            "isLoggedIn": self.is_logged_in,
            "userLocation": self.user_location.to_dict() if self.user_location else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SessionState":
        user = data.get("currentUser")
        return cls(
            current_user=User.from_dict(user) if user else None,
            listings=[Listing.from_dict(l) for l in data.get("listings") or []],
            is_logged_in=bool(data.get("isLoggedIn")),
            user_location=GeoPoint.from_dict(data.get("userLocation")),
        )
