"""Reconciling data service: remote first, local cache and seed data on failure."""

from __future__ import annotations

import math
import re
import time
from datetime import date
from typing import Any, Callable, Dict, List, Optional

from .cache import LocalCacheStore
from .filters import apply_filters, clean_filters
from .gateway import RemoteGateway, RemoteUnavailable
from .models import (
    DEFAULT_LOCATION,
    DEGRADED_READ,
    LOCAL_FALLBACK,
    SYNCED,
    GeoPoint,
    Listing,
    ListingStatus,
    Notice,
    Role,
    User,
)
from .notifier import Notifier
from .pricing import DEFAULT_PRICING, estimate_price
from .session import SessionState

LOCAL_ID_PREFIX = "LOCAL"

# Values for ReconcilingDataService.last_read_source
READ_REMOTE = "remote"
READ_REMOTE_EMPTY = "remote-empty"
READ_UNAVAILABLE = "unavailable"


class LocalIdGenerator:
    """Nanosecond timestamps, bumped so that no two ids from one process collide."""

    def __init__(self, clock: Callable[[], int] = time.time_ns) -> None:
        self.clock = clock
        self._last = 0

    def __call__(self) -> str:
        token = max(self.clock(), self._last + 1)
        self._last = token
        return f"{LOCAL_ID_PREFIX}{token}"


def _unwrap(result: Any, key: str, required: bool = False) -> Dict[str, Any]:
    """Pull ``key`` out of a remote result; any other shape counts as unavailable."""
    if result is None and not required:
        return {}
    inner = result.get(key, result) if isinstance(result, dict) else result
    if isinstance(inner, dict) and (inner or not required):
        return inner
    print(f"  [WARN] Unexpected '{key}' payload: {result!r}")
    raise RemoteUnavailable(f"Unexpected '{key}' payload")


def _listing_rows(result: Any) -> List[Dict[str, Any]]:
    if result is None:
        return []
    rows = [r for r in result if isinstance(r, dict)] if isinstance(result, list) else []
    if not isinstance(result, list) or (result and not rows):
        print(f"  [WARN] Unexpected listings payload: {result!r}")
        raise RemoteUnavailable("Unexpected listings payload")
    return rows


def normalize_phone(digits: str, country_code: str = "91") -> str:
    return f"+{country_code}-{digits}"


class ReconcilingDataService:
    def __init__(
        self,
        gateway: RemoteGateway,
        cache: LocalCacheStore,
        seed_listings: Optional[List[Dict[str, Any]]] = None,
        notifier: Optional[Notifier] = None,
        pricing: Optional[Dict[str, Any]] = None,
        id_generator: Optional[Callable[[], str]] = None,
        today: Callable[[], date] = date.today,
        country_code: str = "91",
        state: Optional[SessionState] = None,
    ) -> None:
        self.gateway = gateway
        self.cache = cache
        self.seed_listings = tuple(Listing.from_dict(s) for s in seed_listings or [])
        self.notifier = notifier or Notifier()
        self.pricing = pricing or DEFAULT_PRICING
        self.new_local_id = id_generator or LocalIdGenerator()
        self.today = today
        self.country_code = country_code
        self.state = state or SessionState()
        self.last_read_source: Optional[str] = None

    def _notify(self, kind: str, message: str) -> None:
        self.notifier.send(Notice(kind=kind, message=message))

    def _persist(self) -> None:
        self.cache.save(self.state)

    # ==================== SESSION ====================

    def hydrate(self) -> bool:
        """Restore a logged-in session from the cache, if one was saved."""
        saved = self.cache.load()
        if saved is None or not (saved.is_logged_in and saved.current_user):
            return False
        self.state.hydrate(saved)
        print(f"  [INFO] Restored session for {saved.current_user.phone}")
        return True

    def set_location(self, point: Optional[GeoPoint]) -> None:
        self.state.set_location(point)
        self._persist()

    def logout(self) -> None:
        self.state.logout()
        self.cache.clear()
        self._notify("info", "Logged out successfully")

    # ==================== CORE OPERATIONS ====================

    def estimate_price(self, category: str, quantity: Any) -> str:
        return estimate_price(category, quantity, self.pricing)

    def create_user(self, data: Dict[str, Any]) -> User:
        try:
            remote = _unwrap(self.gateway.call("createUser", "POST", dict(data)), "user")
        except RemoteUnavailable:
            self._notify(LOCAL_FALLBACK, "Connection issue. Account kept on this device for now.")
            return User(
                phone=data.get("phone", ""),
                role=data.get("role", ""),
                name=data.get("name", ""),
                is_verified=True,
            )

        user = User.from_dict({**data, **remote})
        user.is_verified = True
        self._notify(SYNCED, "Account created and saved to Google Sheets!")
        return user

    def create_listing(self, data: Dict[str, Any]) -> Listing:
        try:
            remote = _unwrap(self.gateway.call("createListing", "POST", dict(data)), "listing", required=True)
        except RemoteUnavailable:
            return self._create_local_listing(data)

        self._notify(SYNCED, "Listing saved to Google Sheets!")
        return Listing.from_dict(remote)

    def _create_local_listing(self, data: Dict[str, Any]) -> Listing:
        listing = Listing.from_dict(
            {
                **data,
                "id": self.new_local_id(),
                "status": ListingStatus.AVAILABLE.value,
                "postedDate": self.today().isoformat(),
            }
        )
        self.state.add_listing(listing)
        self._persist()
        self._notify(LOCAL_FALLBACK, "Listing saved locally (backup mode)")
        return listing

    def get_listings(self, filters: Optional[Dict[str, Any]] = None) -> List[Listing]:
        """
        Fetch listings matching ``filters``.

        A non-empty remote result is authoritative. When the remote is
        unavailable or returns nothing, seed and locally known listings are
        filtered with the same rules the backend applies.
        """
        filters = clean_filters(filters)
        try:
            rows = _listing_rows(self.gateway.call("listings", "GET", filters))
        except RemoteUnavailable:
            self.last_read_source = READ_UNAVAILABLE
        else:
            if rows:
                self.last_read_source = READ_REMOTE
                return [Listing.from_dict(r) for r in rows]
            self.last_read_source = READ_REMOTE_EMPTY

        self._notify(DEGRADED_READ, "Showing demo and locally saved listings")
        return apply_filters([*self.seed_listings, *self.state.listings], filters)

    def complete_listing(self, listing_id: str) -> Optional[Listing]:
        """Mark a listing as collected. Seed listings are never changed."""
        try:
            remote = _unwrap(self.gateway.call("completeListing", "POST", {"id": listing_id}), "listing")
        except RemoteUnavailable:
            listing = self.state.find_listing(listing_id)
            if listing is None:
                print(f"  [WARN] Listing {listing_id} is not known locally")
                return None
            listing.status = ListingStatus.COMPLETED.value
            self._persist()
            self._notify(LOCAL_FALLBACK, "Collection recorded locally (backup mode)")
            return listing

        listing = Listing.from_dict(remote) if remote else None
        if listing is not None and self.state.replace_listing(listing):
            self._persist()
        self._notify(SYNCED, "Collection saved to Google Sheets!")
        return listing

    # ==================== FLOWS ====================

    def register_user(self, phone: str, role: str) -> User:
        digits = re.sub(r"\D", "", phone or "")[:10]
        if len(digits) < 10:
            raise ValueError("Please enter a valid 10-digit phone number")
        role = Role(role).value

        location = self.state.user_location or DEFAULT_LOCATION
        user_data = {
            "phone": normalize_phone(digits, self.country_code),
            "role": role,
            "name": "Customer User" if role == Role.CUSTOMER.value else "Dealer User",
            "location": location.to_dict(),
        }
        user = self.create_user(user_data)
        user.phone = user_data["phone"]
        user.role = role
        user.is_verified = True
        if user.location is None:
            user.location = location

        self.state.login(user)
        self._persist()
        return user

    def _require_user(self) -> User:
        user = self.state.current_user
        if not self.state.is_logged_in or user is None:
            raise ValueError("Please register before continuing")
        return user

    def submit_listing(
        self,
        category: str,
        quantity: Any,
        unit: str,
        address: str,
        description: str = "",
        image_refs: Optional[List[str]] = None,
    ) -> Listing:
        user = self._require_user()
        if not category:
            raise ValueError("Please select a category")
        try:
            qty = float(quantity)
        except (TypeError, ValueError):
            qty = 0.0
        if not (math.isfinite(qty) and qty > 0):
            raise ValueError("Please enter a valid quantity")
        if not (address or "").strip():
            raise ValueError("Please enter your address")

        location = self.state.user_location or DEFAULT_LOCATION
        return self.create_listing(
            {
                "customerName": user.name,
                "customerPhone": user.phone,
                "category": category,
                "quantity": qty,
                "unit": unit,
                "description": description or "No description provided",
                "address": address,
                "imageUrls": list(image_refs or []),
                "lat": location.lat,
                "lng": location.lng,
                "estimatedPrice": self.estimate_price(category, qty),
            }
        )

    def marketplace_listings(self) -> List[Listing]:
        return self.get_listings({"status": ListingStatus.AVAILABLE.value})

    def user_history(self) -> List[Listing]:
        user = self._require_user()
        if user.role == Role.CUSTOMER.value:
            return self.get_listings({"customerPhone": user.phone})
        return self.get_listings({"status": ListingStatus.COMPLETED.value})

    def dealer_dashboard(self) -> Dict[str, Any]:
        available = self.marketplace_listings()
        collections = [
            l for l in self.state.listings if l.status == ListingStatus.COMPLETED.value
        ]
        per_collection = self.pricing.get("revenue_per_collection", 1500)
        return {
            "totalCollections": len(collections),
            "monthlyRevenue": len(collections) * per_collection,
            "pendingPickups": len(available),
            "recentActivity": available[:5],
        }

    def profile_stats(self) -> Dict[str, int]:
        user = self._require_user()
        mine = [l for l in self.state.listings if l.customer_phone == user.phone]
        completed = [l for l in mine if l.status == ListingStatus.COMPLETED.value]
        per_deal = self.pricing.get("earnings_per_deal", 500)
        return {
            "totalListings": len(mine),
            "completedDeals": len(completed),
            "totalEarnings": len(completed) * per_deal,
        }
