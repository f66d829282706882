"""Listing filter rules shared by remote and local reads."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from .models import Listing

FILTER_FIELDS = {
    "customerPhone": "customer_phone",
    "status": "status",
    "category": "category",
}


def clean_filters(filters: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Drop filter keys whose value is unset."""
    return {k: v for k, v in (filters or {}).items() if v not in (None, "")}


def matches(listing: Listing, filters: Dict[str, Any]) -> bool:
    for key, expected in clean_filters(filters).items():
        attr = FILTER_FIELDS.get(key)
        if attr is None:
            continue
        if getattr(listing, attr) != expected:
            return False
    return True


def apply_filters(listings: Iterable[Listing], filters: Optional[Dict[str, Any]]) -> List[Listing]:
    return [listing for listing in listings if matches(listing, filters or {})]
