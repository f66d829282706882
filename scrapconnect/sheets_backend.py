"""Spreadsheet backend speaking the same action protocol as the web app."""

from __future__ import annotations

import os
import uuid
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional

import gspread
import requests
from google.auth.exceptions import GoogleAuthError
from google.oauth2.service_account import Credentials

from .filters import FILTER_FIELDS
from .gateway import LoadingIndicator, RemoteGateway, RemoteUnavailable
from .models import Listing, ListingStatus

REMOTE_ID_PREFIX = "SC"

USER_HEADERS = [
    "phone",
    "role",
    "name",
    "isVerified",
    "lat",
    "lng",
    "createdAt",
]

LISTING_HEADERS = [
    "id",
    "category",
    "customerName",
    "customerPhone",
    "quantity",
    "unit",
    "description",
    "address",
    "imageUrls",
    "lat",
    "lng",
    "estimatedPrice",
    "status",
    "postedDate",
]


class SheetsBackend(RemoteGateway):
    """Reads and writes the Users and Listings worksheets with gspread."""

    def __init__(
        self,
        spreadsheet: gspread.Spreadsheet,
        users_name: Optional[str] = None,
        listings_name: Optional[str] = None,
        loading: Optional[LoadingIndicator] = None,
    ) -> None:
        super().__init__(base_url="", loading=loading)
        self.spreadsheet = spreadsheet
        self.users_name = users_name or os.getenv("SHEETS_NAME_USERS", "Users")
        self.listings_name = listings_name or os.getenv("SHEETS_NAME_LISTINGS", "Listings")

    @classmethod
    def from_service_account(cls, service_account_file: str, spreadsheet_url: str, **kwargs: Any) -> "SheetsBackend":
        # Extract spreadsheet ID from URL
        if "/d/" in spreadsheet_url:
            spreadsheet_id = spreadsheet_url.split("/d/")[1].split("/")[0]
        else:
            spreadsheet_id = spreadsheet_url

        scopes = [
            "https://www.googleapis.com/auth/spreadsheets",
            "https://www.googleapis.com/auth/drive",
        ]
        creds = Credentials.from_service_account_file(service_account_file, scopes=scopes)
        client = gspread.authorize(creds)
        return cls(client.open_by_key(spreadsheet_id), **kwargs)

    @property
    def is_configured(self) -> bool:
        return self.spreadsheet is not None

    def _call(self, action: str, method: str, payload: Dict[str, Any]) -> Any:
        handlers = {
            "createUser": self.create_user,
            "createListing": self.create_listing,
            "listings": self.listings,
            "completeListing": self.complete_listing,
        }
        handler = handlers.get(action)
        if handler is None:
            raise RemoteUnavailable(f"Unknown action: {action}")
        try:
            return handler(payload)
        except (gspread.exceptions.GSpreadException, GoogleAuthError, requests.RequestException) as e:
            raise RemoteUnavailable(str(e)) from e

    def _get_or_create_worksheet(self, name: str, headers: List[str]) -> gspread.Worksheet:
        """Get worksheet by name, create it with a header row if missing."""
        try:
            worksheet = self.spreadsheet.worksheet(name)
        except gspread.WorksheetNotFound:
            worksheet = self.spreadsheet.add_worksheet(title=name, rows=1000, cols=len(headers))

        if not worksheet.row_values(1):
            worksheet.append_row(headers)
        return worksheet

    def create_user(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        worksheet = self._get_or_create_worksheet(self.users_name, USER_HEADERS)
        location = payload.get("location") or {}
        row = {
            "phone": payload.get("phone", ""),
            "role": payload.get("role", ""),
            "name": payload.get("name", ""),
            "isVerified": "TRUE",
            "lat": location.get("lat", ""),
            "lng": location.get("lng", ""),
            "createdAt": datetime.now(timezone.utc).isoformat(),
        }
        worksheet.append_row([row[h] for h in USER_HEADERS], value_input_option="RAW")
        return {
            "user": {
                "phone": row["phone"],
                "role": row["role"],
                "name": row["name"],
                "isVerified": True,
                "location": location or None,
            }
        }

    def create_listing(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        worksheet = self._get_or_create_worksheet(self.listings_name, LISTING_HEADERS)
        listing = Listing.from_dict(
            {
                **payload,
                "id": f"{REMOTE_ID_PREFIX}{uuid.uuid4().hex[:12].upper()}",
                "status": ListingStatus.AVAILABLE.value,
                "postedDate": date.today().isoformat(),
            }
        )
        worksheet.append_row(self._to_row(listing), value_input_option="RAW")
        return {"listing": listing.to_dict()}

    def listings(self, payload: Dict[str, Any]) -> List[Dict[str, Any]]:
        worksheet = self._get_or_create_worksheet(self.listings_name, LISTING_HEADERS)
        filters = {k: v for k, v in payload.items() if k in FILTER_FIELDS and v not in (None, "")}
        records = worksheet.get_all_records()
        return [
            Listing.from_dict(r).to_dict()
            for r in records
            if all(str(r.get(k, "")) == str(v) for k, v in filters.items())
        ]

    def complete_listing(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        worksheet = self._get_or_create_worksheet(self.listings_name, LISTING_HEADERS)
        listing_id = str(payload.get("id", ""))
        ids = worksheet.col_values(LISTING_HEADERS.index("id") + 1)
        if listing_id not in ids[1:]:
            raise RemoteUnavailable(f"Listing {listing_id} not found")

        row_number = ids.index(listing_id, 1) + 1
        status_col = LISTING_HEADERS.index("status") + 1
        worksheet.update_cell(row_number, status_col, ListingStatus.COMPLETED.value)

        values = worksheet.row_values(row_number)
        record = dict(zip(LISTING_HEADERS, values))
        return {"listing": Listing.from_dict(record).to_dict()}

    @staticmethod
    def _to_row(listing: Listing) -> List[Any]:
        data = listing.to_dict()
        data["imageUrls"] = "\n".join(listing.image_refs)
        return ["" if data[h] is None else data[h] for h in LISTING_HEADERS]
