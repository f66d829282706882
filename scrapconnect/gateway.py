"""Remote store gateway (Apps Script web app) and mock implementation."""

from __future__ import annotations

from typing import Any, Dict, Optional

import requests

PLACEHOLDER_MARKER = "REPLACE_WITH_YOUR"


class RemoteUnavailable(Exception):
    """The remote store could not complete or rejected the call."""


class LoadingIndicator:
    """Shared busy flag shown by the presentation layer while a call runs.

    A plain flag: two overlapping calls would clear it when the first one ends.
    """

    def __init__(self) -> None:
        self.active = False

    def show(self, active: bool) -> None:
        self.active = active


class RemoteGateway:
    """Stateless client for the spreadsheet-backed API."""

    def __init__(
        self,
        base_url: str,
        timeout_ms: int = 30000,
        loading: Optional[LoadingIndicator] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url or ""
        self.timeout = timeout_ms / 1000.0
        self.loading = loading or LoadingIndicator()
        self.http = session or requests.Session()

    @property
    def is_configured(self) -> bool:
        return bool(self.base_url) and PLACEHOLDER_MARKER not in self.base_url

    def call(self, action: str, method: str = "GET", payload: Optional[Dict[str, Any]] = None) -> Any:
        """
        Run one API action and return its ``data`` member.

        Raises:
            RemoteUnavailable: on transport errors, non-2xx responses,
                unparseable bodies, ``success: false`` or a missing endpoint
        """
        self.loading.show(True)
        try:
            return self._call(action, method.upper(), payload or {})
        except RemoteUnavailable as e:
            print(f"  [WARN] API call '{action}' failed: {e}")
            raise
        finally:
            self.loading.show(False)

    def _call(self, action: str, method: str, payload: Dict[str, Any]) -> Any:
        if not self.is_configured:
            raise RemoteUnavailable("API URL not configured")

        body = {"action": action, **payload}
        headers = {"Content-Type": "application/json"}
        try:
            if method == "POST":
                response = self.http.post(self.base_url, json=body, headers=headers, timeout=self.timeout)
            else:
                params = {k: v for k, v in body.items() if v is not None}
                response = self.http.get(self.base_url, params=params, headers=headers, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise RemoteUnavailable(str(e)) from e

        try:
            result = response.json()
        except ValueError as e:
            raise RemoteUnavailable(f"Invalid JSON response: {e}") from e

        if not isinstance(result, dict) or not result.get("success"):
            error = result.get("error") if isinstance(result, dict) else None
            raise RemoteUnavailable(error or "API call failed")

        return result.get("data")


class MockGateway(RemoteGateway):
    """Gateway that never reaches a backend; every call degrades."""

    def __init__(self, loading: Optional[LoadingIndicator] = None) -> None:
        super().__init__(base_url="", loading=loading)

    def _call(self, action: str, method: str, payload: Dict[str, Any]) -> Any:
        raise RemoteUnavailable("mock backend is offline")
