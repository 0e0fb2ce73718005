"""Client for the ferry optimizer HTTP API.

Three calls make up the whole boundary:

  * ``POST /api/optimize``: place pending items and return the full load
    (deck descriptor, placed items, totals).
  * ``POST /api/items``: create an item.
  * ``DELETE /api/items/{id}``: remove an item.

Any connection failure or non-2xx answer becomes a ``TransportError`` whose
message is the server's ``error`` field when it sent one. A 2xx body that
cannot be parsed (not JSON, missing or mistyped fields) becomes an
``InvalidSnapshotError``. Nothing is retried here; the operator retries by
repeating the action.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import requests

from .errors import InvalidSnapshotError, TransportError
from .types import Item, LoadSnapshot, NewItem, PlacementProposal

logger = logging.getLogger(__name__)

DEFAULT_API_BASE_URL = "http://localhost:8080"

# What a missing, null or mistyped field raises while parsing a response.
_MALFORMED = (KeyError, TypeError, ValueError, AttributeError)


@dataclass(frozen=True)
class ApiConfig:
    """Configuration for issuing requests to the optimizer API."""

    base_url: str = DEFAULT_API_BASE_URL
    timeout: float = 30
    verify_ssl: bool = True
    extra_headers: Dict[str, str] = field(default_factory=dict)

    def build_headers(self) -> Dict[str, str]:
        headers = {
            "Accept": "application/json",
            "Content-Type": "application/json;charset=UTF-8",
        }
        headers.update(self.extra_headers)
        return headers

    def url(self, path: str) -> str:
        return self.base_url.rstrip("/") + path


def _error_message(response: requests.Response, fallback: str) -> str:
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict) and payload.get("error"):
        return str(payload["error"])
    return f"{fallback}: status {response.status_code}"


class DeckApiClient:
    def __init__(
        self,
        config: Optional[ApiConfig] = None,
        session: Optional[requests.Session] = None,
    ):
        self.config = config or ApiConfig()
        self.http = session or requests.Session()

    def _request(self, method: str, path: str, **kwargs: Any):
        url = self.config.url(path)
        logger.debug("%s %s", method, url)
        try:
            return self.http.request(
                method,
                url,
                headers=self.config.build_headers(),
                timeout=self.config.timeout,
                verify=self.config.verify_ssl,
                **kwargs,
            )
        except requests.RequestException as exc:
            logger.error("%s %s failed: %s", method, url, exc)
            raise TransportError(f"Could not reach {url}: {exc}") from exc

    def optimize(self) -> LoadSnapshot:
        """Run the server-side optimizer and return the resulting load."""
        response = self._request("POST", "/api/optimize")
        if not response.ok:
            raise TransportError(
                _error_message(response, "Failed to load data"),
                status_code=response.status_code,
            )
        try:
            payload = response.json()
        except ValueError as exc:
            raise InvalidSnapshotError(
                "Optimizer response is not valid JSON"
            ) from exc
        if not isinstance(payload, dict):
            raise InvalidSnapshotError(
                "Optimizer response is not a JSON object"
            )
        try:
            snapshot = LoadSnapshot.from_dict(payload)
        except _MALFORMED as exc:
            raise InvalidSnapshotError(
                f"Optimizer response is incomplete: {exc!r}"
            ) from exc
        logger.info(
            "Loaded %d placed item(s), %d unplaced",
            len(snapshot.items),
            len(snapshot.unplaced_items),
        )
        return snapshot

    def add_item(
        self,
        new_item: NewItem,
        position: Optional[PlacementProposal] = None,
    ) -> Item:
        response = self._request(
            "POST", "/api/items", json=new_item.to_payload(position)
        )
        if not response.ok:
            raise TransportError(
                _error_message(response, "Failed to add item"),
                status_code=response.status_code,
            )
        try:
            created = Item.from_dict(response.json())
        except _MALFORMED as exc:
            raise InvalidSnapshotError(
                f"Created item response is invalid: {exc!r}"
            ) from exc
        logger.info("Created item %s", created.id)
        return created

    def delete_item(self, item_id) -> None:
        response = self._request("DELETE", f"/api/items/{item_id}")
        if not response.ok:
            raise TransportError(
                f"Failed to delete item: status {response.status_code}",
                status_code=response.status_code,
            )
        logger.info("Deleted item %s", item_id)
