"""
HTTP client for the prospects service.

Thin wrapper over the REST endpoints. No retries: a failed call raises
ProspectAPIError and it's up to the caller whether that matters.
"""

import logging
from typing import NamedTuple, Optional

import httpx

from .config import Settings
from .constants import SEEDED_COUNT_HEADER
from .models import Prospect, ProspectDraft

logger = logging.getLogger(__name__)


class ProspectAPIError(Exception):
    """Request to the prospects service failed."""
    pass


class SeedResult(NamedTuple):
    message: str
    inserted: Optional[int]  # None when the service does not report it


class ProspectAPIClient:
    """
    Client for the prospects REST service.

    Usage:
        with ProspectAPIClient("http://127.0.0.1:3000") as client:
            prospects = client.list_prospects()
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: Service root, e.g. http://127.0.0.1:3000 (defaults from settings)
            timeout: Request timeout in seconds (defaults from settings)
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        settings = Settings()
        self.base_url = (base_url or settings.api_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.request_timeout
        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=transport,
        )

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self) -> None:
        self._client.close()

    def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            response = self._client.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ProspectAPIError(
                f"{method} {path} returned {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise ProspectAPIError(f"{method} {path} failed: {e}") from e

        logger.debug("%s %s -> %d", method, path, response.status_code)
        return response

    def _json(self, response: httpx.Response, path: str):
        try:
            return response.json()
        except ValueError as e:
            raise ProspectAPIError(f"{path} returned a non-JSON body") from e

    def list_prospects(self) -> list[Prospect]:
        """Fetch every prospect, highest score first."""
        path = "/api/prospects"
        rows = self._json(self._request("GET", path), path)
        try:
            return [Prospect.from_dict(row) for row in rows]
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise ProspectAPIError(f"{path} returned a malformed row: {e!r}") from e

    def create_prospect(self, draft: ProspectDraft) -> int:
        """Insert a prospect. Returns the new id."""
        path = "/api/prospects"
        body = self._json(self._request("POST", path, json=draft.to_payload()), path)
        try:
            return int(body["id"])
        except (KeyError, TypeError, ValueError) as e:
            raise ProspectAPIError(f"POST {path} returned no id") from e

    def delete_prospect(self, prospect_id: int) -> bool:
        """Delete a prospect. Returns False if there was nothing to delete."""
        path = f"/api/prospects/{prospect_id}"
        body = self._json(self._request("DELETE", path), path)
        if not isinstance(body, dict):
            raise ProspectAPIError(f"DELETE {path} returned {body!r}")
        return bool(body.get("success"))

    def seed(self) -> SeedResult:
        """Insert the example prospects."""
        response = self._request("GET", "/api/seed")
        inserted = response.headers.get(SEEDED_COUNT_HEADER)
        return SeedResult(
            message=response.text,
            inserted=int(inserted) if inserted and inserted.isdigit() else None,
        )

    def health(self) -> dict:
        path = "/api/health"
        return self._json(self._request("GET", path), path)
