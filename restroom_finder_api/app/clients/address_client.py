"""
Address search client.

Wraps the Kakao Local keyword search endpoint, which returns places
matching a free-text keyword together with their road-name address,
lot-number address and coordinates.  The client keeps a
``requests.Session`` so connections are reused for as long as the client
lives; use it as a context manager to release the pool afterwards.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import requests

from ..core.config import settings
from ..core.exceptions import ExternalServiceError

logger = logging.getLogger(__name__)


@dataclass
class AddressResult:
    """One place returned by the address API.

    Attributes:
        name: Place name, e.g. a shop or station.
        road_address: Road-name address.
        lot_address: Lot-number (jibun) address.
        latitude: WGS84 latitude.
        longitude: WGS84 longitude.
    """

    name: Optional[str]
    road_address: Optional[str]
    lot_address: Optional[str]
    latitude: Optional[float]
    longitude: Optional[float]

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "AddressResult":
        return cls(
            name=document.get("place_name") or None,
            road_address=document.get("road_address_name") or None,
            lot_address=document.get("address_name") or None,
            latitude=_to_float(document.get("y")),
            longitude=_to_float(document.get("x")),
        )


def _to_float(value: Any) -> Optional[float]:
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


class AddressSearchClient:
    """Client for the keyword address search API."""

    def __init__(
        self,
        *,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Initialise the client.

        Args:
            base_url: Search endpoint.  Defaults to ``settings.address_api_url``.
            api_key: REST API key.  Defaults to ``settings.address_api_key``.
            timeout: Seconds to wait for the API.  Defaults to
                ``settings.external_timeout``.
            session: Optional requests session to reuse.  A session passed
                in is left open by ``close``; one created here is closed.
        """
        self.base_url = base_url or settings.address_api_url
        self.api_key = api_key if api_key is not None else settings.address_api_key
        self.timeout = timeout or settings.external_timeout
        self._owns_session = session is None
        self.session = session or requests.Session()

    def close(self) -> None:
        if self._owns_session:
            self.session.close()

    def __enter__(self) -> "AddressSearchClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def search(self, keyword: str, count: int) -> List[AddressResult]:
        """Return up to ``count`` places matching ``keyword``.

        Raises:
            ExternalServiceError: on network errors, non-2xx responses or
                a body that is not the expected JSON document.
        """
        headers = {"Authorization": f"KakaoAK {self.api_key}"} if self.api_key else {}
        params = {"query": keyword, "size": count}
        try:
            response = self.session.get(self.base_url, params=params, headers=headers, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except (requests.RequestException, ValueError) as e:
            logger.error("Address search for %r failed: %s", keyword, e)
            raise ExternalServiceError("Address search service is unavailable") from e
        documents = payload.get("documents") if isinstance(payload, dict) else None
        if not isinstance(documents, list):
            logger.error("Unexpected address search payload: %r", payload)
            raise ExternalServiceError("Address search service returned an unexpected response")
        return [AddressResult.from_document(doc) for doc in documents[:count] if isinstance(doc, dict)]
