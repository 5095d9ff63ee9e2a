"""
HTTP client for Person Service API communication.
"""

from typing import Any, Dict, List, Optional
from urllib.parse import urljoin

import httpx

from . import __version__
from .config import Config


class HTTPClient:
    """HTTP client for the Person Service API."""

    def __init__(self, config: Config, transport: Optional[httpx.BaseTransport] = None):
        """Initialize HTTP client with configuration."""
        self.config = config
        self.base_url = config.url.rstrip("/")
        self.client = httpx.Client(
            timeout=config.timeout,
            headers={"User-Agent": f"person-cli/{__version__}"},
            transport=transport,
        )

    def _url(self, endpoint: str) -> str:
        return urljoin(self.base_url + "/", endpoint.lstrip("/"))

    def get(self, endpoint: str, **kwargs) -> httpx.Response:
        """Make GET request."""
        return self.client.get(self._url(endpoint), **kwargs)

    def post(self, endpoint: str, **kwargs) -> httpx.Response:
        """Make POST request."""
        return self.client.post(self._url(endpoint), **kwargs)

    def put(self, endpoint: str, **kwargs) -> httpx.Response:
        """Make PUT request."""
        return self.client.put(self._url(endpoint), **kwargs)

    def delete(self, endpoint: str, **kwargs) -> httpx.Response:
        """Make DELETE request."""
        return self.client.delete(self._url(endpoint), **kwargs)

    def list_persons(self) -> List[Dict[str, Any]]:
        response = self.get("/api/persons")
        response.raise_for_status()
        return response.json()

    def get_person(self, person_id: int) -> Dict[str, Any]:
        response = self.get(f"/api/person/{person_id}")
        response.raise_for_status()
        return response.json()

    def create_person(self, person: Dict[str, Any]) -> None:
        self.post("/api/person", json=person).raise_for_status()

    def update_person(self, person: Dict[str, Any]) -> None:
        self.put("/api/person", json=person).raise_for_status()

    def delete_person(self, person_id: int) -> None:
        self.delete(f"/api/person/{person_id}").raise_for_status()

    def close(self) -> None:
        """Close HTTP client."""
        self.client.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
