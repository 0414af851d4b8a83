"""Quote API client.

This module defines a small client wrapper around the Quote REST API.
It uses the ``requests`` library internally and exposes high‑level
methods for the operations offered by the server:

* :meth:`list_quotes` – return all quotes.
* :meth:`get_quote` – fetch a single quote by its identifier.
* :meth:`create_quote` / :meth:`update_quote` / :meth:`delete_quote`.
* :meth:`search` – text search over titles, descriptions and categories.
* :meth:`stats` – number of quotes per status.
* :meth:`archive_inactive` – archive every inactive quote.

Every method returns a tuple ``(data, error)``.  On success ``error``
is ``None``; on failure ``data`` is empty and ``error`` is a dict with
``status_code`` and ``message`` keys.  Network failures never raise.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

Error = Dict[str, Any]


class QuoteAPIClient:
    """Client for interacting with the Quote API."""

    def __init__(
        self,
        *,
        base_url: str,
        api_prefix: str = "/api/v1",
        timeout: float = 15,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the server, e.g. ``http://localhost:8000``.
            api_prefix: Path under which the versioned API is mounted.
            timeout: Timeout in seconds applied to every request.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
        """
        self.base_url = base_url.rstrip("/")
        self.api_prefix = "/" + api_prefix.strip("/") if api_prefix.strip("/") else ""
        self.timeout = timeout
        self.session = session or requests.Session()

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, params: Dict[str, Any] | None = None,
        json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[Error]]:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PUT``, ``DELETE``).
            path: Path relative to the quotes resource (e.g. ``/search``).
            params: Query parameters to include in the request.
            json_body: JSON body to send with the request.
        Returns:
            A tuple ``(data, error)``.
        """
        url = f"{self.base_url}{self.api_prefix}/quotes{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                json=json_body,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    detail = err_json.get("detail") if isinstance(err_json, dict) else None
                    message = str(detail) if detail else str(err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    # ------------------------------------------------------------------
    # Quote operations
    # ------------------------------------------------------------------
    def list_quotes(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        data, error = self._request("GET", "/")
        if error:
            return [], error
        return data or [], None

    def get_quote(self, quote_id: int) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("GET", f"/{quote_id}")

    def create_quote(self, payload: Dict[str, Any]) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Create a quote.  ``payload`` must contain at least a ``title``."""
        return self._request("POST", "/", json_body=payload)

    def update_quote(
        self, quote_id: int, changes: Dict[str, Any]
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Update the given fields of a quote."""
        return self._request("PUT", f"/{quote_id}", json_body=changes)

    def delete_quote(self, quote_id: int) -> Tuple[bool, Optional[Error]]:
        _, error = self._request("DELETE", f"/{quote_id}")
        return error is None, error

    def search(self, query: str) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        data, error = self._request("GET", "/search", params={"query": query})
        if error:
            return [], error
        return data or [], None

    def stats(self) -> Tuple[Dict[str, int], Optional[Error]]:
        """Return the number of quotes per status."""
        data, error = self._request("GET", "/stats/status")
        if error:
            return {}, error
        return data or {}, None

    def archive_inactive(self) -> Tuple[int, Optional[Error]]:
        """Archive all inactive quotes and return how many were archived."""
        data, error = self._request("POST", "/archive")
        if error:
            return 0, error
        return int((data or {}).get("archived", 0)), None
