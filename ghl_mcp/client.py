"""GoHighLevel v2 REST API client.

Thin wrapper around a ``requests.Session`` that adds the auth/version
headers, drops unset parameters, decodes JSON and turns failures into
``GHLAPIError``.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Tuple

import requests

from .config import Settings, settings as default_settings
from .errors import GHLAPIError, extract_error_message

logger = logging.getLogger("ghl_mcp.client")


def compact(data: Optional[Mapping[str, Any]]) -> Optional[Dict[str, Any]]:
    """Drop keys whose value is None. Returns None for None input."""
    if data is None:
        return None
    return {k: v for k, v in data.items() if v is not None}


def _query_value(value: Any) -> Any:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return [_query_value(v) for v in value]
    return value


class GHLClient:
    """HTTP client bound to one GHL sub-account (location)."""

    def __init__(self, config: Optional[Settings] = None, session: Optional[requests.Session] = None):
        self.config = config or default_settings
        self.config.require_credentials()
        self.base_url = self.config.ghl_base_url.rstrip("/")
        self.timeout = self.config.request_timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            "Authorization": f"Bearer {self.config.ghl_api_key}",
            "Version": self.config.ghl_api_version,
            "Accept": "application/json",
            "Content-Type": "application/json",
        })

    @property
    def location_id(self) -> str:
        return self.config.ghl_location_id

    def _send(self, method: str, path: str, **kwargs) -> requests.Response:
        """Issue the HTTP call and raise ``GHLAPIError`` for anything but a 2xx."""
        url = f"{self.base_url}/{path.lstrip('/')}"
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.Timeout as e:
            raise GHLAPIError(None, f"Tool execution timeout after {self.timeout:g}s") from e
        except requests.RequestException as e:
            raise GHLAPIError(None, f"Request failed: {e}") from e

        logger.debug("GHL %s %s -> %s", method, path, response.status_code)
        if not response.ok:
            data = self._decode(response)
            message = extract_error_message(data, default=response.reason or "Unknown API error")
            raise GHLAPIError(response.status_code, message, data)
        return response

    @staticmethod
    def _decode(response: requests.Response) -> Any:
        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError:
            return response.text

    def request(
        self,
        method: str,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        json: Optional[Any] = None,
        version: Optional[str] = None,
    ) -> Any:
        """Send one request and return the decoded JSON body.

        Args:
            method: HTTP verb
            path: Path below the base URL, e.g. "/contacts/abc"
            params: Query parameters; None values are dropped
            json: Request body; None values are dropped from a dict body
            version: Override for the Version header (some endpoints use 2021-04-15)

        Returns:
            Decoded JSON, or {} for an empty body.

        Raises:
            GHLAPIError: On non-2xx responses, timeouts and connection failures.
        """
        query = {k: _query_value(v) for k, v in (compact(params) or {}).items()}
        body = compact(json) if isinstance(json, Mapping) else json
        headers = {"Version": version} if version else None

        logger.debug("GHL %s %s params=%s", method, path, query)
        response = self._send(method, path, params=query or None, json=body, headers=headers)
        return self._decode(response)

    def get(self, path: str, params: Optional[Mapping[str, Any]] = None, **kwargs) -> Any:
        return self.request("GET", path, params=params, **kwargs)

    def post(self, path: str, json: Optional[Any] = None, params: Optional[Mapping[str, Any]] = None, **kwargs) -> Any:
        return self.request("POST", path, params=params, json=json, **kwargs)

    def put(self, path: str, json: Optional[Any] = None, params: Optional[Mapping[str, Any]] = None, **kwargs) -> Any:
        return self.request("PUT", path, params=params, json=json, **kwargs)

    def patch(self, path: str, json: Optional[Any] = None, params: Optional[Mapping[str, Any]] = None, **kwargs) -> Any:
        return self.request("PATCH", path, params=params, json=json, **kwargs)

    def delete(self, path: str, params: Optional[Mapping[str, Any]] = None, json: Optional[Any] = None, **kwargs) -> Any:
        return self.request("DELETE", path, params=params, json=json, **kwargs)

    def upload(
        self,
        path: str,
        fields: Optional[Mapping[str, Any]] = None,
        files: Optional[Mapping[str, Tuple[Any, ...]]] = None,
        params: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        """POST a multipart/form-data body (media and CSV uploads).

        Args:
            fields: Plain form fields; None values are dropped, booleans sent as true/false
            files: {"file": (filename, content, content type)}
        """
        form = {k: _query_value(v) for k, v in (compact(fields) or {}).items()}
        parts = dict(files or {})
        if not parts:
            # requests only builds a multipart body when there is at least one file part
            parts = {k: (None, str(v)) for k, v in form.items()}
            form = {}
        logger.debug("GHL POST %s multipart fields=%s", path, sorted(form) or sorted(parts))
        # None drops the session's JSON content type so requests can set the boundary
        response = self._send(
            "POST", path, params=compact(params), data=form or None, files=parts, headers={"Content-Type": None}
        )
        return self._decode(response)

    def download(self, path: str, params: Optional[Mapping[str, Any]] = None, version: Optional[str] = None) -> Tuple[bytes, str]:
        """GET a binary payload (e.g. a call recording).

        Returns:
            (content bytes, content type)
        """
        headers = {"Accept": "*/*"}
        if version:
            headers["Version"] = version
        response = self._send("GET", path, params=compact(params), headers=headers)
        return response.content, response.headers.get("Content-Type", "application/octet-stream")

    def test_connection(self) -> Dict[str, Any]:
        """Fetch the configured location to prove the credentials work."""
        data = self.get(f"/locations/{self.location_id}")
        if isinstance(data, dict):
            return data.get("location", data)
        return {}


_client: Optional[GHLClient] = None


def get_client() -> GHLClient:
    """Return the shared client, creating it on first use.

    Raises:
        ValueError: If GHL_API_KEY or GHL_LOCATION_ID is not set.
    """
    global _client
    if _client is None:
        _client = GHLClient()
    return _client


def set_client(client: Optional[GHLClient]) -> None:
    """Replace the shared client (None resets it)."""
    global _client
    _client = client
