"""
HTTP client for the KrishiLink REST API.
One request per call: no retry, no caching.
"""
import logging
from typing import Any, Callable, Optional

import requests

from ..config import get_config


logger = logging.getLogger(__name__)

GENERIC_ERROR = "Something went wrong"


class ApiError(Exception):
    """A request failed; `message` is safe to show to the user."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        payload: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404 or "not found" in self.message.lower()


class TransportError(ApiError):
    """The server could not be reached (DNS, refused connection, timeout)."""


class ApiClient:
    """
    Thin wrapper around a requests Session.

    Every call sends JSON with a bearer token. Mutations that the server
    scopes to an owner also carry a `user-email` header.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        token_getter: Optional[Callable[[], Optional[str]]] = None,
        timeout: Optional[float] = None,
        http: Optional[requests.Session] = None,
    ):
        config = get_config().api
        self.base_url = (base_url or config.base_url).rstrip("/")
        self.token = token or config.token
        self.token_getter = token_getter
        self.timeout = timeout or config.timeout
        self.http = http or requests.Session()
        logger.info(f"ApiClient initialized for {self.base_url}")

    def url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _headers(self, actor_email: Optional[str]) -> dict[str, str]:
        token = (self.token_getter() if self.token_getter else None) or self.token
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {token}",
        }
        if actor_email:
            headers["user-email"] = actor_email
        return headers

    def request(
        self,
        method: str,
        path: str,
        params: Optional[dict[str, Any]] = None,
        json: Any = None,
        actor_email: Optional[str] = None,
    ) -> Any:
        """
        Send one request and return the parsed JSON body.

        Args:
            method: HTTP verb
            path: Path below the base URL, e.g. "/api/crops"
            params: Query string parameters
            json: Request body
            actor_email: Sent as `user-email` for ownership-scoped calls

        Returns:
            Parsed response body

        Raises:
            TransportError: If the request never got a response
            ApiError: If the response status is not 2xx
        """
        url = self.url(path)
        try:
            response = self.http.request(
                method,
                url,
                params=params,
                json=json,
                headers=self._headers(actor_email),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"{method} {url} failed: {e}")
            raise TransportError(f"Network error: {e}") from e

        try:
            data = response.json()
        except ValueError:
            data = None

        if not response.ok:
            message = GENERIC_ERROR
            if isinstance(data, dict) and data.get("message"):
                message = str(data["message"])
            logger.error(f"{method} {url} -> {response.status_code}: {message}")
            raise ApiError(message, status_code=response.status_code, payload=data)

        if data is None and response.content:
            logger.error(f"{method} {url} returned a non-JSON body")
            raise ApiError(GENERIC_ERROR, status_code=response.status_code)

        return data

    def get(self, path: str, **kwargs: Any) -> Any:
        return self.request("GET", path, **kwargs)

    def post(self, path: str, **kwargs: Any) -> Any:
        return self.request("POST", path, **kwargs)

    def put(self, path: str, **kwargs: Any) -> Any:
        return self.request("PUT", path, **kwargs)

    def delete(self, path: str, **kwargs: Any) -> Any:
        return self.request("DELETE", path, **kwargs)
