"""HTTP client for the company reviews REST API."""

from __future__ import annotations

import logging
from typing import Any, Optional

import requests

from .session import ClientSession

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:5000/api"


class ApiError(Exception):
    """Raised when the API rejects a call or cannot be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ReviewsApiClient:
    """Calls every backend route, attaching the session's bearer token."""

    def __init__(
        self,
        session: ClientSession,
        base_url: str = DEFAULT_BASE_URL,
        http: Optional[Any] = None,
        timeout: float = 10.0,
    ):
        self.session = session
        self.base_url = base_url.rstrip("/")
        self.http = http or requests.Session()
        self.timeout = timeout

    def _make_request(
        self,
        method: str,
        endpoint: str,
        payload: Optional[dict] = None,
    ) -> Any:
        url = f"{self.base_url}{endpoint}"
        headers = {"Content-Type": "application/json"}
        if self.session.token:
            headers["Authorization"] = f"Bearer {self.session.token}"

        try:
            response = self.http.request(
                method,
                url,
                json=payload,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.error("API request %s %s failed: %s", method, endpoint, exc)
            raise ApiError("Unable to reach the server.") from exc

        try:
            data = response.json()
        except ValueError:
            data = None

        if not response.ok:
            message = "Request failed"
            if isinstance(data, dict):
                message = data.get("detail") or data.get("error") or message
            logger.warning(
                "API error %s on %s %s: %s", response.status_code, method, endpoint, message
            )
            raise ApiError(message, response.status_code)

        return data

    def register(
        self,
        first_name: str,
        last_name: str,
        email: str,
        password: str,
        phone: Optional[str] = None,
    ) -> dict:
        return self._make_request(
            "POST",
            "/register",
            {
                "firstName": first_name,
                "lastName": last_name,
                "email": email,
                "password": password,
                "phone": phone,
            },
        )

    def login(self, email: str, password: str) -> dict:
        return self._make_request("POST", "/login", {"email": email, "password": password})

    def profile(self) -> dict:
        return self._make_request("GET", "/profile")

    def list_reviews(self) -> list:
        return self._make_request("GET", "/reviews")

    def my_reviews(self) -> list:
        return self._make_request("GET", "/my-reviews")

    def submit_review(self, title: str, content: str, rating: Optional[int]) -> dict:
        return self._make_request(
            "POST",
            "/reviews",
            {"title": title, "content": content, "rating": rating},
        )
