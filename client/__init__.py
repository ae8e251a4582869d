"""Python client for the company reviews API."""

from .api import ApiError, ReviewsApiClient
from .controller import PageController, RatingWidget
from .session import ClientSession, TokenStore

__all__ = [
    "ApiError",
    "ClientSession",
    "PageController",
    "RatingWidget",
    "ReviewsApiClient",
    "TokenStore",
]
