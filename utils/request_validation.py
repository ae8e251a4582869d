"""Utilities for validating incoming Flask requests."""

from __future__ import annotations

from flask import Request
from werkzeug.exceptions import BadRequest


def parse_json_request(req: Request) -> dict:
    """Return the parsed JSON body or raise a 400 error."""

    if not req.is_json:
        raise BadRequest("Request content type must be application/json.")

    data = req.get_json(silent=True)
    if data is None:
        raise BadRequest("Request JSON body is required.")

    if not isinstance(data, dict):
        raise BadRequest("Request JSON payload must be an object.")

    if not data:
        raise BadRequest("Request JSON body must not be empty.")

    return data


def clean_text(value: object) -> str:
    """Return a stripped string, treating non-strings as empty."""

    if not isinstance(value, str):
        return ""
    return value.strip()


def first_present(data: dict, *keys: str) -> str:
    """Return the first non-blank string among ``keys``.

    Lets an endpoint accept both camelCase and snake_case spellings of a field.
    """

    for key in keys:
        value = clean_text(data.get(key))
        if value:
            return value
    return ""


def parse_int_in_range(value: object, field: str, minimum: int, maximum: int) -> int:
    """Coerce ``value`` to an int within ``[minimum, maximum]`` or raise a 400."""

    if isinstance(value, bool):
        raise BadRequest(f"{field} must be an integer.")
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError:
            raise BadRequest(f"{field} must be an integer.") from None
    if not isinstance(value, int):
        raise BadRequest(f"{field} must be an integer.")
    if not minimum <= value <= maximum:
        raise BadRequest(f"{field} must be between {minimum} and {maximum}.")
    return value
