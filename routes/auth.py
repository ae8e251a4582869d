"""Authentication blueprint providing register, login, and profile endpoints."""

from __future__ import annotations
from http import HTTPStatus

from flask import Blueprint, current_app, jsonify, request
from flask_jwt_extended import create_access_token, get_jwt_identity, jwt_required
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from werkzeug.exceptions import BadRequest, Conflict, NotFound, Unauthorized

from models import db
from models.user import User
from utils.request_validation import first_present, parse_json_request

INVALID_CREDENTIALS = "Invalid email or password."
DUPLICATE_EMAIL = "Account already exists with this email."

auth_bp = Blueprint("auth", __name__)


def _normalize_email(raw_email: str | None) -> str:
    """Normalize an email string by stripping whitespace and lowering case."""
    return (raw_email or "").strip().lower()


def _find_user_by_email(email: str) -> User | None:
    return User.query.filter(func.lower(User.email) == email).first()


def _issue_token(user: User) -> str:
    """Return a signed access token whose subject is the user id."""
    return create_access_token(identity=str(user.id))


def current_user_id() -> int:
    """Return the user id carried by the verified request token."""
    return int(get_jwt_identity())


@auth_bp.route("/register", methods=["POST"])
def register() -> tuple:
    """Create an account and log the new user in immediately."""
    payload = parse_json_request(request)
    first_name = first_present(payload, "firstName", "first_name")
    last_name = first_present(payload, "lastName", "last_name")
    email = _normalize_email(first_present(payload, "email"))
    password = payload.get("password") if isinstance(payload.get("password"), str) else ""
    phone = first_present(payload, "phone", "phone_number") or None

    missing = [
        name
        for name, value in (
            ("firstName", first_name),
            ("lastName", last_name),
            ("email", email),
            ("password", password.strip()),
        )
        if not value
    ]
    if missing:
        raise BadRequest("Missing required fields: {}.".format(", ".join(missing)))

    if _find_user_by_email(email) is not None:
        current_app.logger.info("Registration rejected for existing email")
        raise Conflict(DUPLICATE_EMAIL)

    user = User(
        first_name=first_name,
        last_name=last_name,
        email=email,
        phone_number=phone,
    )
    user.set_password(password, method=current_app.config["PASSWORD_HASH_METHOD"])

    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration for the same email.
        db.session.rollback()
        current_app.logger.info("Registration rejected for existing email")
        raise Conflict(DUPLICATE_EMAIL) from None
    current_app.logger.info("Registered user %s", user.id)

    return (
        jsonify(
            {
                "message": "User created successfully!",
                "token": _issue_token(user),
                "userId": user.id,
                "user": user.to_dict(),
            }
        ),
        HTTPStatus.CREATED,
    )


@auth_bp.route("/login", methods=["POST"])
def login() -> tuple:
    """Authenticate a user and return a fresh access token."""
    payload = parse_json_request(request)
    email = _normalize_email(first_present(payload, "email"))
    password = payload.get("password") if isinstance(payload.get("password"), str) else ""

    if not email or not password:
        raise BadRequest("Email and password are required.")

    # Unknown email and wrong password share one message.
    user = _find_user_by_email(email)
    if user is None or not user.check_password(password):
        current_app.logger.warning("Failed login attempt")
        raise Unauthorized(INVALID_CREDENTIALS)

    current_app.logger.info("User %s logged in", user.id)
    return (
        jsonify(
            {
                "message": "Login successful!",
                "token": _issue_token(user),
                "userId": user.id,
                "user": user.to_dict(),
            }
        ),
        HTTPStatus.OK,
    )


@auth_bp.route("/profile", methods=["GET"])
@jwt_required()
def profile() -> tuple:
    """Return the profile of the token's owner."""
    user = db.session.get(User, current_user_id())
    if user is None:
        raise NotFound("User not found.")
    return jsonify({"user": user.to_dict()}), HTTPStatus.OK
