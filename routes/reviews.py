"""Reviews blueprint: public listing plus authenticated submission."""

from __future__ import annotations
from http import HTTPStatus

from flask import Blueprint, current_app, jsonify, request
from flask_jwt_extended import jwt_required
from sqlalchemy.orm import contains_eager
from werkzeug.exceptions import BadRequest

from models import db
from models.review import MAX_RATING, MIN_RATING, Review
from models.user import User
from routes.auth import current_user_id
from utils.request_validation import first_present, parse_int_in_range, parse_json_request

reviews_bp = Blueprint("reviews", __name__)


def _validate_review_payload(data: dict) -> tuple[str, str, int]:
    title = first_present(data, "title")
    content = first_present(data, "content", "review_text")

    errors = []
    if not title:
        errors.append("title is required")
    if not content:
        errors.append("content is required")
    if errors:
        raise BadRequest("; ".join(errors))

    rating = parse_int_in_range(data.get("rating"), "rating", MIN_RATING, MAX_RATING)
    return title, content, rating


@reviews_bp.route("/reviews", methods=["POST"])
@jwt_required()
def create_review():
    """Store a review owned by the token's user."""

    # Ownership comes from the token only; a user_id in the body is ignored.
    user_id = current_user_id()
    data = parse_json_request(request)
    title, content, rating = _validate_review_payload(data)

    review = Review(user_id=user_id, title=title, content=content, rating=rating)
    db.session.add(review)
    db.session.commit()
    current_app.logger.info("User %s submitted review %s", user_id, review.id)

    return (
        jsonify({"message": "Review submitted successfully!", "review": review.to_dict()}),
        HTTPStatus.CREATED,
    )


@reviews_bp.route("/reviews", methods=["GET"])
def list_reviews():
    """Return every review with its author's name, newest first."""

    query = Review.query.join(User, Review.user_id == User.id).options(
        contains_eager(Review.author)
    )
    reviews = Review.newest_first(query).all()
    return jsonify([review.to_summary() for review in reviews])


@reviews_bp.route("/my-reviews", methods=["GET"])
@jwt_required()
def list_my_reviews():
    """Return the caller's own reviews, newest first."""

    query = Review.query.filter(Review.user_id == current_user_id())
    reviews = Review.newest_first(query).all()
    return jsonify([review.to_dict() for review in reviews])
