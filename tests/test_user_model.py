"""Tests for the User and Review model helpers."""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.exc import IntegrityError

from models import db
from models.review import Review
from models.user import User


def _user(email: str = "helper@example.com") -> User:
    user = User(first_name="Ann", last_name="Lee", email=email)
    user.set_password("password123", method="pbkdf2:sha256:1000")
    db.session.add(user)
    db.session.commit()
    return user


def test_password_helpers(app):
    with app.app_context():
        user = _user()

        assert user.password_hash != "password123"
        assert user.check_password("password123") is True
        assert user.check_password("password124") is False
        assert "password_hash" not in user.to_dict()
        assert user.full_name == "Ann Lee"


def test_email_is_unique(app):
    with app.app_context():
        _user()
        db.session.add(User(first_name="B", last_name="C", email="helper@example.com", password_hash="x"))
        with pytest.raises(IntegrityError):
            db.session.commit()
        db.session.rollback()


def test_rating_check_constraint(app):
    with app.app_context():
        user = _user()
        db.session.add(Review(user_id=user.id, title="t", content="c", rating=9))
        with pytest.raises(IntegrityError):
            db.session.commit()
        db.session.rollback()


def test_review_serializers(app):
    with app.app_context():
        user = _user()
        review = Review(user_id=user.id, title="Great", content="Nice place", rating=5)
        db.session.add(review)
        db.session.commit()

        summary = review.to_summary()
        assert summary["author"] == "Ann Lee"
        assert summary["created_at"]
        assert "user_id" not in summary
        assert review.to_dict()["user_id"] == user.id


def test_created_at_is_assigned_in_utc(app):
    with app.app_context():
        before = datetime.now(timezone.utc).replace(tzinfo=None)
        user = _user()
        review = Review(user_id=user.id, title="t", content="c", rating=3)
        db.session.add(review)
        db.session.commit()

        for stamp in (user.created_at, review.created_at):
            naive = stamp.replace(tzinfo=None)
            assert before - timedelta(seconds=1) <= naive
            assert naive <= datetime.now(timezone.utc).replace(tzinfo=None)
