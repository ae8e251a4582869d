"""Seed demo users and company reviews."""

from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from app import create_app
from models import db
from models.review import Review
from models.user import User


DEMO_USERS = [
    ("Ann", "Lee", "ann@example.com", "AnnPass123", "555-0100"),
    ("Ravi", "Patel", "ravi@example.com", "RaviPass123", None),
]

DEMO_REVIEWS = [
    ("ann@example.com", "Great culture", "Supportive managers and clear goals.", 5),
    ("ann@example.com", "Slow onboarding", "Laptop took two weeks to arrive.", 3),
    ("ravi@example.com", "Solid benefits", "Good health plan, average pay.", 4),
]


def get_or_create_user(
    first_name: str,
    last_name: str,
    email: str,
    password: str,
    phone: str | None,
    method: str,
) -> User:
    user = User.query.filter_by(email=email).first()
    if user is None:
        user = User(
            first_name=first_name,
            last_name=last_name,
            email=email,
            phone_number=phone,
        )
        user.set_password(password, method=method)
        db.session.add(user)
    return user


def main() -> None:
    app = create_app()
    with app.app_context():
        db.create_all()
        method = app.config["PASSWORD_HASH_METHOD"]
        users = {
            email: get_or_create_user(first, last, email, password, phone, method)
            for first, last, email, password, phone in DEMO_USERS
        }
        db.session.flush()

        created = 0
        for email, title, content, rating in DEMO_REVIEWS:
            author = users[email]
            exists = Review.query.filter_by(user_id=author.id, title=title).first()
            if exists is not None:
                continue
            db.session.add(
                Review(user_id=author.id, title=title, content=content, rating=rating)
            )
            created += 1

        db.session.commit()
        print(f"Seeded {len(users)} users and {created} new reviews")


if __name__ == "__main__":
    main()
