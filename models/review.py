"""Review model definition."""

from datetime import datetime, timezone

from . import db


MIN_RATING = 1
MAX_RATING = 5


class Review(db.Model):
    """A company review written by a user."""

    __tablename__ = "reviews"
    __table_args__ = (
        db.CheckConstraint(
            f"rating >= {MIN_RATING} AND rating <= {MAX_RATING}",
            name="ck_reviews_rating_range",
        ),
    )

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(
        db.Integer,
        db.ForeignKey("users.id"),
        nullable=False,
        index=True,
    )
    title = db.Column(db.String(200), nullable=False)
    content = db.Column(db.Text, nullable=False)
    rating = db.Column(db.Integer, nullable=False)
    created_at = db.Column(
        db.DateTime,
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=db.func.now(),
        index=True,
    )

    author = db.relationship("User", back_populates="reviews")

    @staticmethod
    def newest_first(query):
        """Order a review query by creation time, newest first."""

        return query.order_by(Review.created_at.desc(), Review.id.desc())

    def to_dict(self) -> dict:
        """Serialize the review as shown to its owner."""

        return {
            "id": self.id,
            "user_id": self.user_id,
            "title": self.title,
            "content": self.content,
            "rating": self.rating,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    def to_summary(self) -> dict:
        """Serialize the review for the public listing, with author names."""

        return {
            "id": self.id,
            "author": self.author.full_name,
            "first_name": self.author.first_name,
            "last_name": self.author.last_name,
            "title": self.title,
            "content": self.content,
            "rating": self.rating,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self) -> str:
        return f"<Review id={self.id} user_id={self.user_id} rating={self.rating}>"
