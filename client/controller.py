"""Single-page controller for the company reviews client.

The controller owns the view state (active page, rendered review lists,
navigation and transient notices) and delegates every data operation to
``ReviewsApiClient``. Handlers are registered per view, so each page only
reacts to the events it declares.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Optional

from .api import ApiError, ReviewsApiClient
from .session import ClientSession

logger = logging.getLogger(__name__)

PAGES = ("home", "login", "register", "dashboard", "reviews")
NOTICE_TTL_SECONDS = 5.0
MAX_STARS = 5
EMPTY_USER_REVIEWS_MESSAGE = "You haven't submitted any reviews yet."

Handler = Callable[[Any], Any]


@dataclass
class Notice:
    kind: str
    message: str
    expires_at: float

    def is_active(self, now: float) -> bool:
        return now < self.expires_at


class RatingWidget:
    """Star rating state mirrored into the review form's ``rating`` field."""

    def __init__(self, form: dict, max_stars: int = MAX_STARS):
        self.form = form
        self.max_stars = max_stars
        self.value = 0

    def set_rating(self, rating: int) -> None:
        self.value = max(0, min(int(rating), self.max_stars))
        self.form["rating"] = str(self.value) if self.value else ""

    @property
    def stars(self) -> list[bool]:
        """Active flag for each star, left to right."""
        return [index < self.value for index in range(self.max_stars)]


def _format_date(raw: Optional[str]) -> str:
    if not raw:
        return ""
    try:
        return datetime.fromisoformat(raw).date().isoformat()
    except ValueError:
        return raw


def render_review(review: dict, include_author: bool = True) -> dict:
    """Build the display fields of a review card."""

    card = {
        "rating_label": f"⭐ {review.get('rating')}/{MAX_STARS}",
        "title": review.get("title") or "",
        "content": review.get("content") or "",
        "date": _format_date(review.get("created_at")),
    }
    if include_author:
        card["author"] = review.get("author") or "{} {}".format(
            review.get("first_name", ""), review.get("last_name", "")
        ).strip()
    return card


class PageController:
    """Page-state machine: one active page, explicit session, per-view handlers."""

    def __init__(
        self,
        api: ReviewsApiClient,
        session: ClientSession,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.api = api
        self.session = session
        self.clock = clock
        self.current_page = "home"
        self.reviews: list[dict] = []
        self.user_reviews: list[dict] = []
        self.notices: list[Notice] = []
        self.review_form = {"title": "", "content": "", "rating": ""}
        self.rating = RatingWidget(self.review_form)
        self._handlers: dict[tuple[str, str], Handler] = {}
        self._register_default_handlers()

    # Handler registry

    def register_handler(self, view: str, event: str, handler: Handler) -> None:
        self._handlers[(view, event)] = handler

    def dispatch(self, view: str, event: str, payload: Any = None) -> Any:
        handler = self._handlers.get((view, event))
        if handler is None:
            raise KeyError(f"No handler for {event!r} on view {view!r}")
        return handler(payload)

    def _register_default_handlers(self) -> None:
        self.register_handler("nav", "navigate", self.show_page)
        self.register_handler("nav", "logout", lambda _payload: self.handle_logout())
        self.register_handler("register", "submit", self.handle_register)
        self.register_handler("login", "submit", self.handle_login)
        self.register_handler("dashboard", "submit", self.handle_review_submit)
        self.register_handler("dashboard", "rate", self.rating.set_rating)

    # Lifecycle

    def start(self) -> None:
        """Rehydrate a stored session, then load the public reviews."""

        if self.session.token:
            self.load_user_profile()
        self.load_reviews()

    def load_user_profile(self) -> None:
        try:
            result = self.api.profile()
        except ApiError as exc:
            logger.info("Stored session rejected: %s", exc.message)
            self.show_error(exc.message)
            self.session.clear()
            self.current_page = "home"
            return
        self.session.current_user = result.get("user")

    # Notices

    def _notify(self, kind: str, message: str) -> None:
        self.notices = [Notice(kind, message, self.clock() + NOTICE_TTL_SECONDS)]

    def show_error(self, message: str) -> None:
        self._notify("error", message)

    def show_success(self, message: str) -> None:
        self._notify("success", message)

    def active_notices(self) -> list[Notice]:
        now = self.clock()
        self.notices = [notice for notice in self.notices if notice.is_active(now)]
        return list(self.notices)

    # Navigation

    def navigation(self) -> dict:
        user = self.session.current_user
        if user:
            return {
                "auth_buttons_visible": False,
                "user_menu_visible": True,
                "logout_label": f"Logout ({user.get('first_name', '')})",
            }
        return {
            "auth_buttons_visible": True,
            "user_menu_visible": False,
            "logout_label": None,
        }

    def show_page(self, page: str) -> None:
        if page not in PAGES:
            raise ValueError(f"Unknown page: {page}")
        self.current_page = page
        if page == "dashboard" and self.session.is_authenticated:
            self.load_user_reviews()

    # Auth handlers

    def _complete_sign_in(self, result: dict, message: str) -> None:
        self.session.sign_in(result["token"], result.get("user"))
        self.show_success(message)
        self.show_page("dashboard")

    def handle_register(self, form: dict) -> bool:
        try:
            result = self.api.register(
                form.get("firstName", ""),
                form.get("lastName", ""),
                form.get("email", ""),
                form.get("password", ""),
                form.get("phone") or None,
            )
        except ApiError as exc:
            logger.info("Registration failed: %s", exc.message)
            self.show_error(exc.message)
            return False
        self._complete_sign_in(result, "Account created successfully!")
        return True

    def handle_login(self, form: dict) -> bool:
        try:
            result = self.api.login(form.get("email", ""), form.get("password", ""))
        except ApiError as exc:
            logger.info("Login failed: %s", exc.message)
            self.show_error(exc.message)
            return False
        self._complete_sign_in(result, "Login successful!")
        return True

    def handle_logout(self) -> None:
        self.session.clear()
        self.user_reviews = []
        self.show_page("home")
        self.show_success("Logged out successfully")

    # Reviews

    def load_reviews(self) -> None:
        try:
            reviews = self.api.list_reviews()
        except ApiError as exc:
            self.show_error(exc.message)
            return
        self.reviews = [render_review(review) for review in reviews]

    def load_user_reviews(self) -> None:
        try:
            reviews = self.api.my_reviews()
        except ApiError as exc:
            self.show_error(exc.message)
            return
        self.user_reviews = [render_review(review, include_author=False) for review in reviews]

    @property
    def user_reviews_message(self) -> Optional[str]:
        return None if self.user_reviews else EMPTY_USER_REVIEWS_MESSAGE

    def handle_review_submit(self, form: Optional[dict] = None) -> bool:
        form = self.review_form if form is None else form
        try:
            rating = int(form.get("rating"))
        except (TypeError, ValueError):
            rating = None

        try:
            self.api.submit_review(form.get("title", ""), form.get("content", ""), rating)
        except ApiError as exc:
            logger.info("Review submission failed: %s", exc.message)
            self.show_error(exc.message)
            return False

        self.show_success("Review submitted successfully!")
        self.review_form.update({"title": "", "content": ""})
        self.rating.set_rating(0)
        self.load_reviews()
        if self.current_page == "dashboard":
            self.load_user_reviews()
        return True
