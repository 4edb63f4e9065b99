"""In-memory users and comments.

The store is constructed once at startup and handed to the app as a
provider; handlers receive it by type annotation. Users never change
after construction. Comments are append-only and every read and write
of the list goes through one lock, so concurrent posts are never lost
even when requests run on several worker threads.
"""

import threading
import uuid
from collections.abc import Iterable
from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class User:
    """A registered user. ``password`` is compared verbatim at login."""

    name: str
    email: str
    password: str
    id: str = field(default_factory=lambda: str(uuid.uuid4()))


@dataclass(frozen=True, slots=True)
class Comment:
    """A comment on the shared wall. Not tied to any author."""

    text: str


def default_users() -> list[User]:
    """The three demo accounts, with ids generated per call."""
    return [
        User(name="Alice", email="alice@example.com", password="password1"),
        User(name="Bob", email="bob@example.com", password="password2"),
        User(name="Charlie", email="charlie@example.com", password="password3"),
    ]


DEFAULT_COMMENTS: tuple[str, ...] = ("This is a comment",)


class Store:
    """Users plus the global comment list.

    Usage::

        store = Store(default_users(), comments=DEFAULT_COMMENTS)
        user = store.find_by_credentials("alice@example.com", "password1")
        store.add_comment("hello world")
    """

    __slots__ = ("_comments", "_lock", "_users", "_users_by_id")

    def __init__(self, users: Iterable[User], comments: Iterable[str] = ()) -> None:
        self._users: tuple[User, ...] = tuple(users)
        self._users_by_id: dict[str, User] = {}
        for user in self._users:
            if user.id in self._users_by_id:
                msg = f"Duplicate user id: {user.id!r}"
                raise ValueError(msg)
            self._users_by_id[user.id] = user
        self._comments: list[Comment] = [Comment(text) for text in comments]
        self._lock = threading.Lock()

    @property
    def users(self) -> tuple[User, ...]:
        return self._users

    def find_by_credentials(self, email: str, password: str) -> User | None:
        """First user, in list order, whose email and password both match."""
        for user in self._users:
            if user.email == email and user.password == password:
                return user
        return None

    def get_user(self, user_id: str) -> User | None:
        return self._users_by_id.get(user_id)

    def add_comment(self, text: str) -> Comment:
        """Append a comment. Callers validate *text* first."""
        comment = Comment(text)
        with self._lock:
            self._comments.append(comment)
        return comment

    def comments(self) -> tuple[Comment, ...]:
        """Snapshot of all comments in posting order."""
        with self._lock:
            return tuple(self._comments)

    def comment_count(self) -> int:
        with self._lock:
            return len(self._comments)
