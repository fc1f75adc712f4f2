from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from domain.errors import NoActiveSessionError
from domain.models import User


@dataclass
class Session:
    """
    The single slot holding the currently authenticated user.

    A session is either logged out (`user is None`) or logged in as
    exactly one user. There is no expiry.
    """

    user: Optional[User] = None

    @property
    def is_active(self) -> bool:
        return self.user is not None

    def start(self, user: User) -> None:
        self.user = user

    def require_user(self, action: str) -> User:
        if self.user is None:
            raise NoActiveSessionError(f"No user is logged in to {action}.")
        return self.user

    def clear(self) -> None:
        self.user = None
