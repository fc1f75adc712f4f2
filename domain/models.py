from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class Role(str, Enum):
    """Account roles that have a dedicated construction path and store."""

    ADMIN = "Admin"
    DEVELOPER = "Developer"
    CUSTOMER = "Customer"


@dataclass
class User:
    """
    Base account shape shared by every role.

    This model is intentionally simple and independent of any
    particular storage backend. `role` is kept as a plain string so that
    accounts without one of the known roles can still be represented.
    """

    id: int
    username: str
    email: str
    password: str
    role: str


@dataclass
class Admin(User):
    pass


@dataclass
class Developer(User):
    games: List[str] = field(default_factory=list)


@dataclass(eq=False)
class Customer(User):
    """
    A store customer.

    The customer owns exactly one shopping cart; both are created at
    sign-up and removed together when the account is deleted.
    """

    balance: float = 0.0
    games_library: List[str] = field(default_factory=list)
    reviews: List[str] = field(default_factory=list)
    shopping_cart: Optional[ShoppingCart] = field(default=None, repr=False)


@dataclass(eq=False)
class ShoppingCart:
    """Cart owned by a customer; shares the customer's id."""

    id: int
    customer: Optional[Customer] = field(default=None, repr=False)
    games: List[str] = field(default_factory=list)
