from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import Dict, List, Optional

from application.session import Session
from domain.errors import (
    DuplicateEmailError,
    IdCollisionError,
    InvalidCredentialsError,
    RepositoryUnavailableError,
    UnsupportedDomainError,
)
from domain.models import Admin, Customer, Developer, Role, ShoppingCart, User
from domain.repositories import Repository

logger = logging.getLogger(__name__)


_DOMAIN_ROLES = (
    ("@adm.com", Role.ADMIN),
    ("@dev.com", Role.DEVELOPER),
    ("@gmail.com", Role.CUSTOMER),
)


class StorageMode(str, Enum):
    """
    Where the email-uniqueness check looks for existing accounts.

    - SINGLE_STORE: only the generic user repository is scanned.
    - MULTI_STORE: the admin, developer and customer repositories are
      scanned in that order. The generic repository is scanned only
      when some role has no dedicated repository and so falls back to it.
    """

    SINGLE_STORE = "single"
    MULTI_STORE = "multi"


def determine_role_by_email(email: str) -> Role:
    """Classify an account by the exact, case-sensitive suffix of its email."""

    for suffix, role in _DOMAIN_ROLES:
        if email.endswith(suffix):
            return role
    raise UnsupportedDomainError(f"Unsupported email domain: {email}")


def _role_of(user: User) -> Optional[Role]:
    try:
        return Role(user.role)
    except ValueError:
        return None


class AccountService:
    """
    Sign-up, log-in, log-out and account deletion over per-role repositories.

    Any repository may be None. A role without a dedicated repository is
    stored in the generic user repository instead. The service keeps one
    `Session`; pass one in to share it with other components.
    """

    def __init__(
        self,
        user_repository: Optional[Repository[User]],
        admin_repository: Optional[Repository[Admin]],
        developer_repository: Optional[Repository[Developer]],
        customer_repository: Optional[Repository[Customer]],
        shopping_cart_repository: Optional[Repository[ShoppingCart]],
        *,
        storage_mode: StorageMode = StorageMode.MULTI_STORE,
        session: Optional[Session] = None,
    ) -> None:
        self._user_repository = user_repository
        self._admin_repository = admin_repository
        self._developer_repository = developer_repository
        self._customer_repository = customer_repository
        self._shopping_cart_repository = shopping_cart_repository
        self._role_repositories: Dict[Role, Optional[Repository]] = {
            Role.ADMIN: admin_repository,
            Role.DEVELOPER: developer_repository,
            Role.CUSTOMER: customer_repository,
        }
        self.storage_mode = storage_mode
        self.session = session if session is not None else Session()
        self._lock = threading.RLock()

    @property
    def logged_in_user(self) -> Optional[User]:
        return self.session.user

    # ------------------------------------------------------------------ sign-up
    def sign_up(self, username: str, email: str, password: str) -> bool:
        """
        Register a new account whose role is chosen by the email domain.

        - The email must not be used yet (see `is_email_used`).
        - The new id is the size of the target repository plus one.
        - A customer is stored together with a fresh shopping cart; if the
          cart cannot be stored the customer is removed again.
        """

        with self._lock:
            if self.is_email_used(email):
                raise DuplicateEmailError("Email is already in use.")

            role = determine_role_by_email(email)
            if role is Role.CUSTOMER and self._shopping_cart_repository is None:
                raise RepositoryUnavailableError("Shopping cart repository is not initialized.")

            target = self._repository_for(role)
            user_id = len(target.get_all()) + 1
            self._ensure_id_is_free(target, user_id, role)

            if role is Role.ADMIN:
                target.create(Admin(user_id, username, email, password, role.value))
            elif role is Role.DEVELOPER:
                target.create(Developer(user_id, username, email, password, role.value, games=[]))
            else:
                self._create_customer(target, user_id, username, email, password)

            logger.info("Signed up %s account %s (id=%s)", role.value, username, user_id)
            return True

    def _repository_for(self, role: Role) -> Repository:
        dedicated = self._role_repositories.get(role)
        if dedicated is not None:
            return dedicated
        # No dedicated store for this role: fall back to the generic one.
        if self._user_repository is None:
            raise RepositoryUnavailableError(f"No repository is configured for role {role.value}.")
        return self._user_repository

    def _ensure_id_is_free(self, target: Repository, user_id: int, role: Role) -> None:
        # A deleted account frees its slot in the count, so the next id can
        # still belong to a live account.
        taken = target.get_by_id(user_id) is not None
        if role is Role.CUSTOMER:
            taken = taken or self._shopping_cart_repository.get_by_id(user_id) is not None
        if taken:
            raise IdCollisionError(f"Account id {user_id} is already taken in the {role.value} store.")

    def _create_customer(
        self,
        target: Repository,
        user_id: int,
        username: str,
        email: str,
        password: str,
    ) -> None:
        customer = Customer(
            user_id,
            username,
            email,
            password,
            Role.CUSTOMER.value,
            balance=0.0,
            games_library=[],
            reviews=[],
        )
        cart = ShoppingCart(id=user_id, customer=customer)
        customer.shopping_cart = cart

        target.create(customer)
        try:
            self._shopping_cart_repository.create(cart)
        except Exception:
            logger.warning("Could not store cart for customer %s, rolling back", user_id)
            target.delete(user_id)
            raise

    # ------------------------------------------------------------------ log-in / log-out
    def log_in(self, email: str, password: str) -> bool:
        """
        Authenticate against every configured repository.

        Unknown emails and wrong passwords raise the same error.
        """

        with self._lock:
            for user in self._all_users():
                if user.email == email and user.password == password:
                    self.session.start(user)
                    logger.info("Successful authentication for user: %s", user.username)
                    return True

            logger.warning("Failed authentication attempt")
            raise InvalidCredentialsError("Wrong email or password.")

    def _all_users(self) -> List[User]:
        users: List[User] = []
        for repository in (
            self._user_repository,
            self._admin_repository,
            self._developer_repository,
            self._customer_repository,
        ):
            if repository is not None:
                users.extend(repository.get_all())
        return users

    def log_out(self) -> bool:
        with self._lock:
            user = self.session.require_user("log out")
            self.session.clear()
            logger.info("Logged out user: %s", user.username)
            return True

    # ------------------------------------------------------------------ deletion
    def delete_account(self) -> bool:
        """
        Delete the logged-in user's account and end the session.

        Customers also lose their shopping cart, reviews and games library.
        """

        with self._lock:
            user = self.session.require_user("delete")
            role = _role_of(user)

            if role is Role.ADMIN:
                self._require(self._admin_repository, "Admin").delete(user.id)
            elif role is Role.DEVELOPER:
                self._require(self._developer_repository, "Developer").delete(user.id)
            elif role is Role.CUSTOMER:
                self._delete_customer(user)
            else:
                self._require(self._user_repository, "User").delete(user.id)

            self.session.clear()
            logger.info("Deleted %s account %s (id=%s)", user.role, user.username, user.id)
            return True

    @staticmethod
    def _require(repository: Optional[Repository], name: str) -> Repository:
        if repository is None:
            raise RepositoryUnavailableError(f"{name} repository is not initialized.")
        return repository

    def _delete_customer(self, customer: User) -> None:
        customers = self._require(self._customer_repository, "Customer")

        cart = getattr(customer, "shopping_cart", None)
        if cart is not None and self._shopping_cart_repository is not None:
            self._shopping_cart_repository.delete(cart.id)
        for collection in (getattr(customer, "reviews", None), getattr(customer, "games_library", None)):
            if collection is not None:
                collection.clear()

        customers.delete(customer.id)

    # ------------------------------------------------------------------ helpers
    def is_email_used(self, email: str) -> bool:
        """
        Check whether `email` already belongs to an account.

        Which repositories are scanned depends on `storage_mode`; the two
        modes are alternatives, not a union.
        """

        if self.storage_mode is StorageMode.SINGLE_STORE:
            repositories = [self._user_repository]
        else:
            repositories = [
                self._admin_repository,
                self._developer_repository,
                self._customer_repository,
            ]
            if any(repository is None for repository in repositories):
                repositories.append(self._user_repository)

        for repository in repositories:
            if repository is None:
                continue
            if any(user.email == email for user in repository.get_all()):
                return True
        return False
