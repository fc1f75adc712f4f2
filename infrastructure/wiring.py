from __future__ import annotations

import logging
from typing import Optional

from application.services import AccountService
from infrastructure.config import Settings, load_settings
from infrastructure.db.account_repository_sqlite import SqliteAccountRepository
from infrastructure.db.shopping_cart_repository_sqlite import SqliteShoppingCartRepository
from infrastructure.memory.in_memory_repository import InMemoryRepository

logger = logging.getLogger(__name__)


def build_account_service(settings: Optional[Settings] = None) -> AccountService:
    """
    Create an `AccountService` with one repository per entity kind.

    Uses `load_settings()` when no settings are passed.
    """

    if settings is None:
        settings = load_settings()

    if settings.backend == "sqlite":
        carts = SqliteShoppingCartRepository(settings.db_path)
        service = AccountService(
            SqliteAccountRepository(settings.db_path, "users", carts),
            SqliteAccountRepository(settings.db_path, "admins"),
            SqliteAccountRepository(settings.db_path, "developers"),
            SqliteAccountRepository(settings.db_path, "customers", carts),
            carts,
            storage_mode=settings.storage_mode,
        )
    else:
        service = AccountService(
            InMemoryRepository(),
            InMemoryRepository(),
            InMemoryRepository(),
            InMemoryRepository(),
            InMemoryRepository(),
            storage_mode=settings.storage_mode,
        )

    logger.info(
        "Account service ready (backend=%s, storage_mode=%s)",
        settings.backend,
        settings.storage_mode.value,
    )
    return service
