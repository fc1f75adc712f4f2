from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

from application.services import StorageMode

BACKENDS = ("memory", "sqlite")


@dataclass(frozen=True)
class Settings:
    """Runtime configuration read from the environment (and `.env`)."""

    backend: str = "memory"
    db_path: str = "accounts.db"
    storage_mode: StorageMode = StorageMode.MULTI_STORE


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build `Settings` from environment variables.

    - ACCOUNTS_BACKEND: `memory` or `sqlite` (default `memory`).
    - DB_PATH: SQLite file used by the `sqlite` backend.
    - ACCOUNTS_STORAGE_MODE: `single` or `multi` (default `multi`).

    When `environ` is omitted, `.env` is loaded into `os.environ` first.
    """

    if environ is None:
        load_dotenv()
        environ = os.environ

    backend = environ.get("ACCOUNTS_BACKEND", "memory").strip().lower()
    if backend not in BACKENDS:
        raise ValueError(f"ACCOUNTS_BACKEND must be one of {', '.join(BACKENDS)}, got {backend!r}.")

    raw_mode = environ.get("ACCOUNTS_STORAGE_MODE", StorageMode.MULTI_STORE.value).strip().lower()
    try:
        storage_mode = StorageMode(raw_mode)
    except ValueError:
        raise ValueError(f"ACCOUNTS_STORAGE_MODE must be 'single' or 'multi', got {raw_mode!r}.") from None

    return Settings(
        backend=backend,
        db_path=environ.get("DB_PATH", "accounts.db"),
        storage_mode=storage_mode,
    )
