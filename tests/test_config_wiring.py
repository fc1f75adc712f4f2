import os
import tempfile
import unittest

from application.services import AccountService, StorageMode
from infrastructure.config import Settings, load_settings
from infrastructure.db.account_repository_sqlite import SqliteAccountRepository
from infrastructure.memory.in_memory_repository import InMemoryRepository
from infrastructure.wiring import build_account_service


class LoadSettingsTests(unittest.TestCase):
    def test_defaults(self):
        settings = load_settings({})
        self.assertEqual(settings, Settings())
        self.assertEqual(settings.storage_mode, StorageMode.MULTI_STORE)

    def test_values_from_environment(self):
        settings = load_settings(
            {
                "ACCOUNTS_BACKEND": "SQLite",
                "DB_PATH": "/tmp/store.db",
                "ACCOUNTS_STORAGE_MODE": "single",
            }
        )
        self.assertEqual(settings.backend, "sqlite")
        self.assertEqual(settings.db_path, "/tmp/store.db")
        self.assertIs(settings.storage_mode, StorageMode.SINGLE_STORE)

    def test_invalid_values(self):
        with self.assertRaises(ValueError):
            load_settings({"ACCOUNTS_BACKEND": "redis"})
        with self.assertRaises(ValueError):
            load_settings({"ACCOUNTS_STORAGE_MODE": "both"})


class BuildAccountServiceTests(unittest.TestCase):
    def test_memory_backend(self):
        service = build_account_service(Settings(backend="memory"))
        self.assertIsInstance(service, AccountService)
        self.assertIsInstance(service._customer_repository, InMemoryRepository)

        self.assertTrue(service.sign_up("cat", "cat@gmail.com", "pw"))
        self.assertTrue(service.log_in("cat@gmail.com", "pw"))

    def test_sqlite_backend(self):
        handle, db_path = tempfile.mkstemp(suffix=".db")
        os.close(handle)
        self.addCleanup(os.remove, db_path)

        service = build_account_service(
            Settings(backend="sqlite", db_path=db_path, storage_mode=StorageMode.SINGLE_STORE)
        )
        self.assertIsInstance(service._admin_repository, SqliteAccountRepository)
        self.assertIs(service.storage_mode, StorageMode.SINGLE_STORE)

        service.sign_up("ann", "ann@adm.com", "pw")
        reopened = build_account_service(Settings(backend="sqlite", db_path=db_path))
        self.assertTrue(reopened.log_in("ann@adm.com", "pw"))


if __name__ == "__main__":
    unittest.main()
