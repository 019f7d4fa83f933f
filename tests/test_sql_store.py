"""SQLite 上的 users 表存储测试。"""
import tempfile
from pathlib import Path

import pytest
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError

from account_core.auth.errors import AccountExistsError, AccountHasDependentsError, StorageError
from account_core.auth.models import Account, ResultKind
from account_core.auth.service import CredentialService
from account_core.auth.sql_store import SqlAccountStore, translate_integrity_error
from account_core.database import check_database_connection, create_db_engine, create_tables, drop_tables

PASSWORD = "ValidPass1!"


def _open(tmp: str):
    engine = create_db_engine(f"sqlite:///{Path(tmp) / 'accounts.db'}", echo=False)
    create_tables(engine)
    return engine


def _account(login: str) -> Account:
    return Account(login=login, password_hash="aGFzaA==", salt="c2FsdA==", name="Anna", surname="Lee")


def test_store_insert_get_update_delete() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        engine = _open(tmp)
        store = SqlAccountStore(engine)
        assert store.exists("alice") is False
        store.insert(_account("alice"))
        assert store.exists("alice") is True
        account = store.get("alice")
        assert account.id is not None
        assert account.password_hash == "aGFzaA=="
        assert store.update_password("alice", "bmV3", "bmV3c2FsdA==") == 1
        assert store.get("alice").salt == "bmV3c2FsdA=="
        assert store.update_password("bob", "bmV3", "bmV3c2FsdA==") == 0
        assert store.delete("alice") == 1
        assert store.get("alice") is None
        assert store.delete("alice") == 0
        engine.dispose()


def test_store_unique_login() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        engine = _open(tmp)
        store = SqlAccountStore(engine)
        store.insert(_account("alice"))
        with pytest.raises(AccountExistsError):
            store.insert(_account("alice"))
        with engine.connect() as conn:
            assert conn.execute(text("SELECT COUNT(*) FROM users")).scalar() == 1
        engine.dispose()


def test_store_delete_with_dependents() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        engine = _open(tmp)
        store = SqlAccountStore(engine)
        store.insert(_account("owner_1"))
        with engine.begin() as conn:
            conn.execute(text(
                "CREATE TABLE tasks (id INTEGER PRIMARY KEY, owner VARCHAR(50) NOT NULL REFERENCES users(login))"
            ))
            conn.execute(text("INSERT INTO tasks (owner) VALUES ('owner_1')"))
        with pytest.raises(AccountHasDependentsError):
            store.delete("owner_1")
        assert store.exists("owner_1") is True
        engine.dispose()


def test_service_over_sqlite() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        engine = _open(tmp)
        service = CredentialService(SqlAccountStore(engine))
        assert service.register("testuser_1", PASSWORD, "Иван", "Иванов").success
        assert service.register("testuser_1", PASSWORD, "Иван", "Иванов").kind == ResultKind.ALREADY_EXISTS
        assert service.login("testuser_1", PASSWORD).message == "Успешный вход"
        info = service.get_user_info("testuser_1")
        assert set(info.user) == {"id", "login", "password", "salt", "name", "surname"}
        assert info.user["password"] == "***"
        assert info.user["name"] == "Иван"
        assert service.update_password("testuser_1", "NewPass2@").success
        assert service.login("testuser_1", PASSWORD).kind == ResultKind.WRONG_PASSWORD
        assert service.delete_user("testuser_1").success
        assert service.is_user_exists("testuser_1").exists is False
        engine.dispose()


def test_service_delete_blocked_by_tasks() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        engine = _open(tmp)
        service = CredentialService(SqlAccountStore(engine))
        service.register("owner_1", PASSWORD, "Anna", "Lee")
        with engine.begin() as conn:
            conn.execute(text(
                "CREATE TABLE tasks (id INTEGER PRIMARY KEY, owner VARCHAR(50) NOT NULL REFERENCES users(login))"
            ))
            conn.execute(text("INSERT INTO tasks (owner) VALUES ('owner_1')"))
        result = service.delete_user("owner_1")
        assert result.kind == ResultKind.HAS_DEPENDENTS
        assert result.message == "Невозможно удалить пользователя: имеются связанные данные"
        engine.dispose()


def test_missing_table_is_storage_error() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        engine = _open(tmp)
        drop_tables(engine)
        store = SqlAccountStore(engine)
        with pytest.raises(StorageError):
            store.exists("alice")
        result = CredentialService(store).login("alice", PASSWORD)
        assert result.kind == ResultKind.STORAGE_ERROR
        assert result.message.startswith("Ошибка базы данных: ")
        engine.dispose()


def test_in_memory_engine() -> None:
    engine = create_db_engine("sqlite://", echo=False)
    create_tables(engine)
    assert check_database_connection(engine) is True
    store = SqlAccountStore(engine)
    store.insert(_account("alice"))
    assert store.exists("alice") is True
    engine.dispose()


class _MySQLError(Exception):
    pass


class _PgError(Exception):
    def __init__(self, pgcode: str, message: str):
        super().__init__(message)
        self.pgcode = pgcode


def test_translate_integrity_error_by_driver_code() -> None:
    mysql_dup = IntegrityError("INSERT", {}, _MySQLError(1062, "entry taken"))
    mysql_fk = IntegrityError("DELETE", {}, _MySQLError(1451, "parent row"))
    pg_dup = IntegrityError("INSERT", {}, _PgError("23505", "key taken"))
    pg_fk = IntegrityError("DELETE", {}, _PgError("23503", "still referenced"))
    other = IntegrityError("INSERT", {}, _PgError("23502", "null value in column"))
    assert isinstance(translate_integrity_error(mysql_dup), AccountExistsError)
    assert isinstance(translate_integrity_error(mysql_fk), AccountHasDependentsError)
    assert isinstance(translate_integrity_error(pg_dup), AccountExistsError)
    assert isinstance(translate_integrity_error(pg_fk), AccountHasDependentsError)
    translated = translate_integrity_error(other)
    assert type(translated) is StorageError
    assert str(translated) == "null value in column"
