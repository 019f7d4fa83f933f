"""基于 SQLAlchemy 的账号存储（users 表）。"""
import logging
from contextlib import contextmanager
from typing import Generator, Optional

from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from account_core.auth.errors import AccountExistsError, AccountHasDependentsError, StorageError
from account_core.auth.models import Account
from account_core.auth.store import AccountStore
from account_core.auth.tables import UserRecord

logger = logging.getLogger(__name__)

# MySQL 错误号 / PostgreSQL SQLSTATE
_UNIQUE_CODES = {1062, "23505"}
_FOREIGN_KEY_CODES = {1451, 1217, "23503"}


def _error_code(exc: IntegrityError):
    orig = exc.orig
    code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if code is None:
        args = getattr(orig, "args", ())
        if args and isinstance(args[0], int):
            code = args[0]
    return code


def _error_message(exc: SQLAlchemyError) -> str:
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)


def translate_integrity_error(exc: IntegrityError) -> StorageError:
    """按驱动错误码（SQLite 按错误文本）区分唯一约束与外键约束冲突。"""
    code = _error_code(exc)
    message = _error_message(exc)
    upper = message.upper()
    if code in _UNIQUE_CODES or "UNIQUE CONSTRAINT" in upper or "DUPLICATE" in upper:
        return AccountExistsError(message)
    if code in _FOREIGN_KEY_CODES or "FOREIGN KEY" in upper:
        return AccountHasDependentsError(message)
    return StorageError(message)


class SqlAccountStore(AccountStore):
    """users 表存储：每次调用独立会话，成功提交，异常回滚，始终关闭。"""

    def __init__(self, engine: Engine):
        self.engine = engine
        self._session_factory = sessionmaker(
            bind=engine,
            autoflush=False,
            expire_on_commit=False,
        )

    @contextmanager
    def session_scope(self) -> Generator[Session, None, None]:
        """会话作用域；SQLAlchemy 异常转换为 StorageError 及其子类。"""
        db = self._session_factory()
        try:
            yield db
            db.commit()
        except IntegrityError as e:
            db.rollback()
            logger.warning("Integrity constraint violated: %s", _error_message(e))
            raise translate_integrity_error(e) from e
        except SQLAlchemyError as e:
            db.rollback()
            logger.error("Database error: %s", _error_message(e))
            raise StorageError(_error_message(e)) from e
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def get(self, login: str) -> Optional[Account]:
        with self.session_scope() as db:
            record = db.query(UserRecord).filter(UserRecord.login == login).first()
            return record.to_account() if record else None

    def exists(self, login: str) -> bool:
        with self.session_scope() as db:
            return db.query(UserRecord.id).filter(UserRecord.login == login).count() > 0

    def insert(self, account: Account) -> None:
        with self.session_scope() as db:
            db.add(UserRecord.from_account(account))
            # flush 使约束冲突在作用域内抛出
            db.flush()

    def update_password(self, login: str, password_hash: str, salt: str) -> int:
        with self.session_scope() as db:
            return (
                db.query(UserRecord)
                .filter(UserRecord.login == login)
                .update({UserRecord.password: password_hash, UserRecord.salt: salt}, synchronize_session=False)
            )

    def delete(self, login: str) -> int:
        with self.session_scope() as db:
            return (
                db.query(UserRecord)
                .filter(UserRecord.login == login)
                .delete(synchronize_session=False)
            )
