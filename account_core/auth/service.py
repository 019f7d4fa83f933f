"""账号操作：注册、登录、改密、删除、查询。

每个操作都返回结果对象而不抛异常；message 文案由界面原样展示。
"""
import logging
from typing import Optional

from account_core.auth.errors import AccountExistsError, AccountHasDependentsError, StorageError
from account_core.auth.models import (
    Account,
    ExistsResult,
    OperationResult,
    ResultKind,
    StrengthResult,
    UserInfoResult,
)
from account_core.auth.secret_manager import generate_salt, hash_password, verify_password
from account_core.auth.store import AccountStore
from account_core.auth.strength import check_password_strength, get_password_requirements
from account_core.auth.validators import validate_login, validate_name, validate_password
from account_core.config import (
    MAX_LOGIN_LENGTH,
    MAX_PASSWORD_LENGTH,
    MIN_LOGIN_LENGTH,
    MIN_PASSWORD_LENGTH,
    REDACTED_MARKER,
)

logger = logging.getLogger(__name__)

MSG_LOGIN_RULES = (
    f"Логин должен содержать от {MIN_LOGIN_LENGTH} до {MAX_LOGIN_LENGTH} символов "
    "(только буквы, цифры и подчеркивания)"
)
MSG_PASSWORD_RULES = (
    f"Пароль должен содержать от {MIN_PASSWORD_LENGTH} до {MAX_PASSWORD_LENGTH} символов, "
    "включая заглавные и строчные буквы, цифры и специальные символы"
)
MSG_NAME_RULES = "Имя должно содержать от 2 до 50 символов (только буквы и дефисы)"
MSG_SURNAME_RULES = "Фамилия должна содержать от 2 до 50 символов (только буквы и дефисы)"
MSG_BAD_LOGIN = "Неверный формат логина"
MSG_EMPTY_PASSWORD = "Пароль не может быть пустым"
MSG_WEAK_NEW_PASSWORD = "Новый пароль не соответствует требованиям безопасности"

MSG_ALREADY_EXISTS = "Пользователь с таким логином уже существует"
MSG_REGISTERED = "Пользователь успешно зарегистрирован"
MSG_LOGGED_IN = "Успешный вход"
MSG_WRONG_PASSWORD = "Неверный пароль"
MSG_NOT_FOUND = "Пользователь не найден"
MSG_EXISTS = "Пользователь существует"
MSG_NOT_EXISTS = "Пользователь не существует"
MSG_PASSWORD_UPDATED = "Пароль успешно обновлен"
MSG_UPDATE_FAILED = "Не удалось обновить пароль"
MSG_DELETED = "Пользователь успешно удален"
MSG_DELETE_FAILED = "Не удалось удалить пользователя"
MSG_HAS_DEPENDENTS = "Невозможно удалить пользователя: имеются связанные данные"
MSG_INFO_FETCHED = "Данные пользователя получены"


def _ok(message: str) -> OperationResult:
    return OperationResult(success=True, kind=ResultKind.OK, message=message)


def _fail(kind: ResultKind, message: str) -> OperationResult:
    return OperationResult(success=False, kind=kind, message=message)


def _storage_failure(e: StorageError) -> OperationResult:
    return _fail(ResultKind.STORAGE_ERROR, f"Ошибка базы данных: {e}")


class CredentialService:
    """账号服务：只持有存储引用，调用之间不保留状态。"""

    def __init__(self, store: Optional[AccountStore] = None):
        if store is None:
            from account_core.auth.sql_store import SqlAccountStore
            from account_core.database import create_db_engine, create_tables

            engine = create_db_engine()
            create_tables(engine)
            store = SqlAccountStore(engine)
        self.store = store

    def register(self, login: str, password: str, name: str, surname: str) -> OperationResult:
        """注册：依次校验登录名、密码、名、姓，再查重并写入。"""
        if not validate_login(login):
            return _fail(ResultKind.FORMAT_ERROR, MSG_LOGIN_RULES)
        if not validate_password(password):
            return _fail(ResultKind.FORMAT_ERROR, MSG_PASSWORD_RULES)
        if not validate_name(name):
            return _fail(ResultKind.FORMAT_ERROR, MSG_NAME_RULES)
        if not validate_name(surname):
            return _fail(ResultKind.FORMAT_ERROR, MSG_SURNAME_RULES)
        try:
            if self.store.exists(login):
                return _fail(ResultKind.ALREADY_EXISTS, MSG_ALREADY_EXISTS)
            salt = generate_salt()
            account = Account(
                login=login,
                password_hash=hash_password(password, salt),
                salt=salt,
                name=name,
                surname=surname,
            )
            self.store.insert(account)
        except AccountExistsError:
            # 并发注册绕过了查重，由唯一约束兜底
            logger.info("Concurrent registration lost for %s", login)
            return _fail(ResultKind.ALREADY_EXISTS, MSG_ALREADY_EXISTS)
        except StorageError as e:
            return _storage_failure(e)
        except Exception as e:
            logger.exception("Registration failed for %s", login)
            return _fail(ResultKind.SYSTEM_ERROR, f"Ошибка регистрации: {e}")
        logger.info("User %s registered", login)
        return _ok(MSG_REGISTERED)

    def login(self, login: str, password: str) -> OperationResult:
        """登录：用户不存在与密码错误返回不同结果。"""
        if not validate_login(login):
            return _fail(ResultKind.FORMAT_ERROR, MSG_BAD_LOGIN)
        if not password:
            return _fail(ResultKind.FORMAT_ERROR, MSG_EMPTY_PASSWORD)
        try:
            account = self.store.get(login)
            if account is None:
                return _fail(ResultKind.NOT_FOUND, MSG_NOT_FOUND)
            valid = verify_password(password, account.salt, account.password_hash)
        except StorageError as e:
            return _storage_failure(e)
        except Exception as e:
            logger.exception("Login failed for %s", login)
            return _fail(ResultKind.SYSTEM_ERROR, f"Ошибка системы: {e}")
        if not valid:
            logger.info("Wrong password for %s", login)
            return _fail(ResultKind.WRONG_PASSWORD, MSG_WRONG_PASSWORD)
        return _ok(MSG_LOGGED_IN)

    def update_password(self, login: str, new_password: str) -> OperationResult:
        """修改密码：每次生成新盐。"""
        if not validate_login(login):
            return _fail(ResultKind.FORMAT_ERROR, MSG_BAD_LOGIN)
        if not validate_password(new_password):
            return _fail(ResultKind.FORMAT_ERROR, MSG_WEAK_NEW_PASSWORD)
        try:
            if not self.store.exists(login):
                return _fail(ResultKind.NOT_FOUND, MSG_NOT_EXISTS)
            salt = generate_salt()
            rows = self.store.update_password(login, hash_password(new_password, salt), salt)
        except StorageError as e:
            return _storage_failure(e)
        except Exception as e:
            logger.exception("Password update failed for %s", login)
            return _fail(ResultKind.SYSTEM_ERROR, f"Ошибка обновления пароля: {e}")
        if rows != 1:
            logger.warning("Password update for %s affected %d rows", login, rows)
            return _fail(ResultKind.NOT_FOUND, MSG_UPDATE_FAILED)
        logger.info("Password updated for %s", login)
        return _ok(MSG_PASSWORD_UPDATED)

    def delete_user(self, login: str) -> OperationResult:
        """删除用户；有关联数据时返回 HAS_DEPENDENTS。"""
        if not validate_login(login):
            return _fail(ResultKind.FORMAT_ERROR, MSG_BAD_LOGIN)
        try:
            if not self.store.exists(login):
                return _fail(ResultKind.NOT_FOUND, MSG_NOT_EXISTS)
            rows = self.store.delete(login)
        except AccountHasDependentsError:
            logger.info("User %s still has dependent rows", login)
            return _fail(ResultKind.HAS_DEPENDENTS, MSG_HAS_DEPENDENTS)
        except StorageError as e:
            return _storage_failure(e)
        except Exception as e:
            logger.exception("Deletion failed for %s", login)
            return _fail(ResultKind.SYSTEM_ERROR, f"Ошибка удаления: {e}")
        if rows != 1:
            logger.warning("Deletion of %s affected %d rows", login, rows)
            return _fail(ResultKind.NOT_FOUND, MSG_DELETE_FAILED)
        logger.info("User %s deleted", login)
        return _ok(MSG_DELETED)

    def is_user_exists(self, login: str) -> ExistsResult:
        """登录名格式错误时返回 FORMAT_ERROR，而不是“不存在”。"""
        if not validate_login(login):
            return ExistsResult(exists=False, kind=ResultKind.FORMAT_ERROR, message=MSG_BAD_LOGIN)
        try:
            exists = self.store.exists(login)
        except StorageError as e:
            return ExistsResult(exists=False, kind=ResultKind.STORAGE_ERROR, message=f"Ошибка базы данных: {e}")
        except Exception as e:
            logger.exception("Existence check failed for %s", login)
            return ExistsResult(exists=False, kind=ResultKind.SYSTEM_ERROR, message=f"Ошибка проверки: {e}")
        if exists:
            return ExistsResult(exists=True, kind=ResultKind.OK, message=MSG_EXISTS)
        return ExistsResult(exists=False, kind=ResultKind.NOT_FOUND, message=MSG_NOT_EXISTS)

    def get_user_info(self, login: str) -> UserInfoResult:
        """用户信息：password 与 salt 固定替换为 ***。"""
        if not validate_login(login):
            return UserInfoResult(kind=ResultKind.FORMAT_ERROR, message=MSG_BAD_LOGIN)
        try:
            account = self.store.get(login)
        except StorageError as e:
            return UserInfoResult(kind=ResultKind.STORAGE_ERROR, message=f"Ошибка базы данных: {e}")
        except Exception as e:
            logger.exception("Fetching info failed for %s", login)
            return UserInfoResult(kind=ResultKind.SYSTEM_ERROR, message=f"Ошибка получения данных: {e}")
        if account is None:
            return UserInfoResult(kind=ResultKind.NOT_FOUND, message=MSG_NOT_FOUND)
        record = account.to_record()
        record["password"] = REDACTED_MARKER
        record["salt"] = REDACTED_MARKER
        return UserInfoResult(user=record, kind=ResultKind.OK, message=MSG_INFO_FETCHED)

    @staticmethod
    def check_password_strength(password: str) -> StrengthResult:
        return check_password_strength(password)

    @staticmethod
    def get_password_requirements() -> str:
        return get_password_requirements()
