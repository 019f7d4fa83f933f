"""账号存储接口与内存实现。"""
import logging
import threading
from abc import ABC, abstractmethod
from typing import Dict, Optional

from account_core.auth.errors import AccountExistsError, AccountHasDependentsError
from account_core.auth.models import Account

logger = logging.getLogger(__name__)


class AccountStore(ABC):
    """users 表的存储边界：按 login 查询、插入、改密、删除。

    insert 在登录名冲突时抛出 AccountExistsError，delete 在存在关联数据时
    抛出 AccountHasDependentsError；其他持久化失败抛出 StorageError。
    """

    @abstractmethod
    def get(self, login: str) -> Optional[Account]:
        ...

    @abstractmethod
    def exists(self, login: str) -> bool:
        ...

    @abstractmethod
    def insert(self, account: Account) -> None:
        ...

    @abstractmethod
    def update_password(self, login: str, password_hash: str, salt: str) -> int:
        """更新密码哈希与盐，返回受影响行数。"""
        ...

    @abstractmethod
    def delete(self, login: str) -> int:
        """删除用户，返回受影响行数。"""
        ...


class MemoryAccountStore(AccountStore):
    """进程内存储（测试与嵌入使用），以 login 为键。"""

    def __init__(self) -> None:
        self._accounts: Dict[str, Account] = {}
        self._dependents: Dict[str, int] = {}
        self._lock = threading.Lock()

    def get(self, login: str) -> Optional[Account]:
        with self._lock:
            account = self._accounts.get(login)
            return account.model_copy() if account else None

    def exists(self, login: str) -> bool:
        with self._lock:
            return login in self._accounts

    def insert(self, account: Account) -> None:
        with self._lock:
            if account.login in self._accounts:
                raise AccountExistsError(f"Duplicate entry '{account.login}' for key 'login'")
            self._accounts[account.login] = account.model_copy()

    def update_password(self, login: str, password_hash: str, salt: str) -> int:
        with self._lock:
            account = self._accounts.get(login)
            if account is None:
                return 0
            self._accounts[login] = account.model_copy(update={"password_hash": password_hash, "salt": salt})
            return 1

    def delete(self, login: str) -> int:
        with self._lock:
            if login not in self._accounts:
                return 0
            if self._dependents.get(login):
                raise AccountHasDependentsError(f"Cannot delete '{login}': a foreign key constraint fails")
            del self._accounts[login]
            return 1

    def add_dependent(self, login: str) -> bool:
        """登记一条引用该用户的关联数据（模拟外键）；用户不存在返回 False。"""
        with self._lock:
            if login not in self._accounts:
                return False
            self._dependents[login] = self._dependents.get(login, 0) + 1
            logger.debug("Dependent row added for %s", login)
            return True

    def remove_dependent(self, login: str) -> bool:
        """移除一条关联数据；没有可移除的返回 False。"""
        with self._lock:
            count = self._dependents.get(login, 0)
            if count == 0:
                return False
            if count == 1:
                del self._dependents[login]
            else:
                self._dependents[login] = count - 1
            logger.debug("Dependent row removed for %s", login)
            return True
