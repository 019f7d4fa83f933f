"""账号与凭据：校验、哈希、存储与账号操作。"""
from account_core.auth.errors import AccountExistsError, AccountHasDependentsError, SecretError, StorageError
from account_core.auth.models import Account, ExistsResult, OperationResult, ResultKind, StrengthLevel, StrengthResult, UserInfoResult
from account_core.auth.service import CredentialService
from account_core.auth.sql_store import SqlAccountStore
from account_core.auth.store import AccountStore, MemoryAccountStore

__all__ = [
    "Account",
    "AccountExistsError",
    "AccountHasDependentsError",
    "AccountStore",
    "CredentialService",
    "ExistsResult",
    "MemoryAccountStore",
    "OperationResult",
    "ResultKind",
    "SecretError",
    "SqlAccountStore",
    "StorageError",
    "StrengthLevel",
    "StrengthResult",
    "UserInfoResult",
]
