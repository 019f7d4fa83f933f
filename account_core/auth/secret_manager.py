"""盐生成、密码哈希与校验。

哈希方案：Base64(SHA-256(UTF-8(password + salt)))，单轮、无分隔符。
已存储的哈希依赖此格式，更换算法需同时迁移数据。
"""
import base64
import hashlib
import logging
import secrets

from account_core.auth.errors import SecretError
from account_core.config import SALT_BYTES

logger = logging.getLogger(__name__)


def generate_salt() -> str:
    """生成 16 字节随机盐（Base64）。"""
    try:
        salt_bytes = secrets.token_bytes(SALT_BYTES)
    except (OSError, NotImplementedError) as e:
        logger.error("Secure random source unavailable: %s", e)
        raise SecretError(f"Ошибка генерации соли: {e}") from e
    return base64.b64encode(salt_bytes).decode("ascii")


def hash_password(password: str, salt: str) -> str:
    """计算密码哈希；密码或盐为空时抛出 ValueError。"""
    if not password:
        raise ValueError("Пароль не может быть пустым")
    if not salt:
        raise ValueError("Соль не может быть пустой")
    try:
        data = (password + salt).encode("utf-8")
    except UnicodeEncodeError as e:
        raise SecretError(f"Ошибка хеширования пароля: {e}") from e
    return base64.b64encode(hashlib.sha256(data).digest()).decode("ascii")


def verify_password(password: str, salt: str, stored_hash: str) -> bool:
    """重新计算哈希并与存储值比较；任一输入为空返回 False。"""
    if not password or not salt or not stored_hash:
        return False
    try:
        computed = hash_password(password, salt)
    except SecretError:
        return False
    # 普通相等比较，非常量时间
    return computed == stored_hash
