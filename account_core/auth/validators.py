"""登录名、密码、姓名格式校验（纯函数）。"""
import re
from typing import Optional

from account_core.config import (
    MAX_LOGIN_LENGTH,
    MAX_NAME_LENGTH,
    MAX_PASSWORD_LENGTH,
    MIN_LOGIN_LENGTH,
    MIN_NAME_LENGTH,
    MIN_PASSWORD_LENGTH,
    SPECIAL_CHARACTERS,
)

LOGIN_PATTERN = re.compile(r"[a-zA-Z0-9_]+")
# ё/Ё 不在 а-я/А-Я 范围内，不被接受
NAME_PATTERN = re.compile(r"[a-zA-Zа-яА-Я\-]+")

UPPER_PATTERN = re.compile(r"[A-Z]")
LOWER_PATTERN = re.compile(r"[a-z]")
DIGIT_PATTERN = re.compile(r"[0-9]")
SPECIAL_PATTERN = re.compile("[" + re.escape(SPECIAL_CHARACTERS) + "]")


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def validate_login(login: Optional[str]) -> bool:
    """3-50 个字符，仅字母、数字、下划线。"""
    if _is_blank(login):
        return False
    if not MIN_LOGIN_LENGTH <= len(login) <= MAX_LOGIN_LENGTH:
        return False
    return LOGIN_PATTERN.fullmatch(login) is not None


def validate_password(password: Optional[str]) -> bool:
    """8-64 个字符，且同时包含大写、小写、数字和特殊字符。"""
    if _is_blank(password):
        return False
    if not MIN_PASSWORD_LENGTH <= len(password) <= MAX_PASSWORD_LENGTH:
        return False
    return all(
        p.search(password)
        for p in (UPPER_PATTERN, LOWER_PATTERN, DIGIT_PATTERN, SPECIAL_PATTERN)
    )


def validate_name(value: Optional[str]) -> bool:
    """名或姓：2-50 个字符，仅拉丁/西里尔字母与连字符。"""
    if _is_blank(value):
        return False
    if not MIN_NAME_LENGTH <= len(value) <= MAX_NAME_LENGTH:
        return False
    return NAME_PATTERN.fullmatch(value) is not None
