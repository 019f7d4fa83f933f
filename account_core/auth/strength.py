"""密码强度评分与密码要求说明。

评分与 validate_password 相互独立：评分只统计满足的条件数，
不检查长度上限，也不判定通过与否。
"""
from account_core.auth.models import StrengthLevel, StrengthResult
from account_core.auth.validators import (
    DIGIT_PATTERN,
    LOWER_PATTERN,
    SPECIAL_PATTERN,
    UPPER_PATTERN,
)
from account_core.config import MAX_PASSWORD_LENGTH, MIN_PASSWORD_LENGTH, SPECIAL_CHARACTERS

_LEVELS = {
    0: (StrengthLevel.VERY_WEAK, "Очень слабый пароль"),
    1: (StrengthLevel.VERY_WEAK, "Очень слабый пароль"),
    2: (StrengthLevel.WEAK, "Слабый пароль"),
    3: (StrengthLevel.MEDIUM, "Средний пароль"),
    4: (StrengthLevel.STRONG, "Сильный пароль"),
    5: (StrengthLevel.VERY_STRONG, "Очень сильный пароль"),
}


def check_password_strength(password: str) -> StrengthResult:
    """统计满足的条件数：长度≥8、大写、小写、数字、特殊字符。"""
    if not password:
        return StrengthResult(score=0, label=StrengthLevel.EMPTY, message="Пустой пароль")
    score = sum([
        len(password) >= MIN_PASSWORD_LENGTH,
        UPPER_PATTERN.search(password) is not None,
        LOWER_PATTERN.search(password) is not None,
        DIGIT_PATTERN.search(password) is not None,
        SPECIAL_PATTERN.search(password) is not None,
    ])
    label, message = _LEVELS[score]
    return StrengthResult(score=score, label=label, message=message)


def get_password_requirements() -> str:
    """密码策略说明（多行文本，界面原样展示）。"""
    return (
        "Требования к паролю:\n"
        f"• Длина: от {MIN_PASSWORD_LENGTH} до {MAX_PASSWORD_LENGTH} символов\n"
        "• Минимум одна заглавная буква\n"
        "• Минимум одна строчная буква\n"
        "• Минимум одна цифра\n"
        f"• Минимум один специальный символ ({SPECIAL_CHARACTERS})\n"
        "• Без пробелов"
    )
