"""配置与日志初始化测试。"""
import logging

from account_core import config
from account_core.logging_setup import LOG_FORMAT, setup_logging


def test_policy_constants() -> None:
    assert (config.MIN_LOGIN_LENGTH, config.MAX_LOGIN_LENGTH) == (3, 50)
    assert (config.MIN_PASSWORD_LENGTH, config.MAX_PASSWORD_LENGTH) == (8, 64)
    assert config.SALT_BYTES == 16
    assert config.REDACTED_MARKER == "***"
    assert config.DATABASE_PATH.parent == config.DATA_DIR


def test_setup_logging_uses_given_level(monkeypatch) -> None:
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
    setup_logging("debug")
    setup_logging()
    assert calls[0] == {"level": "DEBUG", "format": LOG_FORMAT}
    assert calls[1]["level"] == config.LOG_LEVEL.upper()
