"""日志初始化。"""
import logging
from typing import Optional

from account_core.config import LOG_LEVEL

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level: Optional[str] = None) -> None:
    """按配置级别初始化根日志；调用方（界面或脚本）启动时调用一次。"""
    logging.basicConfig(level=(level or LOG_LEVEL).upper(), format=LOG_FORMAT)
