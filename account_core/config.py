"""账号核心全局配置与路径。"""
import os
from pathlib import Path

# 项目根目录（account_core 包所在目录的上一级）
ROOT_DIR = Path(__file__).resolve().parent.parent
# 数据目录：默认 SQLite 数据库文件
DATA_DIR = ROOT_DIR / "data"
DATABASE_PATH = DATA_DIR / "accounts.db"

# 数据库连接串，可用环境变量覆盖（如 mysql+pymysql://...）
DATABASE_URL = os.environ.get("ACCOUNT_CORE_DATABASE_URL", f"sqlite:///{DATABASE_PATH}")
DATABASE_ECHO = os.environ.get("ACCOUNT_CORE_DATABASE_ECHO", "").lower() in ("1", "true", "yes")

# 日志
LOG_LEVEL = os.environ.get("ACCOUNT_CORE_LOG_LEVEL", "INFO")

# 登录名
MIN_LOGIN_LENGTH = 3
MAX_LOGIN_LENGTH = 50

# 密码
MIN_PASSWORD_LENGTH = 8
MAX_PASSWORD_LENGTH = 64
SPECIAL_CHARACTERS = "!@#$%^&*()_+-=[]{};':\"\\|,.<>/?"

# 姓名
MIN_NAME_LENGTH = 2
MAX_NAME_LENGTH = 50

# 盐长度（字节）
SALT_BYTES = 16

# 用户信息中密码与盐的替换值
REDACTED_MARKER = "***"


def ensure_dirs() -> None:
    """确保数据目录存在。"""
    DATA_DIR.mkdir(parents=True, exist_ok=True)
