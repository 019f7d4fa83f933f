"""数据库引擎创建与表管理。"""
import logging
from typing import Optional

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

from account_core.auth.tables import Base
from account_core.config import DATABASE_ECHO, DATABASE_URL, ensure_dirs

logger = logging.getLogger(__name__)


def create_db_engine(url: Optional[str] = None, echo: Optional[bool] = None) -> Engine:
    """按连接串创建引擎（默认取配置）；SQLite 连接开启外键约束。"""
    url = url or DATABASE_URL
    echo = DATABASE_ECHO if echo is None else echo

    if not url.startswith("sqlite"):
        return create_engine(url, pool_pre_ping=True, pool_recycle=300, echo=echo)

    if url == DATABASE_URL:
        ensure_dirs()
    kwargs = {"connect_args": {"check_same_thread": False}, "echo": echo}
    if url in ("sqlite://", "sqlite:///:memory:"):
        # 内存库只存在于单个连接中
        kwargs["poolclass"] = StaticPool
    engine = create_engine(url, **kwargs)

    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


def create_tables(engine: Engine) -> None:
    """创建缺失的表。"""
    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables created successfully")
    except Exception as e:
        logger.error("Error creating database tables: %s", e)
        raise


def drop_tables(engine: Engine) -> None:
    """删除全部表（数据会丢失）。"""
    try:
        Base.metadata.drop_all(bind=engine)
        logger.info("Database tables dropped successfully")
    except Exception as e:
        logger.error("Error dropping database tables: %s", e)
        raise


def check_database_connection(engine: Engine) -> bool:
    """检查数据库是否可连接。"""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        logger.info("Database connection successful")
        return True
    except Exception as e:
        logger.error("Database connection failed: %s", e)
        return False
