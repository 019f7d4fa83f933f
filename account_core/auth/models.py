"""账号与操作结果数据模型。"""
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class Account(BaseModel):
    """用户账号（users 表的一行）。"""
    id: Optional[int] = Field(None, description="数据库自增 ID；内存存储为 None")
    login: str = Field(..., description="登录名，唯一")
    password_hash: str = Field(..., description="密码哈希（Base64）")
    salt: str = Field(..., description="盐（Base64）")
    name: str = Field(..., description="名")
    surname: str = Field(..., description="姓")

    def to_record(self) -> Dict[str, Any]:
        """按 users 表列名导出字段。"""
        record: Dict[str, Any] = {}
        if self.id is not None:
            record["id"] = self.id
        record.update(
            login=self.login,
            password=self.password_hash,
            salt=self.salt,
            name=self.name,
            surname=self.surname,
        )
        return record


class ResultKind(str, Enum):
    """操作结果类别。"""
    OK = "ok"
    FORMAT_ERROR = "format_error"        # 输入格式不符合策略
    NOT_FOUND = "not_found"
    WRONG_PASSWORD = "wrong_password"
    ALREADY_EXISTS = "already_exists"    # 登录名冲突
    HAS_DEPENDENTS = "has_dependents"    # 存在关联数据，无法删除
    STORAGE_ERROR = "storage_error"
    SYSTEM_ERROR = "system_error"


class OperationResult(BaseModel):
    """注册、登录、改密、删除的结果。"""
    success: bool
    kind: ResultKind
    message: str

    model_config = ConfigDict(use_enum_values=True)


class ExistsResult(BaseModel):
    """用户是否存在。"""
    exists: bool
    kind: ResultKind
    message: str

    model_config = ConfigDict(use_enum_values=True)


class UserInfoResult(BaseModel):
    """用户信息；password 与 salt 已被替换。"""
    user: Optional[Dict[str, Any]] = None
    kind: ResultKind
    message: str

    model_config = ConfigDict(use_enum_values=True)

    @property
    def success(self) -> bool:
        return self.user is not None


class StrengthLevel(str, Enum):
    """密码强度等级。"""
    EMPTY = "empty"
    VERY_WEAK = "very weak"
    WEAK = "weak"
    MEDIUM = "medium"
    STRONG = "strong"
    VERY_STRONG = "very strong"


class StrengthResult(BaseModel):
    """密码强度评分 0-5。"""
    score: int = Field(..., ge=0, le=5)
    label: StrengthLevel
    message: str = Field(..., description="界面展示文案")

    model_config = ConfigDict(use_enum_values=True)
