"""存储与密钥相关异常。"""


class StorageError(Exception):
    """持久化失败；消息为底层数据库错误文本。"""


class AccountExistsError(StorageError):
    """插入时登录名违反唯一约束。"""


class AccountHasDependentsError(StorageError):
    """删除时存在引用该用户的关联数据（外键约束）。"""


class SecretError(Exception):
    """随机源或哈希计算失败，属于系统错误。"""
