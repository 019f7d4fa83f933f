"""users 表 ORM 映射。"""
from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import declarative_base

from account_core.auth.models import Account
from account_core.config import MAX_LOGIN_LENGTH, MAX_NAME_LENGTH

Base = declarative_base()


class UserRecord(Base):
    """users 表的一行；password 列保存哈希而非明文。"""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    login = Column(String(MAX_LOGIN_LENGTH), unique=True, nullable=False, index=True)
    password = Column(String(255), nullable=False, comment="Base64 SHA-256 hash")
    salt = Column(String(255), nullable=False)
    name = Column(String(MAX_NAME_LENGTH), nullable=False)
    surname = Column(String(MAX_NAME_LENGTH), nullable=False)

    def to_account(self) -> Account:
        return Account(
            id=self.id,
            login=self.login,
            password_hash=self.password,
            salt=self.salt,
            name=self.name,
            surname=self.surname,
        )

    @classmethod
    def from_account(cls, account: Account) -> "UserRecord":
        return cls(
            login=account.login,
            password=account.password_hash,
            salt=account.salt,
            name=account.name,
            surname=account.surname,
        )

    def __repr__(self) -> str:
        return f"<UserRecord(id={self.id}, login={self.login})>"
