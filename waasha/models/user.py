from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from sqlmodel import SQLModel, Field

# largest id a 64-bit INTEGER primary key can hold
MAX_ID = 2**63 - 1


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AccountKind(str, Enum):
    CLIENT = "Client"
    PROVIDER = "Provider"


class AccountBase(SQLModel):
    username: str = Field(index=True, unique=True)
    email: str = Field(index=True, unique=True)
    phone_number: Optional[str] = None
    user_type: AccountKind = AccountKind.CLIENT


class Account(AccountBase, table=True):
    __tablename__ = "accounts"

    id: Optional[int] = Field(default=None, primary_key=True)
    password_hash: str
    created_at: datetime = Field(default_factory=utcnow)


# =========================
# SCHEMAS
# =========================

class AccountCreate(SQLModel):
    username: str
    email: str
    password: str
    phone_number: Optional[str] = None
    user_type: AccountKind = AccountKind.CLIENT


class LoginRequest(SQLModel):
    email: str
    password: str


class AccountRead(AccountBase):
    """Outward view of an account. Never carries the password hash."""

    id: int
    created_at: datetime


class AuthUser(AccountRead):
    token: str
