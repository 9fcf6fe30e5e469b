"""
User account entity models.

This module contains the database entities for customer and administrator
accounts and their extra role assignments.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field

from cafeteria_api.core.constants import RoleName

from ..base import Base, utc_now


class UserBase(Base):
    """Base fields for a user account."""

    first_name: str = Field(min_length=2, max_length=50, description="Given name")
    last_name: str = Field(min_length=2, max_length=50, description="Family name")
    email: str = Field(max_length=255, unique=True, index=True, description="Login e-mail, unique")
    phone: Optional[str] = Field(default=None, max_length=20, description="Contact phone number")
    birth_date: Optional[date] = Field(default=None, description="Date of birth")
    is_active: bool = Field(default=True, description="Inactive accounts cannot log in")
    role: str = Field(default=RoleName.CUSTOMER.value, max_length=50, description="Primary role name")


class User(UserBase, table=True):
    """Persistent user account.

    Table: users
    """

    __tablename__ = "users"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    password_hash: str = Field(max_length=255, description="bcrypt hash of the password")

    registered_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def __repr__(self) -> str:
        return f"User(id={self.id}, email={self.email}, role={self.role})"


class UserRole(Base, table=True):
    """Additional role granted to a user.

    Table: user_roles
    """

    __tablename__ = "user_roles"
    __table_args__ = (
        UniqueConstraint("user_id", "role_id", name="uq_user_roles_user_role"),
        {"extend_existing": True},
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    role_id: int = Field(foreign_key="roles.id", index=True)
    created_at: datetime = Field(default_factory=utc_now)

    def __repr__(self) -> str:
        return f"UserRole(user_id={self.user_id}, role_id={self.role_id})"
