"""
Role entity models.

Roles name the permission sets an account can hold (``admin``, ``customer``,
``seller``). A user's primary role lives on the user row; additional roles are
granted through the ``user_roles`` association table.
"""

from __future__ import annotations

from typing import Optional

from sqlmodel import Field

from ..base import Base


class RoleBase(Base):
    """Base fields for a role."""

    name: str = Field(min_length=1, max_length=50, unique=True, index=True, description="Role name")
    description: Optional[str] = Field(default=None, max_length=255, description="What the role allows")


class Role(RoleBase, table=True):
    """Persistent role definition.

    Table: roles
    """

    __tablename__ = "roles"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)

    def __repr__(self) -> str:
        return f"Role(id={self.id}, name={self.name})"
