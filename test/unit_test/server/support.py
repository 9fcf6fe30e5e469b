"""Shared constants and helpers for API tests."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

API = "/api/v1"

# Reference rows are seeded in declaration order, see cafeteria_api.core.constants
PENDING, PROCESSING, SHIPPED, DELIVERED, CANCELLED = 1, 2, 3, 4, 5
CASH, CREDIT_CARD, DEBIT_CARD, TRANSFER = 1, 2, 3, 4


@dataclass
class Account:
    """A persisted user or seller together with a bearer token for it."""

    entity: Any
    token: str

    @property
    def id(self) -> int:
        return self.entity.id

    @property
    def headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}
