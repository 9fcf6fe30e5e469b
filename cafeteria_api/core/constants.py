"""
Domain constants for the cafeteria ordering platform.

Order status names, tax rate, cart limits and pagination defaults shared by
repositories, services and the API client.
"""

from decimal import ROUND_HALF_UP, Decimal
from enum import Enum

TAX_RATE = Decimal("0.16")
MONEY_QUANTUM = Decimal("0.01")

MIN_CART_QUANTITY = 1
MAX_CART_QUANTITY = 10

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


class RoleName(str, Enum):
    """Role names seeded into the ``roles`` table."""

    ADMIN = "admin"
    CUSTOMER = "customer"
    SELLER = "seller"


class OrderStatusName(str, Enum):
    """Order status names seeded into the ``order_statuses`` table (ids 1..5)."""

    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


FINAL_ORDER_STATUSES = (OrderStatusName.DELIVERED, OrderStatusName.CANCELLED)


class DeliveryType(str, Enum):
    """How an order reaches the customer."""

    LOCAL = "local"
    DELIVERY = "delivery"
    TAKEAWAY = "takeaway"
    DINE_IN = "dine_in"


class TableStatus(str, Enum):
    """Lifecycle state of a dining table."""

    AVAILABLE = "available"
    OCCUPIED = "occupied"
    RESERVED = "reserved"
    OUT_OF_SERVICE = "out_of_service"


class PrincipalKind(str, Enum):
    """Kind of account an access token was issued to."""

    USER = "user"
    SELLER = "seller"


# Reference data inserted by the initial migration and by init_db() in development.
SEED_ROLES = (
    (RoleName.ADMIN, "Full administrative access"),
    (RoleName.CUSTOMER, "Customer placing orders"),
    (RoleName.SELLER, "Counter staff and product owners"),
)

SEED_ORDER_STATUSES = (
    (OrderStatusName.PENDING, "Order received, awaiting preparation"),
    (OrderStatusName.PROCESSING, "Order is being prepared"),
    (OrderStatusName.SHIPPED, "Order is on its way"),
    (OrderStatusName.DELIVERED, "Order handed to the customer"),
    (OrderStatusName.CANCELLED, "Order cancelled"),
)

SEED_PAYMENT_METHODS = (
    ("cash", "Cash at the counter or on delivery"),
    ("credit_card", "Credit card"),
    ("debit_card", "Debit card"),
    ("transfer", "Bank transfer"),
)


def quantize_money(value: Decimal) -> Decimal:
    """Round a monetary amount to cents."""
    return Decimal(value).quantize(MONEY_QUANTUM, rounding=ROUND_HALF_UP)
