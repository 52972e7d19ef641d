"""Order records and the order status values stored with them."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional, Union


class OrderStatus(str, Enum):
    """Lifecycle state of an order."""

    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    CONFIRMED = "CONFIRMED"
    FAILED = "FAILED"
    CANCELED = "CANCELED"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: Union[str, bytes, bytearray, memoryview]) -> "OrderStatus":
        """Read a status from its stored text or bytes form."""
        if isinstance(value, (bytes, bytearray, memoryview)):
            value = bytes(value).decode("utf-8", errors="replace")
        elif not isinstance(value, str):
            raise TypeError("order status has to be of type str or bytes")
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"invalid value {value!r} for order status") from None

    def is_final(self) -> bool:
        """True when no further status change is expected."""
        return self in _FINAL_STATUSES


_FINAL_STATUSES = frozenset(
    {OrderStatus.CONFIRMED, OrderStatus.CANCELED, OrderStatus.FAILED}
)


@dataclass
class Order:
    """A payment order awaiting funds at a generated address."""

    id: uuid.UUID
    amount: float
    currency: str
    payment_address: str
    created_at: datetime
    order_expiration: datetime
    status: OrderStatus = OrderStatus.PENDING
    tx_hash: Optional[str] = None


@dataclass
class PaymentAddress:
    """A generated receiving address and its private key."""

    address: str
    private_key: str
    created_at: Optional[datetime] = None