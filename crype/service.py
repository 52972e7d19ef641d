"""Order creation and status streaming on top of the order store."""

from __future__ import annotations

import logging
import sqlite3
import time
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Iterator, Optional, Union

from crype.database import OrderStore
from crype.models import Order, OrderStatus
from crype.wallet import generate_payment_address

log = logging.getLogger(__name__)

ORDER_LIFETIME = timedelta(hours=1)
STATUS_POLL_DELAY = 5.0
# Placeholder hash reported until chain monitoring supplies real ones.
MOCK_TX_HASH = "784c7f43639ad8c3951ad9a35890102c720937d21ce51c45498da053bb347160"


class OrderServiceError(Exception):
    """Raised when an order request cannot be completed."""


class OrderNotFoundError(OrderServiceError):
    """Raised when no order has the requested id."""


@dataclass(frozen=True)
class CreatedOrder:
    """Details handed back to the caller after an order is placed."""

    id: str
    payment_address: str
    created_at: datetime
    order_expiration: datetime


@dataclass(frozen=True)
class StatusUpdate:
    """One status report for an order."""

    id: str
    status: OrderStatus
    tx_hash: Optional[str] = None


class OrderService:
    """Places orders and reports how their payment is progressing."""

    def __init__(
        self, store: OrderStore, sleep: Callable[[float], object] = time.sleep
    ) -> None:
        self._store = store
        self._sleep = sleep

    def create_order(self, amount: float, currency: str) -> CreatedOrder:
        """Generate a receiving address and record a new pending order."""
        order_id = uuid.uuid4()
        try:
            wallet = generate_payment_address(currency)
        except Exception as exc:
            log.warning("Failed to generate payment address: %s", exc)
            raise OrderServiceError(
                f"failed to generate payment address: {exc}"
            ) from exc

        try:
            self._store.add_payment_address(wallet.address, wallet.private_key)
        except sqlite3.Error as exc:
            log.warning("Failed to insert payment address: %s", exc)
            raise OrderServiceError(f"failed to save payment address: {exc}") from exc

        created_at = datetime.now(timezone.utc)
        expires_at = created_at + ORDER_LIFETIME
        order = Order(
            id=order_id,
            amount=amount,
            currency=currency,
            payment_address=wallet.address,
            created_at=created_at,
            order_expiration=expires_at,
        )
        try:
            self._store.add_order(order)
        except sqlite3.Error as exc:
            log.warning("Failed to insert order: %s", exc)
            raise OrderServiceError(f"failed to save order: {exc}") from exc

        return CreatedOrder(
            id=str(order_id),
            payment_address=wallet.address,
            created_at=created_at,
            order_expiration=expires_at,
        )

    def check_order_status(
        self, order_id: Union[str, uuid.UUID]
    ) -> Iterator[StatusUpdate]:
        """Look the order up and return an iterator over its status updates.

        Lookup errors are raised here; the iterator yields the current
        status first and, for orders not yet final, a later update.
        """
        try:
            key = order_id if isinstance(order_id, uuid.UUID) else uuid.UUID(order_id)
        except (ValueError, TypeError, AttributeError) as exc:
            log.warning("Invalid order ID format: %s", exc)
            raise OrderServiceError(f"invalid order ID: {exc}") from exc

        try:
            order = self._store.get_order(key)
        except (sqlite3.Error, ValueError, TypeError) as exc:
            log.warning("Database query error: %s", exc)
            raise OrderServiceError(f"database query error: {exc}") from exc

        if order is None:
            log.warning("Order not found: %s", order_id)
            raise OrderNotFoundError("order not found")

        return self._updates(order)

    def _updates(self, order: Order) -> Iterator[StatusUpdate]:
        yield StatusUpdate(id=str(order.id), status=order.status, tx_hash=order.tx_hash)
        if order.status.is_final():
            return

        self._sleep(STATUS_POLL_DELAY)
        order.status = OrderStatus.CONFIRMED
        order.tx_hash = MOCK_TX_HASH
        yield StatusUpdate(id=str(order.id), status=order.status, tx_hash=order.tx_hash)