"""Storage of orders and payment addresses in SQLite."""

from __future__ import annotations

import logging
import sqlite3
import uuid
from datetime import datetime, timezone
from typing import Optional, Union

from crype.models import Order, OrderStatus

log = logging.getLogger(__name__)

_ORDER_COLUMNS = (
    "id",
    "amount",
    "currency",
    "payment_address",
    "status",
    "tx_hash",
    "created_at",
    "order_expiration",
)

_STATUS_VALUES = ", ".join(f"'{status.value}'" for status in OrderStatus)

_SCHEMA = f"""
CREATE TABLE IF NOT EXISTS payment_addresses (
    address TEXT PRIMARY KEY,
    private_key TEXT NOT NULL,
    created_at TEXT DEFAULT CURRENT_TIMESTAMP
);
CREATE TABLE IF NOT EXISTS orders (
    id TEXT PRIMARY KEY,
    amount REAL NOT NULL,
    currency TEXT NOT NULL,
    payment_address TEXT NOT NULL REFERENCES payment_addresses(address),
    status TEXT NOT NULL DEFAULT 'PENDING' CHECK (status IN ({_STATUS_VALUES})),
    tx_hash TEXT,
    created_at TEXT NOT NULL,
    order_expiration TEXT NOT NULL
);
"""


def connect_db(path: str) -> sqlite3.Connection:
    """Open the database at path and check that it answers."""
    connection = sqlite3.connect(path)
    connection.execute("PRAGMA foreign_keys = ON")
    connection.execute("SELECT 1").fetchone()
    log.info("Connected to database %s", path)
    return connection


def _parse_time(text: str) -> datetime:
    moment = datetime.fromisoformat(text)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment


class OrderStore:
    """Reads and writes orders and payment addresses."""

    def __init__(self, connection: sqlite3.Connection) -> None:
        self._conn = connection
        self._conn.execute("PRAGMA foreign_keys = ON")

    def create_schema(self) -> None:
        """Create the tables if they do not exist yet."""
        with self._conn:
            self._conn.executescript(_SCHEMA)

    def add_payment_address(self, address: str, private_key: str) -> None:
        """Record a generated address with its private key."""
        with self._conn:
            self._conn.execute(
                "INSERT INTO payment_addresses (address, private_key) VALUES (?, ?)",
                (address, private_key),
            )

    def add_order(self, order: Order) -> None:
        """Insert a new order."""
        placeholders = ", ".join("?" for _ in _ORDER_COLUMNS)
        with self._conn:
            self._conn.execute(
                f"INSERT INTO orders ({', '.join(_ORDER_COLUMNS)}) VALUES ({placeholders})",
                (
                    str(order.id),
                    float(order.amount),
                    order.currency,
                    order.payment_address,
                    OrderStatus.parse(order.status).value,
                    order.tx_hash,
                    order.created_at.isoformat(),
                    order.order_expiration.isoformat(),
                ),
            )

    def get_order(self, order_id: Union[uuid.UUID, str]) -> Optional[Order]:
        """Return the order with this id, or None when there is none."""
        key = str(uuid.UUID(str(order_id)))
        row = self._conn.execute(
            f"SELECT {', '.join(_ORDER_COLUMNS)} FROM orders WHERE id = ?",
            (key,),
        ).fetchone()
        if row is None:
            return None
        ident, amount, currency, address, status, tx_hash, created, expires = row
        return Order(
            id=uuid.UUID(ident),
            amount=amount,
            currency=currency,
            payment_address=address,
            created_at=_parse_time(created),
            order_expiration=_parse_time(expires),
            status=OrderStatus.parse(status),
            tx_hash=tx_hash,
        )