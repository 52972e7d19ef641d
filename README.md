# crype

A library for taking cryptocurrency payments against orders. For each order
it creates a fresh key pair and receiving address, stores the address and the
order in a SQLite database, and reports the order's status as a sequence of
updates.

## Modules

- `crype.models`: `OrderStatus`, `Order` and `PaymentAddress`.
- `crype.wallet`: key and address generation.
- `crype.database`: `connect_db` and `OrderStore`, the SQLite storage.
- `crype.service`: `OrderService`, which places orders and reports status.
- `crype.config`: `ServerConfig` and `load_config`.

## Usage

```python
from crype.database import OrderStore, connect_db
from crype.service import OrderService

connection = connect_db("crype.sqlite3")
store = OrderStore(connection)
store.create_schema()

service = OrderService(store)
created = service.create_order(25.0, "USDC_BASE")
print(created.id, created.payment_address, created.order_expiration)

for update in service.check_order_status(created.id):
    print(update.status, update.tx_hash)
```

### Placing orders

`OrderService.create_order(amount, currency)` generates a payment address,
saves it with its private key, and records a `PENDING` order. The order
expires one hour after it is created. It returns a `CreatedOrder` with `id`,
`payment_address`, `created_at` and `order_expiration`. The timestamps are
in UTC.

It raises `OrderServiceError` in these cases:

- The currency is not supported.
- The address cannot be saved.
- The order cannot be saved.

### Following status

`OrderService.check_order_status(order_id)` takes a UUID or its string form.
It looks the order up immediately. It raises the following errors:

- `OrderServiceError` when the id is not a valid UUID or the query fails.
- `OrderNotFoundError`, a subclass of `OrderServiceError`, when no order has
  that id.

It returns an iterator of `StatusUpdate` values, each with `id`, `status` and
`tx_hash`. The first update gives the stored status. If that status is final
(`CONFIRMED`, `CANCELED` or `FAILED`), the iterator stops there.

Otherwise the service waits five seconds and yields one more update. That
update reports `CONFIRMED` with a fixed placeholder transaction hash. The
wait uses the `sleep` callable given to `OrderService(store, sleep)`, which
defaults to `time.sleep`. This second update is not written back to the
database.

## Order statuses

`OrderStatus` is a string enum with five values: `PENDING`, `PROCESSING`,
`CONFIRMED`, `FAILED` and `CANCELED`.

- `OrderStatus.parse(value)` accepts `str`, `bytes`, `bytearray` or
  `memoryview`. It raises `TypeError` for other types and `ValueError` for
  unknown values.
- `is_final()` is true for `CONFIRMED`, `CANCELED` and `FAILED`.

## Storage

`connect_db(path)` opens a SQLite database, turns on foreign keys and checks
that the database answers.

`OrderStore(connection)` provides these methods:

- `create_schema()` creates the `payment_addresses` and `orders` tables if
  they are missing.
- `add_payment_address(address, private_key)` saves an address and its key.
- `add_order(order)` saves an `Order`.
- `get_order(order_id)` returns an `Order`, or `None` if there is no match.

Private keys are stored as plain hex text.

## Wallets

```python
from crype.wallet import checksum_address, generate_payment_address

wallet = generate_payment_address("USDC_BASE")
print(wallet.address, wallet.private_key)
```

`generate_payment_address(currency)` creates a new secp256k1 key. The
`Wallet` it returns has two fields:

- `address`: the checksummed address derived from the public key.
- `private_key`: the key as 64 hex digits.

`USDC_BASE` is the only supported currency. For any other,
`generate_payment_address` raises `UnsupportedCurrencyError`, a `ValueError`.

`checksum_address(raw)` takes 20 raw bytes, or 40 hex digits with or without
a `0x` prefix. It returns the mixed-case checksummed form and raises
`ValueError` for anything else.

## Configuration

`load_config(environ=None)` builds a `ServerConfig` from a mapping. It uses
`os.environ` when no mapping is given. It reads two variables:

- `CRYPE_PORT` sets `port`.
- `CRYPE_DB_NAME` sets `db_path`.

Both default to an empty string. `ServerConfig.address` gives the
`(host, port)` pair to listen on. An empty port gives port 0. A port that is
not a number from 0 to 65535 raises `ValueError`.

## What it does not do

- There is no network server and no command-line program. `ServerConfig`
  holds settings, but nothing in the package listens on a port.
- No blockchain is watched. The update that follows a pending status is
  simulated, as described above.

## Running the tests

Install the `test` extra, then run `pytest` from the project root.