"""Generation of receiving addresses for supported currencies."""

from __future__ import annotations

import string
from dataclasses import dataclass
from typing import Union

from Crypto.Hash import keccak
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat

SUPPORTED_CURRENCIES = frozenset({"USDC_BASE"})

_HEX_DIGITS = frozenset(string.hexdigits)


@dataclass(frozen=True)
class Wallet:
    """A receiving address with the hex-encoded private key that controls it."""

    address: str
    private_key: str


class UnsupportedCurrencyError(ValueError):
    """Raised when an address is requested for an unknown currency."""

    def __init__(self, currency: str) -> None:
        super().__init__("currency is not supported")
        self.currency = currency


def _keccak256(data: bytes) -> bytes:
    return keccak.new(digest_bits=256, data=data).digest()


def checksum_address(raw: Union[str, bytes, bytearray]) -> str:
    """Return the mixed-case checksummed form of a 20-byte address."""
    if isinstance(raw, (bytes, bytearray)):
        body = bytes(raw).hex()
    else:
        body = raw[2:] if raw[:2] in ("0x", "0X") else raw
        if not all(c in _HEX_DIGITS for c in body):
            raise ValueError(f"address {raw!r} is not hexadecimal")
        body = body.lower()
    if len(body) != 40:
        raise ValueError("address must be 20 bytes long")
    digest = _keccak256(body.encode("ascii")).hex()
    return "0x" + "".join(
        char.upper() if char.isalpha() and int(nibble, 16) >= 8 else char
        for char, nibble in zip(body, digest)
    )


def _scalar_hex(key: ec.EllipticCurvePrivateKey) -> str:
    scalar = key.private_numbers().private_value
    return scalar.to_bytes(32, "big").hex()


def _wallet_for_key(key: ec.EllipticCurvePrivateKey) -> Wallet:
    public = key.public_key().public_bytes(Encoding.X962, PublicFormat.UncompressedPoint)
    address = checksum_address(_keccak256(public[1:])[-20:])
    return Wallet(address, _scalar_hex(key))


def _wallet_from_secret(scalar: int) -> Wallet:
    return _wallet_for_key(ec.derive_private_key(scalar, ec.SECP256K1()))


def generate_payment_address(currency: str) -> Wallet:
    """Create a fresh key pair and address for the given currency."""
    if currency not in SUPPORTED_CURRENCIES:
        raise UnsupportedCurrencyError(currency)
    return _wallet_for_key(ec.generate_private_key(ec.SECP256K1()))