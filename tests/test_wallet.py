import pytest

from crype.wallet import (
    UnsupportedCurrencyError,
    Wallet,
    _wallet_from_secret,
    checksum_address,
    generate_payment_address,
)


@pytest.mark.parametrize(
    "address",
    [
        "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed",
        "0xfB6916095ca1df60bB79Ce92cE3Ea74c37c5d359",
    ],
)
def test_checksum_matches_known_vectors(address):
    assert checksum_address(address.lower()) == address


def test_checksum_is_idempotent():
    once = checksum_address("0x" + "ab" * 20)
    assert checksum_address(once) == once


def test_checksum_accepts_bytes_and_unprefixed_text():
    raw = bytes(range(20))
    assert checksum_address(raw) == checksum_address(raw.hex())
    assert checksum_address(raw) == checksum_address("0x" + raw.hex().upper())


def test_checksum_rejects_wrong_length():
    with pytest.raises(ValueError):
        checksum_address("0x1234")


def test_checksum_rejects_non_hex():
    with pytest.raises(ValueError):
        checksum_address("0x" + "zz" * 20)


def test_known_secret_gives_known_address():
    wallet = _wallet_from_secret(1)
    assert wallet.address == "0x7E5F4552091A69125d5DfCb7b8C2659029395Bdf"
    assert wallet.private_key == "00" * 31 + "01"


def test_generated_wallet_is_consistent():
    wallet = generate_payment_address("USDC_BASE")
    assert len(wallet.address) == 42
    assert checksum_address(wallet.address) == wallet.address
    assert len(wallet.private_key) == 64
    assert _wallet_from_secret(int(wallet.private_key, 16)) == wallet


def test_generated_wallets_differ():
    first = generate_payment_address("USDC_BASE")
    second = generate_payment_address("USDC_BASE")
    assert first.address != second.address
    assert first.private_key != second.private_key


def test_unsupported_currency():
    with pytest.raises(UnsupportedCurrencyError, match="currency is not supported") as info:
        generate_payment_address("BTC")
    assert info.value.currency == "BTC"


def test_wallet_is_value_object():
    expected = Wallet("0x7E5F4552091A69125d5DfCb7b8C2659029395Bdf", "00" * 31 + "01")
    assert _wallet_from_secret(1) == expected
    assert _wallet_from_secret(2) != expected