from decimal import Decimal

from explorer_ledger.normalizer import normalize_batch, normalize_native, normalize_token
from explorer_ledger.types import Direction, TxCategory

ME = "0xabcdef0123456789abcdef0123456789abcdef01"
OTHER = "0x1111111111111111111111111111111111111111"
TX_BASE = "https://etherscan.io/tx/"


def _native(**overrides):
    raw = {
        "timeStamp": "1700000000",
        "from": ME.upper().replace("0X", "0x"),
        "to": OTHER,
        "value": "2000000000000000000",
        "hash": "0xaaa",
    }
    raw.update(overrides)
    return raw


def _token(**overrides):
    raw = {
        "timeStamp": "1700000100",
        "from": OTHER,
        "to": ME,
        "value": "5000000",
        "hash": "0xbbb",
        "tokenSymbol": "USDC",
        "tokenDecimal": "6",
    }
    raw.update(overrides)
    return raw


def test_normalize_native_outgoing() -> None:
    entry = normalize_native(_native(), ME, TX_BASE)
    assert entry is not None
    assert entry.asset == "NATIVE"
    assert entry.amount == Decimal("2")
    assert entry.direction is Direction.OUT
    assert entry.from_address == ME
    assert entry.to_address == OTHER
    assert entry.timestamp == 1700000000
    assert entry.link == "https://etherscan.io/tx/0xaaa"


def test_normalize_token_incoming() -> None:
    entry = normalize_token(_token(), ME, TX_BASE)
    assert entry is not None
    assert entry.asset == "USDC"
    assert entry.amount == Decimal("5")
    assert entry.direction is Direction.IN


def test_direction_ignores_explorer_hints() -> None:
    raw = _native(**{"from": OTHER, "to": ME, "isOutgoing": True, "direction": "OUT"})
    entry = normalize_native(raw, ME, TX_BASE)
    assert entry is not None
    assert entry.direction is Direction.IN


def test_direction_uses_case_insensitive_queried_address() -> None:
    entry = normalize_native(_native(), ME.upper().replace("0X", "0x"), TX_BASE)
    assert entry is not None
    assert entry.direction is Direction.OUT


def test_token_symbol_and_decimals_fallbacks() -> None:
    entry = normalize_token(
        _token(tokenSymbol="", tokenDecimal="n/a", value="3000000000000000000"), ME, TX_BASE
    )
    assert entry is not None
    assert entry.asset == "UNKNOWN"
    assert entry.amount == Decimal("3")

    missing = _token(value="7")
    del missing["tokenSymbol"]
    del missing["tokenDecimal"]
    entry = normalize_token(missing, ME, TX_BASE)
    assert entry is not None
    assert entry.asset == "UNKNOWN"
    assert entry.amount == Decimal("0.000000000000000007")


def test_zero_and_malformed_amounts_are_dropped() -> None:
    assert normalize_native(_native(value="0"), ME, TX_BASE) is None
    assert normalize_native(_native(value="not-a-number"), ME, TX_BASE) is None
    assert normalize_token(_token(value="-5"), ME, TX_BASE) is None
    missing_value = _token()
    del missing_value["value"]
    assert normalize_token(missing_value, ME, TX_BASE) is None


def test_unparseable_timestamp_is_dropped() -> None:
    assert normalize_native(_native(timeStamp="yesterday"), ME, TX_BASE) is None


def test_normalize_batch_keeps_going_past_bad_records() -> None:
    records = [
        _token(hash="0x1"),
        _token(value="0"),
        "garbage",
        _token(value=None),
        _token(hash="0x2"),
    ]
    entries, dropped = normalize_batch(records, TxCategory.TOKEN, ME, TX_BASE)
    assert [e.hash for e in entries] == ["0x1", "0x2"]
    assert dropped == 3


def test_normalize_batch_dispatches_on_category() -> None:
    entries, dropped = normalize_batch([_native()], TxCategory.NATIVE, ME, TX_BASE)
    assert dropped == 0
    assert entries[0].asset == "NATIVE"


def test_oversized_token_decimals_drops_only_that_record() -> None:
    records = [
        _token(tokenDecimal="99999999999", value="1", hash="0xbad"),
        _token(tokenDecimal="0", value="5", hash="0xgood"),
    ]
    entries, dropped = normalize_batch(records, TxCategory.TOKEN, ME, TX_BASE)
    assert [e.hash for e in entries] == ["0xgood"]
    assert entries[0].amount == Decimal("5")
    assert dropped == 1
