from decimal import Decimal

import pytest
from solders.pubkey import Pubkey

from mcp_candy_machine.codecs import (
    parse_address,
    parse_hash,
    parse_optional_address,
    to_decimal,
    to_epoch_seconds,
    to_subunits,
)
from mcp_candy_machine.config import LAMPORTS_PER_SOL, U64_MAX
from mcp_candy_machine.errors import (
    InvalidAddressError,
    InvalidFixedLengthError,
    InvalidTimestampError,
    TypeMismatchError,
)


# --- Addresses ---

def test_parse_address_recovers_original_bytes():
    raw = bytes(range(32))
    encoded = str(Pubkey(raw))
    assert bytes(parse_address(encoded)) == raw


def test_parse_address_known_program_id():
    pubkey = parse_address("TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA")
    assert str(pubkey) == "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"
    assert len(bytes(pubkey)) == 32


@pytest.mark.parametrize("value", ["1111", "not-a-valid-address", "0OIl0OIl0OIl0OIl0OIl0OIl0OIl0OIl", ""])
def test_parse_address_rejects_bad_strings(value):
    with pytest.raises(InvalidAddressError) as exc_info:
        parse_address(value)
    assert exc_info.value.value == value


def test_parse_address_rejects_non_string():
    with pytest.raises(TypeMismatchError):
        parse_address(12345)


@pytest.mark.parametrize("value", ["", "not-a-valid-address", None, 42, "1111"])
def test_parse_optional_address_treats_failures_as_absent(value):
    assert parse_optional_address(value) is None


def test_parse_optional_address_decodes_valid_value():
    pubkey = parse_optional_address("So11111111111111111111111111111111111111112")
    assert str(pubkey) == "So11111111111111111111111111111111111111112"


# --- Currency ---

def test_one_sol_is_lamports_per_sol():
    assert to_subunits(1.0) == LAMPORTS_PER_SOL
    assert to_subunits(1) == LAMPORTS_PER_SOL


def test_amount_below_one_lamport_truncates_to_zero():
    assert to_subunits(0.0000000009) == 0
    assert to_subunits(Decimal("0.0000000001")) == 0


def test_subunits_truncate_instead_of_rounding():
    assert to_subunits(Decimal("0.0000000019")) == 1
    assert to_subunits(0.5) == 500000000


def test_subunits_use_decimal_representation_of_floats():
    # 0.57 * 1e9 in binary floating point is 569999999.99999994
    assert to_subunits(0.57) == 570000000


def test_negative_amount_passes_through_truncated_toward_zero():
    assert to_subunits(-0.5) == -500000000
    assert to_subunits(Decimal("-0.0000000009")) == 0


def test_subunits_honour_injected_unit_factor():
    assert to_subunits(2.999, units_per_whole=100) == 299


def test_amounts_beyond_u64_pass_through():
    assert to_subunits(2e10) == 20000000000000000000
    assert to_subunits(2e10) > U64_MAX


@pytest.mark.parametrize("value", [True, "1.5", None, float("inf"), float("nan")])
def test_to_decimal_rejects_non_numbers(value):
    with pytest.raises(TypeMismatchError):
        to_decimal(value)


# --- Time ---

def test_epoch_seconds_for_utc_timestamp():
    assert to_epoch_seconds("2022-01-01T00:00:00Z") == 1640995200


@pytest.mark.parametrize(
    "value",
    [
        "2022-01-01T01:00:00+01:00",
        "2021-12-31T19:00:00-05:00",
        "2022-01-01t00:00:00z",
        "2022-01-01T00:00:00.999999Z",
    ],
)
def test_epoch_seconds_equivalent_forms(value):
    assert to_epoch_seconds(value) == 1640995200


def test_epoch_seconds_before_epoch_are_negative():
    assert to_epoch_seconds("1969-12-31T23:59:59Z") == -1


@pytest.mark.parametrize(
    "value",
    [
        "2022-01-01",
        "2022-01-01T00:00:00",
        "2022-01-01 00:00:00Z",
        "2022-02-30T00:00:00Z",
        "2022-01-01T24:00:00Z",
        "2022-01-01T00:00:00+05:75",
        "1640995200",
        "",
        "2022-01-01T00:00:00Z\n",
        "\u0662\u0660\u0662\u0662-01-01T00:00:00Z",
    ],
)
def test_epoch_seconds_reject_non_rfc3339(value):
    with pytest.raises(InvalidTimestampError):
        to_epoch_seconds(value)


def test_epoch_seconds_reject_non_string():
    with pytest.raises(InvalidTimestampError):
        to_epoch_seconds(1640995200)


# --- Fixed-width bytes ---

def test_hash_of_exactly_32_bytes():
    assert parse_hash(list(range(32))) == bytes(range(32))
    assert parse_hash("a" * 32) == b"a" * 32


@pytest.mark.parametrize("length", [31, 33])
def test_hash_of_wrong_length(length):
    with pytest.raises(InvalidFixedLengthError):
        parse_hash([0] * length)
    with pytest.raises(InvalidFixedLengthError):
        parse_hash("a" * length)


@pytest.mark.parametrize("value", [[256] * 32, [-1] * 32, [True] * 32, ["a"] * 32, 32])
def test_hash_rejects_non_byte_values(value):
    with pytest.raises(TypeMismatchError):
        parse_hash(value)
