"""
Primitive Codecs

Conversions from human-authored values to protocol values:

- Addresses: base58 strings to 32-byte solders Pubkeys
- Currency: decimal SOL amounts to integer lamports (truncating)
- Time: RFC 3339 timestamps to signed Unix epoch seconds
- Fixed-width bytes: the 32-byte hidden settings hash

Every function here is pure. Failures raise the CandyConfigError subclass for
the kind of problem; callers attach the document field path.
"""
import re
from datetime import datetime, timedelta, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from solders.pubkey import Pubkey

from mcp_candy_machine.config import HIDDEN_SETTINGS_HASH_LENGTH, LAMPORTS_PER_SOL
from mcp_candy_machine.errors import (
    InvalidAddressError,
    InvalidFixedLengthError,
    InvalidTimestampError,
    TypeMismatchError,
)
from mcp.server.fastmcp.utilities.logging import get_logger

logger = get_logger(__name__)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# date-time per RFC 3339 section 5.6; the time zone offset is mandatory.
_RFC3339_RE = re.compile(
    r"(?P<year>[0-9]{4})-(?P<month>[0-9]{2})-(?P<day>[0-9]{2})"
    r"[Tt](?P<hour>[0-9]{2}):(?P<minute>[0-9]{2}):(?P<second>[0-9]{2})(?:\.[0-9]+)?"
    r"(?:(?P<utc>[Zz])|(?P<sign>[+-])(?P<off_hour>[0-9]{2}):(?P<off_minute>[0-9]{2}))"
)


# --- Addresses ---

def parse_address(value: Any) -> Pubkey:
    """
    Decodes a base58 address into a Pubkey.

    Raises:
        InvalidAddressError: If the string is not base58 or is not 32 bytes wide.
        TypeMismatchError: If the value is not a string.
    """
    if isinstance(value, Pubkey):
        return value
    if not isinstance(value, str):
        raise TypeMismatchError(f"Expected an address string, got {type(value).__name__}", value=value)
    try:
        return Pubkey.from_string(value)
    except ValueError as e:
        raise InvalidAddressError(f"Invalid address '{value}': {e}", value=value)


def parse_optional_address(value: Any) -> Optional[Pubkey]:
    """
    Decodes an optional address. Absent, blank or undecodable values all
    yield None instead of an error.
    """
    if value is None or value == "":
        return None
    try:
        return parse_address(value)
    except (InvalidAddressError, TypeMismatchError) as e:
        logger.warning(f"Ignoring optional address that failed to decode: {e}")
        return None


# --- Currency ---

def to_decimal(value: Any) -> Decimal:
    """
    Converts a JSON number to a Decimal through its shortest representation,
    so 0.57 becomes Decimal('0.57') rather than the binary float expansion.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeMismatchError(f"Expected a number, got {type(value).__name__}", value=value)
    try:
        amount = Decimal(repr(value)) if isinstance(value, float) else Decimal(value)
    except InvalidOperation:
        raise TypeMismatchError(f"Invalid number {value!r}", value=value)
    if not amount.is_finite():
        raise TypeMismatchError(f"Expected a finite number, got {value!r}", value=value)
    return amount


def to_subunits(amount: Decimal, units_per_whole: int = LAMPORTS_PER_SOL) -> int:
    """
    Converts a whole-unit amount to integer subunits, truncating toward zero.

    Negative amounts and results above the program's u64 range are not
    rejected here; the program validates them.
    """
    return int(to_decimal(amount) * units_per_whole)


# --- Time ---

def to_epoch_seconds(value: Any) -> int:
    """
    Parses a strict RFC 3339 timestamp into Unix epoch seconds.

    Fractional seconds are dropped. A bare date, a missing offset or an
    impossible calendar value raises InvalidTimestampError.
    """
    if not isinstance(value, str):
        raise InvalidTimestampError(f"Expected an RFC 3339 string, got {type(value).__name__}", value=value)
    match = _RFC3339_RE.fullmatch(value)
    if not match:
        raise InvalidTimestampError(f"Invalid RFC 3339 timestamp '{value}'", value=value)

    parts = match.groupdict()
    if parts["utc"]:
        offset = timedelta(0)
    else:
        if int(parts["off_minute"]) > 59:
            raise InvalidTimestampError(f"Invalid offset in RFC 3339 timestamp '{value}'", value=value)
        offset = timedelta(hours=int(parts["off_hour"]), minutes=int(parts["off_minute"]))
        if parts["sign"] == "-":
            offset = -offset
    try:
        moment = datetime(
            int(parts["year"]),
            int(parts["month"]),
            int(parts["day"]),
            int(parts["hour"]),
            int(parts["minute"]),
            int(parts["second"]),
            tzinfo=timezone(offset),
        )
    except ValueError as e:
        raise InvalidTimestampError(f"Invalid RFC 3339 timestamp '{value}': {e}", value=value)

    return (moment - _EPOCH) // timedelta(seconds=1)


# --- Fixed-width bytes ---

def parse_hash(value: Any, *, length: int = HIDDEN_SETTINGS_HASH_LENGTH) -> bytes:
    """
    Decodes the hidden settings hash: a JSON array of byte values or a string
    whose UTF-8 encoding is used as-is. Only the length is checked.
    """
    if isinstance(value, bytes):
        raw = value
    elif isinstance(value, str):
        raw = value.encode("utf-8")
    elif isinstance(value, (list, tuple)):
        for item in value:
            if isinstance(item, bool) or not isinstance(item, int) or not 0 <= item <= 255:
                raise TypeMismatchError(f"Hash entries must be integers 0-255, got {item!r}", value=value)
        raw = bytes(value)
    else:
        raise TypeMismatchError(f"Expected a byte array or string, got {type(value).__name__}", value=value)

    if len(raw) != length:
        raise InvalidFixedLengthError(f"Expected exactly {length} bytes, got {len(raw)}", value=value)
    return raw
