"""
Transaction identity generation

SMS-derived transactions get a deterministic id so that re-reading the same
message maps onto the same record. The hash is a 32-bit polynomial rolling
hash: cheap and stable, but not collision free. Two different
(sender, amount, timestamp) triples can map to the same id.
"""

import secrets
import string
from datetime import datetime, timedelta, timezone
from decimal import Decimal

SMS_ID_PREFIX = "tx_"
MANUAL_ID_PREFIX = "manual_"

_BASE36_DIGITS = string.digits + string.ascii_lowercase
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_MILLISECOND = timedelta(milliseconds=1)


def to_base36(value: int) -> str:
    """Render a non-negative integer in lowercase base 36"""
    if value < 0:
        raise ValueError("value must be non-negative")
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_BASE36_DIGITS[rem])
    return "".join(reversed(digits))


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def rolling_hash(text: str) -> int:
    """
    Signed 32-bit ``h = h * 31 + unit`` over the UTF-16 code units of text

    UTF-16 units (not code points) are hashed so characters outside the BMP
    contribute two units each.
    """
    encoded = text.encode("utf-16-le")
    h = 0
    for i in range(0, len(encoded), 2):
        unit = encoded[i] | (encoded[i + 1] << 8)
        h = _to_int32(h * 31 + unit)
    return h


def format_amount(amount) -> str:
    """Plain positional notation without trailing zeros: 1234.50 -> '1234.5', 500.00 -> '500'"""
    value = Decimal(str(amount)).normalize()
    return format(value, "f")


def to_epoch_millis(moment: datetime) -> int:
    """Epoch milliseconds; naive datetimes are taken as local time"""
    if moment.tzinfo is None:
        moment = moment.astimezone()
    return (moment - _EPOCH) // _MILLISECOND


def generate_transaction_id(sender: str, amount, timestamp_ms: int) -> str:
    """
    Deterministic identity for an SMS-derived transaction

    Args:
        sender: SMS sender label exactly as received
        amount: Parsed amount
        timestamp_ms: Transaction date as epoch milliseconds

    Returns:
        Identifier of the form ``tx_<base36>``
    """
    key = f"{sender}_{format_amount(amount)}_{timestamp_ms}"
    return SMS_ID_PREFIX + to_base36(abs(rolling_hash(key)))


def generate_manual_id(now: datetime) -> str:
    """Random identity for a manually entered transaction"""
    suffix = "".join(secrets.choice(_BASE36_DIGITS) for _ in range(9))
    return f"{MANUAL_ID_PREFIX}{to_epoch_millis(now)}_{suffix}"
