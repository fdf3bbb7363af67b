"""Wire encodings for request values."""

from __future__ import annotations

import base64
import datetime
import decimal


def _as_utc(value: datetime.datetime) -> datetime.datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=datetime.timezone.utc)
    return value.astimezone(datetime.timezone.utc)


def epoch_seconds(value: datetime.datetime) -> int | float:
    seconds = _as_utc(value).timestamp()
    return int(seconds) if seconds == int(seconds) else seconds


def iso8601(value: datetime.datetime) -> str:
    """``2024-01-02T03:04:05Z`` (milliseconds kept when present)."""
    value = _as_utc(value)
    if value.microsecond:
        return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"
    return value.strftime("%Y-%m-%dT%H:%M:%SZ")


def json_default(obj: object) -> object:
    """JSON serializer for request values not serializable by default json code."""
    if isinstance(obj, datetime.datetime):
        return epoch_seconds(obj)
    if isinstance(obj, datetime.date):
        return obj.isoformat()
    if isinstance(obj, decimal.Decimal):
        if obj == obj.to_integral_value():
            return int(obj)
        return float(obj)
    if isinstance(obj, (bytes, bytearray)):
        return base64.b64encode(bytes(obj)).decode("ascii")
    if isinstance(obj, (set, frozenset, tuple)):
        return list(obj)
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def scalar_to_text(value: object) -> str:
    """Text form used for query strings, headers and form bodies."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, datetime.datetime):
        return iso8601(value)
    if isinstance(value, datetime.date):
        return value.isoformat()
    if isinstance(value, (bytes, bytearray)):
        return base64.b64encode(bytes(value)).decode("ascii")
    return str(value)
