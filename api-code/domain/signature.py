from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional


SUCCESS_TAG = "Processed"
ERROR_TAG = "Error processed"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(moment: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision and a 'Z' suffix."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_signature(bot_name: str, *, error: bool = False, moment: Optional[datetime] = None) -> str:
    tag = ERROR_TAG if error else SUCCESS_TAG
    return f"{tag} by {bot_name} @ {format_timestamp(moment or utc_now())}"


def parse_signature_timestamp(signature: str) -> datetime:
    """Return the timestamp embedded in a signature produced by build_signature."""
    _, sep, stamp = signature.rpartition(" @ ")
    if not sep:
        raise ValueError(f"Not a backend signature: {signature!r}")
    return datetime.fromisoformat(stamp.replace("Z", "+00:00"))
