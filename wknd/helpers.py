import secrets
import time
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional, Union


# ----------------------------
# Helpers
# ----------------------------
def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def to_iso(value: Optional[datetime]) -> str:
    if value is None:
        return ""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()


def unique_suffix() -> str:
    """Millisecond timestamp followed by six random digits."""
    return f"{int(time.time() * 1000)}{secrets.randbelow(10 ** 6):06d}"


def make_identifier(prefix: str, event_id: str, separator: str) -> str:
    return separator.join([prefix, str(event_id), unique_suffix()])


def to_minor_units(amount: Union[int, Decimal]) -> int:
    return int((Decimal(amount) * 100).to_integral_value())


def to_major_units(amount_minor: Optional[int]) -> float:
    if not amount_minor:
        return 0
    return amount_minor / 100


def format_amount(amount: float) -> str:
    """Render a major-unit amount without a trailing '.0'."""
    if float(amount).is_integer():
        return str(int(amount))
    return str(amount)
