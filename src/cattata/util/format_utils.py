import time
from datetime import datetime, timezone

NEVER_ACTIVE = "Never"


def now_ms() -> int:
    """Return the current wall-clock time as integer epoch milliseconds."""
    return time.time_ns() // 1_000_000


def datetime_to_ms(value: datetime) -> int:
    """Convert a datetime to epoch milliseconds, treating naive values as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return int(value.timestamp() * 1000)


def humanize_last_active(epoch_ms: int | None) -> str:
    """Render a last-activity instant as ``YYYY-MM-DD HH:MM UTC``.

    ``None`` means the member was never seen and renders as ``Never``. Epoch
    zero is a real instant and renders as a date.
    """
    if epoch_ms is None:
        return NEVER_ACTIVE
    value = datetime.fromtimestamp(epoch_ms / 1000, tz=timezone.utc)
    return value.strftime("%Y-%m-%d %H:%M UTC")
