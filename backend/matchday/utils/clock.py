from datetime import datetime, timezone


def utcnow() -> datetime:
    """Naive UTC timestamp (the store keeps timestamps without tzinfo)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)
