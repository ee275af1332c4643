"""Server clock helpers.

Timestamps are stored as naive UTC so that values read back from SQLite
compare cleanly with freshly created ones.
"""

from datetime import date, datetime, timezone


def utc_now() -> datetime:
    """Current UTC time without tzinfo."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def today() -> date:
    """Current server-local date used to bucket daily analytics."""
    return date.today()
