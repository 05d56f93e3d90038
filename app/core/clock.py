"""Clock provider.

Timestamps are stored as naive UTC datetimes, so "now" is produced in the
same form. Everything time-dependent takes ``now`` as an argument; this is
the only place that reads the system clock.
"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)
