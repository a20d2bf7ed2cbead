"""Time helpers.

All persisted timestamps are integer milliseconds since the epoch.
"""

import time


def get_timestamp_ms() -> int:
    """Current time in milliseconds."""
    return int(time.time() * 1000)
