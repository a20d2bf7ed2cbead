"""Durable identifier generation.

Server-assigned identifiers replace the client's temporary ones during sync,
so they must never carry the temporary prefix.
"""

import random
import string
import time

_ALPHABET = string.digits + string.ascii_lowercase


def generate_id(prefix: str = "") -> str:
    """Generate a unique ID with optional prefix.

    Format: {prefix}_{timestamp_base36}{random_6chars}
    Example: item_m1a2b3c4d5e6
    """
    timestamp_b36 = _to_base36(int(time.time() * 1000))
    random_part = "".join(random.choices(string.ascii_lowercase + string.digits, k=6))

    if prefix:
        return f"{prefix}_{timestamp_b36}{random_part}"
    return f"{timestamp_b36}{random_part}"


def _to_base36(num: int) -> str:
    if num == 0:
        return "0"

    result = []
    while num:
        num, rem = divmod(num, 36)
        result.append(_ALPHABET[rem])

    return "".join(reversed(result))
