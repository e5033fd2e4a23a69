# util/functions.py
import secrets
import string
import time

_BASE36 = string.digits + string.ascii_lowercase


def to_base36(value: int) -> str:
    if value < 0:
        raise ValueError("value must be non-negative")
    if value == 0:
        return "0"
    out = []
    while value:
        value, rem = divmod(value, 36)
        out.append(_BASE36[rem])
    return "".join(reversed(out))


def generate_id(prefix: str = "") -> str:
    """
    - Random base36 chunk followed by the current millisecond timestamp in base36.
    - Short, URL-safe and sortable-ish within a prefix.
    """
    rand = to_base36(secrets.randbits(48))
    return f"{prefix}{rand}{to_base36(int(time.time() * 1000))}"


def format_position_readout(index: int, total: int, start: int, end: int) -> str:
    return f"extraction {index + 1} of {total}, position [{start}-{end}]"
