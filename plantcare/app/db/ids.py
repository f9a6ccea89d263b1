import re
from typing import Optional

__all__ = [
    "is_hex_id",
    "normalize_user_id",
    "bin_to_hex",
]

_HEX_RE = re.compile(r"^[0-9a-f]{32}$")


def is_hex_id(s: str | None) -> bool:
    if not s:
        return False
    return bool(_HEX_RE.fullmatch(s.strip().lower()))


def normalize_user_id(s: str | None) -> Optional[str]:
    """Accept a UUID with or without dashes; return 32 lowercase hex chars or None."""
    if not s:
        return None
    ss = s.strip().lower().replace("-", "")
    return ss if is_hex_id(ss) else None


def bin_to_hex(b: bytes | bytearray | None) -> Optional[str]:
    if isinstance(b, (bytes, bytearray)):
        return b.hex()
    return None
