"""Best-effort repair of mis-encoded named-color text.

Named-color entries are supposed to be 7-bit ASCII but some vendors embed
single legacy 8-bit bytes. Only the byte values listed in
:data:`REPAIR_RULES` are touched; this is not a general transcoder.
"""

from __future__ import annotations

import logging
from typing import Tuple, Union

from .errors import Irreparable

__all__ = ["REPAIR_RULES", "is_valid_utf8", "repair", "repair_text"]

logger = logging.getLogger(__name__)

# (offending byte, replacement), applied in order
REPAIR_RULES: Tuple[Tuple[int, bytes], ...] = (
    (0xAE, "®".encode("utf-8")),  # Latin-1 registered sign
    (0x86, b""),  # undefined control byte seen in vendor profiles
)


def is_valid_utf8(data: bytes) -> bool:
    try:
        data.decode("utf-8")
    except UnicodeDecodeError:
        return False
    return True


def repair(data: Union[bytes, bytearray]) -> str:
    """Apply :data:`REPAIR_RULES` in one left-to-right scan and decode.

    Raises :class:`Irreparable` if the result is still not valid UTF-8.
    """
    rules = dict(REPAIR_RULES)
    fixed = bytearray()
    for value in bytes(data):
        replacement = rules.get(value)
        if replacement is None:
            fixed.append(value)
        else:
            fixed.extend(replacement)

    try:
        return fixed.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise Irreparable(f"text is not valid UTF-8 after repair: {exc}") from exc


def repair_text(data: Union[bytes, bytearray, str]) -> str:
    """Decode ``data`` as UTF-8, repairing it first only when needed."""
    if isinstance(data, str):
        return data
    raw = bytes(data)
    if is_valid_utf8(raw):
        return raw.decode("utf-8")
    logger.debug("Repairing invalid UTF-8 text %r", raw)
    return repair(raw)
