"""Extraction of the named-color table into :class:`ColorSwatch` values."""

from __future__ import annotations

import logging
from typing import Any, List, Union

from ..codecs.base import TagCodec
from .errors import CodecError
from .models import ColorSwatch
from .repair import repair_text

__all__ = ["assemble_name", "extract"]

logger = logging.getLogger(__name__)

TextPart = Union[str, bytes, bytearray, None]


def _as_bytes(part: TextPart) -> bytes:
    if not part:
        return b""
    if isinstance(part, str):
        return part.encode("utf-8")
    # C-style fixed buffers may carry trailing NULs
    return bytes(part).split(b"\x00", 1)[0]


def assemble_name(
    name: TextPart, prefix: TextPart = b"", suffix: TextPart = b""
) -> bytes:
    """Join ``prefix name suffix`` with single spaces, skipping empty parts."""
    text = bytearray()
    prefix_raw = _as_bytes(prefix)
    if prefix_raw:
        text += prefix_raw + b" "
    text += _as_bytes(name)
    suffix_raw = _as_bytes(suffix)
    if suffix_raw:
        text += b" " + suffix_raw
    return bytes(text)


def extract(codec: TagCodec, named_color_list: Any) -> List[ColorSwatch]:
    """Return one swatch per readable entry, in the list's own order.

    Entries that cannot be fetched, or whose name is not UTF-8 even after
    repair, are left out. Duplicate names are kept.
    """
    swatches: List[ColorSwatch] = []
    if named_color_list is None:
        return swatches

    count = codec.named_color_count(named_color_list)
    for index in range(count):
        try:
            info = codec.named_color_info(named_color_list, index)
        except CodecError as exc:
            logger.debug("Skipping named color %d: %s", index, exc)
            continue
        if info is None:
            logger.debug("Skipping unreadable named color %d", index)
            continue

        name, prefix, suffix, coordinate = info
        try:
            display_name = repair_text(assemble_name(name, prefix, suffix))
        except UnicodeError as exc:
            # Irreparable, or a str part that cannot be encoded at all
            logger.debug("Dropping named color %d: %s", index, exc)
            continue

        swatches.append(ColorSwatch(display_name, codec.decode_color(coordinate)))

    logger.debug("Extracted %d of %d named colors", len(swatches), count)
    return swatches
