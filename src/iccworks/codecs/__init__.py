"""Tag codec implementations."""

from .base import TagCodec
from .memory import MemoryTagCodec, MultiLocalizedUnicode, NamedColor, NamedColorList
from .pillow import PillowTagCodec

__all__ = [
    "TagCodec",
    "MemoryTagCodec",
    "MultiLocalizedUnicode",
    "NamedColor",
    "NamedColorList",
    "PillowTagCodec",
]
