"""Localized profile metadata and named-color handling.

The leaf modules (locale, repair, localized, mlu, named_colors) are pure
computation on top of a :class:`~iccworks.codecs.base.TagCodec`;
:class:`IccProfile` ties them together for one profile.
"""

from .errors import (
    CannotWriteField,
    CodecError,
    IccError,
    InvalidLocale,
    Irreparable,
    NoData,
    ProfileParseError,
)
from .models import (
    ColorLab,
    Colorspace,
    ColorSwatch,
    LoadFlags,
    LocaleTranslation,
    LocalizedField,
    ProfileHeader,
    ProfileKind,
)
from .locale import decompose, normalize
from .repair import repair, repair_text
from .localized import LocalizedTextCache
from .mlu import MultilingualTagBuilder, PayloadAction, TagPayload
from .named_colors import extract
from .icc import IccProfile

__all__ = [
    "CannotWriteField",
    "CodecError",
    "IccError",
    "InvalidLocale",
    "Irreparable",
    "NoData",
    "ProfileParseError",
    "ColorLab",
    "Colorspace",
    "ColorSwatch",
    "LoadFlags",
    "LocaleTranslation",
    "LocalizedField",
    "ProfileHeader",
    "ProfileKind",
    "decompose",
    "normalize",
    "repair",
    "repair_text",
    "LocalizedTextCache",
    "MultilingualTagBuilder",
    "PayloadAction",
    "TagPayload",
    "extract",
    "IccProfile",
]
