"""In-memory tag codec.

Keeps every tag as a Python object in a dict keyed by signature. Useful for
building profiles programmatically and as the reference behaviour of the
:class:`~iccworks.codecs.base.TagCodec` contract: multilingual lookups
resolve the way LittleCMS does (exact pair, then language, then the first
entry) and named-color coordinates use the ICC v4 16-bit Lab encoding.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence, Set, Tuple, Union
import logging

import numpy as np

from ..profile.errors import CodecError
from ..profile.models import (
    NO_COUNTRY,
    NO_LANGUAGE,
    SIG_META,
    ColorLab,
    ProfileHeader,
    signature_to_str,
)
from .base import MultilingualEntry, NamedColorInfo, TagCodec

__all__ = [
    "MultiLocalizedUnicode",
    "NamedColor",
    "NamedColorList",
    "MemoryTagCodec",
    "encode_lab",
    "decode_lab",
]

logger = logging.getLogger(__name__)

# ICC v4 PCS Lab encoding: L 0..100 -> 0..0xFFFF, a/b -128..127 -> 0..0xFFFF
_LAB_SCALE = np.array([655.35, 257.0, 257.0], dtype=np.float64)
_LAB_OFFSET = np.array([0.0, 128.0, 128.0], dtype=np.float64)

TextValue = Union[str, bytes]


def decode_lab(encoded: Sequence[int]) -> ColorLab:
    pcs = np.asarray(encoded, dtype=np.float64)
    if pcs.shape != (3,):
        raise CodecError(f"expected 3 PCS components, got {pcs.shape}")
    lab = pcs / _LAB_SCALE - _LAB_OFFSET
    return ColorLab(float(lab[0]), float(lab[1]), float(lab[2]))


def encode_lab(lab: Union[ColorLab, Sequence[float]]) -> Tuple[int, int, int]:
    values = lab.as_tuple() if isinstance(lab, ColorLab) else tuple(lab)
    pcs = np.rint((np.asarray(values, dtype=np.float64) + _LAB_OFFSET) * _LAB_SCALE)
    pcs = np.clip(pcs, 0, 0xFFFF).astype(np.uint16)
    return (int(pcs[0]), int(pcs[1]), int(pcs[2]))


@dataclass
class MultiLocalizedUnicode:
    """Multilingual text tag: (language, country) -> text, in insertion order."""

    entries: Dict[Tuple[str, str], str] = field(default_factory=dict)

    @classmethod
    def from_text(cls, text: str) -> "MultiLocalizedUnicode":
        return cls({(NO_LANGUAGE, NO_COUNTRY): text})

    def set_text(self, language: str, country: str, text: str) -> None:
        self.entries[(language, country)] = text

    def get_text(self, language: str, country: str) -> Optional[str]:
        if not self.entries:
            return None
        exact = self.entries.get((language, country))
        if exact is not None:
            return exact
        for (lang, _country), text in self.entries.items():
            if lang == language:
                return text
        return next(iter(self.entries.values()))


@dataclass
class NamedColor:
    name: TextValue
    pcs: Tuple[int, int, int]
    prefix: TextValue = b""
    suffix: TextValue = b""


@dataclass
class NamedColorList:
    """Named-color table; ``None`` items model entries that fail to read."""

    colors: List[Optional[NamedColor]] = field(default_factory=list)


class MemoryTagCodec(TagCodec):
    """Tag codec backed by a plain dict."""

    def __init__(
        self,
        tags: Optional[Dict[int, Any]] = None,
        *,
        version: float = 4.3,
        header: Optional[ProfileHeader] = None,
    ) -> None:
        self.tags: Dict[int, Any] = dict(tags or {})
        self.version = version
        self.header = header or ProfileHeader()
        # signatures whose writes are rejected, for exercising error paths
        self.fail_writes: Set[int] = set()

    def read_tag_raw(self, signature: int) -> Optional[Any]:
        return self.tags.get(signature)

    def read_multilingual(self, signature: int) -> Optional[MultiLocalizedUnicode]:
        tag = self.tags.get(signature)
        if isinstance(tag, MultiLocalizedUnicode):
            return tag
        # v2 textDescriptionType carries a single untranslated string
        if isinstance(tag, str):
            return MultiLocalizedUnicode.from_text(tag)
        return None

    def mlu_get_text(
        self, handle: MultiLocalizedUnicode, language: str, country: str
    ) -> Optional[str]:
        return handle.get_text(language, country)

    def write_multilingual(
        self, signature: int, translations: Iterable[MultilingualEntry]
    ) -> None:
        if signature in self.fail_writes:
            raise CodecError(f"write refused for '{signature_to_str(signature)}'")
        mlu = MultiLocalizedUnicode()
        for language, country, text in translations:
            if len(language) not in (0, 2) or len(country) not in (0, 2):
                raise CodecError(f"bad locale codes {language!r}/{country!r}")
            try:
                text.encode("utf-16-be")
            except UnicodeEncodeError as exc:
                raise CodecError(f"cannot encode MLU text: {exc}") from exc
            mlu.set_text(language, country, text)
        self.tags[signature] = mlu

    def delete_tag(self, signature: int) -> None:
        self.tags.pop(signature, None)

    def named_color_count(self, handle: NamedColorList) -> int:
        return len(handle.colors)

    def named_color_info(
        self, handle: NamedColorList, index: int
    ) -> Optional[NamedColorInfo]:
        if index < 0 or index >= len(handle.colors):
            return None
        color = handle.colors[index]
        if color is None:
            return None
        return (color.name, color.prefix, color.suffix, color.pcs)

    def decode_color(self, coordinate: Sequence[int]) -> ColorLab:
        return decode_lab(coordinate)

    def get_version(self) -> float:
        return self.version

    def set_version(self, version: float) -> None:
        logger.debug("Profile version %.1f -> %.1f", self.version, version)
        self.version = version

    def get_header(self) -> ProfileHeader:
        return self.header

    def set_header(self, header: ProfileHeader) -> None:
        self.header = header

    def read_metadata(self) -> Dict[str, str]:
        tag = self.tags.get(SIG_META)
        return dict(tag) if isinstance(tag, dict) else {}

    def write_metadata(self, metadata: Dict[str, str]) -> None:
        if SIG_META in self.fail_writes:
            raise CodecError("cannot write metadata")
        if metadata:
            self.tags[SIG_META] = dict(metadata)
        else:
            self.tags.pop(SIG_META, None)
