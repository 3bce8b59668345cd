"""Abstract tag codec consumed by the profile metadata core.

A codec owns the binary profile: its tag directory, the multilingual text
encoding and the PCS color encoding. The core only ever talks to it through
this interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, Optional, Sequence, Tuple

from ..profile.models import ColorLab, ProfileHeader

__all__ = ["TagCodec", "NamedColorInfo", "MultilingualEntry"]

# (name, prefix, suffix, encoded coordinate)
NamedColorInfo = Tuple[Any, Any, Any, Sequence[int]]
# (language, country, text)
MultilingualEntry = Tuple[str, str, str]


class TagCodec(ABC):
    """Access to the tags of one opened profile."""

    @abstractmethod
    def read_tag_raw(self, signature: int) -> Optional[Any]:
        """Return the decoded tag for ``signature`` or ``None`` if absent."""

    @abstractmethod
    def read_multilingual(self, signature: int) -> Optional[Any]:
        """Return a multilingual handle for ``signature`` or ``None``."""

    @abstractmethod
    def mlu_get_text(self, handle: Any, language: str, country: str) -> Optional[str]:
        """Look up the translation the codec resolves for the given codes."""

    @abstractmethod
    def write_multilingual(
        self, signature: int, translations: Iterable[MultilingualEntry]
    ) -> None:
        """Replace ``signature`` with a multilingual tag.

        Implementations raise :class:`~iccworks.profile.errors.CodecError`
        when the payload cannot be encoded.
        """

    @abstractmethod
    def delete_tag(self, signature: int) -> None:
        """Remove ``signature``; missing tags are ignored."""

    @abstractmethod
    def named_color_count(self, handle: Any) -> int:
        """Number of entries in a named-color list handle."""

    @abstractmethod
    def named_color_info(self, handle: Any, index: int) -> Optional[NamedColorInfo]:
        """Return the raw fields of entry ``index`` or ``None`` on failure."""

    @abstractmethod
    def decode_color(self, coordinate: Sequence[int]) -> ColorLab:
        """Convert an encoded PCS coordinate to floating point Lab."""

    @abstractmethod
    def get_version(self) -> float:
        """Profile format version, e.g. ``2.1`` or ``4.3``."""

    @abstractmethod
    def set_version(self, version: float) -> None:
        """Set the profile format version."""

    def get_header(self) -> ProfileHeader:
        """Header fields; codecs without header access report nothing."""
        return ProfileHeader()

    def set_header(self, header: ProfileHeader) -> None:
        """Store header fields; a no-op unless the codec supports it."""

    def read_metadata(self) -> Dict[str, str]:
        """Key/value pairs of the profile's metadata dictionary tag."""
        return {}

    def write_metadata(self, metadata: Dict[str, str]) -> None:
        """Replace (or with an empty mapping, delete) the metadata tag."""
