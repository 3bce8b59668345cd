"""Read-only tag codec on top of Pillow's LittleCMS bindings.

Pillow exposes the default translation of the text tags and the main header
fields of a profile but neither individual translations nor the named-color
table, and it cannot write tags. Writes therefore raise
:class:`~iccworks.profile.errors.CodecError`.
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Sequence, Union

from PIL import ImageCms

from ..profile.errors import CodecError, ProfileParseError
from ..profile.models import (
    SIG_COPYRIGHT,
    SIG_DEVICE_MFG_DESC,
    SIG_DEVICE_MODEL_DESC,
    SIG_PROFILE_DESCRIPTION,
    ColorLab,
    ProfileHeader,
    signature_to_str,
)
from .base import MultilingualEntry, NamedColorInfo, TagCodec
from .memory import MultiLocalizedUnicode, decode_lab

__all__ = ["PillowTagCodec"]

logger = logging.getLogger(__name__)

_TEXT_ATTRIBUTES: Dict[int, str] = {
    SIG_PROFILE_DESCRIPTION: "profile_description",
    SIG_COPYRIGHT: "copyright",
    SIG_DEVICE_MFG_DESC: "manufacturer",
    SIG_DEVICE_MODEL_DESC: "model",
}


class PillowTagCodec(TagCodec):
    """Expose an ``ImageCms.ImageCmsProfile`` through the codec interface."""

    def __init__(self, profile: ImageCms.ImageCmsProfile) -> None:
        self.profile = profile

    @classmethod
    def from_bytes(cls, data: bytes) -> "PillowTagCodec":
        try:
            profile = ImageCms.getOpenProfile(io.BytesIO(data))
        except (ImageCms.PyCMSError, OSError) as exc:
            raise ProfileParseError(
                f"failed to load: not an ICC profile ({exc})"
            ) from exc
        logger.debug("Opened %d byte profile with Pillow", len(data))
        return cls(profile)

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "PillowTagCodec":
        return cls.from_bytes(Path(path).read_bytes())

    @property
    def _core(self) -> Any:
        return self.profile.profile

    def _read_only(self, what: str) -> CodecError:
        return CodecError(f"Pillow profiles are read-only: cannot {what}")

    def read_tag_raw(self, signature: int) -> Optional[Any]:
        attribute = _TEXT_ATTRIBUTES.get(signature)
        if attribute is None:
            return None
        return getattr(self._core, attribute, None) or None

    def read_multilingual(self, signature: int) -> Optional[MultiLocalizedUnicode]:
        text = self.read_tag_raw(signature)
        if not text:
            return None
        return MultiLocalizedUnicode.from_text(text)

    def mlu_get_text(
        self, handle: MultiLocalizedUnicode, language: str, country: str
    ) -> Optional[str]:
        return handle.get_text(language, country)

    def write_multilingual(
        self, signature: int, translations: Iterable[MultilingualEntry]
    ) -> None:
        raise self._read_only(f"write '{signature_to_str(signature)}'")

    def delete_tag(self, signature: int) -> None:
        raise self._read_only(f"delete '{signature_to_str(signature)}'")

    def named_color_count(self, handle: Any) -> int:
        return 0

    def named_color_info(self, handle: Any, index: int) -> Optional[NamedColorInfo]:
        return None

    def decode_color(self, coordinate: Sequence[int]) -> ColorLab:
        return decode_lab(coordinate)

    def get_version(self) -> float:
        return float(self._core.version)

    def set_version(self, version: float) -> None:
        raise self._read_only("change the profile version")

    def get_header(self) -> ProfileHeader:
        core = self._core
        return ProfileHeader(
            device_class=getattr(core, "device_class", None),
            colorspace=getattr(core, "xcolor_space", None),
            created=getattr(core, "creation_date", None),
        )

    def set_header(self, header: ProfileHeader) -> None:
        raise self._read_only("change the profile header")

    def write_metadata(self, metadata: Dict[str, str]) -> None:
        raise self._read_only("write metadata")
