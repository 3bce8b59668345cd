"""Profile facade tying the localized text caches, named colors and codec together.

Typical use::

    profile = IccProfile()
    profile.load_file("display.icc", LoadFlags.NAMED_COLORS)
    profile.get_description("en_GB.UTF-8")
    profile.set_description("fr", "Écran")
    profile.save()

Instances are not thread-safe; hold one lock per profile if it is shared.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from ..codecs.base import TagCodec
from ..codecs.pillow import PillowTagCodec
from ..config import IccConfig
from .errors import CannotWriteField, CodecError, IccError, NoData, ProfileParseError
from .localized import LocalizedTextCache
from .mlu import MultilingualTagBuilder, TagPayload
from .models import (
    SIG_META,
    SIG_NAMED_COLOR2,
    Colorspace,
    ColorSwatch,
    LoadFlags,
    LocalizedField,
    ProfileHeader,
    ProfileKind,
)
from .named_colors import extract

__all__ = ["IccProfile", "ProfileObserver"]

logger = logging.getLogger(__name__)

# Called as observer(profile, property_name) after version/kind/colorspace change
ProfileObserver = Callable[["IccProfile", str], None]


class IccProfile:
    """Localized metadata and named colors of one ICC profile."""

    def __init__(
        self,
        codec: Optional[TagCodec] = None,
        *,
        observer: Optional[ProfileObserver] = None,
        config: Optional[IccConfig] = None,
    ) -> None:
        self.config = config or IccConfig()
        self.observer = observer
        self.codec: Optional[TagCodec] = None
        self.filename: Optional[Path] = None
        self.size = 0
        self.can_delete = False
        self.created: Optional[datetime] = None

        self._version = 0.0
        self._kind = ProfileKind.UNKNOWN
        self._colorspace = Colorspace.UNKNOWN
        self._metadata: Dict[str, str] = {}
        self._named_colors: Optional[List[ColorSwatch]] = None
        self._fields: Dict[LocalizedField, LocalizedTextCache] = {
            field: LocalizedTextCache(field, default_locale=self.config.default_locale)
            for field in LocalizedField
        }

        if codec is not None:
            self._attach(codec)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------
    def _attach(self, codec: TagCodec) -> None:
        if self.codec is not None:
            raise IccError("profile is already loaded")
        self.codec = codec
        for cache in self._fields.values():
            cache.codec = codec

    def _require_codec(self) -> TagCodec:
        if self.codec is None:
            raise IccError("no profile loaded")
        return self.codec

    def load(self, codec: TagCodec, flags: Optional[LoadFlags] = None) -> None:
        """Read header fields and default translations from ``codec``."""
        if flags is None:
            flags = self.config.load_flags
        self._attach(codec)

        self._version = codec.get_version()
        header = codec.get_header()
        self._kind = ProfileKind.from_signature(header.device_class)
        self._colorspace = Colorspace.from_signature(header.colorspace)
        self.created = header.created

        if flags & LoadFlags.METADATA:
            self._metadata = dict(codec.read_metadata())

        # warm the cache with the untranslated text of every field
        for field, cache in self._fields.items():
            try:
                cache.get(None)
            except NoData:
                logger.debug("Profile has no %s", field.value)

        if flags & LoadFlags.NAMED_COLORS:
            self._load_named_colors()

        logger.debug(
            "Loaded profile v%.1f kind=%s colorspace=%s",
            self._version,
            self._kind.value,
            self._colorspace.value,
        )

    def load_data(self, data: bytes, flags: Optional[LoadFlags] = None) -> None:
        """Load a profile from raw bytes using the Pillow codec."""
        if len(data) < self.config.min_header_size:
            raise ProfileParseError("icc was not valid (file size too small)")
        codec = PillowTagCodec.from_bytes(data)
        self.size = len(data)
        self.load(codec, flags)

    def load_file(
        self, path: Union[str, Path], flags: Optional[LoadFlags] = None
    ) -> None:
        """Load a profile from disk."""
        path = Path(path)
        try:
            data = path.read_bytes()
        except OSError as exc:
            raise CodecError(f"failed to read {path}: {exc}") from exc
        self.load_data(data, flags)
        self.filename = path
        self.can_delete = True

    # ------------------------------------------------------------------
    # Header properties
    # ------------------------------------------------------------------
    def _notify(self, name: str) -> None:
        if self.observer is not None:
            self.observer(self, name)

    @property
    def version(self) -> float:
        return self._version

    @version.setter
    def version(self, value: float) -> None:
        self._version = float(value)
        self._notify("version")

    @property
    def kind(self) -> ProfileKind:
        return self._kind

    @kind.setter
    def kind(self, value: ProfileKind) -> None:
        self._kind = ProfileKind(value)
        self._notify("kind")

    @property
    def colorspace(self) -> Colorspace:
        return self._colorspace

    @colorspace.setter
    def colorspace(self, value: Colorspace) -> None:
        self._colorspace = Colorspace(value)
        self._notify("colorspace")

    # ------------------------------------------------------------------
    # Metadata dictionary
    # ------------------------------------------------------------------
    def get_metadata(self) -> Dict[str, str]:
        return dict(self._metadata)

    def get_metadata_item(self, key: str) -> Optional[str]:
        return self._metadata.get(key)

    def add_metadata(self, key: str, value: str) -> None:
        self._metadata[key] = value

    def remove_metadata(self, key: str) -> None:
        self._metadata.pop(key, None)

    # ------------------------------------------------------------------
    # Localized text
    # ------------------------------------------------------------------
    def localized(self, field: LocalizedField) -> LocalizedTextCache:
        return self._fields[LocalizedField(field)]

    def get_text(self, field: LocalizedField, locale: Optional[str] = None) -> str:
        """Text of ``field`` for ``locale``; ``None`` means the profile default.

        Falls back to the untranslated text when the codec has no better
        match. Raises :class:`InvalidLocale` or :class:`NoData`.
        """
        return self.localized(field).get(locale)

    def set_text(
        self, field: LocalizedField, locale: Optional[str], value: str
    ) -> None:
        self.localized(field).set(locale, value)

    def set_text_items(
        self, field: LocalizedField, values: Mapping[Optional[str], str]
    ) -> None:
        self.localized(field).update(values)

    def get_description(self, locale: Optional[str] = None) -> str:
        return self.get_text(LocalizedField.DESCRIPTION, locale)

    def get_copyright(self, locale: Optional[str] = None) -> str:
        return self.get_text(LocalizedField.COPYRIGHT, locale)

    def get_manufacturer(self, locale: Optional[str] = None) -> str:
        return self.get_text(LocalizedField.MANUFACTURER, locale)

    def get_model(self, locale: Optional[str] = None) -> str:
        return self.get_text(LocalizedField.MODEL, locale)

    def set_description(self, locale: Optional[str], value: str) -> None:
        self.set_text(LocalizedField.DESCRIPTION, locale, value)

    def set_copyright(self, locale: Optional[str], value: str) -> None:
        self.set_text(LocalizedField.COPYRIGHT, locale, value)

    def set_manufacturer(self, locale: Optional[str], value: str) -> None:
        self.set_text(LocalizedField.MANUFACTURER, locale, value)

    def set_model(self, locale: Optional[str], value: str) -> None:
        self.set_text(LocalizedField.MODEL, locale, value)

    def set_description_items(self, values: Mapping[Optional[str], str]) -> None:
        self.set_text_items(LocalizedField.DESCRIPTION, values)

    def set_copyright_items(self, values: Mapping[Optional[str], str]) -> None:
        self.set_text_items(LocalizedField.COPYRIGHT, values)

    def set_manufacturer_items(self, values: Mapping[Optional[str], str]) -> None:
        self.set_text_items(LocalizedField.MANUFACTURER, values)

    def set_model_items(self, values: Mapping[Optional[str], str]) -> None:
        self.set_text_items(LocalizedField.MODEL, values)

    # ------------------------------------------------------------------
    # Named colors
    # ------------------------------------------------------------------
    def _load_named_colors(self) -> List[ColorSwatch]:
        codec = self._require_codec()
        self._named_colors = extract(codec, codec.read_tag_raw(SIG_NAMED_COLOR2))
        return self._named_colors

    @property
    def named_colors(self) -> List[ColorSwatch]:
        """Named colors of the profile, extracted on first access."""
        if self._named_colors is None:
            if self.codec is None:
                return []
            self._load_named_colors()
        return list(self._named_colors)

    # ------------------------------------------------------------------
    # Saving
    # ------------------------------------------------------------------
    def _builder(self, codec: TagCodec) -> MultilingualTagBuilder:
        return MultilingualTagBuilder(
            codec, multilingual_version=self.config.multilingual_version
        )

    def prepare_save(self) -> Dict[LocalizedField, TagPayload]:
        """Build the tag payload of every localized field.

        Raises :class:`CannotWriteField` for text that cannot be encoded.
        Nothing is written to the codec.
        """
        builder = self._builder(self._require_codec())
        return {
            field: builder.build(field, list(cache.items()))
            for field, cache in self._fields.items()
        }

    def save(self) -> None:
        """Write header, metadata, version and localized text into the codec.

        Every payload is built before the codec is touched, so text that
        cannot be encoded leaves the profile unchanged. A codec refusing a
        write stops the save; tags written before it are not rolled back.
        """
        codec = self._require_codec()
        payloads = self.prepare_save()

        codec.set_header(
            ProfileHeader(
                device_class=self._kind.signature,
                colorspace=self._colorspace.signature,
                created=self.created,
            )
        )
        try:
            codec.write_metadata(dict(self._metadata))
        except CodecError as exc:
            raise CannotWriteField(SIG_META, f"cannot write metadata: {exc}") from exc

        builder = self._builder(codec)
        current = self._version if self._version > 0.0 else codec.get_version()
        version = builder.target_version(current, payloads.values())
        codec.set_version(version)
        if version != self._version:
            self.version = version

        for payload in payloads.values():
            builder.apply(payload)
        logger.info("Saved profile v%.1f", self._version)

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------
    def _default_text(self, field: LocalizedField) -> Optional[str]:
        try:
            return self.get_text(field)
        except NoData:
            return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "filename": str(self.filename) if self.filename else None,
            "size": self.size,
            "version": self._version,
            "kind": self._kind.value,
            "colorspace": self._colorspace.value,
            "created": self.created.isoformat() if self.created else None,
            "can_delete": self.can_delete,
            **{field.value: self._default_text(field) for field in LocalizedField},
            "metadata": self.get_metadata(),
            "named_colors": [swatch.as_dict() for swatch in self.named_colors],
        }
