"""Turn cached per-locale text into multilingual tag writes.

At save time every :class:`~iccworks.profile.localized.LocalizedTextCache`
is converted into a :class:`TagPayload`: either an instruction to delete the
tag (nothing representable left) or the full set of translations to write.

Building a payload only validates it; the codec is not touched until
:meth:`MultilingualTagBuilder.apply`. Version 2 profiles can only hold one
untranslated string per text tag, so a payload with more than one
translation needs the profile version raised to
:data:`~iccworks.profile.models.MULTILINGUAL_VERSION` before it is written
(:meth:`MultilingualTagBuilder.target_version`). The version is never lowered.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Tuple

from ..codecs.base import MultilingualEntry, TagCodec
from .errors import CannotWriteField, CodecError
from .locale import to_translation
from .models import (
    MULTILINGUAL_VERSION,
    SIG_PROFILE_DESCRIPTION_ML,
    LocaleTranslation,
    LocalizedField,
)

__all__ = ["PayloadAction", "TagPayload", "MultilingualTagBuilder"]

logger = logging.getLogger(__name__)


class PayloadAction(str, Enum):
    WRITE = "write"
    DELETE = "delete"


@dataclass(frozen=True)
class TagPayload:
    """What to do with one localized field's tag on save."""

    field: LocalizedField
    signature: int
    action: PayloadAction
    translations: Tuple[LocaleTranslation, ...] = ()

    def entries(self) -> List[MultilingualEntry]:
        """``(language, country, text)`` triples with codec sentinels."""
        return [(*t.codes, t.text) for t in self.translations]

    @property
    def is_multilingual(self) -> bool:
        return len(self.translations) > 1


class MultilingualTagBuilder:
    """Builds and applies :class:`TagPayload` objects against a codec."""

    def __init__(
        self, codec: TagCodec, *, multilingual_version: float = MULTILINGUAL_VERSION
    ) -> None:
        self.codec = codec
        self.multilingual_version = multilingual_version

    def build(
        self, field: LocalizedField, entries: Iterable[Tuple[str, str]]
    ) -> TagPayload:
        """Convert ``(locale_key, text)`` pairs into a payload for ``field``.

        Entries with variant or malformed locale keys are skipped. Raises
        :class:`CannotWriteField` if any surviving text cannot be encoded.
        """
        signature = field.write_signature
        translations: List[LocaleTranslation] = []
        for locale_key, text in entries:
            translation = to_translation(locale_key, text)
            if translation is None:
                logger.debug(
                    "Skipping %s translation for unsupported locale %r",
                    field.value,
                    locale_key,
                )
                continue
            self._check_encodable(signature, translation)
            translations.append(translation)

        if not translations:
            return TagPayload(field, signature, PayloadAction.DELETE)

        return TagPayload(field, signature, PayloadAction.WRITE, tuple(translations))

    def target_version(self, current: float, payloads: Iterable[TagPayload]) -> float:
        """Version the profile needs before ``payloads`` can be written."""
        multilingual = [p.field.value for p in payloads if p.is_multilingual]
        if not multilingual or current >= self.multilingual_version:
            return current
        logger.info(
            "Promoting profile version %.1f to %.1f for multilingual %s",
            current,
            self.multilingual_version,
            ", ".join(multilingual),
        )
        return self.multilingual_version

    @staticmethod
    def _check_encodable(signature: int, translation: LocaleTranslation) -> None:
        if not isinstance(translation.text, str):
            raise CannotWriteField(signature, "cannot write MLU text: not a string")
        try:
            translation.text.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise CannotWriteField(signature, f"cannot write MLU text: {exc}") from exc

    def apply(self, payload: TagPayload) -> None:
        """Write or delete the payload's tag through the codec."""
        try:
            if payload.action is PayloadAction.DELETE:
                self.codec.delete_tag(payload.signature)
                return
            self.codec.write_multilingual(payload.signature, payload.entries())
            # remove the Apple-specific copy of the description
            if payload.field is LocalizedField.DESCRIPTION:
                self.codec.delete_tag(SIG_PROFILE_DESCRIPTION_ML)
        except CodecError as exc:
            raise CannotWriteField(payload.signature, str(exc)) from exc

    def write(
        self, field: LocalizedField, entries: Iterable[Tuple[str, str]]
    ) -> TagPayload:
        """Build, promote the codec version if needed, and apply in one go."""
        payload = self.build(field, entries)
        current = self.codec.get_version()
        target = self.target_version(current, [payload])
        if target != current:
            try:
                self.codec.set_version(target)
            except CodecError as exc:
                raise CannotWriteField(payload.signature, str(exc)) from exc
        self.apply(payload)
        return payload
