"""Per-field cache of localized profile text.

Each :class:`LocalizedTextCache` maps locale keys (see
:mod:`iccworks.profile.locale`) to text. Reads go through to the codec once
per key; values written with :meth:`LocalizedTextCache.set` always win and
are only pushed to the codec at save time.

The cache has no locking. Callers sharing a profile between threads must
serialise access to it.
"""

from __future__ import annotations

import logging
from typing import Dict, ItemsView, Iterator, KeysView, Mapping, Optional

from ..codecs.base import TagCodec
from .errors import NoData
from .locale import DEFAULT_LOCALE, decompose, normalize
from .models import LocalizedField, signature_to_str

__all__ = ["LocalizedTextCache"]

logger = logging.getLogger(__name__)


class LocalizedTextCache:
    """Read-through / write-back cache for one :class:`LocalizedField`."""

    def __init__(
        self,
        field: LocalizedField,
        codec: Optional[TagCodec] = None,
        *,
        default_locale: str = DEFAULT_LOCALE,
    ) -> None:
        self.field = field
        self.codec = codec
        self.default_locale = default_locale
        self._values: Dict[str, str] = {}

    def key_for(self, locale: Optional[str]) -> str:
        return normalize(locale, self.default_locale)

    def get(self, locale: Optional[str] = None) -> str:
        """Return the text for ``locale`` (``None`` is the profile default).

        Raises :class:`InvalidLocale` for locales that cannot be decomposed
        and :class:`NoData` when the profile has no text for the field.
        """
        key = self.key_for(locale)
        cached = self._values.get(key)
        if cached is not None:
            return cached

        language, country = decompose(key)
        text = self._lookup(language, country)
        if text is None:
            raise NoData(f"no {self.field.value} text for locale {locale!r}")

        self._values[key] = text
        return text

    def _lookup(self, language: str, country: str) -> Optional[str]:
        if self.codec is None:
            return None
        for signature in self.field.read_signatures:
            handle = self.codec.read_multilingual(signature)
            if handle is None:
                continue
            text = self.codec.mlu_get_text(handle, language, country)
            if text:
                logger.debug(
                    "Read %s from '%s' for %r/%r",
                    self.field.value,
                    signature_to_str(signature),
                    language,
                    country,
                )
                return text
        return None

    def set(self, locale: Optional[str], value: str) -> None:
        self._values[self.key_for(locale)] = value

    def update(self, values: Mapping[Optional[str], str]) -> None:
        """Set every ``locale -> text`` pair of ``values``."""
        for locale, value in values.items():
            self.set(locale, value)

    def items(self) -> ItemsView[str, str]:
        return self._values.items()

    def keys(self) -> KeysView[str]:
        return self._values.keys()

    def __contains__(self, locale: object) -> bool:
        if locale is not None and not isinstance(locale, str):
            return False
        return self.key_for(locale) in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)
