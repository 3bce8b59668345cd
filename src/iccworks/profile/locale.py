"""Locale handling for localized profile text.

Two separate steps turn a POSIX-style locale into something usable:

* :func:`normalize` builds the cache key, e.g. ``'en_GB.UTF-8' -> 'en_GB'``
  and ``'fr' -> 'fr'``. The profile default (``en_US``) maps to ``''``.
* :func:`decompose` splits a key into the two-letter language and country
  codes the codec expects, rejecting anything the format cannot represent.
"""

from __future__ import annotations

import re
from typing import Optional, Tuple

from .errors import InvalidLocale
from .models import NO_COUNTRY, NO_LANGUAGE, LocaleTranslation

__all__ = [
    "DEFAULT_LOCALE",
    "VARIANT_MARKER",
    "normalize",
    "decompose",
    "to_translation",
]

# en_US is the untranslated entry in an ICC profile
DEFAULT_LOCALE = "en_US"
VARIANT_MARKER = "@"

_SUFFIX_RE = re.compile(r"[.(]")


def normalize(locale: Optional[str], default_locale: str = DEFAULT_LOCALE) -> str:
    """Return the cache key for ``locale``."""
    if locale is None or locale.startswith(default_locale):
        return ""
    return _SUFFIX_RE.split(locale, maxsplit=1)[0]


def decompose(locale_key: str) -> Tuple[str, str]:
    """Split a locale key into ``(language, country)`` codes.

    Missing parts are returned as the codec sentinels. Raises
    :class:`InvalidLocale` when either code is not exactly two characters.
    """
    if not locale_key:
        return (NO_LANGUAGE, NO_COUNTRY)

    language, sep, country = locale_key.partition("_")
    if len(language) != 2:
        raise InvalidLocale(locale_key, "language code must be 2 characters")
    if not sep:
        return (language, NO_COUNTRY)
    if len(country) != 2:
        raise InvalidLocale(locale_key, "country code must be 2 characters")
    return (language, country)


def to_translation(locale_key: str, text: str) -> Optional[LocaleTranslation]:
    """Build a :class:`LocaleTranslation`, or ``None`` if it cannot be stored.

    Variant locales such as ``sr_RS@latin`` and malformed keys are cosmetic
    variants the multilingual tag has no slot for.
    """
    if not locale_key:
        return LocaleTranslation(language=None, country=None, text=text)
    if VARIANT_MARKER in locale_key:
        return None
    try:
        language, country = decompose(locale_key)
    except InvalidLocale:
        return None
    return LocaleTranslation(
        language=language,
        country=country if country != NO_COUNTRY else None,
        text=text,
    )
