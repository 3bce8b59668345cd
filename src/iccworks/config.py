"""
Configuration for profile loading and saving.

Settings come from the ``[tool.iccworks]`` table of a ``pyproject.toml`` and
from ``ICCWORKS_*`` environment variables.
"""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from .profile.locale import DEFAULT_LOCALE
from .profile.models import MULTILINGUAL_VERSION, LoadFlags

__all__ = ["IccConfig", "HEADER_SIZE"]

logger = logging.getLogger(__name__)

# Size of the fixed ICC header; anything shorter cannot be a profile
HEADER_SIZE = 0x84


@dataclass
class IccConfig:
    """Tunables shared by :class:`~iccworks.profile.icc.IccProfile` instances."""

    # Locale whose text is stored as the untranslated default
    default_locale: str = DEFAULT_LOCALE
    # Version a profile is promoted to when a field gains translations
    multilingual_version: float = MULTILINGUAL_VERSION
    load_flags: LoadFlags = LoadFlags.NONE
    min_header_size: int = HEADER_SIZE

    @classmethod
    def from_pyproject(cls, pyproject_path: Optional[Path] = None) -> "IccConfig":
        """Load configuration from a pyproject.toml file."""
        if pyproject_path is None:
            pyproject_path = Path.cwd() / "pyproject.toml"

        config = cls()

        try:
            with open(pyproject_path, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            logger.warning("Could not load config from %s: %s", pyproject_path, e)
            return config

        config._apply(data.get("tool", {}).get("iccworks", {}))
        return config

    @classmethod
    def from_env(cls, base: Optional["IccConfig"] = None) -> "IccConfig":
        """Overlay ``ICCWORKS_*`` environment variables on ``base``."""
        config = base or cls()
        values: Dict[str, Any] = {}

        if "ICCWORKS_DEFAULT_LOCALE" in os.environ:
            values["default_locale"] = os.environ["ICCWORKS_DEFAULT_LOCALE"]
        if "ICCWORKS_MULTILINGUAL_VERSION" in os.environ:
            values["multilingual_version"] = os.environ["ICCWORKS_MULTILINGUAL_VERSION"]
        if "ICCWORKS_LOAD_FLAGS" in os.environ:
            values["load_flags"] = os.environ["ICCWORKS_LOAD_FLAGS"].split(",")

        config._apply(values)
        return config

    def _apply(self, values: Dict[str, Any]) -> None:
        if "default_locale" in values:
            locale = str(values["default_locale"]).strip()
            if locale:
                self.default_locale = locale
            else:
                logger.warning("Ignoring empty default_locale")

        if "multilingual_version" in values:
            try:
                self.multilingual_version = float(values["multilingual_version"])
            except (TypeError, ValueError):
                logger.warning(
                    "Ignoring invalid multilingual_version %r",
                    values["multilingual_version"],
                )

        if "load_flags" in values:
            raw = values["load_flags"]
            names = raw.split(",") if isinstance(raw, str) else raw
            try:
                self.load_flags = LoadFlags.parse(names)
            except ValueError as e:
                logger.warning("Ignoring load_flags: %s", e)
