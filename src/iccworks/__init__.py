"""iccworks: localized ICC profile metadata and named colors."""

# profile must be imported before config (config reuses its constants)
from .profile import IccProfile, LoadFlags, LocalizedField
from .config import IccConfig
from .logging_utils import configure_logging, set_library_level

__version__ = "0.1.0"
__all__ = [
    "IccProfile",
    "LoadFlags",
    "LocalizedField",
    "IccConfig",
    "configure_logging",
    "set_library_level",
]
