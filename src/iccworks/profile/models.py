"""Value types shared by the profile metadata modules."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum, Flag, auto
from typing import Dict, Optional, Tuple

from .errors import InvalidLocale

__all__ = [
    "NO_LANGUAGE",
    "NO_COUNTRY",
    "MULTILINGUAL_VERSION",
    "SIG_PROFILE_DESCRIPTION",
    "SIG_PROFILE_DESCRIPTION_ML",
    "SIG_COPYRIGHT",
    "SIG_DEVICE_MFG_DESC",
    "SIG_DEVICE_MODEL_DESC",
    "SIG_NAMED_COLOR2",
    "SIG_META",
    "signature_from_str",
    "signature_to_str",
    "LocalizedField",
    "LocaleTranslation",
    "ColorLab",
    "ColorSwatch",
    "ProfileKind",
    "Colorspace",
    "LoadFlags",
    "ProfileHeader",
]

# Codec sentinels for "no language" / "no country"
NO_LANGUAGE = ""
NO_COUNTRY = ""

# First format version able to store more than one translation per tag
MULTILINGUAL_VERSION = 4.0


def signature_from_str(text: str) -> int:
    """Convert a four character tag name such as ``'desc'`` to its integer."""
    raw = text.encode("ascii")
    if len(raw) != 4:
        raise ValueError(f"tag signatures are four characters, got {text!r}")
    return int.from_bytes(raw, "big")


def signature_to_str(signature: int) -> str:
    return signature.to_bytes(4, "big").decode("ascii", errors="replace")


SIG_PROFILE_DESCRIPTION = signature_from_str("desc")
# Apple-specific multilingual shadow of 'desc'
SIG_PROFILE_DESCRIPTION_ML = 0x6473636D
SIG_COPYRIGHT = signature_from_str("cprt")
SIG_DEVICE_MFG_DESC = signature_from_str("dmnd")
SIG_DEVICE_MODEL_DESC = signature_from_str("dmdd")
SIG_NAMED_COLOR2 = signature_from_str("ncl2")
SIG_META = signature_from_str("meta")


class LocalizedField(str, Enum):
    """Localized text fields stored in a profile."""

    DESCRIPTION = "description"
    COPYRIGHT = "copyright"
    MANUFACTURER = "manufacturer"
    MODEL = "model"

    @property
    def read_signatures(self) -> Tuple[int, ...]:
        """Tags to consult when reading, most preferred first."""
        return _READ_SIGNATURES[self]

    @property
    def write_signature(self) -> int:
        return _WRITE_SIGNATURES[self]


_READ_SIGNATURES: Dict[LocalizedField, Tuple[int, ...]] = {
    LocalizedField.DESCRIPTION: (SIG_PROFILE_DESCRIPTION_ML, SIG_PROFILE_DESCRIPTION),
    LocalizedField.COPYRIGHT: (SIG_COPYRIGHT,),
    LocalizedField.MANUFACTURER: (SIG_DEVICE_MFG_DESC,),
    LocalizedField.MODEL: (SIG_DEVICE_MODEL_DESC,),
}

_WRITE_SIGNATURES: Dict[LocalizedField, int] = {
    LocalizedField.DESCRIPTION: SIG_PROFILE_DESCRIPTION,
    LocalizedField.COPYRIGHT: SIG_COPYRIGHT,
    LocalizedField.MANUFACTURER: SIG_DEVICE_MFG_DESC,
    LocalizedField.MODEL: SIG_DEVICE_MODEL_DESC,
}


@dataclass(frozen=True)
class LocaleTranslation:
    """One (language, country, text) triple of a multilingual tag.

    ``language`` and ``country`` are ``None`` for the untranslated default.
    """

    language: Optional[str]
    country: Optional[str]
    text: str

    def __post_init__(self) -> None:
        if self.country is not None and self.language is None:
            raise InvalidLocale(
                f"_{self.country}", "country code without a language code"
            )
        if self.language is not None and len(self.language) != 2:
            raise InvalidLocale(self.language, "language code must be 2 characters")
        if self.country is not None and len(self.country) != 2:
            raise InvalidLocale(
                f"{self.language}_{self.country}",
                "country code must be 2 characters",
            )

    @property
    def codes(self) -> Tuple[str, str]:
        """Language/country pair with codec sentinels for missing parts."""
        return (self.language or NO_LANGUAGE, self.country or NO_COUNTRY)


@dataclass(frozen=True)
class ColorLab:
    """CIE L*a*b* coordinate."""

    L: float
    a: float
    b: float

    def as_tuple(self) -> Tuple[float, float, float]:
        return (self.L, self.a, self.b)


@dataclass(frozen=True)
class ColorSwatch:
    """Named spot color taken from a profile's named-color table."""

    name: str
    value: ColorLab

    def as_dict(self) -> Dict[str, object]:
        return {"name": self.name, "value": list(self.value.as_tuple())}


class ProfileKind(str, Enum):
    """ICC device class of a profile."""

    UNKNOWN = "unknown"
    INPUT_DEVICE = "input-device"
    DISPLAY_DEVICE = "display-device"
    OUTPUT_DEVICE = "output-device"
    DEVICELINK = "devicelink"
    COLORSPACE_CONVERSION = "colorspace-conversion"
    ABSTRACT = "abstract"
    NAMED_COLOR = "named-color"

    @classmethod
    def from_signature(cls, signature: Optional[str]) -> "ProfileKind":
        if not signature:
            return cls.UNKNOWN
        for kind, sig in _KIND_SIGNATURES.items():
            if sig == signature:
                return kind
        return cls.UNKNOWN

    @property
    def signature(self) -> Optional[str]:
        return _KIND_SIGNATURES.get(self)


_KIND_SIGNATURES: Dict[ProfileKind, str] = {
    ProfileKind.INPUT_DEVICE: "scnr",
    ProfileKind.DISPLAY_DEVICE: "mntr",
    ProfileKind.OUTPUT_DEVICE: "prtr",
    ProfileKind.DEVICELINK: "link",
    ProfileKind.COLORSPACE_CONVERSION: "spac",
    ProfileKind.ABSTRACT: "abst",
    ProfileKind.NAMED_COLOR: "nmcl",
}


class Colorspace(str, Enum):
    """Data colour space declared in the profile header."""

    UNKNOWN = "unknown"
    XYZ = "xyz"
    LAB = "lab"
    LUV = "luv"
    YCBCR = "ycbcr"
    YXY = "yxy"
    RGB = "rgb"
    GRAY = "gray"
    HSV = "hsv"
    CMYK = "cmyk"
    CMY = "cmy"

    @classmethod
    def from_signature(cls, signature: Optional[str]) -> "Colorspace":
        if not signature:
            return cls.UNKNOWN
        # header signatures are space padded, e.g. 'RGB '
        wanted = signature.strip()
        for space, sig in _COLORSPACE_SIGNATURES.items():
            if sig.strip() == wanted:
                return space
        return cls.UNKNOWN

    @property
    def signature(self) -> Optional[str]:
        return _COLORSPACE_SIGNATURES.get(self)


_COLORSPACE_SIGNATURES: Dict[Colorspace, str] = {
    Colorspace.XYZ: "XYZ ",
    Colorspace.LAB: "Lab ",
    Colorspace.LUV: "Luv ",
    Colorspace.YCBCR: "YCbr",
    Colorspace.YXY: "Yxy ",
    Colorspace.RGB: "RGB ",
    Colorspace.GRAY: "GRAY",
    Colorspace.HSV: "HSV ",
    Colorspace.CMYK: "CMYK",
    Colorspace.CMY: "CMY ",
}


class LoadFlags(Flag):
    """Optional work performed while loading a profile."""

    NONE = 0
    NAMED_COLORS = auto()
    METADATA = auto()

    @classmethod
    def parse(cls, names) -> "LoadFlags":
        """Combine flag names such as ``["named_colors", "metadata"]``."""
        flags = cls.NONE
        for name in names:
            token = str(name).strip().upper()
            if not token:
                continue
            try:
                flags |= cls[token]
            except KeyError as exc:
                raise ValueError(f"unknown load flag: {name}") from exc
        return flags


@dataclass
class ProfileHeader:
    """Header fields a codec reports alongside the tag table."""

    device_class: Optional[str] = None
    colorspace: Optional[str] = None
    created: Optional[datetime] = None
