import sys
from collections import Counter
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from iccworks.codecs.memory import (  # noqa: E402
    MemoryTagCodec,
    MultiLocalizedUnicode,
    NamedColor,
    NamedColorList,
)
from iccworks.profile.models import (  # noqa: E402
    SIG_COPYRIGHT,
    SIG_NAMED_COLOR2,
    SIG_PROFILE_DESCRIPTION,
    ProfileHeader,
)


class CountingCodec(MemoryTagCodec):
    """Memory codec that records every text lookup."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.lookups = Counter()

    def mlu_get_text(self, handle, language, country):
        self.lookups[(language, country)] += 1
        return super().mlu_get_text(handle, language, country)


@pytest.fixture
def description_mlu():
    return MultiLocalizedUnicode(
        {
            ("", ""): "Generic Display",
            ("en", "GB"): "Generic Display (UK)",
            ("fr", ""): "Écran générique",
            ("de", "DE"): "Generischer Bildschirm",
        }
    )


@pytest.fixture
def codec(description_mlu):
    return CountingCodec(
        {
            SIG_PROFILE_DESCRIPTION: description_mlu,
            SIG_COPYRIGHT: "Copyright 2024 Example Corp",
            SIG_NAMED_COLOR2: NamedColorList(
                [
                    NamedColor(
                        b"Red", (32768, 46260, 39835), prefix=b"PANTONE", suffix=b"C"
                    ),
                    None,
                    NamedColor(b"Acme\x86Blue", (19661, 33924, 20560)),
                    NamedColor(b"Caf\xc3\xa9", (52429, 32896, 32896)),
                ]
            ),
        },
        version=2.1,
        header=ProfileHeader(device_class="mntr", colorspace="RGB "),
    )
