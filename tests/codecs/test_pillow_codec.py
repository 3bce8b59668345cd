import pytest
from PIL import ImageCms

from iccworks.codecs.pillow import PillowTagCodec
from iccworks.profile.errors import CodecError, NoData, ProfileParseError
from iccworks.profile.icc import IccProfile
from iccworks.profile.models import (
    SIG_COPYRIGHT,
    Colorspace,
    LoadFlags,
    LocalizedField,
    ProfileKind,
)


@pytest.fixture
def srgb_bytes():
    return ImageCms.ImageCmsProfile(ImageCms.createProfile("sRGB")).tobytes()


def test_reads_default_text(srgb_bytes):
    codec = PillowTagCodec.from_bytes(srgb_bytes)
    handle = codec.read_multilingual(SIG_COPYRIGHT)
    assert handle is not None
    assert codec.mlu_get_text(handle, "", "")


def test_profile_loads_through_pillow(srgb_bytes, tmp_path):
    path = tmp_path / "srgb.icc"
    path.write_bytes(srgb_bytes)

    profile = IccProfile()
    profile.load_file(path, LoadFlags.NAMED_COLORS | LoadFlags.METADATA)

    assert profile.filename == path
    assert profile.size == len(srgb_bytes)
    assert profile.can_delete
    assert profile.version >= 2.0
    assert profile.kind is ProfileKind.DISPLAY_DEVICE
    assert profile.colorspace is Colorspace.RGB
    assert "sRGB" in profile.get_description()
    assert profile.get_description("fr_FR.UTF-8") == profile.get_description()
    assert profile.named_colors == []
    with pytest.raises(NoData):
        profile.get_manufacturer()


def test_load_data_from_memory(srgb_bytes):
    profile = IccProfile()
    profile.load_data(srgb_bytes)
    assert profile.filename is None
    assert not profile.can_delete


def test_too_small_is_rejected():
    with pytest.raises(ProfileParseError, match="too small"):
        IccProfile().load_data(b"\x00" * 16)


def test_garbage_is_rejected():
    with pytest.raises(ProfileParseError):
        IccProfile().load_data(b"\x00" * 512)


def test_missing_file_is_codec_error(tmp_path):
    with pytest.raises(CodecError):
        IccProfile().load_file(tmp_path / "missing.icc")


def test_pillow_profiles_are_read_only(srgb_bytes):
    profile = IccProfile()
    profile.load_data(srgb_bytes)
    profile.set_description("fr", "Profil sRGB")
    with pytest.raises(CodecError):
        profile.save()


def test_prepare_save_works_on_read_only_profiles(srgb_bytes):
    profile = IccProfile()
    profile.load_data(srgb_bytes)
    version = profile.codec.get_version()
    profile.set_description_items({"fr": "Profil sRGB", "de": "sRGB-Profil"})

    payloads = profile.prepare_save()

    assert payloads[LocalizedField.DESCRIPTION].is_multilingual
    assert profile.codec.get_version() == version
