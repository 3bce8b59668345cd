import pytest

from iccworks.config import IccConfig
from iccworks.profile.errors import CannotWriteField, IccError, InvalidLocale, NoData
from iccworks.profile.icc import IccProfile
from iccworks.profile.mlu import PayloadAction
from iccworks.profile.models import (
    SIG_COPYRIGHT,
    SIG_DEVICE_MFG_DESC,
    SIG_DEVICE_MODEL_DESC,
    SIG_META,
    SIG_NAMED_COLOR2,
    SIG_PROFILE_DESCRIPTION,
    Colorspace,
    LoadFlags,
    LocalizedField,
    ProfileKind,
)


def _loaded(codec, flags=LoadFlags.NONE, **kwargs):
    profile = IccProfile(**kwargs)
    profile.load(codec, flags)
    return profile


def test_load_reads_header(codec):
    profile = _loaded(codec)
    assert profile.version == 2.1
    assert profile.kind is ProfileKind.DISPLAY_DEVICE
    assert profile.colorspace is Colorspace.RGB


def test_load_warms_default_translations(codec):
    profile = _loaded(codec)
    assert codec.lookups[("", "")] == 2  # description and copyright
    assert profile.get_description() == "Generic Display"
    assert profile.get_copyright() == "Copyright 2024 Example Corp"
    assert codec.lookups[("", "")] == 2


def test_localized_getters(codec):
    profile = _loaded(codec)
    assert profile.get_description("en_GB.UTF-8") == "Generic Display (UK)"
    assert profile.get_description("fr_CA") == "Écran générique"
    with pytest.raises(NoData):
        profile.get_manufacturer()
    with pytest.raises(NoData):
        profile.get_model("fr")
    with pytest.raises(InvalidLocale):
        profile.get_description("sr_RS@latin")


def test_setters_take_precedence(codec):
    profile = _loaded(codec)
    profile.set_description("fr", "Moniteur")
    profile.set_manufacturer(None, "Example Corp")
    profile.set_model_items({None: "X1", "de_DE.UTF-8": "X1 (DE)"})
    assert profile.get_description("fr") == "Moniteur"
    assert profile.get_manufacturer() == "Example Corp"
    assert profile.get_model("de_DE") == "X1 (DE)"


def test_named_colors_loaded_with_flag(codec):
    profile = _loaded(codec, LoadFlags.NAMED_COLORS)
    codec.tags.pop(SIG_NAMED_COLOR2)
    assert [s.name for s in profile.named_colors] == [
        "PANTONE Red C",
        "AcmeBlue",
        "Café",
    ]


def test_named_colors_are_lazy(codec):
    profile = _loaded(codec)
    assert len(profile.named_colors) == 3


def test_named_colors_without_profile():
    assert IccProfile().named_colors == []


def test_metadata_loaded_with_flag(codec):
    codec.tags[SIG_META] = {"CMF_product": "displaycal", "EDID_md5": "abc"}
    profile = _loaded(codec, LoadFlags.METADATA)
    assert profile.get_metadata_item("CMF_product") == "displaycal"
    profile.add_metadata("License", "CC0")
    profile.remove_metadata("EDID_md5")
    assert profile.get_metadata() == {"CMF_product": "displaycal", "License": "CC0"}


def test_metadata_ignored_without_flag(codec):
    codec.tags[SIG_META] = {"CMF_product": "displaycal"}
    assert _loaded(codec).get_metadata() == {}


def test_observer_sees_property_changes(codec):
    seen = []
    profile = _loaded(codec, observer=lambda p, name: seen.append(name))
    profile.version = 4.2
    profile.kind = ProfileKind.OUTPUT_DEVICE
    profile.colorspace = "cmyk"
    assert seen == ["version", "kind", "colorspace"]
    assert profile.colorspace is Colorspace.CMYK


def test_load_twice_is_rejected(codec):
    profile = _loaded(codec)
    with pytest.raises(IccError):
        profile.load(codec)


def test_prepare_save_builds_payload_per_field(codec):
    profile = _loaded(codec)
    profile.set_manufacturer("", "Example Corp")
    payloads = profile.prepare_save()
    assert set(payloads) == set(LocalizedField)
    assert payloads[LocalizedField.MODEL].action is PayloadAction.DELETE
    assert payloads[LocalizedField.MANUFACTURER].action is PayloadAction.WRITE
    assert SIG_DEVICE_MFG_DESC not in codec.tags


def test_prepare_save_leaves_codec_untouched(codec):
    profile = _loaded(codec)
    profile.set_description_items({"en_GB": "Display (UK)", "fr": "Écran"})
    payloads = profile.prepare_save()
    assert payloads[LocalizedField.DESCRIPTION].is_multilingual
    assert codec.get_version() == 2.1
    assert codec.read_multilingual(SIG_PROFILE_DESCRIPTION).get_text("fr", "") == (
        "Écran générique"
    )


def test_save_writes_translations_and_promotes_version(codec):
    seen = []
    profile = _loaded(codec, observer=lambda p, name: seen.append(name))
    profile.set_description_items({"en_GB": "Display (UK)", "fr": "Écran"})
    profile.set_copyright("de", "Urheberrecht")
    profile.save()

    desc = codec.read_multilingual(SIG_PROFILE_DESCRIPTION)
    assert desc.get_text("en", "GB") == "Display (UK)"
    assert desc.get_text("", "") == "Generic Display"
    assert codec.read_multilingual(SIG_COPYRIGHT).get_text("de", "") == "Urheberrecht"
    assert codec.get_version() == 4.0
    assert profile.version == 4.0
    assert "version" in seen
    assert codec.header.device_class == "mntr"
    assert codec.header.colorspace == "RGB "


def test_save_single_translation_keeps_v2(codec):
    profile = _loaded(codec)
    profile.save()
    assert profile.version == 2.1
    assert codec.read_multilingual(SIG_COPYRIGHT).get_text("", "") == (
        "Copyright 2024 Example Corp"
    )


def test_save_stops_at_first_failed_field(codec):
    profile = _loaded(codec)
    profile.set_description("fr", "Écran")
    profile.set_manufacturer(None, "Example Corp")
    profile.set_model(None, "X1")
    codec.fail_writes.add(SIG_DEVICE_MFG_DESC)

    with pytest.raises(CannotWriteField) as excinfo:
        profile.save()

    assert excinfo.value.signature == SIG_DEVICE_MFG_DESC
    # earlier fields stay written, later ones are never attempted
    desc = codec.read_multilingual(SIG_PROFILE_DESCRIPTION)
    assert desc.get_text("fr", "") == "Écran"
    assert SIG_DEVICE_MODEL_DESC not in codec.tags


def test_unencodable_text_leaves_profile_unchanged(codec):
    profile = _loaded(codec)
    profile.set_description_items({"en_GB": "Display (UK)", "fr": "Écran"})
    profile.set_model(None, "bad \udc80")
    profile.add_metadata("CMF_product", "Example")
    profile.kind = ProfileKind.OUTPUT_DEVICE

    with pytest.raises(CannotWriteField) as excinfo:
        profile.save()

    assert excinfo.value.signature == SIG_DEVICE_MODEL_DESC
    assert codec.get_version() == 2.1
    assert profile.version == 2.1
    assert SIG_META not in codec.tags
    assert codec.header.device_class == "mntr"
    desc = codec.read_multilingual(SIG_PROFILE_DESCRIPTION)
    assert desc.get_text("fr", "") == "Écran générique"


def test_save_metadata_failure(codec):
    profile = _loaded(codec)
    profile.add_metadata("key", "value")
    codec.fail_writes.add(SIG_META)
    with pytest.raises(CannotWriteField):
        profile.save()


def test_save_without_profile():
    with pytest.raises(IccError):
        IccProfile().save()


def test_config_default_locale_and_threshold(codec):
    config = IccConfig(default_locale="de_DE", multilingual_version=4.2)
    profile = _loaded(codec, config=config)
    assert profile.get_description("de_DE.UTF-8") == "Generic Display"
    profile.set_model_items({None: "X1", "fr": "X1 fr"})
    profile.save()
    assert profile.version == 4.2


def test_config_load_flags_are_the_default(codec):
    profile = IccProfile(config=IccConfig(load_flags=LoadFlags.NAMED_COLORS))
    profile.load(codec)
    codec.tags.pop(SIG_NAMED_COLOR2)
    assert len(profile.named_colors) == 3


def test_to_dict(codec):
    summary = _loaded(codec).to_dict()
    assert summary["description"] == "Generic Display"
    assert summary["model"] is None
    assert summary["kind"] == "display-device"
    assert summary["named_colors"][0]["name"] == "PANTONE Red C"
