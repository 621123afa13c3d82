"""
QuirksConfig Tests
==================
"""

import dataclasses

import pytest

from chip8emu.core.quirks import PRESETS, QuirksConfig


def test_all_quirks_default_off():
    quirks = QuirksConfig()
    assert quirks.enabled() == ()
    assert quirks.names() == ("vf_reset", "memory", "clipping", "shifting", "jumping", "display_wait")


def test_config_is_immutable():
    quirks = QuirksConfig()
    with pytest.raises(dataclasses.FrozenInstanceError):
        quirks.clipping = True


def test_from_mapping():
    quirks = QuirksConfig.from_mapping({"clipping": True, "memory": False})
    assert quirks.clipping
    assert not quirks.memory


def test_from_mapping_rejects_unknown_names():
    with pytest.raises(ValueError, match="clippping"):
        QuirksConfig.from_mapping({"clippping": True})


def test_from_names():
    quirks = QuirksConfig.from_names(["shifting", "jumping"])
    assert quirks.enabled() == ("shifting", "jumping")


@pytest.mark.parametrize("name", sorted(PRESETS))
def test_presets(name):
    assert QuirksConfig.preset(name) is PRESETS[name]


def test_cosmac_preset():
    quirks = QuirksConfig.preset("cosmac")
    assert quirks.enabled() == ("vf_reset", "memory", "clipping", "display_wait")


def test_unknown_preset():
    with pytest.raises(ValueError, match="unknown quirk preset"):
        QuirksConfig.preset("xochip")


def test_with_overrides_returns_new_record():
    base = QuirksConfig.preset("schip")
    derived = base.with_overrides(jumping=False, memory=True)
    assert base.jumping
    assert not derived.jumping
    assert derived.memory
    assert derived.clipping


def test_with_overrides_rejects_unknown_names():
    with pytest.raises(ValueError):
        QuirksConfig().with_overrides(wrap=True)
