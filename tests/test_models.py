import pytest
from pydantic import ValidationError

from holder.models import ALIASES, REGISTRY, HolderConfig, JackTray, Variant, config_for, resolve
from holder.models.config import ABS_SHRINKAGE, COMPACT, FULL


def test_registry_holds_both_variants():
    assert set(REGISTRY) == {"full", "compact"}
    assert REGISTRY["full"] is FULL
    assert REGISTRY["compact"] is COMPACT


@pytest.mark.parametrize("slug,expected", [
    ("full", FULL),
    ("FULL", FULL),
    (" 4-port ", FULL),
    ("four-port", FULL),
    ("compact", COMPACT),
    ("two_port", COMPACT),
    ("nice-nano", COMPACT),
])
def test_resolve_aliases(slug, expected):
    assert resolve(slug) is expected


def test_aliases_point_at_registered_variants():
    assert set(ALIASES.values()) <= set(REGISTRY)


@pytest.mark.parametrize("slug", ["", "holder", "three-port"])
def test_resolve_unknown(slug):
    with pytest.raises(KeyError):
        resolve(slug)


def test_config_for_variant():
    assert config_for(Variant.FULL) is FULL
    assert config_for("compact") is COMPACT
    with pytest.raises(ValueError):
        config_for("nope")


def test_full_defaults():
    assert FULL.ec_width == 18.65
    assert FULL.ec_length == 34.5
    assert FULL.slot_length == pytest.approx(5.9)
    assert FULL.tray_outer_width == pytest.approx(20.65)
    assert FULL.shrink == pytest.approx(1 / 0.999)
    assert FULL.resolution == 300
    assert FULL.output == "holder.stl"
    assert FULL.jack.trs_width == 6.15


def test_compact_drops_the_jack_tray():
    assert COMPACT.jack is None
    assert COMPACT.name == "compact"
    assert COMPACT.output == FULL.output


def test_configs_are_immutable():
    with pytest.raises(ValidationError):
        FULL.ec_width = 20.0


def test_unknown_constant_rejected():
    with pytest.raises(ValidationError):
        HolderConfig(ec_widht=20.0)
    with pytest.raises(ValidationError):
        JackTray(trs_widht=6.0)


@pytest.mark.parametrize("field,value", [
    ("ec_length", 0.0),
    ("wall_thickness", -1.0),
    ("shrinkage_ratio", 0.0),
    ("resolution", 0),
    ("usb_port_rounding", -0.5),
    ("push_hole_position", 1.0),
])
def test_dimensions_are_range_checked(field, value):
    with pytest.raises(ValidationError):
        HolderConfig(**{field: value})


def test_jack_dimensions_are_range_checked():
    with pytest.raises(ValidationError):
        JackTray(jack_diameter=0.0)
    assert JackTray(jack_offset_y=-1.0).jack_offset_y == -1.0


def test_abs_shrinkage():
    cfg = HolderConfig(shrinkage_ratio=ABS_SHRINKAGE)
    assert cfg.shrink == pytest.approx(1 / 0.995)
