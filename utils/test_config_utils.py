import pytest
import yaml

from mgrs_conversion.grid_tables import WGS84, Ellipsoid
from utils.config_utils import load_config, merge_config, validate_config


def test_main_config_describes_wgs84():
    config = load_config()
    assert Ellipsoid.from_config(config) == WGS84
    assert config["output"]["units"] in ("degrees", "radians")


def test_merge_config_is_recursive():
    base = {"ellipsoid": {"name": "WGS84", "semi_major_axis": 1.0}, "output": {"units": "degrees"}}
    override = {"ellipsoid": {"semi_major_axis": 2.0}}
    merged = merge_config(base, override)
    assert merged == {
        "ellipsoid": {"name": "WGS84", "semi_major_axis": 2.0},
        "output": {"units": "degrees"},
    }
    assert base["ellipsoid"]["semi_major_axis"] == 1.0


def test_user_config_fills_in_missing_sections(tmp_path):
    config_path = tmp_path / "user_config.yaml"
    config_path.write_text(yaml.safe_dump({"logging": {"level": "DEBUG"}}), encoding="utf-8")

    config = load_config(str(config_path))
    assert config["logging"]["level"] == "DEBUG"
    assert Ellipsoid.from_config(config) == WGS84


def test_invalid_output_units(tmp_path):
    config_path = tmp_path / "user_config.yaml"
    config_path.write_text(yaml.safe_dump({"output": {"units": "grads"}}), encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(str(config_path))


def test_missing_section():
    with pytest.raises(ValueError):
        validate_config({"ellipsoid": {}, "output": {"units": "degrees"}})


@pytest.mark.parametrize("section", ["ellipsoid", "logging", "output"])
def test_empty_section(tmp_path, section):
    config_path = tmp_path / "user_config.yaml"
    config_path.write_text(f"{section}:\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(str(config_path))


@pytest.mark.parametrize("level", ["VERBOSE", 10, None])
def test_invalid_logging_level(level):
    with pytest.raises(ValueError):
        validate_config({"ellipsoid": {}, "logging": {"level": level}, "output": {"units": "degrees"}})


def test_logging_level_is_case_insensitive():
    validate_config({"ellipsoid": {}, "logging": {"level": "debug"}, "output": {"units": "degrees"}})
