import pytest

from mgrs_conversion.errors import (
    InvalidLetterError,
    InvalidZoneError,
    MalformedStringError,
    OddDigitCountError,
)
from mgrs_conversion.mgrs_parser import parse_mgrs


def test_parse_full_precision():
    parsed = parse_mgrs("18SUJ2348706483")
    assert parsed.zone == 18
    assert parsed.letters == "SUJ"
    assert parsed.easting == 23487.0
    assert parsed.northing == 6483.0
    assert parsed.precision == 1.0
    assert not parsed.is_polar


def test_whitespace_is_ignored():
    assert parse_mgrs("  18S UJ 23487 06483\t") == parse_mgrs("18SUJ2348706483")
    # between zone and letters, and inside the digit run
    assert parse_mgrs("18 SUJ 2348 706483") == parse_mgrs("18SUJ2348706483")


def test_lowercase_letters_are_accepted():
    assert parse_mgrs("18suj2348706483").letters == "SUJ"


@pytest.mark.parametrize(
    "mgrs, easting, northing, precision",
    [
        ("18SUJ", 0.0, 0.0, 100000.0),
        ("18SUJ20", 20000.0, 0.0, 10000.0),
        ("18SUJ2306", 23000.0, 6000.0, 1000.0),
        ("18SUJ234064", 23400.0, 6400.0, 100.0),
        ("18SUJ23480648", 23480.0, 6480.0, 10.0),
    ],
)
def test_precision_scales_with_digit_count(mgrs, easting, northing, precision):
    parsed = parse_mgrs(mgrs)
    assert parsed.easting == easting
    assert parsed.northing == northing
    assert parsed.precision == precision


def test_single_digit_zone():
    parsed = parse_mgrs("4QFJ1234567890")
    assert parsed.zone == 4
    assert parsed.letters == "QFJ"
    assert parsed.easting == 12345.0
    assert parsed.northing == 67890.0


def test_polar_reference_has_zone_zero():
    parsed = parse_mgrs("ZAH")
    assert parsed.zone == 0
    assert parsed.is_polar
    assert parsed.letters == "ZAH"


@pytest.mark.parametrize("zone", [1, 60])
def test_zone_limits_are_accepted(zone):
    assert parse_mgrs(f"{zone}NAA0000000000").zone == zone


@pytest.mark.parametrize("mgrs", ["61N AA 00000 00000", "0NAA0000000000", "00NAA", "99CAA"])
def test_zone_out_of_range(mgrs):
    with pytest.raises(InvalidZoneError):
        parse_mgrs(mgrs)


@pytest.mark.parametrize(
    "mgrs",
    ["18I UJ 23487 06483", "18SIJ2348706483", "18SUO2348706483", "OAH", "ZIH", "18S1J2348706483"],
)
def test_invalid_letters(mgrs):
    with pytest.raises(InvalidLetterError):
        parse_mgrs(mgrs)


@pytest.mark.parametrize("mgrs", ["18SUJ2348706", "18SUJ2", "ZAH123", "18SUJ23487064831"])
def test_odd_digit_count(mgrs):
    with pytest.raises(OddDigitCountError):
        parse_mgrs(mgrs)


@pytest.mark.parametrize(
    "mgrs",
    [
        "",
        "   ",
        "18",
        "18SU",
        "123SUJ",
        "18SUJ234870648312",
        "18SUJ23487-06483",
        "18SUJ2348706483X",
        "18SÜJ2348706483",
    ],
)
def test_malformed_strings(mgrs):
    with pytest.raises(MalformedStringError):
        parse_mgrs(mgrs)


def test_non_string_input():
    with pytest.raises(MalformedStringError):
        parse_mgrs(18)
