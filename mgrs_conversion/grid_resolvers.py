"""
Resolution of MGRS grid zone designators into full UTM and UPS grid coordinates.
"""

from dataclasses import dataclass
from numbers import Integral

from mgrs_conversion.errors import (
    InvalidBandError,
    InvalidLetterError,
    InvalidUpsZoneError,
    InvalidZoneError,
    OutOfRangeError,
)
from mgrs_conversion.grid_tables import (
    LATITUDE_BANDS,
    ONE_HUNDRED_KM,
    TWO_THOUSAND_KM,
    UPS_ZONES,
    UTM_COLUMN_SETS,
    UTM_EVEN_ZONE_ROW_SHIFT,
    UTM_ROW_LETTERS,
    ZONES_WITHOUT_BAND_X,
    Hemisphere,
)


@dataclass(frozen=True)
class UtmCoordinate:
    zone: int
    hemisphere: Hemisphere
    easting: float
    northing: float


@dataclass(frozen=True)
class UpsCoordinate:
    hemisphere: Hemisphere
    easting: float
    northing: float


def validate_zone(zone: int) -> None:
    if isinstance(zone, bool) or not isinstance(zone, Integral) or not 1 <= zone <= 60:
        raise InvalidZoneError(f"UTM zone {zone!r} is outside 1-60")


def get_grid_values(zone: int) -> tuple[str, float]:
    """
    Get the 100 km column letters and the row pattern shift used by a UTM zone.

    :param zone: The UTM zone, in 1-60.
    :return: The permitted column letters in easting order, and the northing shift of the row letters in meters.
    """
    column_letters = UTM_COLUMN_SETS[(zone - 1) % 3]
    pattern_offset = UTM_EVEN_ZONE_ROW_SHIFT if zone % 2 == 0 else 0.0
    return column_letters, pattern_offset


def _check_square_offsets(easting: float, northing: float) -> None:
    if not (0.0 <= easting < ONE_HUNDRED_KM and 0.0 <= northing < ONE_HUNDRED_KM):
        raise OutOfRangeError(
            f"Easting/northing within the 100 km square must be in [0, 100000), got {easting}, {northing}"
        )


def _check_letters(letters: str) -> str:
    if not isinstance(letters, str) or len(letters) != 3:
        raise InvalidLetterError(f"Expected three grid zone designator letters, got {letters!r}")
    return letters.upper()


def mgrs_to_utm(zone: int, letters: str, easting: float, northing: float) -> UtmCoordinate:
    """
    Convert the components of a non-polar MGRS reference to a UTM coordinate.

    :param zone: The UTM zone, in 1-60.
    :param letters: Latitude band letter, 100 km column letter and 100 km row letter, e.g. "SUJ".
    :param easting: Easting within the 100 km square, in meters.
    :param northing: Northing within the 100 km square, in meters.
    :return: The UTM coordinate. Southern northings include the 10,000 km false northing.
    """
    validate_zone(zone)
    letters = _check_letters(letters)
    band_letter, column_letter, row_letter = letters

    band = LATITUDE_BANDS.get(band_letter)
    if band is None:
        raise InvalidBandError(f"'{band_letter}' is not a UTM latitude band letter")
    if band_letter == "X" and zone in ZONES_WITHOUT_BAND_X:
        raise InvalidBandError(f"Latitude band X does not exist in UTM zone {zone}")

    column_letters, pattern_offset = get_grid_values(zone)
    if column_letter not in column_letters:
        raise InvalidLetterError(
            f"Column letter '{column_letter}' is not used in UTM zone {zone} "
            f"(expected one of {column_letters})"
        )
    if row_letter not in UTM_ROW_LETTERS:
        raise InvalidLetterError(f"'{row_letter}' is not a UTM row letter")
    _check_square_offsets(easting, northing)

    grid_easting = (column_letters.index(column_letter) + 1) * ONE_HUNDRED_KM
    grid_northing = (
        UTM_ROW_LETTERS.index(row_letter) * ONE_HUNDRED_KM - pattern_offset
    ) % TWO_THOUSAND_KM

    # the row letters repeat every 2000 km; the band's minimum northing picks the cycle
    grid_northing += band.northing_offset
    while grid_northing < band.min_northing - ONE_HUNDRED_KM:
        grid_northing += TWO_THOUSAND_KM

    return UtmCoordinate(zone, band.hemisphere, grid_easting + easting, grid_northing + northing)


def mgrs_to_ups(letters: str, easting: float, northing: float) -> UpsCoordinate:
    """
    Convert the components of a polar MGRS reference to a UPS coordinate.

    :param letters: UPS zone letter (A, B, Y or Z), 100 km column letter and 100 km row letter, e.g. "ZAH".
    :param easting: Easting within the 100 km square, in meters.
    :param northing: Northing within the 100 km square, in meters.
    :return: The UPS coordinate.
    """
    letters = _check_letters(letters)
    zone_letter, column_letter, row_letter = letters

    ups_zone = UPS_ZONES.get(zone_letter)
    if ups_zone is None:
        raise InvalidUpsZoneError(f"'{zone_letter}' is not a UPS zone letter (expected A, B, Y or Z)")

    column_letters = ups_zone.column_letters
    if column_letter not in column_letters:
        raise InvalidLetterError(
            f"Column letter '{column_letter}' is not used in UPS zone {zone_letter} "
            f"(expected one of {column_letters})"
        )
    row_letters = ups_zone.row_letters
    if row_letter not in row_letters:
        raise InvalidLetterError(
            f"Row letter '{row_letter}' is not used in UPS zone {zone_letter} "
            f"(expected one of {row_letters})"
        )
    _check_square_offsets(easting, northing)

    ups_easting = ups_zone.false_easting + column_letters.index(column_letter) * ONE_HUNDRED_KM
    ups_northing = ups_zone.false_northing + row_letters.index(row_letter) * ONE_HUNDRED_KM
    return UpsCoordinate(ups_zone.hemisphere, ups_easting + easting, ups_northing + northing)
