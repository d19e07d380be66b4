"""
Splitting of MGRS strings into zone, grid zone designator letters and in-square easting/northing.
"""

import string
from dataclasses import dataclass

from mgrs_conversion.errors import (
    InvalidLetterError,
    InvalidZoneError,
    MalformedStringError,
    OddDigitCountError,
)
from mgrs_conversion.grid_tables import FORBIDDEN_LETTERS

MAX_ZONE_DIGITS = 2
MAX_GRID_DIGITS = 10


@dataclass(frozen=True)
class ParsedGrid:
    """
    The components of an MGRS string.

    :param zone: UTM zone in 1-60, or 0 for a polar (UPS) coordinate.
    :param letters: The three grid zone designator letters, e.g. "SUJ" or "ZAH".
    :param easting: Easting within the 100 km square, in meters.
    :param northing: Northing within the 100 km square, in meters.
    :param precision: The size of the grid cell the string resolves to, in meters.
    """

    zone: int
    letters: str
    easting: float
    northing: float
    precision: float

    @property
    def is_polar(self) -> bool:
        return self.zone == 0


def parse_mgrs(mgrs: str) -> ParsedGrid:
    """
    Break an MGRS string into its components.

    Whitespace anywhere in the string is ignored and lowercase letters are accepted.

    :param mgrs: The MGRS string, e.g. "18S UJ 23487 06483" or "ZAH".
    :return: The parsed components. Easting and northing are the south-west corner of the grid cell.
    :raises MalformedStringError: If the string does not have the shape of an MGRS reference.
    :raises InvalidZoneError: If the zone number is outside 1-60.
    :raises InvalidLetterError: If a designator letter is I, O or not a letter.
    :raises OddDigitCountError: If the trailing digits cannot be split evenly into easting and northing.
    """
    if not isinstance(mgrs, str):
        raise MalformedStringError(f"MGRS reference must be a string, got {type(mgrs).__name__}")
    compact = "".join(mgrs.split())
    if not compact:
        raise MalformedStringError("MGRS string is empty")
    if not compact.isascii():
        raise MalformedStringError(f"MGRS string contains non-ASCII characters: {mgrs!r}")
    compact = compact.upper()

    zone_digits = 0
    while zone_digits < len(compact) and compact[zone_digits] in string.digits:
        zone_digits += 1
    if zone_digits > MAX_ZONE_DIGITS:
        raise MalformedStringError(f"MGRS zone has more than {MAX_ZONE_DIGITS} digits: {mgrs!r}")

    zone = int(compact[:zone_digits]) if zone_digits else 0
    if zone_digits and not 1 <= zone <= 60:
        raise InvalidZoneError(f"UTM zone {zone} is outside 1-60: {mgrs!r}")

    letters = compact[zone_digits : zone_digits + 3]
    if len(letters) < 3:
        raise MalformedStringError(f"MGRS string needs three designator letters: {mgrs!r}")
    for letter in letters:
        if letter not in string.ascii_uppercase:
            raise InvalidLetterError(f"'{letter}' is not a valid MGRS letter: {mgrs!r}")
        if letter in FORBIDDEN_LETTERS:
            raise InvalidLetterError(f"MGRS letters may not contain '{letter}': {mgrs!r}")

    digits = compact[zone_digits + 3 :]
    if any(character not in string.digits for character in digits):
        raise MalformedStringError(f"MGRS easting/northing must be decimal digits: {mgrs!r}")
    if len(digits) % 2:
        raise OddDigitCountError(
            f"MGRS easting/northing has an odd number of digits ({len(digits)}): {mgrs!r}"
        )
    if len(digits) > MAX_GRID_DIGITS:
        raise MalformedStringError(
            f"MGRS easting/northing has more than {MAX_GRID_DIGITS} digits: {mgrs!r}"
        )

    half = len(digits) // 2
    precision = 10.0 ** (5 - half)
    easting = int(digits[:half]) * precision if half else 0.0
    northing = int(digits[half:]) * precision if half else 0.0
    return ParsedGrid(zone, letters, easting, northing, precision)
