"""
Constant tables for MGRS, UTM and UPS conversions.

The latitude band and UPS zone tables follow the NGA GEOTRANS conventions. All values are literals,
so the tables can be shared freely between threads.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

import numpy as np

ONE_HUNDRED_KM = 100_000.0
TWO_THOUSAND_KM = 2_000_000.0

UTM_SCALE_FACTOR = 0.9996
UTM_FALSE_EASTING = 500_000.0
UTM_FALSE_NORTHING_SOUTH = 10_000_000.0
UTM_MIN_LATITUDE = np.radians(-80.5)
UTM_MAX_LATITUDE = np.radians(84.5)

UPS_SCALE_FACTOR = 0.994
UPS_FALSE_EASTING = 2_000_000.0
UPS_FALSE_NORTHING = 2_000_000.0
UPS_MIN_GRID = 800_000.0
UPS_MAX_GRID = 3_200_000.0
UPS_MAX_ITERATIONS = 10
UPS_TOLERANCE = 1e-12


class Hemisphere(Enum):
    NORTH = "N"
    SOUTH = "S"


@dataclass(frozen=True)
class Ellipsoid:
    """
    A reference ellipsoid.

    :param name: The name of the ellipsoid, e.g. "WGS84".
    :param semi_major_axis: The equatorial radius a, in meters.
    :param inverse_flattening: 1/f.
    """

    name: str
    semi_major_axis: float
    inverse_flattening: float

    @property
    def flattening(self) -> float:
        return 1.0 / self.inverse_flattening

    @property
    def e2(self) -> float:
        """First eccentricity squared."""
        f = self.flattening
        return f * (2.0 - f)

    @property
    def ep2(self) -> float:
        """Second eccentricity squared."""
        return self.e2 / (1.0 - self.e2)

    @property
    def eccentricity(self) -> float:
        return np.sqrt(self.e2)

    @property
    def n(self) -> float:
        """Third flattening, used by the footpoint latitude series."""
        f = self.flattening
        return f / (2.0 - f)

    @staticmethod
    def from_config(config: dict[str, Any]) -> "Ellipsoid":
        """
        Build an ellipsoid from the "ellipsoid" section of the configuration file.

        :param config: The full configuration dictionary, as returned by load_config.
        :return: The configured Ellipsoid.
        """
        ellipsoid_config = config["ellipsoid"]
        return Ellipsoid(
            ellipsoid_config["name"],
            float(ellipsoid_config["semi_major_axis"]),
            float(ellipsoid_config["inverse_flattening"]),
        )


WGS84 = Ellipsoid("WGS84", 6378137.0, 298.257223563)


@dataclass(frozen=True)
class LatitudeBand:
    letter: str
    min_lat: float
    max_lat: float
    min_northing: float
    northing_offset: float

    @property
    def hemisphere(self) -> Hemisphere:
        return Hemisphere.NORTH if self.letter >= "N" else Hemisphere.SOUTH


# Southern minimum northings already include the 10,000 km false northing
# X spans 12° latitude
LATITUDE_BANDS = {
    band.letter: band
    for band in (
        LatitudeBand("C", -80, -72, 1_100_000.0, 0.0),
        LatitudeBand("D", -72, -64, 2_000_000.0, 2_000_000.0),
        LatitudeBand("E", -64, -56, 2_800_000.0, 2_000_000.0),
        LatitudeBand("F", -56, -48, 3_700_000.0, 2_000_000.0),
        LatitudeBand("G", -48, -40, 4_600_000.0, 4_000_000.0),
        LatitudeBand("H", -40, -32, 5_500_000.0, 4_000_000.0),
        LatitudeBand("J", -32, -24, 6_400_000.0, 6_000_000.0),
        LatitudeBand("K", -24, -16, 7_300_000.0, 6_000_000.0),
        LatitudeBand("L", -16, -8, 8_200_000.0, 8_000_000.0),
        LatitudeBand("M", -8, 0, 9_100_000.0, 8_000_000.0),
        LatitudeBand("N", 0, 8, 0.0, 0.0),
        LatitudeBand("P", 8, 16, 800_000.0, 0.0),
        LatitudeBand("Q", 16, 24, 1_700_000.0, 0.0),
        LatitudeBand("R", 24, 32, 2_600_000.0, 2_000_000.0),
        LatitudeBand("S", 32, 40, 3_500_000.0, 2_000_000.0),
        LatitudeBand("T", 40, 48, 4_400_000.0, 4_000_000.0),
        LatitudeBand("U", 48, 56, 5_300_000.0, 4_000_000.0),
        LatitudeBand("V", 56, 64, 6_200_000.0, 6_000_000.0),
        LatitudeBand("W", 64, 72, 7_000_000.0, 6_000_000.0),
        LatitudeBand("X", 72, 84, 7_900_000.0, 6_000_000.0),
    )
}

# Svalbard: band X is split between the odd zones 31, 33, 35 and 37
ZONES_WITHOUT_BAND_X = (32, 34, 36)

FORBIDDEN_LETTERS = "IO"

# 100 km column letters repeat every three zones
UTM_COLUMN_SETS = ("ABCDEFGH", "JKLMNPQR", "STUVWXYZ")
UTM_ROW_LETTERS = "ABCDEFGHJKLMNPQRSTUV"
UTM_EVEN_ZONE_ROW_SHIFT = 500_000.0

UPS_EXCLUDED_COLUMN_LETTERS = "DEIMNOVW"


def letter_range(low: str, high: str, excluded: str) -> str:
    """
    All uppercase letters from low to high inclusive, minus the excluded ones.
    """
    return "".join(
        chr(code) for code in range(ord(low), ord(high) + 1) if chr(code) not in excluded
    )


@dataclass(frozen=True)
class UpsZone:
    letter: str
    hemisphere: Hemisphere
    column_low: str
    column_high: str
    row_high: str
    false_easting: float
    false_northing: float

    @property
    def column_letters(self) -> str:
        return letter_range(self.column_low, self.column_high, UPS_EXCLUDED_COLUMN_LETTERS)

    @property
    def row_letters(self) -> str:
        return letter_range("A", self.row_high, FORBIDDEN_LETTERS)


UPS_ZONES = {
    zone.letter: zone
    for zone in (
        UpsZone("A", Hemisphere.SOUTH, "J", "Z", "Z", 800_000.0, 800_000.0),
        UpsZone("B", Hemisphere.SOUTH, "A", "R", "Z", 2_000_000.0, 800_000.0),
        UpsZone("Y", Hemisphere.NORTH, "J", "Z", "P", 800_000.0, 1_300_000.0),
        UpsZone("Z", Hemisphere.NORTH, "A", "J", "P", 2_000_000.0, 1_300_000.0),
    )
}
