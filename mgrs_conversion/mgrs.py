"""
mgrs.py
Converts MGRS (Military Grid Reference System) references to geodetic latitude and longitude on the WGS-84 ellipsoid.
References inside the UTM latitude bands go through UTM; polar references (no zone number) go through UPS.
Can also be run from the command line to convert one or more references.
"""

import argparse
import sys
from typing import Optional, Sequence

import numpy as np

from mgrs_conversion.errors import MgrsError, OutOfRangeError
from mgrs_conversion.grid_resolvers import mgrs_to_ups, mgrs_to_utm
from mgrs_conversion.grid_tables import LATITUDE_BANDS, WGS84, Ellipsoid
from mgrs_conversion.mgrs_parser import parse_mgrs
from mgrs_conversion.projections import GeodeticPosition, ups_to_geodetic, utm_to_geodetic
from utils.config_utils import MAIN_CONFIG_PATH, load_config
from utils.logger import Logger

# how far past its nominal edges a latitude band may extend, in degrees
BAND_LATITUDE_TOLERANCE = 0.5
# a truncated reference is the south-west corner of its cell, up to one cell below the band
BAND_TOLERANCE_PER_METER = 1.0 / 100_000


def mgrs_to_geodetic(mgrs: str, ellipsoid: Ellipsoid = WGS84) -> GeodeticPosition:
    """
    Convert an MGRS reference to geodetic coordinates.

    :param mgrs: The MGRS string, e.g. "18SUJ2348706483" or "ZAH".
    :param ellipsoid: The reference ellipsoid.
    :return: The position of the south-west corner of the referenced grid cell, in radians.
    :raises MgrsError: The first failure raised by parsing, grid resolution or projection.
    """
    parsed = parse_mgrs(mgrs)

    if parsed.is_polar:
        Logger.log("DEBUG", f"{mgrs!r}: polar reference, converting through UPS zone {parsed.letters[0]}")
        ups = mgrs_to_ups(parsed.letters, parsed.easting, parsed.northing)
        return ups_to_geodetic(ups.hemisphere, ups.easting, ups.northing, ellipsoid)

    Logger.log("DEBUG", f"{mgrs!r}: converting through UTM zone {parsed.zone}")
    utm = mgrs_to_utm(parsed.zone, parsed.letters, parsed.easting, parsed.northing)
    position = utm_to_geodetic(utm.zone, utm.hemisphere, utm.easting, utm.northing, ellipsoid)

    band = LATITUDE_BANDS[parsed.letters[0]]
    latitude = np.degrees(position.latitude)
    tolerance = max(BAND_LATITUDE_TOLERANCE, parsed.precision * BAND_TOLERANCE_PER_METER)
    if not band.min_lat - tolerance <= latitude <= band.max_lat + tolerance:
        raise OutOfRangeError(
            f"{mgrs!r} resolves to latitude {latitude:.4f}, outside latitude band {band.letter} "
            f"[{band.min_lat}, {band.max_lat}]"
        )
    return position


def mgrs_to_lat_lon(mgrs_strings: Sequence[str], ellipsoid: Ellipsoid = WGS84) -> np.ndarray:
    """
    Convert a sequence of MGRS references to latitudes and longitudes.

    Parameters:
        mgrs_strings: The MGRS references.
        ellipsoid: The reference ellipsoid.

    Returns:
        A numpy array of shape (N, 2) consisting of latitudes and longitudes in degrees, or NaN for
        references that could not be converted.
    """
    lat_lon = np.full((len(mgrs_strings), 2), np.nan)
    for i, mgrs in enumerate(mgrs_strings):
        try:
            lat_lon[i, :] = mgrs_to_geodetic(mgrs, ellipsoid).to_degrees()
        except MgrsError as e:
            Logger.log("WARNING", f"Could not convert {mgrs!r}: {e}")
    return lat_lon


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Convert MGRS references to latitude and longitude.")
    parser.add_argument("-k", "--key", nargs="+", required=True, type=str, help="MGRS reference(s)")
    parser.add_argument("-c", "--config", default=MAIN_CONFIG_PATH, type=str)
    parser.add_argument("--radians", action="store_true", help="print radians instead of degrees")
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except (OSError, ValueError) as e:
        parser.error(f"could not load configuration {args.config}: {e}")
    Logger.configure(config["logging"]["level"])
    ellipsoid = Ellipsoid.from_config(config)
    in_radians = args.radians or config["output"]["units"] == "radians"

    failures = 0
    for mgrs in args.key:
        try:
            position = mgrs_to_geodetic(mgrs, ellipsoid)
        except MgrsError as e:
            Logger.log("ERROR", f"{mgrs}: {e}")
            failures += 1
            continue
        lat, lon = (
            (position.latitude, position.longitude) if in_radians else position.to_degrees()
        )
        print(f"{mgrs}: {lat:.9f} {lon:.9f}")
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
