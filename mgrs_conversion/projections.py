"""
Inverse UTM and UPS projections from grid coordinates to geodetic latitude and longitude.

The internal projection functions operate on numpy arrays so that the same math backs both the scalar
conversions (which raise on invalid input) and the vectorized ones (which return NaN for invalid input).
"""

from dataclasses import dataclass

import numpy as np

from mgrs_conversion.errors import OutOfRangeError
from mgrs_conversion.grid_resolvers import validate_zone
from mgrs_conversion.grid_tables import (
    UPS_FALSE_EASTING,
    UPS_FALSE_NORTHING,
    UPS_MAX_GRID,
    UPS_MAX_ITERATIONS,
    UPS_MIN_GRID,
    UPS_SCALE_FACTOR,
    UPS_TOLERANCE,
    UTM_FALSE_EASTING,
    UTM_FALSE_NORTHING_SOUTH,
    UTM_MAX_LATITUDE,
    UTM_MIN_LATITUDE,
    UTM_SCALE_FACTOR,
    WGS84,
    Ellipsoid,
    Hemisphere,
)

UTM_MAX_EASTING = 1_000_000.0
UTM_MAX_NORTHING = 10_000_000.0
MIN_FOOTPOINT_COSINE = 1e-10


@dataclass(frozen=True)
class GeodeticPosition:
    """
    A position on the ellipsoid.

    :param latitude: Geodetic latitude in radians, in [-pi/2, pi/2].
    :param longitude: Longitude in radians, in (-pi, pi].
    """

    latitude: float
    longitude: float

    def to_degrees(self) -> np.ndarray:
        """
        :return: A numpy array of shape (2,) containing latitude and longitude in degrees.
        """
        return np.degrees(np.array([self.latitude, self.longitude]))


def central_meridian(zone: int) -> float:
    """
    The central meridian of a UTM zone, in radians.
    """
    return np.radians(-177.0 + 6.0 * (zone - 1))


def _wrap_longitude(lon: np.ndarray) -> np.ndarray:
    lon = np.where(lon > np.pi, lon - 2 * np.pi, lon)
    return np.where(lon <= -np.pi, lon + 2 * np.pi, lon)


def _footpoint_latitude(y: np.ndarray, ellipsoid: Ellipsoid) -> np.ndarray:
    """
    Latitude at which the meridian arc length equals y / k0, by series expansion in the third flattening.

    Parameters:
        y: Distance north of the equator on the grid, in meters.
        ellipsoid: The reference ellipsoid.

    Returns:
        The footpoint latitude in radians.
    """
    n = ellipsoid.n
    rectifying_radius = ellipsoid.semi_major_axis / (1 + n) * (1 + n**2 / 4 + n**4 / 64)
    mu = y / (UTM_SCALE_FACTOR * rectifying_radius)
    return (
        mu
        + (3 * n / 2 - 27 * n**3 / 32) * np.sin(2 * mu)
        + (21 * n**2 / 16 - 55 * n**4 / 32) * np.sin(4 * mu)
        + (151 * n**3 / 96) * np.sin(6 * mu)
        + (1097 * n**4 / 512) * np.sin(8 * mu)
    )


def _inverse_transverse_mercator(
    x: np.ndarray, y: np.ndarray, lon_0: float, ellipsoid: Ellipsoid
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Inverse transverse Mercator projection with the UTM scale factor.

    Parameters:
        x: Distance east of the central meridian, in meters.
        y: Distance north of the equator, in meters.
        lon_0: The central meridian in radians.
        ellipsoid: The reference ellipsoid.

    Returns:
        Latitude and longitude in radians, and the footpoint latitude used to compute them.
    """
    e2 = ellipsoid.e2
    ep2 = ellipsoid.ep2

    phi_1 = _footpoint_latitude(y, ellipsoid)
    sin_phi_1 = np.sin(phi_1)
    cos_phi_1 = np.cos(phi_1)
    tan_phi_1 = np.tan(phi_1)

    denominator = 1 - e2 * sin_phi_1**2
    nu = ellipsoid.semi_major_axis / np.sqrt(denominator)
    rho = ellipsoid.semi_major_axis * (1 - e2) / denominator**1.5
    T = tan_phi_1**2
    C = ep2 * cos_phi_1**2
    D = x / (nu * UTM_SCALE_FACTOR)

    lat = phi_1 - (nu * tan_phi_1 / rho) * (
        D**2 / 2
        - (5 + 3 * T + 10 * C - 4 * C**2 - 9 * ep2) * D**4 / 24
        + (61 + 90 * T + 298 * C + 45 * T**2 - 252 * ep2 - 3 * C**2) * D**6 / 720
    )
    lon = lon_0 + (
        D
        - (1 + 2 * T + C) * D**3 / 6
        + (5 - 2 * C + 28 * T - 3 * C**2 + 8 * ep2 + 24 * T**2) * D**5 / 120
    ) / cos_phi_1
    return lat, _wrap_longitude(lon), phi_1


def _inverse_polar_stereographic(
    dx: np.ndarray, dy: np.ndarray, hemisphere: Hemisphere, ellipsoid: Ellipsoid
) -> tuple[np.ndarray, np.ndarray]:
    """
    Inverse polar stereographic projection with the UPS scale factor.

    The conformal latitude is recovered from the radius and refined into the geodetic latitude by fixed-point
    iteration of phi = pi/2 - 2 * atan(t * exp(-e * atanh(e * sin(phi)))).

    Parameters:
        dx: Distance east of the pole on the grid, in meters.
        dy: Distance north of the pole on the grid, in meters.
        hemisphere: Which pole the grid is centered on.
        ellipsoid: The reference ellipsoid.

    Returns:
        Latitude and longitude in radians.
    """
    a = ellipsoid.semi_major_axis
    e = ellipsoid.eccentricity

    rho = np.hypot(dx, dy)
    polar_constant = np.sqrt((1 + e) ** (1 + e) * (1 - e) ** (1 - e))
    t = rho * polar_constant / (2 * a * UPS_SCALE_FACTOR)

    lat = np.pi / 2 - 2 * np.arctan(t)
    for _ in range(UPS_MAX_ITERATIONS):
        next_lat = np.pi / 2 - 2 * np.arctan(t * np.exp(-e * np.arctanh(e * np.sin(lat))))
        converged = np.all(np.abs(next_lat - lat) < UPS_TOLERANCE)
        lat = next_lat
        if converged:
            break

    # the prime meridian runs along +y in the south zones and -y in the north zones
    if hemisphere == Hemisphere.NORTH:
        lon = np.arctan2(dx, -dy)
    else:
        lon = np.arctan2(dx, dy)
        lat = -lat

    lon = np.where(rho == 0, 0.0, lon)
    return lat, _wrap_longitude(lon)


def utm_to_geodetic(
    zone: int,
    hemisphere: Hemisphere,
    easting: float,
    northing: float,
    ellipsoid: Ellipsoid = WGS84,
) -> GeodeticPosition:
    """
    Convert a UTM coordinate to geodetic coordinates.

    Only defined for positions between 80.5 degrees south and 84.5 degrees north.

    :param zone: The UTM zone, in 1-60.
    :param hemisphere: The hemisphere of the coordinate. Southern northings include the 10,000 km false northing.
    :param easting: UTM easting in meters.
    :param northing: UTM northing in meters.
    :param ellipsoid: The reference ellipsoid.
    :return: The geodetic position in radians.
    :raises InvalidZoneError: If the zone is outside 1-60.
    :raises OutOfRangeError: If the coordinate lies outside the UTM validity envelope.
    """
    validate_zone(zone)
    hemisphere = Hemisphere(hemisphere)
    if not 0.0 <= easting <= UTM_MAX_EASTING:
        raise OutOfRangeError(f"UTM easting {easting} is outside [0, {UTM_MAX_EASTING:.0f}]")
    if not 0.0 <= northing <= UTM_MAX_NORTHING:
        raise OutOfRangeError(f"UTM northing {northing} is outside [0, {UTM_MAX_NORTHING:.0f}]")

    x = easting - UTM_FALSE_EASTING
    y = northing - (UTM_FALSE_NORTHING_SOUTH if hemisphere == Hemisphere.SOUTH else 0.0)
    lat, lon, phi_1 = _inverse_transverse_mercator(x, y, central_meridian(zone), ellipsoid)

    if abs(np.cos(phi_1)) < MIN_FOOTPOINT_COSINE or not UTM_MIN_LATITUDE <= lat <= UTM_MAX_LATITUDE:
        raise OutOfRangeError(
            f"UTM coordinate ({zone}{hemisphere.value} {easting} {northing}) "
            "is outside the UTM latitude range"
        )
    return GeodeticPosition(float(lat), float(lon))


def ups_to_geodetic(
    hemisphere: Hemisphere, easting: float, northing: float, ellipsoid: Ellipsoid = WGS84
) -> GeodeticPosition:
    """
    Convert a UPS coordinate to geodetic coordinates.

    Intended for latitudes poleward of the UTM limits; closer to the equator the result loses accuracy.

    :param hemisphere: The pole the UPS grid is centered on.
    :param easting: UPS easting in meters.
    :param northing: UPS northing in meters.
    :param ellipsoid: The reference ellipsoid.
    :return: The geodetic position in radians.
    :raises OutOfRangeError: If easting or northing is outside [800000, 3200000].
    """
    hemisphere = Hemisphere(hemisphere)
    for name, value in (("easting", easting), ("northing", northing)):
        if not UPS_MIN_GRID <= value <= UPS_MAX_GRID:
            raise OutOfRangeError(
                f"UPS {name} {value} is outside [{UPS_MIN_GRID:.0f}, {UPS_MAX_GRID:.0f}]"
            )

    lat, lon = _inverse_polar_stereographic(
        easting - UPS_FALSE_EASTING, northing - UPS_FALSE_NORTHING, hemisphere, ellipsoid
    )
    return GeodeticPosition(float(lat), float(lon))


def utm_grid_to_lat_lon(
    zone: int,
    hemisphere: Hemisphere,
    easting_northing: np.ndarray,
    ellipsoid: Ellipsoid = WGS84,
) -> np.ndarray:
    """
    Vectorized conversion of UTM coordinates in a single zone to latitude and longitude.

    Parameters:
        zone: The UTM zone, in 1-60.
        hemisphere: The hemisphere shared by all coordinates.
        easting_northing: A numpy array of shape (..., 2) consisting of UTM eastings and northings.
        ellipsoid: The reference ellipsoid.

    Returns:
        A numpy array of shape (..., 2) consisting of latitudes and longitudes in degrees,
        or NaN for coordinates outside the UTM validity envelope.
    """
    assert easting_northing.shape[-1] == 2, "Input must have shape (..., 2)"
    validate_zone(zone)
    hemisphere = Hemisphere(hemisphere)

    easting = easting_northing[..., 0].astype(float)
    northing = easting_northing[..., 1].astype(float)
    x = easting - UTM_FALSE_EASTING
    y = northing - (UTM_FALSE_NORTHING_SOUTH if hemisphere == Hemisphere.SOUTH else 0.0)

    with np.errstate(invalid="ignore", divide="ignore", over="ignore"):
        lat, lon, phi_1 = _inverse_transverse_mercator(x, y, central_meridian(zone), ellipsoid)
        valid_mask = (
            (easting >= 0.0)
            & (easting <= UTM_MAX_EASTING)
            & (northing >= 0.0)
            & (northing <= UTM_MAX_NORTHING)
            & (np.abs(np.cos(phi_1)) >= MIN_FOOTPOINT_COSINE)
            & (lat >= UTM_MIN_LATITUDE)
            & (lat <= UTM_MAX_LATITUDE)
        )

    lat_lon = np.full(easting_northing.shape, np.nan)
    lat_lon[valid_mask, 0] = np.degrees(lat[valid_mask])
    lat_lon[valid_mask, 1] = np.degrees(lon[valid_mask])
    return lat_lon


def ups_grid_to_lat_lon(
    hemisphere: Hemisphere, easting_northing: np.ndarray, ellipsoid: Ellipsoid = WGS84
) -> np.ndarray:
    """
    Vectorized conversion of UPS coordinates around one pole to latitude and longitude.

    Parameters:
        hemisphere: The pole shared by all coordinates.
        easting_northing: A numpy array of shape (..., 2) consisting of UPS eastings and northings.
        ellipsoid: The reference ellipsoid.

    Returns:
        A numpy array of shape (..., 2) consisting of latitudes and longitudes in degrees,
        or NaN for coordinates outside [800000, 3200000].
    """
    assert easting_northing.shape[-1] == 2, "Input must have shape (..., 2)"
    hemisphere = Hemisphere(hemisphere)

    easting = easting_northing[..., 0].astype(float)
    northing = easting_northing[..., 1].astype(float)
    valid_mask = (
        (easting >= UPS_MIN_GRID)
        & (easting <= UPS_MAX_GRID)
        & (northing >= UPS_MIN_GRID)
        & (northing <= UPS_MAX_GRID)
    )

    lat_lon = np.full(easting_northing.shape, np.nan)
    lat, lon = _inverse_polar_stereographic(
        easting[valid_mask] - UPS_FALSE_EASTING,
        northing[valid_mask] - UPS_FALSE_NORTHING,
        hemisphere,
        ellipsoid,
    )
    lat_lon[valid_mask, 0] = np.degrees(lat)
    lat_lon[valid_mask, 1] = np.degrees(lon)
    return lat_lon
