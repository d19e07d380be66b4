"""
Common earth utilities.
"""

import numpy as np

from mgrs_conversion.grid_tables import WGS84, Ellipsoid


def geodetic_to_ecef(lat_lon: np.ndarray, ellipsoid: Ellipsoid = WGS84) -> np.ndarray:
    """
    Convert geodetic latitude and longitude on the ellipsoid surface to ECEF coordinates.

    Parameters:
        lat_lon: A numpy array of shape (..., 2) consisting of latitudes and longitudes in radians.
        ellipsoid: The reference ellipsoid.

    Returns:
        A numpy array of shape (..., 3) consisting of ECEF coordinates in meters.
    """
    lat_lon = np.asarray(lat_lon, dtype=float)
    assert lat_lon.shape[-1] == 2, "Input must have shape (..., 2)"

    lat = lat_lon[..., 0]
    lon = lat_lon[..., 1]

    # Prime vertical radius of curvature
    N = ellipsoid.semi_major_axis / np.sqrt(1 - ellipsoid.e2 * np.sin(lat) ** 2)

    # Assume height h = 0 (on the ellipsoid)
    x = N * np.cos(lat) * np.cos(lon)
    y = N * np.cos(lat) * np.sin(lon)
    z = N * (1 - ellipsoid.e2) * np.sin(lat)
    return np.stack((x, y, z), axis=-1)


def surface_distance(
    lat_lon_a: np.ndarray, lat_lon_b: np.ndarray, ellipsoid: Ellipsoid = WGS84
) -> np.ndarray:
    """
    Straight-line distance between two sets of positions on the ellipsoid surface.

    Over the distances at which grid conversions are compared (up to a few hundred kilometers) the chord
    differs from the great-circle distance by well under a part in a thousand.

    Parameters:
        lat_lon_a: A numpy array of shape (..., 2) consisting of latitudes and longitudes in radians.
        lat_lon_b: A numpy array of the same shape as lat_lon_a.
        ellipsoid: The reference ellipsoid.

    Returns:
        A numpy array of shape (...) consisting of distances in meters.
    """
    ecef_a = geodetic_to_ecef(lat_lon_a, ellipsoid)
    ecef_b = geodetic_to_ecef(lat_lon_b, ellipsoid)
    return np.linalg.norm(ecef_a - ecef_b, axis=-1)
