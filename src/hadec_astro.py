"""
Horizon to Equatorial Conversion Module

This module converts local horizon coordinates into local equatorial
coordinates:
- Altitude/azimuth to hour angle/declination (scalar)
- (altitude, azimuth) pairs to hour angle/declination
- Elementwise conversion of equal-length arrays
- Sexagesimal and azimuth convention helpers

All angles are in degrees. Azimuth is measured east of north.
The hour angle is computed with a two-argument arctangent so that the
conversion stays well defined at the celestial poles.
"""

import math
import numpy as np
from typing import Sequence, Tuple, Union
import logging

logger = logging.getLogger(__name__)


# ============================================================================
# Constants and Configuration
# ============================================================================

DEG_TO_RAD = math.pi / 180.0
RAD_TO_DEG = 180.0 / math.pi
FULL_CIRCLE_DEG = 360.0

Real = Union[int, float]
RealArray = Union[Sequence[Real], np.ndarray]


class Config:
    """Configuration constants for the conversion routines"""

    # Batch conversions use numpy ufuncs over the whole array;
    # False converts one element at a time with the scalar routine
    VECTORIZE = True

    # Log inputs and results of every scalar conversion
    DEBUG = False


class LengthMismatch(ValueError):
    """Batch inputs do not all have the same number of elements"""

    def __init__(self, alt_len: int, az_len: int, lat_len: int):
        self.alt_len = alt_len
        self.az_len = az_len
        self.lat_len = lat_len
        super().__init__(
            f"alt, az and lat must have the same length "
            f"(got {alt_len}, {az_len}, {lat_len})"
        )


# ============================================================================
# Angle Helpers
# ============================================================================

def ten(degrees: Real, minutes: Real = 0.0, seconds: Real = 0.0) -> float:
    """
    Convert a sexagesimal angle to decimal degrees.

    The sign may be carried by any component, so -0d30m can be written
    as ten(0, -30).

    Args:
        degrees: Degrees
        minutes: Arc minutes
        seconds: Arc seconds

    Returns:
        Angle in decimal degrees
    """
    value = abs(degrees) + abs(minutes) / 60.0 + abs(seconds) / 3600.0
    if degrees < 0 or minutes < 0 or seconds < 0:
        value = -value
    return float(value)


def azimuth_from_south(az: Real) -> float:
    """
    Convert an azimuth measured west of south (Meeus) to east of north.

    Args:
        az: Azimuth in degrees, west of south

    Returns:
        Azimuth in degrees, east of north, in [0, 360)
    """
    return (float(az) + 180.0) % FULL_CIRCLE_DEG


# ============================================================================
# Coordinate Transformation Functions
# ============================================================================

def _hadec_kernel(alt, az, lat):
    # Works on floats and float arrays alike; both public forms go through here
    alt_rad = alt * DEG_TO_RAD
    az_rad = az * DEG_TO_RAD
    lat_rad = lat * DEG_TO_RAD

    cos_alt = np.cos(alt_rad)

    with np.errstate(invalid='ignore'):
        # Local hour angle, quadrant preserved by arctan2
        ha = RAD_TO_DEG * np.arctan2(-np.sin(az_rad) * cos_alt,
                                    -np.cos(az_rad) * np.sin(lat_rad) * cos_alt +
                                    np.sin(alt_rad) * np.cos(lat_rad))
        ha = np.where(ha < 0.0, ha + FULL_CIRCLE_DEG, ha)
        ha = np.mod(ha, FULL_CIRCLE_DEG)

        # Declination, positive north of the celestial equator.
        # |sindec| may exceed 1 by rounding near the poles; that gives NaN.
        sindec = (np.sin(lat_rad) * np.sin(alt_rad) +
                  np.cos(lat_rad) * cos_alt * np.cos(az_rad))
        dec = RAD_TO_DEG * np.arcsin(sindec)

    return ha, dec


def alt_az_to_hour_angle_dec(alt: Real, az: Real, lat: Real) -> Tuple[float, float]:
    """
    Convert altitude and azimuth to hour angle and declination.

    Example: Arcturus observed at altitude 59d05m10s and azimuth 133d18m29s
    from latitude +43.07833 has hour angle 336.683 and declination 19.1824.

    Args:
        alt: Local apparent altitude in degrees
        az: Local apparent azimuth in degrees, east of north
        lat: Observer geodetic latitude in degrees

    Returns:
        Tuple of (ha, dec) in degrees, ha in [0, 360) and dec in [-90, 90]
    """
    alt = float(alt)
    az = float(az)
    lat = float(lat)

    ha, dec = _hadec_kernel(alt, az, lat)
    ha = float(ha)
    dec = float(dec)

    if Config.DEBUG:
        logger.debug(f"alt={alt:.6f} az={az:.6f} lat={lat:.6f} -> "
                     f"ha={ha:.6f} dec={dec:.6f}")

    return ha, dec


def horizon_to_hour_angle_dec(horizon: Tuple[Real, Real], lat: Real) -> Tuple[float, float]:
    """
    Convert an (altitude, azimuth) pair to hour angle and declination.

    Args:
        horizon: Tuple of (alt, az) in degrees, azimuth east of north
        lat: Observer latitude in degrees

    Returns:
        Tuple of (ha, dec) in degrees
    """
    alt, az = horizon
    return alt_az_to_hour_angle_dec(alt, az, lat)


def _as_float_array(values: RealArray, name: str) -> np.ndarray:
    array = np.asarray(values, dtype=float)
    if array.ndim != 1:
        raise ValueError(f"{name} must be one-dimensional (got shape {array.shape})")
    return array


def alt_az_to_hour_angle_dec_array(alt: RealArray, az: RealArray,
                                   lat: RealArray) -> Tuple[np.ndarray, np.ndarray]:
    """
    Convert arrays of altitude, azimuth and latitude elementwise.

    Scalars are not broadcast against arrays; repeat a single latitude
    with np.full(len(alt), lat).

    Args:
        alt: Altitudes in degrees
        az: Azimuths in degrees, east of north
        lat: Observer latitudes in degrees

    Returns:
        Tuple of (ha, dec) float arrays, same length and order as the input

    Raises:
        LengthMismatch: If the three inputs differ in length
    """
    alt = _as_float_array(alt, "alt")
    az = _as_float_array(az, "az")
    lat = _as_float_array(lat, "lat")

    if not (len(alt) == len(az) == len(lat)):
        logger.error(f"Length mismatch: alt={len(alt)}, az={len(az)}, lat={len(lat)}")
        raise LengthMismatch(len(alt), len(az), len(lat))

    if Config.VECTORIZE:
        logger.debug(f"Converting {len(alt)} positions (vectorized)")
        ha, dec = _hadec_kernel(alt, az, lat)
        return np.asarray(ha, dtype=float), np.asarray(dec, dtype=float)

    logger.debug(f"Converting {len(alt)} positions (per element)")
    ha = np.empty(len(alt), dtype=float)
    dec = np.empty(len(alt), dtype=float)
    for i in range(len(alt)):
        ha[i], dec[i] = alt_az_to_hour_angle_dec(alt[i], az[i], lat[i])

    return ha, dec
