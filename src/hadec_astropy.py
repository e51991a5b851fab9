"""
Horizon to Equatorial Conversion Module using Astropy
This module reimplements hadec_astro.py functionality using astropy units

Inputs may be plain numbers in degrees or astropy Quantity/Angle objects
in any angular unit. Results are returned in degrees as floats (scalar)
or numpy arrays (batch).

All functions maintain the same interface as hadec_astro.py for compatibility
"""

import numpy as np
from typing import Tuple, Union
import logging

from astropy import units as u
from astropy.coordinates import Angle

from hadec_astro import LengthMismatch, Real, RealArray

logger = logging.getLogger(__name__)

AngleLike = Union[Real, u.Quantity]


def _to_degrees(value, dtype=None) -> u.Quantity:
    # Plain numbers are taken as degrees; Quantities are converted
    return u.Quantity(value, u.deg, dtype=dtype)


def _hadec_quantities(alt: u.Quantity, az: u.Quantity,
                      lat: u.Quantity) -> Tuple[Angle, Angle]:
    cos_alt = np.cos(alt)

    with np.errstate(invalid='ignore'):
        ha = Angle(np.arctan2(-np.sin(az) * cos_alt,
                              -np.cos(az) * np.sin(lat) * cos_alt +
                              np.sin(alt) * np.cos(lat)))
        ha = ha.wrap_at(360 * u.deg)

        sindec = np.sin(lat) * np.sin(alt) + np.cos(lat) * cos_alt * np.cos(az)
        dec = Angle(np.arcsin(sindec))

    return ha.to(u.deg), dec.to(u.deg)


# ============================================================================
# Coordinate Transformation Functions
# ============================================================================

def alt_az_to_hour_angle_dec(alt: AngleLike, az: AngleLike,
                             lat: AngleLike) -> Tuple[float, float]:
    """
    Convert altitude and azimuth to hour angle and declination using astropy.

    Args:
        alt: Local apparent altitude (degrees or angular Quantity)
        az: Local apparent azimuth, east of north (degrees or angular Quantity)
        lat: Observer latitude (degrees or angular Quantity)

    Returns:
        Tuple of (ha, dec) in degrees
    """
    ha, dec = _hadec_quantities(_to_degrees(alt, float),
                                _to_degrees(az, float),
                                _to_degrees(lat, float))
    return float(ha.degree), float(dec.degree)


def horizon_to_hour_angle_dec(horizon: Tuple[AngleLike, AngleLike],
                              lat: AngleLike) -> Tuple[float, float]:
    """
    Convert an (altitude, azimuth) pair to hour angle and declination using astropy.

    Args:
        horizon: Tuple of (alt, az)
        lat: Observer latitude

    Returns:
        Tuple of (ha, dec) in degrees
    """
    alt, az = horizon
    return alt_az_to_hour_angle_dec(alt, az, lat)


def alt_az_to_hour_angle_dec_array(alt: Union[RealArray, u.Quantity],
                                   az: Union[RealArray, u.Quantity],
                                   lat: Union[RealArray, u.Quantity]) -> Tuple[np.ndarray, np.ndarray]:
    """
    Convert arrays of altitude, azimuth and latitude elementwise using astropy.

    Args:
        alt: Altitudes
        az: Azimuths, east of north
        lat: Observer latitudes

    Returns:
        Tuple of (ha, dec) arrays in degrees

    Raises:
        LengthMismatch: If the three inputs differ in length
    """
    alt = _to_degrees(alt, float)
    az = _to_degrees(az, float)
    lat = _to_degrees(lat, float)

    for name, values in (("alt", alt), ("az", az), ("lat", lat)):
        if values.ndim != 1:
            raise ValueError(f"{name} must be one-dimensional (got shape {values.shape})")

    if not (len(alt) == len(az) == len(lat)):
        logger.error(f"Length mismatch: alt={len(alt)}, az={len(az)}, lat={len(lat)}")
        raise LengthMismatch(len(alt), len(az), len(lat))

    logger.debug(f"Converting {len(alt)} positions with astropy")
    ha, dec = _hadec_quantities(alt, az, lat)

    return np.asarray(ha.degree, dtype=float), np.asarray(dec.degree, dtype=float)
