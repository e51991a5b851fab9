#!/usr/bin/env python3
"""
Test script to compare hadec_astro.py and hadec_astropy.py outputs
Verifies that the astropy-based implementation produces compatible results
"""

import sys
import os

import numpy as np
import pytest
from astropy import units as u
from astropy.coordinates import Angle

# Add src directory to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src'))

# Import both modules
import hadec_astro as astro_orig
import hadec_astropy as astro_py

ARCTURUS_ALT = astro_orig.ten(59, 5, 10)
ARCTURUS_AZ = astro_orig.ten(133, 18, 29)
ARCTURUS_LAT = 43.07833

TOLERANCE = 1e-6


def hour_angle_difference(ha1, ha2):
    """Smallest difference between two hour angles in degrees"""
    return np.abs((np.asarray(ha1) - np.asarray(ha2) + 180.0) % 360.0 - 180.0)


def test_scalar_matches_original():
    ha_orig, dec_orig = astro_orig.alt_az_to_hour_angle_dec(ARCTURUS_ALT, ARCTURUS_AZ, ARCTURUS_LAT)
    ha_py, dec_py = astro_py.alt_az_to_hour_angle_dec(ARCTURUS_ALT, ARCTURUS_AZ, ARCTURUS_LAT)

    assert isinstance(ha_py, float)
    assert isinstance(dec_py, float)
    assert ha_py == pytest.approx(ha_orig, abs=TOLERANCE)
    assert dec_py == pytest.approx(dec_orig, abs=TOLERANCE)
    assert ha_py == pytest.approx(336.6828582472844, abs=TOLERANCE)


def test_quantity_inputs():
    """Quantities in any angular unit are converted to degrees"""
    expected = astro_orig.alt_az_to_hour_angle_dec(ARCTURUS_ALT, ARCTURUS_AZ, ARCTURUS_LAT)

    ha, dec = astro_py.alt_az_to_hour_angle_dec(np.radians(ARCTURUS_ALT) * u.rad,
                                                Angle(ARCTURUS_AZ / 15.0, u.hourangle),
                                                ARCTURUS_LAT * u.deg)

    assert ha == pytest.approx(expected[0], abs=TOLERANCE)
    assert dec == pytest.approx(expected[1], abs=TOLERANCE)


def test_non_angular_quantity_rejected():
    with pytest.raises(u.UnitConversionError):
        astro_py.alt_az_to_hour_angle_dec(45.0 * u.m, 30.0, 40.0)


def test_horizon_pair():
    pair = astro_py.horizon_to_hour_angle_dec((ARCTURUS_ALT * u.deg, ARCTURUS_AZ * u.deg),
                                              ARCTURUS_LAT)
    scalar = astro_py.alt_az_to_hour_angle_dec(ARCTURUS_ALT, ARCTURUS_AZ, ARCTURUS_LAT)

    assert pair[0] == pytest.approx(scalar[0], abs=1e-12)
    assert pair[1] == pytest.approx(scalar[1], abs=1e-12)


def test_array_matches_original():
    rng = np.random.default_rng(2025)
    alt = rng.uniform(-90.0, 90.0, 2000)
    az = rng.uniform(0.0, 360.0, 2000)
    lat = rng.uniform(-90.0, 90.0, 2000)

    ha_orig, dec_orig = astro_orig.alt_az_to_hour_angle_dec_array(alt, az, lat)
    ha_py, dec_py = astro_py.alt_az_to_hour_angle_dec_array(alt, az, lat)

    assert ha_py.shape == ha_orig.shape
    assert np.all((ha_py >= 0.0) & (ha_py < 360.0))
    assert np.max(hour_angle_difference(ha_py, ha_orig)) < 1e-8
    np.testing.assert_allclose(dec_py, dec_orig, rtol=0.0, atol=1e-8)


def test_array_quantity_inputs():
    alt = np.array([10.0, 45.0, 80.0])
    az = np.array([30.0, 200.0, 300.0])
    lat = np.array([90.0, -90.0, 0.0])

    ha, dec = astro_py.alt_az_to_hour_angle_dec_array(np.radians(alt) * u.rad, az * u.deg, lat)
    ha_orig, dec_orig = astro_orig.alt_az_to_hour_angle_dec_array(alt, az, lat)

    assert isinstance(ha, np.ndarray)
    assert np.max(hour_angle_difference(ha, ha_orig)) < TOLERANCE
    np.testing.assert_allclose(dec, dec_orig, rtol=0.0, atol=TOLERANCE)


def test_array_length_mismatch():
    with pytest.raises(astro_orig.LengthMismatch):
        astro_py.alt_az_to_hour_angle_dec_array([10.0, 20.0], [30.0], [40.0, 50.0])


def test_array_rejects_scalars():
    with pytest.raises(ValueError, match="one-dimensional"):
        astro_py.alt_az_to_hour_angle_dec_array(10.0, [30.0], [40.0])


def main():
    """Print a comparison of both implementations"""
    print("\n" + "=" * 70)
    print("COMPARING hadec_astro AND hadec_astropy")
    print("=" * 70)

    ha_orig, dec_orig = astro_orig.alt_az_to_hour_angle_dec(ARCTURUS_ALT, ARCTURUS_AZ, ARCTURUS_LAT)
    ha_py, dec_py = astro_py.alt_az_to_hour_angle_dec(ARCTURUS_ALT, ARCTURUS_AZ, ARCTURUS_LAT)
    print(f"  Hour angle:  {ha_orig:.6f} vs {ha_py:.6f} (diff: {abs(ha_orig - ha_py):.2e})")
    print(f"  Declination: {dec_orig:.6f} vs {dec_py:.6f} (diff: {abs(dec_orig - dec_py):.2e})")


if __name__ == "__main__":
    main()
