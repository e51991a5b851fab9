"""
Example Usage of the Horizon to Equatorial Conversion Routines

This file demonstrates how to:
1. Convert a single altitude/azimuth measurement
2. Convert an (alt, az) pair
3. Convert a batch of measurements
4. Handle observers at the celestial poles
5. Cross-check against the astropy implementation
"""

import sys
import logging

import numpy as np

# Add src to path if running from project root
sys.path.insert(0, 'src')

from hadec_astro import (
    LengthMismatch, ten, azimuth_from_south,
    alt_az_to_hour_angle_dec, horizon_to_hour_angle_dec,
    alt_az_to_hour_angle_dec_array
)
import hadec_astropy

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Observer used in the Arcturus example
EXAMPLE_LATITUDE = 43.07833


def demonstrate_scalar_conversion():
    """Convert the position of Arcturus"""
    print("\n" + "=" * 60)
    print("SCALAR CONVERSION")
    print("=" * 60)

    alt = ten(59, 5, 10)
    az = ten(133, 18, 29)
    ha, dec = alt_az_to_hour_angle_dec(alt, az, EXAMPLE_LATITUDE)

    print(f"Arcturus at alt {alt:.5f}°, az {az:.5f}°, lat {EXAMPLE_LATITUDE}°")
    print(f"  Hour angle:   {ha:.5f}°")
    print(f"  Declination:  {dec:.5f}°")
    print("  (XEPHEM: HA = 336.683, Dec = 19.1824)")

    # Same measurement with azimuth given west of south
    az_south = (az - 180.0) % 360.0
    ha_s, dec_s = horizon_to_hour_angle_dec((alt, azimuth_from_south(az_south)),
                                            EXAMPLE_LATITUDE)
    print(f"  From Meeus azimuth {az_south:.5f}°: HA {ha_s:.5f}°, Dec {dec_s:.5f}°")


def demonstrate_batch_conversion():
    """Convert a strip of azimuths at fixed altitude"""
    print("\n" + "=" * 60)
    print("BATCH CONVERSION")
    print("=" * 60)

    az = np.arange(0.0, 360.0, 45.0)
    alt = np.full(len(az), 30.0)
    lat = np.full(len(az), EXAMPLE_LATITUDE)

    ha, dec = alt_az_to_hour_angle_dec_array(alt, az, lat)

    print(f"{'Az':>8s} {'HA':>12s} {'Dec':>12s}")
    for a, h, d in zip(az, ha, dec):
        print(f"{a:8.1f} {h:12.5f} {d:12.5f}")

    try:
        alt_az_to_hour_angle_dec_array(alt, az, lat[:-1])
    except LengthMismatch as e:
        logger.info(f"Rejected mismatched batch: {e}")


def demonstrate_pole_handling():
    """Observers at the north and south celestial poles"""
    print("\n" + "=" * 60)
    print("POLE HANDLING")
    print("=" * 60)

    for lat in (90.0, -90.0):
        for alt, az in ((45.0, 30.0), (90.0, 0.0)):
            ha, dec = alt_az_to_hour_angle_dec(alt, az, lat)
            print(f"lat {lat:+6.1f}°  alt {alt:5.1f}°  az {az:5.1f}°  ->  "
                  f"HA {ha:10.5f}°  Dec {dec:+10.5f}°")


def demonstrate_astropy_cross_check():
    """Compare the numpy and astropy implementations"""
    print("\n" + "=" * 60)
    print("ASTROPY CROSS-CHECK")
    print("=" * 60)

    rng = np.random.default_rng(2016)
    alt = rng.uniform(-90.0, 90.0, 1000)
    az = rng.uniform(0.0, 360.0, 1000)
    lat = rng.uniform(-90.0, 90.0, 1000)

    ha1, dec1 = alt_az_to_hour_angle_dec_array(alt, az, lat)
    ha2, dec2 = hadec_astropy.alt_az_to_hour_angle_dec_array(alt, az, lat)

    # Hour angles near 0/360 may land on either side of the wrap
    dha = np.abs((ha1 - ha2 + 180.0) % 360.0 - 180.0)
    print(f"Max |ΔHA|:  {np.max(dha):.3e}°")
    print(f"Max |ΔDec|: {np.max(np.abs(dec1 - dec2)):.3e}°")


def main():
    """Run all demonstrations"""
    print("\n" + "=" * 60)
    print(" Horizon to Hour Angle / Declination Examples")
    print("=" * 60)

    demonstrate_scalar_conversion()
    demonstrate_batch_conversion()
    demonstrate_pole_handling()
    demonstrate_astropy_cross_check()

    print("\n" + "=" * 60)
    print("Examples complete!")
    print("=" * 60 + "\n")


if __name__ == "__main__":
    main()
