"""
Unit conversion from annual precipitation to a weekly watering volume.

Catalog records carry the precipitation range a species tolerates in its habitat
(millimeters per year). For a potted plant this is turned into liters per week:

- weekly_mm = annual_mm / 52
- liters    = weekly_mm * 0.05  (one millimeter over the assumed soil area of one
  plant holds 0.05 liters)
- rounded to 2 decimal places.

A missing figure stays missing (None). Zero is a real amount and is never used
as a stand-in for "no data".
"""

from dataclasses import dataclass
from typing import Optional

WEEKS_PER_YEAR = 52
LITERS_PER_MM = 0.05


@dataclass(frozen=True)
class WaterRange:
    min_liters: Optional[float]
    max_liters: Optional[float]


def weekly_liters(annual_mm: Optional[float]) -> Optional[float]:
    if annual_mm is None:
        return None
    return round((annual_mm / WEEKS_PER_YEAR) * LITERS_PER_MM, 2)


def weekly_liters_range(min_mm: Optional[float], max_mm: Optional[float]) -> Optional[WaterRange]:
    """Convert both ends of an annual precipitation range.

    Returns None only when both ends are absent; a single missing end stays None
    inside the range.
    """
    if min_mm is None and max_mm is None:
        return None
    return WaterRange(min_liters=weekly_liters(min_mm), max_liters=weekly_liters(max_mm))


def describe_weekly_range(water_range: Optional[WaterRange]) -> Optional[str]:
    if water_range is None:
        return None
    low, high = water_range.min_liters, water_range.max_liters
    if low is not None and high is not None:
        return f"{low}-{high} L per week"
    if low is not None:
        return f"at least {low} L per week"
    return f"up to {high} L per week"
