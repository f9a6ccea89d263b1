"""
Care guidance derived from a catalog record's numeric attributes.

Light rating bands (0-10 scale), boundary values belong to the lower band:
- rating <= 3      -> low    (2-4 hours/day, north-facing or shaded)
- 3 < rating <= 6  -> medium (4-6 hours/day, east or west window)
- rating > 6       -> high   (6-12 hours/day, south-facing or outdoors)

Temperature tips are evaluated in order and the first match wins, so a plant
with min < 10 and max > 35 only gets the cold tip.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..schemas.plant import PlantRecord
from .water_volume import WaterRange, weekly_liters_range

LOW_LIGHT_MAX = 3
MEDIUM_LIGHT_MAX = 6

COLD_MIN_TEMP_C = 10
HOT_MAX_TEMP_C = 35

COLD_TIP = "This plant may need extra warmth indoors."
HEAT_TIP = "Keep away from extreme heat or direct sunlight."
MILD_TIP = "This plant thrives in average indoor conditions."


class LightBand(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class LightCategory:
    band: LightBand
    hours_per_day: str
    placement_tip: str

    @property
    def description(self) -> str:
        return f"{self.band.value.capitalize()} light ({self.hours_per_day} hours/day)"


LOW_LIGHT = LightCategory(
    band=LightBand.LOW,
    hours_per_day="2-4",
    placement_tip="Place near a north-facing window or shaded area.",
)
MEDIUM_LIGHT = LightCategory(
    band=LightBand.MEDIUM,
    hours_per_day="4-6",
    placement_tip="Bright, indirect light: an east or west window is ideal.",
)
HIGH_LIGHT = LightCategory(
    band=LightBand.HIGH,
    hours_per_day="6-12",
    placement_tip="Needs strong sun: a south-facing window or outdoor spot.",
)


@dataclass(frozen=True)
class CareGuidance:
    light: Optional[LightCategory]
    temperature_tip: Optional[str]
    weekly_water: Optional[WaterRange]


def light_category(rating: Optional[float]) -> Optional[LightCategory]:
    if rating is None:
        return None
    if rating <= LOW_LIGHT_MAX:
        return LOW_LIGHT
    if rating <= MEDIUM_LIGHT_MAX:
        return MEDIUM_LIGHT
    return HIGH_LIGHT


def temperature_tip(min_temp: Optional[float], max_temp: Optional[float]) -> Optional[str]:
    """Return the tip for a temperature range, or None when either bound is unknown."""
    if min_temp is None or max_temp is None:
        return None
    if min_temp < COLD_MIN_TEMP_C:
        return COLD_TIP
    if max_temp > HOT_MAX_TEMP_C:
        return HEAT_TIP
    return MILD_TIP


def _capitalize(category) -> str:
    if category is None:
        return ""
    value = category.value if isinstance(category, Enum) else str(category)
    return value[:1].upper() + value[1:]


def growth_rate_label(category) -> str:
    return _capitalize(category)


def duration_label(category) -> str:
    return _capitalize(category)


def care_guidance(plant: PlantRecord) -> CareGuidance:
    return CareGuidance(
        light=light_category(plant.light),
        temperature_tip=temperature_tip(plant.min_temp, plant.max_temp),
        weekly_water=weekly_liters_range(plant.min_precip, plant.max_precip),
    )
