from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator


class Duration(str, Enum):
    ANNUAL = "annual"
    BIENNIAL = "biennial"
    PERENNIAL = "perennial"


class GrowthRate(str, Enum):
    SLOW = "slow"
    MEDIUM = "medium"
    FAST = "fast"


_CATEGORY_VALUES = {
    "duration": {d.value for d in Duration},
    "growth_rate": {g.value for g in GrowthRate},
}


class PlantRecord(BaseModel):
    """Botanical fact sheet from the catalog. Read-only to the application."""

    model_config = ConfigDict(frozen=True)

    id: int
    common_name: str
    scientific_name: Optional[str] = None
    duration: Optional[Duration] = None
    growth_rate: Optional[GrowthRate] = None
    # 0-10 scale
    light: Optional[float] = None
    # degrees C
    min_temp: Optional[float] = None
    max_temp: Optional[float] = None
    # mm per year
    min_precip: Optional[float] = None
    max_precip: Optional[float] = None
    image_url: Optional[str] = None

    # The import process writes '' for unknown values
    @field_validator(
        "scientific_name", "image_url", "light", "min_temp", "max_temp", "min_precip", "max_precip",
        mode="before",
    )
    @classmethod
    def _blank_is_missing(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    # Raw import values outside the known categories are treated as unknown
    @field_validator("duration", "growth_rate", mode="before")
    @classmethod
    def _normalize_category(cls, v, info: ValidationInfo):
        if isinstance(v, str):
            v = v.strip().lower()
            allowed = _CATEGORY_VALUES[info.field_name]
            return v if v in allowed else None
        return v


class PlantListItem(BaseModel):
    id: int
    common_name: str
    scientific_name: Optional[str] = None
    image_url: Optional[str] = None
    light: Optional[float] = None
    setting: Optional[str] = None


class LightGuidance(BaseModel):
    band: str
    description: str
    hours_per_day: str
    placement_tip: str


class WaterGuidance(BaseModel):
    min_liters: Optional[float] = None
    max_liters: Optional[float] = None
    description: str


class CareGuidanceOut(BaseModel):
    light: Optional[LightGuidance] = None
    temperature_tip: Optional[str] = None
    weekly_water: Optional[WaterGuidance] = None


class PlantDetail(BaseModel):
    id: int
    common_name: str
    scientific_name: Optional[str] = None
    duration: str = ""
    growth_rate: str = ""
    light: Optional[float] = None
    min_temp: Optional[float] = None
    max_temp: Optional[float] = None
    min_precip: Optional[float] = None
    max_precip: Optional[float] = None
    image_url: Optional[str] = None
    setting: Optional[str] = None
    care: CareGuidanceOut
