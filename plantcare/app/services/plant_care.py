"""
Stateless helpers for plant and collection endpoints.
Turns catalog records and collection items into response payloads, attaching
care guidance and watering dates.
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..helpers.care_advice import care_guidance, duration_label, growth_rate_label
from ..helpers.collection_view import CollectionItem, classify
from ..helpers.water_volume import describe_weekly_range
from ..helpers.watering_schedule import DEFAULT_CADENCE_DAYS, is_overdue
from ..schemas.collection import CollectionItemOut
from ..schemas.plant import (
    CareGuidanceOut,
    LightGuidance,
    PlantDetail,
    PlantListItem,
    PlantRecord,
    WaterGuidance,
)
from ..utils.date_time import format_local_date


def plant_list_item(plant: PlantRecord) -> PlantListItem:
    return PlantListItem(
        id=plant.id,
        common_name=plant.common_name,
        scientific_name=plant.scientific_name,
        image_url=plant.image_url,
        light=plant.light,
        setting=classify(plant),
    )


def care_guidance_out(plant: PlantRecord) -> CareGuidanceOut:
    guidance = care_guidance(plant)
    light = None
    if guidance.light is not None:
        light = LightGuidance(
            band=guidance.light.band.value,
            description=guidance.light.description,
            hours_per_day=guidance.light.hours_per_day,
            placement_tip=guidance.light.placement_tip,
        )
    water = None
    if guidance.weekly_water is not None:
        water = WaterGuidance(
            min_liters=guidance.weekly_water.min_liters,
            max_liters=guidance.weekly_water.max_liters,
            description=describe_weekly_range(guidance.weekly_water),
        )
    return CareGuidanceOut(light=light, temperature_tip=guidance.temperature_tip, weekly_water=water)


def plant_detail(plant: PlantRecord) -> PlantDetail:
    return PlantDetail(
        id=plant.id,
        common_name=plant.common_name,
        scientific_name=plant.scientific_name,
        duration=duration_label(plant.duration),
        growth_rate=growth_rate_label(plant.growth_rate),
        light=plant.light,
        min_temp=plant.min_temp,
        max_temp=plant.max_temp,
        min_precip=plant.min_precip,
        max_precip=plant.max_precip,
        image_url=plant.image_url,
        setting=classify(plant),
        care=care_guidance_out(plant),
    )


def collection_item_out(
    item: CollectionItem,
    now: datetime,
    *,
    cadence_days: int = DEFAULT_CADENCE_DAYS,
    tz_name: Optional[str] = None,
) -> CollectionItemOut:
    return CollectionItemOut(
        plant=plant_list_item(item.plant),
        last_watered=item.entry.last_watered,
        next_watering_at=item.next_watering_at,
        next_watering_local=format_local_date(item.next_watering_at, tz_name),
        overdue=is_overdue(item.entry.last_watered, now, cadence_days),
        notes=item.entry.notes,
        user_image_path=item.entry.user_image_path,
    )
