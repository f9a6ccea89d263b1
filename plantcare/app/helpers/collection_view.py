"""Helpers for assembling a user's collection and related catalog plants."""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Iterable, Optional

from ..schemas.collection import CollectionEntry
from ..schemas.plant import PlantRecord
from ..services.stores import CatalogStore, CollectionStore
from ..utils.date_time import as_utc
from .watering_schedule import cadence_days_from_env, next_due_date

# Light rating at or below which a plant is treated as an indoor plant
INDOOR_MAX_LIGHT = 6
RELATED_LIGHT_TOLERANCE = 2
RELATED_LIMIT = 4


class Setting(str, Enum):
    INDOOR = "Indoor"
    OUTDOOR = "Outdoor"
    BOTH = "Both"


@dataclass(frozen=True)
class CollectionItem:
    entry: CollectionEntry
    plant: PlantRecord
    next_watering_at: Optional[datetime]


def classify(plant: PlantRecord) -> Optional[str]:
    """Indoor/Outdoor from the light rating alone; None when the rating is unknown."""
    if plant.light is None:
        return None
    if plant.light <= INDOOR_MAX_LIGHT:
        return Setting.INDOOR.value
    return Setting.OUTDOOR.value


def filter_by_setting(items: Iterable[CollectionItem], setting: Setting | str) -> list[CollectionItem]:
    setting = Setting(setting)
    if setting is Setting.BOTH:
        return list(items)
    return [item for item in items if classify(item.plant) == setting.value]


def related_plants(
    anchor: PlantRecord, catalog: Iterable[PlantRecord], limit: int = RELATED_LIMIT
) -> list[PlantRecord]:
    """
    Catalog plants whose light rating is within +/-2 of the anchor's, excluding the
    anchor itself. Returns the first `limit` matches in catalog order.
    """
    if anchor.light is None or limit <= 0:
        return []
    results: list[PlantRecord] = []
    for plant in catalog:
        if plant.id == anchor.id or plant.light is None:
            continue
        if abs(plant.light - anchor.light) <= RELATED_LIGHT_TOLERANCE:
            results.append(plant)
            if len(results) >= limit:
                break
    return results


_EARLIEST = datetime.min.replace(tzinfo=timezone.utc)


def _recency_key(entry: CollectionEntry):
    # Never-watered entries rank below watered ones
    return (
        entry.last_watered is not None,
        as_utc(entry.last_watered) if entry.last_watered else _EARLIEST,
        as_utc(entry.created_at) if entry.created_at else _EARLIEST,
    )


def dedupe_entries(entries: Iterable[CollectionEntry]) -> list[CollectionEntry]:
    """Keep one entry per plant: the most recently watered. First-seen order is preserved."""
    chosen: dict[int, CollectionEntry] = {}
    for entry in entries:
        current = chosen.get(entry.plant_id)
        if current is None or _recency_key(entry) > _recency_key(current):
            chosen[entry.plant_id] = entry
    return list(chosen.values())


class CollectionView:
    """
    Joins a user's collection entries with their catalog records.

    Usage:
      view = CollectionView(collection_store, catalog_store)
      items = view.items(user_id)
      related = view.related(user_id)
    """

    def __init__(
        self,
        collection_store: CollectionStore,
        catalog_store: CatalogStore,
        cadence_days: Optional[int] = None,
    ):
        self.collection_store = collection_store
        self.catalog_store = catalog_store
        self.cadence_days = cadence_days if cadence_days is not None else cadence_days_from_env()

    def items(self, user_id: str) -> list[CollectionItem]:
        items, _catalog = self._join(user_id)
        return items

    def related(self, user_id: str, limit: int = RELATED_LIMIT) -> list[PlantRecord]:
        items, catalog = self._join(user_id)
        if not items:
            return []
        return related_plants(items[0].plant, catalog, limit)

    def _join(self, user_id: str) -> tuple[list[CollectionItem], list[PlantRecord]]:
        entries = dedupe_entries(self.collection_store.list_entries_for_user(user_id))
        if not entries:
            return [], []
        catalog = self.catalog_store.list_all()
        by_id = {plant.id: plant for plant in catalog}
        results: list[CollectionItem] = []
        for entry in entries:
            plant = by_id.get(entry.plant_id)
            if plant is None:
                logging.warning(f"Collection entry for user {user_id} points at unknown plant {entry.plant_id}")
                continue
            results.append(
                CollectionItem(
                    entry=entry,
                    plant=plant,
                    next_watering_at=next_due_date(entry.last_watered, self.cadence_days),
                )
            )
        return results, catalog
