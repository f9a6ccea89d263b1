from datetime import datetime
from typing import Iterable, Optional

from plantcare.app.errors import NotFound, PersistenceFailure
from plantcare.app.schemas.collection import CollectionEntry
from plantcare.app.schemas.plant import PlantRecord


class FixedClock:
    def __init__(self, now: datetime):
        self._now = now

    def now(self) -> datetime:
        return self._now


class InMemoryCatalogStore:
    def __init__(self, plants: Iterable[PlantRecord] = ()):
        self.plants: list[PlantRecord] = list(plants)
        self.fail = False

    def _check(self):
        if self.fail:
            raise PersistenceFailure("catalog unavailable")

    def list_all(self) -> list[PlantRecord]:
        self._check()
        return list(self.plants)

    def get_by_id(self, plant_id: int) -> PlantRecord:
        self._check()
        for plant in self.plants:
            if plant.id == plant_id:
                return plant
        raise NotFound("Plant not found")

    def search(self, query: str) -> list[PlantRecord]:
        self._check()
        q = (query or "").strip().lower()
        hits = [
            p
            for p in self.plants
            if not q or q in p.common_name.lower() or q in (p.scientific_name or "").lower()
        ]
        return sorted(hits, key=lambda p: p.common_name)


class InMemoryCollectionStore:
    """Mirrors the MySQL store: duplicates allowed, reads prefer the latest watering."""

    def __init__(self, entries: Iterable[CollectionEntry] = ()):
        self.entries: list[CollectionEntry] = list(entries)
        self.fail = False
        self.watering_calls: list[tuple[str, int, datetime]] = []

    def _check(self):
        if self.fail:
            raise PersistenceFailure("collection unavailable")

    def _matching(self, user_id: str, plant_id: int) -> list[int]:
        return [
            i for i, e in enumerate(self.entries) if e.user_id == user_id and e.plant_id == plant_id
        ]

    def get_entry(self, user_id: str, plant_id: int) -> CollectionEntry:
        self._check()
        idx = self._matching(user_id, plant_id)
        if not idx:
            raise NotFound("Plant is not in this collection")
        watered = [self.entries[i] for i in idx if self.entries[i].last_watered is not None]
        if watered:
            return max(watered, key=lambda e: e.last_watered)
        return self.entries[idx[0]]

    def update_last_watered(self, user_id: str, plant_id: int, timestamp: datetime) -> None:
        self._check()
        idx = self._matching(user_id, plant_id)
        if not idx:
            raise NotFound("Plant is not in this collection")
        self.watering_calls.append((user_id, plant_id, timestamp))
        for i in idx:
            self.entries[i] = self.entries[i].model_copy(update={"last_watered": timestamp})

    def list_entries_for_user(self, user_id: str) -> list[CollectionEntry]:
        self._check()
        return [e for e in self.entries if e.user_id == user_id]

    def add_entry(self, user_id: str, plant_id: int) -> CollectionEntry:
        self._check()
        if self._matching(user_id, plant_id):
            return self.get_entry(user_id, plant_id)
        entry = CollectionEntry(user_id=user_id, plant_id=plant_id)
        self.entries.append(entry)
        return entry

    def remove_entry(self, user_id: str, plant_id: int) -> None:
        self._check()
        idx = self._matching(user_id, plant_id)
        if not idx:
            raise NotFound("Plant is not in this collection")
        self.entries = [e for i, e in enumerate(self.entries) if i not in idx]

    def update_notes(self, user_id: str, plant_id: int, notes: Optional[str]) -> None:
        self._check()
        idx = self._matching(user_id, plant_id)
        if not idx:
            raise NotFound("Plant is not in this collection")
        for i in idx:
            self.entries[i] = self.entries[i].model_copy(update={"notes": notes or None})
