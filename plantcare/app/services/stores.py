"""
Storage boundaries consumed by the watering and collection helpers.

Implementations raise errors.NotFound for missing rows and
errors.PersistenceFailure when the backing store cannot be reached.
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol

from ..schemas.collection import CollectionEntry
from ..schemas.plant import PlantRecord


class CollectionStore(Protocol):
    def get_entry(self, user_id: str, plant_id: int) -> CollectionEntry:
        ...

    def update_last_watered(self, user_id: str, plant_id: int, timestamp: datetime) -> None:
        ...

    def list_entries_for_user(self, user_id: str) -> list[CollectionEntry]:
        ...

    def add_entry(self, user_id: str, plant_id: int) -> CollectionEntry:
        ...

    def remove_entry(self, user_id: str, plant_id: int) -> None:
        ...

    def update_notes(self, user_id: str, plant_id: int, notes: Optional[str]) -> None:
        ...


class CatalogStore(Protocol):
    def list_all(self) -> list[PlantRecord]:
        ...

    def get_by_id(self, plant_id: int) -> PlantRecord:
        ...

    def search(self, query: str) -> list[PlantRecord]:
        ...
