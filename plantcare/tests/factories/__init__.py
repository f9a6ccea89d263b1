from .collection import CollectionEntryFactory
from .plant import PlantRecordFactory
from .stores import FixedClock, InMemoryCatalogStore, InMemoryCollectionStore

__all__ = [
    "PlantRecordFactory",
    "CollectionEntryFactory",
    "FixedClock",
    "InMemoryCatalogStore",
    "InMemoryCollectionStore",
]
