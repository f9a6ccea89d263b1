from .catalog import MySQLCatalogStore
from .collection import MySQLCollectionStore
from .core import connect, get_conn, store_cursor
from .deps import (
    get_cadence_days,
    get_catalog_store,
    get_clock,
    get_collection_store,
    get_conn_factory,
)
from .ids import bin_to_hex, is_hex_id, normalize_user_id

__all__ = [
    "get_conn",
    "connect",
    "store_cursor",
    "get_conn_factory",
    "get_catalog_store",
    "get_collection_store",
    "get_clock",
    "get_cadence_days",
    "MySQLCatalogStore",
    "MySQLCollectionStore",
    "is_hex_id",
    "normalize_user_id",
    "bin_to_hex",
]
