from __future__ import annotations

from typing import Callable

import pymysql
from fastapi import Depends

from ..helpers.watering_schedule import cadence_days_from_env
from ..utils.date_time import Clock, SystemClock
from .catalog import MySQLCatalogStore
from .collection import MySQLCollectionStore
from .core import get_conn


def get_conn_factory() -> Callable[[], pymysql.connections.Connection]:
    """
    FastAPI dependency that provides a factory function to obtain a PyMySQL
    connection on demand. Overridden in tests to supply a fake connection.
    """
    return get_conn


def get_catalog_store(conn_factory=Depends(get_conn_factory)) -> MySQLCatalogStore:
    return MySQLCatalogStore(conn_factory)


def get_collection_store(conn_factory=Depends(get_conn_factory)) -> MySQLCollectionStore:
    return MySQLCollectionStore(conn_factory)


def get_clock() -> Clock:
    return SystemClock()


def get_cadence_days() -> int:
    return cadence_days_from_env()
