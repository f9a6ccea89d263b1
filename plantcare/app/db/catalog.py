from typing import Callable

from ..errors import NotFound
from ..schemas.plant import PlantRecord
from .core import get_conn, store_cursor

_COLUMNS = (
    "id, common_name, scientific_name, duration, growth_rate, light, "
    "min_temp, max_temp, min_precip, max_precip, image_url"
)


def _row_to_plant(row) -> PlantRecord:
    # row = (id, common_name, scientific_name, duration, growth_rate, light,
    #        min_temp, max_temp, min_precip, max_precip, image_url)
    return PlantRecord(
        id=row[0],
        common_name=row[1],
        scientific_name=row[2],
        duration=row[3],
        growth_rate=row[4],
        light=row[5],
        min_temp=row[6],
        max_temp=row[7],
        min_precip=row[8],
        max_precip=row[9],
        image_url=row[10],
    )


def _escape_like(s: str) -> str:
    return s.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class MySQLCatalogStore:
    """
    Read-only access to the `plant` table filled by the catalog import.

    Usage:
      store = MySQLCatalogStore()
      plants = store.search("fern")
    """

    def __init__(self, conn_factory: Callable = get_conn):
        self._conn_factory = conn_factory

    def list_all(self) -> list[PlantRecord]:
        with store_cursor(self._conn_factory, "Could not read the plant catalog") as cur:
            cur.execute(f"SELECT {_COLUMNS} FROM plant ORDER BY id ASC")
            rows = cur.fetchall() or []
        return [_row_to_plant(r) for r in rows]

    def get_by_id(self, plant_id: int) -> PlantRecord:
        with store_cursor(self._conn_factory, "Could not read the plant catalog") as cur:
            cur.execute(f"SELECT {_COLUMNS} FROM plant WHERE id=%s LIMIT 1", (plant_id,))
            row = cur.fetchone()
        if not row:
            raise NotFound("Plant not found")
        return _row_to_plant(row)

    def search(self, query: str) -> list[PlantRecord]:
        """Case-insensitive substring match on common or scientific name, ordered by common name."""
        q = (query or "").strip()
        with store_cursor(self._conn_factory, "Could not search the plant catalog") as cur:
            if not q:
                cur.execute(f"SELECT {_COLUMNS} FROM plant ORDER BY common_name ASC")
            else:
                pattern = f"%{_escape_like(q.lower())}%"
                cur.execute(
                    f"""
                    SELECT {_COLUMNS}
                    FROM plant
                    WHERE LOWER(common_name) LIKE %s
                       OR LOWER(scientific_name) LIKE %s
                    ORDER BY common_name ASC
                    """,
                    (pattern, pattern),
                )
            rows = cur.fetchall() or []
        return [_row_to_plant(r) for r in rows]
