import uuid
from datetime import datetime
from typing import Callable, Optional

from ..errors import NotFound
from ..schemas.collection import CollectionEntry
from ..utils.date_time import as_utc, to_db_datetime
from .core import get_conn, store_cursor
from .ids import bin_to_hex, normalize_user_id

_COLUMNS = "user_id, plant_id, last_watered, notes, user_image_path, created_at"

NOT_IN_COLLECTION = "Plant is not in this collection"


def _row_to_entry(row) -> CollectionEntry:
    # row = (user_id, plant_id, last_watered, notes, user_image_path, created_at)
    return CollectionEntry(
        user_id=bin_to_hex(row[0]),
        plant_id=row[1],
        last_watered=as_utc(row[2]) if row[2] else None,
        notes=row[3],
        user_image_path=row[4],
        created_at=as_utc(row[5]) if row[5] else None,
    )


def _user_hex(user_id: str) -> str:
    uid = normalize_user_id(user_id)
    if not uid:
        raise ValueError(f"Invalid user id: {user_id!r}")
    return uid


class MySQLCollectionStore:
    """
    Collection entries in the `collection` table (DATETIME columns hold naive UTC).

    The table has no unique key on (user_id, plant_id). Reads pick the most
    recently watered row, watering updates every matching row, and add_entry
    returns the existing row instead of inserting a second one.
    """

    def __init__(self, conn_factory: Callable = get_conn):
        self._conn_factory = conn_factory

    def _select_entry(self, cur, uid: str, plant_id: int):
        cur.execute(
            f"""
            SELECT {_COLUMNS}
            FROM collection
            WHERE user_id=UNHEX(%s) AND plant_id=%s
            ORDER BY last_watered IS NULL, last_watered DESC, created_at DESC
            LIMIT 1
            """,
            (uid, plant_id),
        )
        return cur.fetchone()

    def get_entry(self, user_id: str, plant_id: int) -> CollectionEntry:
        uid = _user_hex(user_id)
        with store_cursor(self._conn_factory, "Could not read the collection") as cur:
            row = self._select_entry(cur, uid, plant_id)
        if not row:
            raise NotFound(NOT_IN_COLLECTION)
        return _row_to_entry(row)

    def list_entries_for_user(self, user_id: str) -> list[CollectionEntry]:
        uid = _user_hex(user_id)
        with store_cursor(self._conn_factory, "Could not read the collection") as cur:
            cur.execute(
                f"SELECT {_COLUMNS} FROM collection WHERE user_id=UNHEX(%s) ORDER BY created_at ASC",
                (uid,),
            )
            rows = cur.fetchall() or []
        return [_row_to_entry(r) for r in rows]

    def update_last_watered(self, user_id: str, plant_id: int, timestamp: datetime) -> None:
        uid = _user_hex(user_id)
        with store_cursor(self._conn_factory, "Could not record the watering") as cur:
            if not self._select_entry(cur, uid, plant_id):
                raise NotFound(NOT_IN_COLLECTION)
            cur.execute(
                "UPDATE collection SET last_watered=%s WHERE user_id=UNHEX(%s) AND plant_id=%s",
                (to_db_datetime(timestamp), uid, plant_id),
            )

    def add_entry(self, user_id: str, plant_id: int) -> CollectionEntry:
        uid = _user_hex(user_id)
        with store_cursor(self._conn_factory, "Could not add the plant to the collection") as cur:
            row = self._select_entry(cur, uid, plant_id)
            if not row:
                cur.execute(
                    "INSERT INTO collection (id, user_id, plant_id) VALUES (%s, UNHEX(%s), %s)",
                    (uuid.uuid4().bytes, uid, plant_id),
                )
                row = self._select_entry(cur, uid, plant_id)
        if not row:
            raise NotFound(NOT_IN_COLLECTION)
        return _row_to_entry(row)

    def remove_entry(self, user_id: str, plant_id: int) -> None:
        uid = _user_hex(user_id)
        with store_cursor(self._conn_factory, "Could not remove the plant from the collection") as cur:
            cur.execute(
                "DELETE FROM collection WHERE user_id=UNHEX(%s) AND plant_id=%s",
                (uid, plant_id),
            )
            if cur.rowcount == 0:
                raise NotFound(NOT_IN_COLLECTION)

    def update_notes(self, user_id: str, plant_id: int, notes: Optional[str]) -> None:
        uid = _user_hex(user_id)
        with store_cursor(self._conn_factory, "Could not save the notes") as cur:
            if not self._select_entry(cur, uid, plant_id):
                raise NotFound(NOT_IN_COLLECTION)
            cur.execute(
                "UPDATE collection SET notes=%s WHERE user_id=UNHEX(%s) AND plant_id=%s",
                ((notes or None), uid, plant_id),
            )
