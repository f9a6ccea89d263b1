"""
Watering schedule for collection entries.

Rules:
- An entry with no last-watered timestamp has never been watered and has no due date.
- Next due date = last watered + cadence. The cadence is the same for every
  species (default 7 days, overridable with WATERING_CADENCE_DAYS).
- Recording a watering always overwrites the stored timestamp. Timestamps older
  than the stored one are accepted and simply move the due date back.
"""
from __future__ import annotations

import logging
import os
from datetime import datetime, timedelta
from enum import Enum
from typing import Optional

from ..services.stores import CollectionStore
from ..utils.date_time import Clock, as_utc, parse_dt

DEFAULT_CADENCE_DAYS = 7


class WateringState(str, Enum):
    NEVER_WATERED = "never_watered"
    WATERED = "watered"


def cadence_days_from_env() -> int:
    raw = os.getenv("WATERING_CADENCE_DAYS")
    if not raw:
        return DEFAULT_CADENCE_DAYS
    try:
        days = int(raw)
    except ValueError:
        days = 0
    if days <= 0:
        logging.warning(f"Ignoring invalid WATERING_CADENCE_DAYS={raw!r}, using {DEFAULT_CADENCE_DAYS}")
        return DEFAULT_CADENCE_DAYS
    return days


def watering_state(last_watered_at: Optional[datetime]) -> WateringState:
    if last_watered_at is None:
        return WateringState.NEVER_WATERED
    return WateringState.WATERED


def next_due_date(
    last_watered_at: Optional[datetime], cadence_days: int = DEFAULT_CADENCE_DAYS
) -> Optional[datetime]:
    if last_watered_at is None:
        return None
    return last_watered_at + timedelta(days=cadence_days)


def is_overdue(
    last_watered_at: Optional[datetime], now: datetime, cadence_days: int = DEFAULT_CADENCE_DAYS
) -> bool:
    """True once the due date has passed. Never-watered entries have nothing scheduled."""
    due = next_due_date(last_watered_at, cadence_days)
    if due is None:
        return False
    return as_utc(due) < as_utc(now)


class WateringSchedule:
    """
    Records watering events through a collection store.

    Usage:
      schedule = WateringSchedule(store, SystemClock())
      watered_at = schedule.record_watering(user_id, plant_id)
      due = schedule.next_due_date(watered_at)
    """

    def __init__(self, store: CollectionStore, clock: Clock, cadence_days: Optional[int] = None):
        self.store = store
        self.clock = clock
        self.cadence_days = cadence_days if cadence_days is not None else cadence_days_from_env()

    def next_due_date(self, last_watered_at: Optional[datetime]) -> Optional[datetime]:
        return next_due_date(last_watered_at, self.cadence_days)

    def record_watering(
        self, user_id: str, plant_id: int, timestamp: datetime | str | None = None
    ) -> datetime:
        """Persist a watering event and return the stored (UTC) timestamp.

        Store errors (PersistenceFailure, NotFound) propagate to the caller unchanged.
        """
        watered_at = parse_dt(timestamp) if timestamp is not None else as_utc(self.clock.now())
        self.store.update_last_watered(user_id, plant_id, watered_at)
        return watered_at
