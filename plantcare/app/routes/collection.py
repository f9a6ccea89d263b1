from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from starlette.concurrency import run_in_threadpool

from ..db import (
    get_cadence_days,
    get_catalog_store,
    get_clock,
    get_collection_store,
    normalize_user_id,
)
from ..helpers.collection_view import (
    RELATED_LIMIT,
    CollectionItem,
    CollectionView,
    Setting,
    filter_by_setting,
)
from ..helpers.watering_schedule import WateringSchedule, next_due_date
from ..schemas.collection import (
    CollectionAddRequest,
    CollectionItemOut,
    NotesUpdateRequest,
    WateringRequest,
    WateringResponse,
)
from ..schemas.plant import PlantListItem
from ..services.plant_care import collection_item_out, plant_list_item
from ..services.stores import CatalogStore, CollectionStore
from ..utils.date_time import Clock, get_timezone
from .plants import parse_plant_id

app = APIRouter()


def parse_user_id(raw: str) -> str:
    uid = normalize_user_id(raw)
    if not uid:
        raise HTTPException(status_code=400, detail="Invalid user id")
    return uid


def check_timezone(tz: Optional[str]) -> Optional[str]:
    try:
        get_timezone(tz)
    except ValueError:
        raise HTTPException(status_code=400, detail="Unknown timezone")
    return tz


@app.get("/users/{user_id}/plants", response_model=list[CollectionItemOut])
async def list_collection(
    user_id: str,
    setting: Setting = Query(Setting.BOTH, description="Indoor, Outdoor or Both"),
    tz: Optional[str] = Query(None, description="IANA timezone for next_watering_local"),
    collection: CollectionStore = Depends(get_collection_store),
    catalog: CatalogStore = Depends(get_catalog_store),
    clock: Clock = Depends(get_clock),
    cadence_days: int = Depends(get_cadence_days),
) -> list[CollectionItemOut]:
    uid = parse_user_id(user_id)
    tz = check_timezone(tz)

    def fetch():
        view = CollectionView(collection, catalog, cadence_days)
        items = filter_by_setting(view.items(uid), setting)
        now = clock.now()
        return [collection_item_out(i, now, cadence_days=cadence_days, tz_name=tz) for i in items]

    return await run_in_threadpool(fetch)


@app.post("/users/{user_id}/plants", response_model=CollectionItemOut)
async def add_to_collection(
    user_id: str,
    payload: CollectionAddRequest,
    collection: CollectionStore = Depends(get_collection_store),
    catalog: CatalogStore = Depends(get_catalog_store),
    clock: Clock = Depends(get_clock),
    cadence_days: int = Depends(get_cadence_days),
) -> CollectionItemOut:
    uid = parse_user_id(user_id)

    def do_add():
        plant = catalog.get_by_id(payload.plant_id)
        entry = collection.add_entry(uid, plant.id)
        item = CollectionItem(entry=entry, plant=plant, next_watering_at=next_due_date(entry.last_watered, cadence_days))
        return collection_item_out(item, clock.now(), cadence_days=cadence_days)

    return await run_in_threadpool(do_add)


@app.get("/users/{user_id}/plants/{plant_id}", response_model=CollectionItemOut)
async def get_collection_item(
    user_id: str,
    plant_id: str,
    tz: Optional[str] = Query(None),
    collection: CollectionStore = Depends(get_collection_store),
    catalog: CatalogStore = Depends(get_catalog_store),
    clock: Clock = Depends(get_clock),
    cadence_days: int = Depends(get_cadence_days),
) -> CollectionItemOut:
    uid = parse_user_id(user_id)
    pid = parse_plant_id(plant_id)
    tz = check_timezone(tz)

    def fetch():
        entry = collection.get_entry(uid, pid)
        plant = catalog.get_by_id(pid)
        item = CollectionItem(entry=entry, plant=plant, next_watering_at=next_due_date(entry.last_watered, cadence_days))
        return collection_item_out(item, clock.now(), cadence_days=cadence_days, tz_name=tz)

    return await run_in_threadpool(fetch)


@app.delete("/users/{user_id}/plants/{plant_id}")
async def remove_from_collection(
    user_id: str,
    plant_id: str,
    collection: CollectionStore = Depends(get_collection_store),
):
    uid = parse_user_id(user_id)
    pid = parse_plant_id(plant_id)
    await run_in_threadpool(collection.remove_entry, uid, pid)
    return {"ok": True}


@app.post("/users/{user_id}/plants/{plant_id}/water", response_model=WateringResponse)
async def water_plant(
    user_id: str,
    plant_id: str,
    payload: Optional[WateringRequest] = None,
    collection: CollectionStore = Depends(get_collection_store),
    clock: Clock = Depends(get_clock),
    cadence_days: int = Depends(get_cadence_days),
) -> WateringResponse:
    uid = parse_user_id(user_id)
    pid = parse_plant_id(plant_id)
    watered_at = payload.watered_at if payload else None

    def do_water():
        schedule = WateringSchedule(collection, clock, cadence_days)
        try:
            stored = schedule.record_watering(uid, pid, watered_at)
        except ValueError:
            raise HTTPException(status_code=400, detail="Invalid watered_at")
        return WateringResponse(last_watered=stored, next_watering_at=schedule.next_due_date(stored))

    return await run_in_threadpool(do_water)


@app.put("/users/{user_id}/plants/{plant_id}/notes")
async def update_notes(
    user_id: str,
    plant_id: str,
    payload: NotesUpdateRequest,
    collection: CollectionStore = Depends(get_collection_store),
):
    uid = parse_user_id(user_id)
    pid = parse_plant_id(plant_id)
    await run_in_threadpool(collection.update_notes, uid, pid, payload.notes)
    return {"ok": True}


@app.get("/users/{user_id}/related", response_model=list[PlantListItem])
async def related_plants_for_user(
    user_id: str,
    limit: int = Query(RELATED_LIMIT, ge=0, le=20),
    collection: CollectionStore = Depends(get_collection_store),
    catalog: CatalogStore = Depends(get_catalog_store),
    cadence_days: int = Depends(get_cadence_days),
) -> list[PlantListItem]:
    uid = parse_user_id(user_id)

    def fetch():
        view = CollectionView(collection, catalog, cadence_days)
        return [plant_list_item(p) for p in view.related(uid, limit)]

    return await run_in_threadpool(fetch)
