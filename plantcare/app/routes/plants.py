from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from starlette.concurrency import run_in_threadpool

from ..db import get_catalog_store
from ..schemas.plant import PlantDetail, PlantListItem
from ..services.plant_care import plant_detail, plant_list_item
from ..services.stores import CatalogStore

app = APIRouter()


def parse_plant_id(raw: str) -> int:
    s = (raw or "").strip()
    if not (s.isascii() and s.isdigit()) or int(s) < 1:
        raise HTTPException(status_code=400, detail="Invalid plant id")
    return int(s)


@app.get("/plants", response_model=list[PlantListItem])
async def list_plants(
    q: Optional[str] = Query(None, description="Search common or scientific name"),
    catalog: CatalogStore = Depends(get_catalog_store),
) -> list[PlantListItem]:
    def fetch():
        return [plant_list_item(p) for p in catalog.search(q or "")]

    return await run_in_threadpool(fetch)


@app.get("/plants/{plant_id}", response_model=PlantDetail)
async def get_plant(plant_id: str, catalog: CatalogStore = Depends(get_catalog_store)) -> PlantDetail:
    pid = parse_plant_id(plant_id)

    def fetch():
        return plant_detail(catalog.get_by_id(pid))

    return await run_in_threadpool(fetch)
