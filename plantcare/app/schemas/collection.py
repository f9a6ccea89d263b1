from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, constr

from .plant import PlantListItem

HexID = constr(pattern=r"^[0-9a-f]{32}$")


class CollectionEntry(BaseModel):
    """One user's ownership of one catalog plant."""

    user_id: HexID
    plant_id: int
    # None means the plant was never watered
    last_watered: Optional[datetime] = None
    notes: Optional[str] = None
    user_image_path: Optional[str] = None
    created_at: Optional[datetime] = None


class CollectionItemOut(BaseModel):
    plant: PlantListItem
    last_watered: Optional[datetime] = None
    next_watering_at: Optional[datetime] = None
    next_watering_local: Optional[str] = None
    overdue: bool = False
    notes: Optional[str] = None
    user_image_path: Optional[str] = None


class CollectionAddRequest(BaseModel):
    plant_id: int = Field(ge=1)


class WateringRequest(BaseModel):
    # ISO 8601; defaults to the server clock when omitted
    watered_at: Optional[str] = None


class WateringResponse(BaseModel):
    ok: bool = True
    last_watered: datetime
    next_watering_at: datetime


class NotesUpdateRequest(BaseModel):
    notes: Optional[str] = Field(default=None, max_length=4000)
