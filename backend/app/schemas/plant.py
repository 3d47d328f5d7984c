from pydantic import BaseModel
from datetime import date, datetime
from typing import Optional


class PlantBase(BaseModel):
    name: str
    scientific_name: Optional[str] = None
    common_name: Optional[str] = None
    notes: Optional[str] = None


class PlantCreate(PlantBase):
    image_url: Optional[str] = None
    trefle_id: Optional[str] = None
    identification_data: Optional[str] = None


class PlantUpdate(BaseModel):
    name: Optional[str] = None
    scientific_name: Optional[str] = None
    common_name: Optional[str] = None
    notes: Optional[str] = None
    light_needs: Optional[str] = None
    last_watered: Optional[date] = None
    fertilizer_frequency: Optional[str] = None


class PlantResponse(PlantBase):
    id: int
    user_id: int
    image_url: Optional[str] = None
    trefle_id: Optional[str] = None
    identification_data: Optional[str] = None
    light_needs: Optional[str] = None
    last_watered: Optional[date] = None
    fertilizer_frequency: Optional[str] = None
    date_added: Optional[datetime] = None

    class Config:
        from_attributes = True


class PlantCreated(BaseModel):
    message: str
    plant_id: int
