from pydantic import BaseModel
from datetime import date
from typing import Optional


class PhotoCreate(BaseModel):
    image_url: str
    notes: Optional[str] = None


class PhotoResponse(BaseModel):
    id: int
    plant_id: int
    image_url: str
    date_taken: date
    notes: Optional[str] = None

    class Config:
        from_attributes = True


class PhotoCreated(BaseModel):
    message: str
    photo_id: int
