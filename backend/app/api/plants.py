from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session
from typing import List
import logging

from app.api.reminders import to_response
from app.core.clock import Clock, get_clock
from app.core.database import MAX_ID, get_db
from app.core.exceptions import InvalidInput, PlantNotFound
from app.core.security import get_current_user_id
from app.models.photo import GrowthPhoto
from app.models.plant import Plant
from app.schemas.photo import PhotoCreate, PhotoCreated, PhotoResponse
from app.schemas.plant import PlantCreate, PlantCreated, PlantResponse, PlantUpdate
from app.schemas.reminder import ReminderResponse
from app.services import reminder_engine
from app.services.reminder_store import commit

logger = logging.getLogger(__name__)

router = APIRouter()


def get_owned_plant(db: Session, plant_id: int, user_id: int) -> Plant:
    plant = db.query(Plant).filter(Plant.id == plant_id, Plant.user_id == user_id).first()
    if not plant:
        raise PlantNotFound(plant_id)
    return plant


@router.get("", response_model=List[PlantResponse])
def get_plants(user_id: int = Depends(get_current_user_id), db: Session = Depends(get_db)):
    """Get the user's plant collection, newest first."""
    return (
        db.query(Plant)
        .filter(Plant.user_id == user_id)
        .order_by(Plant.date_added.desc(), Plant.id.desc())
        .all()
    )


@router.get("/{plant_id}", response_model=PlantResponse)
def get_plant(plant_id: int = Path(le=MAX_ID), user_id: int = Depends(get_current_user_id), db: Session = Depends(get_db)):
    """Get a single plant."""
    return get_owned_plant(db, plant_id, user_id)


@router.post("", response_model=PlantCreated, status_code=status.HTTP_201_CREATED)
def create_plant(
    plant: PlantCreate,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Save a plant to the user's collection."""
    if not plant.name.strip():
        raise InvalidInput("Plant name is required.")

    db_plant = Plant(user_id=user_id, **plant.model_dump())
    db.add(db_plant)
    commit(db, "save plant")
    db.refresh(db_plant)
    return PlantCreated(message="Plant added successfully!", plant_id=db_plant.id)


@router.patch("/{plant_id}", response_model=PlantResponse)
def update_plant(
    plant: PlantUpdate,
    plant_id: int = Path(le=MAX_ID),
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Update plant details; fields left out keep their current value."""
    db_plant = get_owned_plant(db, plant_id, user_id)

    update_data = plant.model_dump(exclude_unset=True, exclude_none=True)
    if "name" in update_data and not update_data["name"].strip():
        raise InvalidInput("Plant name cannot be blank.")

    for key, value in update_data.items():
        setattr(db_plant, key, value)

    commit(db, "update plant")
    db.refresh(db_plant)
    return db_plant


@router.delete("/{plant_id}")
def delete_plant(plant_id: int = Path(le=MAX_ID), user_id: int = Depends(get_current_user_id), db: Session = Depends(get_db)):
    """Delete a plant together with its reminders and growth photos."""
    db_plant = get_owned_plant(db, plant_id, user_id)
    db.delete(db_plant)
    commit(db, "delete plant")
    logger.info(f"Plant {plant_id} and its reminders and photos deleted")
    return {"message": "Plant and all associated data deleted successfully."}


@router.get("/{plant_id}/reminders", response_model=List[ReminderResponse])
def get_plant_reminders(
    plant_id: int = Path(le=MAX_ID),
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    """Get a plant's reminders ordered by next due date, then type."""
    reminders = reminder_engine.list_reminders_for_plant(db, user_id, plant_id)
    return [to_response(r, clock) for r in reminders]


@router.post("/{plant_id}/photos", response_model=PhotoCreated, status_code=status.HTTP_201_CREATED)
def add_photo(
    photo: PhotoCreate,
    plant_id: int = Path(le=MAX_ID),
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    """Add a growth photo, dated today."""
    if not photo.image_url.strip():
        raise InvalidInput("Image data is required.")
    get_owned_plant(db, plant_id, user_id)

    db_photo = GrowthPhoto(
        plant_id=plant_id,
        image_url=photo.image_url,
        notes=photo.notes,
        date_taken=clock.today(),
    )
    db.add(db_photo)
    commit(db, "add photo")
    db.refresh(db_photo)
    return PhotoCreated(message="Photo added successfully!", photo_id=db_photo.id)


@router.get("/{plant_id}/photos", response_model=List[PhotoResponse])
def get_photos(plant_id: int = Path(le=MAX_ID), user_id: int = Depends(get_current_user_id), db: Session = Depends(get_db)):
    """Get a plant's growth photos, most recent first."""
    get_owned_plant(db, plant_id, user_id)
    return (
        db.query(GrowthPhoto)
        .filter(GrowthPhoto.plant_id == plant_id)
        .order_by(GrowthPhoto.date_taken.desc(), GrowthPhoto.id.desc())
        .all()
    )
