from app.schemas.plant import PlantCreate, PlantUpdate, PlantResponse, PlantCreated
from app.schemas.reminder import (
    ReminderCreate, ReminderComplete, ReminderResponse,
    ReminderCreated, ReminderCompleted, DueTaskResponse,
)
from app.schemas.photo import PhotoCreate, PhotoResponse, PhotoCreated

__all__ = [
    "PlantCreate", "PlantUpdate", "PlantResponse", "PlantCreated",
    "ReminderCreate", "ReminderComplete", "ReminderResponse",
    "ReminderCreated", "ReminderCompleted", "DueTaskResponse",
    "PhotoCreate", "PhotoResponse", "PhotoCreated",
]
