from pydantic import BaseModel, Field, StrictInt
from datetime import date
from typing import Optional

from app.core.database import MAX_ID
from app.services.scheduling import ReminderStatus


class ReminderBase(BaseModel):
    type: str  # water, feed, mist, ...
    # Strict so JSON true or "7" is rejected rather than coerced
    frequency_days: StrictInt


class ReminderCreate(ReminderBase):
    plant_id: int = Field(le=MAX_ID)
    last_completed: Optional[date] = None


class ReminderComplete(BaseModel):
    completion_date: Optional[date] = None


class ReminderResponse(ReminderBase):
    id: int
    plant_id: int
    last_completed: date
    next_due: date
    status: ReminderStatus

    class Config:
        from_attributes = True


class ReminderCreated(BaseModel):
    message: str
    reminder_id: int
    next_due: date


class ReminderCompleted(BaseModel):
    message: str
    reminder_id: int
    last_completed: date
    next_due: date


class DueTaskResponse(BaseModel):
    reminder_id: int
    plant_id: int
    type: str
    next_due: date
    frequency_days: int
    plant_name: str
    status: ReminderStatus

    class Config:
        from_attributes = True
