from fastapi import APIRouter, Body, Depends, Path, status
from sqlalchemy.orm import Session
from typing import List, Optional

from app.core.clock import Clock, get_clock
from app.core.database import MAX_ID, get_db
from app.core.security import get_current_user_id
from app.models.reminder import Reminder
from app.schemas.reminder import (
    DueTaskResponse,
    ReminderComplete,
    ReminderCompleted,
    ReminderCreate,
    ReminderCreated,
    ReminderResponse,
)
from app.services import reminder_engine
from app.services.due_tasks import list_due_tasks

router = APIRouter()


def to_response(reminder: Reminder, clock: Clock) -> ReminderResponse:
    return ReminderResponse(
        id=reminder.id,
        plant_id=reminder.plant_id,
        type=reminder.type,
        frequency_days=reminder.frequency_days,
        last_completed=reminder.last_completed,
        next_due=reminder.next_due,
        status=reminder_engine.reminder_status(reminder, clock),
    )


@router.post("", response_model=ReminderCreated, status_code=status.HTTP_201_CREATED)
def create_reminder(
    reminder: ReminderCreate,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    """Set a recurring care reminder on one of the user's plants."""
    created = reminder_engine.create_reminder(
        db,
        user_id=user_id,
        plant_id=reminder.plant_id,
        type=reminder.type,
        frequency_days=reminder.frequency_days,
        clock=clock,
        last_completed=reminder.last_completed,
    )
    return ReminderCreated(
        message="Reminder set successfully!",
        reminder_id=created.id,
        next_due=created.next_due,
    )


@router.get("/due", response_model=List[DueTaskResponse])
def get_due_reminders(
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    """Get every overdue or due-today reminder across the user's plants."""
    return list_due_tasks(db, user_id, clock)


@router.get("/{reminder_id}", response_model=ReminderResponse)
def get_reminder(
    reminder_id: int = Path(le=MAX_ID),
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    """Get a specific reminder."""
    return to_response(reminder_engine.get_reminder(db, user_id, reminder_id), clock)


@router.post("/{reminder_id}/complete", response_model=ReminderCompleted)
def complete_reminder(
    reminder_id: int = Path(le=MAX_ID),
    body: Optional[ReminderComplete] = Body(default=None),
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    """Mark a reminder as done and roll its next due date forward."""
    completed = reminder_engine.complete_reminder(
        db,
        user_id=user_id,
        reminder_id=reminder_id,
        clock=clock,
        completion_date=body.completion_date if body else None,
    )
    return ReminderCompleted(
        message="Reminder completed and next due date updated.",
        reminder_id=completed.id,
        last_completed=completed.last_completed,
        next_due=completed.next_due,
    )


@router.delete("/{reminder_id}")
def delete_reminder(
    reminder_id: int = Path(le=MAX_ID),
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Delete a reminder."""
    reminder_engine.delete_reminder(db, user_id, reminder_id)
    return {"message": "Reminder deleted successfully."}
