"""Reminder lifecycle: create, complete, delete and list care reminders.

Every operation validates its input and checks plant ownership before it
touches the store, and each mutation is a single commit. Only the latest
completion is kept; completing twice on the same day leaves the same state.
"""
from datetime import date
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from app.core.clock import Clock
from app.core.exceptions import InvalidInput, PlantNotFound, ReminderNotFound
from app.models.reminder import Reminder
from app.services import reminder_store
from app.services.scheduling import ReminderStatus, classify, compute_next_due, validate_frequency

logger = logging.getLogger(__name__)


def _require_owned_plant(db: Session, plant_id: int, user_id: int) -> None:
    if reminder_store.get_plant_owner(db, plant_id) != user_id:
        raise PlantNotFound(plant_id)


def _next_due(base: date, frequency_days: int) -> date:
    try:
        return compute_next_due(base, frequency_days)
    except OverflowError:
        raise InvalidInput(f"Next due date after {base} is past the last supported date.")


def _require_owned_reminder(db: Session, reminder_id: int, user_id: int) -> Reminder:
    reminder = reminder_store.get_owned_reminder(db, reminder_id, user_id)
    if reminder is None:
        raise ReminderNotFound(reminder_id)
    return reminder


def create_reminder(
    db: Session,
    user_id: int,
    plant_id: int,
    type: str,
    frequency_days: int,
    clock: Clock,
    last_completed: Optional[date] = None,
) -> Reminder:
    """Schedule a recurring task on one of the user's plants."""
    label = (type or "").strip()
    if not label:
        raise InvalidInput("Reminder type is required.")
    frequency_days = validate_frequency(frequency_days)

    _require_owned_plant(db, plant_id, user_id)

    base = last_completed or clock.today()
    reminder = Reminder(
        plant_id=plant_id,
        type=label,
        frequency_days=frequency_days,
        last_completed=base,
        next_due=_next_due(base, frequency_days),
    )
    reminder = reminder_store.insert(db, reminder)
    logger.info(
        f"Reminder {reminder.id} ({label}) set on plant {plant_id}, every {frequency_days} days, next due {reminder.next_due}"
    )
    return reminder


def complete_reminder(
    db: Session,
    user_id: int,
    reminder_id: int,
    clock: Clock,
    completion_date: Optional[date] = None,
) -> Reminder:
    """Record a completion and roll next_due forward from it."""
    reminder = _require_owned_reminder(db, reminder_id, user_id)
    frequency_days = validate_frequency(reminder.frequency_days)

    done_on = completion_date or clock.today()
    next_due = _next_due(done_on, frequency_days)
    reminder.last_completed = done_on
    reminder.next_due = next_due
    reminder_store.commit(db, "complete reminder")
    db.refresh(reminder)

    logger.info(f"Reminder {reminder_id} completed on {done_on}, next due {reminder.next_due}")
    return reminder


def delete_reminder(db: Session, user_id: int, reminder_id: int) -> None:
    if reminder_store.delete_owned(db, reminder_id, user_id) == 0:
        raise ReminderNotFound(reminder_id)
    logger.info(f"Reminder {reminder_id} deleted")


def get_reminder(db: Session, user_id: int, reminder_id: int) -> Reminder:
    return _require_owned_reminder(db, reminder_id, user_id)


def list_reminders_for_plant(db: Session, user_id: int, plant_id: int) -> List[Reminder]:
    """All reminders on a plant, soonest first, ties broken by type."""
    _require_owned_plant(db, plant_id, user_id)
    return reminder_store.list_by_plant(db, plant_id)


def reminder_status(reminder: Reminder, clock: Clock) -> ReminderStatus:
    return classify(reminder.next_due, clock.today())
