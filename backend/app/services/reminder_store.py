"""Persistence for reminders.

Queries that take a ``user_id`` resolve ownership by joining through the
owning plant, so a reminder on another user's plant behaves exactly like a
missing one.
"""
from datetime import date
import logging
from typing import List, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import StoreFailure
from app.models.plant import Plant
from app.models.reminder import Reminder

logger = logging.getLogger(__name__)


def get_plant_owner(db: Session, plant_id: int) -> Optional[int]:
    """Owning user id of a plant, or None when the plant does not exist."""
    row = db.query(Plant.user_id).filter(Plant.id == plant_id).first()
    return row[0] if row else None


def get_owned_reminder(db: Session, reminder_id: int, user_id: int) -> Optional[Reminder]:
    return (
        db.query(Reminder)
        .join(Plant, Reminder.plant_id == Plant.id)
        .filter(Reminder.id == reminder_id, Plant.user_id == user_id)
        .first()
    )


def list_by_plant(db: Session, plant_id: int) -> List[Reminder]:
    return (
        db.query(Reminder)
        .filter(Reminder.plant_id == plant_id)
        .order_by(Reminder.next_due.asc(), Reminder.type.asc(), Reminder.id.asc())
        .all()
    )


def list_due_for_user(db: Session, user_id: int, today: date) -> List[Tuple[Reminder, str]]:
    """Reminders on the user's plants with next_due on or before today, with plant names."""
    return (
        db.query(Reminder, Plant.name)
        .join(Plant, Reminder.plant_id == Plant.id)
        .filter(Plant.user_id == user_id, Reminder.next_due <= today)
        .order_by(Reminder.next_due.asc(), Reminder.type.asc(), Reminder.id.asc())
        .all()
    )


def insert(db: Session, reminder: Reminder) -> Reminder:
    db.add(reminder)
    commit(db, "insert reminder")
    db.refresh(reminder)
    return reminder


def delete_owned(db: Session, reminder_id: int, user_id: int) -> int:
    """Delete the reminder if the user owns it. Returns the number of rows removed."""
    owned_plants = select(Plant.id).where(Plant.user_id == user_id)
    deleted = (
        db.query(Reminder)
        .filter(Reminder.id == reminder_id, Reminder.plant_id.in_(owned_plants))
        .delete(synchronize_session=False)
    )
    commit(db, "delete reminder")
    return deleted


def commit(db: Session, action: str) -> None:
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to {action}: {e}")
        raise StoreFailure(f"Failed to {action}.") from e
