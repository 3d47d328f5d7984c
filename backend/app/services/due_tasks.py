"""Cross-plant view of the care tasks a user should do now."""
from dataclasses import dataclass
from datetime import date
from typing import List

from sqlalchemy.orm import Session

from app.core.clock import Clock
from app.services import reminder_store
from app.services.scheduling import ReminderStatus, classify


@dataclass(frozen=True)
class DueTask:
    reminder_id: int
    plant_id: int
    type: str
    next_due: date
    frequency_days: int
    plant_name: str
    status: ReminderStatus


def list_due_tasks(db: Session, user_id: int, clock: Clock) -> List[DueTask]:
    """Overdue and due-today reminders across all of the user's plants, most overdue first.

    An empty list means the user is all caught up.
    """
    today = clock.today()
    return [
        DueTask(
            reminder_id=reminder.id,
            plant_id=reminder.plant_id,
            type=reminder.type,
            next_due=reminder.next_due,
            frequency_days=reminder.frequency_days,
            plant_name=plant_name,
            status=classify(reminder.next_due, today),
        )
        for reminder, plant_name in reminder_store.list_due_for_user(db, user_id, today)
    ]
