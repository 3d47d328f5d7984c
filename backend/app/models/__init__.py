from app.models.user import User
from app.models.plant import Plant
from app.models.reminder import Reminder
from app.models.photo import GrowthPhoto

__all__ = ["User", "Plant", "Reminder", "GrowthPhoto"]
