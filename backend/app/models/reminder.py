from sqlalchemy import Column, Integer, String, Date, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from app.core.database import Base


class Reminder(Base):
    __tablename__ = "reminders"
    __table_args__ = (
        CheckConstraint("frequency_days > 0", name="ck_reminders_frequency_positive"),
    )

    id = Column(Integer, primary_key=True, index=True)
    plant_id = Column(Integer, ForeignKey("plants.id", ondelete="CASCADE"), nullable=False, index=True)

    type = Column(String(100), nullable=False)  # water, feed, mist, ...
    frequency_days = Column(Integer, nullable=False)

    # next_due is always last_completed + frequency_days; both are written together
    last_completed = Column(Date, nullable=False)
    next_due = Column(Date, nullable=False, index=True)

    plant = relationship("Plant", back_populates="reminders")
