from sqlalchemy import Column, Integer, String, Date, DateTime, Text, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.core.database import Base


class Plant(Base):
    __tablename__ = "plants"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    # Identity
    name = Column(String(200), nullable=False)
    scientific_name = Column(String(200))
    common_name = Column(String(200))
    image_url = Column(Text)
    notes = Column(Text)

    # Raw Plant.id response and Trefle reference
    identification_data = Column(Text)  # JSON string
    trefle_id = Column(String(50))

    # Care profile
    light_needs = Column(String(100))
    last_watered = Column(Date)
    fertilizer_frequency = Column(String(100))

    date_added = Column(DateTime(timezone=True), server_default=func.now())

    owner = relationship("User", back_populates="plants")
    reminders = relationship("Reminder", back_populates="plant", cascade="all, delete-orphan")
    photos = relationship("GrowthPhoto", back_populates="plant", cascade="all, delete-orphan")
