from sqlalchemy import Column, Integer, Date, Text, ForeignKey
from sqlalchemy.orm import relationship
from app.core.database import Base


class GrowthPhoto(Base):
    __tablename__ = "growth_photos"

    id = Column(Integer, primary_key=True, index=True)
    plant_id = Column(Integer, ForeignKey("plants.id", ondelete="CASCADE"), nullable=False, index=True)

    # URL into blob storage, or a data URI
    image_url = Column(Text, nullable=False)
    date_taken = Column(Date, nullable=False)
    notes = Column(Text)

    plant = relationship("Plant", back_populates="photos")
