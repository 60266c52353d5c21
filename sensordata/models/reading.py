from sqlalchemy import Column, Integer, DateTime, Float, Index
from sensordata.database import Base
from sensordata.utils.timestamps import utcnow

class Reading(Base):
    __tablename__ = "readings"
    
    id = Column(Integer, primary_key=True, index=True)
    chip_id = Column(Integer, nullable=False, index=True)  # no foreign key: unregistered chips may report
    temperature = Column(Float, nullable=False)
    humidity = Column(Float, nullable=False)
    pressure = Column(Float, nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow)

    __table_args__ = (
        Index("ix_readings_chip_id_created_at", "chip_id", "created_at"),
    )
