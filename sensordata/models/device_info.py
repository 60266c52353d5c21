from sqlalchemy import Column, Integer, String
from sensordata.database import Base

class DeviceInfo(Base):
    __tablename__ = "device_info"
    
    chip_id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String, nullable=True)
    location = Column(String, nullable=True)
