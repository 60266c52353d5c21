"""
Database initialization script
Creates the readings and device_info tables
"""
import logging

from sensordata.database import engine as default_engine
from sensordata.models import Base

logger = logging.getLogger(__name__)

def init_database(engine=None):
    """Create any missing tables; existing tables and rows are left alone"""
    engine = engine or default_engine
    Base.metadata.create_all(bind=engine)
    logger.info(f"Database schema ready ({', '.join(sorted(Base.metadata.tables))})")

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_database()
