# app/models/sleep_record_model.py
from sqlalchemy import Column, Integer, String, Boolean, DateTime
from config.database import Base


class SleepRecord(Base):
    __tablename__ = "sleep_records"

    id = Column(Integer, primary_key=True, index=True)
    # Sem FK: apagar a criança não remove os registros
    child_id = Column(Integer, index=True, nullable=False)
    start_time = Column(DateTime, nullable=False)
    end_time = Column(DateTime, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    quality = Column(String(20), nullable=True)
