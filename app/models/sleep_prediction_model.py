# app/models/sleep_prediction_model.py

from datetime import datetime

from sqlalchemy import Column, Integer, Float, DateTime
from config.database import Base


class SleepPrediction(Base):
    __tablename__ = "sleep_predictions"

    id = Column(Integer, primary_key=True)
    child_id = Column(Integer, index=True, nullable=False)
    predicted_time = Column(DateTime, nullable=False)
    predicted_duration = Column(Integer, nullable=False)  # minutos
    confidence = Column(Float, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.now)
