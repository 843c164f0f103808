# app/storage/sleep_storage.py

from datetime import datetime
from typing import List, Optional

from passlib.context import CryptContext
from sqlalchemy.orm import Session

from app.models.auth_models import User
from app.models.child_model import Child
from app.models.sleep_record_model import SleepRecord
from app.models.sleep_prediction_model import SleepPrediction
from app.schemas.auth_schema import UserCreate
from app.schemas.child_schema import ChildCreate, ChildUpdate
from app.schemas.sleep_record_schema import SleepRecordCreate, SleepRecordUpdate
from app.schemas.sleep_prediction_schema import SleepForecast

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


class SleepStorage:
    """
    Operações de leitura/escrita sobre usuários, crianças, registros de sono
    e previsões. Uma instância por requisição, em cima da sessão do banco.
    """

    def __init__(self, db: Session):
        self.db = db

    # ------------------ usuários ------------------

    def get_user(self, user_id: int) -> Optional[User]:
        return self.db.get(User, user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        return self.db.query(User).filter_by(username=username).first()

    def create_user(self, data: UserCreate) -> User:
        user = User(
            username=data.username,
            password_hash=pwd_context.hash(data.password),
        )
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def verify_password(self, user: User, password: str) -> bool:
        return pwd_context.verify(password, user.password_hash)

    # ------------------ crianças ------------------

    def get_child(self, child_id: int) -> Optional[Child]:
        return self.db.get(Child, child_id)

    def list_children(self) -> List[Child]:
        return self.db.query(Child).order_by(Child.id.asc()).all()

    def create_child(self, data: ChildCreate) -> Child:
        child = Child(**data.model_dump())
        self.db.add(child)
        self.db.commit()
        self.db.refresh(child)
        return child

    def update_child(self, child_id: int, data: ChildUpdate) -> Optional[Child]:
        child = self.get_child(child_id)
        if not child:
            return None

        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(child, field, value)

        self.db.commit()
        self.db.refresh(child)
        return child

    def delete_child(self, child_id: int) -> bool:
        # Registros e previsões da criança ficam no banco (sem cascade)
        child = self.get_child(child_id)
        if not child:
            return False
        self.db.delete(child)
        self.db.commit()
        return True

    # ------------------ registros de sono ------------------

    def get_sleep_record(self, record_id: int) -> Optional[SleepRecord]:
        return self.db.get(SleepRecord, record_id)

    def list_sleep_records(self, child_id: int) -> List[SleepRecord]:
        return (
            self.db.query(SleepRecord)
            .filter_by(child_id=child_id)
            .order_by(SleepRecord.start_time.desc(), SleepRecord.id.desc())
            .all()
        )

    def get_active_sleep_record(self, child_id: int) -> Optional[SleepRecord]:
        # Assume no máximo um ativo por criança; se houver mais, vale o primeiro
        return (
            self.db.query(SleepRecord)
            .filter_by(child_id=child_id, is_active=True)
            .order_by(SleepRecord.id.asc())
            .first()
        )

    def create_sleep_record(self, data: SleepRecordCreate) -> SleepRecord:
        record = SleepRecord(**data.model_dump())
        self.db.add(record)
        self.db.commit()
        self.db.refresh(record)
        return record

    def update_sleep_record(self, record_id: int, data: SleepRecordUpdate) -> Optional[SleepRecord]:
        record = self.get_sleep_record(record_id)
        if not record:
            return None

        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(record, field, value)

        self.db.commit()
        self.db.refresh(record)
        return record

    # ------------------ previsões ------------------

    def get_sleep_prediction(self, prediction_id: int) -> Optional[SleepPrediction]:
        return self.db.get(SleepPrediction, prediction_id)

    def get_latest_sleep_prediction(self, child_id: int) -> Optional[SleepPrediction]:
        return (
            self.db.query(SleepPrediction)
            .filter_by(child_id=child_id)
            .order_by(SleepPrediction.created_at.desc(), SleepPrediction.id.desc())
            .first()
        )

    def create_sleep_prediction(self, child_id: int, forecast: SleepForecast) -> SleepPrediction:
        prediction = SleepPrediction(
            child_id=child_id,
            predicted_time=forecast.next_sleep_time,
            predicted_duration=forecast.predicted_duration,
            confidence=forecast.confidence,
            created_at=datetime.now(),
        )
        self.db.add(prediction)
        self.db.commit()
        self.db.refresh(prediction)
        return prediction
