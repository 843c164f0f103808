from fastapi import Depends
from sqlalchemy.orm import Session

from config.database import get_db
from app.storage.sleep_storage import SleepStorage


async def get_storage(db: Session = Depends(get_db)) -> SleepStorage:
    return SleepStorage(db)
