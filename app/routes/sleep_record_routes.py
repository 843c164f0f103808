import logging

from fastapi import APIRouter, Depends, HTTPException, status
from typing import List

from app.schemas.sleep_record_schema import SleepRecordCreate, SleepRecordUpdate, SleepRecordResponse
from app.dependencies.storage import get_storage
from app.storage.sleep_storage import SleepStorage

logger = logging.getLogger(__name__)

router = APIRouter(tags=["sleep records"])


@router.get("/children/{child_id}/sleep-records", response_model=List[SleepRecordResponse])
async def list_sleep_records(child_id: int, storage: SleepStorage = Depends(get_storage)):
    """
    Registros da criança, do início de sono mais recente para o mais antigo.
    Não confere se a criança existe: registros órfãos continuam listáveis.
    """
    return storage.list_sleep_records(child_id)


@router.get("/children/{child_id}/active-sleep", response_model=SleepRecordResponse)
async def get_active_sleep(child_id: int, storage: SleepStorage = Depends(get_storage)):
    record = storage.get_active_sleep_record(child_id)
    if not record:
        raise HTTPException(status_code=404, detail="No active sleep record found")
    return record


@router.post("/sleep-records", response_model=SleepRecordResponse, status_code=status.HTTP_201_CREATED)
async def create_sleep_record(record: SleepRecordCreate, storage: SleepStorage = Depends(get_storage)):
    if not storage.get_child(record.child_id):
        raise HTTPException(status_code=404, detail="Child not found")

    # Não impede dois sonos ativos para a mesma criança
    new_record = storage.create_sleep_record(record)
    logger.info("Registro de sono %s criado para a criança %s", new_record.id, new_record.child_id)
    return new_record


@router.patch("/sleep-records/{record_id}", response_model=SleepRecordResponse)
async def update_sleep_record(
    record_id: int,
    record_update: SleepRecordUpdate,
    storage: SleepStorage = Depends(get_storage)
):
    record = storage.get_sleep_record(record_id)
    if not record:
        raise HTTPException(status_code=404, detail="Sleep record not found")

    if record_update.end_time is not None and record_update.end_time <= record.start_time:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="End time must be after start time"
        )

    return storage.update_sleep_record(record_id, record_update)
