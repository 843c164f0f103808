import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status
from typing import List

from app.schemas.child_schema import ChildCreate, ChildUpdate, ChildResponse
from app.dependencies.storage import get_storage
from app.storage.sleep_storage import SleepStorage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/children", tags=["children"])


# GET: lista todas as crianças
@router.get("", response_model=List[ChildResponse])
async def list_children(storage: SleepStorage = Depends(get_storage)):
    return storage.list_children()


@router.get("/{child_id}", response_model=ChildResponse)
async def get_child(child_id: int, storage: SleepStorage = Depends(get_storage)):
    child = storage.get_child(child_id)
    if not child:
        raise HTTPException(status_code=404, detail="Child not found")
    return child


# POST: cadastra nova criança
@router.post("", response_model=ChildResponse, status_code=status.HTTP_201_CREATED)
async def create_child(child: ChildCreate, storage: SleepStorage = Depends(get_storage)):
    new_child = storage.create_child(child)
    logger.info("Criança %s cadastrada", new_child.id)
    return new_child


# PUT: atualiza só os campos enviados
@router.put("/{child_id}", response_model=ChildResponse)
async def update_child(
    child_id: int,
    child_data: ChildUpdate,
    storage: SleepStorage = Depends(get_storage)
):
    child = storage.update_child(child_id, child_data)
    if not child:
        raise HTTPException(status_code=404, detail="Child not found")
    return child


# DELETE: remove a criança (registros de sono continuam acessíveis)
@router.delete("/{child_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_child(child_id: int, storage: SleepStorage = Depends(get_storage)):
    if not storage.delete_child(child_id):
        raise HTTPException(status_code=404, detail="Child not found")
    logger.info("Criança %s removida", child_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
