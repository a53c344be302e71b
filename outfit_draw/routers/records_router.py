from fastapi import APIRouter, Depends

from outfit_draw.dependencies import get_current_user_id, get_record_store
from outfit_draw.records import RecordStore
from outfit_draw.schemas import RecordCreate, RecordResponse, SuccessResponse

router = APIRouter(prefix="/api/records", tags=["records"])


@router.get("", response_model=list[RecordResponse])
async def list_records(
    user_id: int = Depends(get_current_user_id),
    store: RecordStore = Depends(get_record_store),
):
    """Records owned by the session user, newest first."""
    return store.list(user_id)


@router.post("", response_model=SuccessResponse)
async def create_record(
    payload: RecordCreate,
    user_id: int = Depends(get_current_user_id),
    store: RecordStore = Depends(get_record_store),
):
    store.create(
        user_id,
        date=payload.date,
        style=payload.style,
        image=payload.image,
        note=payload.note,
    )
    return SuccessResponse()


@router.delete("/{record_id}", response_model=SuccessResponse)
async def delete_record(
    record_id: str,
    user_id: int = Depends(get_current_user_id),
    store: RecordStore = Depends(get_record_store),
):
    """
    Delete one of the caller's records.

    Unknown, malformed and foreign ids succeed without effect.
    """
    store.delete(user_id, record_id)
    return SuccessResponse()
