from fastapi import APIRouter, Depends, status

from stepflow.api.deps import get_store
from stepflow.schemas.user import UserCreate, UserPublic
from stepflow.services.store import MemoryStore
from stepflow.services.user_service import UserService

router = APIRouter()

@router.post("", response_model=UserPublic, status_code=status.HTTP_201_CREATED)
async def create_user(
    user_in: UserCreate,
    store: MemoryStore = Depends(get_store)
):
    return UserService.create(store, user_in)
