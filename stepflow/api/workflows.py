from fastapi import APIRouter, Depends, Response, status
from typing import List

from stepflow.api.deps import get_current_user_id, get_store
from stepflow.core.exceptions import NotFoundError
from stepflow.schemas.workflow import WorkflowCreate, WorkflowUpdate, WorkflowInDB, WorkflowValidationResult
from stepflow.services.store import MemoryStore
from stepflow.services.workflow_service import WorkflowService

router = APIRouter()

@router.get("", response_model=List[WorkflowInDB])
async def get_workflows(
    user_id: int = Depends(get_current_user_id),
    store: MemoryStore = Depends(get_store)
):
    return WorkflowService.get_all(store, user_id)

@router.post("", response_model=WorkflowInDB, status_code=status.HTTP_201_CREATED)
async def create_workflow(
    workflow_in: WorkflowCreate,
    user_id: int = Depends(get_current_user_id),
    store: MemoryStore = Depends(get_store)
):
    return WorkflowService.create(store, user_id, workflow_in)

@router.get("/{workflow_id}", response_model=WorkflowInDB)
async def get_workflow(
    workflow_id: int,
    store: MemoryStore = Depends(get_store)
):
    workflow = WorkflowService.get_by_id(store, workflow_id)
    if not workflow:
        raise NotFoundError("Workflow not found")
    return workflow

@router.put("/{workflow_id}", response_model=WorkflowInDB)
async def update_workflow(
    workflow_id: int,
    workflow_in: WorkflowUpdate,
    store: MemoryStore = Depends(get_store)
):
    workflow = WorkflowService.update(store, workflow_id, workflow_in)
    if not workflow:
        raise NotFoundError("Workflow not found")
    return workflow

@router.delete("/{workflow_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_workflow(
    workflow_id: int,
    store: MemoryStore = Depends(get_store)
):
    success = WorkflowService.delete(store, workflow_id)
    if not success:
        raise NotFoundError("Workflow not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.post("/{workflow_id}/validate", response_model=WorkflowValidationResult)
async def validate_workflow(
    workflow_id: int,
    store: MemoryStore = Depends(get_store)
):
    errors = WorkflowService.validate(store, workflow_id)
    if errors is None:
        raise NotFoundError("Workflow not found")
    return {"valid": len(errors) == 0, "errors": errors}
