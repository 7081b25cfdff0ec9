from fastapi import APIRouter, Depends, HTTPException, status
from typing import List

from stepflow.api.deps import get_store
from stepflow.core.exceptions import StepflowError
from stepflow.core.logging import get_logger
from stepflow.schemas.execution import WorkflowExecution as WorkflowExecutionSchema
from stepflow.services.store import MemoryStore
from stepflow.services.workflow_service import WorkflowService

logger = get_logger("api.executions")

router = APIRouter()

@router.post("/{workflow_id}/execute", response_model=WorkflowExecutionSchema)
async def execute_workflow(
    workflow_id: int,
    store: MemoryStore = Depends(get_store)
):
    try:
        return WorkflowService.execute(store, workflow_id)
    except StepflowError as e:
        # Domain failures (e.g. unknown workflow) are reported as a bad request
        logger.warning(f"Execution of workflow {workflow_id} rejected: {e.message}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e

@router.get("/{workflow_id}/executions", response_model=List[WorkflowExecutionSchema])
async def get_workflow_executions(
    workflow_id: int,
    store: MemoryStore = Depends(get_store)
):
    return WorkflowService.get_executions(store, workflow_id)
