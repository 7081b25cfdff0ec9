from typing import List, Optional

from stepflow.models import Workflow, WorkflowExecution
from stepflow.schemas.workflow import WorkflowCreate, WorkflowStatus, WorkflowUpdate
from stepflow.services.store import MemoryStore
from stepflow.services.validation_service import ValidationService

class WorkflowService:
    @staticmethod
    def get_all(store: MemoryStore, user_id: int) -> List[Workflow]:
        return store.get_workflows(user_id)

    @staticmethod
    def get_by_id(store: MemoryStore, workflow_id: int) -> Optional[Workflow]:
        return store.get_workflow(workflow_id)

    @staticmethod
    def create(store: MemoryStore, user_id: int, workflow_in: WorkflowCreate) -> Workflow:
        return store.create_workflow({
            "user_id": user_id,
            "name": workflow_in.name,
            "steps": [step.model_dump(mode="json", by_alias=True) for step in workflow_in.steps],
            "connections": [conn.model_dump(mode="json", by_alias=True) for conn in workflow_in.connections],
            "status": WorkflowStatus.DRAFT.value,
        })

    @staticmethod
    def update(store: MemoryStore, workflow_id: int, workflow_in: WorkflowUpdate) -> Optional[Workflow]:
        # Only fields the client actually sent take part in the merge
        update_data = {}
        if "name" in workflow_in.model_fields_set and workflow_in.name is not None:
            update_data["name"] = workflow_in.name
        if "steps" in workflow_in.model_fields_set and workflow_in.steps is not None:
            update_data["steps"] = [step.model_dump(mode="json", by_alias=True) for step in workflow_in.steps]
        if "connections" in workflow_in.model_fields_set and workflow_in.connections is not None:
            update_data["connections"] = [
                conn.model_dump(mode="json", by_alias=True) for conn in workflow_in.connections
            ]
        if "status" in workflow_in.model_fields_set and workflow_in.status is not None:
            update_data["status"] = workflow_in.status.value

        return store.update_workflow(workflow_id, update_data)

    @staticmethod
    def delete(store: MemoryStore, workflow_id: int) -> bool:
        return store.delete_workflow(workflow_id)

    @staticmethod
    def execute(store: MemoryStore, workflow_id: int) -> WorkflowExecution:
        return store.execute_workflow(workflow_id)

    @staticmethod
    def get_executions(store: MemoryStore, workflow_id: int) -> List[WorkflowExecution]:
        return store.get_workflow_executions(workflow_id)

    @staticmethod
    def validate(store: MemoryStore, workflow_id: int) -> Optional[List[str]]:
        workflow = store.get_workflow(workflow_id)
        if workflow is None:
            return None
        return ValidationService.validate_workflow(workflow.steps, workflow.connections)
