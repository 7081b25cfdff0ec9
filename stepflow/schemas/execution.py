from typing import Any, Dict
from datetime import datetime
from enum import Enum

from stepflow.schemas.base import CamelModel

class ExecutionStatus(str, Enum):
    PASSED = "passed"
    FAILED = "failed"

class WorkflowExecution(CamelModel):
    id: int
    workflow_id: int
    status: ExecutionStatus
    logs: Dict[str, Any] = {}
    executed_at: datetime
