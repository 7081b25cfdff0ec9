from pydantic import Field
from typing import List, Optional
from datetime import datetime
from enum import Enum

from stepflow.schemas.base import CamelModel
from stepflow.schemas.step import Connection, Step

class WorkflowStatus(str, Enum):
    DRAFT = "draft"
    PASSED = "passed"
    FAILED = "failed"

class WorkflowBase(CamelModel):
    name: str = Field(min_length=1)

class WorkflowCreate(WorkflowBase):
    # status and userId sent by the client are ignored, the server assigns both
    steps: List[Step]
    connections: List[Connection]

class WorkflowUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1)
    steps: Optional[List[Step]] = None
    connections: Optional[List[Connection]] = None
    status: Optional[WorkflowStatus] = None

class WorkflowInDB(WorkflowBase):
    id: int
    user_id: int
    steps: List[Step]
    connections: List[Connection]
    status: WorkflowStatus
    created_at: datetime
    last_run_at: Optional[datetime] = None

class WorkflowValidationResult(CamelModel):
    valid: bool
    errors: List[str] = []
