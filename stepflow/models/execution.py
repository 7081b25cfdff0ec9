from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict


@dataclass
class WorkflowExecution:
    id: int
    workflow_id: int
    status: str  # passed|failed
    executed_at: datetime
    logs: Dict[str, Any] = field(default_factory=dict)
