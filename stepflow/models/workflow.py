from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional


@dataclass
class Workflow:
    id: int
    user_id: int
    name: str
    status: str  # draft|passed|failed
    created_at: datetime
    # Steps and connections are kept as the JSON documents the editor sent
    steps: List[Dict[str, Any]] = field(default_factory=list)
    connections: List[Dict[str, Any]] = field(default_factory=list)
    last_run_at: Optional[datetime] = None
