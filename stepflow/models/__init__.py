from .user import User
from .workflow import Workflow
from .execution import WorkflowExecution

__all__ = ["User", "Workflow", "WorkflowExecution"]
