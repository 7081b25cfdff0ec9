"""In-process entity store for users, workflows and workflow executions.

The store owns all state and the id counters. One instance is created with the
application and handed to request handlers; nothing here is module global.
State lives for the lifetime of the process only.

There is no locking: concurrent requests interleave freely and the last writer
wins. An execute racing a delete either sees the workflow or fails with
``NotFoundError``.
"""
from __future__ import annotations

import random
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from stepflow.core.exceptions import NotFoundError
from stepflow.core.logging import get_logger
from stepflow.models import User, Workflow, WorkflowExecution

logger = get_logger("store")

DEFAULT_SUCCESS_RATE = 0.8
SUCCESS_MESSAGE = "Workflow executed successfully"
FAILURE_MESSAGE = "Workflow execution failed"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MemoryStore:
    def __init__(
        self,
        *,
        success_rate: float = DEFAULT_SUCCESS_RATE,
        rng: Optional[random.Random] = None,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        if not 0.0 <= success_rate <= 1.0:
            raise ValueError(f"success_rate must be within [0, 1], got {success_rate}")
        self._success_rate = success_rate
        self._rng = rng or random.Random()
        self._clock = clock
        self.clear()

    def clear(self) -> None:
        """Drop every record and restart the id sequences."""
        self._users: Dict[int, User] = {}
        self._workflows: Dict[int, Workflow] = {}
        self._executions: Dict[int, WorkflowExecution] = {}
        self._user_id_counter = 1
        self._workflow_id_counter = 1
        self._execution_id_counter = 1

    # Users

    def create_user(self, data: Dict[str, Any]) -> User:
        """Store a new user. Uniqueness of username/email is the caller's job."""
        user_id = self._user_id_counter
        self._user_id_counter += 1
        user = User(id=user_id, username=data["username"], email=data["email"], password=data["password"])
        self._users[user_id] = user
        logger.info(f"Created user {user_id}", extra={"extra_fields": {"user_id": user_id}})
        return user

    def get_user(self, user_id: int) -> Optional[User]:
        return self._users.get(user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        return next((u for u in self._users.values() if u.username == username), None)

    def get_user_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self._users.values() if u.email == email), None)

    # Workflows

    def get_workflows(self, user_id: int) -> List[Workflow]:
        return [w for w in self._workflows.values() if w.user_id == user_id]

    def get_workflow(self, workflow_id: int) -> Optional[Workflow]:
        return self._workflows.get(workflow_id)

    def create_workflow(self, data: Dict[str, Any]) -> Workflow:
        workflow_id = self._workflow_id_counter
        self._workflow_id_counter += 1
        workflow = Workflow(
            id=workflow_id,
            user_id=data["user_id"],
            name=data["name"],
            status=data["status"],
            steps=list(data.get("steps", [])),
            connections=list(data.get("connections", [])),
            created_at=self._clock(),
            last_run_at=None,
        )
        self._workflows[workflow_id] = workflow
        logger.info(
            f"Created workflow {workflow_id}",
            extra={"extra_fields": {"workflow_id": workflow_id, "user_id": workflow.user_id}},
        )
        return workflow

    def update_workflow(self, workflow_id: int, partial: Dict[str, Any]) -> Optional[Workflow]:
        """
        Shallow-merge ``partial`` over the stored workflow.
        Fields missing from ``partial`` keep their previous value.
        """
        existing = self._workflows.get(workflow_id)
        if existing is None:
            return None

        # id, owner and creation time are fixed once the record exists
        changes = {k: v for k, v in partial.items() if k not in ("id", "user_id", "created_at")}
        updated = replace(existing, **changes)
        self._workflows[workflow_id] = updated
        logger.info(
            f"Updated workflow {workflow_id}",
            extra={"extra_fields": {"workflow_id": workflow_id, "fields": sorted(changes)}},
        )
        return updated

    def delete_workflow(self, workflow_id: int) -> bool:
        removed = self._workflows.pop(workflow_id, None)
        if removed is not None:
            logger.info(f"Deleted workflow {workflow_id}", extra={"extra_fields": {"workflow_id": workflow_id}})
        return removed is not None

    # Executions

    def execute_workflow(self, workflow_id: int) -> WorkflowExecution:
        """
        Record one simulated run of a workflow.

        The outcome is a random draw (``passed`` with probability
        ``success_rate``); the steps are not interpreted. The workflow's
        status and last run time are set to match the new execution record.
        """
        workflow = self._workflows.get(workflow_id)
        if workflow is None:
            raise NotFoundError("Workflow not found")

        succeeded = self._rng.random() < self._success_rate
        status = "passed" if succeeded else "failed"
        now = self._clock()

        self._workflows[workflow_id] = replace(workflow, status=status, last_run_at=now)

        execution_id = self._execution_id_counter
        self._execution_id_counter += 1
        execution = WorkflowExecution(
            id=execution_id,
            workflow_id=workflow_id,
            status=status,
            logs={"message": SUCCESS_MESSAGE if succeeded else FAILURE_MESSAGE},
            executed_at=now,
        )
        self._executions[execution_id] = execution
        logger.info(
            f"Executed workflow {workflow_id}: {status}",
            extra={"extra_fields": {"workflow_id": workflow_id, "execution_id": execution_id, "status": status}},
        )
        return execution

    def get_workflow_executions(self, workflow_id: int) -> List[WorkflowExecution]:
        return [e for e in self._executions.values() if e.workflow_id == workflow_id]
