"""Editing model for a workflow's step graph.

Mirrors what the visual editor does before a save: it seeds the start and end
steps, lays new steps out in a vertical column, wires connections and finally
serializes everything to the persisted Step/Connection shape.
"""
import copy
import uuid
from typing import Any, Dict, List, Optional

from stepflow.schemas.step import StepType
from stepflow.services.validation_service import ValidationService

START_STEP_ID = "start"
END_STEP_ID = "end"
DEFAULT_START_POSITION = {"x": 250, "y": 50}
DEFAULT_END_POSITION = {"x": 250, "y": 400}
VERTICAL_STEP_SPACING = 120

# Keys the editor attaches to step data for its own use; never persisted
EDITOR_ONLY_KEYS = frozenset({"onDelete"})

_FIXED_STEP_IDS = (START_STEP_ID, END_STEP_ID)


class GraphEditor:
    def __init__(self, steps: Optional[List[Dict[str, Any]]] = None, connections: Optional[List[Dict[str, Any]]] = None):
        self.steps: List[Dict[str, Any]] = copy.deepcopy(steps or [])
        self.connections: List[Dict[str, Any]] = copy.deepcopy(connections or [])

    @classmethod
    def new(cls) -> "GraphEditor":
        """Blank canvas with the default start and end steps."""
        return cls(
            steps=[
                {"id": START_STEP_ID, "type": StepType.START.value, "position": dict(DEFAULT_START_POSITION), "data": {}},
                {"id": END_STEP_ID, "type": StepType.END.value, "position": dict(DEFAULT_END_POSITION), "data": {}},
            ]
        )

    @classmethod
    def from_workflow(cls, workflow: Dict[str, Any]) -> "GraphEditor":
        """Load a workflow document as returned by the API."""
        steps = workflow.get("steps") if isinstance(workflow.get("steps"), list) else []
        connections = workflow.get("connections") if isinstance(workflow.get("connections"), list) else []
        return cls(steps=steps, connections=connections)

    def get_step(self, step_id: str) -> Optional[Dict[str, Any]]:
        return next((s for s in self.steps if s["id"] == step_id), None)

    def _require_step(self, step_id: str) -> Dict[str, Any]:
        step = self.get_step(step_id)
        if step is None:
            raise ValueError(f"Unknown step: {step_id}")
        return step

    def add_step(self, step_type: str, data: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Append a step below the existing ones and push the end step down.
        """
        step_type = StepType(step_type).value
        if step_type in (StepType.START.value, StepType.END.value):
            raise ValueError(f"A workflow has a single {step_type} step, it cannot be added")

        step_count = len([s for s in self.steps if s["id"] not in _FIXED_STEP_IDS])
        step = {
            "id": str(uuid.uuid4()),
            "type": step_type,
            "position": {
                "x": DEFAULT_START_POSITION["x"],
                "y": DEFAULT_START_POSITION["y"] + VERTICAL_STEP_SPACING * (step_count + 1),
            },
            "data": dict(data or {}),
        }

        end_step = self.get_step(END_STEP_ID)
        if end_step is not None:
            end_step["position"] = {
                **end_step["position"],
                "y": DEFAULT_START_POSITION["y"] + VERTICAL_STEP_SPACING * (step_count + 2),
            }

        self.steps.append(step)
        return step

    def remove_step(self, step_id: str) -> None:
        if step_id in _FIXED_STEP_IDS:
            raise ValueError(f"The {step_id} step cannot be removed")
        self._require_step(step_id)
        self.steps = [s for s in self.steps if s["id"] != step_id]
        self.connections = [c for c in self.connections if c["source"] != step_id and c["target"] != step_id]

    def move_step(self, step_id: str, x: float, y: float) -> None:
        self._require_step(step_id)["position"] = {"x": x, "y": y}

    def update_step_data(self, step_id: str, **values: Any) -> Dict[str, Any]:
        step = self._require_step(step_id)
        step["data"] = {**(step.get("data") or {}), **values}
        return step

    def connect(
        self,
        source: str,
        target: str,
        source_handle: Optional[str] = None,
        target_handle: Optional[str] = None,
    ) -> Dict[str, Any]:
        self._require_step(source)
        self._require_step(target)

        connection_id = f"e{source}-{target}"
        existing = next((c for c in self.connections if c["id"] == connection_id), None)
        if existing is not None:
            return existing

        connection: Dict[str, Any] = {"id": connection_id, "source": source, "target": target}
        if source_handle:
            connection["sourceHandle"] = source_handle
        if target_handle:
            connection["targetHandle"] = target_handle
        self.connections.append(connection)
        return connection

    def disconnect(self, connection_id: str) -> bool:
        before = len(self.connections)
        self.connections = [c for c in self.connections if c["id"] != connection_id]
        return len(self.connections) < before

    def validate(self) -> List[str]:
        return ValidationService.validate_workflow(self.steps, self.connections)

    def to_payload(self, name: str) -> Dict[str, Any]:
        """Request body for creating or updating the workflow."""
        steps = [
            {
                "id": s["id"],
                "type": s["type"],
                "position": dict(s["position"]),
                "data": {k: v for k, v in (s.get("data") or {}).items() if k not in EDITOR_ONLY_KEYS},
            }
            for s in self.steps
        ]
        return {
            "name": name,
            "steps": steps,
            "connections": copy.deepcopy(self.connections),
        }
