import pytest

from stepflow.editor.graph import GraphEditor
from stepflow.schemas.workflow import WorkflowCreate


def test_new_canvas_has_start_and_end():
    editor = GraphEditor.new()
    assert [(s["id"], s["type"]) for s in editor.steps] == [("start", "start"), ("end", "end")]
    assert editor.get_step("start")["position"] == {"x": 250, "y": 50}
    assert editor.get_step("end")["position"] == {"x": 250, "y": 400}
    assert editor.connections == []


def test_add_step_stacks_vertically_and_moves_end():
    editor = GraphEditor.new()
    first = editor.add_step("api_call")
    second = editor.add_step("email", {"to": "ops@example.com"})

    assert first["position"] == {"x": 250, "y": 170}
    assert second["position"] == {"x": 250, "y": 290}
    assert second["data"] == {"to": "ops@example.com"}
    assert editor.get_step("end")["position"]["y"] == 410
    assert first["id"] != second["id"]


@pytest.mark.parametrize("step_type", ["start", "end", "webhook"])
def test_add_step_rejects_fixed_and_unknown_types(step_type):
    with pytest.raises(ValueError):
        GraphEditor.new().add_step(step_type)


def test_connect_builds_edge_ids_and_ignores_duplicates():
    editor = GraphEditor.new()
    edge = editor.connect("start", "end")
    assert edge == {"id": "estart-end", "source": "start", "target": "end"}
    assert editor.connect("start", "end") is edge
    assert len(editor.connections) == 1


def test_connect_unknown_step_fails():
    with pytest.raises(ValueError):
        GraphEditor.new().connect("start", "missing")


def test_connect_keeps_branch_handles():
    editor = GraphEditor.new()
    cond = editor.add_step("condition")
    edge = editor.connect(cond["id"], "end", source_handle="true")
    assert edge["sourceHandle"] == "true"


def test_remove_step_drops_its_connections():
    editor = GraphEditor.new()
    mid = editor.add_step("text_box")
    editor.connect("start", mid["id"])
    editor.connect(mid["id"], "end")
    editor.connect("start", "end")

    editor.remove_step(mid["id"])

    assert editor.get_step(mid["id"]) is None
    assert [c["id"] for c in editor.connections] == ["estart-end"]


def test_fixed_steps_cannot_be_removed():
    with pytest.raises(ValueError):
        GraphEditor.new().remove_step("start")


def test_disconnect():
    editor = GraphEditor.new()
    editor.connect("start", "end")
    assert editor.disconnect("estart-end") is True
    assert editor.disconnect("estart-end") is False


def test_validate_flags_unwired_graph():
    editor = GraphEditor.new()
    assert "Step 'end' cannot be reached from the start step" in editor.validate()
    editor.connect("start", "end")
    assert editor.validate() == []


def test_payload_drops_editor_only_keys_and_matches_schema():
    editor = GraphEditor.new()
    step = editor.add_step("api_call", {"endpoint": "https://api.example.com", "method": "GET"})
    editor.update_step_data(step["id"], onDelete="callback")
    editor.move_step(step["id"], 10, 20)
    editor.connect("start", step["id"])
    editor.connect(step["id"], "end")

    payload = editor.to_payload("Sync")

    api_step = next(s for s in payload["steps"] if s["id"] == step["id"])
    assert api_step["data"] == {"endpoint": "https://api.example.com", "method": "GET"}
    assert api_step["position"] == {"x": 10, "y": 20}
    assert WorkflowCreate.model_validate(payload).name == "Sync"


def test_from_workflow_round_trip(onboarding_payload):
    editor = GraphEditor.from_workflow(onboarding_payload)
    assert editor.to_payload("Onboarding") == onboarding_payload


def test_from_workflow_tolerates_missing_graph():
    editor = GraphEditor.from_workflow({"name": "empty"})
    assert editor.steps == [] and editor.connections == []
