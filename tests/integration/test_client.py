import pytest
import pytest_asyncio
from httpx import ASGITransport

from stepflow.client.api import StepflowClient, StepflowClientError
from stepflow.editor.graph import GraphEditor


@pytest_asyncio.fixture
async def api(app):
    async with StepflowClient("http://test", transport=ASGITransport(app=app)) as client:
        yield client


@pytest.mark.asyncio
async def test_editor_save_execute_and_history(api):
    editor = GraphEditor.new()
    call = editor.add_step("api_call", {"endpoint": "https://api.example.com/leads", "method": "GET"})
    mail = editor.add_step("email", {"to": "sales@example.com", "subject": "New leads"})
    editor.connect("start", call["id"])
    editor.connect(call["id"], mail["id"])
    editor.connect(mail["id"], "end")
    assert editor.validate() == []

    workflow = await api.create_workflow(editor.to_payload("Lead sync"))
    assert workflow["status"] == "draft"
    assert [w["id"] for w in await api.list_workflows()] == [workflow["id"]]

    reloaded = GraphEditor.from_workflow(await api.get_workflow(workflow["id"]))
    assert reloaded.get_step(mail["id"])["data"] == {"to": "sales@example.com", "subject": "New leads"}

    execution = await api.execute_workflow(workflow["id"])
    assert await api.list_executions(workflow["id"]) == [execution]

    validation = await api.validate_workflow(workflow["id"])
    assert validation == {"valid": True, "errors": []}


@pytest.mark.asyncio
async def test_update_and_delete(api, onboarding_payload):
    workflow = await api.create_workflow(onboarding_payload)
    updated = await api.update_workflow(workflow["id"], {"name": "Renamed"})
    assert updated["name"] == "Renamed"

    assert await api.delete_workflow(workflow["id"]) is None
    with pytest.raises(StepflowClientError) as exc_info:
        await api.get_workflow(workflow["id"])
    assert exc_info.value.status_code == 404
    assert exc_info.value.message == "Workflow not found"


@pytest.mark.asyncio
async def test_errors_carry_field_details(api):
    with pytest.raises(StepflowClientError) as exc_info:
        await api.create_workflow({"name": "", "steps": [], "connections": []})
    assert exc_info.value.status_code == 400
    assert [err["path"] for err in exc_info.value.errors] == ["name"]


@pytest.mark.asyncio
async def test_health_and_users(api):
    assert await api.health() == {"status": "ok"}
    user = await api.create_user("ada", "ada@example.com", "secret")
    assert user["id"] == 1
    assert "password" not in user


@pytest.mark.asyncio
async def test_list_workflows_search(api, onboarding_payload):
    first = await api.create_workflow({**onboarding_payload, "name": "Onboarding"})
    second = await api.create_workflow({**onboarding_payload, "name": "Lead sync"})

    assert len(await api.list_workflows(search="")) == 2
    assert [w["id"] for w in await api.list_workflows(search="lead SYNC")] == [second["id"]]
    assert [w["id"] for w in await api.list_workflows(search=str(first["id"]))] == [first["id"]]
