from stepflow.client.api import filter_workflows

WORKFLOWS = [
    {"id": 1, "name": "Onboarding"},
    {"id": 12, "name": "Lead sync"},
    {"id": 7, "name": "Weekly digest"},
]


def test_empty_query_keeps_everything():
    assert filter_workflows(WORKFLOWS, "") == WORKFLOWS
    assert filter_workflows(WORKFLOWS, None) == WORKFLOWS


def test_name_match_ignores_case():
    assert [w["id"] for w in filter_workflows(WORKFLOWS, "LEAD")] == [12]
    assert [w["id"] for w in filter_workflows(WORKFLOWS, "boar")] == [1]


def test_id_substring_match():
    assert [w["id"] for w in filter_workflows(WORKFLOWS, "1")] == [1, 12]
    assert [w["id"] for w in filter_workflows(WORKFLOWS, "2")] == [12]


def test_no_match_returns_empty_list():
    assert filter_workflows(WORKFLOWS, "missing") == []
