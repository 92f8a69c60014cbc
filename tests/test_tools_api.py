import pytest

from tasks_plugin.config import IdentityScheme, ListAddressing, Settings
from tasks_plugin.main import create_app
from tasks_plugin.services.task_list_store import TaskListStore


def test_health(session_client) -> None:
    resp = session_client.get("/health")
    assert resp.status_code == 200
    assert resp.text == "OK"


def test_missing_context_is_rejected(session_client) -> None:
    resp = session_client.post("/add_task", json={"args": {"description": "x"}})
    assert resp.status_code == 400, resp.text
    assert resp.json()["error"]["code"] == "MISSING_CONTEXT"

    resp = session_client.post("/add_task", json={"context": {"sessionId": ""}, "args": {"description": "x"}})
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "MISSING_CONTEXT"


def test_missing_argument_names_field(session_client, call) -> None:
    resp = call(session_client, "add_task", description="")
    assert resp.status_code == 400
    error = resp.json()["error"]
    assert error["code"] == "MISSING_ARGUMENT"
    assert error["details"]["field"] == "description"


def test_request_without_body_is_missing_context(session_client) -> None:
    resp = session_client.post("/add_task")
    assert resp.status_code == 400, resp.text
    body = resp.json()
    assert body["success"] is False
    assert body["error"]["code"] == "MISSING_CONTEXT"


def test_malformed_json_is_missing_context(session_client) -> None:
    resp = session_client.post(
        "/add_task", content=b"{not json", headers={"Content-Type": "application/json"}
    )
    assert resp.status_code == 400, resp.text
    assert resp.json()["error"]["code"] == "MISSING_CONTEXT"


@pytest.mark.parametrize("context", [{"sessionId": 123}, "abc", {"sessionId": None}])
def test_unusable_context_is_missing_context(session_client, context) -> None:
    resp = session_client.post("/add_task", json={"context": context, "args": {"description": "x"}})
    assert resp.status_code == 400, resp.text
    assert resp.json()["error"]["code"] == "MISSING_CONTEXT"


@pytest.mark.parametrize("args", [None, "description", ["x"]])
def test_non_object_args_is_missing_argument(session_client, args) -> None:
    resp = session_client.post("/add_task", json={"context": {"sessionId": "abc"}, "args": args})
    assert resp.status_code == 400, resp.text
    error = resp.json()["error"]
    assert error["code"] == "MISSING_ARGUMENT"
    assert error["details"]["field"] == "args"


def test_bad_context_wins_over_bad_args(session_client) -> None:
    resp = session_client.post("/add_task", json={"context": {"sessionId": 1}, "args": None})
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "MISSING_CONTEXT"


def test_request_without_args_uses_empty_args(session_client) -> None:
    resp = session_client.post("/add_task", json={"context": {"sessionId": "abc"}})
    assert resp.status_code == 400
    assert resp.json()["error"]["details"]["field"] == "description"


def test_unknown_tool_is_not_found(session_client, call) -> None:
    resp = call(session_client, "rename_task")
    assert resp.status_code == 404
    assert resp.json()["error"]["details"]["resource"] == "tool"


def test_tool_schemas_follow_mode(session_client, explicit_client) -> None:
    session_tools = session_client.get("/tools").json()
    assert "create_task_list" not in session_tools
    assert session_tools["complete_task"]["parameters"]["required"] == ["taskId"]

    explicit_tools = explicit_client.get("/tools").json()
    assert "create_task_list" in explicit_tools
    assert set(explicit_tools["complete_task"]["parameters"]["required"]) == {"taskListId", "label"}


class TestSessionKeyedGeneratedIds:
    def test_add_and_list(self, session_client, call) -> None:
        resp = call(session_client, "add_task", description="Fetch data")
        assert resp.status_code == 200, resp.text
        task = resp.json()
        assert task["status"] == "pending"
        assert task["description"] == "Fetch data"
        assert task["id"]
        assert "label" not in task
        assert task["createdAt"] == task["updatedAt"]

        listed = call(session_client, "list_tasks").json()
        assert listed == [task]

    def test_add_ignores_caller_status(self, session_client, call) -> None:
        task = call(session_client, "add_task", description="x", status="completed").json()
        assert task["status"] == "pending"

    def test_read_before_any_write_is_not_found(self, session_client, call) -> None:
        resp = call(session_client, "list_tasks")
        assert resp.status_code == 404
        assert resp.json()["error"]["code"] == "NOT_FOUND"

        resp = call(session_client, "check_all_complete")
        assert resp.status_code == 404

    def test_update_is_partial(self, session_client, call) -> None:
        task = call(session_client, "add_task", description="Draft").json()

        resp = call(session_client, "update_task", taskId=task["id"], status="completed")
        assert resp.status_code == 200, resp.text
        updated = resp.json()
        assert updated["status"] == "completed"
        assert updated["description"] == "Draft"

        resp = call(session_client, "update_task", taskId=task["id"], status="pending")
        assert resp.status_code == 400
        assert resp.json()["error"]["code"] == "INVALID_ARGUMENT"

    def test_update_treats_blank_fields_as_omitted(self, session_client, call) -> None:
        task = call(session_client, "add_task", description="Draft").json()

        resp = call(session_client, "update_task", taskId=task["id"], description="   ", status=" ")
        assert resp.status_code == 200, resp.text
        updated = resp.json()
        assert updated["description"] == "Draft"
        assert updated["status"] == "pending"

    @pytest.mark.parametrize("field, value", [("description", 7), ("status", True)])
    def test_update_rejects_non_string_fields(self, session_client, call, field, value) -> None:
        task = call(session_client, "add_task", description="Draft").json()

        resp = call(session_client, "update_task", taskId=task["id"], **{field: value})
        assert resp.status_code == 400
        error = resp.json()["error"]
        assert error["code"] == "INVALID_ARGUMENT"
        assert error["details"]["field"] == field

    def test_update_missing_task(self, session_client, call) -> None:
        call(session_client, "add_task", description="Draft")
        resp = call(session_client, "update_task", taskId="nope", description="x")
        assert resp.status_code == 404

    def test_delete(self, session_client, call) -> None:
        task = call(session_client, "add_task", description="Temp").json()

        resp = call(session_client, "delete_task", taskId=task["id"])
        assert resp.status_code == 200
        assert resp.json() == {"success": True, "deletedId": task["id"]}
        assert call(session_client, "list_tasks").json() == []

        resp = call(session_client, "delete_task", taskId=task["id"])
        assert resp.status_code == 404

    def test_sessions_cannot_see_each_other(self, session_client, call) -> None:
        task = call(session_client, "add_task", session_id="abc", description="Mine").json()

        resp = call(session_client, "view_task", session_id="xyz", taskId=task["id"])
        assert resp.status_code == 404

        call(session_client, "add_task", session_id="xyz", description="Theirs")
        theirs = call(session_client, "list_tasks", session_id="xyz").json()
        assert [t["description"] for t in theirs] == ["Theirs"]

        resp = call(session_client, "complete_task", session_id="xyz", taskId=task["id"])
        assert resp.status_code == 404
        mine = call(session_client, "view_task", session_id="abc", taskId=task["id"]).json()
        assert mine["status"] == "pending"


class TestExplicitListsLabelIdentity:
    def create_list(self, client, call, session_id="abc") -> str:
        resp = call(client, "create_task_list", session_id=session_id)
        assert resp.status_code == 200, resp.text
        body = resp.json()
        assert body["sessionId"] == session_id
        assert body["tasks"] == []
        return body["id"]

    def test_scenario(self, explicit_client, call) -> None:
        list_id = self.create_list(explicit_client, call)

        task = call(explicit_client, "add_task", taskListId=list_id, label="fetch-data").json()
        assert task["label"] == "fetch-data"
        assert task["status"] == "pending"
        assert "id" not in task

        task = call(explicit_client, "complete_task", taskListId=list_id, label="fetch-data").json()
        assert task["status"] == "completed"

        resp = call(explicit_client, "list_tasks", session_id="xyz", taskListId=list_id)
        assert resp.status_code == 403
        assert resp.json()["error"]["code"] == "FORBIDDEN"

    def test_other_session_cannot_mutate(self, explicit_client, call) -> None:
        list_id = self.create_list(explicit_client, call)
        call(explicit_client, "add_task", taskListId=list_id, label="a")

        for tool in ("add_task", "complete_task", "update_task", "delete_task", "view_task"):
            resp = call(explicit_client, tool, session_id="xyz", taskListId=list_id, label="a")
            assert resp.status_code == 403, tool

        task = call(explicit_client, "view_task", taskListId=list_id, label="a").json()
        assert task["status"] == "pending"

    def test_duplicate_label_conflicts(self, explicit_client, call) -> None:
        list_id = self.create_list(explicit_client, call)
        call(explicit_client, "add_task", taskListId=list_id, label="a", description="first")

        resp = call(explicit_client, "add_task", taskListId=list_id, label="a", description="second")
        assert resp.status_code == 409
        assert resp.json()["error"]["details"]["identity"] == "a"

        task = call(explicit_client, "view_task", taskListId=list_id, label="a").json()
        assert task["description"] == "first"

    def test_duplicate_label_leaves_list_untouched(self, explicit_client, call) -> None:
        list_id = self.create_list(explicit_client, call)
        call(explicit_client, "add_task", taskListId=list_id, label="a")

        store = explicit_client.app.state.store
        task_list = store.resolve("abc", list_id)
        updated_at = task_list.updated_at

        call(explicit_client, "add_task", taskListId=list_id, label="a")
        assert task_list.updated_at == updated_at

    def test_add_rejects_non_string_description(self, explicit_client, call) -> None:
        list_id = self.create_list(explicit_client, call)

        resp = call(explicit_client, "add_task", taskListId=list_id, label="a", description=7)
        assert resp.status_code == 400
        assert resp.json()["error"]["code"] == "INVALID_ARGUMENT"
        assert call(explicit_client, "list_tasks", taskListId=list_id).json() == []

    def test_add_treats_blank_description_as_omitted(self, explicit_client, call) -> None:
        list_id = self.create_list(explicit_client, call)

        task = call(explicit_client, "add_task", taskListId=list_id, label="a", description="   ").json()
        assert "description" not in task

    def test_unknown_list_and_missing_list_id(self, explicit_client, call) -> None:
        resp = call(explicit_client, "list_tasks", taskListId="no-such-list")
        assert resp.status_code == 404

        resp = call(explicit_client, "list_tasks")
        assert resp.status_code == 400
        assert resp.json()["error"]["details"]["field"] == "taskListId"

    def test_check_all_complete(self, explicit_client, call) -> None:
        list_id = self.create_list(explicit_client, call)
        assert call(explicit_client, "check_all_complete", taskListId=list_id).json() == {
            "allComplete": True,
            "remaining": [],
        }

        call(explicit_client, "add_task", taskListId=list_id, label="fetch-data")
        call(explicit_client, "add_task", taskListId=list_id, label="summarize")
        call(explicit_client, "complete_task", taskListId=list_id, label="fetch-data")
        assert call(explicit_client, "check_all_complete", taskListId=list_id).json() == {
            "allComplete": False,
            "remaining": ["summarize"],
        }

        call(explicit_client, "complete_task", taskListId=list_id, label="summarize")
        assert call(explicit_client, "check_all_complete", taskListId=list_id).json() == {
            "allComplete": True,
            "remaining": [],
        }

    def test_delete_reports_label(self, explicit_client, call) -> None:
        list_id = self.create_list(explicit_client, call)
        call(explicit_client, "add_task", taskListId=list_id, label="a")

        resp = call(explicit_client, "delete_task", taskListId=list_id, label="a")
        assert resp.json() == {"success": True, "deletedLabel": "a"}


def test_masked_forbidden_reads_as_not_found(make_client, call) -> None:
    client = make_client(
        identity_scheme=IdentityScheme.LABEL,
        list_addressing=ListAddressing.EXPLICIT,
        mask_forbidden=True,
    )
    list_id = call(client, "create_task_list").json()["id"]

    resp = call(client, "list_tasks", session_id="xyz", taskListId=list_id)
    assert resp.status_code == 404
    assert resp.json()["error"]["code"] == "NOT_FOUND"


def test_boolean_completion_response(boolean_client, call) -> None:
    call(boolean_client, "add_task", label="a")
    assert call(boolean_client, "check_all_complete").json() is False

    call(boolean_client, "complete_task", label="a")
    assert call(boolean_client, "check_all_complete").json() is True


def test_internal_errors_are_opaque(session_client, call, monkeypatch) -> None:
    from tasks_plugin.services import task_operations

    def explode(*args, **kwargs):
        raise RuntimeError("secret internal state")

    monkeypatch.setattr(task_operations, "list_tasks", explode)
    call(session_client, "add_task", description="x")

    resp = call(session_client, "list_tasks")
    assert resp.status_code == 500
    assert resp.json()["error"]["code"] == "INTERNAL_ERROR"
    assert "secret" not in resp.text


def test_store_must_match_configured_addressing() -> None:
    settings = Settings(list_addressing=ListAddressing.EXPLICIT)
    with pytest.raises(ValueError):
        create_app(settings, TaskListStore(ListAddressing.SESSION))
