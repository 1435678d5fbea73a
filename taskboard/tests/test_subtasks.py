import logging

from taskboard.db.models import Subtask


def make_task(client, title="Parent"):
    return client.post("/api/tasks", json={"title": title}).json()


def test_create_subtask(ann):
    task = make_task(ann)

    res = ann.post(f"/api/tasks/{task['id']}/subtasks", json={"title": "Step one"})

    assert res.status_code == 200
    subtask = res.json()
    assert subtask["title"] == "Step one"
    assert subtask["completed"] == 0
    assert subtask["task_id"] == task["id"]


def test_create_subtask_requires_title(ann):
    task = make_task(ann)

    res = ann.post(f"/api/tasks/{task['id']}/subtasks", json={})

    assert res.status_code == 400


def test_create_subtask_on_foreign_task_is_not_found(ann, bob, db):
    task = make_task(ann)

    res = bob.post(f"/api/tasks/{task['id']}/subtasks", json={"title": "Sneaky"})

    assert res.status_code == 404
    assert res.json() == {"error": "Task not found"}
    assert db.query(Subtask).count() == 0


def test_list_subtasks_of_foreign_task_is_empty(ann, bob):
    task = make_task(ann)
    ann.post(f"/api/tasks/{task['id']}/subtasks", json={"title": "Private"})

    assert bob.get(f"/api/tasks/{task['id']}/subtasks").json() == []
    assert len(ann.get(f"/api/tasks/{task['id']}/subtasks").json()) == 1


def test_update_subtask_completion(ann):
    task = make_task(ann)
    subtask = ann.post(f"/api/tasks/{task['id']}/subtasks", json={"title": "Step"}).json()

    res = ann.put(f"/api/subtasks/{subtask['id']}", json={"completed": True})

    assert res.json() == {"success": True}
    assert ann.get(f"/api/tasks/{task['id']}/subtasks").json()[0]["completed"] == 1

    ann.put(f"/api/subtasks/{subtask['id']}", json={"completed": False})
    assert ann.get(f"/api/tasks/{task['id']}/subtasks").json()[0]["completed"] == 0


def test_update_foreign_subtask_is_silent_noop(ann, bob):
    task = make_task(ann)
    subtask = ann.post(f"/api/tasks/{task['id']}/subtasks", json={"title": "Step"}).json()

    res = bob.put(f"/api/subtasks/{subtask['id']}", json={"completed": True})

    assert res.status_code == 200
    assert res.json() == {"success": True}
    assert ann.get(f"/api/tasks/{task['id']}/subtasks").json()[0]["completed"] == 0


def test_delete_subtask(ann, bob):
    task = make_task(ann)
    first = ann.post(f"/api/tasks/{task['id']}/subtasks", json={"title": "first"}).json()
    ann.post(f"/api/tasks/{task['id']}/subtasks", json={"title": "second"})

    assert bob.delete(f"/api/subtasks/{first['id']}").json() == {"success": True}
    assert len(ann.get(f"/api/tasks/{task['id']}/subtasks").json()) == 2

    ann.delete(f"/api/subtasks/{first['id']}")
    remaining = ann.get(f"/api/tasks/{task['id']}/subtasks").json()
    assert [s["title"] for s in remaining] == ["second"]


def test_foreign_subtask_delete_logs_warning(ann, bob, caplog):
    task = make_task(ann)
    subtask = ann.post(f"/api/tasks/{task['id']}/subtasks", json={"title": "Step"}).json()

    with caplog.at_level(logging.WARNING, logger="taskboard.services.task_service"):
        bob.delete(f"/api/subtasks/{subtask['id']}")

    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert any(f"Subtask {subtask['id']} not found" in r.getMessage() for r in warnings)
