from datetime import datetime

from sqlalchemy.orm import Session

import tracker.api.v1.projects as project_routes
from tracker.services import audit
from tests.factories import create_project, create_user, update_project


def _snapshot(**overrides):
    base = {
        "name": "Alpha",
        "description": "",
        "owner": "Dana",
        "team": "",
        "priority": 3,
        "status": "active",
        "progress": 0,
        "startDate": "2024-01-01",
        "endDate": "2024-02-01",
        "completedDate": None,
        "tasks": [],
        "notes": [],
    }
    base.update(overrides)
    return base


def test_detect_changes_reports_each_kind():
    old = _snapshot(tasks=[{"name": "Design", "completed": False}])
    new = _snapshot(
        status="on-track",
        progress=40,
        endDate="2024-03-01",
        name="Alpha 2",
        tasks=[{"name": "Design", "completed": True}],
        notes=[{"text": "Kickoff done", "timestamp": None}],
    )
    actions = [action for action, _ in audit.detect_changes(old, new)]
    assert actions == [
        "STATUS_CHANGE",
        "PROGRESS_UPDATE",
        "TIMELINE_CHANGE",
        "NOTE_ADDED",
        "TASK_CHANGE",
        "UPDATE",
    ]


def test_notes_are_compared_by_count_only():
    old = _snapshot(notes=[{"text": "first", "timestamp": None}])
    edited = _snapshot(notes=[{"text": "rewritten", "timestamp": None}])
    removed = _snapshot(notes=[])
    assert audit.detect_changes(old, edited) == []
    assert audit.detect_changes(old, removed) == []


def test_reactivation_is_detected():
    old = _snapshot(status="complete", progress=100, completedDate="2024-01-20T10:00:00")
    new = _snapshot(status="active", progress=60)
    changes = dict(audit.detect_changes(old, new))
    assert changes["REACTIVATE"] == {}
    assert changes["STATUS_CHANGE"] == {"old": "complete", "new": "active"}


def test_identical_snapshots_produce_nothing():
    assert audit.detect_changes(_snapshot(), _snapshot()) == []


def test_progress_to_completion_history(db_session: Session):
    alice = create_user(db_session, "alice")
    project = create_project(db_session, alice)
    update_project(db_session, alice, project.odid, progress=50)
    update_project(db_session, alice, project.odid, progress=100)

    entries = project_routes.project_audit(project.odid, db_session, alice)
    actions = [entry.action for entry in entries]
    # Newest first
    assert actions[-1] == "CREATE"
    assert actions.count("PROGRESS_UPDATE") == 2
    assert "STATUS_CHANGE" in actions
    status_entry = next(entry for entry in entries if entry.action == "STATUS_CHANGE")
    assert status_entry.changes == {"old": "active", "new": "complete"}
    assert all(entry.username == "alice" for entry in entries)


def test_audit_write_failure_does_not_break_the_save(db_session: Session, monkeypatch):
    alice = create_user(db_session, "alice")

    class Broken:
        def __init__(self, **kwargs):
            raise RuntimeError("audit store offline")

    monkeypatch.setattr(audit, "AuditEntry", Broken)
    project = create_project(db_session, alice)
    monkeypatch.undo()

    assert project.name == "Website relaunch"
    assert project_routes.project_audit(project.odid, db_session, alice) == []


def test_history_survives_project_deletion(db_session: Session):
    alice = create_user(db_session, "alice")
    project = create_project(db_session, alice)
    project_routes.delete_project(project.odid, db_session, alice)

    entries = project_routes.project_audit(project.odid, db_session, alice)
    assert [entry.action for entry in entries] == ["DELETE", "CREATE"]
    assert isinstance(entries[0].timestamp, datetime)


def test_priority_only_save_is_not_audited(db_session: Session):
    alice = create_user(db_session, "alice")
    project = create_project(db_session, alice)
    update_project(db_session, alice, project.odid, priority=1)

    entries = project_routes.project_audit(project.odid, db_session, alice)
    assert [entry.action for entry in entries] == ["CREATE"]


def test_restamped_completion_counts_as_reactivation():
    old = _snapshot(status="complete", progress=100, completedDate="2024-01-20T10:00:00")
    restamped = _snapshot(status="complete", progress=100, completedDate="2024-03-01T09:00:00")
    kept = _snapshot(status="complete", progress=100, completedDate="2024-01-20T10:00:00")
    assert [action for action, _ in audit.detect_changes(old, restamped)] == ["REACTIVATE"]
    assert audit.detect_changes(old, kept) == []
