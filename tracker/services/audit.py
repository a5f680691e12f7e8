"""Project audit trail: change detection and the append-only log."""
import json
import logging
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.orm import Session

from tracker.models import AuditAction, AuditEntry, Project, User
from tracker.services.status import COMPLETE

logger = logging.getLogger(__name__)

Snapshot = Dict[str, Any]
Change = Tuple[str, Optional[Dict[str, Any]]]

SCALAR_FIELDS = ("name", "description", "owner", "team")


def _iso(value) -> Optional[str]:
    return value.isoformat() if value is not None else None


def snapshot(project: Project) -> Snapshot:
    """Capture the audited fields of ``project`` as plain JSON-ready values."""
    return {
        "name": project.name,
        "description": project.description or "",
        "owner": project.owner,
        "team": project.team or "",
        "priority": project.priority,
        "status": project.status,
        "progress": project.progress,
        "startDate": _iso(project.start_date),
        "endDate": _iso(project.end_date),
        "completedDate": _iso(project.completed_date),
        "tasks": [{"name": task.name, "completed": bool(task.completed)} for task in project.tasks],
        "notes": [{"text": note.text, "timestamp": _iso(note.timestamp)} for note in project.notes],
    }


def detect_changes(old: Snapshot, new: Snapshot) -> List[Change]:
    """Diff two snapshots into typed audit changes.

    A single save may produce several entries. Notes are compared by count
    only, so edited or removed notes produce nothing. Tasks are compared
    structurally.
    """
    changes: List[Change] = []

    if old["status"] != new["status"]:
        changes.append((AuditAction.STATUS_CHANGE.value, {"old": old["status"], "new": new["status"]}))

    if old["progress"] != new["progress"]:
        changes.append((AuditAction.PROGRESS_UPDATE.value, {"old": old["progress"], "new": new["progress"]}))

    if old["startDate"] != new["startDate"] or old["endDate"] != new["endDate"]:
        changes.append(
            (
                AuditAction.TIMELINE_CHANGE.value,
                {
                    "old": {"startDate": old["startDate"], "endDate": old["endDate"]},
                    "new": {"startDate": new["startDate"], "endDate": new["endDate"]},
                },
            )
        )

    added_notes = len(new["notes"]) - len(old["notes"])
    if added_notes > 0:
        changes.append((AuditAction.NOTE_ADDED.value, {"count": added_notes}))

    if json.dumps(old["tasks"], sort_keys=True) != json.dumps(new["tasks"], sort_keys=True):
        changes.append((AuditAction.TASK_CHANGE.value, {"old": old["tasks"], "new": new["tasks"]}))

    was_finished = old["status"] == COMPLETE and old["completedDate"] is not None
    # A restamped completion restarts the finished clock, which is a reactivation too
    restarted = new["completedDate"] != old["completedDate"]
    if was_finished and (new["status"] != COMPLETE or new["completedDate"] is None or restarted):
        changes.append((AuditAction.REACTIVATE.value, {}))

    updated = {
        field: {"old": old[field], "new": new[field]}
        for field in SCALAR_FIELDS
        if old[field] != new[field]
    }
    if updated:
        changes.append((AuditAction.UPDATE.value, updated))

    return changes


def record(
    db: Session,
    project_odid: str,
    user: User,
    action: str,
    changes: Optional[Dict[str, Any]] = None,
) -> Optional[AuditEntry]:
    """Append one entry inside a SAVEPOINT.

    Logging must never fail the caller's request: any error is reported to
    the operational log and the savepoint is rolled back on its own.
    """
    try:
        with db.begin_nested():
            entry = AuditEntry(
                project_odid=project_odid,
                acting_user_id=user.id,
                acting_username=user.username,
                action=action,
                changes=changes,
            )
            db.add(entry)
        return entry
    except Exception:
        logger.exception("Failed to write %s audit entry for project %s", action, project_odid)
        return None


def record_all(db: Session, project_odid: str, user: User, changes: List[Change]) -> None:
    for action, payload in changes:
        record(db, project_odid, user, action, payload)


def list_entries(db: Session, project_odid: str) -> List[AuditEntry]:
    return (
        db.query(AuditEntry)
        .filter(AuditEntry.project_odid == project_odid)
        .order_by(AuditEntry.timestamp.desc(), AuditEntry.id.desc())
        .all()
    )


def home_workspace_from_history(db: Session, project_odid: str) -> Optional[int]:
    """Return the home workspace id recorded on the project's CREATE entry, if any."""
    entry = (
        db.query(AuditEntry)
        .filter(AuditEntry.project_odid == project_odid, AuditEntry.action == AuditAction.CREATE.value)
        .order_by(AuditEntry.id.asc())
        .first()
    )
    if entry is None or not entry.changes:
        return None
    return entry.changes.get("workspaceId")
