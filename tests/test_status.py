from datetime import date, datetime, timedelta
from types import SimpleNamespace

from tracker.services import status

NOW = datetime(2024, 6, 15, 12, 0, 0)


def test_full_progress_completes_and_stamps_completion():
    derived = status.derive_status("active", 100, date(2024, 7, 1), None, NOW)
    assert derived.status == "complete"
    assert derived.completed_date == NOW


def test_existing_completion_timestamp_is_kept():
    earlier = NOW - timedelta(days=3)
    derived = status.derive_status("on-track", 100, date(2024, 7, 1), earlier, NOW)
    assert derived == ("complete", earlier)

    unchanged = status.derive_status("complete", 100, date(2024, 7, 1), earlier, NOW)
    assert unchanged == ("complete", earlier)


def test_complete_without_timestamp_gets_one():
    derived = status.derive_status("complete", 100, date(2024, 7, 1), None, NOW)
    assert derived.completed_date == NOW


def test_progress_drop_clears_completion():
    derived = status.derive_status("complete", 80, date(2024, 7, 1), NOW - timedelta(days=10), NOW)
    assert derived.status == "complete"
    assert derived.completed_date is None


def test_past_due_becomes_behind_unless_paused():
    assert status.derive_status("active", 40, date(2024, 6, 1), None, NOW).status == "behind"
    assert status.derive_status("discovery", 40, date(2024, 6, 1), None, NOW).status == "behind"
    assert status.derive_status("on-pause", 40, date(2024, 6, 1), None, NOW).status == "on-pause"


def test_due_today_is_already_past_due_after_midnight():
    assert status.is_past_due(date(2024, 6, 15), NOW)
    assert not status.is_past_due(date(2024, 6, 16), NOW)
    assert status.derive_status("active", 10, date(2024, 6, 16), None, NOW).status == "active"


def test_is_finished_after_seven_days():
    assert status.is_finished("complete", NOW - timedelta(days=7), NOW)
    assert not status.is_finished("complete", NOW - timedelta(days=6, hours=23), NOW)
    assert not status.is_finished("complete", None, NOW)
    assert not status.is_finished("active", NOW - timedelta(days=30), NOW)


def test_partition_preserves_order():
    items = [1, 2, 3, 4, 5]
    overview, finished = status.partition(items, lambda value: value % 2 == 0)
    assert overview == [1, 3, 5]
    assert finished == [2, 4]


def test_sort_by_status_and_name():
    projects = [
        SimpleNamespace(name="b", status="complete", progress=100),
        SimpleNamespace(name="A", status="behind", progress=10),
        SimpleNamespace(name="c", status="active", progress=50),
    ]
    assert [p.status for p in status.sort_projects(projects, "status")] == ["behind", "active", "complete"]
    assert [p.name for p in status.sort_projects(projects, "name")] == ["A", "b", "c"]
    assert [p.progress for p in status.sort_projects(projects, "progress")] == [100, 50, 10]
    assert [p.status for p in status.sort_projects(projects, "unknown")] == ["behind", "active", "complete"]
