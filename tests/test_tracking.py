import pytest

from overtime_counter.tracking import OvertimeTracker


def test_unknown_user_has_zero_totals():
    tracking = OvertimeTracker().get_tracking("nobody")

    assert tracking.weekly == 0
    assert tracking.yearly == 0


def test_record_completion_accumulates_per_user():
    tracker = OvertimeTracker()
    tracker.record_completion("alice", 2)
    tracker.record_completion("alice", 1.5)
    tracker.record_completion("bob", 4)

    assert tracker.get_tracking("alice").weekly == 3.5
    assert tracker.get_tracking("alice").yearly == 3.5
    assert tracker.get_tracking("bob").weekly == 4


def test_returned_tracking_is_a_copy():
    tracker = OvertimeTracker()
    tracker.record_completion("alice", 2)

    snapshot = tracker.get_tracking("alice")
    snapshot.weekly = 100

    assert tracker.get_tracking("alice").weekly == 2


def test_negative_hours_rejected():
    with pytest.raises(ValueError):
        OvertimeTracker().record_completion("alice", -1)
