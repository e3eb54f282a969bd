"""Tests for the staff directory."""

import pytest

from wastewatch.exceptions import StaffNotFoundError
from wastewatch.services.staff_directory import StaffDirectory


def test_list_staff_keeps_seed_order(staff_directory):
    assert [m.id for m in staff_directory.list_staff()] == ["1", "2", "3", "4", "5"]


def test_get_unknown_reads_as_unassigned(staff_directory):
    assert staff_directory.get("99") is None
    assert staff_directory.get(None) is None
    assert staff_directory.get("3").name == "Rahul Kumar"


def test_roster_puts_active_first_then_rating(staff_directory):
    assert [m.id for m in staff_directory.roster()] == ["3", "1", "5", "2", "4"]


def test_leaderboard(staff_directory):
    assert [m.id for m in staff_directory.leaderboard(3)] == ["3", "1", "2"]


def test_summary_figures(staff_directory):
    assert staff_directory.active_count == 4
    assert staff_directory.total_completed == 642
    assert staff_directory.average_rating == 4.7
    assert len(staff_directory) == 5


def test_empty_directory_summary():
    directory = StaffDirectory([])

    assert directory.average_rating == 0.0
    assert directory.roster() == []


def test_duplicate_ids_rejected(make_staff):
    with pytest.raises(ValueError):
        StaffDirectory([make_staff("1"), make_staff("1")])


def test_workload_percent(make_staff):
    assert make_staff(active_tasks=3, max_tasks=8).workload_percent == 38
    assert make_staff(active_tasks=10, max_tasks=8).workload_percent == 100


def test_record_workload(staff_directory):
    updated = staff_directory.record_workload("3", 8)

    assert updated.active_tasks == 8
    assert not updated.has_capacity
    assert staff_directory.get("3").active_tasks == 8


def test_record_workload_unknown_staff(staff_directory):
    with pytest.raises(StaffNotFoundError):
        staff_directory.record_workload("99", 1)


def test_record_workload_negative(staff_directory):
    with pytest.raises(ValueError):
        staff_directory.record_workload("1", -1)
