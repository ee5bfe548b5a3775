from __future__ import annotations

from datetime import date, datetime, time

import pytest

from src.ems.ems.attendance.service import AttendanceService
from src.ems.ems.core.exceptions import NotFoundError, ValidationError
from tests.fakes import InMemoryAttendance

MORNING = datetime(2025, 3, 10, 9, 5, 30, 123456)
EVENING = datetime(2025, 3, 10, 17, 45, 0)


def _service():
    repo = InMemoryAttendance()
    return AttendanceService(repo, tz_name="Asia/Kathmandu"), repo


def test_checkin_creates_row_for_today():
    svc, repo = _service()

    svc.check_in(7, now=MORNING)

    record = repo.get_for_user_and_date(7, date(2025, 3, 10))
    assert record.check_in == time(9, 5, 30)
    assert record.check_out is None


def test_second_checkin_same_day_is_rejected():
    svc, repo = _service()
    svc.check_in(7, now=MORNING)

    with pytest.raises(ValidationError, match="Already checked in"):
        svc.check_in(7, now=EVENING)
    assert len(repo.records) == 1


def test_checkin_fills_existing_empty_row():
    svc, repo = _service()
    rid = repo.add(user_id=7, work_date=date(2025, 3, 10))

    svc.check_in(7, now=MORNING)

    assert len(repo.records) == 1
    assert repo.records[rid].check_in == time(9, 5, 30)


def test_checkout_requires_checkin():
    svc, _ = _service()

    with pytest.raises(ValidationError, match="check in first"):
        svc.check_out(7, now=EVENING)


def test_checkout_once_per_day():
    svc, repo = _service()
    svc.check_in(7, now=MORNING)
    svc.check_out(7, now=EVENING)

    with pytest.raises(ValidationError, match="Already checked out"):
        svc.check_out(7, now=EVENING)
    assert repo.get_for_user_and_date(7, date(2025, 3, 10)).check_out == time(17, 45)


def test_today_status_flags():
    svc, _ = _service()
    assert svc.today_status(7, now=MORNING) == {"checkedIn": False, "checkedOut": False}

    svc.check_in(7, now=MORNING)
    assert svc.today_status(7, now=MORNING) == {"checkedIn": True, "checkedOut": False}

    svc.check_out(7, now=EVENING)
    assert svc.today_status(7, now=EVENING) == {"checkedIn": True, "checkedOut": True}


def test_new_day_starts_fresh():
    svc, _ = _service()
    svc.check_in(7, now=MORNING)

    svc.check_in(7, now=datetime(2025, 3, 11, 8, 0))

    assert svc.today_status(7, now=datetime(2025, 3, 11, 12, 0))["checkedIn"] is True


def test_history_derives_status_from_checkin():
    svc, repo = _service()
    repo.add(user_id=7, work_date=date(2025, 3, 8))
    repo.add(user_id=7, work_date=date(2025, 3, 9), check_in=time(9, 0), check_out=time(17, 0))

    history = svc.history(7)

    assert [h["date"] for h in history] == ["2025-03-09", "2025-03-08"]
    assert history[0]["status"] == "present"
    assert history[0]["check_in"] == "09:00:00"
    assert history[1]["status"] == "absent"


@pytest.mark.parametrize("status", ["", None, "late", "on-leave"])
def test_admin_update_rejects_unknown_status(status):
    svc, repo = _service()
    rid = repo.add(user_id=7, work_date=date(2025, 3, 8))

    with pytest.raises(ValidationError):
        svc.update_status(rid, status)


def test_admin_update_missing_record():
    svc, _ = _service()

    with pytest.raises(NotFoundError):
        svc.update_status(404, "present")


def test_admin_update_accepts_any_case():
    svc, repo = _service()
    rid = repo.add(user_id=7, work_date=date(2025, 3, 8))

    svc.update_status(rid, "Absent")
