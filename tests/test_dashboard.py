from datetime import date

import pytest

from attendance_api.crud.dashboard import attendance_rate, resolve_date_range
from attendance_api.exceptions import ValidationError

from factories import add_records, record


def test_default_range_is_current_month():
    assert resolve_date_range(None, None, today=date(2024, 2, 14)) == ("2024-02-01", "2024-02-29")


def test_invalid_range_is_rejected():
    with pytest.raises(ValidationError):
        resolve_date_range("2024-13-01", "2024-12-31")
    with pytest.raises(ValidationError):
        resolve_date_range("2024-03-31", "2024-03-01")


def test_attendance_rate_handles_zero():
    assert attendance_rate(0, 0) == 0.0
    assert attendance_rate(3, 4) == 75.0


async def test_dashboard_stats(client, school):
    await add_records(
        school,
        record(1, "4", month=3, year=2024, present=True),
        record(2, "4", month=3, year=2024, present=False),
        record(1, "5", month=3, year=2024, present=True),
        record(3, "5", month=3, year=2024, present=True),
        record(1, "1", month=4, year=2024, present=True),
    )

    res = await client.get("/dashboard/stats", params={"from": "2024-03-01", "to": "2024-03-31"})

    assert res.status_code == 200
    data = res.json()["data"]
    assert data["totalStudents"] == 3
    assert data["summary"] == {"present": 3, "absent": 1, "total": 3}
    assert [(t["date"], t["present"], t["absent"]) for t in data["trend"]] == [
        ("2024-03-04", 1, 1),
        ("2024-03-05", 2, 0),
    ]

    software = next(d for d in data["departmentStats"] if d["department"] == "Software Engineering")
    assert software["total"] == 2
    assert software["present"] == 2
    assert software["totalDays"] == 2
    assert software["attendanceRate"] == 50.0

    campuses = {c["campus"]: c for c in data["campusStats"]}
    assert campuses["Bonaberi"]["present"] == 2
    assert campuses["Yaounde"]["total"] == 2


async def test_dashboard_department_filter(client, school):
    await add_records(school, record(3, "5", month=3, year=2024, present=True))

    res = await client.get(
        "/dashboard/stats",
        params={"from": "2024-03-01", "to": "2024-03-31", "department": "Nursing"}
    )

    data = res.json()["data"]
    assert data["totalStudents"] == 1
    assert data["summary"]["present"] == 1


async def test_dashboard_bad_date(client, school):
    res = await client.get("/dashboard/stats", params={"from": "yesterday", "to": "2024-03-31"})

    assert res.status_code == 400
    assert res.json()["success"] is False
