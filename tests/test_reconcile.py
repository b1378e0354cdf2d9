from attendance_api.crud.attendance import reconcile_attendance

from factories import record, roster_entry


def test_example_one_record_and_one_placeholder():
    roster = [roster_entry(1, "Alice"), roster_entry(2, "Bob")]
    records = [record(1, "5", month=3, year=2024, present=True, record_id=10)]

    rows = reconcile_attendance(roster, records, month=3, year=2024)

    assert [(r.student_id, r.day, r.present, r.month, r.year) for r in rows] == [
        (1, "5", True, 3, 2024),
        (2, None, None, 3, 2024),
    ]
    assert rows[0].id == 10
    assert rows[1].id is None
    assert rows[0].department_name == "Software Engineering"
    assert rows[1].matricule == "CM00002"


def test_one_row_per_record_and_no_placeholder_for_students_with_records():
    roster = [roster_entry(1, "Alice")]
    records = [record(1, d, record_id=d) for d in (1, 2, 3)]

    rows = reconcile_attendance(roster, records, month=3, year=2024)

    assert len(rows) == 3
    assert all(r.day is not None for r in rows)


def test_orphan_records_are_dropped():
    roster = [roster_entry(1, "Alice")]
    records = [record(99, "4", record_id=1)]

    rows = reconcile_attendance(roster, records, month=3, year=2024)

    assert len(rows) == 1
    assert rows[0].student_id == 1
    assert rows[0].day is None


def test_placeholders_follow_records_in_roster_order():
    roster = [roster_entry(1, "Alice"), roster_entry(2, "Bob"), roster_entry(3, "Carol")]
    records = [record(2, "7", record_id=1)]

    rows = reconcile_attendance(roster, records)

    assert [r.student_id for r in rows] == [2, 1, 3]


def test_placeholders_copy_period_or_none():
    roster = [roster_entry(1, "Alice")]

    without_period = reconcile_attendance(roster, [])
    assert (without_period[0].month, without_period[0].year) == (None, None)

    month_only = reconcile_attendance(roster, [], month=5)
    assert (month_only[0].month, month_only[0].year) == (5, None)


def test_student_ids_cover_roster_exactly():
    roster = [roster_entry(i, f"Student {i}") for i in range(1, 6)]
    records = [record(2, "1", record_id=1), record(2, "2", record_id=2), record(4, "1", record_id=3)]

    rows = reconcile_attendance(roster, records, month=3, year=2024)

    assert {r.student_id for r in rows} == {1, 2, 3, 4, 5}
    assert len([r for r in rows if r.day is None]) == 3
    assert len([r for r in rows if r.day is not None]) == 3


def test_empty_roster_gives_empty_result():
    assert reconcile_attendance([], [record(1, "1", record_id=1)]) == []
