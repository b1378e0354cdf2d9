import logging
import re
from typing import Any, List, Mapping, Optional, Sequence

from sqlalchemy import and_, delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from attendance_api.crud.filters import FilterOptions, compile_filters
from attendance_api.crud.student import get_roster, get_student_detail
from attendance_api.exceptions import NotFoundError, ValidationError
from attendance_api.models.attendance import AttendanceRecord
from attendance_api.schemas.attendance import AttendanceMark, ReconciledAttendanceRow

logger = logging.getLogger(__name__)

UNKNOWN_DEPARTMENT = "Unknown Department"
UNKNOWN_CAMPUS = "Unknown Campus"
DAY_PATTERN = re.compile(r"[0-9]{1,2}")


def _student_fields(student: Mapping[str, Any]) -> dict:
    return {
        "student_id": student["id"],
        "name": student["name"],
        "matricule": student["matricule"],
        "level": student["level"],
        "department_id": student["department_id"],
        "department_name": student["department_name"],
        "campus_id": student["campus_id"],
        "campus_name": student["campus_name"],
    }


def reconcile_attendance(
        roster: Sequence[Mapping[str, Any]],
        records: Sequence[AttendanceRecord],
        month: Optional[int] = None,
        year: Optional[int] = None
) -> List[ReconciledAttendanceRow]:
    """
    Merge attendance records with "no record" placeholders.

    Every record whose student is in the roster becomes one row decorated with
    the roster data. Every roster student without any record gets exactly one
    placeholder row (day and present set to None). Record rows come first,
    placeholders follow in roster order.
    """
    students_by_id = {student["id"]: student for student in roster}

    rows = []
    for record in records:
        student = students_by_id.get(record.student_id)
        if student is None:
            logger.warning(f"Cannot find student with ID {record.student_id}, attendance record {record.id} dropped")
            continue
        rows.append(ReconciledAttendanceRow(
            id=record.id,
            day=record.day,
            present=record.present,
            month=record.month,
            year=record.year,
            **_student_fields(student)
        ))

    missing_ids = students_by_id.keys() - {row.student_id for row in rows}
    placeholders = [
        ReconciledAttendanceRow(day=None, present=None, month=month, year=year, **_student_fields(student))
        for student in roster
        if student["id"] in missing_ids
    ]

    return rows + placeholders


async def get_attendance_records(
        db: AsyncSession,
        student_ids: Sequence[int],
        month: Optional[int] = None,
        year: Optional[int] = None
) -> List[AttendanceRecord]:
    """Get attendance records for the given students, optionally restricted to one month"""
    if len(student_ids) == 1:
        conditions = [AttendanceRecord.student_id == student_ids[0]]
    else:
        conditions = [AttendanceRecord.student_id.in_(student_ids)]

    if month is not None and year is not None:
        conditions.append(AttendanceRecord.month == month)
        conditions.append(AttendanceRecord.year == year)
        logger.info(f"Filtering attendance by month: {month}, year: {year}")

    result = await db.execute(select(AttendanceRecord).where(and_(*conditions)))
    return list(result.scalars().all())


async def get_reconciled_attendance(db: AsyncSession, options: FilterOptions) -> List[ReconciledAttendanceRow]:
    """
    Resolve the filtered roster and reconcile its attendance for the period.
    """
    compiled = compile_filters(options)
    roster = await get_roster(db, compiled.student_clause)

    if not roster:
        logger.info("No students found matching filters, returning empty list")
        return []

    student_ids = [student["id"] for student in roster]
    records = await get_attendance_records(db, student_ids, compiled.month, compiled.year)
    logger.info(f"Found {len(records)} attendance records for {len(student_ids)} students")

    return reconcile_attendance(roster, records, compiled.month, compiled.year)


def _validated_day(day) -> str:
    day_text = str(day).strip()
    if not DAY_PATTERN.fullmatch(day_text):
        raise ValidationError(f"Invalid day: {day!r}")
    if not 1 <= int(day_text) <= 31:
        raise ValidationError(f"Invalid day: {day!r}")
    return day_text


def _validated_mark(mark: AttendanceMark):
    if (mark.student_id is None or mark.present is None or mark.day in (None, "")
            or mark.month is None or mark.year is None):
        raise ValidationError("Missing required fields")
    if not 1 <= mark.month <= 12:
        raise ValidationError(f"Invalid month: {mark.month}")
    return mark.student_id, _validated_day(mark.day), mark.month, mark.year


async def get_record_by_key(
        db: AsyncSession,
        student_id: int,
        day: str,
        month: int,
        year: int
) -> Optional[AttendanceRecord]:
    result = await db.execute(
        select(AttendanceRecord).where(
            and_(
                AttendanceRecord.student_id == student_id,
                AttendanceRecord.day == day,
                AttendanceRecord.month == month,
                AttendanceRecord.year == year
            )
        )
    )
    return result.scalars().first()


async def mark_attendance(db: AsyncSession, mark: AttendanceMark) -> ReconciledAttendanceRow:
    """
    Create or update the single attendance record of a student for one day.

    An existing record for (student, day, month, year) only has its ``present``
    flag changed. The returned row is decorated with the student's current data.
    """
    student_id, day, month, year = _validated_mark(mark)

    student = await get_student_detail(db, student_id)
    if student is None:
        logger.warning(f"Attendance mark rejected - student {student_id} not found")
        raise NotFoundError("Student not found")

    record = await get_record_by_key(db, student_id, day, month, year)
    if record:
        logger.info(f"Updating attendance record ID {record.id} for student {student_id}")
        record.present = mark.present
        await db.commit()
    else:
        logger.info(f"Creating new attendance record for student {student_id}")
        record = AttendanceRecord(
            student_id=student_id,
            day=day,
            date=f"{year:04d}-{month:02d}-{day:0>2}",
            month=month,
            year=year,
            present=mark.present
        )
        db.add(record)
        try:
            await db.commit()
        except IntegrityError:
            # another request inserted the same key first; last write wins
            await db.rollback()
            logger.warning(f"Concurrent attendance insert for student {student_id} day {day}/{month}/{year}")
            record = await get_record_by_key(db, student_id, day, month, year)
            if record is None:
                raise
            record.present = mark.present
            await db.commit()

    await db.refresh(record)

    fields = _student_fields(student)
    fields["department_name"] = fields["department_name"] or UNKNOWN_DEPARTMENT
    fields["campus_name"] = fields["campus_name"] or UNKNOWN_CAMPUS
    return ReconciledAttendanceRow(
        id=record.id,
        day=record.day,
        present=record.present,
        month=record.month,
        year=record.year,
        **fields
    )


def _parse_period(date: str):
    """Parse a ``MM/YYYY`` string into (month, year)"""
    parts = date.split("/")
    if len(parts) != 2:
        raise ValidationError("Invalid date format. Expected MM/YYYY")
    try:
        month, year = int(parts[0]), int(parts[1])
    except ValueError:
        raise ValidationError("Invalid date format. Expected MM/YYYY")
    if not month or not year:
        raise ValidationError("Invalid date format. Expected MM/YYYY")
    return month, year


async def delete_attendance(
        db: AsyncSession,
        attendance_id: Optional[str] = None,
        student_id: Optional[str] = None,
        day: Optional[str] = None,
        date: Optional[str] = None
) -> None:
    """
    Delete one attendance record, addressed either by id or by (studentId, day, MM/YYYY).
    """
    if attendance_id:
        try:
            condition = AttendanceRecord.id == int(attendance_id)
        except ValueError:
            raise ValidationError(f"Invalid attendance id: {attendance_id!r}")
    elif student_id and day and date:
        month, year = _parse_period(date)
        try:
            parsed_student_id = int(student_id)
        except ValueError:
            raise ValidationError(f"Invalid studentId: {student_id!r}")
        logger.info(f"Deleting attendance for student {parsed_student_id}, day {day}, month {month}, year {year}")
        condition = and_(
            AttendanceRecord.student_id == parsed_student_id,
            AttendanceRecord.day == day.strip(),
            AttendanceRecord.month == month,
            AttendanceRecord.year == year
        )
    else:
        raise ValidationError("Either attendance ID or combination of studentId, day, and date is required")

    result = await db.execute(delete(AttendanceRecord).where(condition))
    if result.rowcount == 0:
        raise NotFoundError("Attendance record not found")

    await db.commit()
    logger.info("Successfully deleted attendance record")
