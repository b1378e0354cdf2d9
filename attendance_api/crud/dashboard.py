import calendar
import logging
from datetime import date, datetime
from typing import Optional, Tuple

from sqlalchemy import and_, case, func, true
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from attendance_api.crud.filters import ALL
from attendance_api.exceptions import ValidationError
from attendance_api.models.attendance import AttendanceRecord
from attendance_api.models.reference import Campus, Department
from attendance_api.models.student import Student
from attendance_api.schemas.dashboard import (
    AttendanceSummary,
    CampusStats,
    DashboardStats,
    DepartmentStats,
    TrendPoint,
)

logger = logging.getLogger(__name__)


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"Invalid date {value!r}. Expected YYYY-MM-DD")


def resolve_date_range(date_from: Optional[str], date_to: Optional[str], today: Optional[date] = None) -> Tuple[str, str]:
    """Return the requested range, defaulting to the current month when a bound is missing."""
    if date_from and date_to:
        start, end = parse_iso_date(date_from), parse_iso_date(date_to)
        if start > end:
            raise ValidationError("'from' must not be after 'to'")
        return start.isoformat(), end.isoformat()

    today = today or date.today()
    last_day = calendar.monthrange(today.year, today.month)[1]
    start = today.replace(day=1)
    end = today.replace(day=last_day)
    logger.info(f"Using default date range: {start} - {end}")
    return start.isoformat(), end.isoformat()


def attendance_rate(present: int, possible: int) -> float:
    if possible <= 0:
        return 0.0
    return round(present / possible * 100, 2)


def _count_present():
    return func.count(case((AttendanceRecord.present.is_(True), 1)))


def _count_absent():
    return func.count(case((AttendanceRecord.present.is_(False), 1)))


def _as_int(value) -> int:
    return int(value or 0)


async def get_dashboard_stats(
        db: AsyncSession,
        date_from: Optional[str] = None,
        date_to: Optional[str] = None,
        department: Optional[str] = None
) -> DashboardStats:
    """
    Aggregate attendance counts and rates for a date range.

    ``department`` is a department name; when given (and not "all") only its
    students are counted in the totals, summary and trend.
    """
    start, end = resolve_date_range(date_from, date_to)

    department_condition = true()
    if department and department != ALL:
        department_condition = Department.name == department

    in_range = and_(
        AttendanceRecord.student_id == Student.id,
        AttendanceRecord.date.between(start, end)
    )

    total_students = await db.scalar(
        select(func.count(Student.id))
        .select_from(Student)
        .outerjoin(Department, Student.department_id == Department.id)
        .where(department_condition)
    )

    summary_row = (await db.execute(
        select(
            _count_present().label("present"),
            _count_absent().label("absent"),
            func.count(Student.id.distinct()).label("total"),
        )
        .select_from(Student)
        .outerjoin(Department, Student.department_id == Department.id)
        .outerjoin(AttendanceRecord, in_range)
        .where(department_condition)
    )).one()

    trend_rows = (await db.execute(
        select(
            AttendanceRecord.date,
            _count_present().label("present"),
            _count_absent().label("absent"),
            func.count(Student.id.distinct()).label("total"),
        )
        .select_from(Student)
        .outerjoin(Department, Student.department_id == Department.id)
        .join(AttendanceRecord, in_range)
        .where(department_condition)
        .group_by(AttendanceRecord.date)
        .order_by(AttendanceRecord.date)
    )).all()

    department_rows = (await db.execute(
        select(
            Department.name,
            Department.category,
            func.count(Student.id.distinct()).label("total"),
            _count_present().label("present"),
            func.count(AttendanceRecord.date.distinct()).label("total_days"),
        )
        .select_from(Department)
        .outerjoin(Student, Student.department_id == Department.id)
        .outerjoin(AttendanceRecord, in_range)
        .group_by(Department.id, Department.name, Department.category)
        .order_by(Department.name)
    )).all()

    campus_rows = (await db.execute(
        select(
            Campus.name,
            func.count(Student.id.distinct()).label("total"),
            _count_present().label("present"),
            func.count(AttendanceRecord.date.distinct()).label("total_days"),
        )
        .select_from(Campus)
        .outerjoin(Student, Student.campus_id == Campus.id)
        .outerjoin(AttendanceRecord, in_range)
        .group_by(Campus.id, Campus.name)
        .order_by(Campus.name)
    )).all()

    department_stats = []
    for row in department_rows:
        total, present, days = _as_int(row.total), _as_int(row.present), _as_int(row.total_days)
        department_stats.append(DepartmentStats(
            department=row.name,
            category=row.category,
            total=total,
            present=present,
            total_days=days,
            attendance_rate=attendance_rate(present, total * days)
        ))

    campus_stats = []
    for row in campus_rows:
        total, present, days = _as_int(row.total), _as_int(row.present), _as_int(row.total_days)
        campus_stats.append(CampusStats(
            campus=row.name,
            total=total,
            present=present,
            attendance_rate=attendance_rate(present, total * days)
        ))

    stats = DashboardStats(
        date_from=start,
        date_to=end,
        total_students=_as_int(total_students),
        summary=AttendanceSummary(
            present=_as_int(summary_row.present),
            absent=_as_int(summary_row.absent),
            total=_as_int(summary_row.total)
        ),
        trend=[
            TrendPoint(
                date=row.date,
                present=_as_int(row.present),
                absent=_as_int(row.absent),
                total=_as_int(row.total)
            )
            for row in trend_rows
        ],
        department_stats=department_stats,
        campus_stats=campus_stats
    )
    logger.info(
        f"Dashboard stats {start}..{end}: {stats.total_students} students, "
        f"{len(stats.trend)} trend points, {len(department_stats)} departments, {len(campus_stats)} campuses"
    )
    return stats
