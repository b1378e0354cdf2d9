import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from attendance_api.crud.attendance import delete_attendance, get_reconciled_attendance, mark_attendance
from attendance_api.crud.filters import FilterOptions
from attendance_api.dependencies import get_db
from attendance_api.exceptions import StorageError
from attendance_api.schemas.attendance import AttendanceListResponse, AttendanceMark, AttendanceMarkResponse
from attendance_api.schemas.common import MessageResponse

# Setup logging
logger = logging.getLogger(__name__)
router = APIRouter(prefix="/attendance", tags=["attendance"])


@router.get("", response_model=AttendanceListResponse)
async def list_attendance(
        level: Optional[str] = Query(None, description="Level label or 'all'"),
        month: Optional[str] = Query(None, description="Month (1-12), applied together with year"),
        year: Optional[str] = Query(None, description="Year, applied together with month"),
        department_id: Optional[str] = Query(None, alias="departmentId", description="Department id or 'all'"),
        campus_id: Optional[str] = Query(None, alias="campusId", description="Campus id or 'all'"),
        student_name: Optional[str] = Query(None, alias="studentName", description="Substring of the student name"),
        db: AsyncSession = Depends(get_db)
):
    """
    Attendance of the filtered roster for a period.

    Students with at least one record get one row per record; students with
    none get a single row where `day` and `present` are null.
    """
    options = FilterOptions(
        student_name=student_name,
        level=level,
        department_id=department_id,
        campus_id=campus_id,
        month=month,
        year=year
    )
    logger.info(f"Attendance list requested with filters: {options}")

    try:
        rows = await get_reconciled_attendance(db, options)
    except SQLAlchemyError as e:
        logger.error(f"Database error fetching attendance: {str(e)}", exc_info=True)
        raise StorageError(str(e))

    return AttendanceListResponse(success=True, data=rows)


@router.post("", response_model=AttendanceMarkResponse)
async def mark_student_attendance(
        mark: AttendanceMark,
        db: AsyncSession = Depends(get_db)
):
    """
    Mark a student present or absent for one day.

    Repeated calls for the same student and day update the existing record.
    """
    logger.info(f"Attendance POST - Request body: {mark.model_dump()}")

    try:
        row = await mark_attendance(db, mark)
    except SQLAlchemyError as e:
        logger.error(f"Database error marking attendance: {str(e)}", exc_info=True)
        raise StorageError(str(e))

    return AttendanceMarkResponse(success=True, data=row)


@router.delete("", response_model=MessageResponse)
async def unmark_attendance(
        attendance_id: Optional[str] = Query(None, alias="id"),
        student_id: Optional[str] = Query(None, alias="studentId"),
        day: Optional[str] = Query(None),
        date: Optional[str] = Query(None, description="MM/YYYY"),
        db: AsyncSession = Depends(get_db)
):
    """
    Delete an attendance record by `id`, or by `studentId` + `day` + `date` (MM/YYYY).
    """
    logger.info(
        f"Attempting to delete attendance record: id={attendance_id}, "
        f"studentId={student_id}, day={day}, date={date}"
    )

    try:
        await delete_attendance(db, attendance_id=attendance_id, student_id=student_id, day=day, date=date)
    except SQLAlchemyError as e:
        logger.error(f"Database error deleting attendance: {str(e)}", exc_info=True)
        raise StorageError(str(e))

    return MessageResponse(success=True, message="Attendance record deleted successfully")
