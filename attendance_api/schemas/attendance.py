from typing import List, Optional, Union

from attendance_api.schemas.common import CamelModel


class ReconciledAttendanceRow(CamelModel):
    # id/day/present are null on "no record" placeholder rows
    id: Optional[int] = None
    student_id: int
    name: str
    matricule: Optional[str] = None
    level: Optional[str] = None
    department_id: Optional[int] = None
    department_name: Optional[str] = None
    campus_id: Optional[int] = None
    campus_name: Optional[str] = None
    day: Optional[str] = None
    present: Optional[bool] = None
    month: Optional[int] = None
    year: Optional[int] = None


class AttendanceMark(CamelModel):
    """Payload for marking one student's attendance on one day.

    Every field is optional at the schema level so that a missing field is
    reported by the mutation handler as a validation error.
    """
    student_id: Optional[int] = None
    day: Optional[Union[int, str]] = None
    month: Optional[int] = None
    year: Optional[int] = None
    present: Optional[bool] = None


class AttendanceListResponse(CamelModel):
    success: bool
    data: List[ReconciledAttendanceRow]


class AttendanceMarkResponse(CamelModel):
    success: bool
    data: ReconciledAttendanceRow
