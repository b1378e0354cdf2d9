from typing import List, Optional

from attendance_api.schemas.common import CamelModel


class AttendanceSummary(CamelModel):
    present: int = 0
    absent: int = 0
    total: int = 0


class TrendPoint(CamelModel):
    date: str
    present: int = 0
    absent: int = 0
    total: int = 0


class DepartmentStats(CamelModel):
    department: str
    category: Optional[str] = None
    total: int = 0
    present: int = 0
    total_days: int = 0
    attendance_rate: float = 0.0


class CampusStats(CamelModel):
    campus: str
    total: int = 0
    present: int = 0
    attendance_rate: float = 0.0


class DashboardStats(CamelModel):
    date_from: str
    date_to: str
    total_students: int
    summary: AttendanceSummary
    trend: List[TrendPoint]
    department_stats: List[DepartmentStats]
    campus_stats: List[CampusStats]


class DashboardStatsResponse(CamelModel):
    success: bool
    data: DashboardStats
