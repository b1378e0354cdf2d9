from typing import List

from attendance_api.schemas.common import CamelModel


class CampusResponse(CamelModel):
    id: int
    name: str
    address: str


class DepartmentResponse(CamelModel):
    id: int
    name: str
    category: str


class LevelResponse(CamelModel):
    id: int
    level: str


class CampusListResponse(CamelModel):
    success: bool
    data: List[CampusResponse]


class DepartmentListResponse(CamelModel):
    success: bool
    data: List[DepartmentResponse]


class LevelListResponse(CamelModel):
    success: bool
    data: List[LevelResponse]
