from typing import List, Optional

from pydantic import Field

from attendance_api.schemas.common import CamelModel


class StudentCreate(CamelModel):
    id: Optional[int] = None
    matricule: str = Field(..., min_length=1, max_length=50)
    name: str = Field(..., min_length=1, max_length=255)
    level: str = Field(..., min_length=1, max_length=50)
    address: str = Field(..., min_length=1, max_length=255)
    contact: str = Field(..., min_length=1, max_length=100)
    department_id: int
    campus_id: int


class StudentUpdate(CamelModel):
    """Schema for a partial student update"""
    matricule: Optional[str] = Field(None, min_length=1, max_length=50)
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    level: Optional[str] = Field(None, min_length=1, max_length=50)
    address: Optional[str] = None
    contact: Optional[str] = None
    department_id: Optional[int] = None
    campus_id: Optional[int] = None


class StudentResponse(CamelModel):
    id: int
    matricule: str
    name: str
    level: str
    address: Optional[str] = None
    contact: Optional[str] = None
    department_id: Optional[int] = None
    campus_id: Optional[int] = None
    department_name: Optional[str] = None
    department_category: Optional[str] = None
    campus_name: Optional[str] = None


class StudentListResponse(CamelModel):
    success: bool
    data: List[StudentResponse]


class StudentDetailResponse(CamelModel):
    success: bool
    data: StudentResponse
