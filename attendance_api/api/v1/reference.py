import logging

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from attendance_api.crud.reference import get_campuses, get_departments, get_levels
from attendance_api.dependencies import get_db
from attendance_api.exceptions import StorageError
from attendance_api.schemas.reference import (
    CampusListResponse,
    CampusResponse,
    DepartmentListResponse,
    DepartmentResponse,
    LevelListResponse,
    LevelResponse
)

logger = logging.getLogger(__name__)

reference_router = APIRouter(tags=["reference"])


@reference_router.get("/departments", response_model=DepartmentListResponse)
async def list_departments(db: AsyncSession = Depends(get_db)):
    try:
        departments = await get_departments(db)
    except SQLAlchemyError as e:
        logger.error(f"Error fetching departments: {str(e)}", exc_info=True)
        raise StorageError(str(e))
    return DepartmentListResponse(success=True, data=[DepartmentResponse.model_validate(d) for d in departments])


@reference_router.get("/campuses", response_model=CampusListResponse)
async def list_campuses(db: AsyncSession = Depends(get_db)):
    try:
        campuses = await get_campuses(db)
    except SQLAlchemyError as e:
        logger.error(f"Error fetching campuses: {str(e)}", exc_info=True)
        raise StorageError(str(e))
    return CampusListResponse(success=True, data=[CampusResponse.model_validate(c) for c in campuses])


@reference_router.get("/levels", response_model=LevelListResponse)
async def list_levels(db: AsyncSession = Depends(get_db)):
    try:
        levels = await get_levels(db)
    except SQLAlchemyError as e:
        logger.error(f"Error fetching levels: {str(e)}", exc_info=True)
        raise StorageError(str(e))
    return LevelListResponse(success=True, data=[LevelResponse.model_validate(lv) for lv in levels])
