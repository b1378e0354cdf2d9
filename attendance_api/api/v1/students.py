import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from attendance_api.crud.student import (
    create_student,
    delete_student,
    get_student_detail,
    get_students,
    update_student_profile
)
from attendance_api.dependencies import get_db
from attendance_api.exceptions import NotFoundError, StorageError, ValidationError
from attendance_api.schemas.common import MessageResponse
from attendance_api.schemas.student_schema import (
    StudentCreate,
    StudentDetailResponse,
    StudentListResponse,
    StudentResponse,
    StudentUpdate
)


# Setup logger
logger = logging.getLogger(__name__)

str_router = APIRouter(prefix="/students", tags=["students"])


async def _load_student(db: AsyncSession, student_id: int) -> StudentResponse:
    student = await get_student_detail(db, student_id)
    if student is None:
        logger.warning(f"Student not found with id: {student_id}")
        raise NotFoundError("Student not found")
    return StudentResponse.model_validate(dict(student))


@str_router.get("", response_model=StudentListResponse)
async def list_students(db: AsyncSession = Depends(get_db)):
    """
    All students with their department and campus names, ordered by name.
    """
    try:
        students = await get_students(db)
    except SQLAlchemyError as e:
        logger.error(f"Database error fetching students: {str(e)}", exc_info=True)
        raise StorageError(str(e))

    return StudentListResponse(
        success=True,
        data=[StudentResponse.model_validate(dict(s)) for s in students]
    )


@str_router.get("/{student_id}", response_model=StudentDetailResponse)
async def get_student(student_id: int, db: AsyncSession = Depends(get_db)):
    try:
        student = await _load_student(db, student_id)
    except SQLAlchemyError as e:
        logger.error(f"Database error fetching student {student_id}: {str(e)}", exc_info=True)
        raise StorageError(str(e))

    return StudentDetailResponse(success=True, data=student)


@str_router.post("", response_model=StudentDetailResponse, status_code=status.HTTP_201_CREATED)
async def create_student_endpoint(
        student: StudentCreate,
        db: AsyncSession = Depends(get_db)
):
    """
    Register a new student. The matricule must not be in use.
    """
    logger.info(f"Creating student with matricule: {student.matricule}")

    try:
        new_student = await create_student(db, student)
        created = await _load_student(db, new_student.id)
    except SQLAlchemyError as e:
        logger.error(f"Database error creating student {student.matricule}: {str(e)}", exc_info=True)
        raise StorageError(str(e))

    return StudentDetailResponse(success=True, data=created)


@str_router.put("/{student_id}", response_model=StudentDetailResponse)
async def update_student_profile_endpoint(
        student_id: int,
        student_update: StudentUpdate,
        db: AsyncSession = Depends(get_db)
):
    """
    Update student profile information.

    - **student_id**: ID of student to update
    - **student_update**: Fields to update
    """
    logger.info(f"Updating student profile for student_id: {student_id}")

    try:
        await update_student_profile(db, student_id, student_update)
        updated = await _load_student(db, student_id)
    except SQLAlchemyError as e:
        logger.error(f"Database error updating student {student_id}: {str(e)}", exc_info=True)
        raise StorageError(str(e))

    logger.info(f"Successfully updated student profile for student_id: {student_id}")
    return StudentDetailResponse(success=True, data=updated)


@str_router.delete("", response_model=MessageResponse)
async def delete_student_endpoint(
        student_id: Optional[str] = Query(None, alias="id"),
        db: AsyncSession = Depends(get_db)
):
    if not student_id:
        raise ValidationError("Student ID is required")
    try:
        parsed_id = int(student_id)
    except ValueError:
        raise ValidationError(f"Invalid student ID: {student_id!r}")

    try:
        await delete_student(db, parsed_id)
    except SQLAlchemyError as e:
        logger.error(f"Database error deleting student {parsed_id}: {str(e)}", exc_info=True)
        raise StorageError(str(e))

    return MessageResponse(success=True, message="Student deleted successfully")
