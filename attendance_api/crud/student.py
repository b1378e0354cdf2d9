import logging
from typing import List, Optional

from sqlalchemy import delete, true
from sqlalchemy.engine import RowMapping
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.sql.elements import ColumnElement

from attendance_api.exceptions import ConflictError, NotFoundError, ValidationError
from attendance_api.models.reference import Campus, Department
from attendance_api.models.student import Student
from attendance_api.schemas.student_schema import StudentCreate, StudentUpdate

# Setup logger
logger = logging.getLogger(__name__)

MATRICULE_TAKEN = "Matricule already exists. Please use a different matricule."
CONSTRAINT_VIOLATION = "Student conflicts with an existing record."


def _decorated_student_query():
    return (
        select(
            Student.id,
            Student.matricule,
            Student.name,
            Student.level,
            Student.address,
            Student.contact,
            Student.department_id,
            Student.campus_id,
            Department.name.label("department_name"),
            Department.category.label("department_category"),
            Campus.name.label("campus_name"),
        )
        .outerjoin(Department, Student.department_id == Department.id)
        .outerjoin(Campus, Student.campus_id == Campus.id)
    )


async def get_roster(db: AsyncSession, student_clause: Optional[ColumnElement] = None) -> List[RowMapping]:
    """
    Resolve the students matching a compiled filter clause.

    Department and campus names are attached through outer joins, so a
    student with a dangling reference is still returned with null names.
    Rows are ordered by student name.
    """
    query = _decorated_student_query().where(student_clause if student_clause is not None else true())
    query = query.order_by(Student.name.asc())

    result = await db.execute(query)
    roster = list(result.mappings().all())
    logger.info(f"Found {len(roster)} students matching filters")
    return roster


async def get_students(db: AsyncSession) -> List[RowMapping]:
    return await get_roster(db)


async def get_student_detail(db: AsyncSession, student_id: int) -> Optional[RowMapping]:
    result = await db.execute(_decorated_student_query().where(Student.id == student_id))
    return result.mappings().first()


async def get_student_by_id(db: AsyncSession, student_id: int) -> Optional[Student]:
    result = await db.execute(
        select(Student).where(Student.id == student_id)
    )
    return result.scalar_one_or_none()


async def get_student_by_matricule(db: AsyncSession, matricule: str) -> Optional[Student]:
    result = await db.execute(
        select(Student).where(Student.matricule == matricule)
    )
    return result.scalar_one_or_none()


async def ensure_references(
        db: AsyncSession,
        department_id: Optional[int] = None,
        campus_id: Optional[int] = None
) -> None:
    """Reject department or campus ids that do not exist."""
    if department_id is not None and await db.get(Department, department_id) is None:
        raise ValidationError(f"Department {department_id} does not exist")
    if campus_id is not None and await db.get(Campus, campus_id) is None:
        raise ValidationError(f"Campus {campus_id} does not exist")


async def create_student(db: AsyncSession, student: StudentCreate) -> Student:
    """
    Insert a new student after checking that the matricule is free.
    """
    await ensure_references(db, student.department_id, student.campus_id)

    existing = await get_student_by_matricule(db, student.matricule)
    if existing:
        logger.warning(f"Student creation rejected - matricule already exists: {student.matricule}")
        raise ConflictError(MATRICULE_TAKEN)

    db_student = Student(**student.model_dump(exclude_none=True))
    db.add(db_student)
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        logger.warning(f"Integrity error creating student {student.matricule}: {e.orig}")
        raise ConflictError(CONSTRAINT_VIOLATION) from e

    await db.refresh(db_student)
    logger.info(f"Created student {db_student.id} ({db_student.matricule})")
    return db_student


async def update_student_profile(
        db: AsyncSession,
        student_id: int,
        student_update: StudentUpdate
) -> Student:
    """
    Update only the provided student fields
    """
    db_student = await get_student_by_id(db, student_id)
    if not db_student:
        raise NotFoundError("Student not found")

    update_data = student_update.model_dump(exclude_unset=True, exclude_none=True)
    await ensure_references(db, update_data.get("department_id"), update_data.get("campus_id"))

    new_matricule = update_data.get("matricule")
    if new_matricule and new_matricule != db_student.matricule:
        duplicate = await get_student_by_matricule(db, new_matricule)
        if duplicate and duplicate.id != db_student.id:
            logger.warning(f"Student {student_id} update rejected - matricule in use: {new_matricule}")
            raise ConflictError(MATRICULE_TAKEN)

    for field, value in update_data.items():
        setattr(db_student, field, value)

    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise ConflictError(CONSTRAINT_VIOLATION) from e

    await db.refresh(db_student)
    return db_student


async def delete_student(db: AsyncSession, student_id: int) -> None:
    """
    Delete a student row. Attendance rows for the student are kept.
    """
    result = await db.execute(
        delete(Student).where(Student.id == student_id)
    )
    if result.rowcount == 0:
        raise NotFoundError("Student not found")

    await db.commit()
    logger.info(f"Deleted student {student_id}")
