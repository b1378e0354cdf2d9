from sqlalchemy.future import select

from attendance_api.models.attendance import AttendanceRecord


def record(student_id, day, month=3, year=2024, present=True, record_id=None):
    return AttendanceRecord(
        id=record_id,
        student_id=student_id,
        day=str(day),
        date=f"{year:04d}-{month:02d}-{str(day):0>2}",
        month=month,
        year=year,
        present=present,
    )


def roster_entry(student_id, name, level="100", department_id=1, campus_id=1):
    return {
        "id": student_id,
        "name": name,
        "matricule": f"CM{student_id:05d}",
        "level": level,
        "department_id": department_id,
        "department_name": "Software Engineering",
        "campus_id": campus_id,
        "campus_name": "Bonaberi",
    }


async def add_records(db, *records):
    async with db.get_session() as session:
        session.add_all(records)
        await session.commit()


async def fetch_records(db, **criteria):
    async with db.get_session() as session:
        query = select(AttendanceRecord).filter_by(**criteria).order_by(AttendanceRecord.id)
        result = await session.execute(query)
        return list(result.scalars().all())
