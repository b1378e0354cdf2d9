from typing import List

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from attendance_api.models.reference import Campus, Department, Level


async def get_departments(db: AsyncSession) -> List[Department]:
    result = await db.execute(select(Department).order_by(Department.id))
    return list(result.scalars().all())


async def get_campuses(db: AsyncSession) -> List[Campus]:
    result = await db.execute(select(Campus).order_by(Campus.id))
    return list(result.scalars().all())


async def get_levels(db: AsyncSession) -> List[Level]:
    result = await db.execute(select(Level).order_by(Level.id))
    return list(result.scalars().all())
