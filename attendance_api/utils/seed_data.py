import logging

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from attendance_api.models.reference import Campus, Department, Level

logger = logging.getLogger(__name__)

CAMPUSES = [
    {"name": "Bonaberi", "address": "Bonaberi, Douala"},
    {"name": "Bonamousadi", "address": "Kamga Area, Bonamousadi"},
    {"name": "Yaounde", "address": "Yaounde Central"},
    {"name": "Bamenda", "address": "Bamenda Main Campus"},
]

DEPARTMENTS_BY_CATEGORY = {
    "Engineering": ["Software Engineering", "Network and Security", "MIT", "EPS"],
    "Medical": ["Medicine", "Pharmacy", "Nursing", "Laboratory Science"],
}

LEVELS = ["100", "200", "300", "400", "Masters 1", "Masters 2"]


async def seed_campuses(db: AsyncSession) -> int:
    existing = set((await db.execute(select(Campus.name))).scalars().all())
    added = 0
    for c in CAMPUSES:
        if c["name"] not in existing:
            db.add(Campus(name=c["name"], address=c["address"]))
            added += 1
    return added


async def seed_departments(db: AsyncSession) -> int:
    existing = set((await db.execute(select(Department.name))).scalars().all())
    added = 0
    for category, names in DEPARTMENTS_BY_CATEGORY.items():
        for name in names:
            if name not in existing:
                db.add(Department(name=name, category=category))
                added += 1
    return added


async def seed_levels(db: AsyncSession) -> int:
    existing = set((await db.execute(select(Level.level))).scalars().all())
    added = 0
    for label in LEVELS:
        if label not in existing:
            db.add(Level(level=label))
            added += 1
    return added


async def run_seed(db: AsyncSession) -> dict:
    """Insert the default campuses, departments and levels that are missing."""
    counts = {
        "campuses": await seed_campuses(db),
        "departments": await seed_departments(db),
        "levels": await seed_levels(db),
    }
    await db.commit()
    logger.info(f"Reference data seeded: {counts}")
    return counts
