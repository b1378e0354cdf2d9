from sqlalchemy import Column, Integer, String

from attendance_api.database import Base


class Campus(Base):
    __tablename__ = "campuses"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    address = Column(String(255), nullable=False)


class Department(Base):
    __tablename__ = "departments"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    category = Column(String(100), nullable=False)  # "Engineering", "Medical", ...


class Level(Base):
    __tablename__ = "levels"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    level = Column(String(50), nullable=False)
