from sqlalchemy import Column, Integer, String, ForeignKey

from attendance_api.database import Base


class Student(Base):
    __tablename__ = "students"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    matricule = Column(String(50), nullable=False, unique=True, index=True)
    name = Column(String(255), nullable=False)
    # free text, matched against levels.level but not a foreign key
    level = Column(String(50), nullable=False)
    address = Column(String(255), nullable=False)
    contact = Column(String(100), nullable=False)
    department_id = Column(Integer, ForeignKey("departments.id"), nullable=False)
    campus_id = Column(Integer, ForeignKey("campuses.id"), nullable=False)
