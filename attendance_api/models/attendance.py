from sqlalchemy import Boolean, Column, Integer, String, UniqueConstraint

from attendance_api.database import Base


class AttendanceRecord(Base):
    __tablename__ = "attendance"
    __table_args__ = (
        UniqueConstraint("student_id", "day", "month", "year", name="uq_attendance_student_day"),
    )

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    # no foreign key: deleting a student leaves its attendance rows in place
    student_id = Column(Integer, nullable=False, index=True)
    present = Column(Boolean, nullable=False, default=False)
    day = Column(String(2), nullable=False)
    date = Column(String(10), nullable=False)  # YYYY-MM-DD, display only
    month = Column(Integer, nullable=False)
    year = Column(Integer, nullable=False)
