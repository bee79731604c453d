from sqlalchemy import Column, Integer, String, Date, DateTime, func
from sqlalchemy.orm import relationship

from app.db.base_class import Base


class Employee(Base):
    __tablename__ = "employees"  # type: ignore[assignment]

    id = Column(Integer, primary_key=True, index=True)
    employee_code = Column(String, nullable=False, unique=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=True, unique=True)
    department = Column(String, nullable=True)
    designation = Column(String, nullable=True)
    location = Column(String, nullable=True)
    # Manually entered; derived billability is computed per assignment on read
    billability_status = Column(String, nullable=False, default="Bench")
    last_active_date = Column(Date, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    assignments = relationship(
        "EmployeeProject",
        back_populates="employee",
        cascade="all, delete-orphan",
        lazy="selectin",
    )
