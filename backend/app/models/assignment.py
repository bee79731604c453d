from sqlalchemy import Column, Integer, String, Date, DateTime, Numeric, ForeignKey, Index, UniqueConstraint, func
from sqlalchemy.orm import relationship

from app.db.base_class import Base

BILLING_TYPES = ("Monthly", "Fixed", "Daily", "Hourly")


class EmployeeProject(Base):
    """Links an employee to a project with an allocation share and billing terms."""

    __tablename__ = "employee_projects"  # type: ignore[assignment]
    __table_args__ = (
        UniqueConstraint("employee_id", "project_id", name="uq_employee_projects_employee_project"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    employee_id = Column(Integer, ForeignKey("employees.id", ondelete="CASCADE"), nullable=False)
    project_id = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False)
    allocation_percentage = Column(Numeric(5, 2), nullable=False, default=100)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=True)  # NULL means ongoing
    role_in_project = Column(String, nullable=True)
    po_number = Column(String, nullable=True)
    billing = Column(String, nullable=False, default="Monthly")
    rate = Column(Numeric(12, 2), nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    employee = relationship("Employee", back_populates="assignments")
    project = relationship("Project", back_populates="assignments", lazy="selectin")

    @property
    def project_name(self) -> str | None:
        return self.project.name if self.project is not None else None

    @property
    def client(self) -> str | None:
        return self.project.client if self.project is not None else None

    @property
    def po_amendments(self) -> list:
        # Amendments belong to the project; every assignment on it shares the ledger
        return list(self.project.po_amendments) if self.project is not None else []


Index('idx_employee_projects_employee', EmployeeProject.employee_id)
Index('idx_employee_projects_project', EmployeeProject.project_id)
