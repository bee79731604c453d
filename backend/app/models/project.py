from sqlalchemy import Column, Integer, String, Text, Date, DateTime, Numeric, Index, func
from sqlalchemy.orm import relationship

from app.db.base_class import Base

PROJECT_STATUSES = ("Active", "Completed", "On Hold", "Cancelled")


class Project(Base):
    __tablename__ = "projects"  # type: ignore[assignment]

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    client = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    department = Column(String, nullable=True)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=True)
    status = Column(String, nullable=False, default="Active")
    po_number = Column(String, nullable=True)  # Legacy project-level PO
    budget = Column(Numeric(14, 2), nullable=True)
    currency = Column(String, nullable=True)
    billing_type = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    assignments = relationship("EmployeeProject", back_populates="project", cascade="all, delete-orphan")
    po_amendments = relationship(
        "POAmendment",
        back_populates="project",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="POAmendment.start_date.desc()",
    )


Index('idx_projects_client', Project.client)
Index('idx_projects_status', Project.status)
