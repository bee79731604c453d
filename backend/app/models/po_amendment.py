from sqlalchemy import Column, Integer, String, Date, DateTime, Boolean, ForeignKey, Index, func
from sqlalchemy.orm import relationship

from app.db.base_class import Base


class POAmendment(Base):
    __tablename__ = "po_amendments"  # type: ignore[assignment]

    id = Column(Integer, primary_key=True, autoincrement=True)
    project_id = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False)
    po_number = Column(String, nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=True)  # NULL means open-ended
    # Cache of the date-driven truth, rewritten by recompute_active
    is_active = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    project = relationship("Project", back_populates="po_amendments")


Index('idx_po_amendments_project', POAmendment.project_id)
Index('idx_po_amendments_active', POAmendment.is_active)
