"""
Operation report model - dashboard-visible summary of a completed operation
"""
from sqlalchemy import Column, String, Integer, Date, DateTime, JSON
from kitchen_ops.database import Base
from kitchen_ops.models.entity import EntityMixin


class OperationReport(EntityMixin, Base):
    __tablename__ = "operation_reports"

    report_id = Column(String, nullable=False, index=True)  # e.g. HACCP-1.2-1760870000000, not unique
    report_type = Column(String, nullable=False, index=True)
    location_id = Column(String, nullable=True, index=True)

    staff_id = Column(String, nullable=True)
    staff_name = Column(String, nullable=True)
    staff_email = Column(String, nullable=True)

    report_date = Column(Date, nullable=True)
    completion_percentage = Column(Integer, default=0)
    status = Column(String, nullable=True)  # completed, in_progress

    # Record this report summarises
    source_entity_id = Column(String, nullable=True)
    source_entity_type = Column(String, nullable=True)

    timestamp = Column(DateTime, nullable=True)
    checklist_items = Column(JSON, nullable=False, default=list)  # [{item_id, item_name, answer}]
