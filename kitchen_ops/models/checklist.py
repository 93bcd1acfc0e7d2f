"""
Checklist templates (manually built or AI generated)
"""
from sqlalchemy import Column, String, Boolean, JSON
from kitchen_ops.database import Base
from kitchen_ops.models.entity import EntityMixin


class ChecklistMaster(EntityMixin, Base):
    __tablename__ = "checklist_masters"

    checklist_name = Column(String, nullable=False)
    checklist_category = Column(String, nullable=True)  # opening, closing, hygiene, ccp, ...
    assigned_station = Column(String, nullable=True)  # kitchen, foh, bar, all
    business_type = Column(String, nullable=True)
    compliance_level = Column(String, nullable=True)  # basic, eho, haccp
    special_focus = Column(JSON, nullable=False, default=list)

    # [{title, items: [{question, type}]}]
    sections = Column(JSON, nullable=False, default=list)

    is_published = Column(Boolean, default=False)
    created_by_ai = Column(Boolean, default=False)
    ai_model = Column(String, nullable=True)
    version = Column(String, nullable=True, default="1.0")
    created_by_name = Column(String, nullable=True)
    created_by_email = Column(String, nullable=True)
