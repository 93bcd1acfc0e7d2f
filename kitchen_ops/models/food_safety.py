"""
Food safety models - critical control points, hazards and versioned HACCP plans
"""
from sqlalchemy import Column, String, Text, Integer, Boolean, Date, DateTime, JSON
from kitchen_ops.database import Base
from kitchen_ops.models.entity import EntityMixin


class CriticalControlPoint(EntityMixin, Base):
    __tablename__ = "critical_control_points"

    name = Column(String, nullable=False)
    stage = Column(String, nullable=True)  # delivery, storage, cooking, ...
    monitoring_parameter = Column(String, nullable=True)
    critical_limit = Column(String, nullable=True)
    unit = Column(String, nullable=True)  # celsius, minutes, ph, ...
    check_frequency = Column(String, nullable=True)
    monitoring_method = Column(String, nullable=True)
    responsible_role = Column(String, nullable=True)


class Hazard(EntityMixin, Base):
    __tablename__ = "hazards"

    type = Column(String, nullable=False)  # biological, chemical, physical
    description = Column(Text, nullable=False)
    severity = Column(String, nullable=True)  # low, medium, high


class HACCPPlan(EntityMixin, Base):
    """One generated plan document; at most one active per location"""
    __tablename__ = "haccp_plans"

    location_id = Column(String, nullable=False, index=True)
    location_name = Column(String, nullable=True)
    version = Column(String, nullable=False)  # "major.minor"
    last_updated = Column(DateTime, nullable=True)
    verified_by = Column(String, nullable=True)
    verified_date = Column(Date, nullable=True)
    is_active = Column(Boolean, default=False, index=True)

    scope = Column(Text, nullable=True)
    hazard_analysis_complete = Column(Boolean, default=False)
    ccps_identified = Column(Integer, default=0)
    linked_menu_items = Column(JSON, nullable=False, default=list)
    compliance_status = Column(String, nullable=True)

    # Full generated document text
    notes = Column(Text, nullable=True)
