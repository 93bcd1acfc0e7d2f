"""
Equipment / asset register
"""
from sqlalchemy import Column, String
from kitchen_ops.database import Base
from kitchen_ops.models.entity import EntityMixin


class Asset(EntityMixin, Base):
    __tablename__ = "assets"

    name = Column(String, nullable=False)
    category = Column(String, nullable=True)  # fridge, freezer, oven, probe, ...
    location_id = Column(String, nullable=True)
    status = Column(String, nullable=True, default="operational")
