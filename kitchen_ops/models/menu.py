"""
Menu and stock models - dishes, their recipes, and the ingredients they draw on
"""
from sqlalchemy import Column, String, Float, Boolean, Date, JSON
from kitchen_ops.database import Base
from kitchen_ops.models.entity import EntityMixin


class MenuItem(EntityMixin, Base):
    __tablename__ = "menu_items"

    name = Column(String, nullable=False)
    category = Column(String, nullable=True)
    price = Column(Float, nullable=True, default=0)
    cost = Column(Float, nullable=True, default=0)

    # Recipe: [{ingredient_id, ingredient_name, quantity, unit}] per serving
    ingredients = Column(JSON, nullable=False, default=list)

    is_active = Column(Boolean, default=True)


class Ingredient(EntityMixin, Base):
    __tablename__ = "ingredients"

    name = Column(String, nullable=False)
    unit = Column(String, nullable=False, default="kg")
    current_stock = Column(Float, nullable=False, default=0)
    par_level = Column(Float, nullable=True)
    last_ordered = Column(Date, nullable=True)
