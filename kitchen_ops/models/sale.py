"""
Sale model - a processed till transaction with its stock deductions
"""
from sqlalchemy import Column, String, Float, Boolean, DateTime, JSON
from kitchen_ops.database import Base
from kitchen_ops.models.entity import EntityMixin


class Sale(EntityMixin, Base):
    __tablename__ = "sales"

    sale_number = Column(String, nullable=False, unique=True)
    sale_type = Column(String, nullable=False, default="dine_in")  # dine_in, takeaway, delivery
    items = Column(JSON, nullable=False, default=list)

    subtotal = Column(Float, default=0)
    total_price = Column(Float, default=0)
    total_cost = Column(Float, default=0)
    gross_profit = Column(Float, default=0)
    gp_percentage = Column(Float, default=0)

    stock_deducted = Column(Boolean, default=False)
    deduction_log = Column(JSON, nullable=False, default=list)

    staff_email = Column(String, nullable=True)
    staff_name = Column(String, nullable=True)
    sale_date = Column(DateTime, nullable=True)
