from datetime import datetime, timezone

from sqlalchemy import Column, Integer, ForeignKey, String, DateTime, Numeric, JSON, Index
from sqlalchemy.orm import relationship
from order_api.data.database import Base


def _utcnow():
    return datetime.now(timezone.utc)


class OrderModel(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True)
    order_number = Column(String(50), nullable=False, unique=True)

    customer_name = Column(String(100), nullable=False)
    customer_email = Column(String(255), nullable=False, index=True)
    customer_phone = Column(String(20), nullable=True)

    # zawsze przeliczane z pozycji przez OrderRepo
    total_amount = Column(Numeric(12, 2), nullable=False, default=0)
    status = Column(String(20), nullable=False, default="pending")  # pending, processing, shipped, delivered, cancelled
    payment_status = Column(String(20), nullable=False, default="pending")  # pending, paid, refunded

    # adres wysyłki zapisany razem z zamówieniem
    shipping_street = Column(String(255), nullable=True)
    shipping_city = Column(String(100), nullable=True)
    shipping_state = Column(String(100), nullable=True)
    shipping_zip_code = Column(String(20), nullable=True)
    shipping_country = Column(String(100), nullable=True)

    notes = Column(String(500), nullable=True)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=False)

    # pola tylko dla admina
    assigned_to = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    admin_notes = Column(String(1000), nullable=True)
    priority = Column(String(10), nullable=False, default="medium")  # low, medium, high, urgent
    tags = Column(JSON, nullable=False, default=list)
    estimated_delivery_date = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    items = relationship(
        "OrderItemModel",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItemModel.position",
    )
    creator = relationship("UserModel", foreign_keys=[created_by])
    assignee = relationship("UserModel", foreign_keys=[assigned_to])

    __table_args__ = (
        Index("ix_orders_created_by_status", "created_by", "status"),
        Index("ix_orders_assigned_to", "assigned_to"),
        Index("ix_orders_status_payment_status", "status", "payment_status"),
    )
