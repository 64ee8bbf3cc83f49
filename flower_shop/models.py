import datetime as dt

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


def _utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(150), nullable=False, index=True)
    catalog_type = Column(String(50), nullable=False, index=True)
    detail = Column(Text)
    price = Column(Numeric(12, 2), nullable=False)
    stock = Column(Integer, nullable=False, default=0)
    status = Column(String(30), nullable=False, default="Available")
    is_deleted = Column(Boolean, nullable=False, default=False, index=True)
    image = Column(String(500), nullable=False, default="")
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    bookings = relationship("Booking", back_populates="product")

    __table_args__ = (
        CheckConstraint("price >= 0", name="check_product_price_non_negative"),
        CheckConstraint("stock >= 0", name="check_product_stock_non_negative"),
    )


class Guest(Base):
    """A customer identified by email, not tied to any login account."""

    __tablename__ = "guests"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(150), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    phone = Column(String(50), nullable=False)
    delivery_type = Column(String(20), nullable=False)
    receiver_name = Column(String(150))
    receiver_phone = Column(String(50))
    receiver_address = Column(Text)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    bookings = relationship("Booking", back_populates="guest")


class Booking(Base):
    """One line-item order of a single product by a single guest.

    product_id becomes NULL when the product row is purged; the booking is kept
    as a historical record. total_cost is captured at creation and never
    recomputed.
    """

    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="SET NULL"), nullable=True, index=True)
    guest_id = Column(Integer, ForeignKey("guests.id"), nullable=False, index=True)
    quantity = Column(Integer, nullable=False)
    order_date = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    pickup_date = Column(DateTime(timezone=True), nullable=False)
    total_cost = Column(Numeric(14, 2), nullable=False)
    status = Column(String(20), nullable=False, default="Booking", index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    product = relationship("Product", back_populates="bookings")
    guest = relationship("Guest", back_populates="bookings")

    __table_args__ = (
        CheckConstraint("quantity > 0", name="check_booking_quantity_positive"),
        CheckConstraint(
            "status IN ('Booking', 'Confirmed', 'Done Order', 'Canceled')",
            name="check_booking_status",
        ),
    )

    def __repr__(self) -> str:
        return f"<Booking(id={self.id}, product={self.product_id}, guest={self.guest_id}, status={self.status})>"
