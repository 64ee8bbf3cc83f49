"""Booking lifecycle: creating bookings and moving them between statuses.

This is the only place where a product's stock and a booking's status change
together. Stock is taken when a booking is created and given back when the
booking is canceled; every other transition leaves stock alone.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Optional

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from . import crud
from .errors import (
    BookingNotFound,
    InsufficientStock,
    InvalidStatus,
    PersistenceError,
    ProductNotFound,
    ShopError,
    ValidationError,
)
from .models import Booking, Guest, Product
from .schemas import VALID_STATUSES, BookingCreate, BookingStatus, GuestContact

logger = logging.getLogger(__name__)


def _resolve_guest(db: Session, contact: GuestContact) -> Guest:
    """Reuse the guest with this exact email, or create one."""
    guest = crud.find_guest_by_email(db, contact.email)
    if guest is not None:
        return guest

    try:
        return crud.create_guest(db, contact.model_dump())
    except IntegrityError:
        # Another request inserted the same email first
        db.rollback()
        guest = crud.find_guest_by_email(db, contact.email)
        if guest is None:
            raise
        return guest


def _take_stock(db: Session, product_id: int, quantity: int) -> bool:
    """Decrement stock by quantity only if at least quantity is left."""
    result = db.execute(
        update(Product)
        .where(Product.id == product_id, Product.stock >= quantity)
        .values(stock=Product.stock - quantity)
    )
    return result.rowcount == 1


def _restore_stock(db: Session, booking: Booking) -> bool:
    """Give a canceled booking's quantity back to its product.

    Returns False when the booking no longer points at a product row; the
    caller carries on with the status change in that case.
    """
    if booking.product_id is None:
        logger.warning("Product missing for booking %s; stock not restored", booking.id)
        return False

    result = db.execute(
        update(Product)
        .where(Product.id == booking.product_id)
        .values(stock=Product.stock + booking.quantity)
    )
    if result.rowcount == 0:
        logger.warning(
            "Product %s missing for booking %s; stock not restored",
            booking.product_id,
            booking.id,
        )
        return False
    return True


def create_booking(db: Session, payload: BookingCreate) -> Booking:
    """Create a booking in status "Booking" and take its quantity from stock.

    Guest resolution, the stock decrement and the booking insert commit
    together or not at all.
    """
    product = crud.get_product(db, payload.product_id)
    if not product:
        raise ProductNotFound(f"Product with id {payload.product_id} not found")

    product_id = product.id
    product_name = product.name
    total_cost = Decimal(str(product.price)) * payload.quantity

    try:
        guest = _resolve_guest(db, payload.guest_data)

        if not _take_stock(db, product_id, payload.quantity):
            available = db.query(Product.stock).filter(Product.id == product_id).scalar()
            raise InsufficientStock(
                f"Insufficient stock for product '{product_name}' (ID: {product_id}). "
                f"Available: {available}, Requested: {payload.quantity}"
            )

        booking = Booking(
            product_id=product_id,
            guest_id=guest.id,
            quantity=payload.quantity,
            pickup_date=payload.pickup_date,
            total_cost=total_cost,
            status=BookingStatus.BOOKING.value,
        )
        db.add(booking)
        db.commit()
    except ShopError:
        db.rollback()
        raise
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Failed to create booking for product %s", product_id)
        raise PersistenceError(error="Failed to create booking") from e

    db.refresh(booking)
    logger.info(
        "Booking %s created: product=%s guest=%s quantity=%s",
        booking.id,
        product_id,
        booking.guest_id,
        booking.quantity,
    )
    return booking


def transition_booking_status(db: Session, booking_id: int, new_status: Optional[str]) -> Booking:
    """Set a booking's status, restoring stock on the way into "Canceled"."""
    if not isinstance(new_status, str) or not new_status.strip():
        raise ValidationError(error="Status is required")
    if new_status not in VALID_STATUSES:
        raise InvalidStatus(error=f"Invalid status. Valid values: {', '.join(VALID_STATUSES)}")

    try:
        booking = (
            db.query(Booking)
            .filter(Booking.id == booking_id)
            .with_for_update()
            .populate_existing()
            .first()
        )
        if not booking:
            raise BookingNotFound(f"Booking with id {booking_id} not found")

        previous = booking.status
        if new_status == BookingStatus.CANCELED.value and previous != BookingStatus.CANCELED.value:
            _restore_stock(db, booking)

        booking.status = new_status
        db.commit()
    except ShopError:
        db.rollback()
        raise
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Failed to update booking %s", booking_id)
        raise PersistenceError(error="Failed to update booking") from e

    db.refresh(booking)
    logger.info("Booking %s status: %s -> %s", booking.id, previous, new_status)
    return booking
