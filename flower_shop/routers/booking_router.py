from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from .. import bookings, crud
from ..auth import get_current_admin
from ..database import get_db
from ..errors import MethodNotAllowed
from ..messaging import booking_event_payload, publish_event
from ..schemas import AdminContext, BookingCreate, BookingOut, BookingStatusUpdate

router = APIRouter(prefix="/bookings", tags=["Bookings"])


@router.post("", response_model=BookingOut, status_code=status.HTTP_201_CREATED)
def create_booking(body: BookingCreate, db: Session = Depends(get_db)):
    """Book a product for a guest.

    The guest is matched by email and created on first use. Stock is taken
    immediately; the booking starts in status "Booking".
    """
    booking = bookings.create_booking(db, body)
    publish_event("booking.created", booking_event_payload(booking))
    return booking


@router.get("", response_model=List[BookingOut])
def list_bookings(
    current_admin: AdminContext = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    return crud.get_bookings(db)


@router.get("/{booking_id}", response_model=BookingOut)
def view_booking(
    booking_id: int,
    current_admin: AdminContext = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    booking = crud.get_booking(db, booking_id)
    if not booking:
        raise HTTPException(status_code=404, detail="Booking not found")
    return booking


def _transition(db: Session, booking_id: int, body: BookingStatusUpdate):
    booking = bookings.transition_booking_status(db, booking_id, body.status)
    publish_event("booking.status_changed", booking_event_payload(booking))
    return booking


@router.patch("/{booking_id}", response_model=BookingOut)
def update_booking_status(
    booking_id: int,
    body: BookingStatusUpdate,
    current_admin: AdminContext = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    return _transition(db, booking_id, body)


@router.post("/{booking_id}", response_model=BookingOut)
def update_booking_status_override(
    booking_id: int,
    body: BookingStatusUpdate,
    method: str = Query("POST", alias="_method", description="Must be `PATCH`"),
    current_admin: AdminContext = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    """Status change for clients that can only send POST (`?_method=PATCH`)."""
    if method != "PATCH":
        raise MethodNotAllowed()
    return _transition(db, booking_id, body)
