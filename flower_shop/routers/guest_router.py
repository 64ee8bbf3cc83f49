from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..auth import get_current_admin
from ..crud import get_guests
from ..database import get_db
from ..schemas import AdminContext, GuestWithBookings

router = APIRouter(prefix="/guests", tags=["Guests"])


@router.get("", response_model=List[GuestWithBookings])
def list_guests(
    current_admin: AdminContext = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    return get_guests(db)
