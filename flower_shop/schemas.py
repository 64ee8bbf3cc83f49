import datetime as dt
from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator
from pydantic.alias_generators import to_camel


class BookingStatus(str, Enum):
    BOOKING = "Booking"
    CONFIRMED = "Confirmed"
    DONE_ORDER = "Done Order"
    CANCELED = "Canceled"


VALID_STATUSES = [s.value for s in BookingStatus]

# Largest value an INTEGER column holds on every supported database
MAX_INT = 2_147_483_647


# Payloads are camelCase on the wire, snake_case in Python
class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class CamelInput(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="forbid",
    )


# -----------------------------
# Products
# -----------------------------

class ProductOut(CamelModel):
    id: int
    name: str
    catalog_type: str
    detail: Optional[str] = None
    price: float
    stock: int
    status: str
    is_deleted: bool
    image: str = ""
    created_at: dt.datetime
    updated_at: Optional[dt.datetime] = None


# -----------------------------
# Guests
# -----------------------------

class GuestContact(CamelInput):
    """Contact details submitted with a booking."""

    name: str = Field(..., min_length=1, max_length=150)
    email: EmailStr
    phone: str = Field(..., min_length=1, max_length=50)
    delivery_type: Literal["pickup", "delivery"]
    receiver_name: Optional[str] = Field(None, max_length=150)
    receiver_phone: Optional[str] = Field(None, max_length=50)
    receiver_address: Optional[str] = None

    @model_validator(mode="after")
    def _receiver_required_for_delivery(self):
        if self.delivery_type == "delivery":
            missing = [
                to_camel(field)
                for field in ("receiver_name", "receiver_phone", "receiver_address")
                if not getattr(self, field)
            ]
            if missing:
                raise ValueError(f"{', '.join(missing)} required for delivery")
        return self


class GuestOut(CamelModel):
    id: int
    name: str
    email: str
    phone: str
    delivery_type: str
    receiver_name: Optional[str] = None
    receiver_phone: Optional[str] = None
    receiver_address: Optional[str] = None
    created_at: dt.datetime


# -----------------------------
# Bookings
# -----------------------------

class BookingCreate(CamelInput):
    product_id: int = Field(..., gt=0, le=MAX_INT, description="Product ID")
    guest_data: GuestContact
    quantity: int = Field(..., gt=0, le=MAX_INT, description="Number of items")
    pickup_date: dt.datetime


class BookingStatusUpdate(CamelInput):
    # Validated by the lifecycle manager so that a missing status and an
    # unknown status are reported differently
    status: Optional[str] = None


class BookingSummary(CamelModel):
    id: int
    product_id: Optional[int] = None
    guest_id: int
    quantity: int
    order_date: dt.datetime
    pickup_date: dt.datetime
    total_cost: float
    status: str
    created_at: dt.datetime
    updated_at: Optional[dt.datetime] = None
    product: Optional[ProductOut] = None


class BookingOut(BookingSummary):
    guest: GuestOut


class GuestWithBookings(GuestOut):
    bookings: List[BookingSummary] = []


# -----------------------------
# Admin
# -----------------------------

class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class Token(BaseModel):
    access_token: str
    token_type: str


class AdminCheck(BaseModel):
    authenticated: bool


class AdminContext(BaseModel):
    """The authenticated operator behind an admin request."""

    username: str
    expires_at: Optional[dt.datetime] = None


class DashboardOut(CamelModel):
    total_products: int
    available_products: int
    sold_products: int
    monthly_revenue: float
    recent_bookings: List[BookingOut]
