import datetime as dt
from typing import List, Optional

from sqlalchemy import func, update
from sqlalchemy.orm import Session, selectinload

from .models import Booking, Guest, Product
from .schemas import BookingStatus


# -----------------------------
# Catalog
# -----------------------------

def get_product(db: Session, product_id: int, *, include_deleted: bool = False) -> Optional[Product]:
    query = db.query(Product).filter(Product.id == product_id)
    if not include_deleted:
        query = query.filter(Product.is_deleted.is_(False))
    return query.first()


def get_products(db: Session, catalog_type: Optional[str] = None, search: Optional[str] = None) -> List[Product]:
    query = db.query(Product).filter(Product.is_deleted.is_(False))
    if catalog_type and catalog_type != "All":
        query = query.filter(Product.catalog_type == catalog_type)
    if search:
        query = query.filter(Product.name.ilike(f"%{search.strip()}%"))
    return query.order_by(Product.created_at.desc(), Product.id.desc()).all()


def create_product(db: Session, product_data: dict) -> Product:
    name = (product_data.get("name") or "").strip()
    if not name:
        raise ValueError("name_required")

    db_product = Product(**{**product_data, "name": name})
    db.add(db_product)
    db.commit()
    db.refresh(db_product)
    return db_product


def update_product(db: Session, product_id: int, update_data: dict) -> Optional[Product]:
    db_product = get_product(db, product_id)
    if not db_product:
        return None

    if "name" in update_data and update_data.get("name") is not None:
        new_name = str(update_data["name"]).strip()
        if not new_name:
            raise ValueError("name_required")
        update_data["name"] = new_name

    for key, value in update_data.items():
        if value is not None:
            setattr(db_product, key, value)
    db.commit()
    db.refresh(db_product)
    return db_product


def soft_delete_product(db: Session, product_id: int) -> Optional[Product]:
    db_product = get_product(db, product_id)
    if db_product:
        db_product.is_deleted = True
        db.commit()
        db.refresh(db_product)
    return db_product


def purge_product(db: Session, product_id: int) -> bool:
    """Delete the product row; its bookings stay and lose their product reference."""
    db_product = get_product(db, product_id, include_deleted=True)
    if not db_product:
        return False
    try:
        db.execute(
            update(Booking)
            .where(Booking.product_id == product_id)
            .values(product_id=None)
        )
        db.delete(db_product)
        db.commit()
    except Exception:
        db.rollback()
        raise
    return True


def seed_products(db: Session, products: List[dict]) -> int:
    """Insert the given products when the catalog is empty. Returns rows inserted."""
    if db.query(Product).count() > 0:
        return 0
    db.add_all(Product(**data) for data in products)
    db.commit()
    return len(products)


# -----------------------------
# Guest directory
# -----------------------------

def find_guest_by_email(db: Session, email: str) -> Optional[Guest]:
    return db.query(Guest).filter(Guest.email == email).first()


def create_guest(db: Session, guest_data: dict) -> Guest:
    """Stage a new guest and flush it so it gets an id. The caller commits."""
    db_guest = Guest(**guest_data)
    db.add(db_guest)
    db.flush()
    return db_guest


def get_guests(db: Session) -> List[Guest]:
    return (
        db.query(Guest)
        .options(selectinload(Guest.bookings).selectinload(Booking.product))
        .order_by(Guest.created_at.desc(), Guest.id.desc())
        .all()
    )


# -----------------------------
# Bookings (read side)
# -----------------------------

def get_booking(db: Session, booking_id: int) -> Optional[Booking]:
    return db.query(Booking).filter(Booking.id == booking_id).first()


def get_bookings(db: Session, limit: Optional[int] = None) -> List[Booking]:
    query = (
        db.query(Booking)
        .options(selectinload(Booking.product), selectinload(Booking.guest))
        .order_by(Booking.created_at.desc(), Booking.id.desc())
    )
    if limit:
        query = query.limit(limit)
    return query.all()


# -----------------------------
# Dashboard
# -----------------------------

def _month_bounds(now: dt.datetime) -> tuple[dt.datetime, dt.datetime]:
    start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    if start.month == 12:
        end = start.replace(year=start.year + 1, month=1)
    else:
        end = start.replace(month=start.month + 1)
    return start, end


def get_dashboard_metrics(db: Session, now: Optional[dt.datetime] = None) -> dict:
    now = now or dt.datetime.now(dt.timezone.utc)
    month_start, month_end = _month_bounds(now)

    total_products = db.query(Product).filter(Product.is_deleted.is_(False)).count()
    available_products = db.query(func.coalesce(func.sum(Product.stock), 0)).scalar()
    sold_products = (
        db.query(func.coalesce(func.sum(Booking.quantity), 0))
        .filter(Booking.status == BookingStatus.DONE_ORDER.value)
        .scalar()
    )
    monthly_revenue = (
        db.query(func.coalesce(func.sum(Booking.total_cost), 0))
        .filter(
            Booking.status == BookingStatus.DONE_ORDER.value,
            Booking.created_at >= month_start,
            Booking.created_at < month_end,
        )
        .scalar()
    )

    return {
        "total_products": total_products,
        "available_products": int(available_products or 0),
        "sold_products": int(sold_products or 0),
        "monthly_revenue": float(monthly_revenue or 0),
        "recent_bookings": get_bookings(db, limit=10),
    }
