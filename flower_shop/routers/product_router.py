from typing import List, Optional

from fastapi import APIRouter, Depends, Form, HTTPException, Query, status
from sqlalchemy.orm import Session

from ..auth import get_current_admin
from ..crud import (
    create_product,
    get_product,
    get_products,
    purge_product,
    soft_delete_product,
    update_product,
)
from ..database import get_db
from ..schemas import AdminContext, ProductOut

router = APIRouter(prefix="/products", tags=["Products"])


@router.get("", response_model=List[ProductOut])
def list_products(
    catalog_type: Optional[str] = Query(None, alias="catalogType", description="**Catalog type** filter, `All` for every type"),
    search: Optional[str] = Query(None, description="**Search** in product name"),
    db: Session = Depends(get_db),
):
    return get_products(db, catalog_type=catalog_type, search=search)


@router.get("/{product_id}", response_model=ProductOut)
def view_product(product_id: int, db: Session = Depends(get_db)):
    product = get_product(db, product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


@router.post("", response_model=ProductOut, status_code=status.HTTP_201_CREATED)
def create_product_admin(
    name: str = Form(..., description="**Product name** (required)"),
    catalog_type: str = Form(..., alias="catalogType", description="**Catalog type** (required)"),
    detail: Optional[str] = Form(None, description="**Description** (optional)"),
    price: float = Form(..., ge=0, description="**Price** (must be >= 0)"),
    stock: int = Form(..., ge=0, description="**Stock quantity** (must be >= 0)"),
    product_status: str = Form("Available", alias="status", description="**Status**"),
    image: str = Form("", description="**Image URL** (optional)"),
    current_admin: AdminContext = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    product_data = {
        "name": name,
        "catalog_type": catalog_type,
        "detail": detail,
        "price": price,
        "stock": stock,
        "status": product_status or "Available",
        "image": image or "",
    }
    try:
        return create_product(db, product_data)
    except ValueError as e:
        if str(e) == "name_required":
            raise HTTPException(status_code=400, detail="Product name is required")
        raise HTTPException(status_code=400, detail=str(e))


@router.put("/{product_id}", response_model=ProductOut)
def update_product_admin(
    product_id: int,
    name: Optional[str] = Form(None, description="**New name** (optional)"),
    catalog_type: Optional[str] = Form(None, alias="catalogType", description="**New catalog type** (optional)"),
    detail: Optional[str] = Form(None, description="**New description** (optional)"),
    price: Optional[float] = Form(None, ge=0, description="**New price** (optional, >= 0)"),
    stock: Optional[int] = Form(None, ge=0, description="**New stock** (optional, >= 0)"),
    product_status: Optional[str] = Form(None, alias="status", description="**New status** (optional)"),
    image: Optional[str] = Form(None, description="**New image URL** (optional)"),
    current_admin: AdminContext = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    update_data = {
        "name": name,
        "catalog_type": catalog_type,
        "detail": detail,
        "price": price,
        "stock": stock,
        "status": product_status,
        "image": image,
    }
    update_data = {k: v for k, v in update_data.items() if v is not None}

    try:
        product = update_product(db, product_id, update_data)
    except ValueError as e:
        if str(e) == "name_required":
            raise HTTPException(status_code=400, detail="Product name is required")
        raise HTTPException(status_code=400, detail=str(e))
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


@router.delete("/{product_id}")
def delete_product_admin(
    product_id: int,
    purge: bool = Query(False, description="Remove the row instead of hiding it from the catalog"),
    current_admin: AdminContext = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    if purge:
        deleted = purge_product(db, product_id)
    else:
        deleted = soft_delete_product(db, product_id) is not None
    if not deleted:
        raise HTTPException(status_code=404, detail="Product not found")
    return {"success": True}
