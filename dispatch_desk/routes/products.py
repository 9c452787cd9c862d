from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..db import get_db
from ..models import Product
from ..schemas import ITBIS_RATES, ProductList, ProductPrice, ProductRead, ProductWrite
from ..security import CurrentUser, get_current_user, require_admin
from ..services import audit
from ..services import pricing

router = APIRouter()


def _get_product_or_404(db: Session, product_id: int) -> Product:
    product = db.get(Product, product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


def _check_itbis(payload: ProductWrite) -> None:
    if payload.itbis_rate not in ITBIS_RATES:
        raise HTTPException(status_code=400, detail="ITBIS rate must be 0.00 or 0.18")


@router.get("", response_model=ProductList)
def products_list(
    include_inactive: bool = False,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> dict:
    query = select(Product).order_by(Product.name)
    if not include_inactive:
        query = query.where(Product.active.is_(True))
    return {"data": list(db.scalars(query))}


@router.get("/{product_id}", response_model=ProductRead)
def products_detail(
    product_id: int,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> Product:
    return _get_product_or_404(db, product_id)


@router.get("/{product_id}/price", response_model=ProductPrice)
def products_price(
    product_id: int,
    client: str | None = Query(None),
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> ProductPrice:
    product = _get_product_or_404(db, product_id)
    price, special = pricing.effective_price(db, product, client)
    return ProductPrice(
        product_id=product.id,
        client_name=pricing.normalise_client_name(client) if client else None,
        price=price,
        special=special,
    )


@router.post("", response_model=ProductRead, status_code=201)
def products_create(
    payload: ProductWrite,
    request: Request,
    db: Session = Depends(get_db),
    admin: CurrentUser = Depends(require_admin),
) -> Product:
    _check_itbis(payload)
    product = Product(
        name=payload.name.strip(),
        price=payload.price,
        unit=payload.unit,
        itbis_rate=payload.itbis_rate,
        active=True,
    )
    db.add(product)
    try:
        db.flush()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=400, detail="Product name already exists")
    audit.record_action(
        db, admin, audit.CREATE, "product", product.id, {"name": product.name}, request
    )
    db.commit()
    return product


@router.put("/{product_id}", response_model=ProductRead)
def products_update(
    product_id: int,
    payload: ProductWrite,
    request: Request,
    db: Session = Depends(get_db),
    admin: CurrentUser = Depends(require_admin),
) -> Product:
    _check_itbis(payload)
    product = _get_product_or_404(db, product_id)
    product.name = payload.name.strip()
    product.price = payload.price
    product.unit = payload.unit
    product.itbis_rate = payload.itbis_rate
    try:
        db.flush()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=400, detail="Product name already exists")
    audit.record_action(
        db,
        admin,
        audit.UPDATE,
        "product",
        product.id,
        {"name": product.name, "price": str(product.price)},
        request,
    )
    db.commit()
    return product


@router.delete("/{product_id}", response_model=ProductRead)
def products_deactivate(
    product_id: int,
    request: Request,
    db: Session = Depends(get_db),
    admin: CurrentUser = Depends(require_admin),
) -> Product:
    product = _get_product_or_404(db, product_id)
    product.active = False
    audit.record_action(
        db, admin, audit.UPDATE, "product", product.id, {"active": False}, request
    )
    db.commit()
    return product


@router.put("/{product_id}/activate", response_model=ProductRead)
def products_activate(
    product_id: int,
    request: Request,
    db: Session = Depends(get_db),
    admin: CurrentUser = Depends(require_admin),
) -> Product:
    product = _get_product_or_404(db, product_id)
    product.active = True
    audit.record_action(
        db, admin, audit.UPDATE, "product", product.id, {"active": True}, request
    )
    db.commit()
    return product
