from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from ..db import get_db
from ..models import Product
from ..schemas import ClientPriceList, ClientPriceRead, ClientPriceWrite
from ..security import CurrentUser, get_current_user, require_admin
from ..services import audit
from ..services import pricing

router = APIRouter()


@router.get("", response_model=ClientPriceList)
def client_prices_list(
    db: Session = Depends(get_db), user: CurrentUser = Depends(get_current_user)
) -> dict:
    return {"data": pricing.all_client_prices(db)}


@router.get("/client/{client_name}", response_model=ClientPriceList)
def client_prices_for_client(
    client_name: str,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> dict:
    return {"data": pricing.client_prices(db, client_name)}


@router.get("/product/{product_id}", response_model=ClientPriceList)
def client_prices_for_product(
    product_id: int,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> dict:
    return {"data": pricing.product_client_prices(db, product_id)}


@router.get("/{client_name}/{product_id}", response_model=ClientPriceRead)
def client_prices_detail(
    client_name: str,
    product_id: int,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    entry = pricing.get_client_price(db, client_name, product_id)
    if entry is None:
        raise HTTPException(status_code=404, detail="Special price not found")
    return entry


@router.post("", response_model=ClientPriceRead, status_code=201)
def client_prices_set(
    payload: ClientPriceWrite,
    request: Request,
    db: Session = Depends(get_db),
    admin: CurrentUser = Depends(require_admin),
):
    if db.get(Product, payload.product_id) is None:
        raise HTTPException(status_code=404, detail="Product not found")
    entry = pricing.set_client_price(
        db, payload.client_name, payload.product_id, payload.special_price
    )
    audit.record_action(
        db,
        admin,
        audit.UPDATE,
        "client_price",
        entry.id,
        {
            "clientName": entry.client_name,
            "productId": entry.product_id,
            "specialPrice": str(entry.special_price),
        },
        request,
    )
    db.commit()
    return entry


@router.delete("/{client_name}/{product_id}")
def client_prices_delete(
    client_name: str,
    product_id: int,
    request: Request,
    db: Session = Depends(get_db),
    admin: CurrentUser = Depends(require_admin),
) -> dict:
    entry = pricing.get_client_price(db, client_name, product_id)
    if entry is None:
        raise HTTPException(status_code=404, detail="Special price not found")
    entry_id = entry.id
    db.delete(entry)
    audit.record_action(
        db,
        admin,
        audit.DELETE,
        "client_price",
        entry_id,
        {"clientName": entry.client_name, "productId": product_id},
        request,
    )
    db.commit()
    return {"message": "Special price deleted"}
