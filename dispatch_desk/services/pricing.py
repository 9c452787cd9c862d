from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..models import ClientPrice, Product


def normalise_client_name(client_name: str) -> str:
    return client_name.strip().upper()


def get_client_price(db: Session, client_name: str, product_id: int) -> ClientPrice | None:
    return db.execute(
        select(ClientPrice).where(
            ClientPrice.client_name == normalise_client_name(client_name),
            ClientPrice.product_id == product_id,
        )
    ).scalar_one_or_none()


def client_prices(db: Session, client_name: str) -> list[ClientPrice]:
    return list(
        db.scalars(
            select(ClientPrice)
            .where(ClientPrice.client_name == normalise_client_name(client_name))
            .order_by(ClientPrice.product_id)
        )
    )


def product_client_prices(db: Session, product_id: int) -> list[ClientPrice]:
    return list(
        db.scalars(
            select(ClientPrice)
            .where(ClientPrice.product_id == product_id)
            .order_by(ClientPrice.client_name)
        )
    )


def all_client_prices(db: Session) -> list[ClientPrice]:
    return list(
        db.scalars(
            select(ClientPrice).order_by(ClientPrice.client_name, ClientPrice.product_id)
        )
    )


def set_client_price(
    db: Session, client_name: str, product_id: int, special_price: Decimal
) -> ClientPrice:
    entry = get_client_price(db, client_name, product_id)
    if entry is None:
        entry = ClientPrice(
            client_name=normalise_client_name(client_name),
            product_id=product_id,
            special_price=special_price,
        )
        db.add(entry)
    else:
        entry.special_price = special_price
    db.flush()
    return entry


def effective_price(
    db: Session, product: Product, client_name: str | None
) -> tuple[Decimal, bool]:
    """Special price for the client when one exists, else the list price."""
    if client_name and client_name.strip():
        entry = get_client_price(db, client_name, product.id)
        if entry is not None:
            return entry.special_price, True
    return product.price, False
