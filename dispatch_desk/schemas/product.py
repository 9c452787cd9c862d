from datetime import datetime
from decimal import Decimal

from pydantic import Field

from .base import CamelModel

ITBIS_RATES = (Decimal("0.00"), Decimal("0.18"))


class ProductWrite(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    price: Decimal = Field(ge=0)
    unit: str | None = None
    itbis_rate: Decimal = Decimal("0.00")


class ProductRead(CamelModel):
    id: int
    name: str
    price: Decimal
    unit: str | None
    itbis_rate: Decimal
    active: bool


class ProductList(CamelModel):
    data: list[ProductRead]


class ProductPrice(CamelModel):
    product_id: int
    client_name: str | None
    price: Decimal
    special: bool


class ClientPriceWrite(CamelModel):
    client_name: str = Field(min_length=1, max_length=200)
    product_id: int
    special_price: Decimal = Field(ge=0)


class ClientPriceRead(CamelModel):
    id: int
    product_id: int
    client_name: str
    special_price: Decimal
    created_at: datetime | None
    updated_at: datetime | None


class ClientPriceList(CamelModel):
    data: list[ClientPriceRead]
