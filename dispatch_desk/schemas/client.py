from datetime import datetime
from decimal import Decimal

from pydantic import Field

from .base import CamelModel


class ClientWrite(CamelModel):
    name: str | None = None
    company_id: int | None = None
    rnc: str | None = None
    direccion: str | None = None
    obra: str | None = None
    numero_orden_compra: str | None = None
    descuento: Decimal = Field(default=Decimal("0.00"), ge=0, le=100)


class ClientRead(CamelModel):
    id: int
    name: str
    company_id: int | None
    rnc: str | None
    direccion: str | None
    obra: str | None
    numero_orden_compra: str | None
    descuento: Decimal
    created_at: datetime | None
    updated_at: datetime | None


class ClientList(CamelModel):
    data: list[ClientRead]
