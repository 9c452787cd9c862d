from datetime import datetime
from decimal import Decimal

from pydantic import Field

from .base import CamelModel


class NamedWrite(CamelModel):
    name: str = Field(min_length=1, max_length=100)


class NamedRead(CamelModel):
    id: int
    name: str
    created_at: datetime | None


class NamedList(CamelModel):
    data: list[NamedRead]


class TruckRead(CamelModel):
    id: int
    placa: str
    marca: str | None
    color: str | None
    ficha: str | None
    m3: Decimal | None
    estado: str
    created_at: datetime | None
    updated_at: datetime | None


class TruckList(CamelModel):
    data: list[TruckRead]
