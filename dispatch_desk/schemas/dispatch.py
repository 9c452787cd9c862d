from datetime import date, datetime, time
from decimal import Decimal

from pydantic import ConfigDict, Field

from .base import CamelModel

RawNumber = int | float | str | None


class MaterialLine(CamelModel):
    model_config = ConfigDict(extra="allow")

    name: str = Field(min_length=1)
    quantity: Decimal = Field(ge=0)
    price: Decimal | None = Field(default=None, ge=0)


class DispatchPayload(CamelModel):
    """Incoming dispatch fields before business validation.

    Numeric fields stay loosely typed so that bad totals and line items are
    reported as business errors instead of schema errors.
    """

    fecha: date | None = None
    hora: time | None = None
    camion: str | None = None
    placa: str | None = None
    color: str | None = None
    ficha: str | None = None
    numero_orden: str | None = None
    ticket_orden: str | None = None
    chofer: str | None = None
    m3: RawNumber = None
    materials: list | str | None = None
    cliente: str | None = None
    celular: str | None = None
    total: RawNumber = None
    user_id: int | None = None
    equipment_id: int | None = None
    operator_id: int | None = None


class DispatchUpdate(DispatchPayload):
    despacho_no: str | None = Field(default=None, max_length=20)


class DispatchNumberOverride(CamelModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    despacho_no: str = Field(min_length=1, max_length=20)


class DispatchCreated(CamelModel):
    id: int
    despacho_no: str


class DispatchRead(CamelModel):
    id: int
    despacho_no: str
    fecha: date
    hora: time
    camion: str | None
    placa: str | None
    color: str | None
    ficha: str | None
    numero_orden: str | None
    ticket_orden: str | None
    chofer: str | None
    m3: Decimal | None
    materials: list
    cliente: str
    celular: str | None
    total: Decimal
    user_id: int | None
    equipment_id: int | None
    operator_id: int | None
    user_name: str | None = None
    equipment_name: str | None = None
    operator_name: str | None = None
    created_at: datetime | None = None


class DispatchList(CamelModel):
    data: list[DispatchRead]
