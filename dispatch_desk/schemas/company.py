from datetime import datetime
from decimal import Decimal

from pydantic import Field

from .base import CamelModel


class CompanyWrite(CamelModel):
    name: str | None = None
    address: str | None = None
    phone: str | None = None
    email: str | None = None
    rnc: str | None = None
    domicilio: str | None = None
    tipo_impositivo: Decimal = Field(default=Decimal("0"), ge=0, le=100)
    exento: bool = False
    contactos: str | None = None


class CompanyRead(CamelModel):
    id: int
    name: str
    address: str | None
    phone: str | None
    email: str | None
    rnc: str
    domicilio: str | None
    tipo_impositivo: Decimal
    exento: bool
    contactos: str | None
    created_at: datetime | None


class CompanyList(CamelModel):
    data: list[CompanyRead]
