from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..models import Truck

UNSPECIFIED_BRAND = "SIN ESPECIFICAR"


def get_truck(db: Session, placa: str) -> Truck | None:
    return db.execute(
        select(Truck).where(Truck.placa == placa.strip().upper())
    ).scalar_one_or_none()


def list_trucks(db: Session) -> list[Truck]:
    return list(db.scalars(select(Truck).order_by(Truck.placa)))


def upsert_truck(
    db: Session,
    placa: str,
    marca: str | None,
    color: str | None,
    ficha: str | None,
    m3: Decimal | None,
) -> Truck:
    """Create the truck for a plate or refresh the details that were supplied.

    Empty values never overwrite what is already stored.
    """
    truck = get_truck(db, placa)
    if truck is None:
        truck = Truck(
            placa=placa,
            marca=marca or UNSPECIFIED_BRAND,
            color=color,
            ficha=ficha,
            m3=m3,
            estado="activo",
        )
        db.add(truck)
    else:
        if marca:
            truck.marca = marca
        if color:
            truck.color = color
        if ficha:
            truck.ficha = ficha
        if m3 is not None:
            truck.m3 = m3
    db.flush()
    return truck
