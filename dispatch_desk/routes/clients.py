from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ..db import get_db
from ..models import Client
from ..schemas import ClientList, ClientRead, ClientWrite
from ..security import CurrentUser, get_current_user
from ..services import audit

router = APIRouter()


def _get_client_or_404(db: Session, client_id: int) -> Client:
    client = db.get(Client, client_id)
    if not client:
        raise HTTPException(status_code=404, detail="Client not found")
    return client


def _parse_client(payload: ClientWrite) -> dict:
    name = (payload.name or "").strip()
    if not name:
        raise HTTPException(status_code=400, detail="Client name is required")
    return {
        "name": name,
        "company_id": payload.company_id or None,
        "rnc": payload.rnc or None,
        "direccion": payload.direccion or None,
        "obra": payload.obra or None,
        "numero_orden_compra": payload.numero_orden_compra or None,
        "descuento": payload.descuento,
    }


@router.get("", response_model=ClientList)
def clients_list(
    q: str | None = None,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> dict:
    query = select(Client).order_by(Client.name)
    if q:
        query = query.where(Client.name.ilike(f"%{q}%"))
    return {"data": list(db.scalars(query))}


@router.post("", response_model=ClientRead)
def clients_create(
    payload: ClientWrite,
    request: Request,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> Client:
    values = _parse_client(payload)
    existing = db.execute(
        select(Client).where(func.lower(Client.name) == values["name"].lower())
    ).scalars().first()
    if existing:
        return existing

    client = Client(**values)
    db.add(client)
    db.flush()
    audit.record_action(
        db, user, audit.CREATE, "client", client.id, {"name": client.name}, request
    )
    db.commit()
    return client


@router.put("/{client_id}", response_model=ClientRead)
def clients_update(
    client_id: int,
    payload: ClientWrite,
    request: Request,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> Client:
    client = _get_client_or_404(db, client_id)
    for key, value in _parse_client(payload).items():
        setattr(client, key, value)
    audit.record_action(
        db, user, audit.UPDATE, "client", client.id, {"name": client.name}, request
    )
    db.commit()
    return client


@router.delete("/{client_id}")
def clients_delete(
    client_id: int,
    request: Request,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> dict:
    client = _get_client_or_404(db, client_id)
    db.delete(client)
    audit.record_action(
        db, user, audit.DELETE, "client", client_id, {"name": client.name}, request
    )
    db.commit()
    return {"message": "Client deleted"}
