from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..db import get_db
from ..models import Equipment, Operator
from ..schemas import NamedList, NamedRead, NamedWrite
from ..security import CurrentUser, get_current_user, require_admin
from ..services import audit


def _named_router(model, entity_type: str, label: str) -> APIRouter:
    """CRUD for the name-only resources referenced by dispatches."""
    router = APIRouter()

    def get_or_404(db: Session, record_id: int):
        record = db.get(model, record_id)
        if not record:
            raise HTTPException(status_code=404, detail=f"{label} not found")
        return record

    @router.get("", response_model=NamedList)
    def records_list(
        db: Session = Depends(get_db), user: CurrentUser = Depends(get_current_user)
    ) -> dict:
        return {"data": list(db.scalars(select(model).order_by(model.name)))}

    @router.post("", response_model=NamedRead, status_code=201)
    def records_create(
        payload: NamedWrite,
        request: Request,
        db: Session = Depends(get_db),
        admin: CurrentUser = Depends(require_admin),
    ):
        record = model(name=payload.name.strip())
        db.add(record)
        db.flush()
        audit.record_action(
            db, admin, audit.CREATE, entity_type, record.id, {"name": record.name}, request
        )
        db.commit()
        return record

    @router.put("/{record_id}", response_model=NamedRead)
    def records_update(
        record_id: int,
        payload: NamedWrite,
        request: Request,
        db: Session = Depends(get_db),
        admin: CurrentUser = Depends(require_admin),
    ):
        record = get_or_404(db, record_id)
        record.name = payload.name.strip()
        audit.record_action(
            db, admin, audit.UPDATE, entity_type, record.id, {"name": record.name}, request
        )
        db.commit()
        return record

    @router.delete("/{record_id}")
    def records_delete(
        record_id: int,
        request: Request,
        db: Session = Depends(get_db),
        admin: CurrentUser = Depends(require_admin),
    ) -> dict:
        record = get_or_404(db, record_id)
        try:
            db.delete(record)
            db.flush()
        except IntegrityError:
            db.rollback()
            raise HTTPException(
                status_code=400, detail=f"Cannot delete: {label.lower()} in use by dispatches."
            )
        audit.record_action(
            db, admin, audit.DELETE, entity_type, record_id, {"name": record.name}, request
        )
        db.commit()
        return {"message": f"{label} deleted"}

    return router


equipment_router = _named_router(Equipment, "equipment", "Equipment")
operators_router = _named_router(Operator, "operator", "Operator")
