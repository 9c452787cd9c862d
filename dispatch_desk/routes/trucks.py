from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from ..db import get_db
from ..models import Truck
from ..schemas import TruckList, TruckRead
from ..security import CurrentUser, get_current_user, require_admin
from ..services import audit
from ..services import trucks as trucks_service

router = APIRouter()


@router.get("", response_model=TruckList)
def trucks_list(
    db: Session = Depends(get_db), user: CurrentUser = Depends(get_current_user)
) -> dict:
    return {"data": trucks_service.list_trucks(db)}


@router.get("/{placa}", response_model=TruckRead)
def trucks_detail(
    placa: str,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> Truck:
    truck = trucks_service.get_truck(db, placa)
    if truck is None:
        raise HTTPException(status_code=404, detail="Truck not found")
    return truck


@router.delete("/{placa}")
def trucks_delete(
    placa: str,
    request: Request,
    db: Session = Depends(get_db),
    admin: CurrentUser = Depends(require_admin),
) -> dict:
    truck = trucks_service.get_truck(db, placa)
    if truck is None:
        raise HTTPException(status_code=404, detail="Truck not found")
    truck_id = truck.id
    db.delete(truck)
    audit.record_action(
        db, admin, audit.DELETE, "truck", truck_id, {"placa": truck.placa}, request
    )
    db.commit()
    return {"message": "Truck deleted"}
