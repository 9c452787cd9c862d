import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..db import get_db
from ..models import Dispatch
from ..schemas import (
    DispatchCreated,
    DispatchList,
    DispatchNumberOverride,
    DispatchPayload,
    DispatchRead,
    DispatchUpdate,
)
from ..security import CurrentUser, get_current_user, require_admin
from ..services import dispatches as dispatches_service
from ..services.dispatches import DispatchNumberConflict

router = APIRouter()
logger = logging.getLogger(__name__)


def _get_dispatch_or_404(db: Session, dispatch_id: int) -> Dispatch:
    dispatch = db.get(Dispatch, dispatch_id)
    if not dispatch:
        raise HTTPException(status_code=404, detail="Dispatch not found")
    return dispatch


def _validation_error(parsed: dict) -> JSONResponse:
    content: dict = {"error": "; ".join(parsed["errors"])}
    if parsed.get("missing"):
        content["missing"] = parsed["missing"]
    return JSONResponse(content, status_code=400)


@router.get("", response_model=DispatchList)
def dispatches_list(
    placa: str | None = None,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> dict:
    return {"data": dispatches_service.list_dispatches(db, placa)}


@router.post("", response_model=DispatchCreated)
def dispatches_create(
    payload: DispatchPayload,
    request: Request,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    parsed = dispatches_service.parse_dispatch_payload(payload, user)
    if not parsed["errors"]:
        parsed["errors"] = dispatches_service.check_references(db, parsed["values"])
    if parsed["errors"]:
        logger.info("Dispatch rejected: %s", parsed["errors"])
        return _validation_error(parsed)

    try:
        dispatch = dispatches_service.create_dispatch(db, parsed["values"], user, request)
    except DispatchNumberConflict as exc:
        raise HTTPException(status_code=409, detail=str(exc))
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Dispatch creation failed")
        raise HTTPException(status_code=500, detail="Error creating dispatch")
    return DispatchCreated(id=dispatch.id, despacho_no=dispatch.despacho_no)


@router.delete("/clear-all")
def dispatches_clear_all(
    request: Request,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(require_admin),
) -> dict:
    count = dispatches_service.clear_all(db, user, request)
    return {"message": f"All dispatches deleted ({count} records)", "count": count}


@router.get("/{dispatch_id}", response_model=DispatchRead)
def dispatches_detail(
    dispatch_id: int,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> Dispatch:
    return _get_dispatch_or_404(db, dispatch_id)


@router.put("/{dispatch_id}")
def dispatches_update(
    dispatch_id: int,
    payload: DispatchUpdate,
    request: Request,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(require_admin),
):
    dispatch = _get_dispatch_or_404(db, dispatch_id)
    parsed = dispatches_service.parse_dispatch_payload(payload, user, require_datetime=True)
    if not parsed["errors"]:
        parsed["errors"] = dispatches_service.check_references(db, parsed["values"])
    if parsed["errors"]:
        return _validation_error(parsed)
    try:
        dispatches_service.update_dispatch(
            db, dispatch, parsed["values"], payload.despacho_no, user, request
        )
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="Dispatch number already in use")
    return {"message": "Dispatch updated"}


@router.put("/{dispatch_id}/number")
def dispatches_override_number(
    dispatch_id: int,
    payload: DispatchNumberOverride,
    request: Request,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(require_admin),
) -> dict:
    dispatch = _get_dispatch_or_404(db, dispatch_id)
    try:
        dispatches_service.override_number(db, dispatch, payload.despacho_no, user, request)
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="Dispatch number already in use")
    return {"message": "Dispatch number updated", "despachoNo": payload.despacho_no}


@router.delete("/{dispatch_id}")
def dispatches_delete(
    dispatch_id: int,
    request: Request,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(require_admin),
) -> dict:
    dispatch = _get_dispatch_or_404(db, dispatch_id)
    dispatches_service.delete_dispatch(db, dispatch, user, request)
    return {"message": "Dispatch deleted"}
