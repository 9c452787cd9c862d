from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..db import get_db
from ..schemas import AuditLogList
from ..security import CurrentUser, require_admin
from ..services import audit as audit_service

router = APIRouter()


@router.get("", response_model=AuditLogList)
def audit_recent(
    limit: int = Query(100, ge=1, le=1000),
    db: Session = Depends(get_db),
    admin: CurrentUser = Depends(require_admin),
) -> dict:
    return {"data": audit_service.recent_logs(db, limit)}


@router.get("/user/{user_id}", response_model=AuditLogList)
def audit_by_user(
    user_id: int,
    limit: int = Query(50, ge=1, le=1000),
    db: Session = Depends(get_db),
    admin: CurrentUser = Depends(require_admin),
) -> dict:
    return {"data": audit_service.logs_by_user(db, user_id, limit)}


@router.get("/entity/{entity_type}/{entity_id}", response_model=AuditLogList)
def audit_by_entity(
    entity_type: str,
    entity_id: int,
    db: Session = Depends(get_db),
    admin: CurrentUser = Depends(require_admin),
) -> dict:
    return {"data": audit_service.logs_by_entity(db, entity_type, entity_id)}
