import logging

from fastapi import Request
from sqlalchemy import select
from sqlalchemy.orm import Session

from ..models import AuditLog
from ..security import CurrentUser, client_ip

logger = logging.getLogger(__name__)

CREATE = "CREATE"
UPDATE = "UPDATE"
DELETE = "DELETE"


def record_action(
    db: Session,
    user: CurrentUser | None,
    action: str,
    entity_type: str,
    entity_id: int | None,
    details: dict | None = None,
    request: Request | None = None,
) -> AuditLog | None:
    """Stage an audit row in the caller's transaction. Commit is up to the caller."""
    if user is None:
        return None
    entry = AuditLog(
        user_id=user.id,
        username=user.username,
        action=action,
        entity_type=entity_type,
        entity_id=entity_id,
        details=details,
        ip_address=client_ip(request) if request is not None else None,
        user_agent=request.headers.get("user-agent") if request is not None else None,
    )
    db.add(entry)
    logger.info(
        "Audit %s %s id=%s by %s", action, entity_type, entity_id, user.username
    )
    return entry


def recent_logs(db: Session, limit: int = 100) -> list[AuditLog]:
    return list(
        db.scalars(
            select(AuditLog)
            .order_by(AuditLog.created_at.desc(), AuditLog.id.desc())
            .limit(limit)
        )
    )


def logs_by_user(db: Session, user_id: int, limit: int = 50) -> list[AuditLog]:
    return list(
        db.scalars(
            select(AuditLog)
            .where(AuditLog.user_id == user_id)
            .order_by(AuditLog.created_at.desc(), AuditLog.id.desc())
            .limit(limit)
        )
    )


def logs_by_entity(db: Session, entity_type: str, entity_id: int) -> list[AuditLog]:
    return list(
        db.scalars(
            select(AuditLog)
            .where(AuditLog.entity_type == entity_type, AuditLog.entity_id == entity_id)
            .order_by(AuditLog.created_at.desc(), AuditLog.id.desc())
        )
    )
