from datetime import datetime

from .base import CamelModel


class AuditLogRead(CamelModel):
    id: int
    user_id: int | None
    username: str | None
    action: str
    entity_type: str
    entity_id: int | None
    details: dict | None
    ip_address: str | None
    user_agent: str | None
    created_at: datetime | None


class AuditLogList(CamelModel):
    data: list[AuditLogRead]
