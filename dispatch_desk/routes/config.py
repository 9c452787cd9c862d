import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from ..db import get_db
from ..models import ConfigEntry
from ..schemas import ConfigList, ConfigRead, ConfigUpdate
from ..security import CurrentUser, get_current_user, require_admin
from ..services import audit
from ..services import config_store
from ..services.config_store import InvalidConfigValue

router = APIRouter()
logger = logging.getLogger(__name__)


def _get_entry_or_404(db: Session, key: str) -> ConfigEntry:
    entry = config_store.get_entry(db, key)
    if not entry:
        raise HTTPException(status_code=404, detail="Configuration not found")
    return entry


@router.get("", response_model=ConfigList)
def config_list(
    db: Session = Depends(get_db), user: CurrentUser = Depends(get_current_user)
) -> dict:
    return {"data": config_store.list_entries(db)}


@router.get("/{key}", response_model=ConfigRead)
def config_detail(
    key: str, db: Session = Depends(get_db), user: CurrentUser = Depends(get_current_user)
) -> ConfigEntry:
    return _get_entry_or_404(db, key)


@router.put("/{key}", response_model=ConfigRead)
def config_update(
    key: str,
    payload: ConfigUpdate,
    request: Request,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(require_admin),
) -> ConfigEntry:
    entry = _get_entry_or_404(db, key)
    previous = entry.value
    try:
        config_store.set_value(db, entry, payload.value)
    except InvalidConfigValue as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    audit.record_action(
        db,
        user,
        audit.UPDATE,
        "config",
        entry.id,
        {"key": key, "oldValue": previous, "newValue": entry.value},
        request,
    )
    db.commit()
    logger.info("Config %s changed from %s to %s by %s", key, previous, entry.value, user.username)
    return entry
