from datetime import datetime
from decimal import Decimal, InvalidOperation
import json
import logging
from zoneinfo import ZoneInfo

from fastapi import Request
from pydantic import ValidationError
from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from ..config import settings
from ..models import Dispatch, Equipment, Operator, User
from ..schemas import DispatchPayload, MaterialLine
from ..security import CurrentUser
from . import audit, numbering, trucks

logger = logging.getLogger(__name__)

ENTITY_TYPE = "dispatch"
MAX_ALLOCATION_ATTEMPTS = 2
UPPERCASE_FIELDS = (
    "camion",
    "placa",
    "color",
    "ficha",
    "numero_orden",
    "ticket_orden",
    "chofer",
    "cliente",
)
REQUIRED_FIELDS = ("camion", "placa", "cliente")
REFERENCES = (
    ("user_id", User, "user"),
    ("equipment_id", Equipment, "equipment"),
    ("operator_id", Operator, "operator"),
)


class DispatchNumberConflict(Exception):
    """Raised when no unique dispatch number could be stored."""


def local_now() -> datetime:
    return datetime.now(ZoneInfo(settings.timezone))


def parse_dispatch_payload(
    payload: DispatchPayload,
    user: CurrentUser | None,
    require_datetime: bool = False,
) -> dict:
    """Normalise a dispatch payload into column values.

    The result holds an ``errors`` list and, for missing required fields, a
    ``missing`` map. Nothing is written while errors are present.
    """
    errors: list[str] = []
    values: dict = {}

    for field in UPPERCASE_FIELDS:
        raw = getattr(payload, field)
        values[field] = raw.strip().upper() if raw and raw.strip() else None

    missing = {field: values[field] is None for field in REQUIRED_FIELDS}
    if require_datetime:
        missing["fecha"] = payload.fecha is None
        missing["hora"] = payload.hora is None
    if any(missing.values()):
        errors.append("Missing required fields")
        return {"errors": errors, "missing": missing}

    now = local_now()
    values["fecha"] = payload.fecha or now.date()
    values["hora"] = payload.hora or now.time().replace(second=0, microsecond=0)

    total = _parse_decimal(payload.total)
    if total is None or total < 0:
        errors.append("Invalid total")
    values["total"] = total

    m3 = _parse_decimal(payload.m3)
    values["m3"] = m3 if m3 is not None and m3 > 0 else None

    materials = _parse_materials(payload.materials)
    if materials is None:
        errors.append("Invalid materials format")
    values["materials"] = materials or []

    values["celular"] = payload.celular.strip() if payload.celular else None
    values["user_id"] = _positive_id(payload.user_id) or (user.id if user else None)
    values["equipment_id"] = _positive_id(payload.equipment_id)
    values["operator_id"] = _positive_id(payload.operator_id)
    return {"errors": errors, "missing": {}, "values": values}


def check_references(db: Session, values: dict) -> list[str]:
    errors = []
    for field, model, label in REFERENCES:
        record_id = values.get(field)
        if record_id is not None and db.get(model, record_id) is None:
            errors.append(f"Unknown {label} {record_id}")
    return errors


def _parse_decimal(raw) -> Decimal | None:
    if raw is None or raw == "":
        return None
    try:
        value = Decimal(str(raw).strip())
    except (InvalidOperation, ValueError):
        return None
    if not value.is_finite():
        return None
    return value


def _positive_id(raw: int | None) -> int | None:
    return raw if raw and raw > 0 else None


def _parse_materials(raw) -> list[dict] | None:
    if raw is None:
        return []
    if isinstance(raw, str):
        try:
            raw = json.loads(raw) if raw.strip() else []
        except json.JSONDecodeError:
            return None
    if not isinstance(raw, list):
        return None
    try:
        lines = [MaterialLine.model_validate(item) for item in raw]
    except ValidationError:
        return None
    return [line.model_dump(mode="json", by_alias=True) for line in lines]


def list_dispatches(db: Session, placa: str | None = None) -> list[Dispatch]:
    stmt = select(Dispatch).options(
        selectinload(Dispatch.user),
        selectinload(Dispatch.equipment),
        selectinload(Dispatch.operator),
    )
    if placa:
        stmt = stmt.where(func.upper(Dispatch.placa).contains(placa.strip().upper()))
    stmt = stmt.order_by(Dispatch.fecha.desc(), Dispatch.hora.desc(), Dispatch.id.desc())
    return list(db.scalars(stmt))


def _upsert_truck_for(db: Session, values: dict) -> None:
    if values.get("placa"):
        trucks.upsert_truck(
            db,
            placa=values["placa"],
            marca=values.get("camion"),
            color=values.get("color"),
            ficha=values.get("ficha"),
            m3=values.get("m3"),
        )


def create_dispatch(
    db: Session,
    values: dict,
    user: CurrentUser | None,
    request: Request | None = None,
) -> Dispatch:
    """Allocate a number and store the dispatch as one unit of work.

    A uniqueness conflict on the number means another request stored the
    same number first: the unit is rolled back and retried once with a fresh
    read of the ledger.
    """
    for attempt in range(1, MAX_ALLOCATION_ATTEMPTS + 1):
        try:
            despacho_no = numbering.allocate_dispatch_number(db)
            _upsert_truck_for(db, values)
            dispatch = Dispatch(despacho_no=despacho_no, **values)
            db.add(dispatch)
            db.flush()
            audit.record_action(
                db,
                user,
                audit.CREATE,
                ENTITY_TYPE,
                dispatch.id,
                {
                    "despachoNo": despacho_no,
                    "cliente": values["cliente"],
                    "total": str(values["total"]),
                },
                request,
            )
            db.commit()
        except IntegrityError:
            db.rollback()
            logger.warning(
                "Dispatch number conflict on attempt %s/%s",
                attempt,
                MAX_ALLOCATION_ATTEMPTS,
            )
            continue
        logger.info("Dispatch %s created with number %s", dispatch.id, despacho_no)
        return dispatch
    raise DispatchNumberConflict("Could not allocate a unique dispatch number")


def update_dispatch(
    db: Session,
    dispatch: Dispatch,
    values: dict,
    despacho_no: str | None,
    user: CurrentUser,
    request: Request | None = None,
) -> Dispatch:
    _upsert_truck_for(db, values)
    for key, value in values.items():
        setattr(dispatch, key, value)
    despacho_no = (despacho_no or "").strip()
    if despacho_no:
        dispatch.despacho_no = despacho_no
    audit.record_action(
        db,
        user,
        audit.UPDATE,
        ENTITY_TYPE,
        dispatch.id,
        {"cliente": values["cliente"], "total": str(values["total"])},
        request,
    )
    db.commit()
    return dispatch


def override_number(
    db: Session,
    dispatch: Dispatch,
    despacho_no: str,
    user: CurrentUser,
    request: Request | None = None,
) -> Dispatch:
    """Force a display number, bypassing allocation and the configured floor."""
    dispatch.despacho_no = despacho_no
    audit.record_action(
        db,
        user,
        audit.UPDATE,
        ENTITY_TYPE,
        dispatch.id,
        {"field": "despachoNo", "newValue": despacho_no},
        request,
    )
    db.commit()
    logger.info("Dispatch %s renumbered to %s by %s", dispatch.id, despacho_no, user.username)
    return dispatch


def delete_dispatch(
    db: Session, dispatch: Dispatch, user: CurrentUser, request: Request | None = None
) -> None:
    dispatch_id = dispatch.id
    db.delete(dispatch)
    audit.record_action(
        db, user, audit.DELETE, ENTITY_TYPE, dispatch_id, {"deletedId": dispatch_id}, request
    )
    db.commit()


def clear_all(db: Session, user: CurrentUser, request: Request | None = None) -> int:
    count = db.execute(select(func.count(Dispatch.id))).scalar() or 0
    db.execute(delete(Dispatch))
    audit.record_action(
        db,
        user,
        audit.DELETE,
        ENTITY_TYPE,
        0,
        {"action": "clear_all", "count": count},
        request,
    )
    db.commit()
    logger.warning("All dispatches cleared by %s (%s rows)", user.username, count)
    return count
