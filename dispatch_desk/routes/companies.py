from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..db import get_db
from ..models import Company
from ..schemas import CompanyList, CompanyRead, CompanyWrite
from ..security import CurrentUser, get_current_user, require_admin
from ..services import audit

router = APIRouter()


def _get_company_or_404(db: Session, company_id: int) -> Company:
    company = db.get(Company, company_id)
    if not company:
        raise HTTPException(status_code=404, detail="Company not found")
    return company


def _parse_company(payload: CompanyWrite) -> dict:
    name = (payload.name or "").strip()
    rnc = (payload.rnc or "").strip()
    if not name:
        raise HTTPException(status_code=400, detail="Company name is required")
    if not rnc:
        raise HTTPException(status_code=400, detail="RNC is required")
    return {
        "name": name,
        "address": payload.address,
        "phone": payload.phone,
        "email": payload.email,
        "rnc": rnc,
        "domicilio": payload.domicilio,
        "tipo_impositivo": payload.tipo_impositivo,
        "exento": payload.exento,
        "contactos": payload.contactos,
    }


@router.get("", response_model=CompanyList)
def companies_list(
    db: Session = Depends(get_db), user: CurrentUser = Depends(get_current_user)
) -> dict:
    return {"data": list(db.scalars(select(Company).order_by(Company.name)))}


@router.post("", response_model=CompanyRead)
def companies_create(
    payload: CompanyWrite,
    request: Request,
    db: Session = Depends(get_db),
    admin: CurrentUser = Depends(require_admin),
) -> Company:
    company = Company(**_parse_company(payload))
    db.add(company)
    try:
        db.flush()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=400, detail="Company RNC already exists")
    audit.record_action(
        db, admin, audit.CREATE, "company", company.id, {"name": company.name}, request
    )
    db.commit()
    return company


@router.put("/{company_id}", response_model=CompanyRead)
def companies_update(
    company_id: int,
    payload: CompanyWrite,
    request: Request,
    db: Session = Depends(get_db),
    admin: CurrentUser = Depends(require_admin),
) -> Company:
    company = _get_company_or_404(db, company_id)
    for key, value in _parse_company(payload).items():
        setattr(company, key, value)
    try:
        db.flush()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=400, detail="Company RNC already exists")
    audit.record_action(
        db, admin, audit.UPDATE, "company", company.id, {"name": company.name}, request
    )
    db.commit()
    return company


@router.delete("/{company_id}")
def companies_delete(
    company_id: int,
    request: Request,
    db: Session = Depends(get_db),
    admin: CurrentUser = Depends(require_admin),
) -> dict:
    company = _get_company_or_404(db, company_id)
    db.delete(company)
    audit.record_action(
        db, admin, audit.DELETE, "company", company_id, {"name": company.name}, request
    )
    db.commit()
    return {"message": "Company deleted"}
