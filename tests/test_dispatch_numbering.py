from datetime import date, time
from decimal import Decimal

from sqlalchemy import func, select, text
from sqlalchemy.exc import OperationalError

from dispatch_desk.models import Dispatch
from dispatch_desk.services import numbering

DISPATCH_PAYLOAD = {
    "camion": "mack granite",
    "placa": "l123456",
    "color": "rojo",
    "cliente": "constructora del norte",
    "total": 1500,
    "materials": [{"name": "Arena lavada", "quantity": 10, "price": 150}],
}


def _ledger_dispatch(despacho_no: str) -> Dispatch:
    return Dispatch(
        despacho_no=despacho_no,
        fecha=date(2026, 1, 1),
        hora=time(8, 0),
        cliente="EXISTENTE",
        total=Decimal("100.00"),
        materials=[],
    )


def _create(client, headers):
    return client.post("/api/dispatches", json=DISPATCH_PAYLOAD, headers=headers)


def _set_start(client, headers, value):
    response = client.put(
        "/api/config/dispatch_start_number", json={"value": str(value)}, headers=headers
    )
    assert response.status_code == 200
    return response


def test_first_dispatch_gets_start_number(client, admin_headers, start_number):
    response = _create(client, admin_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["despachoNo"] == "0000001"
    assert isinstance(body["id"], int)


def test_first_dispatch_uses_configured_start(client, admin_headers, start_number):
    _set_start(client, admin_headers, 5000)

    response = _create(client, admin_headers)

    assert response.json()["despachoNo"] == "0005000"


def test_lower_start_does_not_rewind(client, db_session, admin_headers, start_number):
    db_session.add(_ledger_dispatch("0005000"))
    db_session.commit()

    response = _create(client, admin_headers)

    assert response.json()["despachoNo"] == "0005001"


def test_raised_start_takes_effect_immediately(
    client, db_session, admin_headers, start_number
):
    db_session.add(_ledger_dispatch("0000010"))
    db_session.commit()
    _set_start(client, admin_headers, 100)

    response = _create(client, admin_headers)

    assert response.json()["despachoNo"] == "0000100"


def test_numbers_increase_per_dispatch(client, admin_headers, start_number):
    numbers = [_create(client, admin_headers).json()["despachoNo"] for _ in range(3)]

    assert numbers == ["0000001", "0000002", "0000003"]


def test_override_of_newest_dispatch_drives_next_number(
    client, admin_headers, start_number
):
    _create(client, admin_headers)
    newest = _create(client, admin_headers).json()

    response = client.put(
        f"/api/dispatches/{newest['id']}/number",
        json={"despachoNo": "9999999"},
        headers=admin_headers,
    )
    assert response.status_code == 200
    assert response.json()["despachoNo"] == "9999999"

    assert _create(client, admin_headers).json()["despachoNo"] == "10000000"


def test_next_number_follows_insertion_order_not_maximum(
    client, admin_headers, start_number
):
    oldest = _create(client, admin_headers).json()
    _create(client, admin_headers)
    client.put(
        f"/api/dispatches/{oldest['id']}/number",
        json={"despachoNo": "9999999"},
        headers=admin_headers,
    )

    response = _create(client, admin_headers)

    assert response.json()["despachoNo"] == "0000003"


def test_conflicting_allocation_retries_with_fresh_snapshot(
    client, db_session, SessionLocal, admin_headers, start_number, monkeypatch
):
    db_session.add(_ledger_dispatch("0000041"))
    db_session.commit()
    real_last_issued = numbering.last_issued_number
    calls = []

    def stale_last_issued(db):
        calls.append(db)
        if len(calls) == 1:
            # Another request stores 42 after this one has read the ledger.
            with SessionLocal() as other:
                other.add(_ledger_dispatch("0000042"))
                other.commit()
            return 41
        return real_last_issued(db)

    monkeypatch.setattr(numbering, "last_issued_number", stale_last_issued)

    response = _create(client, admin_headers)

    assert response.status_code == 200
    assert response.json()["despachoNo"] == "0000043"
    assert len(calls) == 2
    numbers = db_session.scalars(
        select(Dispatch.despacho_no).order_by(Dispatch.id)
    ).all()
    assert numbers == ["0000041", "0000042", "0000043"]


def test_repeated_conflict_fails_cleanly(
    client, db_session, SessionLocal, admin_headers, start_number, monkeypatch
):
    db_session.add(_ledger_dispatch("0000041"))
    db_session.commit()
    observed = {"last": 41}

    def always_stale(db):
        stale = observed["last"]
        with SessionLocal() as other:
            other.add(_ledger_dispatch(numbering.format_dispatch_number(stale + 1)))
            other.commit()
        observed["last"] = stale + 1
        return stale

    monkeypatch.setattr(numbering, "last_issued_number", always_stale)

    response = _create(client, admin_headers)

    assert response.status_code == 409
    ours = db_session.execute(
        select(func.count(Dispatch.id)).where(Dispatch.cliente == "CONSTRUCTORA DEL NORTE")
    ).scalar()
    assert ours == 0


def test_ledger_read_failure_creates_nothing(
    client, db_session, admin_headers, start_number, monkeypatch
):
    def broken_ledger(db):
        raise OperationalError("SELECT despacho_no FROM dispatches", {}, Exception("down"))

    monkeypatch.setattr(numbering, "last_issued_number", broken_ledger)

    response = _create(client, admin_headers)

    assert response.status_code == 500
    assert db_session.execute(select(func.count(Dispatch.id))).scalar() == 0


def test_unreadable_config_falls_back_to_one(client, db_session, admin_headers):
    db_session.execute(text("DROP TABLE config"))
    db_session.commit()

    response = _create(client, admin_headers)

    assert response.status_code == 200
    assert response.json()["despachoNo"] == "0000001"
    assert db_session.execute(select(func.count(Dispatch.id))).scalar() == 1
