from decimal import Decimal

from sqlalchemy import select

from dispatch_desk.models import AuditLog, Client


def _create_product(client, headers, **overrides):
    payload = {"name": "Arena lavada", "price": "150.00", "unit": "m3", "itbisRate": "0.18"}
    payload.update(overrides)
    return client.post("/api/products", json=payload, headers=headers)


def test_company_requires_name_and_unique_rnc(client, admin_headers):
    missing = client.post("/api/companies", json={"name": "Agregados SA"}, headers=admin_headers)
    assert missing.status_code == 400

    payload = {"name": "Agregados SA", "rnc": "130-12345-6", "tipoImpositivo": "18", "exento": False}
    created = client.post("/api/companies", json=payload, headers=admin_headers)
    assert created.status_code == 200
    assert created.json()["rnc"] == "130-12345-6"

    duplicate = client.post(
        "/api/companies", json=dict(payload, name="Otra SA"), headers=admin_headers
    )
    assert duplicate.status_code == 400


def test_employee_reads_but_cannot_write_companies(client, employee_headers):
    assert client.get("/api/companies", headers=employee_headers).status_code == 200
    response = client.post(
        "/api/companies", json={"name": "X", "rnc": "1"}, headers=employee_headers
    )
    assert response.status_code == 403


def test_client_create_reuses_case_insensitive_match(client, db_session, employee_headers):
    first = client.post(
        "/api/clients", json={"name": "Constructora Norte", "obra": "Torre A"},
        headers=employee_headers,
    )
    second = client.post(
        "/api/clients", json={"name": "constructora norte"}, headers=employee_headers
    )

    assert first.status_code == 200
    assert second.json()["id"] == first.json()["id"]
    assert len(db_session.scalars(select(Client)).all()) == 1


def test_client_search_filters_by_name(client, employee_headers):
    for name in ("Constructora Norte", "Inversiones Sur"):
        client.post("/api/clients", json={"name": name}, headers=employee_headers)

    response = client.get("/api/clients?q=sur", headers=employee_headers)

    assert [row["name"] for row in response.json()["data"]] == ["Inversiones Sur"]


def test_client_without_name_rejected(client, employee_headers):
    response = client.post("/api/clients", json={"obra": "Torre B"}, headers=employee_headers)

    assert response.status_code == 400


def test_product_lifecycle(client, admin_headers, employee_headers):
    created = _create_product(client, admin_headers)
    assert created.status_code == 201
    product_id = created.json()["id"]
    assert Decimal(created.json()["itbisRate"]) == Decimal("0.18")

    deactivated = client.delete(f"/api/products/{product_id}", headers=admin_headers)
    assert deactivated.json()["active"] is False

    active = client.get("/api/products", headers=employee_headers).json()["data"]
    everything = client.get(
        "/api/products?include_inactive=true", headers=employee_headers
    ).json()["data"]
    assert active == []
    assert [row["id"] for row in everything] == [product_id]

    activated = client.put(f"/api/products/{product_id}/activate", headers=admin_headers)
    assert activated.json()["active"] is True


def test_product_rejects_unknown_itbis_rate(client, admin_headers):
    response = _create_product(client, admin_headers, itbisRate="0.16")

    assert response.status_code == 400


def test_product_name_is_unique(client, admin_headers):
    _create_product(client, admin_headers)

    assert _create_product(client, admin_headers).status_code == 400


def test_special_price_overrides_list_price(client, admin_headers, employee_headers):
    product_id = _create_product(client, admin_headers).json()["id"]

    saved = client.post(
        "/api/client-prices",
        json={"clientName": "constructora norte", "productId": product_id, "specialPrice": "120"},
        headers=admin_headers,
    )
    assert saved.status_code == 201
    assert saved.json()["clientName"] == "CONSTRUCTORA NORTE"

    updated = client.post(
        "/api/client-prices",
        json={"clientName": "Constructora Norte", "productId": product_id, "specialPrice": "110"},
        headers=admin_headers,
    )
    assert updated.json()["id"] == saved.json()["id"]

    special = client.get(
        f"/api/products/{product_id}/price",
        params={"client": "constructora norte"},
        headers=employee_headers,
    ).json()
    regular = client.get(
        f"/api/products/{product_id}/price",
        params={"client": "otro cliente"},
        headers=employee_headers,
    ).json()
    assert special["special"] is True
    assert Decimal(special["price"]) == Decimal("110")
    assert regular["special"] is False
    assert Decimal(regular["price"]) == Decimal("150")

    by_client = client.get(
        "/api/client-prices/client/Constructora Norte", headers=employee_headers
    ).json()["data"]
    assert [row["productId"] for row in by_client] == [product_id]

    deleted = client.delete(
        f"/api/client-prices/constructora norte/{product_id}", headers=admin_headers
    )
    assert deleted.status_code == 200
    missing = client.get(
        f"/api/client-prices/constructora norte/{product_id}", headers=employee_headers
    )
    assert missing.status_code == 404


def test_special_price_for_unknown_product(client, admin_headers):
    response = client.post(
        "/api/client-prices",
        json={"clientName": "X", "productId": 404, "specialPrice": "1"},
        headers=admin_headers,
    )

    assert response.status_code == 404


def test_equipment_and_operators(client, admin_headers, employee_headers):
    created = client.post("/api/equipment", json={"name": "Pala CAT 950"}, headers=admin_headers)
    assert created.status_code == 201
    equipment_id = created.json()["id"]

    renamed = client.put(
        f"/api/equipment/{equipment_id}", json={"name": "Pala CAT 966"}, headers=admin_headers
    )
    assert renamed.json()["name"] == "Pala CAT 966"

    refused = client.post("/api/operators", json={"name": "Pedro"}, headers=employee_headers)
    assert refused.status_code == 403

    client.post("/api/operators", json={"name": "Pedro"}, headers=admin_headers)
    operators = client.get("/api/operators", headers=employee_headers).json()["data"]
    assert [row["name"] for row in operators] == ["Pedro"]

    assert client.delete(f"/api/equipment/{equipment_id}", headers=admin_headers).status_code == 200
    assert client.delete(f"/api/equipment/{equipment_id}", headers=admin_headers).status_code == 404


def test_trucks_are_listed_and_deleted(client, admin_headers, employee_headers, start_number):
    client.post(
        "/api/dispatches",
        json={"camion": "mack", "placa": "l111", "cliente": "c", "total": 10},
        headers=employee_headers,
    )

    listed = client.get("/api/camiones", headers=employee_headers).json()["data"]
    assert [row["placa"] for row in listed] == ["L111"]
    assert client.get("/api/camiones/l111", headers=employee_headers).json()["marca"] == "MACK"

    assert client.delete("/api/camiones/L111", headers=employee_headers).status_code == 403
    assert client.delete("/api/camiones/L111", headers=admin_headers).status_code == 200
    assert client.get("/api/camiones/L111", headers=admin_headers).status_code == 404


def test_audit_log_queries(client, db_session, admin_user, admin_headers, employee_headers):
    product_id = _create_product(client, admin_headers).json()["id"]
    client.delete(f"/api/products/{product_id}", headers=admin_headers)

    recent = client.get("/api/audit?limit=1", headers=admin_headers).json()["data"]
    by_entity = client.get(
        f"/api/audit/entity/product/{product_id}", headers=admin_headers
    ).json()["data"]
    by_user = client.get(f"/api/audit/user/{admin_user.id}", headers=admin_headers).json()["data"]

    assert len(recent) == 1
    assert recent[0]["details"] == {"active": False}
    assert sorted(row["action"] for row in by_entity) == ["CREATE", "UPDATE"]
    assert len(by_user) == 2
    assert all(row["username"] == "admin" for row in by_user)
    assert client.get("/api/audit", headers=employee_headers).status_code == 403
    assert db_session.scalars(select(AuditLog)).all()[0].user_agent == "testclient"
