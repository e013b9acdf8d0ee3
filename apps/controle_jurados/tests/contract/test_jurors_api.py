from __future__ import annotations

from datetime import date

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker

from controle_jurados.db.models.juror import InactivityReason, Juror, JurorStatus


def _create_juror(client: TestClient, cpf: str, name: str, **extra: object) -> dict:
    response = client.post("/v1/jurors", json={"cpf": cpf, "full_name": name, **extra})
    assert response.status_code == 201, response.text
    return response.json()


def test_create_juror_returns_201(client: TestClient) -> None:
    body = _create_juror(client, "12345678901", "maria silva", birth_date="1990-05-20")

    assert body["cpf"] == "123.456.789-01"
    assert body["full_name"] == "MARIA SILVA"
    assert body["status"] == "Ativo"
    assert body["reason"] is None


def test_create_juror_keeps_registration_data(client: TestClient) -> None:
    body = _create_juror(
        client,
        "12345678901",
        "Maria",
        rg="4.567.890",
        sex="Feminino",
        street="rua das flores",
        street_number="120",
        neighborhood="centro",
        city="capivari de baixo",
        state="sc",
        postal_code="88745-000",
        email=" Maria@Example.COM ",
        phone="(48) 99999-0000",
        occupation="professora",
        notes="  ",
    )

    assert body["rg"] == "4.567.890"
    assert body["sex"] == "Feminino"
    assert body["street"] == "RUA DAS FLORES"
    assert body["neighborhood"] == "CENTRO"
    assert body["city"] == "CAPIVARI DE BAIXO"
    assert body["state"] == "SC"
    assert body["postal_code"] == "88745-000"
    assert body["email"] == "maria@example.com"
    assert body["phone"] == "(48) 99999-0000"
    assert body["occupation"] == "PROFESSORA"
    assert body["complement"] is None
    assert body["notes"] is None


def test_patch_juror_updates_only_sent_registration_fields(client: TestClient) -> None:
    juror = _create_juror(client, "12345678901", "Maria", city="Tubarao", phone="123")

    response = client.patch(
        f"/v1/jurors/{juror['id']}",
        json={"occupation": "engenheira", "phone": None},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["occupation"] == "ENGENHEIRA"
    assert body["phone"] is None
    assert body["city"] == "TUBARAO"


def test_create_juror_with_invalid_state_returns_400(client: TestClient) -> None:
    response = client.post(
        "/v1/jurors",
        json={"cpf": "12345678901", "full_name": "Maria", "state": "S1"},
    )

    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_REQUEST"


def test_create_juror_with_duplicate_cpf_returns_409(client: TestClient) -> None:
    _create_juror(client, "12345678901", "Maria")

    response = client.post(
        "/v1/jurors", json={"cpf": "123.456.789-01", "full_name": "Outra"}
    )

    assert response.status_code == 409
    assert response.json()["code"] == "DUPLICATE_CPF"


def test_create_juror_with_invalid_payload_returns_400(client: TestClient) -> None:
    response = client.post("/v1/jurors", json={"cpf": "1", "full_name": ""})

    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_REQUEST"


def test_patch_juror_applies_lifecycle_rules(client: TestClient) -> None:
    juror = _create_juror(client, "12345678901", "Maria")

    suspended = client.patch(
        f"/v1/jurors/{juror['id']}",
        json={
            "status": "Inativo",
            "reason": "Temporário",
            "suspended_until": "2025-04-01",
        },
    )
    assert suspended.status_code == 200
    assert suspended.json()["suspended_until"] == "2025-04-01"

    reactivated = client.patch(f"/v1/jurors/{juror['id']}", json={"status": "Ativo"})
    body = reactivated.json()
    assert body["status"] == "Ativo"
    assert body["reason"] is None
    assert body["suspended_until"] is None


def test_list_jurors_paginates(client: TestClient) -> None:
    _create_juror(client, "11111111111", "Bia")
    _create_juror(client, "22222222222", "Ana")

    response = client.get("/v1/jurors", params={"limit": 1})

    body = response.json()
    assert response.status_code == 200
    assert body["total"] == 2
    assert [item["full_name"] for item in body["items"]] == ["ANA"]


def test_get_unknown_juror_returns_404(client: TestClient) -> None:
    response = client.get("/v1/jurors/00000000-0000-0000-0000-000000000000")

    assert response.status_code == 404
    assert response.json()["code"] == "JUROR_NOT_FOUND"


def test_eligibility_endpoint_lists_failed_rules(client: TestClient) -> None:
    juror = _create_juror(client, "12345678901", "Maria", birth_date="2007-01-01")

    response = client.get(
        f"/v1/jurors/{juror['id']}/eligibility", params={"reference_year": 2024}
    )

    assert response.status_code == 200
    assert response.json() == {
        "juror_id": juror["id"],
        "reference_year": 2024,
        "eligible": False,
        "failed_rules": ["age"],
    }


def test_reactivation_endpoint_uses_injected_clock(
    client: TestClient,
    sqlite_session_factory: sessionmaker[Session],
) -> None:
    with sqlite_session_factory() as session:
        session.add(
            Juror(
                cpf="111.111.111-11",
                full_name="ANA",
                status=JurorStatus.INACTIVE,
                reason=InactivityReason.TEMPORARY_SUSPENSION,
                suspended_until=date(2025, 3, 10),
            )
        )
        session.commit()

    first = client.post("/v1/jurors/reactivations")
    second = client.post("/v1/jurors/reactivations")

    assert first.json() == {"reactivated": 1}
    assert second.json() == {"reactivated": 0}


def test_record_last_service_by_cpf(client: TestClient) -> None:
    _create_juror(client, "11111111111", "Ana")

    response = client.post(
        "/v1/jurors/last-service",
        json={"sitting_date": "2024-11-05", "cpfs": ["111.111.111-11"]},
    )

    body = response.json()
    assert response.status_code == 200
    assert body[0]["last_service_date"] == "2024-11-05"
    assert body[0]["status"] == "Inativo"
    assert body[0]["reason"] == "12 meses"


def test_record_last_service_rejects_loose_dates(client: TestClient) -> None:
    _create_juror(client, "11111111111", "Ana")

    response = client.post(
        "/v1/jurors/last-service",
        json={"sitting_date": "05/11/2024", "cpfs": ["11111111111"]},
    )

    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_REQUEST"


def test_delete_juror_returns_204(client: TestClient) -> None:
    juror = _create_juror(client, "11111111111", "Ana")

    response = client.delete(f"/v1/jurors/{juror['id']}")

    assert response.status_code == 204
    assert client.get(f"/v1/jurors/{juror['id']}").status_code == 404
