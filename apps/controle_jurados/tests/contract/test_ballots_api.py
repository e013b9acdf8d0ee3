from __future__ import annotations

from fastapi.testclient import TestClient


def _generate_single_ballot(client: TestClient) -> dict:
    juror = client.post(
        "/v1/jurors", json={"cpf": "11111111111", "full_name": "Ana"}
    ).json()
    draw = client.post(
        "/v1/draws",
        json={
            "reference_year": 2025,
            "draw_date": "2025-02-01",
            "sitting_date": "2025-03-20",
        },
    ).json()
    client.post(
        f"/v1/draws/{draw['id']}/assignments",
        json={"juror_id": juror["id"], "role": "titular"},
    )
    return client.post(f"/v1/draws/{draw['id']}/ballots").json()["items"][0]


def test_print_then_use_ballot(client: TestClient) -> None:
    ballot = _generate_single_ballot(client)

    printed = client.post(f"/v1/ballots/{ballot['id']}/print")
    assert printed.status_code == 200
    assert printed.json()["status"] == "Impressa"
    assert printed.json()["printed_at"] is not None

    used = client.post(f"/v1/ballots/{ballot['id']}/use")
    assert used.status_code == 200
    assert used.json()["status"] == "Utilizada"


def test_printing_used_ballot_returns_422(client: TestClient) -> None:
    ballot = _generate_single_ballot(client)
    client.post(f"/v1/ballots/{ballot['id']}/use")

    response = client.post(f"/v1/ballots/{ballot['id']}/print")

    assert response.status_code == 422
    assert response.json()["code"] == "INVALID_BALLOT_TRANSITION"
    assert response.json()["details"]["status"] == "Utilizada"


def test_unknown_ballot_returns_404(client: TestClient) -> None:
    response = client.post("/v1/ballots/00000000-0000-0000-0000-000000000000/use")

    assert response.status_code == 404
    assert response.json()["code"] == "BALLOT_NOT_FOUND"
