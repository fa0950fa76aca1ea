"""
Service area API tests — subdivisions, streets, houses, inspection reports.
"""

import pytest_asyncio
from httpx import AsyncClient


@pytest_asyncio.fixture()
async def subdivision(app_client: AsyncClient, admin_headers) -> dict:
    resp = await app_client.post(
        "/api/subdivisions", json={"name": "Las Flores"}, headers=admin_headers
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


@pytest_asyncio.fixture()
async def street(app_client, inspector_headers, subdivision) -> dict:
    resp = await app_client.post(
        "/api/streets",
        json={"name": "Hidalgo", "subdivision_id": subdivision["id"]},
        headers=inspector_headers,
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


@pytest_asyncio.fixture()
async def house(app_client, inspector_headers, street) -> dict:
    resp = await app_client.post(
        "/api/houses",
        json={"house_number": "12", "inhabited": True, "street_id": street["id"]},
        headers=inspector_headers,
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


class TestSubdivisions:
    """/api/subdivisions"""

    async def test_create_and_get(self, app_client, inspector_headers, subdivision):
        resp = await app_client.get(
            f"/api/subdivisions/{subdivision['id']}", headers=inspector_headers
        )
        assert resp.status_code == 200
        assert resp.json()["name"] == "Las Flores"

    async def test_requires_session(self, app_client):
        resp = await app_client.get("/api/subdivisions")
        assert resp.status_code == 401

    async def test_empty_name(self, app_client, admin_headers):
        resp = await app_client.post("/api/subdivisions", json={"name": ""}, headers=admin_headers)
        assert resp.status_code == 400

    async def test_list(self, app_client, cobrador_headers, subdivision):
        await app_client.post("/api/subdivisions", json={"name": "Centro"}, headers=cobrador_headers)
        resp = await app_client.get("/api/subdivisions", headers=cobrador_headers)
        assert resp.status_code == 200
        assert {s["name"] for s in resp.json()} == {"Las Flores", "Centro"}

    async def test_rename(self, app_client, admin_headers, subdivision):
        resp = await app_client.patch(
            f"/api/subdivisions/{subdivision['id']}",
            json={"name": "Las Rosas"},
            headers=admin_headers,
        )
        assert resp.status_code == 200
        assert resp.json()["name"] == "Las Rosas"

    async def test_get_missing(self, app_client, admin_headers):
        resp = await app_client.get("/api/subdivisions/9999", headers=admin_headers)
        assert resp.status_code == 404
        assert resp.json()["detail"] == "Subdivision not found"

    async def test_delete_empty(self, app_client, cobrador_headers, subdivision):
        resp = await app_client.delete(
            f"/api/subdivisions/{subdivision['id']}", headers=cobrador_headers
        )
        assert resp.status_code == 204
        resp = await app_client.get(
            f"/api/subdivisions/{subdivision['id']}", headers=cobrador_headers
        )
        assert resp.status_code == 404

    async def test_inspector_cannot_delete(self, app_client, inspector_headers, subdivision):
        resp = await app_client.delete(
            f"/api/subdivisions/{subdivision['id']}", headers=inspector_headers
        )
        assert resp.status_code == 403

    async def test_delete_with_streets(self, app_client, admin_headers, subdivision, street):
        resp = await app_client.delete(
            f"/api/subdivisions/{subdivision['id']}", headers=admin_headers
        )
        assert resp.status_code == 409


class TestStreets:
    """/api/streets"""

    async def test_create_nests_subdivision(self, street, subdivision):
        assert street["subdivision_id"] == subdivision["id"]
        assert street["subdivision"]["name"] == "Las Flores"

    async def test_create_in_missing_subdivision(self, app_client, inspector_headers):
        resp = await app_client.post(
            "/api/streets",
            json={"name": "Juárez", "subdivision_id": 9999},
            headers=inspector_headers,
        )
        assert resp.status_code == 404

    async def test_list_filtered(self, app_client, admin_headers, inspector_headers, street):
        other = await app_client.post("/api/subdivisions", json={"name": "Centro"}, headers=admin_headers)
        await app_client.post(
            "/api/streets",
            json={"name": "Allende", "subdivision_id": other.json()["id"]},
            headers=inspector_headers,
        )

        everything = await app_client.get("/api/streets", headers=admin_headers)
        assert [s["name"] for s in everything.json()] == ["Allende", "Hidalgo"]

        filtered = await app_client.get(
            "/api/streets",
            params={"subdivision_id": street["subdivision_id"]},
            headers=admin_headers,
        )
        assert [s["name"] for s in filtered.json()] == ["Hidalgo"]

    async def test_move_to_missing_subdivision(self, app_client, admin_headers, street):
        resp = await app_client.patch(
            f"/api/streets/{street['id']}",
            json={"subdivision_id": 9999},
            headers=admin_headers,
        )
        assert resp.status_code == 404

    async def test_rename(self, app_client, admin_headers, street):
        resp = await app_client.patch(
            f"/api/streets/{street['id']}", json={"name": "Morelos"}, headers=admin_headers
        )
        assert resp.status_code == 200
        assert resp.json()["name"] == "Morelos"


class TestHouses:
    """/api/houses"""

    async def test_create(self, house, street):
        assert house["house_number"] == "12"
        assert house["inhabited"] is True
        assert house["has_water"] is False
        assert house["street"]["id"] == street["id"]

    async def test_create_on_missing_street(self, app_client, inspector_headers):
        resp = await app_client.post(
            "/api/houses",
            json={"house_number": "1", "street_id": 9999},
            headers=inspector_headers,
        )
        assert resp.status_code == 404
        assert resp.json()["detail"] == "Street not found"

    async def test_update(self, app_client, admin_headers, house):
        resp = await app_client.patch(
            f"/api/houses/{house['id']}", json={"has_water": True}, headers=admin_headers
        )
        assert resp.status_code == 200
        assert resp.json()["has_water"] is True
        assert resp.json()["inhabited"] is True

    async def test_by_street_and_subdivision(self, app_client, inspector_headers, street, house):
        await app_client.post(
            "/api/houses",
            json={"house_number": "10", "street_id": street["id"]},
            headers=inspector_headers,
        )
        by_street = await app_client.get(
            f"/api/streets/{street['id']}/houses", headers=inspector_headers
        )
        assert [h["house_number"] for h in by_street.json()] == ["10", "12"]

        by_subdivision = await app_client.get(
            f"/api/subdivisions/{street['subdivision_id']}/houses", headers=inspector_headers
        )
        assert len(by_subdivision.json()) == 2

    async def test_delete_removes_reports(self, app_client, inspector_headers, house):
        report = await app_client.post(
            "/api/reports",
            json={"report_date": "2024-05-01", "house_id": house["id"]},
            headers=inspector_headers,
        )
        assert report.status_code == 201

        resp = await app_client.delete(f"/api/houses/{house['id']}", headers=inspector_headers)
        assert resp.status_code == 204
        gone = await app_client.get(
            f"/api/reports/{report.json()['id']}", headers=inspector_headers
        )
        assert gone.status_code == 404


class TestReports:
    """/api/reports"""

    async def test_create_and_list_for_house(self, app_client, inspector_headers, house):
        for day in ("2024-05-01", "2024-06-01"):
            resp = await app_client.post(
                "/api/reports",
                json={"report_date": day, "comments": "Fuga en toma", "house_id": house["id"]},
                headers=inspector_headers,
            )
            assert resp.status_code == 201
            assert resp.json()["house"]["id"] == house["id"]

        resp = await app_client.get(
            f"/api/houses/{house['id']}/reports", headers=inspector_headers
        )
        assert [r["report_date"] for r in resp.json()] == ["2024-06-01", "2024-05-01"]

    async def test_create_for_missing_house(self, app_client, inspector_headers):
        resp = await app_client.post(
            "/api/reports",
            json={"report_date": "2024-05-01", "house_id": 9999},
            headers=inspector_headers,
        )
        assert resp.status_code == 404

    async def test_clear_comments(self, app_client, inspector_headers, house):
        created = await app_client.post(
            "/api/reports",
            json={"report_date": "2024-05-01", "comments": "Sin agua", "house_id": house["id"]},
            headers=inspector_headers,
        )
        report_id = created.json()["id"]

        resp = await app_client.patch(
            f"/api/reports/{report_id}", json={"comments": None}, headers=inspector_headers
        )
        assert resp.status_code == 200
        assert resp.json()["comments"] is None
        assert resp.json()["report_date"] == "2024-05-01"

    async def test_delete(self, app_client, inspector_headers, house):
        created = await app_client.post(
            "/api/reports",
            json={"report_date": "2024-05-01", "house_id": house["id"]},
            headers=inspector_headers,
        )
        report_id = created.json()["id"]
        resp = await app_client.delete(f"/api/reports/{report_id}", headers=inspector_headers)
        assert resp.status_code == 204
        listed = await app_client.get("/api/reports", headers=inspector_headers)
        assert listed.json() == []
