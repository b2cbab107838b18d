from __future__ import annotations

from uuid import uuid4


async def test_herds_crud_flow(client):
    create_response = await client.post(
        "/api/v1/herds/", json={"name": "North Pasture", "description": "Hill herd"}
    )
    assert create_response.status_code == 201
    herd = create_response.json()
    herd_id = herd["id"]

    duplicate = await client.post("/api/v1/herds/", json={"name": "north pasture"})
    assert duplicate.status_code == 409

    animal_response = await client.post(
        "/api/v1/animals/",
        json={"name": "Duke", "species": "Cattle", "sex": "Male", "herd_id": herd_id},
    )
    assert animal_response.status_code == 201
    animal_id = animal_response.json()["id"]

    members = await client.get(f"/api/v1/herds/{herd_id}/animals")
    assert members.status_code == 200
    assert [a["id"] for a in members.json()] == [animal_id]

    renamed = await client.put(f"/api/v1/herds/{herd_id}", json={"name": "South Pasture"})
    assert renamed.status_code == 200
    assert renamed.json()["name"] == "South Pasture"

    listed = await client.get("/api/v1/herds/")
    assert [h["name"] for h in listed.json()] == ["South Pasture"]

    deleted = await client.delete(f"/api/v1/herds/{herd_id}")
    assert deleted.status_code == 204

    animal = await client.get(f"/api/v1/animals/{animal_id}")
    assert animal.status_code == 200
    assert animal.json()["herd_id"] is None

    gone = await client.get(f"/api/v1/herds/{herd_id}")
    assert gone.status_code == 404


async def test_animal_with_unknown_herd_is_rejected(client):
    response = await client.post(
        "/api/v1/animals/",
        json={"name": "Duke", "species": "Cattle", "sex": "Male", "herd_id": str(uuid4())},
    )
    assert response.status_code == 404


async def test_health_endpoint(client):
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
