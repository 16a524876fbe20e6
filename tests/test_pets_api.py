import pytest


@pytest.mark.asyncio
async def test_add_pet(client, pet_payload):
    resp = await client.post("/api/pets", json=pet_payload)
    assert resp.status_code == 200
    data = resp.json()
    assert data["success"] is True
    assert data["message"] == "Pet added successfully"
    assert data["petId"]


@pytest.mark.asyncio
async def test_add_pet_age_out_of_range(client, store, pet_payload):
    resp = await client.post("/api/pets", json={**pet_payload, "age": 60})
    assert resp.status_code == 400
    assert resp.json() == {"success": False, "error": "Age must be between 0 and 50 years"}
    assert store.count("pets") == 0


@pytest.mark.asyncio
@pytest.mark.parametrize("age", [0, 50, "0", "50"])
async def test_add_pet_age_boundaries_accepted(client, pet_payload, age):
    resp = await client.post("/api/pets", json={**pet_payload, "age": age})
    assert resp.status_code == 200


@pytest.mark.asyncio
@pytest.mark.parametrize("age", [-1, 51, "51", "abc", 50.5])
async def test_add_pet_bad_age_rejected(client, pet_payload, age):
    resp = await client.post("/api/pets", json={**pet_payload, "age": age})
    assert resp.status_code == 400
    assert resp.json()["error"] == "Age must be between 0 and 50 years"


@pytest.mark.asyncio
async def test_add_pet_numeric_string_age_stored_as_int(client, pet_payload):
    await client.post("/api/pets", json={**pet_payload, "age": "12"})
    pets = (await client.get("/api/pets")).json()["pets"]
    assert pets[0]["age"] == 12


@pytest.mark.asyncio
@pytest.mark.parametrize("field", ["petName", "species", "breed", "age", "ownerName", "ownerPhone"])
async def test_add_pet_missing_field(client, store, pet_payload, field):
    payload = dict(pet_payload)
    del payload[field]
    resp = await client.post("/api/pets", json=payload)
    assert resp.status_code == 400
    assert resp.json()["error"] == "All fields are required"
    assert store.count("pets") == 0


@pytest.mark.asyncio
async def test_list_pets_newest_first(client, pet_payload):
    for name in ("Rex", "Tom", "Kiwi"):
        await client.post("/api/pets", json={**pet_payload, "petName": name})
    resp = await client.get("/api/pets")
    assert resp.status_code == 200
    assert [p["petName"] for p in resp.json()["pets"]] == ["Kiwi", "Tom", "Rex"]


@pytest.mark.asyncio
async def test_delete_pet_twice(client, pet_payload):
    pet_id = (await client.post("/api/pets", json=pet_payload)).json()["petId"]
    assert (await client.delete(f"/api/pets/{pet_id}")).status_code == 200

    resp = await client.delete(f"/api/pets/{pet_id}")
    assert resp.status_code == 404
    assert resp.json() == {"success": False, "error": "Pet not found"}


@pytest.mark.asyncio
async def test_delete_pet_does_not_touch_users(client, user_payload):
    """Ids are per collection: a user id is not a pet."""
    user_id = (await client.post("/api/users", json=user_payload)).json()["userId"]
    resp = await client.delete(f"/api/pets/{user_id}")
    assert resp.status_code == 404
    assert len((await client.get("/api/users")).json()["users"]) == 1


@pytest.mark.asyncio
async def test_add_pet_numeric_owner_phone_kept_as_text(client, pet_payload):
    resp = await client.post("/api/pets", json={**pet_payload, "ownerPhone": 5551234})
    assert resp.status_code == 200
    pets = (await client.get("/api/pets")).json()["pets"]
    assert pets[0]["ownerPhone"] == "5551234"
