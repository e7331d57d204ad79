"""Property Routes: list, group, fetch, create, update and delete over HTTP.

Invariants:
    - JSON field names are camelCase on the wire
    - POST assigns a 32-hex id and returns 201
    - PUT changes only group; every other field is identical before and after
    - Missing ids produce 404 {"message": "Property not found"} and leave the table unchanged
"""

import re
from datetime import datetime

HEX_ID = re.compile(r"^[0-9a-f]{32}$")


# --- GET /api/properties ----------------------------------------------------

async def test_list_returns_every_property_without_search_term(client, seed):
    await seed(id="a" * 32, address="12 Harbour Street", group="Pending")
    await seed(id="b" * 32, address="4 Mill Lane", group="Exited")

    res = await client.get("/api/properties")

    assert res.status_code == 200
    assert {p["id"] for p in res.json()} == {"a" * 32, "b" * 32}


async def test_list_on_empty_table_returns_empty_array(client):
    res = await client.get("/api/properties")
    assert res.status_code == 200
    assert res.json() == []


async def test_search_term_narrows_results_case_insensitively(client, seed):
    await seed(id="a" * 32, address="12 Harbour Street", city="Leeds", group="Pending")
    await seed(id="b" * 32, address="4 Mill Lane", city="York", group="Exited")

    res = await client.get("/api/properties", params={"searchTerm": "HARBOUR"})

    assert res.status_code == 200
    assert [p["id"] for p in res.json()] == ["a" * 32]


async def test_search_matches_any_token(client, seed):
    await seed(id="a" * 32, city="Leeds", group="Pending")
    await seed(id="b" * 32, city="York", group="Exited")
    await seed(id="c" * 32, city="Bath", group="Exited")

    res = await client.get("/api/properties", params={"searchTerm": "york leeds"})

    assert {p["id"] for p in res.json()} == {"a" * 32, "b" * 32}


async def test_blank_search_term_returns_everything(client, seed):
    await seed(id="a" * 32, group="Pending")

    res = await client.get("/api/properties", params={"searchTerm": "  "})

    assert len(res.json()) == 1


async def test_search_treats_percent_literally(client, seed):
    await seed(id="a" * 32, tag="100% let", group="Pending")
    await seed(id="b" * 32, tag="vacant", group="Pending")

    res = await client.get("/api/properties", params={"searchTerm": "%"})

    assert [p["id"] for p in res.json()] == ["a" * 32]


# --- GET /properties/groups -------------------------------------------------

async def test_groups_keys_records_by_group_value(client, seed):
    await seed(id="a" * 32, group="Pending")
    await seed(id="b" * 32, group="Pending")
    await seed(id="c" * 32, group="Exited")

    res = await client.get("/properties/groups")

    assert res.status_code == 200
    body = res.json()
    assert set(body) == {"Pending", "Exited"}
    assert {p["id"] for p in body["Pending"]} == {"a" * 32, "b" * 32}
    assert [p["id"] for p in body["Exited"]] == ["c" * 32]


async def test_groups_on_empty_table_is_empty_object(client):
    res = await client.get("/properties/groups")
    assert res.json() == {}


# --- GET /properties/{id} ---------------------------------------------------

async def test_get_returns_camel_case_record(client, seed):
    await seed(
        id="a" * 32, property_name="Harbour View", group="Pending",
        rental_cost={"monthly": 1200, "currency": "GBP"}, fixed_cost=80.5,
        contract_start_date=datetime(2024, 1, 1),
    )

    res = await client.get(f"/properties/{'a' * 32}")

    assert res.status_code == 200
    body = res.json()
    assert body["propertyName"] == "Harbour View"
    assert body["rentalCost"] == {"monthly": 1200, "currency": "GBP"}
    assert body["fixedCost"] == 80.5
    assert body["contractStartDate"].startswith("2024-01-01")
    assert "created_at" not in body and "createdAt" not in body


async def test_get_missing_property_returns_404(client):
    res = await client.get(f"/properties/{'f' * 32}")
    assert res.status_code == 404
    assert res.json() == {"message": "Property not found"}


# --- POST /properties -------------------------------------------------------

async def test_create_assigns_hex_id_and_returns_201(client, count_properties):
    res = await client.post("/properties", json={
        "address": "7 Quay Road",
        "group": "Pending",
        "rentalCost": 950,
        "directCost": {"cleaning": 40},
    })

    assert res.status_code == 201
    body = res.json()
    assert HEX_ID.match(body["id"])
    assert body["rentalCost"] == 950
    assert body["directCost"] == {"cleaning": 40}
    assert await count_properties() == 1


async def test_created_property_is_fetchable(client):
    created = (await client.post("/properties", json={"group": "Exited"})).json()

    res = await client.get(f"/properties/{created['id']}")

    assert res.status_code == 200
    assert res.json()["group"] == "Exited"


async def test_create_ignores_client_supplied_id(client):
    res = await client.post("/properties", json={"id": "mine", "group": "Pending"})

    assert res.status_code == 201
    assert res.json()["id"] != "mine"
    assert HEX_ID.match(res.json()["id"])


async def test_create_without_group_is_rejected(client, count_properties):
    res = await client.post("/properties", json={"address": "No group"})

    assert res.status_code == 400
    assert res.json()["message"] == "Invalid request data"
    assert await count_properties() == 0


async def test_consecutive_creates_get_distinct_ids(client):
    ids = {
        (await client.post("/properties", json={"group": "Pending"})).json()["id"]
        for _ in range(5)
    }
    assert len(ids) == 5


# --- PUT /properties/{id} ---------------------------------------------------

async def test_update_changes_only_group(client, seed):
    await seed(
        id="a" * 32, address="12 Harbour Street", group="Pending",
        rental_cost={"monthly": 1200}, tag="harbour", city="Leeds",
        fixed_cost=10.0, contract_start_date=datetime(2024, 3, 1),
    )
    before = (await client.get(f"/properties/{'a' * 32}")).json()

    res = await client.put(f"/properties/{'a' * 32}", json={"group": "Exited"})

    assert res.status_code == 200
    after = (await client.get(f"/properties/{'a' * 32}")).json()
    assert after["group"] == "Exited"
    assert {k: v for k, v in after.items() if k != "group"} == {
        k: v for k, v in before.items() if k != "group"
    }


async def test_update_ignores_fields_other_than_group(client, seed):
    await seed(id="a" * 32, address="Original", group="Pending")

    await client.put(
        f"/properties/{'a' * 32}", json={"group": "Exited", "address": "Changed"},
    )

    body = (await client.get(f"/properties/{'a' * 32}")).json()
    assert body["address"] == "Original"


async def test_update_missing_property_returns_404(client):
    res = await client.put(f"/properties/{'f' * 32}", json={"group": "Exited"})
    assert res.status_code == 404
    assert res.json() == {"message": "Property not found"}


async def test_update_without_group_returns_400(client, seed):
    await seed(id="a" * 32, group="Pending")

    res = await client.put(f"/properties/{'a' * 32}", json={})

    assert res.status_code == 400


# --- DELETE /api/properties/{id} --------------------------------------------

async def test_delete_removes_property(client, seed, count_properties):
    await seed(id="a" * 32, group="Pending")

    res = await client.delete(f"/api/properties/{'a' * 32}")

    assert res.status_code == 200
    assert res.json() == {"message": "Property deleted successfully"}
    assert await count_properties() == 0


async def test_delete_missing_property_returns_404_and_keeps_table(
    client, seed, count_properties,
):
    await seed(id="a" * 32, group="Pending")

    res = await client.delete(f"/api/properties/{'f' * 32}")

    assert res.status_code == 404
    assert res.json() == {"message": "Property not found"}
    assert await count_properties() == 1
