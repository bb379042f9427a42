"""Categories, locations, authors and position schemas share one owner-only contract."""

import pytest

from conftest import OTHER, OWNER

API = "/api/v1"

LOOKUPS = [
    ("categories", {"name": "Tools", "color": "#ff0000"}, {"name": "Hand tools"}, "name"),
    ("locations", {"title": "Garage", "latitude": 52.2, "longitude": 21.0}, {"title": "Basement"}, "title"),
    ("authors", {"name": "Ada", "bio": "collector"}, {"name": "Ada L."}, "name"),
    ("position-schemas", {"name": "Shelf", "schema": {"type": "object"}}, {"name": "Rack"}, "name"),
]


@pytest.mark.parametrize("path, payload, update, label", LOOKUPS)
def test_lookup_crud_round_trip(client, headers, path, payload, update, label):
    created = client.post(f"{API}/{path}", json=payload, headers=headers(OWNER))
    assert created.status_code == 201
    row = created.json()
    assert row["userId"] == OWNER.user_id

    fetched = client.get(f"{API}/{path}/{row['id']}", headers=headers(OWNER))
    updated = client.put(f"{API}/{path}/{row['id']}", json=update, headers=headers(OWNER))

    assert fetched.json()[label] == payload[label]
    assert updated.status_code == 200
    assert updated.json()[label] == update[label]

    deleted = client.delete(f"{API}/{path}/{row['id']}", headers=headers(OWNER))
    assert deleted.status_code == 200
    assert client.get(f"{API}/{path}/{row['id']}", headers=headers(OWNER)).status_code == 404


@pytest.mark.parametrize("path, payload, update, label", LOOKUPS)
def test_lookups_are_private_to_their_owner(client, headers, path, payload, update, label):
    row = client.post(f"{API}/{path}", json=payload, headers=headers(OWNER)).json()

    assert client.get(f"{API}/{path}", headers=headers(OTHER)).json() == []
    assert client.get(f"{API}/{path}/{row['id']}", headers=headers(OTHER)).status_code == 403
    assert client.put(f"{API}/{path}/{row['id']}", json=update, headers=headers(OTHER)).status_code == 403
    assert client.delete(f"{API}/{path}/{row['id']}", headers=headers(OTHER)).status_code == 403


@pytest.mark.parametrize("path", [path for path, *_ in LOOKUPS])
def test_lookups_require_authentication(client, path):
    response = client.get(f"{API}/{path}")

    assert response.status_code == 401
    assert "error" in response.json()


def test_lookup_list_is_sorted_by_name_and_paginates(client, headers):
    for name in ("Zinc", "Brass", "Copper"):
        client.post(f"{API}/categories", json={"name": name}, headers=headers(OWNER))

    plain = client.get(f"{API}/categories", headers=headers(OWNER)).json()
    paged = client.get(f"{API}/categories", params={"limit": 2}, headers=headers(OWNER)).json()

    assert [row["name"] for row in plain] == ["Brass", "Copper", "Zinc"]
    assert [row["name"] for row in paged["data"]] == ["Brass", "Copper"]
    assert paged["pagination"]["hasNextPage"] is True


def test_lookup_search(client, headers):
    client.post(f"{API}/authors", json={"name": "Ada Lovelace"}, headers=headers(OWNER))
    client.post(f"{API}/authors", json={"name": "Alan Turing"}, headers=headers(OWNER))

    found = client.get(f"{API}/authors", params={"search": "love"}, headers=headers(OWNER)).json()

    assert [row["name"] for row in found] == ["Ada Lovelace"]


def test_location_coordinates_are_validated(client, headers):
    response = client.post(
        f"{API}/locations", json={"title": "Nowhere", "latitude": 123, "longitude": 0}, headers=headers(OWNER)
    )

    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "latitude"


def test_null_name_on_update_is_rejected(client, headers):
    row = client.post(f"{API}/categories", json={"name": "Tools"}, headers=headers(OWNER)).json()

    response = client.put(f"{API}/categories/{row['id']}", json={"name": None}, headers=headers(OWNER))

    assert response.status_code == 400
    assert response.json()["details"] == [{"field": "name", "message": "Field cannot be null"}]
