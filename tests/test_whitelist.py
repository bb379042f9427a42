import pytest

from conftest import FRIEND, OTHER, OWNER
from crud import items_crud, whitelist_crud
from utils.access import Identity
from utils.errors import NotFound, PermissionDenied, ValidationFailed

API = "/api/v1"


def test_matching_is_case_insensitive(db, make_item):
    item = make_item(OWNER)
    whitelist_crud.add(db, item.id, "  Friend@Example.COM ")

    assert whitelist_crud.is_whitelisted(db, item.id, "friend@example.com")
    assert whitelist_crud.is_whitelisted(db, item.id, "FRIEND@EXAMPLE.COM")
    assert not whitelist_crud.is_whitelisted(db, item.id, "")
    assert items_crud.get_item(db, FRIEND, item.id).id == item.id


def test_add_is_idempotent(db, make_item):
    item = make_item(OWNER)

    first = whitelist_crud.add(db, item.id, "friend@example.com")
    second = whitelist_crud.add(db, item.id, "FRIEND@example.com")

    assert first.id == second.id
    assert len(whitelist_crud.list_entries(db, item.id)) == 1


def test_blank_email_is_rejected(db, make_item):
    item = make_item(OWNER)

    with pytest.raises(ValidationFailed):
        whitelist_crud.add(db, item.id, "   ")


def test_bulk_add_counts_only_new_entries(db, make_item):
    item = make_item(OWNER)
    whitelist_crud.add(db, item.id, "a@example.com")

    added = whitelist_crud.bulk_add(db, item.id, ["A@example.com", "b@example.com", "b@example.com", "", "c@example.com"])

    assert added == 2
    assert [entry.email for entry in whitelist_crud.list_entries(db, item.id)] == [
        "a@example.com", "b@example.com", "c@example.com",
    ]


def test_remove_revokes_access(db, make_item):
    item = make_item(OWNER)
    entry = whitelist_crud.add(db, item.id, FRIEND.email)

    whitelist_crud.remove(db, item.id, entry.id)

    with pytest.raises(PermissionDenied):
        items_crud.get_item(db, FRIEND, item.id)
    with pytest.raises(NotFound):
        whitelist_crud.remove(db, item.id, entry.id)


def test_entry_is_scoped_to_its_item(db, make_item):
    item = make_item(OWNER)
    other_item = make_item(OWNER)
    whitelist_crud.add(db, item.id, FRIEND.email)

    with pytest.raises(PermissionDenied):
        items_crud.get_item(db, FRIEND, other_item.id)


def test_identity_without_email_is_never_whitelisted(db, make_item):
    item = make_item(OWNER)
    whitelist_crud.add(db, item.id, FRIEND.email)

    with pytest.raises(PermissionDenied):
        items_crud.get_item(db, Identity(user_id=FRIEND.user_id), item.id)


def test_whitelist_does_not_extend_to_children(db, make_item):
    parent = make_item(OWNER, "parent")
    child = make_item(OWNER, "child", parent_id=parent.id)
    whitelist_crud.add(db, parent.id, FRIEND.email)

    assert items_crud.get_children(db, FRIEND, parent) == []
    with pytest.raises(PermissionDenied):
        items_crud.get_item(db, FRIEND, child.id)


# ---- HTTP ----
def test_only_owner_manages_whitelist(client, headers, make_item):
    item = make_item(OWNER)
    url = f"{API}/items/{item.id}/whitelist"

    assert client.get(url, headers=headers(OTHER)).status_code == 403
    assert client.post(url, json={"email": "x@example.com"}, headers=headers(OTHER)).status_code == 403
    assert client.post(f"{url}/bulk", json={"emails": ["x@example.com"]}, headers=headers(OTHER)).status_code == 403
    assert client.get(url).status_code == 401


def test_whitelist_endpoints_round_trip(client, headers, make_item):
    item = make_item(OWNER)
    url = f"{API}/items/{item.id}/whitelist"

    bulk = client.post(f"{url}/bulk", json={"emails": ["a@example.com", "B@example.com"]}, headers=headers(OWNER))
    listed = client.get(url, headers=headers(OWNER)).json()

    assert bulk.status_code == 201
    assert bulk.json() == {"added": 2}
    assert [entry["email"] for entry in listed] == ["a@example.com", "b@example.com"]
    assert listed[0]["itemId"] == item.id

    removed = client.delete(f"{url}/{listed[0]['id']}", headers=headers(OWNER))
    assert removed.status_code == 200
    assert [entry["email"] for entry in client.get(url, headers=headers(OWNER)).json()] == ["b@example.com"]


def test_invalid_email_is_rejected(client, headers, make_item):
    item = make_item(OWNER)

    response = client.post(f"{API}/items/{item.id}/whitelist", json={"email": "not-an-email"}, headers=headers(OWNER))

    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "email"
