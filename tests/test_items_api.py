"""HTTP-level tests for items: visibility, ownership, validation and response shapes."""

import pytest

from conftest import FRIEND, OTHER, OWNER

API = "/api/v1"
PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


def _create(client, headers, identity=OWNER, **payload):
    payload.setdefault("title", "Cordless drill")
    response = client.post(f"{API}/items", json=payload, headers=headers(identity))
    assert response.status_code == 201, response.text
    return response.json()


# ---- visibility and ownership ----
def test_list_is_scoped_to_own_and_public_items(client, headers):
    own = _create(client, headers, OWNER, title="mine")
    _create(client, headers, OTHER, title="other private")
    other_public = _create(client, headers, OTHER, title="other public", visibility="public")

    response = client.get(f"{API}/items", headers=headers(OWNER))

    assert response.status_code == 200
    assert {item["id"] for item in response.json()} == {own["id"], other_public["id"]}


def test_anonymous_list_only_contains_public_items(client, headers):
    _create(client, headers, OWNER, title="private")
    public = _create(client, headers, OWNER, title="public", visibility="public")

    response = client.get(f"{API}/items")

    assert [item["id"] for item in response.json()] == [public["id"]]


def test_public_item_is_readable_but_not_writable_by_others(client, headers):
    item = _create(client, headers, OWNER, visibility="public")

    assert client.get(f"{API}/items/{item['id']}", headers=headers(OTHER)).status_code == 200

    update = client.put(f"{API}/items/{item['id']}", json={"title": "stolen"}, headers=headers(OTHER))
    delete = client.delete(f"{API}/items/{item['id']}", headers=headers(OTHER))

    assert update.status_code == 403
    assert update.json() == {"error": "Permission denied"}
    assert delete.status_code == 403
    assert client.get(f"{API}/items/{item['id']}", headers=headers(OWNER)).json()["title"] == item["title"]


def test_private_item_access_by_identity(client, headers):
    item = _create(client, headers, OWNER)
    url = f"{API}/items/{item['id']}"

    assert client.get(url, headers=headers(OWNER)).status_code == 200
    assert client.get(url).status_code == 401
    denied = client.get(url, headers=headers(OTHER))
    assert denied.status_code == 403
    assert denied.json() == {"error": "Permission denied"}


def test_whitelisted_email_can_read_private_item(client, headers):
    item = _create(client, headers, OWNER)
    added = client.post(
        f"{API}/items/{item['id']}/whitelist",
        json={"email": "Friend@Example.com"},
        headers=headers(OWNER),
    )
    assert added.status_code == 201
    assert added.json()["email"] == "friend@example.com"

    assert client.get(f"{API}/items/{item['id']}", headers=headers(FRIEND)).status_code == 200
    stranger = client.get(f"{API}/items/{item['id']}", headers=headers(OTHER))
    assert stranger.status_code == 403
    assert stranger.json() == {"error": "Permission denied"}

    # Whitelisting grants direct reads only, never list membership
    listed = client.get(f"{API}/items", headers=headers(FRIEND)).json()
    assert item["id"] not in [row["id"] for row in listed]


def test_missing_item_is_not_found(client, headers):
    response = client.get(f"{API}/items/9999", headers=headers(OWNER))

    assert response.status_code == 404
    assert response.json() == {"error": "Item not found"}


def test_writes_require_authentication(client):
    response = client.post(f"{API}/items", json={"title": "anon"})

    assert response.status_code == 401
    assert "error" in response.json()


def test_invalid_token_is_rejected_on_writes(client):
    response = client.post(
        f"{API}/items", json={"title": "x"}, headers={"Authorization": "Bearer not-a-token"}
    )

    assert response.status_code == 401


def test_detail_children_follow_list_visibility(client, headers):
    parent = _create(client, headers, OWNER, title="shelf", visibility="public")
    public_child = _create(client, headers, OWNER, title="box", visibility="public", parentId=parent["id"])
    private_child = _create(client, headers, OWNER, title="secret box", parentId=parent["id"])

    as_owner = client.get(f"{API}/items/{parent['id']}", headers=headers(OWNER)).json()
    as_other = client.get(f"{API}/items/{parent['id']}", headers=headers(OTHER)).json()

    assert {child["id"] for child in as_owner["children"]} == {public_child["id"], private_child["id"]}
    assert [child["id"] for child in as_other["children"]] == [public_child["id"]]


# ---- response shapes ----
def test_without_paging_params_a_bare_array_is_returned(client, headers):
    _create(client, headers)

    body = client.get(f"{API}/items", headers=headers(OWNER)).json()

    assert isinstance(body, list)
    assert {"id", "title", "userId", "createdAt", "updatedAt", "imageUrls", "previewUrl"} <= set(body[0])


def test_paginated_response_uses_camel_case_envelope(client, headers):
    for n in range(3):
        _create(client, headers, title=f"item {n}")

    first = client.get(f"{API}/items", params={"limit": 2}, headers=headers(OWNER)).json()

    assert len(first["data"]) == 2
    assert first["pagination"]["hasNextPage"] is True
    assert first["pagination"]["hasPrevPage"] is False
    assert first["pagination"]["prevCursor"] is None

    second = client.get(
        f"{API}/items", params={"limit": 2, "cursor": first["pagination"]["nextCursor"]}, headers=headers(OWNER)
    ).json()

    assert len(second["data"]) == 1
    assert second["pagination"]["hasNextPage"] is False
    assert second["pagination"]["nextCursor"] is None
    assert second["pagination"]["hasPrevPage"] is True

    back = client.get(
        f"{API}/items",
        params={"limit": 2, "cursor": second["pagination"]["prevCursor"], "direction": "prev"},
        headers=headers(OWNER),
    ).json()
    assert [row["id"] for row in back["data"]] == [row["id"] for row in first["data"]]


@pytest.mark.parametrize("limit", [0, -1, 101, "abc"])
def test_out_of_range_limit_is_a_validation_error(client, headers, limit):
    response = client.get(f"{API}/items", params={"limit": limit}, headers=headers(OWNER))

    assert response.status_code == 400
    assert response.json()["error"] == "Validation failed"
    assert response.json()["details"][0]["field"] == "limit"


def test_unknown_direction_falls_back_to_next(client, headers):
    _create(client, headers)

    response = client.get(f"{API}/items", params={"limit": 5, "direction": "sideways"}, headers=headers(OWNER))

    assert response.status_code == 200
    assert response.json()["pagination"]["hasPrevPage"] is False


def test_garbage_cursor_returns_first_page(client, headers):
    item = _create(client, headers)

    response = client.get(f"{API}/items", params={"cursor": "%%%not-a-cursor"}, headers=headers(OWNER))

    assert response.status_code == 200
    assert [row["id"] for row in response.json()["data"]] == [item["id"]]


def test_preview_url_points_at_item(client, headers):
    item = _create(client, headers)

    assert item["previewUrl"] == f"http://testserver/preview/item/{item['id']}"


# ---- filters ----
def test_search_and_visibility_filters(client, headers):
    drill = _create(client, headers, title="Cordless drill", description="18V", visibility="public")
    _create(client, headers, title="Hammer", description="claw")

    by_title = client.get(f"{API}/items", params={"search": "DRILL"}, headers=headers(OWNER)).json()
    by_visibility = client.get(f"{API}/items", params={"visibility": "public"}, headers=headers(OWNER)).json()

    assert [row["id"] for row in by_title] == [drill["id"]]
    assert [row["id"] for row in by_visibility] == [drill["id"]]


@pytest.mark.parametrize("term, expected", [("%", "50% off"), ("_", "snake_case bin"), ("\\", "back\\slash")])
def test_search_wildcards_match_literally(client, headers, term, expected):
    for title in ("plain box", "50% off", "snake_case bin", "back\\slash"):
        _create(client, headers, title=title)

    found = client.get(f"{API}/items", params={"search": term}, headers=headers(OWNER)).json()

    assert [row["title"] for row in found] == [expected]


def test_root_only_and_parent_filters(client, headers):
    root = _create(client, headers, title="root")
    child = _create(client, headers, title="child", parentId=root["id"])

    roots = client.get(f"{API}/items", params={"rootOnly": "true"}, headers=headers(OWNER)).json()
    children = client.get(f"{API}/items", params={"parentId": root["id"]}, headers=headers(OWNER)).json()

    assert [row["id"] for row in roots] == [root["id"]]
    assert [row["id"] for row in children] == [child["id"]]


def test_parent_id_null_lists_root_items(client, headers):
    root = _create(client, headers, title="root")
    _create(client, headers, title="child", parentId=root["id"])

    roots = client.get(f"{API}/items", params={"parentId": "null"}, headers=headers(OWNER))
    invalid = client.get(f"{API}/items", params={"parentId": "shelf"}, headers=headers(OWNER))

    assert roots.status_code == 200
    assert [row["id"] for row in roots.json()] == [root["id"]]
    assert invalid.status_code == 400
    assert invalid.json()["details"][0]["field"] == "parentId"


# ---- validation ----
def test_missing_title_is_rejected(client, headers):
    response = client.post(f"{API}/items", json={"description": "no title"}, headers=headers(OWNER))

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Validation failed"
    assert body["details"][0]["field"] == "title"


def test_null_for_required_field_on_update_is_rejected(client, headers):
    item = _create(client, headers)

    response = client.put(f"{API}/items/{item['id']}", json={"title": None}, headers=headers(OWNER))

    assert response.status_code == 400
    assert response.json()["details"] == [{"field": "title", "message": "Field cannot be null"}]


def test_invalid_visibility_is_rejected(client, headers):
    response = client.post(f"{API}/items", json={"title": "x", "visibility": "friends"}, headers=headers(OWNER))

    assert response.status_code == 400


def test_lookup_references_must_belong_to_caller(client, headers):
    foreign = client.post(f"{API}/categories", json={"name": "theirs"}, headers=headers(OTHER)).json()

    response = client.post(
        f"{API}/items", json={"title": "x", "categoryId": foreign["id"]}, headers=headers(OWNER)
    )

    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "categoryId"


def test_item_with_own_category_embeds_summary(client, headers):
    category = client.post(f"{API}/categories", json={"name": "Tools"}, headers=headers(OWNER)).json()

    item = _create(client, headers, categoryId=category["id"])

    assert item["categoryId"] == category["id"]
    assert item["category"]["name"] == "Tools"


# ---- hierarchy ----
def test_parent_cycles_are_prevented(client, headers):
    top = _create(client, headers, title="top")
    middle = _create(client, headers, title="middle", parentId=top["id"])
    bottom = _create(client, headers, title="bottom", parentId=middle["id"])

    onto_itself = client.put(f"{API}/items/{top['id']}/parent", json={"parentId": top["id"]}, headers=headers(OWNER))
    under_descendant = client.put(
        f"{API}/items/{top['id']}/parent", json={"parentId": bottom["id"]}, headers=headers(OWNER)
    )

    assert onto_itself.status_code == 400
    assert under_descendant.status_code == 400
    assert under_descendant.json()["details"][0]["field"] == "parentId"


def test_parent_can_be_cleared(client, headers):
    top = _create(client, headers, title="top")
    child = _create(client, headers, title="child", parentId=top["id"])

    response = client.put(f"{API}/items/{child['id']}/parent", json={"parentId": None}, headers=headers(OWNER))

    assert response.status_code == 200
    assert response.json()["parentId"] is None


def test_parent_must_be_owned(client, headers):
    foreign = _create(client, headers, OTHER, title="public shelf", visibility="public")

    response = client.post(f"{API}/items", json={"title": "x", "parentId": foreign["id"]}, headers=headers(OWNER))

    assert response.status_code == 400


# ---- updates ----
def test_update_moves_item_to_top_of_list(client, headers):
    first = _create(client, headers, title="first")
    _create(client, headers, title="second")

    client.put(f"{API}/items/{first['id']}", json={"description": "touched"}, headers=headers(OWNER))
    listed = client.get(f"{API}/items", headers=headers(OWNER)).json()

    assert listed[0]["id"] == first["id"]
    assert listed[0]["description"] == "touched"


def test_positions_are_created_and_replaced_with_item(client, headers):
    schema = client.post(
        f"{API}/position-schemas", json={"name": "Shelf", "schema": {"type": "object"}}, headers=headers(OWNER)
    ).json()

    item = _create(client, headers, positions=[{"positionSchemaId": schema["id"], "data": {"row": 1}}])
    assert [position["data"] for position in item["positions"]] == [{"row": 1}]

    updated = client.put(
        f"{API}/items/{item['id']}",
        json={"positions": [{"positionSchemaId": schema["id"], "data": {"row": 2}}]},
        headers=headers(OWNER),
    ).json()
    assert [position["data"] for position in updated["positions"]] == [{"row": 2}]


# ---- images ----
def _upload(client, headers, identity=OWNER, content=PNG, content_type="image/png", name="photo.png"):
    return client.post(
        f"{API}/upload", files={"file": (name, content, content_type)}, headers=headers(identity)
    )


def test_uploaded_file_can_be_attached_as_image(client, headers):
    upload = _upload(client, headers)
    assert upload.status_code == 201
    ref = upload.json()["ref"]
    assert ref == f"file:{upload.json()['id']}"

    item = _create(client, headers, images=[ref])

    assert item["images"] == [ref]
    assert item["imageUrls"] == [upload.json()["url"]]


def test_unsupported_upload_type_is_rejected(client, headers):
    response = _upload(client, headers, content=b"hello", content_type="text/plain", name="notes.txt")

    assert response.status_code == 400


def test_image_refs_must_be_owned_and_well_formed(client, headers):
    foreign = _upload(client, headers, OTHER).json()

    bad_ref = client.post(f"{API}/items", json={"title": "x", "images": ["photo.png"]}, headers=headers(OWNER))
    not_owned = client.post(f"{API}/items", json={"title": "x", "images": [foreign["ref"]]}, headers=headers(OWNER))

    assert bad_ref.status_code == 400
    assert not_owned.status_code == 400
    assert not_owned.json()["details"][0]["field"] == "images"


def test_file_attached_to_one_item_cannot_back_another(client, headers):
    upload = _upload(client, headers).json()
    first = _create(client, headers, title="first", images=[upload["ref"]])

    second = client.post(f"{API}/items", json={"title": "second", "images": [upload["ref"]]}, headers=headers(OWNER))
    kept = client.put(f"{API}/items/{first['id']}", json={"images": [upload["ref"]]}, headers=headers(OWNER))

    assert second.status_code == 400
    assert second.json()["details"][0]["field"] == "images"
    assert kept.status_code == 200
    assert kept.json()["imageUrls"] == [upload["url"]]


def test_file_released_by_one_item_can_move_to_another(client, headers):
    upload = _upload(client, headers).json()
    first = _create(client, headers, title="first", images=[upload["ref"]])
    client.put(f"{API}/items/{first['id']}", json={"images": []}, headers=headers(OWNER))

    second = _create(client, headers, title="second", images=[upload["ref"]])
    client.delete(f"{API}/items/{second['id']}", headers=headers(OWNER))
    refreshed = client.get(f"{API}/items/{first['id']}", headers=headers(OWNER)).json()

    assert refreshed["images"] == []
    assert client.put(f"{API}/items/{first['id']}", json={"images": []}, headers=headers(OWNER)).status_code == 200


def test_deleting_upload_removes_it_from_item(client, headers):
    upload = _upload(client, headers).json()
    item = _create(client, headers, images=[upload["ref"]])

    response = client.delete(f"{API}/upload/{upload['id']}", headers=headers(OWNER))
    refreshed = client.get(f"{API}/items/{item['id']}", headers=headers(OWNER)).json()

    assert response.status_code == 200
    assert refreshed["images"] == []
    assert refreshed["imageUrls"] == []


# ---- qr codes ----
def test_scan_resolves_preview_url(client, headers):
    item = _create(client, headers, visibility="public")

    response = client.post(
        f"{API}/qrcode/scan", json={"qrcontent": f"http://testserver/preview/item/{item['id']}"}
    )

    assert response.status_code == 200
    assert response.json() == {"type": "item", "url": f"http://testserver/api/v1/items/{item['id']}"}


def test_scan_resolves_stored_code_and_checks_access(client, headers):
    item = _create(client, headers, originalQrCode="ACME-0042")

    own = client.post(f"{API}/qrcode/scan", json={"qrcontent": "ACME-0042"}, headers=headers(OWNER))
    foreign = client.post(f"{API}/qrcode/scan", json={"qrcontent": "ACME-0042"}, headers=headers(OTHER))

    assert own.json()["url"].endswith(f"/items/{item['id']}")
    assert foreign.status_code == 403


def test_scan_of_unknown_code_is_invalid(client):
    response = client.post(f"{API}/qrcode/scan", json={"qrcontent": "nothing-here"})

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid QR code"


# ---- dashboard ----
def test_dashboard_counts_own_rows_only(client, headers):
    _create(client, headers, title="a", visibility="public")
    _create(client, headers, title="b")
    _create(client, headers, OTHER, title="c", visibility="public")
    client.post(f"{API}/categories", json={"name": "Tools"}, headers=headers(OWNER))

    stats = client.get(f"{API}/dashboard/stats", headers=headers(OWNER)).json()

    assert stats["totalItems"] == 2
    assert stats["publicItems"] == 1
    assert stats["privateItems"] == 1
    assert stats["categories"] == 1
    assert [item["title"] for item in stats["recentItems"]] == ["b", "a"]
