from conftest import OTHER, OWNER
from crud import stock_history_crud
from schemas.stock_history import StockHistoryCreate

API = "/api/v1"


def test_quantity_is_sum_of_entries(db, make_item):
    item = make_item(OWNER)
    assert stock_history_crud.get_quantity(db, item.id) == 0

    for delta in (10, -3, 5):
        stock_history_crud.create_entry(db, OWNER, item.id, StockHistoryCreate(quantity=delta))

    assert stock_history_crud.get_quantity(db, item.id) == 12


def test_entries_listed_newest_first(db, make_item):
    item = make_item(OWNER)
    entries = [
        stock_history_crud.create_entry(db, OWNER, item.id, StockHistoryCreate(quantity=n, note=f"n{n}"))
        for n in (1, 2, 3)
    ]

    listed = stock_history_crud.list_for_item(db, item.id)

    assert [entry.id for entry in listed] == [entry.id for entry in reversed(entries)]


def test_deleting_an_entry_changes_quantity(client, headers, make_item):
    item = make_item(OWNER)
    url = f"{API}/items/{item.id}/stock-history"

    incoming = client.post(url, json={"quantity": 8, "note": "delivery"}, headers=headers(OWNER)).json()
    client.post(url, json={"quantity": -2}, headers=headers(OWNER))
    assert client.get(url, headers=headers(OWNER)).json()["quantity"] == 6

    response = client.delete(f"{API}/stock-history/{incoming['id']}", headers=headers(OWNER))
    history = client.get(url, headers=headers(OWNER)).json()

    assert response.status_code == 200
    assert history["quantity"] == -2
    assert len(history["entries"]) == 1


def test_item_detail_reports_quantity(client, headers, make_item):
    item = make_item(OWNER)
    client.post(f"{API}/items/{item.id}/stock-history", json={"quantity": 4}, headers=headers(OWNER))

    assert client.get(f"{API}/items/{item.id}", headers=headers(OWNER)).json()["quantity"] == 4


def test_stock_history_is_owner_only(client, headers, make_item):
    item = make_item(OWNER, visibility="public")
    url = f"{API}/items/{item.id}/stock-history"
    entry = client.post(url, json={"quantity": 1}, headers=headers(OWNER)).json()

    assert client.get(url, headers=headers(OTHER)).status_code == 403
    assert client.post(url, json={"quantity": 1}, headers=headers(OTHER)).status_code == 403
    assert client.delete(f"{API}/stock-history/{entry['id']}", headers=headers(OTHER)).status_code == 403
    assert client.delete(f"{API}/stock-history/9999", headers=headers(OWNER)).status_code == 404
