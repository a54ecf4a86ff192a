import json
import os


def read_json(data_dir, filename):
    with open(os.path.join(data_dir, filename), "r", encoding="utf-8") as fh:
        return json.load(fh)


def test_public_tours_are_listed_only(client, admin_headers):
    client.patch("/api/admin/tours/3/listing", json={"listed": False}, headers=admin_headers)

    response = client.get("/api/tours")

    assert response.status_code == 200
    ids = [tour["id"] for tour in response.json()]
    assert ids == [1, 2]


def test_unlisted_tour_is_hidden_but_visible_to_admin(client, admin_headers):
    client.patch("/api/admin/tours/2/listing", json={"listed": False}, headers=admin_headers)

    assert client.get("/api/tours/2").status_code == 404
    assert client.get("/api/tours/slug/kailash-mansarovar-yatra").status_code == 404

    admin = client.get("/api/admin/tours/2", headers=admin_headers)
    assert admin.status_code == 200
    assert admin.json()["listed"] is False


def test_tour_filters(client):
    assert [t["id"] for t in client.get("/api/tours", params={"category": "pilgrimage"}).json()] == [2]
    assert [t["id"] for t in client.get("/api/tours", params={"search": "STUPAS"}).json()] == [3]
    assert [t["id"] for t in client.get("/api/tours", params={"destination": "tibet"}).json()] == [2]
    assert [t["id"] for t in client.get("/api/tours", params={"activity": "pilgrimage"}).json()] == [2]
    assert len(client.get("/api/tours", params={"limit": 1}).json()) == 1


def test_unknown_destination_filter_returns_nothing(client):
    assert client.get("/api/tours", params={"destination": "atlantis"}).json() == []


def test_non_numeric_tour_id(client):
    response = client.get("/api/tours/abc")

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid tour ID"


def test_create_read_delete_tour(client, admin_headers, data_dir):
    """A created tour is persisted, linked to its destinations and unlinked on delete"""
    payload = {
        "title": "Upper Mustang Trek",
        "category": "Trekking",
        "duration": "16 days",
        "price": 2100,
        "primary_destination_id": 1,
        "secondary_destination_ids": [2]
    }
    response = client.post("/api/admin/tours", json=payload, headers=admin_headers)

    assert response.status_code == 201
    tour = response.json()
    assert tour["id"] == 4
    assert tour["slug"] == "upper-mustang-trek"
    assert tour["listed"] is True

    stored = read_json(data_dir, "tours.json")
    assert any(t["id"] == 4 for t in stored["tours"])

    destinations = {d["id"]: d for d in read_json(data_dir, "destinations.json")}
    assert 4 in destinations[1]["relatedTours"]
    assert 4 in destinations[2]["relatedTours"]

    assert client.get("/api/tours/4").json()["title"] == "Upper Mustang Trek"

    response = client.delete("/api/admin/tours/4", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["message"] == "Tour deleted successfully"

    assert client.get("/api/tours/4").status_code == 404
    destinations = {d["id"]: d for d in read_json(data_dir, "destinations.json")}
    assert 4 not in destinations[1]["relatedTours"]
    assert 4 not in destinations[2]["relatedTours"]


def test_create_tour_duplicate_slug(client, admin_headers):
    response = client.post(
        "/api/admin/tours",
        json={"title": "Everest Base Camp Trek"},
        headers=admin_headers
    )

    assert response.status_code == 400
    assert response.json()["error"] == "A tour with this slug already exists"


def test_create_tour_requires_title(client, admin_headers):
    response = client.post("/api/admin/tours", json={"price": 100}, headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["error"].startswith("title")


def test_update_tour_moves_destination_links(client, admin_headers, data_dir):
    response = client.put(
        "/api/admin/tours/3",
        json={"primary_destination_id": 2, "secondary_destination_ids": []},
        headers=admin_headers
    )

    assert response.status_code == 200
    assert response.json()["title"] == "Kathmandu Valley Tour"

    destinations = {d["id"]: d for d in read_json(data_dir, "destinations.json")}
    assert 3 not in destinations[1]["relatedTours"]
    assert 3 in destinations[2]["relatedTours"]


def test_update_missing_tour(client, admin_headers):
    response = client.put("/api/admin/tours/99", json={"title": "Nope"}, headers=admin_headers)

    assert response.status_code == 404
    assert response.json()["error"] == "Tour not found"


def test_listing_toggle_persists(client, admin_headers, data_dir):
    response = client.patch("/api/admin/tours/1/listing", json={"listed": False}, headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["listed"] is False
    stored = {t["id"]: t for t in read_json(data_dir, "tours.json")["tours"]}
    assert stored[1]["listed"] is False
