import json
import os

from zeo_api.core.config import settings


def read_json(data_dir, filename):
    with open(os.path.join(data_dir, filename), "r", encoding="utf-8") as fh:
        return json.load(fh)


# Destinations

def test_public_destinations_hide_unlisted(client):
    response = client.get("/api/destinations")

    assert response.status_code == 200
    slugs = [d["slug"] for d in response.json()]
    assert "bhutan" not in slugs
    assert set(slugs) == {"nepal", "tibet"}
    assert client.get("/api/destinations/bhutan").status_code == 404


def test_destination_tour_count_and_tours(client):
    nepal = client.get("/api/destinations/nepal").json()
    assert nepal["tourCount"] == len(nepal["relatedTours"]) == 3

    tours = client.get("/api/destinations/tibet/tours").json()
    assert [t["id"] for t in tours] == [2]


def test_destination_country_filter(client):
    response = client.get("/api/destinations", params={"country": "china"})

    assert [d["slug"] for d in response.json()] == ["tibet"]


def test_create_destination(client, admin_headers):
    response = client.post(
        "/api/admin/destinations",
        json={"slug": "ladakh", "title": "Ladakh", "country": "India"},
        headers=admin_headers
    )

    assert response.status_code == 201
    data = response.json()
    assert data["name"] == "Ladakh"
    assert data["type"] == "international"
    assert data["listed"] is True
    assert data["tourCount"] == 0


def test_create_destination_derives_slug_from_title(client, admin_headers):
    response = client.post(
        "/api/admin/destinations",
        json={"slug": "", "title": "Upper Mustang", "country": "Nepal"},
        headers=admin_headers
    )

    assert response.status_code == 201
    assert response.json()["slug"] == "upper-mustang"
    assert response.json()["href"] == "/destinations/upper-mustang"


def test_create_destination_requires_fields(client, admin_headers):
    response = client.post(
        "/api/admin/destinations",
        json={"slug": "ladakh", "title": "Ladakh"},
        headers=admin_headers
    )

    assert response.status_code == 400


def test_create_destination_duplicate_slug(client, admin_headers):
    response = client.post(
        "/api/admin/destinations",
        json={"slug": "nepal", "title": "Nepal", "country": "Nepal"},
        headers=admin_headers
    )

    assert response.status_code == 400
    assert response.json()["error"] == "A destination with this slug already exists"


def test_update_and_delete_destination_by_slug_or_id(client, admin_headers, data_dir):
    response = client.put(
        "/api/admin/destinations/bhutan",
        json={"title": "Kingdom of Bhutan", "listed": True},
        headers=admin_headers
    )
    assert response.status_code == 200
    assert response.json()["name"] == "Kingdom of Bhutan"
    assert client.get("/api/destinations/bhutan").status_code == 200

    response = client.delete("/api/admin/destinations/3", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["message"] == "Destination deleted successfully"
    assert all(d["id"] != 3 for d in read_json(data_dir, "destinations.json"))


# Activities

def test_activity_by_slug_or_id(client):
    assert client.get("/api/activities/trekking").json()["id"] == 1
    assert client.get("/api/activities/2").json()["slug"] == "pilgrimage"
    assert [a["name"] for a in client.get("/api/activities", params={"type": "spiritual"}).json()] == ["Pilgrimage"]


def test_activity_tours(client):
    tours = client.get("/api/activities/trekking/tours").json()

    assert sorted(t["id"] for t in tours) == [1, 2]


def test_create_activity_generates_slug(client, admin_headers):
    response = client.post("/api/admin/activities", json={"name": "White Water Rafting"}, headers=admin_headers)

    assert response.status_code == 201
    assert response.json()["slug"] == "white-water-rafting"

    duplicate = client.post("/api/admin/activities", json={"name": "White Water Rafting"}, headers=admin_headers)
    assert duplicate.status_code == 400


# Testimonials

def test_public_testimonials_are_approved_only(client):
    response = client.get("/api/testimonials")

    assert [t["name"] for t in response.json()] == ["Priya Sharma"]
    assert client.get("/api/testimonials/2").status_code == 404


def test_submit_testimonial_is_pending(client, admin_headers):
    payload = {
        "name": "Sam", "email": "SAM@example.com", "tour": "Kathmandu Valley Tour",
        "rating": 5, "title": "Lovely", "message": "Great guides."
    }
    response = client.post("/api/testimonials", json=payload)

    assert response.status_code == 201
    data = response.json()
    assert data["success"] is True
    assert data["testimonial"]["is_approved"] is False
    assert data["testimonial"]["email"] == "sam@example.com"

    pending = client.get("/api/admin/testimonials", params={"status": "pending"}, headers=admin_headers).json()
    assert {t["name"] for t in pending} == {"Tom Becker", "Sam"}


def test_submit_testimonial_validation(client):
    response = client.post("/api/testimonials", json={"name": "Sam"})
    assert response.status_code == 400
    assert response.json()["error"] == "All fields are required"

    payload = {
        "name": "Sam", "email": "sam@example.com", "tour": "Trek",
        "rating": 6, "title": "Hi", "message": "Hello"
    }
    response = client.post("/api/testimonials", json=payload)
    assert response.status_code == 400
    assert response.json()["error"] == "Rating must be between 1 and 5"


def test_approve_and_feature_testimonial(client, admin_headers):
    response = client.patch("/api/admin/testimonials/2/approve", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["testimonial"]["is_approved"] is True

    response = client.patch("/api/admin/testimonials/2/featured", headers=admin_headers)
    assert response.json()["testimonial"]["is_featured"] is True

    featured = client.get("/api/testimonials", params={"featured": True}).json()
    assert {t["id"] for t in featured} == {1, 2}


# Enquiries

def test_submit_enquiry(client, admin_headers):
    payload = {
        "name": "Lee", "email": "lee@example.com",
        "destination": "everest", "message": "Dates in October?"
    }
    response = client.post("/api/contact/enquiry", json=payload)

    assert response.status_code == 201
    assert response.json()["enquiry"]["id"] == 2

    stored = client.get("/api/admin/enquiries/2", headers=admin_headers).json()
    assert stored["tour_title"] == "Everest Base Camp Trek"
    assert stored["travelers"] == "1"
    assert stored["responded_at"] is None


def test_enquiry_unknown_destination_gets_generic_title(client, admin_headers):
    payload = {"name": "Lee", "email": "lee@example.com", "destination": "mustang", "message": "Hi"}
    client.post("/api/contact/enquiry", json=payload)

    stored = client.get("/api/admin/enquiries/2", headers=admin_headers).json()
    assert stored["tour_title"] == "Mustang Tour"


def test_enquiry_validation(client):
    response = client.post("/api/contact/enquiry", json={"name": "Lee"})
    assert response.status_code == 400
    assert response.json()["error"] == "Name, email, destination, and message are required"

    payload = {"name": "Lee", "email": "not-an-email", "destination": "everest", "message": "Hi"}
    response = client.post("/api/contact/enquiry", json=payload)
    assert response.status_code == 400
    assert response.json()["error"] == "Please provide a valid email address"


def test_mark_enquiry_responded(client, admin_headers):
    response = client.patch("/api/admin/enquiries/1/respond", headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["message"] == "Enquiry marked as responded"
    assert response.json()["enquiry"]["responded_at"]


# Blog

def test_create_post_fills_author_and_date(client, admin_headers):
    response = client.post(
        "/api/admin/posts",
        json={"title": "Packing for Tibet", "content": "Layers."},
        headers=admin_headers
    )

    assert response.status_code == 201
    post = response.json()
    assert post["slug"] == "packing-for-tibet"
    assert post["author"] == settings.admin_name
    assert post["date"]
    assert client.get("/api/posts/packing-for-tibet").json()["id"] == post["id"]


# Sliders and team

def test_slider_needs_media(client, admin_headers):
    response = client.post("/api/admin/sliders", json={"title": "Empty"}, headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["error"] == "A slider needs an image or a video"


def test_video_slider_gets_poster_and_next_position(client, admin_headers):
    response = client.post(
        "/api/admin/sliders",
        json={"title": "Drone", "video": "/uploads/sliders/drone.mp4"},
        headers=admin_headers
    )

    assert response.status_code == 201
    slider = response.json()
    assert slider["image"]
    assert slider["order_index"] == 2


def test_reorder_team(client, admin_headers, data_dir):
    client.post("/api/admin/team", json={"name": "Sita Rai", "role": "Guide"}, headers=admin_headers)

    response = client.put(
        "/api/admin/team/order",
        json=[{"id": 1, "order_index": 2}, {"id": 2, "order_index": 1}],
        headers=admin_headers
    )

    assert response.status_code == 200
    assert [m["id"] for m in response.json()] == [2, 1]
    assert [m["id"] for m in client.get("/api/team").json()] == [2, 1]
    stored = {m["id"]: m["order_index"] for m in read_json(data_dir, "team.json")}
    assert stored == {1: 2, 2: 1}


def test_inactive_team_member_hidden(client, admin_headers):
    client.put("/api/admin/team/1", json={"is_active": False}, headers=admin_headers)

    assert client.get("/api/team").json() == []


# Gallery

def test_gallery_add_reorder_delete(client, admin_headers, data_dir):
    response = client.post(
        "/api/admin/gallery",
        json={"title": "Lake Mansarovar", "image": "/uploads/kailash-gallery/lake.jpg"},
        headers=admin_headers
    )
    assert response.status_code == 201
    photo = response.json()
    assert photo["alt"] == "Lake Mansarovar"
    assert photo["order"] == 2

    stored = read_json(data_dir, "gallery.json")
    assert stored["metadata"]["totalPhotos"] == 2

    response = client.patch(
        "/api/admin/gallery/reorder",
        json={"photoIds": [photo["id"], 1]},
        headers=admin_headers
    )
    assert response.status_code == 200
    assert [p["id"] for p in response.json()["gallery"]] == [photo["id"], 1]

    public = client.get("/api/gallery").json()
    assert [p["id"] for p in public["gallery"]] == [photo["id"], 1]

    client.delete(f"/api/admin/gallery/{photo['id']}", headers=admin_headers)
    assert read_json(data_dir, "gallery.json")["metadata"]["totalPhotos"] == 1


def test_gallery_metadata_update(client, admin_headers):
    response = client.put(
        "/api/admin/gallery/metadata",
        json={"pageTitle": "Mount Kailash", "pageSubtitle": "Photos from the kora"},
        headers=admin_headers
    )

    assert response.status_code == 200
    metadata = client.get("/api/gallery/metadata").json()
    assert metadata["pageTitle"] == "Mount Kailash"
    assert metadata["pageSubtitle"] == "Photos from the kora"


# Contact

def test_contact_update(client, admin_headers, data_dir):
    contact = client.get("/api/contact").json()
    contact["company"]["tagline"] = "New tagline"

    response = client.put("/api/admin/contact", json=contact, headers=admin_headers)

    assert response.status_code == 200
    assert read_json(data_dir, "contact.json")["company"]["tagline"] == "New tagline"


def test_contact_requires_name_and_email(client, admin_headers):
    response = client.put("/api/admin/contact", json={"company": {"name": "Zeo"}}, headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["error"] == "Company name and primary email are required"


# Search, featured and health

def test_search(client):
    results = client.get("/api/search", params={"q": "kailash"}).json()

    assert [t["id"] for t in results["tours"]] == [2]
    assert [d["slug"] for d in results["destinations"]] == ["tibet"]
    assert results["activities"] == []


def test_search_by_type_and_missing_query(client):
    results = client.get("/api/search", params={"q": "trek", "type": "activities"}).json()
    assert list(results) == ["activities"]

    response = client.get("/api/search")
    assert response.status_code == 400
    assert response.json()["error"] == "Search query is required"


def test_featured(client):
    data = client.get("/api/featured").json()

    assert [t["id"] for t in data["tours"]] == [1, 2]
    assert {d["slug"] for d in data["destinations"]} == {"nepal", "tibet"}
    assert len(data["activities"]) == 2


def test_health_reports_counts(client):
    data = client.get("/api/health").json()

    assert data["status"] == "ok"
    assert data["dataLoaded"]["tours"] == 3
    assert data["dataLoaded"]["destinations"] == 3


def test_unknown_api_route_envelope(client):
    response = client.get("/api/does-not-exist")

    assert response.status_code == 404
    body = response.json()
    assert body["error"] == "API endpoint not found"
    assert body["status_code"] == 404
    assert body["request_id"]
    assert response.headers["X-Request-ID"] == body["request_id"]


# Uploads

def test_upload_image(client, admin_headers):
    response = client.post(
        "/api/admin/upload",
        files={"file": ("Lake View.JPG", b"\xff\xd8fake-jpeg", "image/jpeg")},
        data={"folder": "Kailash Gallery"},
        headers=admin_headers
    )

    assert response.status_code == 200
    data = response.json()
    assert data["url"].startswith("/uploads/kailash-gallery/lake-view_")
    assert data["url"].endswith(".jpg")
    assert os.path.exists(os.path.join(settings.uploads_dir, "kailash-gallery", data["filename"]))

    served = client.get(data["url"])
    assert served.status_code == 200
    assert served.content == b"\xff\xd8fake-jpeg"


def test_upload_rejects_non_media(client, admin_headers):
    response = client.post(
        "/api/admin/upload",
        files={"file": ("notes.txt", b"hello", "text/plain")},
        headers=admin_headers
    )

    assert response.status_code == 400


def test_upload_rejects_empty_file(client, admin_headers):
    response = client.post(
        "/api/admin/upload",
        files={"file": ("empty.png", b"", "image/png")},
        headers=admin_headers
    )

    assert response.status_code == 400
    assert response.json()["error"] == "No file uploaded"
