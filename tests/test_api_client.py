import pytest
import requests

from zeo_admin.api_client import APIClient
from zeo_admin.resources import DebouncedSync, ResourceList, save_tour_listing, toggle_flag
from zeo_api.core.config import settings


@pytest.fixture
def api(client):
    """Admin API client talking to the app in-process"""
    api_client = APIClient(base_url="http://testserver", session=client)
    response = api_client.login(settings.admin_email, settings.admin_password)
    assert response["success"]
    api_client.set_auth_token(response["data"]["token"])
    return api_client


class BrokenSession:
    headers = {}

    def request(self, method, url, **kwargs):
        raise requests.ConnectionError("connection refused")


def test_transport_failure_becomes_failed_action():
    api_client = APIClient(base_url="http://nowhere", session=BrokenSession())

    response = api_client.delete_item("tours", 1)

    assert response == {"success": False, "error": "Failed to delete tour", "status_code": None}
    assert api_client.list_items("posts")["error"] == "Failed to fetch blog posts"


def test_server_error_message_is_passed_through(api):
    response = api.update_item("tours", 99, {"title": "Missing"})

    assert response["success"] is False
    assert response["error"] == "Tour not found"
    assert response["status_code"] == 404


def test_clear_auth_token(api):
    api.clear_auth_token()

    response = api.list_items("tours")
    assert response["status_code"] == 401
    assert response["error"] == "Access token required"


def test_crud_round_trip(api):
    created = api.create_item("tours", {"title": "Annapurna Circuit", "duration": "18 days"})
    assert created["success"]
    tour_id = created["data"]["id"]

    assert api.get_item("tours", tour_id)["data"]["slug"] == "annapurna-circuit"
    assert api.delete_item("tours", tour_id)["success"]
    assert api.get_item("tours", tour_id)["status_code"] == 404


def test_listing_sync_against_api(api, client):
    """A debounced listing change ends up on the public site"""
    resources = ResourceList(api, "tours")
    resources.fetch()
    sync = DebouncedSync(resources, save_tour_listing(api), delay=60)

    sync.change(1, toggle_flag(1, "listed"))
    response = sync.flush()

    assert response["success"]
    assert client.get("/api/tours/1").status_code == 404


def test_testimonial_and_enquiry_actions(api):
    assert api.approve_testimonial(2)["data"]["testimonial"]["is_approved"] is True
    assert api.toggle_testimonial_featured(2)["data"]["testimonial"]["is_featured"] is True
    assert api.mark_enquiry_responded(1)["data"]["enquiry"]["responded_at"]


def test_gallery_helpers(api):
    assert api.update_gallery_metadata("Kailash", "Sacred Journey")["data"]["pageTitle"] == "Kailash"

    gallery = api.list_items("gallery")["data"]
    assert gallery["metadata"]["totalPhotos"] == 1
    assert api.reorder_gallery([1])["success"]


def test_update_order(api):
    response = api.update_order("sliders", [{"id": 1, "order_index": 3}])

    assert response["data"][0]["order_index"] == 3


def test_contact(api):
    contact = api.get_contact()["data"]
    contact["company"]["name"] = "Zeo Tourism Pvt. Ltd."

    assert api.update_contact(contact)["success"]
    assert api.get_contact()["data"]["company"]["name"] == "Zeo Tourism Pvt. Ltd."


def test_upload_file(api):
    response = api.upload_file(b"\x89PNGfake", "poster.png", "sliders", "image/png")

    assert response["success"]
    assert response["data"]["url"].startswith("/uploads/sliders/poster_")


def test_get_user_info(api):
    response = api.get_user_info()

    assert response["data"]["email"] == settings.admin_email


def test_trip_plan_status(api):
    assert api.list_items("trip-plans")["data"][0]["status"] == "pending"

    response = api.set_trip_plan_status(1, "contacted")

    assert response["data"]["tripPlan"]["status"] == "contacted"
    assert api.set_trip_plan_status(99, "contacted")["error"] == "Trip plan not found"
