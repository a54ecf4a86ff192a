import json
import logging
from typing import Any, Dict, List, Optional

import requests

from zeo_admin.config import API_BASE_URL, REQUEST_TIMEOUT

logger = logging.getLogger(__name__)

# Human readable names used in error messages
RESOURCE_LABELS = {
    "tours": ("tours", "tour"),
    "destinations": ("destinations", "destination"),
    "activities": ("activities", "activity"),
    "posts": ("blog posts", "blog post"),
    "sliders": ("sliders", "slider"),
    "team": ("team members", "team member"),
    "testimonials": ("testimonials", "testimonial"),
    "enquiries": ("enquiries", "enquiry"),
    "gallery": ("gallery photos", "gallery photo"),
    "trip-plans": ("trip plans", "trip plan"),
}


def labels(resource: str):
    return RESOURCE_LABELS.get(resource, (resource, resource.rstrip("s")))


class APIClient:
    """Client for communicating with the backend API.

    Every call returns ``{"success": True, "data": ...}`` or
    ``{"success": False, "error": ..., "status_code": ...}``; nothing raises.
    ``session`` may be any requests-compatible session, which is how tests
    drive the client against the app in-process.
    """

    def __init__(self, base_url: Optional[str] = None, session=None):
        self.base_url = (base_url or API_BASE_URL).rstrip("/")
        self.session = session if session is not None else requests.Session()

    def set_auth_token(self, token: str):
        """Set the authorization token for API requests."""
        self.session.headers.update({
            "Authorization": f"Bearer {token}"
        })

    def clear_auth_token(self):
        """Clear the authorization token."""
        if "Authorization" in self.session.headers:
            del self.session.headers["Authorization"]

    def _request(self, method: str, path: str, action: str, **kwargs) -> Dict[str, Any]:
        """Send one request; transport failures become ``Failed to <action>``."""
        if isinstance(self.session, requests.Session):
            kwargs.setdefault("timeout", REQUEST_TIMEOUT)
        try:
            response = self.session.request(method, f"{self.base_url}{path}", **kwargs)
        except requests.RequestException as e:
            logger.error(f"{method} {path} failed: {e}")
            return {"success": False, "error": f"Failed to {action}", "status_code": None}
        return self._handle_response(response)

    def _handle_response(self, response) -> Dict[str, Any]:
        """Handle API response and return JSON data or error."""
        try:
            data = response.json()
        except json.JSONDecodeError:
            data = {"error": "Invalid JSON response"}

        if response.status_code >= 400:
            error_msg = data.get("error") if isinstance(data, dict) else None
            return {
                "success": False,
                "error": error_msg or f"HTTP {response.status_code}",
                "status_code": response.status_code
            }

        return {"success": True, "data": data}

    # Auth

    def login(self, email: str, password: str) -> Dict[str, Any]:
        """Authenticate the admin and get a token."""
        return self._request(
            "POST", "/api/auth/login", "log in",
            json={"email": email, "password": password}
        )

    def get_user_info(self) -> Dict[str, Any]:
        """Get current user information."""
        return self._request("GET", "/api/auth/me", "fetch user info")

    def get_health(self) -> Dict[str, Any]:
        """Get API health status."""
        return self._request("GET", "/api/health", "fetch health status")

    # Generic admin CRUD

    def list_items(self, resource: str) -> Dict[str, Any]:
        plural, _ = labels(resource)
        return self._request("GET", f"/api/admin/{resource}", f"fetch {plural}")

    def get_item(self, resource: str, item_id) -> Dict[str, Any]:
        _, singular = labels(resource)
        return self._request("GET", f"/api/admin/{resource}/{item_id}", f"fetch {singular}")

    def create_item(self, resource: str, data: Dict[str, Any]) -> Dict[str, Any]:
        _, singular = labels(resource)
        return self._request("POST", f"/api/admin/{resource}", f"create {singular}", json=data)

    def update_item(self, resource: str, item_id, data: Dict[str, Any]) -> Dict[str, Any]:
        _, singular = labels(resource)
        return self._request("PUT", f"/api/admin/{resource}/{item_id}", f"update {singular}", json=data)

    def delete_item(self, resource: str, item_id) -> Dict[str, Any]:
        _, singular = labels(resource)
        return self._request("DELETE", f"/api/admin/{resource}/{item_id}", f"delete {singular}")

    # Resource specific actions

    def set_tour_listing(self, tour_id: int, listed: bool) -> Dict[str, Any]:
        return self._request(
            "PATCH", f"/api/admin/tours/{tour_id}/listing", "update tour listing",
            json={"listed": listed}
        )

    def approve_testimonial(self, testimonial_id: int) -> Dict[str, Any]:
        return self._request(
            "PATCH", f"/api/admin/testimonials/{testimonial_id}/approve", "approve testimonial"
        )

    def toggle_testimonial_featured(self, testimonial_id: int) -> Dict[str, Any]:
        return self._request(
            "PATCH", f"/api/admin/testimonials/{testimonial_id}/featured", "update testimonial"
        )

    def mark_enquiry_responded(self, enquiry_id: int) -> Dict[str, Any]:
        return self._request(
            "PATCH", f"/api/admin/enquiries/{enquiry_id}/respond", "update enquiry"
        )

    def set_trip_plan_status(self, trip_plan_id: int, status: str) -> Dict[str, Any]:
        return self._request(
            "PATCH", f"/api/admin/trip-plans/{trip_plan_id}/status", "update trip plan",
            json={"status": status}
        )

    def update_order(self, resource: str, positions: List[Dict[str, int]]) -> Dict[str, Any]:
        """Save ``[{id, order_index}]`` for team members or sliders."""
        plural, _ = labels(resource)
        return self._request("PUT", f"/api/admin/{resource}/order", f"reorder {plural}", json=positions)

    def reorder_gallery(self, photo_ids: List[int]) -> Dict[str, Any]:
        return self._request(
            "PATCH", "/api/admin/gallery/reorder", "reorder gallery photos",
            json={"photoIds": photo_ids}
        )

    def update_gallery_metadata(self, page_title: str, page_subtitle: str) -> Dict[str, Any]:
        return self._request(
            "PUT", "/api/admin/gallery/metadata", "update gallery details",
            json={"pageTitle": page_title, "pageSubtitle": page_subtitle}
        )

    def get_contact(self) -> Dict[str, Any]:
        return self._request("GET", "/api/contact", "fetch contact information")

    def update_contact(self, contact: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PUT", "/api/admin/contact", "update contact information", json=contact)

    def upload_file(self, file_data: bytes, filename: str, folder: str = "general",
                    content_type: Optional[str] = None) -> Dict[str, Any]:
        """Upload an image or video; the response carries its ``url``."""
        files = {"file": (filename, file_data, content_type or "application/octet-stream")}
        return self._request(
            "POST", "/api/admin/upload", "upload file",
            files=files, data={"folder": folder}
        )


# Global API client instance
api_client = APIClient()
