# File: lifeplanner/services/api_client.py
"""
HTTP client for the planner persistence API.
Every call returns an ApiResponse; network and HTTP errors never propagate.
"""

from typing import Any, Dict, List, Optional

import requests

from lifeplanner.core.config_manager import Config
from lifeplanner.models import ApiResponse
from lifeplanner.utils.logger import setup_logger

logger = setup_logger(__name__)


class PlannerApiClient:
    """Thin wrapper around the REST endpoints used by the calendar."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        user_id: Optional[str] = None,
        token: Optional[str] = None,
        timeout: Optional[int] = None,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize API client.

        Args:
            base_url: API root (default: Config.API_BASE_URL)
            user_id: Owner of the events and tasks (default: Config.USER_ID)
            token: Optional bearer token (default: Config.API_TOKEN)
            timeout: Request timeout in seconds (default: Config.REQUEST_TIMEOUT)
            session: Pre-built requests session, mainly for tests
        """
        self.base_url = (base_url or Config.API_BASE_URL).rstrip("/")
        self.user_id = str(user_id or Config.USER_ID)
        self.timeout = timeout or Config.REQUEST_TIMEOUT
        self.session = session or requests.Session()

        self.session.headers.update({"Content-Type": "application/json"})
        token = token if token is not None else Config.API_TOKEN
        if token:
            self.session.headers["Authorization"] = f"Bearer {token}"

    def _request(self, method: str, path: str, payload: Optional[Dict[str, Any]] = None) -> ApiResponse:
        url = f"{self.base_url}{path}"
        logger.debug(f"{method} {url}")

        try:
            response = self.session.request(method, url, json=payload, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.Timeout:
            logger.error(f"{method} {path} timed out after {self.timeout}s")
            return ApiResponse.fail(f"Request timed out: {method} {path}")
        except requests.exceptions.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else None
            logger.error(f"{method} {path} failed with HTTP {status_code}: {e}")
            return ApiResponse.fail(f"Server rejected {method} {path} ({status_code})", status_code)
        except requests.exceptions.RequestException as e:
            logger.error(f"{method} {path} failed: {e}", exc_info=True)
            return ApiResponse.fail(f"Network error: {e}")

        if response.status_code == 204 or not response.content:
            return ApiResponse.ok(status_code=response.status_code)

        try:
            data = response.json()
        except ValueError:
            logger.error(f"{method} {path} returned a non-JSON body")
            return ApiResponse.fail("Invalid JSON in response", response.status_code)

        return ApiResponse.ok(data, response.status_code)

    def _get_list(self, path: str) -> ApiResponse:
        result = self._request("GET", path)
        if result.is_success() and not isinstance(result.data, list):
            logger.error(f"GET {path} returned {type(result.data).__name__}, expected a list")
            return ApiResponse.fail(f"Unexpected payload from {path}", result.status_code)
        return result

    # ==================== Reads ====================

    def get_events(self) -> ApiResponse:
        return self._get_list(f"/api/events/{self.user_id}")

    def get_tasks(self) -> ApiResponse:
        return self._get_list(f"/api/tasks/{self.user_id}")

    def get_projects(self) -> ApiResponse:
        return self._get_list(f"/api/projects/{self.user_id}")

    # ==================== Writes ====================

    def create_event(self, payload: Dict[str, Any]) -> ApiResponse:
        """Create an event owned by the configured user."""
        body = dict(payload)
        body.setdefault("userId", self.user_id)
        result = self._request("POST", "/api/events", body)
        if result.is_success():
            logger.info(f"Created event '{body.get('title', '')}'")
        return result

    def update_event(self, event_id: str, payload: Dict[str, Any]) -> ApiResponse:
        """Replace the stored fields of ``event_id`` with ``payload``."""
        body = {k: v for k, v in payload.items() if k != "id"}
        result = self._request("PATCH", f"/api/events/{event_id}", body)
        if result.is_success():
            logger.info(f"Updated event {event_id}")
        return result

    def delete_event(self, event_id: str) -> ApiResponse:
        result = self._request("DELETE", f"/api/events/{event_id}")
        if result.is_success():
            logger.info(f"Deleted event {event_id}")
        return result

    def set_event_completed(self, event_id: str, completed: bool) -> ApiResponse:
        return self._request("PATCH", f"/api/events/{event_id}/complete", {"completed": completed})

    def set_task_completed(self, task_id: str, completed: bool) -> ApiResponse:
        return self._request("PATCH", f"/api/tasks/{task_id}/complete", {"completed": completed})


def list_payload(result: ApiResponse) -> List[Dict[str, Any]]:
    """Records of a successful list response, empty otherwise."""
    if not result.is_success() or not result.data:
        return []
    return [item for item in result.data if isinstance(item, dict)]
