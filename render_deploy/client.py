# render_deploy/client.py
import json
from typing import Any, Dict, List, Optional

import requests

from . import RENDER_API_BASE
from .errors import AuthError, HttpError, MalformedResponseError


def is_success(response) -> bool:
    return 200 <= response.status_code < 300


def parse_json_response(response) -> Any:
    """Decode a response body, raising MalformedResponseError for non-JSON text."""
    text = response.text
    try:
        return json.loads(text)
    except ValueError:
        raise MalformedResponseError(response.status_code, text)


class RenderClient:
    """The three Render API calls a deploy run needs."""

    def __init__(
        self,
        api_key: str,
        service_id: str,
        base_url: str = RENDER_API_BASE,
        timeout: float = 30,
        session: Optional[requests.Session] = None,
    ):
        self.service_id = service_id
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()
        self.session.headers.update(
            {
                "Authorization": f"Bearer {api_key}",
                "Accept": "application/json",
            }
        )

    def _url(self, path: str = "") -> str:
        return f"{self.base_url}/v1/services/{self.service_id}/deploys{path}"

    def trigger_deploy(self) -> Optional[Dict[str, Any]]:
        """POST a new deploy.

        Returns the decoded deploy, or None when Render accepted the request
        but answered with an empty body (the deploy was queued).
        """
        response = self.session.post(self._url(), timeout=self.timeout)

        if response.status_code == 401:
            raise AuthError()
        if not is_success(response):
            raise HttpError(response.status_code, response.text)

        if not (response.text or "").strip():
            return None
        data = parse_json_response(response)
        if not isinstance(data, dict):
            raise MalformedResponseError(
                response.status_code, response.text, reason="an unexpected deploy payload"
            )
        return data

    def list_deploys(self, limit: int = 1) -> List[Dict[str, Any]]:
        response = self.session.get(
            self._url(), params={"limit": limit}, timeout=self.timeout
        )
        if not is_success(response):
            raise HttpError(
                response.status_code,
                response.text,
                prefix="Could not list deploys",
            )

        items = parse_json_response(response)
        if not isinstance(items, list):
            raise MalformedResponseError(
                response.status_code, response.text, reason="a non-list deploy listing"
            )
        # list entries come wrapped as {"deploy": {...}, "cursor": "..."}
        return [
            item["deploy"] if isinstance(item, dict) and "deploy" in item else item
            for item in items
        ]

    def get_deploy(self, deploy_id: str) -> Dict[str, Any]:
        response = self.session.get(self._url(f"/{deploy_id}"), timeout=self.timeout)
        if not is_success(response):
            raise HttpError(
                response.status_code,
                response.text,
                prefix="Could not retrieve deploy information",
            )
        data = parse_json_response(response)
        if not isinstance(data, dict):
            raise MalformedResponseError(
                response.status_code, response.text, reason="an unexpected deploy payload"
            )
        return data

    def close(self):
        self.session.close()
