"""GYATT PPL API client.

This module defines a small client wrapper around the REST API served
by ``gyatt_api``.  It mirrors the operations used by the web frontend:

* :meth:`GyattAPI.login` – authenticate (or auto-register) and keep the token.
* :meth:`GyattAPI.get_profile` – fetch the caller's own record.
* user management – :meth:`list_users`, :meth:`create_user`,
  :meth:`update_user`, :meth:`delete_user` (administrators only).
* missions – :meth:`list_missions`, :meth:`create_mission`,
  :meth:`update_mission`, :meth:`delete_mission`.
* suggestions – :meth:`list_suggestions`, :meth:`create_suggestion`,
  :meth:`delete_suggestion`.

Every method returns a tuple ``(data, error)``.  On success ``error``
is ``None``; on failure ``data`` is ``None`` (or an empty list for
listings) and ``error`` is a dictionary with ``status_code`` and
``message`` keys, the message being taken from the server's
``{"error": ...}`` body when available.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

Error = Dict[str, Any]


class GyattAPI:
    """Client for interacting with the GYATT PPL API."""

    def __init__(
        self,
        *,
        base_url: str,
        token: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Server root, e.g. ``https://example.com``.  The
                ``/api`` prefix is added by the client.
            token: Optional access token from a previous login.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Per-request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/") + "/api"
        self.token = token
        self.session = session or requests.Session()
        self.timeout = timeout

    def clear_token(self) -> None:
        """Forget the stored token.  The server keeps no session to end."""
        self.token = None

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[Error]]:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PUT``, ``DELETE``).
            path: Path relative to the ``/api`` prefix (e.g. ``/missions``).
            json_body: JSON body to send with the request.
        Returns:
            A tuple ``(data, error)`` as described in the module docstring.
        """
        url = f"{self.base_url}{path}"
        headers: Dict[str, str] = {}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                json=json_body,
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    message = err_json.get("error") or err_json.get("detail") or str(err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    def _list(self, path: str) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        data, error = self._request("GET", path)
        if error:
            return [], error
        return data if isinstance(data, list) else [], None

    # ------------------------------------------------------------------
    # Auth and profile
    # ------------------------------------------------------------------
    def login(self, email: str, password: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Log in and store the returned token.

        An unknown email is registered by the server as a new member.
        Returns the user record on success.
        """
        data, error = self._request("POST", "/auth/login", json_body={"email": email, "password": password})
        if error:
            return None, error
        self.token = data["token"]
        return data["user"], None

    def get_profile(self) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("GET", "/user/profile")

    def health(self) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("GET", "/health")

    # ------------------------------------------------------------------
    # Users (admin)
    # ------------------------------------------------------------------
    def list_users(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        return self._list("/users")

    def create_user(self, user_data: Dict[str, Any]) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("POST", "/users", json_body=user_data)

    def update_user(self, user_id: int, user_data: Dict[str, Any]) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("PUT", f"/users/{user_id}", json_body=user_data)

    def delete_user(self, user_id: int) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("DELETE", f"/users/{user_id}")

    # ------------------------------------------------------------------
    # Missions
    # ------------------------------------------------------------------
    def list_missions(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        return self._list("/missions")

    def create_mission(self, mission_data: Dict[str, Any]) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("POST", "/missions", json_body=mission_data)

    def update_mission(
        self, mission_id: int, mission_data: Dict[str, Any]
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("PUT", f"/missions/{mission_id}", json_body=mission_data)

    def delete_mission(self, mission_id: int) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("DELETE", f"/missions/{mission_id}")

    # ------------------------------------------------------------------
    # Suggestions
    # ------------------------------------------------------------------
    def list_suggestions(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        return self._list("/suggestions")

    def create_suggestion(self, text: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("POST", "/suggestions", json_body={"text": text})

    def delete_suggestion(self, suggestion_id: int) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("DELETE", f"/suggestions/{suggestion_id}")
