"""
HTTP client for the Idea Board API.

Thin wrapper over httpx that speaks the /api/v1 contracts and turns error
envelopes into ApiError. Any httpx.Client works as transport, including
FastAPI's TestClient.
"""

from typing import Any, Dict, List, Optional
import logging

import httpx
from pydantic import TypeAdapter

from ideaboard.core.constants import APIConfig, ErrorMessages
from ideaboard.models.ideas import IdeaStatus
from ideaboard.schemas.idea import CommentRead, IdeaRead, VoteToggleResponse
from ideaboard.schemas.user import UserRead

logger = logging.getLogger(__name__)

_IDEA_LIST = TypeAdapter(List[IdeaRead])
_COMMENT_LIST = TypeAdapter(List[CommentRead])


def get_httpx_timeout() -> httpx.Timeout:
    return httpx.Timeout(10.0, connect=5.0)


class ApiError(Exception):
    """A request the server refused or could not complete."""

    def __init__(self, status_code: int, message: str, error_code: Optional[str] = None,
                 payload: Optional[Dict[str, Any]] = None):
        super().__init__(f"{status_code} {error_code or ''}: {message}".strip())
        self.status_code = status_code
        self.message = message
        self.error_code = error_code
        self.payload = payload or {}

    @property
    def user_message(self) -> str:
        # Shown to people; the details stay in the logs
        return ErrorMessages.RETRY_HINT


class IdeaBoardClient:
    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        token: Optional[str] = None,
        http_client: Optional[httpx.Client] = None,
        prefix: str = APIConfig.API_V1_PREFIX
    ):
        self._http = http_client or httpx.Client(base_url=base_url, timeout=get_httpx_timeout())
        self._prefix = prefix.rstrip("/")
        self.token = token

    def _headers(self) -> Dict[str, str]:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}

    def _request(self, method: str, path: str, **kwargs) -> Any:
        try:
            response = self._http.request(method, f"{self._prefix}{path}", headers=self._headers(), **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"{method} {path} failed before a response arrived: {e}")
            raise ApiError(0, str(e), "NETWORK_ERROR") from e

        if response.is_error:
            try:
                body = response.json()
            except ValueError:
                body = {}
            if not isinstance(body, dict):
                body = {"detail": body}
            message = body.get("message") or str(body.get("detail") or response.reason_phrase)
            logger.warning(f"{method} {path} answered {response.status_code}: {message}")
            raise ApiError(response.status_code, message, body.get("error_code"), body)

        return response.json()

    # Session
    def login(self, email: str, password: str) -> str:
        data = self._request("POST", "/auth/login", json={"email": email, "password": password})
        self.token = data["access_token"]
        return self.token

    def me(self) -> UserRead:
        return UserRead.model_validate(self._request("GET", "/users/me"))

    # Ideas
    def list_ideas(self, **filters) -> List[IdeaRead]:
        params = {key: value for key, value in filters.items() if value is not None}
        return _IDEA_LIST.validate_python(self._request("GET", "/ideas", params=params))

    def create_idea(self, title: str, description: str, category_id: int) -> IdeaRead:
        data = self._request(
            "POST", "/ideas",
            json={"title": title, "description": description, "category_id": category_id}
        )
        return IdeaRead.model_validate(data)

    def set_status(self, idea_id: int, status: IdeaStatus) -> IdeaRead:
        data = self._request("PATCH", f"/ideas/{idea_id}", json={"status": IdeaStatus(status).value})
        return IdeaRead.model_validate(data)

    def delete_idea(self, idea_id: int) -> Dict[str, Any]:
        return self._request("DELETE", f"/ideas/{idea_id}")

    # Votes
    def toggle_vote(self, idea_id: int) -> VoteToggleResponse:
        return VoteToggleResponse.model_validate(self._request("POST", "/vote", json={"ideaId": idea_id}))

    # Comments
    def list_comments(self, idea_id: int) -> List[CommentRead]:
        return _COMMENT_LIST.validate_python(self._request("GET", f"/ideas/{idea_id}/comments"))

    def add_comment(self, idea_id: int, content: str) -> CommentRead:
        data = self._request("POST", f"/ideas/{idea_id}/comments", json={"content": content})
        return CommentRead.model_validate(data)

    def delete_comment(self, comment_id: int) -> Dict[str, Any]:
        return self._request("DELETE", f"/comments/{comment_id}")

    def close(self) -> None:
        self._http.close()
