"""
Client state controller - the frontend's view of the app, driven over HTTP.

Holds {user, items, loading} and keeps it in step with the backend through
request/response cycles triggered by user actions. The cookie jar of the
underlying httpx client carries the session. Data-operation failures are
logged and leave the state as it was; login/registration failures raise
AuthenticationFailed with the server's message for the UI to show.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

import httpx

logger = logging.getLogger(__name__)

DEFAULT_AUTH_ERROR = "Authentication failed"


class AuthenticationFailed(Exception):
    """Blocking, user-facing login/registration error."""

    def __init__(self, message: str = DEFAULT_AUTH_ERROR, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


@dataclass
class TodoItemView:
    id: int
    text: str


@dataclass
class ClientState:
    user: dict[str, Any] | None = None
    items: list[TodoItemView] = field(default_factory=list)
    loading: bool = True


class TodoAppController:
    """State machine: loading -> login | list. Logout returns to login."""

    def __init__(self, client: httpx.AsyncClient):
        self.client = client
        self.state = ClientState()

    @property
    def view(self) -> str:
        if self.state.loading:
            return "loading"
        if self.state.user is None:
            return "login"
        return "list"

    @property
    def google_login_url(self) -> str:
        return str(self.client.base_url.join("/auth/google"))

    async def mount(self) -> None:
        """Resolve the current user, then load the list if there is one."""
        try:
            response = await self.client.get("/auth/user")
            if response.status_code == 200:
                await self._set_user(response.json().get("user"))
            else:
                logger.info("No active session (status %s)", response.status_code)
        except httpx.HTTPError as e:
            logger.error("Auth check failed: %s", e)
        finally:
            self.state.loading = False

    async def login(self, email: str, password: str) -> None:
        await self._authenticate("/auth/login", {"email": email, "password": password})

    async def register(self, email: str, password: str, name: str) -> None:
        await self._authenticate(
            "/auth/register", {"email": email, "password": password, "name": name}
        )

    async def fetch_todos(self) -> None:
        try:
            response = await self.client.get("/api/todos")
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error("Failed to fetch todos: %s", e)
            return
        self.state.items = [TodoItemView(id=t["id"], text=t["text"]) for t in response.json()]

    async def add_item(self, text: str) -> None:
        """Create a todo. Blank input never reaches the server."""
        if not text.strip():
            return
        try:
            response = await self.client.post("/api/todos", json={"text": text})
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error("Failed to add todo: %s", e)
            return
        todo = response.json()
        # Server lists newest first; keep the local copy in the same order
        self.state.items = [TodoItemView(id=todo["id"], text=todo["text"]), *self.state.items]

    async def delete_item(self, todo_id: int) -> None:
        try:
            response = await self.client.delete(f"/api/todos/{todo_id}")
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error("Failed to delete todo %s: %s", todo_id, e)
            return
        self.state.items = [item for item in self.state.items if item.id != todo_id]

    async def logout(self) -> None:
        try:
            response = await self.client.post("/auth/logout")
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error("Logout failed: %s", e)
            return
        self.state.user = None
        self.state.items = []

    async def _authenticate(self, path: str, payload: dict[str, str]) -> None:
        try:
            response = await self.client.post(path, json=payload)
        except httpx.HTTPError as e:
            logger.error("Auth request to %s failed: %s", path, e)
            raise AuthenticationFailed() from e
        if response.status_code != 200:
            raise AuthenticationFailed(_error_message(response), response.status_code)
        await self._set_user(response.json().get("user"))

    async def _set_user(self, user: dict[str, Any] | None) -> None:
        """Fetch the list once on the none -> present transition."""
        was_anonymous = self.state.user is None
        self.state.user = user
        if user is not None and was_anonymous:
            await self.fetch_todos()


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return DEFAULT_AUTH_ERROR
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return DEFAULT_AUTH_ERROR
