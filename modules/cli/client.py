"""
Board API Client.

Async httpx client used by board_cli.py. Requests identify themselves
with ``X-Frontend-ID: cli`` so server logs attribute them to the terminal
renderer. The board helpers unwrap the response envelope: they return
its ``data`` field, which is None when the note named by a mutation is
already gone.
"""

from typing import Any

import httpx

from modules.backend.core.config import get_server_base_url
from modules.backend.core.logging import get_logger

logger = get_logger(__name__, source="cli")

NOTES_PATH = "/api/v1/notes"
FALLBACK_TIMEOUT = 30.0


def _view_params(color: str, q: str, sort: str | None) -> dict[str, str]:
    params = {"color": color, "q": q}
    if sort is not None:
        params["sort"] = sort
    return params


class APIClient:
    """
    Talks to one board server.

    Usage:
        client = APIClient()
        note = await client.create_note()
        await client.update_text(note["id"], "Call the plumber")
        view = await client.list_notes(color="yellow", sort="updated_at")
    """

    def __init__(self, base_url: str | None = None, timeout: float | None = None):
        """
        Args:
            base_url: Server address; defaults to application.yaml's server host and port.
            timeout: Seconds per request; defaults to application.yaml's timeouts.external_api.
        """
        try:
            config_url, config_timeout = get_server_base_url()
        except Exception as e:
            if base_url is None:
                raise RuntimeError(
                    "Could not determine server URL from config/settings/application.yaml"
                ) from e
            config_url, config_timeout = base_url, FALLBACK_TIMEOUT

        self.base_url = (base_url or config_url).rstrip("/")
        self.timeout = config_timeout if timeout is None else timeout
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers={"X-Frontend-ID": "cli"},
            )
        return self._client

    async def close(self) -> None:
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
        self._client = None

    async def request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """Send one request. Transport errors are logged and re-raised; HTTP errors are not raised here."""
        client = await self._get_client()
        logger.debug("API request", method=method, path=path)
        try:
            response = await client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.error("API request failed", method=method, path=path, error=str(e))
            raise
        logger.debug("API response", method=method, path=path, status_code=response.status_code)
        return response

    async def get(self, path: str, **kwargs: Any) -> httpx.Response:
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs: Any) -> httpx.Response:
        return await self.request("POST", path, **kwargs)

    async def put(self, path: str, **kwargs: Any) -> httpx.Response:
        return await self.request("PUT", path, **kwargs)

    async def patch(self, path: str, **kwargs: Any) -> httpx.Response:
        return await self.request("PATCH", path, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> httpx.Response:
        return await self.request("DELETE", path, **kwargs)

    # -------------------------------------------------------------------------
    # Board helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _data(response: httpx.Response) -> Any:
        response.raise_for_status()
        return response.json()["data"]

    async def _pointer(self, note_id: str, step: str, x: float, y: float) -> dict[str, Any] | None:
        return self._data(await self.post(f"{NOTES_PATH}/{note_id}/drag/{step}", json={"x": x, "y": y}))

    async def create_note(self) -> dict[str, Any]:
        return self._data(await self.post(NOTES_PATH))

    async def list_notes(self, color: str = "all", q: str = "", sort: str | None = None) -> list[dict[str, Any]]:
        return self._data(await self.get(NOTES_PATH, params=_view_params(color, q, sort)))

    async def board(self, color: str = "all", q: str = "", sort: str | None = None) -> dict[str, Any]:
        """Derived view, statistics and store version from one request."""
        return self._data(await self.get(f"{NOTES_PATH}/board", params=_view_params(color, q, sort)))

    async def update_text(self, note_id: str, text: str) -> dict[str, Any] | None:
        return self._data(await self.patch(f"{NOTES_PATH}/{note_id}", json={"text": text}))

    async def move_note(self, note_id: str, x: float, y: float) -> dict[str, Any] | None:
        return self._data(await self.put(f"{NOTES_PATH}/{note_id}/position", json={"x": x, "y": y}))

    async def delete_note(self, note_id: str) -> None:
        (await self.delete(f"{NOTES_PATH}/{note_id}")).raise_for_status()

    async def stats(self) -> dict[str, Any]:
        return self._data(await self.get(f"{NOTES_PATH}/stats"))

    async def palette(self) -> list[str]:
        return self._data(await self.get(f"{NOTES_PATH}/palette"))["colors"]

    async def begin_drag(self, note_id: str, x: float, y: float) -> dict[str, Any] | None:
        return await self._pointer(note_id, "begin", x, y)

    async def drag_to(self, note_id: str, x: float, y: float) -> dict[str, Any] | None:
        return await self._pointer(note_id, "move", x, y)

    async def end_drag(self, note_id: str) -> None:
        (await self.post(f"{NOTES_PATH}/{note_id}/drag/end")).raise_for_status()


_client: APIClient | None = None


def get_api_client() -> APIClient:
    """The process-wide client; board_cli commands close it when they finish."""
    global _client
    if _client is None:
        _client = APIClient()
    return _client
