from __future__ import annotations

from typing import Any, Dict
from urllib.parse import quote

import httpx
import typer

from cli.config import CLIConfig


class ApiError(Exception):
    """Raised when the gateway answers with its error envelope."""

    def __init__(self, status_code: int, payload: Dict[str, Any]) -> None:
        super().__init__(f"HTTP {status_code}")
        self.status_code = status_code
        self.payload = payload


class ApiClient:
    """Minimal HTTP client for the rainfall gateway."""

    def __init__(self, config: CLIConfig) -> None:
        self._config = config
        self._client = httpx.Client(base_url=config.base_url, timeout=config.timeout)

    def close(self) -> None:
        self._client.close()

    def list_readings(self, station_id: str, count: int) -> Dict[str, Any]:
        path = f"/rainfall/id/{quote(station_id, safe='')}/readings"
        response = self._send("GET", path, params={"count": count})
        if response.status_code != 200:
            raise ApiError(response.status_code, self._error_payload(response))
        return response.json()

    def health(self) -> Dict[str, Any]:
        response = self._send("GET", "/health")
        if response.status_code != 200:
            raise ApiError(response.status_code, self._error_payload(response))
        return response.json()

    def _send(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            return self._client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            typer.secho(
                f"Could not reach {self._config.base_url}: {exc}",
                fg=typer.colors.RED,
                err=True,
            )
            raise typer.Exit(code=1) from exc

    @staticmethod
    def _error_payload(response: httpx.Response) -> Dict[str, Any]:
        try:
            data = response.json()
        except ValueError:
            return {"message": response.text.strip() or "no detail provided.", "detail": []}
        if not isinstance(data, dict):
            return {"message": str(data), "detail": []}
        return data
