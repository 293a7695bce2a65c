from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import typer

from cli.client import ApiClient, ApiError
from cli.config import CLIConfig, load_config
from cli.render import echo_key_values, render_error, render_readings


@dataclass
class CLIState:
    config: CLIConfig
    client: ApiClient


app = typer.Typer(
    help="Query a running rainfall gateway.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=1)
    return state


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        "-b",
        help="Gateway base URL (defaults to API_BASE_URL env or http://localhost:8000).",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="Seconds to wait for the gateway to answer.",
    ),
) -> None:
    """Entry point for the CLI."""
    config = load_config(base_url=base_url, timeout=timeout)
    client = ApiClient(config)
    ctx.obj = CLIState(config=config, client=client)
    ctx.call_on_close(client.close)


@app.command("readings")
def readings_command(
    ctx: typer.Context,
    station_id: str = typer.Argument(..., help="Identifier of the monitoring station."),
    count: int = typer.Option(10, "--count", "-n", help="Number of readings to fetch (1-100)."),
) -> None:
    """List the most recent rainfall readings for a station."""
    state = _get_state(ctx)
    try:
        payload = state.client.list_readings(station_id, count)
    except ApiError as exc:
        render_error(exc.status_code, exc.payload)
        raise typer.Exit(code=1) from exc
    render_readings(station_id, payload)


@app.command("health")
def health_command(ctx: typer.Context) -> None:
    """Show the gateway health status."""
    state = _get_state(ctx)
    try:
        payload = state.client.health()
    except ApiError as exc:
        render_error(exc.status_code, exc.payload)
        raise typer.Exit(code=1) from exc
    echo_key_values([("base_url", state.config.base_url), ("status", payload.get("status"))])
