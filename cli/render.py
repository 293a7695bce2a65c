from __future__ import annotations

from typing import Any, Dict, Iterable

import typer


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_key_values(pairs: Iterable[tuple[str, Any]]) -> None:
    for key, value in pairs:
        typer.echo(f"{key}: {value}")


def render_readings(station_id: str, payload: Dict[str, Any]) -> None:
    readings = payload.get("readings") or []
    echo_heading(f"Rainfall readings for {station_id}")
    echo_key_values([("count", len(readings))])
    typer.echo()
    for reading in readings:
        typer.echo(f"  - {reading.get('dateMeasured')}  {reading.get('amountMeasured')}")


def render_error(status_code: int, payload: Dict[str, Any]) -> None:
    typer.secho(
        f"Request failed with status {status_code}: {payload.get('message') or 'no detail provided.'}",
        fg=typer.colors.RED,
        err=True,
    )
    for detail in payload.get("detail") or []:
        typer.secho(
            f"  - {detail.get('propertyName')}: {detail.get('message')}",
            fg=typer.colors.RED,
            err=True,
        )
