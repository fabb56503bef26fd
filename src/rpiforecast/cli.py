"""Forecast display CLI application.

This module provides the command-line interface for the touchscreen
forecast display: polling the forecast, printing it to the console, and
configuration utilities.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any, Final

import typer
import yaml
from pydantic import ValidationError

from rpiforecast.controller import ForecastDisplay
from rpiforecast.display.console import ConsoleForecastView
from rpiforecast.settings.user import UserSettings, WeatherSettings

# ── CLI setup ────────────────────────────────────────────────────────────────
app = typer.Typer(help="Touchscreen forecast display CLI", add_completion=False)
config_app = typer.Typer(help="Config helpers")
app.add_typer(config_app, name="config")

logger: Final = logging.getLogger(__name__)  # Will be "rpiforecast.cli"

# Options for the main command
CONFIG_OPTION = typer.Option(None, "--config", "-c", dir_okay=False)
DEBUG_OPTION = typer.Option(False, "--debug", help="Enable debug logging")
DST_ARGUMENT = typer.Argument(..., help="Output config.yaml")
ONCE_OPTION = typer.Option(False, "--once", "-1", help="Run one cycle then exit")
INTERVAL_OPTION = typer.Option(
    None, "--interval", "-i", min=0.1, help="Poll interval in minutes (overrides config)"
)
LAT_OPTION = typer.Option(None, "--lat", help="Latitude (overrides config)")
LON_OPTION = typer.Option(None, "--lon", help="Longitude (overrides config)")
SLOTS_OPTION = typer.Option(8, "--slots", min=1, help="Forecast slices to print")


def _load_display(config: Path | None, slots: int, debug: bool) -> ForecastDisplay:
    try:
        return ForecastDisplay(
            config,
            view=ConsoleForecastView(echo=typer.echo, slot_count=slots),
            debug=debug,
        )
    except (FileNotFoundError, RuntimeError) as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=2) from exc


@app.command()
def run(
    config: Path | None = CONFIG_OPTION,
    once: bool = ONCE_OPTION,
    interval: float | None = INTERVAL_OPTION,
    lat: float | None = LAT_OPTION,
    lon: float | None = LON_OPTION,
    slots: int = SLOTS_OPTION,
    debug: bool = DEBUG_OPTION,
) -> None:
    """Poll the forecast and print it after every update."""
    display = _load_display(config, slots, debug)

    if lat is not None or lon is not None:
        weather = display.settings.weather
        display.fetcher.configure(
            lat if lat is not None else weather.lat,
            lon if lon is not None else weather.lon,
            weather.api_key,
        )

    if once:
        if not display.run_once():
            raise typer.Exit(code=1)
        return

    try:
        display.run(interval * 60 if interval is not None else None)
    except KeyboardInterrupt:
        display.shutdown()


# ───────────────────────── config sub-commands ───────────────────────────────
@config_app.command("validate")
def validate_config(file: Path):
    """Validate a YAML config file against the schema."""
    try:
        settings = UserSettings.load(file)
    except (FileNotFoundError, RuntimeError) as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc

    if not settings.weather.api_key:
        typer.secho("⚠ No OpenWeather API key configured", fg=typer.colors.YELLOW)
    typer.echo("✅ Config valid")


@config_app.command("wizard")
def wizard(dst: Path = DST_ARGUMENT):
    """Interactive prompt to create a config file."""
    typer.echo("Interactive config builder - press Enter for defaults.")

    while True:
        data: dict[str, Any] = {
            "lat": typer.prompt("Latitude", type=float),
            "lon": typer.prompt("Longitude", type=float),
            "api_key": typer.prompt("OpenWeather API key", hide_input=True),
            "refresh_minutes": typer.prompt("Refresh interval (minutes)", default=10.0, type=float),
        }
        try:
            cfg = UserSettings(weather=WeatherSettings(**data))
            break  # valid → exit loop
        except ValidationError as err:
            typer.secho("\nConfig error(s):", fg=typer.colors.RED, err=True)
            for e in err.errors():
                typer.secho(f"  • {e['loc'][0]} - {e['msg']}", fg=typer.colors.RED, err=True)
            typer.echo("Please re-enter the values.\n")

    dst.write_text(yaml.safe_dump(cfg.to_mapping(), sort_keys=False), encoding="utf-8")
    typer.secho(f"Config written to {dst}", fg=typer.colors.GREEN)


# ───────────────────────── module entrypoint ────────────────────────────────
def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        sys.exit(0)


if __name__ == "__main__":
    main()
