from __future__ import annotations

import asyncio
from typing import Optional

import typer

from asset_converter.config import load_config
from asset_converter.utils.errors import AssetConverterError
from asset_converter.valuation import build_service
from .display import DisplayManager


app = typer.Typer(add_completion=False, help="Asset Converter CLI")
display = DisplayManager()


def _service(config_path: Optional[str]):
    return build_service(load_config(config_path))


@app.command("convert")
def convert(
    amount: float = typer.Argument(..., help="Amount to convert"),
    asset: str = typer.Argument("USD", help="Source asset, e.g. BTC, EUR, GOLD, \"Tesla Model 3\""),
    region: str = typer.Option("US", "--region", "-r", help="Region: US or IN"),
    mode: str = typer.Option("short", "--mode", "-m", help="Horizon: short or long"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to config.yaml"),
):
    """Express AMOUNT of ASSET in every other supported asset."""
    service = _service(config)
    try:
        results = asyncio.run(service.convert(amount, asset, region, mode))
    except AssetConverterError as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED)
        raise typer.Exit(code=1)
    display.show_conversion(results, amount, asset)


@app.command("overview")
def overview(
    asset: str = typer.Argument(..., help="Asset to describe"),
    mode: str = typer.Option("short", "--mode", "-m", help="Horizon: short or long"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to config.yaml"),
):
    """Show the short or long term outlook for ASSET."""
    service = _service(config)
    try:
        result = asyncio.run(service.overview(asset, mode))
    except AssetConverterError as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED)
        raise typer.Exit(code=1)
    display.show_overview(asset, mode, result)


@app.command("refresh")
def refresh(
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to config.yaml"),
):
    """Fetch every price bucket from upstream now and store it."""
    service = _service(config)
    typer.echo("Starting data fetch...")
    results = asyncio.run(service.refresh())
    display.show_refresh(results)
    if not any(results.values()):
        raise typer.Exit(code=1)


@app.command("status")
def status(
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to config.yaml"),
):
    """Show age and staleness of every price bucket without fetching."""
    service = _service(config)
    display.show_status(service.bucket_status())


if __name__ == "__main__":
    app()
