"""Command line entry point for calling Lotus RPC methods."""

from __future__ import annotations

import json
import logging
from importlib import metadata
from pathlib import Path
from typing import Any

import typer
from rich.console import Console

from .client import LotusRPCClient
from .config import LotusSettings, load_settings
from .errors import ConfigurationError, RpcError, TransportError

app = typer.Typer(help="Call Filecoin JSON-RPC methods on a Lotus node", no_args_is_help=True)

CLI_CONSOLE = Console()
ERR_CONSOLE = Console(stderr=True)

logger = logging.getLogger(__name__)


def parse_param(raw: str) -> Any:
    """Decode a CLI argument as JSON, keeping it as a plain string otherwise."""
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


def _build_client(settings: LotusSettings) -> LotusRPCClient:
    return LotusRPCClient(settings.client_config(), timeout=settings.timeout_seconds)


@app.command()
def call(
    method: str = typer.Argument(..., help="Method name without the Filecoin. prefix"),  # noqa: B008
    params: list[str] | None = typer.Argument(None, help="Positional params, each parsed as JSON"),  # noqa: B008
    api_address: str | None = typer.Option(None, "--api-address", "-a", help="Lotus RPC endpoint URL"),  # noqa: B008
    token: str | None = typer.Option(None, "--token", "-t", help="Bearer token for authenticated methods"),  # noqa: B008
    config: Path | None = typer.Option(None, "--config", help="Read settings from this TOML file"),  # noqa: B008
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),  # noqa: B008
) -> None:
    """Invoke METHOD and print its JSON result."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG)

    try:
        settings = load_settings(config, api_address=api_address, token=token)
        client = _build_client(settings)
    except ConfigurationError as exc:
        ERR_CONSOLE.print(f"Configuration error: {exc}", markup=False)
        raise typer.Exit(code=2) from exc

    values = [parse_param(raw) for raw in params or []]
    with client:
        try:
            result = client.request_sync(method, *values)
        except RpcError as exc:
            ERR_CONSOLE.print(str(exc), markup=False)
            raise typer.Exit(code=1) from exc
        except TransportError as exc:
            logger.debug("Transport failure calling %s", method, exc_info=True)
            ERR_CONSOLE.print(f"Request failed: {exc}", markup=False)
            raise typer.Exit(code=3) from exc

    CLI_CONSOLE.print_json(data=result)


@app.command()
def version() -> None:
    """Show package version."""
    try:
        pkg_version = metadata.version("lotus-rpc")
    except metadata.PackageNotFoundError:
        pkg_version = "0.0.0"
    CLI_CONSOLE.print(f"lotus-rpc version {pkg_version}")


def main() -> None:
    """Console script entrypoint."""
    app()


__all__ = ["app", "main", "parse_param"]
