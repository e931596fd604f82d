from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer

from scanbridge.bootstrap import ScannerBootstrap
from scanbridge.config import load_settings
from scanbridge.engine import FileEngine
from scanbridge.exceptions import ConfigurationError, ScanBridgeError
from scanbridge.schema import load_snapshot
from scanbridge.version_gate import (
    MIN_SUPPORTED_VERSION,
    UNSUPPORTED_BELOW_MIN_MESSAGE,
    is_version_below,
)

app = typer.Typer(add_completion=False)

_LOG_FORMAT = "[%(levelname)s] %(message)s"


def _configure_logging(*, verbose: bool, quiet: bool) -> None:
    level = logging.INFO
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    logging.basicConfig(level=level, format=_LOG_FORMAT, force=True)


def _parse_defines(entries: List[str]) -> dict[str, str]:
    properties: dict[str, str] = {}
    for entry in entries:
        key, sep, value = entry.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ConfigurationError(f"Expected key=value, got {entry!r}")
        properties[key] = value
    return properties


@app.command()
def collect(
    snapshot: Path = typer.Argument(..., help="JSON snapshot of the build's project model."),
    define: List[str] = typer.Option([], "--define", "-D", help="User property key=value."),
    server_version: Optional[str] = typer.Option(None, "--server-version"),
    output: str = typer.Option("-", "--output", "-o", help="Properties JSON path, or - for stdout."),
    config: Optional[Path] = typer.Option(None, "--config"),
    verbose: bool = typer.Option(False, "--verbose", "-X"),
    quiet: bool = typer.Option(False, "--quiet", "-q"),
) -> None:
    """Reconcile project properties and hand them to the offline engine."""
    _configure_logging(verbose=verbose, quiet=quiet)
    try:
        project = load_snapshot(snapshot)
        root = Path(project.top_level_module().base_dir)
        bootstrap = ScannerBootstrap(
            engine=FileEngine(output=output, reported_version=server_version),
            snapshot=project,
            user_properties=_parse_defines(define),
            settings=load_settings(root=root, config_path=config),
        )
        bootstrap.execute()
    except ScanBridgeError as exc:
        typer.echo(f"ERROR: {exc}", err=True)
        raise typer.Exit(code=1)


@app.command("version-check")
def version_check(
    server_version: Optional[str] = typer.Argument(None),
    min_version: str = typer.Option(MIN_SUPPORTED_VERSION, "--min-version"),
) -> None:
    """Exit non-zero when the analysis server is too old."""
    try:
        below = is_version_below(server_version, min_version)
    except ValueError as exc:
        typer.echo(f"ERROR: {exc}", err=True)
        raise typer.Exit(code=2)
    if below:
        typer.echo(UNSUPPORTED_BELOW_MIN_MESSAGE, err=True)
        raise typer.Exit(code=1)
    typer.echo(f"Analysis server {server_version} is supported.")


if __name__ == "__main__":
    app()
