"""
TubeTerm CLI entry point using Typer.

Run:
  python cli.py run

This starts a curses-based TUI for browsing videos, channels and playlists
through an Invidious server.
"""
from __future__ import annotations

import dataclasses
from typing import Optional

import typer

from tubeterm_cli.config import config_path, load_config, write_default_config
from tubeterm_cli.errors import ConfigError
from tubeterm_cli.tui import run_tui


app = typer.Typer(add_completion=False, help="TubeTerm - browse videos from the terminal")


@app.command()
def run(
    server: Optional[str] = typer.Option(None, help="Invidious server URL, overrides the config file"),
    config: Optional[str] = typer.Option(None, help="Path to config.yml (default: $TUBETERM_HOME/config.yml)"),
):
    """Start the interactive TUI."""
    try:
        cfg = load_config(config)
    except ConfigError as exc:
        typer.echo(f"Configuration error: {exc}", err=True)
        raise typer.Exit(code=1)
    if server:
        cfg = dataclasses.replace(cfg, server_url=server)
    run_tui(cfg)


@app.command("init-config")
def init_config(
    config: Optional[str] = typer.Option(None, help="Where to write the file"),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing file"),
):
    """Write the default configuration file."""
    try:
        path = write_default_config(config, overwrite=force)
    except ConfigError as exc:
        typer.echo(f"{exc} (use --force to overwrite)", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"Wrote {path}")


@app.command()
def where():
    """Print the configuration file location."""
    typer.echo(config_path())


if __name__ == "__main__":
    app()
