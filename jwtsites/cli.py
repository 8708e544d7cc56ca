"""Command line interface for checking site settings."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

from jwtsites.config import load_config
from jwtsites.exceptions import DocumentLoadError
from jwtsites.loader import FORMATS, load_sites_file
from jwtsites.resolver import SiteResolver

app = typer.Typer(help="CLI for JWT site settings")


@app.callback()
def main(
    log_level: str = typer.Option("WARNING", help="Logging level for diagnostics"),
) -> None:
    """jwtsites CLI entry point."""
    logging.basicConfig(
        level=log_level.upper(), format="%(levelname)s %(name)s: %(message)s"
    )


@app.command("check")
def check(
    settings: Optional[Path] = typer.Argument(
        None, help="Settings document (defaults to the configured settings path)"
    ),
    base_dir: Optional[Path] = typer.Option(
        None, help="Directory relative key paths are resolved against"
    ),
    fmt: Optional[str] = typer.Option(
        None, "--format", help="Settings format: xml or yaml (detected if omitted)"
    ),
    config: Optional[str] = typer.Option(None, help="Resolver configuration file"),
) -> None:
    """
    Resolve a settings document and report every site.

    Prints one line per registered site followed by one line per rejected site.
    Exits with code 1 when the document is unusable or no site was registered.

    Example:
        jwtsites check sites.xml --base-dir /srv/tomcat
        # Output: https://example.org    RS256
        #         default    HS256
        #         REJECTED https://other.org: KeyDecodeError (Base64 decode error: ...)
    """
    try:
        resolver_config = load_config(config)
    except ValueError as e:
        typer.secho(f"Error loading configuration: {e}", fg=typer.colors.RED)
        raise typer.Exit(code=1)
    settings = settings or resolver_config.settings_path
    if settings is None:
        typer.secho("No settings document given", fg=typer.colors.RED)
        raise typer.Exit(code=1)
    if fmt is not None and fmt.lower() not in FORMATS:
        typer.secho(f"Unsupported format: {fmt}", fg=typer.colors.RED)
        raise typer.Exit(code=1)

    resolver = SiteResolver(base_dir=base_dir, config=resolver_config)
    try:
        configuration = load_sites_file(settings, fmt)
    except DocumentLoadError as e:
        typer.secho(f"Error loading settings: {e}", fg=typer.colors.RED)
        raise typer.Exit(code=1)

    result = resolver.resolve(configuration)
    if result.error:
        typer.secho(f"Error loading settings: {result.error}", fg=typer.colors.RED)
        raise typer.Exit(code=1)

    for name, verifier in result.verifiers.items():
        typer.echo(f"{name}\t{verifier.algorithm}")
    for rejection in result.rejections:
        typer.echo(
            f"REJECTED {rejection.site}: {rejection.reason} ({rejection.detail})"
        )

    if not result.verifiers:
        typer.echo("No sites configured.")
        raise typer.Exit(code=1)
