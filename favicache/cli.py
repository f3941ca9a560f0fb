"""Entrypoint for the command line interface."""

from typing import Optional

import typer

from favicache.configs import settings as config
from favicache.configs.app_configs.config_logging import configure_logging
from favicache.domain import get_domain
from favicache.manager import create_generator, create_resolution_cache

cli = typer.Typer(
    name="favicache",
    help="Inspect and maintain the favicon resolution cache",
    no_args_is_help=True,
    add_completion=False,
)

provider_option = typer.Option(
    None,
    "--provider",
    help="Provider mode to generate candidates for. Defaults to the configured mode",
)


@cli.callback()
def setup():
    """CLI Entrypoint"""
    configure_logging()


@cli.command()
def candidates(url: str, provider: Optional[str] = provider_option):
    """Print the icon addresses that would be tried for URL, in order."""
    generator = create_generator(provider)
    typer.echo(f"provider mode: {generator.mode.value}")
    for candidate in generator.candidate_sources(url):
        typer.echo(f"{candidate.provider}\t{candidate.src}")


@cli.command()
def lookup(url: str):
    """Print the cached outcome for the domain of URL."""
    domain = get_domain(url)
    if not domain:
        typer.echo(f"No domain in {url!r}")
        raise typer.Exit(code=1)

    entry = create_resolution_cache().entry(url)
    if entry is None:
        typer.echo(f"{domain}: not cached")
        return
    outcome = "ok" if entry.ok else "failed"
    typer.echo(f"{domain}: {outcome} provider={entry.provider} at={entry.at} src={entry.src}")


@cli.command()
def stats():
    """Print entry counts for the cache."""
    cache = create_resolution_cache()
    entries = cache.entries()
    expired = sum(1 for entry in entries if cache.is_expired(entry))
    succeeded = sum(1 for entry in entries if entry.ok)
    typer.echo(f"key: {cache.key}")
    typer.echo(f"backend: {config.favicon.cache.backend}")
    typer.echo(f"entries: {len(entries)}/{cache.max_entries}")
    typer.echo(f"ok: {succeeded}")
    typer.echo(f"failed: {len(entries) - succeeded}")
    typer.echo(f"expired: {expired}")


@cli.command()
def purge():
    """Remove expired entries from the cache."""
    removed = create_resolution_cache().purge_expired()
    typer.echo(f"Removed {removed} expired entries")


@cli.command()
def clear():
    """Remove every entry from the cache."""
    create_resolution_cache().clear()
    typer.echo("Cleared favicon cache")


if __name__ == "__main__":
    cli()
