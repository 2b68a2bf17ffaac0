"""CLI for poking at the favicon resolver."""

import asyncio
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from favicon_resolver.config import ResolverConfig
from favicon_resolver.fetchers.http import close_client
from favicon_resolver.resolver import resolve_icon, resolve_icons

load_dotenv()

app = typer.Typer(
    name="favicon-resolver",
    help="Find and fetch a site's favicon",
    add_completion=False,
)
console = Console()


async def _resolve(domain: str, config: ResolverConfig):
    try:
        return await resolve_icon(domain, config=config)
    finally:
        await close_client()


async def _resolve_many(domains: list[str], config: ResolverConfig, max_concurrent: int):
    try:
        return await resolve_icons(domains, max_concurrent=max_concurrent, config=config)
    finally:
        await close_client()


@app.command()
def resolve(
    domain: str = typer.Argument(..., help="Bare domain, e.g. example.com"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write icon bytes to this file"),
    timeout: Optional[float] = typer.Option(None, "--timeout", "-t", help="Per-request timeout in seconds"),
):
    """Resolve the best icon for one domain."""
    config = ResolverConfig.from_env()
    if timeout is not None:
        config = config.model_copy(update={"timeout": timeout})

    icon = asyncio.run(_resolve(domain, config))
    if icon is None:
        console.print(f"[yellow]No icon found for {domain}[/yellow]")
        raise typer.Exit(1)

    table = Table(title=f"Icon for {domain}")
    table.add_column("URI", style="cyan")
    table.add_column("Type")
    table.add_column("Bytes", justify="right")
    table.add_row(icon.uri, icon.media_type.name, str(icon.size))
    console.print(table)

    if output:
        output.write_bytes(icon.content)
        console.print(f"[green]Saved to {output}[/green]")


@app.command()
def batch(
    domains: list[str] = typer.Argument(..., help="Domains to resolve"),
    max_concurrent: int = typer.Option(10, "--concurrency", "-c", help="Max domains in flight"),
):
    """Resolve icons for several domains and print a summary."""
    config = ResolverConfig.from_env()
    results = asyncio.run(_resolve_many(domains, config, max_concurrent))

    table = Table(title="Resolved icons")
    table.add_column("Domain", style="cyan")
    table.add_column("URI")
    table.add_column("Type")

    found = 0
    for domain in domains:
        icon = results.get(domain)
        if icon is None:
            table.add_row(domain, "[dim]-[/dim]", "[dim]-[/dim]")
        else:
            found += 1
            table.add_row(domain, icon.uri, icon.media_type.name)

    console.print(table)
    console.print(f"[green]Found: {found}[/green] | [red]Missing: {len(domains) - found}[/red]")


if __name__ == "__main__":
    app()
