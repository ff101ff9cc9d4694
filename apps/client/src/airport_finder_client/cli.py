"""Command-line front-end for the airport store."""

from __future__ import annotations

import asyncio
import json
import logging
from datetime import datetime

import click

from airport_finder_client.api import AirportsApiClient
from airport_finder_client.config import settings
from airport_finder_client.pagination import visible_pages
from airport_finder_client.storage import FileKeyValueStore
from airport_finder_client.store import AirportsStore

logger = logging.getLogger(__name__)


def _build_store(api: AirportsApiClient) -> AirportsStore:
    return AirportsStore(
        api,
        FileKeyValueStore(settings.cache_dir),
        cache_ttl_seconds=settings.cache_ttl_seconds,
        history_limit=settings.history_limit,
    )


def _with_store(action, *, load: bool = True):  # type: ignore[no-untyped-def]
    """Build the store, load it (from cache or API) unless told not to, run *action*."""

    async def _run():  # type: ignore[no-untyped-def]
        api = AirportsApiClient()
        try:
            store = _build_store(api)
            if load:
                await store.load_all_airports()
            return action(store)
        finally:
            await api.close()

    return asyncio.run(_run())


def _fail_on_error(store: AirportsStore) -> None:
    if store.state.error and not store.state.all_airports:
        raise click.ClickException(store.state.error)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """Airport Finder CLI."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level.upper(),
        format="%(levelname)s: %(message)s",
    )


@cli.command("load")
def load() -> None:
    """Fetch airports into the local cache (no-op while it is fresh)."""

    def _report(store: AirportsStore) -> None:
        _fail_on_error(store)
        ts = store.state.airports_cache_timestamp
        cached_at = datetime.fromtimestamp(ts).isoformat(timespec="seconds") if ts else "-"
        click.echo(
            f"{len(store.state.all_airports)} airports cached "
            f"(provider total {store.state.total_airports}, cached at {cached_at})"
        )

    _with_store(_report)


@cli.command("search")
@click.argument("query")
@click.option("--page", default=1, show_default=True, type=click.IntRange(min=1))
@click.option("--page-size", default=20, show_default=True, type=click.IntRange(min=1))
@click.option("--json-output", is_flag=True, help="Output as JSON")
def search(query: str, page: int, page_size: int, json_output: bool) -> None:
    """Filter airports by name, city, country or IATA code."""

    def _show(store: AirportsStore) -> None:
        _fail_on_error(store)
        store.set_search_query(query)
        store.add_to_search_history(query)
        airports = store.get_airports_for_page(page, page_size)
        total_pages = store.get_total_pages(page_size)

        if json_output:
            click.echo(
                json.dumps(
                    [a.model_dump(mode="json", by_alias=True) for a in airports],
                    indent=2,
                    ensure_ascii=False,
                )
            )
            return
        if not airports:
            click.echo("No airports found.")
            return
        for a in airports:
            click.echo(f"  {a.iata_code:<4} {a.name} | {a.city} | {a.country}")
        pages = " ".join(
            f"[{p}]" if p == page else str(p) for p in visible_pages(page, total_pages)
        )
        click.echo(f"\nPage {page}/{total_pages}: {pages}")

    _with_store(_show)


@cli.command("show")
@click.argument("iata_code")
def show(iata_code: str) -> None:
    """Show every known field of one airport."""

    def _show(store: AirportsStore) -> None:
        _fail_on_error(store)
        airport = store.get_airport(iata_code)
        if airport is None:
            msg = f"Airport {iata_code.upper()} not found."
            raise click.ClickException(msg)
        for name, value in airport.model_dump(by_alias=True).items():
            click.echo(f"{name:>12}: {value if value else 'No disponible'}")

    _with_store(_show)


@cli.command("history")
@click.option("--clear", is_flag=True, help="Forget all recent searches")
def history(clear: bool) -> None:
    """List recent searches, most recent first."""

    def _list(store: AirportsStore) -> None:
        if clear:
            store.clear_search_history()
            click.echo("Search history cleared.")
            return
        if not store.state.search_history:
            click.echo("No recent searches.")
            return
        for entry in store.state.search_history:
            when = datetime.fromtimestamp(entry.timestamp).isoformat(timespec="seconds")
            click.echo(f"  {when}  {entry.query}")

    _with_store(_list, load=False)


@cli.command("clear-cache")
def clear_cache() -> None:
    """Drop the local airport snapshot; the next command refetches it."""
    _with_store(lambda store: store.clear_cache(), load=False)
    click.echo("Airport cache cleared.")


if __name__ == "__main__":
    cli()
