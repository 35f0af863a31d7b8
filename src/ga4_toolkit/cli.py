from __future__ import annotations

import json
import logging
from typing import Any, Callable

import typer

from . import analysis
from .api.indexing import inspect_url, remove_from_index, request_indexing, request_indexing_batch
from .client import CredentialError
from .config import load_env
from .schema import RESULT_CATEGORIES
from .storage import get_latest_result, list_results

app = typer.Typer(help="GA4, Search Console and Indexing API toolkit (results saved under results/)")

ANALYSES: dict[str, Callable[..., dict[str, Any]]] = {
    "overview": analysis.site_overview,
    "traffic": analysis.traffic_analysis,
    "content": analysis.content_performance,
    "behavior": analysis.user_behavior,
}


@app.callback()
def app_root(
    env_file: str | None = typer.Option(None, "--env-file", help="Optional .env path with GA4_* settings."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log each API step."),
) -> None:
    """GA4 toolkit commands."""
    load_env(env_file)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _echo_json(payload: Any) -> None:
    typer.echo(json.dumps(payload, ensure_ascii=False, indent=2, default=str))


def _run(action: Callable[[], Any]) -> Any:
    try:
        return action()
    except CredentialError as exc:
        typer.echo(f"Credential error: {exc}", err=True)
        raise typer.Exit(code=1) from exc


def _parse_category(value: str) -> str:
    category = value.strip().lower()
    if category not in RESULT_CATEGORIES:
        raise typer.BadParameter(f"Unknown category {value!r}; expected one of: {', '.join(RESULT_CATEGORIES)}")
    return category


@app.command("analyze")
def analyze_command(
    name: str = typer.Argument(..., help=f"One of: {', '.join(ANALYSES)}"),
    date_range: str | None = typer.Option(None, "--range", help="Shorthand such as 7d. Defaults to GA4_DEFAULT_DATE_RANGE."),
) -> None:
    """Run a named GA4 analysis and print the bundle."""
    runner = ANALYSES.get(name.strip().lower())
    if runner is None:
        raise typer.BadParameter(f"Unknown analysis {name!r}; expected one of: {', '.join(ANALYSES)}")
    _echo_json(_run(lambda: runner(date_range)))


@app.command("live")
def live_command() -> None:
    """Realtime snapshot: active users, pages and events."""
    _echo_json(_run(analysis.live_snapshot))


@app.command("fields")
def fields_command() -> None:
    """List dimensions and metrics available on the property."""
    _echo_json(_run(analysis.get_available_fields))


@app.command("search")
def search_command(
    date_range: str | None = typer.Option(None, "--range", help="Shorthand such as 28d."),
) -> None:
    """Search Console overview: queries, pages, devices and countries."""
    _echo_json(_run(lambda: analysis.search_console_overview(date_range)))


@app.command("inspect")
def inspect_command(url: str = typer.Argument(..., help="Fully qualified page URL.")) -> None:
    """URL Inspection status for one page."""
    _echo_json(_run(lambda: inspect_url(url)))


@app.command("index")
def index_command(
    urls: list[str] = typer.Argument(..., help="One or more page URLs."),
    remove: bool = typer.Option(False, "--remove", help="Send URL_DELETED instead of URL_UPDATED."),
) -> None:
    """Notify the Indexing API about updated or removed pages."""
    if remove:
        _echo_json(_run(lambda: [remove_from_index(url) for url in urls]))
    elif len(urls) == 1:
        _echo_json(_run(lambda: request_indexing(urls[0])))
    else:
        _echo_json(_run(lambda: request_indexing_batch(urls)))


@app.command("results")
def results_command(
    category: str = typer.Argument(..., help=f"One of: {', '.join(RESULT_CATEGORIES)}"),
    limit: int | None = typer.Option(None, "--limit", min=1, help="Maximum number of files to list."),
    operation: str | None = typer.Option(None, "--operation", help="Filter by operation name."),
    latest: bool = typer.Option(False, "--latest", help="Print the newest matching result instead of listing."),
) -> None:
    """List saved results, newest first."""
    selected = _parse_category(category)

    if latest:
        stored = get_latest_result(selected, operation)
        if stored is None:
            typer.echo("No saved results found.", err=True)
            raise typer.Exit(code=1)
        _echo_json(stored.model_dump(mode="json", by_alias=True))
        return

    paths = list_results(selected)
    if operation:
        paths = [path for path in paths if operation in path.name]
    if limit is not None:
        paths = paths[:limit]
    for path in paths:
        typer.echo(str(path))


if __name__ == "__main__":
    app()
