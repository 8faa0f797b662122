"""Main CLI entry point."""

import asyncio
import sys
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import click

from .. import __version__
from ..config import Config, ConfigManager
from ..core.interfaces import ISearchService, ISessionProvider, IWatchlistService
from ..core.models import AddResult, FilterState, WatchlistStatus
from ..core.models.filters import (
    DEFAULT_MAX_EXTERNAL_RATING,
    DEFAULT_MAX_RUNTIME,
    DEFAULT_MAX_SCORE,
    DEFAULT_MAX_YEAR,
    DEFAULT_MIN_EXTERNAL_RATING,
    DEFAULT_MIN_RUNTIME,
    DEFAULT_MIN_SCORE,
    DEFAULT_MIN_VOTE_COUNT,
    DEFAULT_MIN_YEAR,
    DEFAULT_SORT_BY,
    DEFAULT_SORT_DIRECTION,
    SORT_DIRECTIONS,
    SORT_FIELDS,
)
from ..core.services import Pager, SearchOrchestrator, WatchlistOverlay
from ..infrastructure import Container, setup_logging
from ..utils import CinescopeError, ConfigurationError, SearchServiceError
from ..utils.display import display_rating, format_rating, format_runtime, rating_source

STATUS_CHOICES = [status.value for status in WatchlistStatus]
SCORE_RANGE = click.FloatRange(0, 10)


@click.group()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.version_option(version=__version__, prog_name="cinescope")
@click.pass_context
def cli(ctx: click.Context, config: Optional[Path], verbose: bool) -> None:
    """Cinescope - Search a movie catalog and manage your watchlist."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["config_path"] = config

    # Skip configuration loading for commands that don't need it
    if ctx.invoked_subcommand == "init":
        return

    try:
        config_manager = ConfigManager(config)
        app_config = config_manager.load_config()

        if verbose:
            app_config.logging.level = "DEBUG"
        setup_logging(app_config.logging)

        container = Container(config_manager)
        container.configure_default_services()

        ctx.obj["config"] = app_config
        ctx.obj["container"] = container

    except (ConfigurationError, FileNotFoundError, ValueError) as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)
    except Exception as e:
        click.echo(f"Initialization error: {e}", err=True)
        sys.exit(1)


def filter_options(func: Callable) -> Callable:
    """Attach the search filter options to a command."""
    options = [
        click.option("--query", "-q", default="", help="Text to search for"),
        click.option("--overview", default="", help="Text the overview must contain"),
        click.option("--genre", "genres", multiple=True, help="Genre tag (repeatable)"),
        click.option("--director", default="", help="Director name"),
        click.option("--actor", "actors", multiple=True, help="Actor name (repeatable)"),
        click.option("--min-score", type=SCORE_RANGE, default=DEFAULT_MIN_SCORE),
        click.option("--max-score", type=SCORE_RANGE, default=DEFAULT_MAX_SCORE),
        click.option("--min-rating", type=SCORE_RANGE, default=DEFAULT_MIN_EXTERNAL_RATING),
        click.option("--max-rating", type=SCORE_RANGE, default=DEFAULT_MAX_EXTERNAL_RATING),
        click.option("--min-votes", type=click.IntRange(min=0), default=DEFAULT_MIN_VOTE_COUNT),
        click.option("--min-year", type=int, default=DEFAULT_MIN_YEAR),
        click.option("--max-year", type=int, default=DEFAULT_MAX_YEAR),
        click.option("--min-runtime", type=click.IntRange(min=0), default=DEFAULT_MIN_RUNTIME),
        click.option("--max-runtime", type=click.IntRange(min=0), default=DEFAULT_MAX_RUNTIME),
        click.option("--highly-rated", is_flag=True, help="Only highly rated movies"),
        click.option("--popular", is_flag=True, help="Only popular movies"),
        click.option("--recent", is_flag=True, help="Only recently released movies"),
        click.option("--short", is_flag=True, help="Only short movies"),
        click.option("--foreign/--no-foreign", default=True, help="Include foreign movies"),
        click.option("--sort-by", type=click.Choice(SORT_FIELDS), default=DEFAULT_SORT_BY),
        click.option(
            "--sort-direction", type=click.Choice(SORT_DIRECTIONS), default=DEFAULT_SORT_DIRECTION
        ),
        click.option("--page", type=click.IntRange(min=1), default=1, help="Page number"),
        click.option("--size", type=click.IntRange(min=1), default=None, help="Page size"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def build_filters(config: Config, options: Dict[str, Any]) -> FilterState:
    """Build a filter state from command line options.

    Raises:
        click.BadParameter: If a range has its minimum above its maximum.
    """
    size = options["size"] or config.search.default_page_size
    if size > config.search.max_page_size:
        raise click.BadParameter(
            f"page size must be at most {config.search.max_page_size}", param_hint="--size"
        )

    filters = FilterState(
        query=options["query"].strip(),
        overview=options["overview"].strip(),
        director=options["director"].strip(),
        actors=list(options["actors"]),
        min_score=options["min_score"],
        max_score=options["max_score"],
        min_external_rating=options["min_rating"],
        max_external_rating=options["max_rating"],
        min_vote_count=options["min_votes"],
        min_year=options["min_year"],
        max_year=options["max_year"],
        min_runtime=options["min_runtime"],
        max_runtime=options["max_runtime"],
        highly_rated=options["highly_rated"],
        popular=options["popular"],
        recently_released=options["recent"],
        short_runtime=options["short"],
        search_foreign=options["foreign"],
        sort_by=options["sort_by"],
        sort_direction=options["sort_direction"],
        page=options["page"] - 1,
        size=size,
    )
    for genre in options["genres"]:
        if not filters.is_genre_selected(genre):
            filters.toggle_genre(genre)

    violations = filters.range_violations()
    if violations:
        raise click.BadParameter("; ".join(violations))
    return filters


@cli.command()
@filter_options
@click.pass_context
def search(ctx: click.Context, **options: Any) -> None:
    """Search the catalog. Without filters, lists popular movies."""
    container = ctx.obj["container"]
    filters = build_filters(ctx.obj["config"], options)

    try:
        ok = asyncio.run(_run_search(container, filters))
    except CinescopeError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if not ok:
        sys.exit(1)


@cli.command()
@filter_options
@click.pass_context
def browse(ctx: click.Context, **options: Any) -> None:
    """Browse results interactively: page, resize, add to watchlist."""
    container = ctx.obj["container"]
    filters = build_filters(ctx.obj["config"], options)

    try:
        asyncio.run(_run_browse(container, filters))
    except (KeyboardInterrupt, click.Abort):
        click.echo("\nBye.")
    except CinescopeError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.argument("movie_id", type=int)
@click.option(
    "--status",
    type=click.Choice(STATUS_CHOICES),
    default=WatchlistStatus.WANT_TO_WATCH.value,
    help="Initial watchlist status",
)
@click.pass_context
def add(ctx: click.Context, movie_id: int, status: str) -> None:
    """Add a movie to your watchlist."""
    container = ctx.obj["container"]

    try:
        result = asyncio.run(_run_add(container, movie_id, WatchlistStatus(status)))
    except CinescopeError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if result.redirect_to_login or result.error_message:
        sys.exit(1)


@cli.group()
def watchlist() -> None:
    """Manage your watchlist."""


@watchlist.command("list")
@click.option("--status", type=click.Choice(STATUS_CHOICES), default=None)
@click.option("--page", type=click.IntRange(min=1), default=1, help="Page number")
@click.option("--size", type=click.IntRange(min=1), default=20, help="Page size")
@click.pass_context
def watchlist_list(ctx: click.Context, status: Optional[str], page: int, size: int) -> None:
    """List watchlist entries and counts."""
    container = ctx.obj["container"]
    _require_login(container)
    selected = WatchlistStatus(status) if status else None
    _run_watchlist_action(container, lambda svc: _show_watchlist(svc, selected, page - 1, size))


@watchlist.command("update")
@click.argument("entry_id", type=int)
@click.argument("status", type=click.Choice(STATUS_CHOICES))
@click.pass_context
def watchlist_update(ctx: click.Context, entry_id: int, status: str) -> None:
    """Change the status of a watchlist entry."""
    container = ctx.obj["container"]
    _require_login(container)

    async def action(service: IWatchlistService) -> None:
        entry = await service.update_status(entry_id, WatchlistStatus(status))
        click.echo(f"{entry.movie_title or entry.movie_id}: {entry.status.value}")

    _run_watchlist_action(container, action)


@watchlist.command("notes")
@click.argument("entry_id", type=int)
@click.option("--text", default=None, help="Notes to store on the entry")
@click.option("--public/--private", "is_public", default=None, help="Entry visibility")
@click.pass_context
def watchlist_notes(
    ctx: click.Context, entry_id: int, text: Optional[str], is_public: Optional[bool]
) -> None:
    """Change notes and visibility of a watchlist entry."""
    container = ctx.obj["container"]
    _require_login(container)
    if text is None and is_public is None:
        raise click.UsageError("Nothing to update: pass --text and/or --public/--private")

    async def action(service: IWatchlistService) -> None:
        await service.update_details(entry_id, is_public=is_public, notes=text)
        click.echo(f"Watchlist entry {entry_id} updated")

    _run_watchlist_action(container, action)


@watchlist.command("remove")
@click.argument("entry_id", type=int)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def watchlist_remove(ctx: click.Context, entry_id: int, yes: bool) -> None:
    """Remove an entry from the watchlist."""
    container = ctx.obj["container"]
    _require_login(container)
    if not yes and not click.confirm(f"Remove watchlist entry {entry_id}?"):
        return

    async def action(service: IWatchlistService) -> None:
        await service.remove(entry_id)
        click.echo(f"Removed watchlist entry {entry_id}")

    _run_watchlist_action(container, action)


@cli.command()
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    default=Path.cwd() / "config" / "config.yaml",
    help="Output path for configuration file",
)
def init(output: Path) -> None:
    """Initialize configuration file."""
    try:
        if output.exists():
            if not click.confirm(f"Configuration file {output} already exists. Overwrite?"):
                return

        output.parent.mkdir(parents=True, exist_ok=True)

        ConfigManager.create_default_config(output)
        click.echo(f"Configuration file created at: {output}")
        click.echo("Set CINESCOPE_TOKEN (or api.access_token) to manage your watchlist.")

    except OSError as e:
        click.echo(f"Failed to create configuration: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show configuration and session status."""
    config = ctx.obj["config"]
    container = ctx.obj["container"]
    session = container.get(ISessionProvider)

    click.echo("Cinescope Status")
    click.echo("=" * 40)
    click.echo(f"API: {config.api.base_url}")
    click.echo(f"Page Size: {config.search.default_page_size}")
    click.echo(f"Signed In: {'✓' if session.is_authenticated() else '✗'}")


def _require_login(container: Container) -> None:
    session = container.get(ISessionProvider)
    if not session.is_authenticated():
        click.echo("Please login to manage your watchlist (set CINESCOPE_TOKEN).", err=True)
        sys.exit(1)


def _run_watchlist_action(container: Container, action: Callable) -> None:
    async def run() -> None:
        try:
            await action(container.get(IWatchlistService))
        finally:
            await container.aclose()

    try:
        asyncio.run(run())
    except CinescopeError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


async def _run_search(container: Container, filters: FilterState) -> bool:
    """Run one search and print the page."""
    orchestrator = container.get(SearchOrchestrator)
    try:
        _apply_filters(orchestrator, filters)
        if filters == FilterState(size=filters.size):
            await orchestrator.activate()
        else:
            await orchestrator.refresh()

        await orchestrator.overlay.wait_idle()
        _render_results(orchestrator)
        return not orchestrator.error_message
    finally:
        await container.aclose()


async def _run_browse(container: Container, filters: FilterState) -> None:
    """Interactive result browser."""
    orchestrator = container.get(SearchOrchestrator)
    pager = container.get(Pager)
    session = container.get(ISessionProvider)
    max_size = container.get_config().search.max_page_size

    try:
        _apply_filters(orchestrator, filters)
        if filters == FilterState(size=filters.size):
            await orchestrator.activate()
        else:
            await orchestrator.refresh()

        while True:
            await orchestrator.overlay.wait_idle()
            _render_results(orchestrator)

            command = click.prompt(
                "[n]ext [p]rev [s]ize N [a]dd ID [c]lear [q]uit", default="q", show_default=False
            ).strip()
            verb, _, arg = command.partition(" ")
            verb = verb.lower()

            if verb in ("q", "quit"):
                break
            elif verb in ("n", "next"):
                if not await pager.next_page():
                    click.echo("Already on the last page.")
            elif verb in ("p", "prev"):
                if not await pager.prev_page():
                    click.echo("Already on the first page.")
            elif verb in ("s", "size") and arg.isdigit() and int(arg) > 0:
                if int(arg) > max_size:
                    click.echo(f"Page size must be at most {max_size}.")
                else:
                    await pager.change_page_size(int(arg))
            elif verb in ("a", "add") and arg.isdigit():
                result = await orchestrator.overlay.quick_add(int(arg))
                if result.redirect_to_login:
                    token = click.prompt("Access token", hide_input=True, default="")
                    if token.strip():
                        session.login(token)
                        result = await orchestrator.overlay.quick_add(int(arg))
                await _report_add(container, result)
            elif verb in ("c", "clear"):
                await orchestrator.clear_filters()
            else:
                click.echo(f"Unknown command: {command}")
    finally:
        await container.aclose()


async def _run_add(container: Container, movie_id: int, status: WatchlistStatus) -> AddResult:
    """Quick-add a movie and report what happened."""
    overlay = container.get(WatchlistOverlay)
    try:
        result = await overlay.quick_add(movie_id, status)
        await _report_add(container, result)
        return result
    finally:
        await container.aclose()


async def _report_add(container: Container, result: AddResult) -> None:
    if result.redirect_to_login:
        click.echo("Please login to add movies to your watchlist (set CINESCOPE_TOKEN).", err=True)
    elif result.redirect_to_detail:
        click.echo(f"Movie {result.movie_id} is already on your watchlist.")
        try:
            await _show_movie(container.get(ISearchService), result.movie_id)
        except SearchServiceError as e:
            click.echo(f"Could not load movie {result.movie_id}: {e}", err=True)
    elif result.error_message:
        click.echo(f"Failed to add to watchlist: {result.error_message}", err=True)
    else:
        click.echo(f"Added movie {result.movie_id} to your watchlist.")


async def _show_movie(search_service: ISearchService, movie_id: int) -> None:
    movie = await search_service.get_movie(movie_id)
    if movie is None:
        click.echo(f"Movie {movie_id} not found.")
        return

    click.echo(f"\n{movie.title} ({movie.release_year or '?'})")
    if movie.original_title and movie.original_title != movie.title:
        click.echo(f"  Original title: {movie.original_title}")
    click.echo(
        f"  Rating: {format_rating(display_rating(movie))} ({rating_source(movie)}), "
        f"{movie.vote_count or 0} votes"
    )
    click.echo(f"  Runtime: {format_runtime(movie.runtime)}")
    if movie.director:
        click.echo(f"  Director: {movie.director}")
    if movie.main_stars:
        click.echo(f"  Starring: {', '.join(movie.main_stars)}")
    if movie.genres:
        click.echo(f"  Genres: {', '.join(movie.genres)}")
    if movie.overview:
        click.echo(f"\n  {movie.overview}")


async def _show_watchlist(
    service: IWatchlistService, status: Optional[WatchlistStatus], page: int, size: int
) -> None:
    entries = await service.list_entries(page=page, size=size, status=status)
    stats = await service.get_stats()

    click.echo(
        f"Watchlist: {stats.total_count} total, {stats.want_to_watch_count} to watch, "
        f"{stats.watching_count} watching, {stats.watched_count} watched, "
        f"{stats.not_interested_count} not interested"
    )
    click.echo("-" * 70)
    if not entries.content:
        click.echo("No entries.")
        return
    for entry in entries.content:
        year = entry.movie_release_year or "?"
        click.echo(
            f"  #{entry.id:<6} {entry.movie_title or entry.movie_id} ({year})  "
            f"[{entry.status.value}]"
        )
    click.echo(f"Page {entries.number + 1}/{max(entries.total_pages, 1)}")


def _apply_filters(orchestrator: SearchOrchestrator, filters: FilterState) -> None:
    for name in FilterState.model_fields:
        setattr(orchestrator.filters, name, getattr(filters, name))


def _render_results(orchestrator: SearchOrchestrator) -> None:
    if orchestrator.error_message:
        click.echo(f"Search failed: {orchestrator.error_message}", err=True)
        return

    rows = orchestrator.results_with_status()
    click.echo(
        f"\nPage {orchestrator.filters.page + 1}/{max(orchestrator.total_pages, 1)} "
        f"({orchestrator.total_results} results)"
    )
    click.echo("=" * 70)
    if not rows:
        click.echo("No movies found.")
        return

    for movie, in_watchlist in rows:
        marker = "✓" if in_watchlist else " "
        genres = ", ".join(movie.genres[:3])
        click.echo(
            f"[{marker}] {movie.id:>7}  {movie.title} ({movie.release_year or '?'})  "
            f"{format_rating(display_rating(movie))} {rating_source(movie)}  "
            f"{format_runtime(movie.runtime)}  {genres}"
        )


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
