"""CLI for the campus housing search core."""

from __future__ import annotations

from pathlib import Path
from typing import Any, List, Optional
from urllib.parse import urlencode

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .campuses import CampusDirectory
from .config import (
    get_logging_settings,
    get_provider_settings,
    get_search_settings,
    get_storage_settings,
    load_config,
)
from .connectors import CollegeScorecardProvider
from .format import format_amenities, format_beds_baths, format_date_range, format_price, format_room_type
from .geo import format_distance
from .logging_config import setup_logging
from .models import SearchFilters, SearchResult
from .proximity import make_proximity_filter
from .query import build_search_url, parse_filters, to_params, validate_filters
from .search import SearchEngine
from .storage import Storage, export_csv, export_json, load_listings_file
from .suggestions import CampusSuggester

app = typer.Typer(
    name="campus-housing",
    help="Student housing search - find listings near your campus",
)
console = Console()


def _default_seed_file() -> Path:
    return Path(__file__).resolve().parent.parent.parent / "data" / "sample_listings.yaml"


def _load(config_path: Optional[Path]) -> dict[str, Any]:
    """Load config and configure logging, or exit with a message."""
    try:
        cfg = load_config(config_path)
    except FileNotFoundError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    log = get_logging_settings(cfg)
    setup_logging(log.level, log.file)
    return cfg


def _get_storage(cfg: dict[str, Any]) -> Storage:
    return Storage(get_storage_settings(cfg).db_path)


def _build_engine(cfg: dict[str, Any], store: Storage) -> SearchEngine:
    s = get_search_settings(cfg)
    st = get_storage_settings(cfg)
    return SearchEngine(
        store=store,
        directory=CampusDirectory(),
        proximity=make_proximity_filter(s.proximity, s.radius_miles),
        enforce_date_overlap=s.enforce_date_overlap,
        map_radius_miles=s.map_radius_miles,
        store_retries=st.retries,
        store_backoff_seconds=st.backoff_seconds,
    )


def _build_suggester(cfg: dict[str, Any]) -> CampusSuggester:
    s = get_search_settings(cfg)
    p = get_provider_settings(cfg)
    provider = None
    if p.enabled:
        provider = CollegeScorecardProvider(
            base_url=p.base_url,
            timeout_seconds=p.timeout_seconds,
            retries=p.retries,
            backoff_seconds=p.backoff_seconds,
        )
    return CampusSuggester(
        directory=CampusDirectory(),
        provider=provider,
        limit=s.suggestion_limit,
        prefer_live=p.prefer_live,
    )


def _filters_from_options(
    query: Optional[str],
    campus: Optional[str],
    start: Optional[str],
    end: Optional[str],
    min_price: Optional[str],
    max_price: Optional[str],
    room: Optional[str],
    beds: Optional[str],
    baths: Optional[str],
    amenity: Optional[List[str]],
    sort: Optional[str],
) -> SearchFilters:
    """Options override keys from --query; everything goes through parse_filters."""
    overrides = {
        "campus": campus,
        "start": start,
        "end": end,
        "min": min_price,
        "max": max_price,
        "room": room,
        "beds": beds,
        "baths": baths,
        "amenities": ",".join(amenity) if amenity else None,
        "sort": sort,
    }
    params = to_params(parse_filters(query or ""))
    params.update({k: v for k, v in overrides.items() if v})
    return parse_filters(urlencode(params))


def _display_results(result: SearchResult, limit: int = 20) -> None:
    """Display ranked listings table."""
    f = result.filters
    where = result.campus.name if result.campus else "anywhere"
    console.print(f"[bold]{len(result)} listings near {where}[/bold] [dim]({format_date_range(f.start, f.end)})[/dim]")

    for reason in result.degraded:
        console.print(f"[yellow]Note: {reason}[/yellow]")

    if not result.items:
        console.print("[yellow]No listings match these filters.[/yellow]")
        return

    table = Table(title="Search Results")
    table.add_column("Rank", style="dim")
    table.add_column("Title", style="cyan")
    table.add_column("Price", justify="right")
    table.add_column("Room")
    table.add_column("Beds/Baths")
    table.add_column("City", style="dim")
    table.add_column("Distance", justify="right")
    table.add_column("Amenities", style="dim")

    for i, item in enumerate(result.items[:limit], 1):
        l = item.listing
        title = l.title[:35] + "..." if len(l.title) > 35 else l.title
        table.add_row(
            str(i),
            title,
            format_price(l.price),
            format_room_type(l.room_type),
            format_beds_baths(l.bedrooms, l.bathrooms),
            ", ".join(p for p in (l.city, l.state) if p),
            format_distance(item.distance_miles) if item.distance_miles is not None else "-",
            format_amenities(sorted(l.amenities)),
        )

    console.print(table)
    if result.markers:
        console.print(f"[dim]{len(result.markers)} map markers[/dim]")


@app.command()
def seed(
    file: Optional[Path] = typer.Option(None, "--file", "-f", help="YAML/JSON listings file"),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to config.yaml"),
) -> None:
    """Load listings from a file into the listing store."""
    cfg = _load(config_path)
    path = file or _default_seed_file()
    try:
        listings = load_listings_file(path)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    storage = _get_storage(cfg)
    try:
        storage.save_listings(listings)
        total = storage.count()
    finally:
        storage.close()
    console.print(f"[green]Loaded {len(listings)} listings from {path} ({total} in store)[/green]")


@app.command()
def campuses(
    query: str = typer.Argument(..., help="Campus name, city, state or slug"),
    limit: Optional[int] = typer.Option(None, "--limit", "-n", help="Max suggestions"),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to config.yaml"),
) -> None:
    """Suggest campuses for a partial name."""
    cfg = _load(config_path)
    suggester = _build_suggester(cfg)
    if isinstance(limit, int) and limit > 0:
        suggester.limit = limit
    result = suggester.suggest(query)

    for e in result.errors:
        console.print(f"[yellow]Warning: {e}[/yellow]")
    if not result.campuses:
        console.print(f"[yellow]No campuses match {query!r}.[/yellow]")
        return

    table = Table(title=f"Campuses ({result.source})")
    table.add_column("Slug", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("City")
    table.add_column("State")
    table.add_column("Lat/Lng", justify="right", style="dim")
    for c in result.campuses:
        coords = f"{c.lat:.4f}, {c.lng:.4f}" if c.location else "-"
        table.add_row(c.slug or c.id, c.name, c.city or "", c.state or "", coords)
    console.print(table)


@app.command()
def search(
    query: Optional[str] = typer.Option(None, "--query", "-q", help="Query string, e.g. 'campus=harvard&min=1000'"),
    campus: Optional[str] = typer.Option(None, "--campus", help="Campus name or slug"),
    start: Optional[str] = typer.Option(None, "--start", help="Move-in date (YYYY-MM-DD)"),
    end: Optional[str] = typer.Option(None, "--end", help="Move-out date (YYYY-MM-DD)"),
    min_price: Optional[str] = typer.Option(None, "--min", help="Minimum monthly price"),
    max_price: Optional[str] = typer.Option(None, "--max", help="Maximum monthly price"),
    room: Optional[str] = typer.Option(None, "--room", help="entire, private or shared"),
    beds: Optional[str] = typer.Option(None, "--beds", help="Minimum bedrooms"),
    baths: Optional[str] = typer.Option(None, "--baths", help="Minimum bathrooms"),
    amenity: Optional[List[str]] = typer.Option(None, "--amenity", "-a", help="Amenity tag (repeatable, any-of)"),
    sort: Optional[str] = typer.Option(None, "--sort", "-s", help="relevance, price_asc, price_desc, distance, newest"),
    exclude_user: Optional[str] = typer.Option(None, "--exclude-user", help="Hide listings owned by this user id"),
    csv_path: Optional[Path] = typer.Option(None, "--csv", help="Export results to CSV"),
    json_path: Optional[Path] = typer.Option(None, "--json", help="Export results to JSON"),
    limit: int = typer.Option(20, "--limit", "-n", help="Max rows to show"),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to config.yaml"),
) -> None:
    """Search listings in the store."""
    cfg = _load(config_path)
    filters = _filters_from_options(query, campus, start, end, min_price, max_price, room, beds, baths, amenity, sort)

    errors = validate_filters(filters)
    if errors:
        for e in errors:
            console.print(f"[red]{e.field}: {e.message}[/red]")
        raise typer.Exit(1)

    storage = _get_storage(cfg)
    try:
        engine = _build_engine(cfg, storage)
        result = engine.search(filters, exclude_user_id=exclude_user)
    finally:
        storage.close()

    _display_results(result, limit=limit)
    console.print(f"\n[dim]Share: {escape(build_search_url(filters))}[/dim]")

    if csv_path:
        export_csv(result, csv_path)
        console.print(f"  CSV:  {csv_path}")
    if json_path:
        export_json(result, json_path)
        console.print(f"  JSON: {json_path}")


@app.command()
def url(
    campus: Optional[str] = typer.Option(None, "--campus", help="Campus name or slug"),
    start: Optional[str] = typer.Option(None, "--start", help="Move-in date (YYYY-MM-DD)"),
    end: Optional[str] = typer.Option(None, "--end", help="Move-out date (YYYY-MM-DD)"),
    min_price: Optional[str] = typer.Option(None, "--min", help="Minimum monthly price"),
    max_price: Optional[str] = typer.Option(None, "--max", help="Maximum monthly price"),
    room: Optional[str] = typer.Option(None, "--room", help="entire, private or shared"),
    beds: Optional[str] = typer.Option(None, "--beds", help="Minimum bedrooms"),
    baths: Optional[str] = typer.Option(None, "--baths", help="Minimum bathrooms"),
    amenity: Optional[List[str]] = typer.Option(None, "--amenity", "-a", help="Amenity tag (repeatable)"),
    sort: Optional[str] = typer.Option(None, "--sort", "-s", help="Sort option"),
    base_path: str = typer.Option("/search", "--base", help="Path the query string is appended to"),
) -> None:
    """Print the shareable search URL for the given filters."""
    filters = _filters_from_options(None, campus, start, end, min_price, max_price, room, beds, baths, amenity, sort)
    for e in validate_filters(filters):
        console.print(f"[yellow]{e.field}: {e.message}[/yellow]")
    console.print(build_search_url(filters, base_path), soft_wrap=True, highlight=False, markup=False)


if __name__ == "__main__":
    app()
