"""CLI entry point for the search subsystem."""

import logging

import click
from rich.console import Console
from rich.table import Table

from .config import load_config
from .models import DOCUMENT_TYPES, SORT_KEYS, RecommendationOptions, SearchQuery

console = Console()


@click.group()
@click.option("--config", "-c", "config_path", default=None, help="Path to config file")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, config_path, verbose):
    """Search, suggestions and related content for the Jean Prouvé corpus."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


def _get_service(ctx):
    from .service import SearchService

    if "service" not in ctx.obj:
        ctx.obj["service"] = SearchService.from_config(load_config(ctx.obj.get("config_path")))
    return ctx.obj["service"]


@cli.command()
@click.argument("term")
@click.option("--type", "types", multiple=True, type=click.Choice(DOCUMENT_TYPES), help="Content type filter")
@click.option("--category", multiple=True, help="Work category filter")
@click.option("--region", multiple=True, help="Scholar region filter")
@click.option("--year-min", type=int, default=None)
@click.option("--year-max", type=int, default=None)
@click.option("--sort", "sort_by", type=click.Choice(SORT_KEYS), default="relevance")
@click.pass_context
def search(ctx, term, types, category, region, year_min, year_max, sort_by):
    """Free-text search across works, scholars, publications and biography."""
    service = _get_service(ctx)
    query = SearchQuery.from_params({
        "q": term,
        "type": list(types),
        "category": list(category),
        "region": list(region),
        "year_min": year_min,
        "year_max": year_max,
        "sort": sort_by,
    })
    results = service.perform_global_search(query)

    if not results:
        console.print(f"[yellow]No results for '{term}'.[/]")
        return

    table = Table(title=f"Search Results: {term}")
    table.add_column("#", style="dim", width=3)
    table.add_column("ID", style="magenta")
    table.add_column("Type")
    table.add_column("Title", style="cyan")
    table.add_column("Score", justify="right", style="green")
    table.add_column("Excerpt", max_width=60)

    for i, r in enumerate(results, 1):
        table.add_row(str(i), r.id, r.type, r.title, f"{r.relevance_score:.1f}", r.excerpt.replace("\n", " "))

    console.print(table)


@cli.command()
@click.argument("partial")
@click.pass_context
def suggest(ctx, partial):
    """Autocomplete suggestions for a partial term."""
    suggestions = _get_service(ctx).get_search_suggestions(partial)
    if not suggestions:
        console.print("[yellow]No suggestions.[/]")
        return
    for s in suggestions:
        console.print(f"  → {s}")


@cli.command()
@click.argument("source_type", type=click.Choice(["work", "scholar", "biography"]))
@click.argument("source_id")
@click.option("--n", "-n", "max_results", default=6, help="Number of recommendations")
@click.option("--include", multiple=True, type=click.Choice(DOCUMENT_TYPES), help="Types to recommend")
@click.pass_context
def recommend(ctx, source_type, source_id, max_results, include):
    """Related content for a work, a scholar or a biography section."""
    service = _get_service(ctx)
    options = RecommendationOptions(max_results=max_results, include_types=list(include) or None)
    handlers = {
        "work": service.get_work_recommendations,
        "scholar": service.get_scholar_recommendations,
        "biography": service.get_biography_recommendations,
    }
    items = handlers[source_type](source_id, options)

    if not items:
        console.print(f"[yellow]No recommendations for {source_type} '{source_id}'.[/]")
        return

    table = Table(title=f"Related to {source_type}: {source_id}")
    table.add_column("ID", style="magenta")
    table.add_column("Type")
    table.add_column("Title", style="cyan")
    table.add_column("Score", justify="right", style="green")
    table.add_column("Reason")

    for item in items:
        table.add_row(item.id, item.type, item.title, f"{item.relevance_score:.3f}", item.reason)

    console.print(table)


@cli.command()
@click.pass_context
def facets(ctx):
    """Show facet definitions and counts over the whole corpus."""
    catalogue = _get_service(ctx).get_global_search_filters()

    for title, group in (("Types", catalogue.types), ("Categories", catalogue.categories), ("Regions", catalogue.regions)):
        table = Table(title=title)
        table.add_column("ID", style="magenta")
        table.add_column("Name", style="cyan")
        table.add_column("Count", justify="right", style="green")
        for facet in group:
            table.add_row(facet.id, facet.name, str(facet.count))
        console.print(table)

    low, high = catalogue.year_range
    console.print(f"\n[bold]Year range:[/] {low} – {high}")


if __name__ == "__main__":
    cli()
