"""Command-line interface for recipebox."""

from __future__ import annotations

import asyncio
import json
from typing import Optional

import httpx
import typer

from recipebox.client.favorites import FavoritesStore
from recipebox.client.fetch import FetchAdapter, RecipeFetchError
from recipebox.client.render import summary_text
from recipebox.client.search import NO_FAVORITES, NO_RESULTS, NO_RESULTS_FOR_QUERY
from recipebox.config import get_settings
from recipebox.db.kv_store import SqliteKeyValueStore
from recipebox.models import RecipeDetail, SearchFilters, SearchQueryDescriptor
from recipebox.server.run import serve as run_server

app = typer.Typer(help="Search recipes through a running recipebox proxy.")


def _http_client() -> httpx.AsyncClient:
    settings = get_settings()
    return httpx.AsyncClient(base_url=settings.proxy_base_url, timeout=settings.upstream_timeout)


def _favorites() -> FavoritesStore:
    return FavoritesStore(SqliteKeyValueStore())


async def _search(descriptor: SearchQueryDescriptor):
    async with _http_client() as client:
        return await FetchAdapter(client).fetch_list(descriptor.to_query_string())


async def _recipe(recipe_id: int) -> RecipeDetail:
    async with _http_client() as client:
        return await FetchAdapter(client).fetch_detail(recipe_id)


def _print_detail(detail: RecipeDetail) -> None:
    typer.secho(detail.title or "Recipe", bold=True)
    servings = detail.servings if detail.servings is not None else "-"
    ready = f"{detail.ready_in_minutes} min" if detail.ready_in_minutes is not None else "-"
    typer.echo(f"Servings: {servings}  Ready in: {ready}")
    if detail.source_url:
        typer.echo(f"Source: {detail.source_url}")

    typer.echo("\nIngredients:")
    if detail.ingredients:
        for ingredient in detail.ingredients:
            typer.echo(f"  - {ingredient.original}")
    else:
        typer.echo("  No ingredients listed")

    typer.echo("\nInstructions:")
    if detail.instruction_steps:
        for step in detail.instruction_steps:
            typer.echo(f"  {step.step_number}. {step.text}")
    elif detail.summary:
        typer.echo(f"  {summary_text(detail.summary)}")
    else:
        typer.echo("  Instructions unavailable")


@app.command()
def search(
    query: str = typer.Argument("", help="Free-text search, e.g. 'pasta'."),
    number: int = typer.Option(12, "--number", "-n", help="Results per page."),
    cuisine: Optional[str] = typer.Option(None, "--cuisine"),
    diet: Optional[str] = typer.Option(None, "--diet"),
    intolerances: Optional[str] = typer.Option(None, "--intolerances"),
    meal_type: Optional[str] = typer.Option(None, "--type", help="Meal type, e.g. 'main course'."),
    as_json: bool = typer.Option(False, "--json", help="Print results as JSON."),
) -> None:
    """
    Search recipes and list them as ``id<TAB>title``; favorites are marked with ``*``.
    """
    descriptor = SearchQueryDescriptor(
        text=query,
        page_size=number,
        filters=SearchFilters(
            cuisine=cuisine, diet=diet, intolerances=intolerances, meal_type=meal_type
        ),
    )
    results = asyncio.run(_search(descriptor))

    if as_json:
        typer.echo(json.dumps([summary.model_dump() for summary in results]))
        return
    if not results:
        message = NO_RESULTS_FOR_QUERY.format(query=query) if query else NO_RESULTS
        typer.echo(message)
        return

    store = _favorites()
    for summary in results:
        marker = "*" if store.is_favorite(summary.id) else " "
        typer.echo(f"{marker} {summary.id}\t{summary.title or 'Untitled'}")


@app.command()
def recipe(
    recipe_id: int = typer.Argument(..., help="Recipe ID to show."),
    as_json: bool = typer.Option(False, "--json", help="Print the recipe as JSON."),
) -> None:
    """Show one recipe's ingredients and instructions."""

    try:
        detail = asyncio.run(_recipe(recipe_id))
    except RecipeFetchError as exc:
        typer.secho(f"Error loading recipe: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc

    if as_json:
        typer.echo(json.dumps(detail.model_dump(mode="json"), indent=2))
        return
    _print_detail(detail)


@app.command()
def favorites() -> None:
    """List favorite recipe ids in the order they were added."""

    store = _favorites()
    if not len(store):
        typer.echo(NO_FAVORITES)
        return
    for recipe_id in store.ids:
        typer.echo(str(recipe_id))


@app.command()
def favorite(recipe_id: int = typer.Argument(..., help="Recipe ID to add or remove.")) -> None:
    """Toggle a recipe in the favorites list."""

    store = _favorites()
    if store.toggle(recipe_id):
        typer.echo(f"Added {recipe_id} to favorites ({len(store)} total).")
    else:
        typer.echo(f"Removed {recipe_id} from favorites ({len(store)} total).")


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", "--host"),
    port: int = typer.Option(8000, "--port"),
    reload: bool = typer.Option(False, "--reload", help="Restart on code changes."),
) -> None:
    """Run the proxy server and pages with uvicorn."""

    run_server(host, port, reload=reload)


def main(argv: Optional[list[str]] = None) -> None:
    """Entry point for the ``recipebox`` console script."""
    app(prog_name="recipebox", args=argv)


if __name__ == "__main__":
    main()
