"""CLI entry point for catalog-tool.

Commands are organized into one subcommand group per entity kind plus a
config group. Every command loads the registry it needs, performs one
operation, saves, and exits with status 1 when the operation was rejected.

Command Structure:
    catalog-tool
    ├── book       create, show, update, delete, list, clear
    ├── movie      create, show, update, delete, list, clear, ratings, genres
    ├── author     create, show, update, delete, list, clear, books
    ├── publisher  create, show, update, delete, list, clear, books
    └── config     show, set-data-dir, clear-data-dir
"""

import json
from enum import Enum
from pathlib import Path
from typing import Annotated, Any, NoReturn

import typer

from catalog_tool import __version__
from catalog_tool.enumerations import GENRE, MOVIE_RATING, Enumeration
from catalog_tool.logging_config import get_logger, setup_logging
from catalog_tool.models import Entity
from catalog_tool.settings import clear_data_dir, get_data_dir, get_store, load_settings, set_data_dir
from catalog_tool.storage import (
    AuthorRegistry,
    BaseRegistry,
    BookRegistry,
    MovieRegistry,
    PublisherRegistry,
    RegistryCorruptedError,
    RegistryError,
    ensure_dir,
    get_config_dir,
    get_settings_path,
)
from catalog_tool.violations import ConstraintViolation

logger = get_logger(__name__)

app = typer.Typer(invoke_without_command=True)
book_app = typer.Typer(help="Manage books: create, read, update, delete, list")
movie_app = typer.Typer(help="Manage movies: create, read, update, delete, list, show codes")
author_app = typer.Typer(help="Manage authors: create, read, update, delete, list")
publisher_app = typer.Typer(help="Manage publishers: create, read, update, delete, list")
config_app = typer.Typer(help="Show and change catalog-tool settings")


class OutputFormat(str, Enum):
    """Output format options."""

    HUMAN = "human"
    JSON = "json"


FormatOption = Annotated[OutputFormat, typer.Option("--format", "-f", help="Output format")]


# =============================================================================
# Version Callback
# =============================================================================


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"catalog-tool version {__version__}")
        raise typer.Exit()


# =============================================================================
# Helper Functions
# =============================================================================


def _load_registry[R: BaseRegistry[Any]](registry_class: type[R]) -> R:
    """Create a registry over the configured store and load it, or exit."""
    registry = registry_class(get_store())
    try:
        registry.retrieve_all()
    except RegistryCorruptedError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    return registry


def _save_or_exit(registry: BaseRegistry[Any]) -> None:
    if not registry.save_all():
        typer.echo(
            f"Error: Could not save the {registry.entity_name} registry to {get_data_dir()}. "
            f"Run with -v for details.",
            err=True,
        )
        raise typer.Exit(1)


def _exit_on_violation(violation: ConstraintViolation) -> NoReturn:
    typer.echo(f"Error: {violation}", err=True)
    raise typer.Exit(1)


def _exit_not_found(registry: BaseRegistry[Any], key: str) -> NoReturn:
    typer.echo(
        f"Error: {registry.entity_name.capitalize()} '{key}' not found. "
        f"Use 'catalog-tool {registry.entity_name} list' to see available entries.",
        err=True,
    )
    raise typer.Exit(1)


def _label_for(name: str) -> str:
    return name.replace("_", " ").capitalize()


def _print_summary(entity: Entity) -> None:
    fields = entity.display_fields()
    fields.pop(entity.key_field, None)
    headline = next(iter(fields.values()), "")
    typer.echo(f"[{entity.key}]: {headline}")


def _print_detail(entity: Entity, output_format: OutputFormat) -> None:
    """Print all set attributes of an entity in the requested format."""
    if output_format == OutputFormat.JSON:
        typer.echo(json.dumps(entity.to_record(), indent=2, ensure_ascii=False))
        return
    typer.echo(f"[{entity.key}]")
    typer.echo("=" * 60)
    for name, value in entity.display_fields().items():
        if name == entity.key_field:
            continue
        if isinstance(value, list):
            value = ", ".join(str(item) for item in value)
        typer.echo(f"{_label_for(name)}: {value}")


def _print_codes(enumeration: Enumeration[Any], output_format: OutputFormat) -> None:
    rows = [
        {"code": member.value, "name": member.name, "label": enumeration.label(member.value)}
        for member in enumeration.members
    ]
    if output_format == OutputFormat.JSON:
        typer.echo(json.dumps(rows, indent=2))
        return
    for row in rows:
        typer.echo(f"{row['code']:>3}  {row['name']:<12} {row['label']}")


def _set_slots(**values: Any) -> dict[str, Any]:
    """Keep only the options that were given on the command line."""
    return {name: value for name, value in values.items() if value is not None}


def _create(registry_class: type[BaseRegistry[Any]], slots: dict[str, Any], output_format: OutputFormat) -> None:
    registry = _load_registry(registry_class)
    result = registry.add(slots)
    if result.violation is not None:
        _exit_on_violation(result.violation)
    entity = result.unwrap()
    _save_or_exit(registry)

    if output_format == OutputFormat.JSON:
        typer.echo(json.dumps({"status": "created", "id": entity.key}))
    else:
        typer.echo(f"Created {registry.entity_name}: {entity.key}")


def _update(registry_class: type[BaseRegistry[Any]], slots: dict[str, Any], output_format: OutputFormat) -> None:
    registry = _load_registry(registry_class)
    result = registry.update(slots)
    if not result.found:
        _exit_not_found(registry, result.key)
    if result.violation is not None:
        _exit_on_violation(result.violation)
    if result.changed:
        _save_or_exit(registry)

    if output_format == OutputFormat.JSON:
        status = "updated" if result.changed else "unchanged"
        typer.echo(json.dumps({"status": status, "id": result.key, "updated": result.updated}))
    elif result.changed:
        typer.echo(f"Updated {registry.entity_name}: {result.key} ({', '.join(result.updated)})")
    else:
        typer.echo(f"No changes for {registry.entity_name}: {result.key}")


def _show(registry_class: type[BaseRegistry[Any]], key: str, output_format: OutputFormat) -> None:
    registry = _load_registry(registry_class)
    entity = registry.get(key)
    if entity is None:
        _exit_not_found(registry, key)
    _print_detail(entity, output_format)


def _delete(
    registry_class: type[BaseRegistry[Any]],
    key: str,
    force: bool,
    output_format: OutputFormat,
) -> None:
    registry = _load_registry(registry_class)
    if not registry.exists(key):
        _exit_not_found(registry, key)

    if not force:
        confirm = typer.confirm(f"Delete {registry.entity_name} '{key}'?")
        if not confirm:
            typer.echo("Cancelled")
            raise typer.Exit(0)

    registry.destroy(key)
    _save_or_exit(registry)

    removed = registry.model_class.normalize_key(key)
    if output_format == OutputFormat.JSON:
        typer.echo(json.dumps({"status": "deleted", "id": removed}))
    else:
        typer.echo(f"Deleted {registry.entity_name}: {removed}")


def _list(
    registry_class: type[BaseRegistry[Any]],
    output_format: OutputFormat,
    count: bool,
) -> None:
    registry = _load_registry(registry_class)
    entities = registry.list_entries()
    _print_entities(entities, registry.entity_name, output_format, count)


def _print_entities(
    entities: list[Any],
    entity_name: str,
    output_format: OutputFormat,
    count: bool = False,
) -> None:
    if count:
        if output_format == OutputFormat.JSON:
            typer.echo(json.dumps({"count": len(entities)}))
        else:
            typer.echo(len(entities))
        return

    if output_format == OutputFormat.JSON:
        typer.echo(json.dumps([e.to_record() for e in entities], indent=2, ensure_ascii=False))
        return
    if not entities:
        typer.echo(f"No {entity_name}s found")
        return
    typer.echo(f"Found {len(entities)} {entity_name}(s):\n")
    for entity in entities:
        _print_summary(entity)


def _clear(registry_class: type[BaseRegistry[Any]], approve: bool, output_format: OutputFormat) -> None:
    registry = _load_registry(registry_class)
    if not approve:
        typer.echo(
            f"Error: This will permanently delete ALL {registry.entity_name}s. "
            f"Use --approve flag to confirm.",
            err=True,
        )
        raise typer.Exit(1)

    try:
        count = registry.clear()
    except RegistryError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    if output_format == OutputFormat.JSON:
        typer.echo(json.dumps({"status": "cleared", "count": count}))
    else:
        typer.echo(f"Cleared {count} {registry.entity_name}(s)")


# =============================================================================
# Main App Callback
# =============================================================================


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose",
            "-v",
            count=True,
            help="Verbosity level: -v=INFO, -vv=DEBUG, -vvv=DEBUG including pydantic",
        ),
    ] = 0,
    _version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = None,
) -> None:
    """Validated registries of books, movies, authors and publishers.

    \b
    SUBCOMMANDS:
        book        Manage books (ISBN, title, year, edition, authors, publisher)
        movie       Manage movies (id, title, release date, rating, genres)
        author      Manage authors (id, name)
        publisher   Manage publishers (name, address)
        config      Show or change the data directory

    \b
    QUICK START:
        catalog-tool book create 0465026567 --title "Gödel, Escher, Bach" --year 1999
        catalog-tool book show 0465026567
        catalog-tool movie create 1 --title "Metropolis" --rating 1 --genre 5
        catalog-tool movie genres

    \b
    DATA STORAGE:
        ~/.config/catalog-tool/books.json       - Book entries
        ~/.config/catalog-tool/movies.json      - Movie entries
        ~/.config/catalog-tool/authors.json     - Author entries
        ~/.config/catalog-tool/publishers.json  - Publisher entries
        Set CATALOG_TOOL_HOME or 'config set-data-dir' to move them.
    """
    setup_logging(verbose)

    if ctx.invoked_subcommand is None:
        logger.info("catalog-tool started")
        typer.echo("catalog-tool - Book, movie, author and publisher registries")
        typer.echo("Use --help for available commands")


# =============================================================================
# BOOK Commands
# =============================================================================


@book_app.command(name="create")
def book_create(
    isbn: Annotated[str, typer.Argument(help="10-character ISBN (e.g., 0465026567)")],
    title: Annotated[str | None, typer.Option("--title", help="Book title (max 50 chars)")] = None,
    year: Annotated[int | None, typer.Option("--year", help="Publication year")] = None,
    edition: Annotated[int | None, typer.Option("--edition", help="Edition number")] = None,
    author_ids: Annotated[
        list[int] | None, typer.Option("--author-id", help="Author ID (repeatable)")
    ] = None,
    publisher: Annotated[str | None, typer.Option("--publisher", help="Publisher name")] = None,
    output_format: FormatOption = OutputFormat.HUMAN,
) -> None:
    """Create a new book.

    \b
    Examples:
        catalog-tool book create 0465026567 --title "Gödel, Escher, Bach" --year 1999
        catalog-tool book create 006251587X --title "Weaving the Web" --year 2000 \\
            --author-id 1 --publisher "Harper"
    """
    logger.info("Creating book: %s", isbn)
    slots = _set_slots(
        isbn=isbn,
        title=title,
        year=year,
        edition=edition,
        author_ids=author_ids,
        publisher_id=publisher,
    )
    _create(BookRegistry, slots, output_format)


@book_app.command(name="show")
def book_show(
    isbn: Annotated[str, typer.Argument(help="ISBN of the book to show")],
    output_format: FormatOption = OutputFormat.HUMAN,
) -> None:
    """Show all fields of a book."""
    _show(BookRegistry, isbn, output_format)


@book_app.command(name="update")
def book_update(
    isbn: Annotated[str, typer.Argument(help="ISBN of the book to update")],
    title: Annotated[str | None, typer.Option("--title", help="Book title")] = None,
    year: Annotated[int | None, typer.Option("--year", help="Publication year")] = None,
    edition: Annotated[
        str | None, typer.Option("--edition", help="Edition number ('' to unset)")
    ] = None,
    author_ids: Annotated[
        list[int] | None, typer.Option("--author-id", help="Author ID (repeatable, replaces list)")
    ] = None,
    clear_authors: Annotated[
        bool, typer.Option("--clear-authors", help="Remove all author IDs")
    ] = False,
    publisher: Annotated[
        str | None, typer.Option("--publisher", help="Publisher name ('' to unset)")
    ] = None,
    output_format: FormatOption = OutputFormat.HUMAN,
) -> None:
    """Update fields of an existing book. Only given options change.

    \b
    Examples:
        catalog-tool book update 0465026567 --edition 2
        catalog-tool book update 0465026567 --edition ""
    """
    logger.info("Updating book: %s", isbn)
    slots = _set_slots(
        isbn=isbn,
        title=title,
        year=year,
        edition=edition,
        author_ids=[] if clear_authors else author_ids,
        publisher_id=publisher,
    )
    _update(BookRegistry, slots, output_format)


@book_app.command(name="delete")
def book_delete(
    isbn: Annotated[str, typer.Argument(help="ISBN of the book to delete")],
    force: Annotated[bool, typer.Option("--force", help="Skip confirmation")] = False,
    output_format: Annotated[
        OutputFormat, typer.Option("--format", help="Output format")
    ] = OutputFormat.HUMAN,
) -> None:
    """Delete a book."""
    logger.info("Deleting book: %s", isbn)
    _delete(BookRegistry, isbn, force, output_format)


@book_app.command(name="list")
def book_list(
    output_format: FormatOption = OutputFormat.HUMAN,
    count: Annotated[bool, typer.Option("--count", "-c", help="Show only the count of books")] = False,
) -> None:
    """List all books sorted by ISBN."""
    _list(BookRegistry, output_format, count)


@book_app.command(name="clear")
def book_clear(
    approve: Annotated[
        bool, typer.Option("--approve", help="Confirm clearing all books (required for safety)")
    ] = False,
    output_format: FormatOption = OutputFormat.HUMAN,
) -> None:
    """Remove all books. Requires --approve."""
    _clear(BookRegistry, approve, output_format)


# =============================================================================
# MOVIE Commands
# =============================================================================


@movie_app.command(name="create")
def movie_create(
    movie_id: Annotated[str, typer.Argument(help="Positive integer movie ID")],
    title: Annotated[str | None, typer.Option("--title", help="Movie title (max 120 chars)")] = None,
    release_date: Annotated[
        str | None, typer.Option("--release-date", help="Release date (YYYY-MM-DD)")
    ] = None,
    rating: Annotated[
        int | None, typer.Option("--rating", help="Rating code, see 'movie ratings'")
    ] = None,
    genres: Annotated[
        list[int] | None, typer.Option("--genre", help="Genre code (repeatable), see 'movie genres'")
    ] = None,
    output_format: FormatOption = OutputFormat.HUMAN,
) -> None:
    """Create a new movie.

    \b
    Examples:
        catalog-tool movie create 1 --title "Metropolis" --release-date 1927-01-10 \\
            --rating 1 --genre 5 --genre 10
    """
    logger.info("Creating movie: %s", movie_id)
    slots = _set_slots(
        movie_id=movie_id,
        title=title,
        release_date=release_date,
        rating=rating,
        genres=genres,
    )
    _create(MovieRegistry, slots, output_format)


@movie_app.command(name="show")
def movie_show(
    movie_id: Annotated[str, typer.Argument(help="ID of the movie to show")],
    output_format: FormatOption = OutputFormat.HUMAN,
) -> None:
    """Show all fields of a movie."""
    _show(MovieRegistry, movie_id, output_format)


@movie_app.command(name="update")
def movie_update(
    movie_id: Annotated[str, typer.Argument(help="ID of the movie to update")],
    title: Annotated[str | None, typer.Option("--title", help="Movie title")] = None,
    release_date: Annotated[
        str | None, typer.Option("--release-date", help="Release date ('' to unset)")
    ] = None,
    rating: Annotated[int | None, typer.Option("--rating", help="Rating code")] = None,
    genres: Annotated[
        list[int] | None, typer.Option("--genre", help="Genre code (repeatable, replaces list)")
    ] = None,
    output_format: FormatOption = OutputFormat.HUMAN,
) -> None:
    """Update fields of an existing movie. Only given options change."""
    logger.info("Updating movie: %s", movie_id)
    slots = _set_slots(
        movie_id=movie_id,
        title=title,
        release_date=release_date,
        rating=rating,
        genres=genres,
    )
    _update(MovieRegistry, slots, output_format)


@movie_app.command(name="delete")
def movie_delete(
    movie_id: Annotated[str, typer.Argument(help="ID of the movie to delete")],
    force: Annotated[bool, typer.Option("--force", help="Skip confirmation")] = False,
    output_format: Annotated[
        OutputFormat, typer.Option("--format", help="Output format")
    ] = OutputFormat.HUMAN,
) -> None:
    """Delete a movie."""
    logger.info("Deleting movie: %s", movie_id)
    _delete(MovieRegistry, movie_id, force, output_format)


@movie_app.command(name="list")
def movie_list(
    output_format: FormatOption = OutputFormat.HUMAN,
    count: Annotated[bool, typer.Option("--count", "-c", help="Show only the count of movies")] = False,
) -> None:
    """List all movies sorted by ID."""
    _list(MovieRegistry, output_format, count)


@movie_app.command(name="clear")
def movie_clear(
    approve: Annotated[
        bool, typer.Option("--approve", help="Confirm clearing all movies (required for safety)")
    ] = False,
    output_format: FormatOption = OutputFormat.HUMAN,
) -> None:
    """Remove all movies. Requires --approve."""
    _clear(MovieRegistry, approve, output_format)


@movie_app.command(name="ratings")
def movie_ratings(output_format: FormatOption = OutputFormat.HUMAN) -> None:
    """List rating codes and their labels."""
    _print_codes(MOVIE_RATING, output_format)


@movie_app.command(name="genres")
def movie_genres(output_format: FormatOption = OutputFormat.HUMAN) -> None:
    """List genre codes and their labels."""
    _print_codes(GENRE, output_format)


# =============================================================================
# AUTHOR Commands
# =============================================================================


@author_app.command(name="create")
def author_create(
    author_id: Annotated[str, typer.Argument(help="Positive integer author ID")],
    name: Annotated[str | None, typer.Option("--name", help="Full name (max 120 chars)")] = None,
    output_format: FormatOption = OutputFormat.HUMAN,
) -> None:
    """Create a new author.

    \b
    Examples:
        catalog-tool author create 1 --name "Douglas Hofstadter"
    """
    logger.info("Creating author: %s", author_id)
    _create(AuthorRegistry, _set_slots(author_id=author_id, name=name), output_format)


@author_app.command(name="show")
def author_show(
    author_id: Annotated[str, typer.Argument(help="ID of the author to show")],
    output_format: FormatOption = OutputFormat.HUMAN,
) -> None:
    """Show all fields of an author."""
    _show(AuthorRegistry, author_id, output_format)


@author_app.command(name="update")
def author_update(
    author_id: Annotated[str, typer.Argument(help="ID of the author to update")],
    name: Annotated[str | None, typer.Option("--name", help="Full name")] = None,
    output_format: FormatOption = OutputFormat.HUMAN,
) -> None:
    """Update the name of an existing author."""
    logger.info("Updating author: %s", author_id)
    _update(AuthorRegistry, _set_slots(author_id=author_id, name=name), output_format)


@author_app.command(name="delete")
def author_delete(
    author_id: Annotated[str, typer.Argument(help="ID of the author to delete")],
    force: Annotated[bool, typer.Option("--force", help="Skip confirmation")] = False,
    output_format: Annotated[
        OutputFormat, typer.Option("--format", help="Output format")
    ] = OutputFormat.HUMAN,
) -> None:
    """Delete an author. Books referring to the author are left unchanged."""
    logger.info("Deleting author: %s", author_id)
    _delete(AuthorRegistry, author_id, force, output_format)


@author_app.command(name="list")
def author_list(
    output_format: FormatOption = OutputFormat.HUMAN,
    count: Annotated[bool, typer.Option("--count", "-c", help="Show only the count of authors")] = False,
) -> None:
    """List all authors sorted by ID."""
    _list(AuthorRegistry, output_format, count)


@author_app.command(name="clear")
def author_clear(
    approve: Annotated[
        bool, typer.Option("--approve", help="Confirm clearing all authors (required for safety)")
    ] = False,
    output_format: FormatOption = OutputFormat.HUMAN,
) -> None:
    """Remove all authors. Requires --approve."""
    _clear(AuthorRegistry, approve, output_format)


@author_app.command(name="books")
def author_books(
    author_id: Annotated[int, typer.Argument(help="Author ID")],
    output_format: FormatOption = OutputFormat.HUMAN,
) -> None:
    """List the books that name this author."""
    registry = _load_registry(BookRegistry)
    _print_entities(registry.books_by_author(author_id), "book", output_format)


# =============================================================================
# PUBLISHER Commands
# =============================================================================


@publisher_app.command(name="create")
def publisher_create(
    name: Annotated[str, typer.Argument(help="Publisher name (max 120 chars)")],
    address: Annotated[str | None, typer.Option("--address", help="Address or city")] = None,
    output_format: FormatOption = OutputFormat.HUMAN,
) -> None:
    """Create a new publisher.

    \b
    Examples:
        catalog-tool publisher create "Basic Books" --address "New York, USA"
    """
    logger.info("Creating publisher: %s", name)
    _create(PublisherRegistry, _set_slots(name=name, address=address), output_format)


@publisher_app.command(name="show")
def publisher_show(
    name: Annotated[str, typer.Argument(help="Name of the publisher to show")],
    output_format: FormatOption = OutputFormat.HUMAN,
) -> None:
    """Show all fields of a publisher."""
    _show(PublisherRegistry, name, output_format)


@publisher_app.command(name="update")
def publisher_update(
    name: Annotated[str, typer.Argument(help="Name of the publisher to update")],
    address: Annotated[str | None, typer.Option("--address", help="Address or city")] = None,
    output_format: FormatOption = OutputFormat.HUMAN,
) -> None:
    """Update the address of an existing publisher."""
    logger.info("Updating publisher: %s", name)
    _update(PublisherRegistry, _set_slots(name=name, address=address), output_format)


@publisher_app.command(name="delete")
def publisher_delete(
    name: Annotated[str, typer.Argument(help="Name of the publisher to delete")],
    force: Annotated[bool, typer.Option("--force", help="Skip confirmation")] = False,
    output_format: Annotated[
        OutputFormat, typer.Option("--format", help="Output format")
    ] = OutputFormat.HUMAN,
) -> None:
    """Delete a publisher. Books referring to it are left unchanged."""
    logger.info("Deleting publisher: %s", name)
    _delete(PublisherRegistry, name, force, output_format)


@publisher_app.command(name="list")
def publisher_list(
    output_format: FormatOption = OutputFormat.HUMAN,
    count: Annotated[
        bool, typer.Option("--count", "-c", help="Show only the count of publishers")
    ] = False,
) -> None:
    """List all publishers sorted by name."""
    _list(PublisherRegistry, output_format, count)


@publisher_app.command(name="clear")
def publisher_clear(
    approve: Annotated[
        bool, typer.Option("--approve", help="Confirm clearing all publishers (required for safety)")
    ] = False,
    output_format: FormatOption = OutputFormat.HUMAN,
) -> None:
    """Remove all publishers. Requires --approve."""
    _clear(PublisherRegistry, approve, output_format)


@publisher_app.command(name="books")
def publisher_books(
    name: Annotated[str, typer.Argument(help="Publisher name")],
    output_format: FormatOption = OutputFormat.HUMAN,
) -> None:
    """List the books published by this publisher."""
    registry = _load_registry(BookRegistry)
    _print_entities(registry.books_by_publisher(name.strip()), "book", output_format)


# =============================================================================
# CONFIG Commands
# =============================================================================


@config_app.command(name="show")
def config_show(output_format: FormatOption = OutputFormat.HUMAN) -> None:
    """Show the configuration directory, settings file and data directory."""
    settings = load_settings()
    info = {
        "config_dir": str(get_config_dir()),
        "settings_file": str(get_settings_path()),
        "data_dir": str(get_data_dir()),
        "data_dir_configured": settings.data_dir is not None,
    }
    if output_format == OutputFormat.JSON:
        typer.echo(json.dumps(info, indent=2))
        return
    for key, value in info.items():
        typer.echo(f"{_label_for(key)}: {value}")


@config_app.command(name="set-data-dir")
def config_set_data_dir(
    path: Annotated[Path, typer.Argument(help="Directory for the registry files")],
) -> None:
    """Store registry files in another directory. Existing files are not moved."""
    target = path.expanduser().resolve()
    try:
        ensure_dir(target)
    except OSError as e:
        typer.echo(f"Error: Cannot create data directory {target}: {e}", err=True)
        raise typer.Exit(1)
    data_dir = set_data_dir(target)
    typer.echo(f"Data directory set to: {data_dir}")


@config_app.command(name="clear-data-dir")
def config_clear_data_dir() -> None:
    """Go back to keeping registry files in the configuration directory."""
    clear_data_dir()
    typer.echo(f"Data directory reset to: {get_data_dir()}")


# =============================================================================
# Register Sub-Apps
# =============================================================================


app.add_typer(book_app, name="book", help="Book management commands")
app.add_typer(movie_app, name="movie", help="Movie management commands")
app.add_typer(author_app, name="author", help="Author management commands")
app.add_typer(publisher_app, name="publisher", help="Publisher management commands")
app.add_typer(config_app, name="config", help="Settings commands")


if __name__ == "__main__":
    app()
