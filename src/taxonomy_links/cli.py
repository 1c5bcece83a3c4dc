"""CLI for taxonomy-links (import vocabularies, render indented term links)."""

import json
import sqlite3
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer
from loguru import logger

from taxonomy_links.block import BlockSettings, TaxonomyIndentedLinks
from taxonomy_links.config import DATABASE_FILENAME, TERM_URL_TEMPLATE, resolve_data_directory
from taxonomy_links.core.database.schema import migrate_schema
from taxonomy_links.core.importer.loader import import_source_dir
from taxonomy_links.core.storage.term_storage import SqliteTermStorage
from taxonomy_links.core.tree.flattener import MalformedTreeError, count_items
from taxonomy_links.core.tree.html import render_items_as_html
from taxonomy_links.core.tree.markdown import render_items_as_markdown
from taxonomy_links.links import TermLinkBuilder
from taxonomy_links.logging_config import configure_logging
from taxonomy_links.models.term import items_to_dicts

app = typer.Typer(help="Taxonomy links: render vocabularies as nested lists of term links.")


class OutputFormat(str, Enum):
    markdown = "markdown"
    html = "html"
    json = "json"


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    configure_logging(verbose=verbose)


def _db_path(data_dir: Path | None) -> Path:
    return (data_dir or resolve_data_directory()) / DATABASE_FILENAME


def _open_db(data_dir: Path | None) -> sqlite3.Connection:
    """Open the taxonomy database, raising if it doesn't exist."""
    db_path = _db_path(data_dir)
    if not db_path.exists():
        logger.error("Taxonomy database not found: {}. Run 'import' first.", db_path)
        raise typer.Exit(1)
    return sqlite3.connect(str(db_path))


@app.command(name="import")
def import_cmd(
    source_dir: Path = typer.Argument(..., help="Directory with vocabulary .json files"),
    data_dir: Annotated[
        Path | None,
        typer.Option("--data-dir", "-d", help="Taxonomy database directory"),
    ] = None,
    force: bool = typer.Option(False, "--force", "-f", help="Re-import all files"),
) -> None:
    """Import vocabulary files into the taxonomy database."""
    if not source_dir.is_dir():
        logger.error("Source directory not found: {}", source_dir)
        raise typer.Exit(1)

    db_path = _db_path(data_dir)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(str(db_path))
    try:
        migrate_schema(conn)
        stats = import_source_dir(conn, source_dir, force=force)
        typer.echo(
            f"Imported {stats.vocabularies_imported} vocabularies "
            f"({stats.terms_imported} terms), "
            f"skipped {stats.vocabularies_skipped}"
        )
    finally:
        conn.close()


@app.command()
def vocabularies(
    data_dir: Annotated[
        Path | None,
        typer.Option("--data-dir", "-d", help="Taxonomy database directory"),
    ] = None,
) -> None:
    """List all vocabularies."""
    conn = _open_db(data_dir)
    try:
        storage = SqliteTermStorage(conn)
        vocabs = storage.list_vocabularies()
        typer.echo(f"{len(vocabs)} vocabularies:\n")
        for vocab in vocabs:
            typer.echo(f"  {vocab.name} [vid={vocab.vid}] - {storage.count_terms(vocab.vid)} terms")
    finally:
        conn.close()


@app.command()
def tree(
    vid: str = typer.Argument(..., help="Vocabulary machine name"),
    parent: Annotated[
        str,
        typer.Option("--parent", "-p", help="Term id to use as the top of the tree"),
    ] = "",
    output_format: Annotated[
        OutputFormat,
        typer.Option("--format", "-F", help="Output format"),
    ] = OutputFormat.markdown,
    url_template: Annotated[
        str,
        typer.Option("--url-template", "-u", help="Term URL pattern, e.g. /taxonomy/term/{tid}"),
    ] = TERM_URL_TEMPLATE,
    data_dir: Annotated[
        Path | None,
        typer.Option("--data-dir", "-d", help="Taxonomy database directory"),
    ] = None,
) -> None:
    """Render a vocabulary (or a term's subtree) as indented links."""
    settings = BlockSettings.from_form({"vocabulary_vid": vid, "term_tid": parent})
    conn = _open_db(data_dir)
    try:
        storage = SqliteTermStorage(conn)
        if storage.get_vocabulary(settings.vocabulary_vid) is None:
            logger.error("Vocabulary '{}' not found.", settings.vocabulary_vid)
            raise typer.Exit(1)

        block = TaxonomyIndentedLinks(
            storage, settings, item_builder=TermLinkBuilder(url_template)
        )
        try:
            items = block.get_indented_items(settings.vocabulary_vid, settings.term_tid)
        except MalformedTreeError as e:
            logger.error("Cannot render {}: {}", settings.vocabulary_vid, e)
            raise typer.Exit(1) from e
    finally:
        conn.close()

    logger.debug("Rendering {} items as {}", count_items(items), output_format.value)
    if output_format is OutputFormat.json:
        typer.echo(json.dumps(items_to_dicts(items), indent=2))
    elif not items:
        typer.echo("No terms to render.", err=True)
    elif output_format is OutputFormat.html:
        typer.echo(render_items_as_html(items))
    else:
        typer.echo(render_items_as_markdown(items), nl=False)
