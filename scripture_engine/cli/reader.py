"""CLI commands for resolving references and reading passages."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from scripture_engine.bootstrap import build_default_service_container
from scripture_engine.core.exceptions import AIGatewayError, ApiKeyError, ScriptureEngineError
from scripture_engine.core.models import SECONDARY_LANGUAGE_KEY, AnalysisKind, Translation, VerseRef
from scripture_engine.services import ServiceContainer

app = typer.Typer(name="reader", help="Resolve references and read scripture")
console = Console()


def _get_services() -> ServiceContainer:
    """Get the service container wired to the default adapters."""
    return build_default_service_container()


@app.command("resolve")
def resolve_book(query: str = typer.Argument(..., help="Book name or abbreviation")) -> None:
    """Resolve a book name, abbreviation or prefix."""
    matcher = _get_services().book_matcher
    book = matcher.resolve(query)
    if book is None:
        console.print(f"[red]Unknown book:[/red] {query}")
        suggestions = matcher.suggest(query)
        if suggestions:
            console.print(f"Did you mean: {', '.join(suggestions)}?")
        raise typer.Exit(1)
    console.print(f"[bold]{book.name}[/bold] ({book.abbreviation}), {book.chapters} chapters")


@app.command("parse")
def parse_references(text: str = typer.Argument(..., help="Free text with references")) -> None:
    """List the references found in free text."""
    parser = _get_services().parser
    references = parser.parse(text)
    if not references:
        console.print("[yellow]No references found.[/yellow]")
        raise typer.Exit(1)

    table = Table(title="References")
    table.add_column("Reference", style="cyan")
    table.add_column("Book")
    table.add_column("Chapter", justify="right")
    table.add_column("Verses", justify="right")
    table.add_column("Status")
    for ref in references:
        verses = str(ref.start_verse)
        if ref.end_verse is not None:
            verses = f"{verses}-{ref.end_verse}"
        problem = parser.validate(ref)
        table.add_row(
            ref.label,
            ref.book,
            str(ref.chapter),
            verses,
            f"[red]{problem}[/red]" if problem else "[green]ok[/green]",
        )
    console.print(table)


@app.command("chapter")
def read_chapter(
    book: str = typer.Argument(..., help="Book name or abbreviation"),
    chapter: int = typer.Argument(..., help="Chapter number"),
    secondary: bool = typer.Option(
        False, "--secondary", "-s", help="Show the secondary-language line when available"
    ),
) -> None:
    """Print one chapter, merged across translations."""
    services = _get_services()
    metadata = services.book_matcher.resolve(book)
    if metadata is None:
        console.print(f"[red]Unknown book:[/red] {book}")
        raise typer.Exit(1)
    if metadata.verse_count(chapter) is None:
        console.print(f"[red]Invalid chapter for {metadata.name}.[/red]")
        raise typer.Exit(1)

    try:
        verses = asyncio.run(services.scripture.fetch_chapter(metadata.name, chapter))
    except ScriptureEngineError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e

    console.print(f"\n[bold]{metadata.name} {chapter}[/bold]\n")
    for verse in verses:
        console.print(f"[cyan]{verse.verse}[/cyan] {verse.text[Translation.KJV.value]}")
        line = verse.text.get(SECONDARY_LANGUAGE_KEY)
        if secondary and line:
            console.print(f"   [dim]{line}[/dim]")


@app.command("analyze")
def analyze_verse(
    book: str = typer.Argument(..., help="Book name or abbreviation"),
    chapter: int = typer.Argument(...),
    verse: int = typer.Argument(...),
    kind: AnalysisKind = typer.Option(
        AnalysisKind.CROSS_REFERENCES, "--kind", "-k", help="Analysis to request"
    ),
) -> None:
    """Ask the AI for an analysis of a single verse."""
    services = _get_services()
    metadata = services.book_matcher.resolve(book)
    if metadata is None:
        console.print(f"[red]Unknown book:[/red] {book}")
        raise typer.Exit(1)

    ref = VerseRef(book=metadata.name, chapter=chapter, verse=verse)
    try:
        text = asyncio.run(services.gateway.analyze(ref, kind))
    except (ApiKeyError, AIGatewayError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e

    console.print(f"\n[bold]{kind.value}: {ref.label}[/bold]\n")
    console.print(text)


__all__ = ["app"]
