"""Command-line interface for building the manifesto page."""

import os
from typing import Callable, Optional

import typer
from loguru import logger
from rich.markup import escape

from ...config.settings import settings
from ...errors import BuildError
from ...pipelines import BuildResult, build_from_docx, build_from_markdown
from .common import configure_logging, console, display_warnings

app = typer.Typer(
    name="manifesto-build",
    help="Build the manifesto page from a Markdown or DOCX source",
    add_completion=False,
    pretty_exceptions_enable=False,
)


@app.callback()
def callback(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Show debug logging"
    ),
):
    """Manifesto page builder.

    Converts the source document to HTML and splices it into the page
    template's content region.
    """
    configure_logging(verbose or settings.debug)


def _run(
    build: Callable[..., BuildResult],
    kind: str,
    source: Optional[str],
    template: Optional[str],
    output: Optional[str],
    dry_run: bool,
) -> None:
    try:
        result = build(
            settings, source=source, template=template, output=output, dry_run=dry_run
        )
    except BuildError as e:
        logger.debug(f"{type(e).__name__}: {e}")
        console.print(
            f"[bold red]Error:[/bold red] {escape(str(e))}",
            markup=True,
            highlight=False,
        )
        raise typer.Exit(1)
    except Exception as e:
        logger.exception(e)
        console.print(
            f"[bold red]Error converting {kind}:[/bold red] {escape(str(e))}",
            markup=True,
            highlight=False,
        )
        raise typer.Exit(1)

    display_warnings(result.messages)

    if dry_run:
        typer.echo(result.document)
        return

    console.print(
        f"[bold green]Successfully updated {escape(result.output_path)} "
        f"from {os.path.basename(result.source_path)}[/bold green]"
    )


@app.command("markdown")
def markdown_command(
    source: Optional[str] = typer.Option(
        None, "--source", "-s", help="Markdown source (default: from settings)"
    ),
    template: Optional[str] = typer.Option(
        None, "--template", "-t", help="Page template (default: from settings)"
    ),
    output: Optional[str] = typer.Option(
        None, "--output", "-o", help="Where to write the page (default: the template)"
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Print the page instead of writing it"
    ),
):
    """Build the page from the Markdown source."""
    _run(build_from_markdown, "Markdown", source, template, output, dry_run)


@app.command("docx")
def docx_command(
    source: Optional[str] = typer.Option(
        None, "--source", "-s", help="DOCX source (default: from settings)"
    ),
    template: Optional[str] = typer.Option(
        None, "--template", "-t", help="Page template (default: from settings)"
    ),
    output: Optional[str] = typer.Option(
        None, "--output", "-o", help="Where to write the page (default: the template)"
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Print the page instead of writing it"
    ),
):
    """Build the page from the DOCX source."""
    _run(build_from_docx, "DOCX", source, template, output, dry_run)


@app.command("info")
def show_info():
    """Display the configured paths."""
    console.print("[bold]Build Settings:[/bold]")
    for label, path in [
        ("Markdown Source", settings.markdown_source_path),
        ("DOCX Source", settings.docx_source_path),
        ("Template", settings.template_path),
        ("Output", settings.output_path),
    ]:
        status = "[green]found[/green]" if os.path.exists(path) else "[red]missing[/red]"
        console.print(f"{label}: {path} ({status})", highlight=False)
    console.print(f"Content Region: <{settings.region_tag}>", highlight=False)
    console.print(f"Banner: {settings.banner.src}", highlight=False)


def main():
    """Run the CLI application."""
    app()


if __name__ == "__main__":
    main()
