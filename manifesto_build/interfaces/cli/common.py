"""Shared utilities for CLI commands."""

from typing import List

from loguru import logger
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text

# Rich console for pretty output
console = Console()


def configure_logging(verbose: bool = False) -> None:
    """Route loguru output through the rich console."""
    logger.configure(
        handlers=[
            {
                "sink": lambda msg: console.print(
                    f"[dim]{escape(str(msg))}[/dim]", markup=True, highlight=False, end=""
                ),
                "level": "DEBUG" if verbose else "INFO",
                "format": "{level}: {message}\n",
            }
        ]
    )


def display_warnings(messages: List[str]) -> None:
    """Show non-fatal conversion warnings in a panel."""
    if not messages:
        return
    body = "\n".join(f"• {message}" for message in messages)
    console.print(
        Panel(Text(body), title="Conversion warnings", border_style="yellow")
    )
