"""Loaders for the manifesto source documents and the page template."""

import os
from pathlib import Path
from typing import Optional

from .errors import MissingInputError

DOCX_EXPORT_HINT = (
    "Please export your Google Doc as .docx and save it as \"{name}\" "
    "in the {folder} folder."
)


def load_markdown_source(file_path: str) -> str:
    """
    Load Markdown text from a file.

    Args:
        file_path: Path to the Markdown source

    Returns:
        The Markdown content as a string

    Raises:
        MissingInputError: If the file doesn't exist
    """
    if not os.path.exists(file_path):
        raise MissingInputError(str(file_path))

    with open(file_path, "r", encoding="utf-8") as f:
        return f.read()


def resolve_docx_source(file_path: str) -> Path:
    """
    Check that the DOCX source exists before handing it to the converter.

    Raises:
        MissingInputError: With instructions for exporting the document
    """
    path = Path(file_path)
    if not path.is_file():
        hint = DOCX_EXPORT_HINT.format(
            name=path.name, folder=path.parent.name or "current"
        )
        raise MissingInputError(str(path), hint=hint)
    return path


def load_template(file_path: str) -> str:
    """Load the destination page template."""
    if not os.path.exists(file_path):
        raise MissingInputError(str(file_path))

    with open(file_path, "r", encoding="utf-8", newline="") as f:
        return f.read()


def write_output(file_path: str, content: str) -> str:
    """
    Write the rendered page, creating parent directories when needed.

    Returns:
        The path that was written
    """
    parent: Optional[str] = os.path.dirname(file_path)
    if parent:
        os.makedirs(parent, exist_ok=True)

    with open(file_path, "w", encoding="utf-8", newline="") as f:
        f.write(content)
    return str(file_path)
