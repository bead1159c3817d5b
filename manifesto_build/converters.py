"""Wrappers around the Markdown and DOCX conversion libraries."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional

import mammoth
import markdown
from loguru import logger

from .errors import ConversionError

# Sentinel class for placeholder images; the normalizer strips these.
PLACEHOLDER_CLASS = "remove-me"

# 1x1 transparent GIF
PLACEHOLDER_SRC = (
    "data:image/gif;base64,R0lGODlhAQABAIAAAAAAAP///yH5BAEAAAAALAAAAAABAAEAAAIBRAA7"
)

DEFAULT_STYLE_MAP = "\n".join(
    [
        "p[style-name='Title'] => h1:fresh",
        "p[style-name='Heading 1'] => h2:fresh",
        "p[style-name='Heading 2'] => h3:fresh",
        "p[style-name='Heading 3'] => h4:fresh",
        "p[style-name='Quote'] => blockquote:fresh",
    ]
)

DEFAULT_MARKDOWN_EXTENSIONS = ("fenced_code", "tables")


@dataclass
class ConversionResult:
    """HTML produced by a converter plus any non-fatal warnings."""

    html: str
    messages: List[str] = field(default_factory=list)


def convert_markdown(
    text: str, extensions: Optional[Iterable[str]] = None
) -> ConversionResult:
    """
    Render Markdown text to an HTML fragment.

    Args:
        text: The Markdown source
        extensions: Python-Markdown extensions to enable

    Returns:
        The rendered fragment; Markdown rendering produces no warnings
    """
    if extensions is None:
        extensions = DEFAULT_MARKDOWN_EXTENSIONS

    try:
        html = markdown.markdown(text, extensions=list(extensions))
    except Exception as e:
        raise ConversionError(f"Error converting Markdown: {e}") from e

    return ConversionResult(html=html)


def _placeholder_image(image) -> Dict[str, str]:
    """Stand in for every embedded image without reading its bytes."""
    return {"src": PLACEHOLDER_SRC, "class": PLACEHOLDER_CLASS}


def convert_docx(
    path: Path, style_map: str = DEFAULT_STYLE_MAP
) -> ConversionResult:
    """
    Convert a DOCX file to an HTML fragment with mammoth.

    Embedded images come out as placeholder <img> tags marked with
    PLACEHOLDER_CLASS. Footnotes, if present, are emitted by mammoth as a
    trailing <ol>.

    Raises:
        ConversionError: If mammoth fails to read or convert the document
    """
    try:
        with open(path, "rb") as docx_file:
            result = mammoth.convert_to_html(
                docx_file,
                style_map=style_map,
                convert_image=mammoth.images.img_element(_placeholder_image),
            )
    except Exception as e:
        raise ConversionError(f"Error converting DOCX: {e}") from e

    messages = [f"{m.type}: {m.message}" for m in result.messages]
    for message in messages:
        logger.warning(f"Conversion warning: {message}")

    return ConversionResult(html=result.value, messages=messages)
