"""Build the manifesto page from a Markdown or DOCX source document."""

from .errors import (
    BuildError,
    ConversionError,
    MissingInputError,
    MissingTemplateRegionError,
)
from .injector import inject_content, strip_citations
from .normalizer import normalize_docx_html
from .pipelines import BuildResult, build_from_docx, build_from_markdown

__all__ = [
    "BuildError",
    "BuildResult",
    "ConversionError",
    "MissingInputError",
    "MissingTemplateRegionError",
    "build_from_docx",
    "build_from_markdown",
    "inject_content",
    "normalize_docx_html",
    "strip_citations",
]
