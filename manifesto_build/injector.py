"""Splicing rendered content into the page template."""

import re
from typing import Optional

from loguru import logger

from .errors import MissingTemplateRegionError


def _region_pattern(tag: str) -> "re.Pattern[str]":
    escaped = re.escape(tag)
    return re.compile(rf"<{escaped}>[\s\S]*?</{escaped}>")


def find_content_region(document: str, tag: str = "article") -> Optional["re.Match[str]"]:
    """Locate the first <tag>...</tag> content region in the document."""
    return _region_pattern(tag).search(document)


def inject_content(
    document: str,
    fragment: str,
    tag: str = "article",
    template_name: Optional[str] = None,
) -> str:
    """
    Replace the content region of a template with a new fragment.

    Only the first region is replaced; everything outside it is kept as is.

    Args:
        document: The template markup
        fragment: The HTML to place inside the region
        tag: Name of the element delimiting the region
        template_name: Used in the error message only

    Returns:
        The document with the new region in place

    Raises:
        MissingTemplateRegionError: If the template has no such region
    """
    match = find_content_region(document, tag)
    if match is None:
        raise MissingTemplateRegionError(tag, template_name)

    region = f"<{tag}>\n{fragment}\n</{tag}>"
    logger.debug(
        f"Replacing <{tag}> region at {match.start()}-{match.end()} "
        f"({len(fragment)} chars of content)"
    )
    return document[: match.start()] + region + document[match.end() :]


def strip_citations(document: str, css_class: str = "citations") -> str:
    """Remove the first references container left over from a previous build."""
    pattern = re.compile(
        rf'<div class="{re.escape(css_class)}">[\s\S]*?</div>'
    )
    match = pattern.search(document)
    if match is None:
        return document

    logger.debug(f"Removing stale .{css_class} block")
    return document[: match.start()] + document[match.end() :]
