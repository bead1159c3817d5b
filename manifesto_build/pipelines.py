"""The Markdown and DOCX build pipelines."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

from loguru import logger

from .config.settings import Settings, settings as default_settings
from .converters import convert_docx, convert_markdown
from .injector import inject_content, strip_citations
from .loaders import (
    load_markdown_source,
    load_template,
    resolve_docx_source,
    write_output,
)
from .normalizer import normalize_docx_html


@dataclass
class BuildResult:
    """Outcome of a successful build."""

    source_path: str
    document: str
    output_path: Optional[str] = None  # None for a dry run
    messages: List[str] = field(default_factory=list)


def render_markdown(
    source_text: str,
    template: str,
    settings: Settings,
    template_name: Optional[str] = None,
) -> Tuple[str, List[str]]:
    """Render Markdown into the template's content region."""
    result = convert_markdown(source_text, settings.markdown_extensions)
    document = inject_content(
        template, result.html, settings.region_tag, template_name
    )
    return document, result.messages


def render_docx(
    source_path: Path,
    template: str,
    settings: Settings,
    template_name: Optional[str] = None,
) -> Tuple[str, List[str]]:
    """
    Render a DOCX file into the template's content region.

    A references block left by a previous build is removed first, so that
    running the build repeatedly never duplicates it.
    """
    result = convert_docx(source_path)
    fragment = normalize_docx_html(result.html, settings.banner, settings.citations)

    template = strip_citations(template, settings.citations.css_class)
    document = inject_content(
        template, fragment, settings.region_tag, template_name
    )
    return document, result.messages


def _paths(
    settings: Settings,
    source: Optional[str],
    default_source: str,
    template: Optional[str],
    output: Optional[str],
) -> Tuple[str, str, str]:
    source_path = source or default_source
    template_path = template or settings.template_path
    if output:
        output_path = output
    elif template and not settings.output:
        output_path = template
    else:
        output_path = settings.output_path
    return source_path, template_path, output_path


def build_from_markdown(
    settings: Optional[Settings] = None,
    source: Optional[str] = None,
    template: Optional[str] = None,
    output: Optional[str] = None,
    dry_run: bool = False,
) -> BuildResult:
    """
    Build the page from the Markdown source.

    The output is written only once every step has succeeded.

    Raises:
        BuildError: If any input is missing, conversion fails or the
            template has no content region
    """
    settings = settings or default_settings
    source_path, template_path, output_path = _paths(
        settings, source, settings.markdown_source_path, template, output
    )

    logger.info(f"Reading Markdown source {source_path}")
    source_text = load_markdown_source(source_path)
    template_text = load_template(template_path)

    document, messages = render_markdown(
        source_text, template_text, settings, template_path
    )

    if dry_run:
        return BuildResult(source_path=source_path, document=document, messages=messages)

    write_output(output_path, document)
    logger.info(f"Wrote {output_path}")
    return BuildResult(
        source_path=source_path,
        document=document,
        output_path=output_path,
        messages=messages,
    )


def build_from_docx(
    settings: Optional[Settings] = None,
    source: Optional[str] = None,
    template: Optional[str] = None,
    output: Optional[str] = None,
    dry_run: bool = False,
) -> BuildResult:
    """
    Build the page from the DOCX source.

    Raises:
        BuildError: If any input is missing, conversion fails or the
            template has no content region
    """
    settings = settings or default_settings
    source_path, template_path, output_path = _paths(
        settings, source, settings.docx_source_path, template, output
    )

    docx_path = resolve_docx_source(source_path)
    template_text = load_template(template_path)

    logger.info(f"Converting DOCX source {docx_path}")
    document, messages = render_docx(
        docx_path, template_text, settings, template_path
    )

    if dry_run:
        return BuildResult(
            source_path=str(docx_path), document=document, messages=messages
        )

    write_output(output_path, document)
    logger.info(f"Wrote {output_path}")
    return BuildResult(
        source_path=str(docx_path),
        document=document,
        output_path=output_path,
        messages=messages,
    )
