#!/usr/bin/env python3
"""Integration tests for the Markdown and DOCX build pipelines."""

import base64
import io

import pytest
from bs4 import BeautifulSoup, Tag
from docx import Document

from manifesto_build import pipelines
from manifesto_build.config.settings import Settings
from manifesto_build.converters import PLACEHOLDER_CLASS, PLACEHOLDER_SRC, ConversionResult
from manifesto_build.errors import (
    ConversionError,
    MissingInputError,
    MissingTemplateRegionError,
)
from manifesto_build.pipelines import build_from_docx, build_from_markdown

PREFIX = "<!DOCTYPE html>\n<html>\n<body>\n<nav>Home</nav>\n"
SUFFIX = "\n<footer>Footer</footer>\n</body>\n</html>\n"
TEMPLATE = PREFIX + "<article>\n<p>Placeholder</p>\n</article>" + SUFFIX

CONVERTED_DOCX = (
    "<h1>Manifesto of the Anti-AI Movement</h1>"
    f'<p>We believe<img class="{PLACEHOLDER_CLASS}" src="{PLACEHOLDER_SRC}" /> '
    'in people.<sup><a href="#footnote-1" id="footnote-ref-1">[1]</a></sup></p>'
    '<p><img src="chart.png" /></p>'
    '<ol><li id="footnote-1"><p> A citation. '
    '<a href="#footnote-ref-1">↑</a></p></li></ol>'
)

PNG_BYTES = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)


@pytest.fixture
def settings(tmp_path):
    """Settings rooted in a temporary manifesto folder."""
    base_dir = tmp_path / "manifesto"
    base_dir.mkdir()
    (base_dir / "index.html").write_text(TEMPLATE, encoding="utf-8")
    return Settings(base_dir=str(base_dir))


@pytest.fixture
def docx_source(settings):
    """An existing (fake) DOCX file whose conversion is stubbed out."""
    with open(settings.docx_source_path, "wb") as f:
        f.write(b"PK")
    return settings.docx_source_path


@pytest.fixture
def fake_converter(monkeypatch):
    """Replace mammoth with a canned conversion result."""
    calls = []

    def fake_convert_docx(path, style_map=None):
        calls.append(path)
        return ConversionResult(
            html=CONVERTED_DOCX,
            messages=["warning: Unrecognised paragraph style: Subtitle"],
        )

    monkeypatch.setattr(pipelines, "convert_docx", fake_convert_docx)
    return calls


def _read(path):
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def _region(document):
    soup = BeautifulSoup(document, "html.parser")
    return soup.find("article")


def test_markdown_build(settings):
    """Test that the Markdown rendering replaces the region."""
    with open(settings.markdown_source_path, "w", encoding="utf-8") as f:
        f.write("# Manifesto\n\nWe *refuse*.\n")

    result = build_from_markdown(settings)

    written = _read(settings.template_path)
    assert result.output_path == settings.template_path
    assert written == result.document
    assert "<h1>Manifesto</h1>" in written
    assert "<em>refuse</em>" in written
    assert "Placeholder" not in written
    assert written.startswith(PREFIX)
    assert written.endswith(SUFFIX)


def test_markdown_missing_source(settings):
    """Test that a missing source aborts without touching the template."""
    with pytest.raises(MissingInputError):
        build_from_markdown(settings)
    assert _read(settings.template_path) == TEMPLATE


def test_markdown_missing_region(settings):
    """Test that a template without a region is left unmodified."""
    template = "<html><body><main>No region</main></body></html>"
    with open(settings.template_path, "w", encoding="utf-8") as f:
        f.write(template)
    with open(settings.markdown_source_path, "w", encoding="utf-8") as f:
        f.write("Text")

    with pytest.raises(MissingTemplateRegionError):
        build_from_markdown(settings)
    assert _read(settings.template_path) == template


def test_markdown_explicit_output(settings, tmp_path):
    """Test writing to an explicit output target."""
    with open(settings.markdown_source_path, "w", encoding="utf-8") as f:
        f.write("Hello")
    output = str(tmp_path / "dist" / "index.html")

    result = build_from_markdown(settings, output=output)

    assert result.output_path == output
    assert "<p>Hello</p>" in _read(output)
    assert _read(settings.template_path) == TEMPLATE


def test_markdown_dry_run(settings):
    """Test that a dry run renders without writing."""
    with open(settings.markdown_source_path, "w", encoding="utf-8") as f:
        f.write("Hello")

    result = build_from_markdown(settings, dry_run=True)

    assert result.output_path is None
    assert "<p>Hello</p>" in result.document
    assert _read(settings.template_path) == TEMPLATE


def test_docx_build(settings, docx_source, fake_converter):
    """Test the full DOCX pipeline with a stubbed converter."""
    result = build_from_docx(settings)

    written = _read(settings.template_path)
    assert [str(path) for path in fake_converter] == [docx_source]
    assert result.messages == ["warning: Unrecognised paragraph style: Subtitle"]
    assert written.startswith(PREFIX)
    assert written.endswith(SUFFIX)

    article = _region(written)
    images = article.find_all("img")
    assert len(images) == 1
    first = next(node for node in article.contents if isinstance(node, Tag))
    assert first is images[0]
    assert first["src"] == "banner.png"

    citations = article.find("div", class_="citations")
    assert citations.find("h2").get_text() == "References"
    assert "A citation." in citations.get_text()


def test_docx_build_twice_no_duplicate_citations(settings, docx_source, fake_converter):
    """Test that rebuilding does not duplicate the references container."""
    build_from_docx(settings)
    first = _read(settings.template_path)
    build_from_docx(settings)
    second = _read(settings.template_path)

    assert second.count('<div class="citations">') == 1
    assert second == first


def test_docx_build_removes_stale_citations(settings, docx_source, fake_converter):
    """Test that a references block outside the region is removed."""
    template = (
        PREFIX
        + "<article>\n<p>Old</p>\n</article>\n"
        + '<div class="citations"><h2>References</h2><ol><li>Stale</li></ol></div>'
        + SUFFIX
    )
    with open(settings.template_path, "w", encoding="utf-8") as f:
        f.write(template)

    build_from_docx(settings)

    written = _read(settings.template_path)
    assert "Stale" not in written
    assert written.count('<div class="citations">') == 1


def test_docx_missing_source(settings, fake_converter):
    """Test that a missing DOCX aborts before conversion."""
    with pytest.raises(MissingInputError) as exc_info:
        build_from_docx(settings)
    assert "export your Google Doc" in str(exc_info.value)
    assert fake_converter == []
    assert _read(settings.template_path) == TEMPLATE


def test_docx_conversion_failure(settings, docx_source, monkeypatch):
    """Test that a conversion failure leaves the template untouched."""

    def failing_convert_docx(path, style_map=None):
        raise ConversionError("Error converting DOCX: corrupt archive")

    monkeypatch.setattr(pipelines, "convert_docx", failing_convert_docx)

    with pytest.raises(ConversionError):
        build_from_docx(settings)
    assert _read(settings.template_path) == TEMPLATE


def test_docx_missing_region(settings, docx_source, fake_converter):
    """Test that a template without a region is left unmodified."""
    template = '<html><body><div class="citations">keep</div></body></html>'
    with open(settings.template_path, "w", encoding="utf-8") as f:
        f.write(template)

    with pytest.raises(MissingTemplateRegionError):
        build_from_docx(settings)
    assert _read(settings.template_path) == template


def test_docx_build_real_document(settings):
    """Test the DOCX pipeline end to end with a document containing an image."""
    document = Document()
    document.add_heading("Manifesto", level=0)
    document.add_paragraph("First principle.")
    document.add_picture(io.BytesIO(PNG_BYTES))
    document.save(settings.docx_source_path)

    build_from_docx(settings)

    article = _region(_read(settings.template_path))
    images = article.find_all("img")
    assert len(images) == 1
    assert images[0]["src"] == "banner.png"
    assert article.find("h1").get_text() == "Manifesto"
    assert PLACEHOLDER_SRC not in str(article)
