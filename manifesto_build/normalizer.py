"""Normalization of the HTML that mammoth produces from the DOCX source."""

from typing import Optional

from bs4 import BeautifulSoup, Tag
from bs4.element import Comment, NavigableString

from .config.settings import BannerSettings, CitationSettings
from .converters import PLACEHOLDER_CLASS


def _remove_placeholder_images(soup: BeautifulSoup) -> None:
    """Remove images the converter replaced with a placeholder."""
    for img in soup.find_all("img", class_=PLACEHOLDER_CLASS):
        img.decompose()


def _remove_images(soup: BeautifulSoup) -> None:
    """Remove every remaining image; nothing from the source document survives."""
    for img in soup.find_all("img"):
        img.decompose()


def _strip_leading_whitespace(soup: BeautifulSoup) -> None:
    while soup.contents:
        first = soup.contents[0]
        if isinstance(first, NavigableString) and not first.strip():
            first.extract()
        else:
            break


def _insert_banner(soup: BeautifulSoup, banner: BannerSettings) -> None:
    """Put the banner image at the very top, ahead of any title heading."""
    _strip_leading_whitespace(soup)

    banner_tag = soup.new_tag(
        "img", attrs={"src": banner.src, "alt": banner.alt, "style": banner.style}
    )
    soup.insert(0, banner_tag)
    soup.insert(1, "\n")


def _trailing_block(soup: BeautifulSoup) -> Optional[Tag]:
    """
    Return the last top-level element of the fragment.

    Whitespace and comments are skipped. Trailing text means the fragment does
    not end with a block, so None is returned.
    """
    for node in reversed(soup.contents):
        if isinstance(node, Tag):
            return node
        if isinstance(node, Comment):
            continue
        if isinstance(node, NavigableString) and node.strip():
            return None
    return None


def _is_footnote_list(element: Tag, citations: CitationSettings) -> bool:
    if element.name != "ol":
        return False
    markup = str(element)
    return any(marker in markup for marker in citations.markers)


def _wrap_footnotes(soup: BeautifulSoup, citations: CitationSettings) -> bool:
    """
    Wrap a trailing footnote list in a labelled references container.

    Returns True if a list was wrapped.
    """
    footnotes = _trailing_block(soup)
    if footnotes is None or not _is_footnote_list(footnotes, citations):
        return False

    container = soup.new_tag("div", attrs={"class": citations.css_class})
    heading = soup.new_tag("h2")
    heading.string = citations.heading

    footnotes.wrap(container)
    container.insert(0, "\n")
    container.insert(1, heading)
    container.insert(2, "\n")
    container.append("\n")
    return True


def normalize_docx_html(
    html: str,
    banner: Optional[BannerSettings] = None,
    citations: Optional[CitationSettings] = None,
) -> str:
    """
    Clean up converted DOCX HTML before it is injected into the page.

    This includes:
    - Removing placeholder images and then every other image
    - Prepending the banner image as the first element
    - Wrapping trailing footnotes in a references container

    Applying this to its own output gives the same result.

    Args:
        html: The fragment produced by the DOCX converter
        banner: Banner image settings
        citations: Footnote detection and references container settings

    Returns:
        The normalized HTML fragment
    """
    banner = banner or BannerSettings()
    citations = citations or CitationSettings()

    soup = BeautifulSoup(html, "html.parser")

    _remove_placeholder_images(soup)
    _remove_images(soup)
    _insert_banner(soup, banner)
    _wrap_footnotes(soup, citations)

    return str(soup)
