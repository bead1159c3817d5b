"""Application configuration settings."""

import os
from dataclasses import dataclass, field
from typing import List, Optional, Tuple


def _env_flag(name: str, default: str = "") -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


@dataclass
class BannerSettings:
    """Settings for the banner image placed at the top of the DOCX content."""

    src: str = "banner.png"
    alt: str = "Banner"
    style: str = "width: 100%; height: auto; display: block; margin: 0 auto 30px;"


@dataclass
class CitationSettings:
    """Settings for wrapping trailing footnotes into a references block."""

    css_class: str = "citations"
    heading: str = "References"
    # Evidence that an ordered list holds converted footnotes
    markers: Tuple[str, ...] = ("footnote-", "↑")


@dataclass
class Settings:
    """Application settings container."""

    debug: bool = False

    # Paths, resolved against base_dir
    base_dir: str = "manifesto"
    markdown_source: str = "source.md"
    docx_source: str = "Manifesto of the Anti-AI Movement.docx"
    template: str = "index.html"
    output: Optional[str] = None  # If None, overwrite the template in place

    # Injection
    region_tag: str = "article"

    # Markdown rendering
    markdown_extensions: List[str] = field(
        default_factory=lambda: ["fenced_code", "tables"]
    )

    # DOCX normalization
    banner: BannerSettings = field(default_factory=BannerSettings)
    citations: CitationSettings = field(default_factory=CitationSettings)

    def _resolve(self, name: str) -> str:
        if os.path.isabs(name):
            return name
        return os.path.join(self.base_dir, name)

    @property
    def markdown_source_path(self) -> str:
        return self._resolve(self.markdown_source)

    @property
    def docx_source_path(self) -> str:
        return self._resolve(self.docx_source)

    @property
    def template_path(self) -> str:
        return self._resolve(self.template)

    @property
    def output_path(self) -> str:
        """Where the rendered page is written; defaults to the template."""
        if self.output:
            return self._resolve(self.output)
        return self.template_path

    @classmethod
    def from_environment(cls) -> "Settings":
        """Load settings from environment variables."""
        settings = cls()

        settings.debug = _env_flag("MANIFESTO_DEBUG")

        # Path settings
        settings.base_dir = os.getenv("MANIFESTO_BASE_DIR", settings.base_dir)
        settings.markdown_source = os.getenv(
            "MANIFESTO_MARKDOWN_SOURCE", settings.markdown_source
        )
        settings.docx_source = os.getenv("MANIFESTO_DOCX_SOURCE", settings.docx_source)
        settings.template = os.getenv("MANIFESTO_TEMPLATE", settings.template)
        settings.output = os.getenv("MANIFESTO_OUTPUT") or None

        settings.region_tag = os.getenv("MANIFESTO_REGION_TAG", settings.region_tag)

        if extensions := os.getenv("MANIFESTO_MARKDOWN_EXTENSIONS"):
            settings.markdown_extensions = [
                ext.strip() for ext in extensions.split(",") if ext.strip()
            ]

        # Banner settings
        settings.banner.src = os.getenv("MANIFESTO_BANNER_SRC", settings.banner.src)
        settings.banner.alt = os.getenv("MANIFESTO_BANNER_ALT", settings.banner.alt)

        # Citation settings
        settings.citations.css_class = os.getenv(
            "MANIFESTO_CITATIONS_CLASS", settings.citations.css_class
        )
        settings.citations.heading = os.getenv(
            "MANIFESTO_REFERENCES_HEADING", settings.citations.heading
        )

        return settings


# Default settings instance
settings = Settings.from_environment()
