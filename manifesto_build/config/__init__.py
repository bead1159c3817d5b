"""Configuration for the manifesto build."""

from .settings import BannerSettings, CitationSettings, Settings, settings

__all__ = ["BannerSettings", "CitationSettings", "Settings", "settings"]
