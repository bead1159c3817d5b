"""Errors raised by the manifesto build pipelines."""

from typing import Optional


class BuildError(Exception):
    """Base class for every failure that aborts a build."""


class MissingInputError(BuildError):
    """A source document or the destination template does not exist."""

    def __init__(self, path: str, hint: Optional[str] = None):
        self.path = path
        self.hint = hint
        message = f"Source file not found at {path}"
        if hint:
            message = f"{message}\n{hint}"
        super().__init__(message)


class MissingTemplateRegionError(BuildError):
    """The destination template has no content region to replace."""

    def __init__(self, tag: str, template: Optional[str] = None):
        self.tag = tag
        self.template = template
        where = f" in {template}" if template else ""
        super().__init__(f"Could not find <{tag}> tag{where}")


class ConversionError(BuildError):
    """The Markdown or DOCX converter raised while rendering a source."""
