"""Command-line interface for the manifesto build."""
