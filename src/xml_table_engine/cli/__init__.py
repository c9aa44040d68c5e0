"""Command-line interface module for the XML table engine."""

from .main import main

__all__ = ["main"]
