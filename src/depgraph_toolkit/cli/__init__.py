"""
Command-line interface for the dependency graph toolkit.
"""

from .main import cli, main

__all__ = ["cli", "main"]
