"""
CLI commands for the dependency graph toolkit.
"""

from .analyze import analyze, security
from .layout import layout

__all__ = ["analyze", "security", "layout"]
