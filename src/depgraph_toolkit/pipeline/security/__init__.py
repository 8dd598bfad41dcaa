"""
Security operations module.

Contains package security classification.
"""

from .classification import SecurityClassifier, is_old_version, parse_major_version

__all__ = ["SecurityClassifier", "is_old_version", "parse_major_version"]
