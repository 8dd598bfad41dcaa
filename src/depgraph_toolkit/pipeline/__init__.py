"""
Pipeline module for solution analysis.

Contains descriptor discovery, descriptor parsing, security classification and
the analyzer that runs them in sequence.
"""

from .analyzer import DependencyAnalyzer, analyze_solution
from .descriptor import DescriptorDocument, DescriptorParser
from .discovery import DescriptorLocator
from .security import SecurityClassifier

__all__ = [
    # Discovery and parsing
    "DescriptorLocator",
    "DescriptorParser",
    "DescriptorDocument",
    # Security operations
    "SecurityClassifier",
    # Orchestration
    "DependencyAnalyzer",
    "analyze_solution",
]
