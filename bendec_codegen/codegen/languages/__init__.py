"""
Language-specific code generators.

This module contains generators for different programming languages.
"""

from .cpp import CppGenerator

__all__ = ["CppGenerator"]
