"""
Test fixtures package for hashtree tests.

This package provides factory functions for creating test objects:
- trees.py: element sequences, trees and hand-computed expected levels

Usage:
    from fixtures import make_elements, make_tree

    def test_something():
        tree = make_tree(5)
"""

from .trees import (
    SCENARIO_ELEMENTS,
    make_elements,
    make_tree,
    manual_levels,
)

__all__ = [
    "SCENARIO_ELEMENTS",
    "make_elements",
    "make_tree",
    "manual_levels",
]
