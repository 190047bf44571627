"""
Natural-language explanations for formula results.
"""

from .renderer import ExplanationRenderer, get_renderer, TEMPLATES_DIR

__all__ = [
    "ExplanationRenderer",
    "get_renderer",
    "TEMPLATES_DIR",
]
