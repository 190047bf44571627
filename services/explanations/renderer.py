"""
Jinja2 explanation renderer.

Each formula family has one plain-text template under
services/explanations/templates/. Calculators pass their computed values
(full precision) as the context; the templates convert units and round for
display through the shared filters.
"""

from functools import lru_cache
from pathlib import Path
from typing import Dict, Any
import logging

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from utils.jinja_filters import register_filters

logger = logging.getLogger(__name__)

# Template directory for file-based templates
TEMPLATES_DIR = Path(__file__).parent / "templates"


class ExplanationRenderer:
    """
    Renders natural-language explanations for formula results.

    Templates are compiled on first use and cached by the Jinja2
    environment; rendering itself keeps no state between calls.
    """

    def __init__(self, templates_dir: Path = TEMPLATES_DIR):
        self._env = Environment(
            loader=FileSystemLoader(str(templates_dir)),
            autoescape=select_autoescape(["html", "xml"]),
            undefined=StrictUndefined,
        )
        register_filters(self._env)

    def render(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a file-based explanation template.

        Args:
            template_name: Template filename (e.g., 'ber.txt')
            context: Template variables

        Returns:
            Explanation text with surrounding whitespace stripped
        """
        template = self._env.get_template(template_name)
        return template.render(**context).strip()


@lru_cache(maxsize=1)
def get_renderer() -> ExplanationRenderer:
    """Process-wide renderer instance."""
    return ExplanationRenderer()
