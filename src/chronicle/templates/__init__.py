"""Chronicle template rendering.

This module provides Jinja2-based template rendering with deterministic output.
Templates are designed to produce identical output for identical input.
"""

from chronicle.templates.renderer import TEMPLATE_NAME, Template

__all__ = ["TEMPLATE_NAME", "Template"]
