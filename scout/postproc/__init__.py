"""Presentation helpers applied after the pipeline has finished."""

from .report import RULE, render_generated, render_report
from .terminal import format_for_terminal

__all__ = ["RULE", "format_for_terminal", "render_generated", "render_report"]
