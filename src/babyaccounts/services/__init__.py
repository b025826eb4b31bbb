"""Service layer: report view model and display helpers."""

from . import formatting, reports

__all__ = ["formatting", "reports"]
