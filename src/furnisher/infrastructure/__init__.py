"""Infrastructure layer - output formatting."""

from .formatters import GridFormatter, JsonExporter, PlacementListFormatter, WarningFormatter

__all__ = [
    "GridFormatter",
    "JsonExporter",
    "PlacementListFormatter",
    "WarningFormatter",
]
