"""Domain services for relation resolution and placement search."""

from .furnisher import FittingLayout, Furnisher, make_rng
from .placement_search import PlacementSearch
from .relation_resolver import RelationResolver, ResolutionResult

__all__ = [
    "FittingLayout",
    "Furnisher",
    "PlacementSearch",
    "RelationResolver",
    "ResolutionResult",
    "make_rng",
]
