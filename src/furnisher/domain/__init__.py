"""Domain layer - core placement logic."""

from .catalog import (
    CatalogError,
    Face,
    FaceType,
    FittingCatalog,
    FittingModel,
    FittingType,
    SpatialRelation,
)
from .entities import Door, Fitting, ParticularFace, StaticFace, Wall, Window
from .placement_unit import PlacementUnit
from .room import Room
from .services import (
    FittingLayout,
    Furnisher,
    PlacementSearch,
    RelationResolver,
    ResolutionResult,
)
from .value_objects import (
    BoundingBox3D,
    CellState,
    Direction,
    Facing,
    FittingPlacement,
    LayoutWarning,
    PlacementCandidate,
    RepresentationObject,
    StaticFaceType,
    Vector2D,
    WallConstraint,
    WarningKind,
)

__all__ = [
    "BoundingBox3D",
    "CatalogError",
    "CellState",
    "Direction",
    "Door",
    "Face",
    "FaceType",
    "Facing",
    "Fitting",
    "FittingCatalog",
    "FittingLayout",
    "FittingModel",
    "FittingPlacement",
    "FittingType",
    "Furnisher",
    "LayoutWarning",
    "ParticularFace",
    "PlacementCandidate",
    "PlacementSearch",
    "PlacementUnit",
    "RelationResolver",
    "RepresentationObject",
    "ResolutionResult",
    "Room",
    "SpatialRelation",
    "StaticFace",
    "StaticFaceType",
    "Vector2D",
    "Wall",
    "WallConstraint",
    "WarningKind",
    "Window",
]
