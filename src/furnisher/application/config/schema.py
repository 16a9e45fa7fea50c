"""Pydantic configuration schema models for fitting catalogs and placement requests.

This module defines the schema of the two JSON documents the application
reads: the fitting database (face types, fitting types and fitting models) and
a placement request (room description plus the fitting models to place). It
uses Pydantic v2 for validation and serialization.

Cross references between catalog entries are resolved when the catalog is
built, see ``config_to_catalog``.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# Supported schema versions for configuration files
# Version 1.0: Initial schema with catalog, room and placement request
SUPPORTED_VERSIONS: frozenset[str] = frozenset({"1.0"})

RESERVED_FACE_TYPE_IDS: frozenset[str] = frozenset({"wall", "door", "window"})


def _check_schema_version(v: str) -> str:
    if v in SUPPORTED_VERSIONS:
        return v

    # Newer minor versions of a supported major version are accepted
    major_version = int(v.split(".")[0])
    supported_majors = {int(sv.split(".")[0]) for sv in SUPPORTED_VERSIONS}
    if major_version in supported_majors:
        return v

    raise ValueError(
        f"Unsupported schema version '{v}'. "
        f"Supported versions: {sorted(SUPPORTED_VERSIONS)}"
    )


def _find_duplicates(ids: list[str]) -> list[str]:
    seen: set[str] = set()
    duplicates: list[str] = []
    for item in ids:
        if item in seen and item not in duplicates:
            duplicates.append(item)
        seen.add(item)
    return duplicates


class FacingConfig(str, Enum):
    """Side of a fitting for configuration.

    This enum mirrors the domain Facing but uses string values for JSON
    serialization compatibility.
    """

    RIGHT = "right"
    BACK = "back"
    LEFT = "left"
    FRONT = "front"


# =============================================================================
# Fitting Catalog
# =============================================================================


class SpatialRelationConfig(BaseModel):
    """A relation a face type can satisfy as an attacher.

    Attributes:
        support_face_type: Id of the face type to attach to. ``wall`` makes
            this a wall relation.
        distance: Gap between the attacher face and the support face in meters.
    """

    model_config = ConfigDict(extra="forbid")

    support_face_type: str = Field(..., min_length=1)
    distance: float = Field(default=0.0, ge=0, description="Gap in meters")


class FaceTypeConfig(BaseModel):
    """Configuration for a declared face type.

    Attributes:
        id: Unique face type id. ``wall``, ``door`` and ``window`` are built in.
        relations: Relations faces of this type satisfy as attachers, in
            order of preference.
    """

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., min_length=1)
    relations: list[SpatialRelationConfig] = Field(default_factory=list)

    @field_validator("id")
    @classmethod
    def validate_not_reserved(cls, v: str) -> str:
        """Validate that the id does not shadow a built-in face type."""
        if v in RESERVED_FACE_TYPE_IDS:
            raise ValueError(f"Face type id '{v}' is reserved")
        return v


class FaceConfig(BaseModel):
    """One semantic face of a fitting type."""

    model_config = ConfigDict(extra="forbid")

    facing: FacingConfig
    face_type: str = Field(..., min_length=1)


class FittingTypeConfig(BaseModel):
    """Configuration for a fitting type such as a sofa or a floor lamp.

    Attributes:
        id: Unique fitting type id.
        faces: Semantic faces of the type. Sides without an entry carry no
            relations.
    """

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., min_length=1)
    faces: list[FaceConfig] = Field(default_factory=list)

    @field_validator("faces")
    @classmethod
    def validate_unique_facings(cls, v: list[FaceConfig]) -> list[FaceConfig]:
        """Validate that each side has at most one face."""
        duplicates = _find_duplicates([face.facing.value for face in v])
        if duplicates:
            raise ValueError(f"Duplicate faces for sides: {', '.join(duplicates)}")
        return v


class BoundingBoxConfig(BaseModel):
    """Fitting dimensions in meters, in the default orientation."""

    model_config = ConfigDict(extra="forbid")

    width: float = Field(..., gt=0, description="Extent along X")
    depth: float = Field(..., gt=0, description="Extent along Y")
    height: float = Field(..., gt=0, description="Extent along Z")


class ClearanceAreaConfig(BaseModel):
    """Clearance area on one side of a fitting model.

    Attributes:
        side: Side the clearance area extends from.
        perpendicular_length: Depth of the clearance area in meters. Entries
            of zero are ignored.
    """

    model_config = ConfigDict(extra="forbid")

    side: FacingConfig
    perpendicular_length: float = Field(..., ge=0)


class FittingModelConfig(BaseModel):
    """Configuration for a concrete fitting model.

    Attributes:
        id: Unique model id, used in placement requests.
        fitting_type: Id of the fitting type.
        bounding_box: Model dimensions.
        clearance_areas: Clearance areas, at most one per side.
    """

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., min_length=1)
    fitting_type: str = Field(..., min_length=1)
    bounding_box: BoundingBoxConfig
    clearance_areas: list[ClearanceAreaConfig] = Field(default_factory=list)

    @field_validator("clearance_areas")
    @classmethod
    def validate_unique_sides(cls, v: list[ClearanceAreaConfig]) -> list[ClearanceAreaConfig]:
        """Validate that each side has at most one clearance area."""
        duplicates = _find_duplicates([area.side.value for area in v])
        if duplicates:
            raise ValueError(f"Duplicate clearance areas for sides: {', '.join(duplicates)}")
        return v


class CatalogConfig(BaseModel):
    """Root configuration model for a fitting database.

    Attributes:
        schema_version: Version string in format "major.minor" (e.g., "1.0")
        face_types: Declared face types
        fitting_types: Declared fitting types
        fitting_models: Declared fitting models

    Example:
        >>> config = CatalogConfig(
        ...     schema_version="1.0",
        ...     face_types=[FaceTypeConfig(id="seat")],
        ... )
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(default="1.0", pattern=r"^\d+\.\d+$")
    face_types: list[FaceTypeConfig] = Field(default_factory=list)
    fitting_types: list[FittingTypeConfig] = Field(default_factory=list)
    fitting_models: list[FittingModelConfig] = Field(default_factory=list)

    @field_validator("schema_version")
    @classmethod
    def validate_supported_version(cls, v: str) -> str:
        """Validate that schema version is supported."""
        return _check_schema_version(v)

    @model_validator(mode="after")
    def validate_unique_ids(self) -> "CatalogConfig":
        """Validate that ids are unique within each section."""
        for section, ids in (
            ("face_types", [entry.id for entry in self.face_types]),
            ("fitting_types", [entry.id for entry in self.fitting_types]),
            ("fitting_models", [entry.id for entry in self.fitting_models]),
        ):
            duplicates = _find_duplicates(ids)
            if duplicates:
                raise ValueError(f"Duplicate ids in {section}: {', '.join(duplicates)}")
        return self


# =============================================================================
# Room and Placement Request
# =============================================================================


class StaticFaceConfig(BaseModel):
    """Common fields of doors and windows.

    The inward direction is given either as a quarter-turn index (0 = +X,
    1 = +Y, 2 = -X, 3 = -Y) or as an angle in radians, but not both.

    Attributes:
        x: Center X position, origin at the room center.
        y: Center Y position, origin at the room center.
        breadth: Width of the opening in meters.
        inward_direction: Direction pointing into the room, 0 to 3.
        inward_angle: Direction pointing into the room, in radians.
        height: Optional height of the opening in meters.
    """

    model_config = ConfigDict(extra="forbid")

    x: float
    y: float
    breadth: float = Field(..., gt=0)
    inward_direction: int | None = Field(default=None, ge=0, le=3)
    inward_angle: float | None = None
    height: float | None = Field(default=None, gt=0)

    @model_validator(mode="after")
    def validate_single_direction(self) -> "StaticFaceConfig":
        """Validate that exactly one of inward_direction and inward_angle is set."""
        if (self.inward_direction is None) == (self.inward_angle is None):
            raise ValueError("Specify exactly one of inward_direction or inward_angle")
        return self


class DoorConfig(StaticFaceConfig):
    """Configuration for a door. Its clearance area is as deep as its breadth."""


class WindowConfig(StaticFaceConfig):
    """Configuration for a window.

    Attributes:
        elevation: Optional sill height in meters. Fittings lower than the
            sill may stand in front of the window.
    """

    elevation: float | None = Field(default=None, ge=0)


class RoomConfig(BaseModel):
    """Configuration for a rectangular room.

    Attributes:
        width: Extent along X in meters
        depth: Extent along Y in meters
        height: Ceiling height in meters
        grid_cell_size: Edge length of an occupancy grid cell in meters
        doors: Doors of the room
        windows: Windows of the room
    """

    model_config = ConfigDict(extra="forbid")

    width: float = Field(..., gt=0)
    depth: float = Field(..., gt=0)
    height: float = Field(default=2.6, gt=0)
    grid_cell_size: float = Field(default=0.1, gt=0)
    doors: list[DoorConfig] = Field(default_factory=list)
    windows: list[WindowConfig] = Field(default_factory=list)


class PlacementRequestConfig(BaseModel):
    """Root configuration model for a placement request.

    Attributes:
        schema_version: Version string in format "major.minor" (e.g., "1.0")
        room: Room to furnish
        fittings: Fitting model ids to place, repeated ids place copies
        seed: Random seed, 0 for time-based randomness
        catalog: Optional fitting database path, relative to the request file
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(default="1.0", pattern=r"^\d+\.\d+$")
    room: RoomConfig
    fittings: list[str] = Field(default_factory=list)
    seed: int = Field(default=0, ge=0)
    catalog: str | None = Field(default=None, description="Fitting database path")

    @field_validator("schema_version")
    @classmethod
    def validate_supported_version(cls, v: str) -> str:
        """Validate that schema version is supported."""
        return _check_schema_version(v)
