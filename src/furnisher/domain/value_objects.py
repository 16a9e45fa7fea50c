"""Value objects for the fitting placement domain."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum, IntEnum


def normalize_rotation(quarter_turns: int) -> int:
    """Normalize a number of counterclockwise quarter turns to 0..3."""
    return quarter_turns % 4


@dataclass(frozen=True)
class Vector2D:
    """2D vector in the floor plane.

    Room coordinates have their origin at the room center; negative values
    are valid.
    """

    x: float
    y: float

    @classmethod
    def zero(cls) -> Vector2D:
        return cls(0.0, 0.0)

    @classmethod
    def unit_x(cls) -> Vector2D:
        return cls(1.0, 0.0)

    @classmethod
    def unit_y(cls) -> Vector2D:
        return cls(0.0, 1.0)

    def __add__(self, other: Vector2D) -> Vector2D:
        return Vector2D(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2D) -> Vector2D:
        return Vector2D(self.x - other.x, self.y - other.y)

    def __neg__(self) -> Vector2D:
        return Vector2D(-self.x, -self.y)

    def __mul__(self, scalar: float) -> Vector2D:
        return Vector2D(self.x * scalar, self.y * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Vector2D:
        return Vector2D(self.x / scalar, self.y / scalar)

    def scale(self, other: Vector2D) -> Vector2D:
        """Element-wise multiplication."""
        return Vector2D(self.x * other.x, self.y * other.y)

    def dot(self, other: Vector2D) -> float:
        return self.x * other.x + self.y * other.y

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def rotated(self, quarter_turns: int, about: Vector2D | None = None) -> Vector2D:
        """Rotate by a number of counterclockwise quarter turns.

        The rotation is exact: coordinates are only swapped and negated.

        Args:
            quarter_turns: Number of 90 degree counterclockwise turns.
            about: Point to rotate around. Defaults to the origin.

        Returns:
            The rotated vector.
        """
        pivot = about if about is not None else Vector2D.zero()
        dx = self.x - pivot.x
        dy = self.y - pivot.y
        turns = normalize_rotation(quarter_turns)
        if turns == 1:
            dx, dy = -dy, dx
        elif turns == 2:
            dx, dy = -dx, -dy
        elif turns == 3:
            dx, dy = dy, -dx
        return Vector2D(dx + pivot.x, dy + pivot.y)

    def __str__(self) -> str:
        return f"({self.x:g}, {self.y:g})"


class Direction(IntEnum):
    """Axis-aligned direction in the floor plane.

    Values count counterclockwise quarter turns from the positive X axis.
    """

    POSITIVE_X = 0
    POSITIVE_Y = 1
    NEGATIVE_X = 2
    NEGATIVE_Y = 3

    def rotated(self, quarter_turns: int) -> Direction:
        return Direction(normalize_rotation(self.value + quarter_turns))

    @property
    def opposite(self) -> Direction:
        return self.rotated(2)

    @property
    def normal(self) -> Vector2D:
        """Unit vector pointing in this direction."""
        return _NORMALS[self.value]

    @property
    def along(self) -> Vector2D:
        """Unit vector along a face pointing in this direction, counterclockwise."""
        return _NORMALS[normalize_rotation(self.value + 1)]

    @classmethod
    def from_radians(cls, angle: float) -> Direction:
        """Convert an angle from the positive X axis to the nearest direction."""
        return cls(normalize_rotation(int(round(angle / (math.pi / 2)))))


_NORMALS = (
    Vector2D(1.0, 0.0),
    Vector2D(0.0, 1.0),
    Vector2D(-1.0, 0.0),
    Vector2D(0.0, -1.0),
)


class Facing(IntEnum):
    """Side of a fitting, irrespective of the fitting's orientation.

    Specified from the default orientation, where the front faces the
    negative Y direction, the back the positive Y direction, the right side
    the positive X direction and the left side the negative X direction.
    """

    RIGHT = 0
    BACK = 1
    LEFT = 2
    FRONT = 3

    @property
    def is_lateral(self) -> bool:
        """True for the left and right sides, whose length is the depth."""
        return self in (Facing.RIGHT, Facing.LEFT)

    @classmethod
    def parse(cls, name: str) -> Facing:
        """Parse a facing name case-insensitively.

        Raises:
            ValueError: If the name is not a known facing.
        """
        try:
            return cls[name.strip().upper()]
        except KeyError:
            valid = ", ".join(f.name.lower() for f in cls)
            raise ValueError(f"Unknown facing '{name}', expected one of: {valid}")


class StaticFaceType(str, Enum):
    """Kinds of static room faces."""

    WALL = "wall"
    DOOR = "door"
    WINDOW = "window"


class CellState(str, Enum):
    """Explicit state of a single floor grid cell.

    Attributes:
        FREE: Unoccupied and without clearance reservations.
        RESERVED: Unoccupied, reserved by one or more clearance areas.
        OCCUPIED: Occupied by a fitting.
        OCCUPIED_UNDER_CLEARANCE: Occupied by a fitting placed under a
            static clearance area with a height allowance.
    """

    FREE = "free"
    RESERVED = "reserved"
    OCCUPIED = "occupied"
    OCCUPIED_UNDER_CLEARANCE = "occupied_under_clearance"


@dataclass(frozen=True)
class BoundingBox3D:
    """Axis-aligned bounding box of a fitting model in its default orientation.

    Attributes:
        width: Extent along X (meters).
        depth: Extent along Y (meters).
        height: Extent along Z (meters).
    """

    width: float
    depth: float
    height: float

    def __post_init__(self) -> None:
        if self.width <= 0 or self.depth <= 0 or self.height <= 0:
            raise ValueError("Bounding box dimensions must be positive")

    @property
    def base_area(self) -> float:
        return self.width * self.depth


@dataclass(frozen=True)
class RepresentationObject:
    """Opaque reference used downstream to render a placed fitting."""

    fitting_model_id: str
    fitting_type_id: str


@dataclass(frozen=True)
class FittingPlacement:
    """Final placement of a fitting in room coordinates.

    Attributes:
        x: Center X position, origin at the room center.
        y: Center Y position, origin at the room center.
        orientation: Counterclockwise rotation in radians.
        representation: Model and type identifiers of the placed fitting.
    """

    x: float
    y: float
    orientation: float
    representation: RepresentationObject

    @classmethod
    def from_quarter_turns(
        cls,
        x: float,
        y: float,
        quarter_turns: int,
        representation: RepresentationObject,
    ) -> FittingPlacement:
        return cls(
            x=x,
            y=y,
            orientation=normalize_rotation(quarter_turns) * math.pi / 2,
            representation=representation,
        )

    @property
    def quarter_turns(self) -> int:
        return normalize_rotation(int(round(self.orientation / (math.pi / 2))))

    @property
    def degrees(self) -> int:
        return self.quarter_turns * 90


@dataclass(frozen=True)
class PlacementCandidate:
    """One entry of a placement unit's domain.

    The unit is first rotated about the room origin by ``rotation`` quarter
    turns, then translated by ``position``.
    """

    position: Vector2D
    rotation: int

    def __post_init__(self) -> None:
        if not 0 <= self.rotation <= 3:
            raise ValueError("Rotation must be in 0..3")


@dataclass(frozen=True)
class WallConstraint:
    """Required distance from a placement unit's origin to a wall plane.

    Attributes:
        direction: Direction from the unit origin towards the wall.
        distance: Signed distance along ``direction`` from the unit origin to
            the wall plane.
    """

    direction: Direction
    distance: float


class WarningKind(str, Enum):
    """Categories of non-fatal layout conditions."""

    UNSATISFIED_RELATION = "unsatisfied_relation"
    INCOMPATIBLE_WALL_CONSTRAINTS = "incompatible_wall_constraints"
    TOO_MANY_WALL_CONSTRAINTS = "too_many_wall_constraints"
    NO_LAYOUT = "no_layout"


@dataclass(frozen=True)
class LayoutWarning:
    """Warning generated during layout generation.

    Represents a non-fatal issue encountered while resolving relations or
    searching for a layout, along with an optional suggestion.

    Attributes:
        kind: Category of the warning.
        message: Description of the warning condition.
        suggestion: Optional suggestion for resolving the warning.
    """

    kind: WarningKind
    message: str
    suggestion: str | None = None
