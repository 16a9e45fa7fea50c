"""Domain entities for fitting placement: static room faces and fittings."""

from __future__ import annotations

from dataclasses import dataclass, field

from .catalog import Face, FaceType, FittingModel, SpatialRelation
from .placement_unit import PlacementUnit
from .value_objects import (
    Direction,
    Facing,
    FittingPlacement,
    StaticFaceType,
    Vector2D,
    normalize_rotation,
)

Area = tuple[Vector2D, Vector2D]

DEFAULT_WALL_HEIGHT = 2.6
DEFAULT_DOOR_HEIGHT = 2.1
DEFAULT_WINDOW_HEIGHT = 1.5
DEFAULT_WINDOW_ELEVATION = 0.8
WINDOW_CLEARANCE_LENGTH = 0.9


def area_from_corners(a: Vector2D, b: Vector2D) -> Area:
    """Build an axis-aligned area from two opposite corners."""
    return (
        Vector2D(min(a.x, b.x), min(a.y, b.y)),
        Vector2D(max(a.x, b.x), max(a.y, b.y)),
    )


@dataclass(frozen=True)
class StaticFace:
    """A static, axis-aligned room face such as a wall, door or window.

    Attributes:
        position: Center position on the floor plane.
        side_length: Breadth of the face in meters.
        inwards_direction: Direction pointing from the face into the room.
        height: Height of the face in meters.
    """

    position: Vector2D
    side_length: float
    inwards_direction: Direction
    height: float

    face_type = StaticFaceType.WALL

    def __post_init__(self) -> None:
        if self.side_length <= 0:
            raise ValueError(f"{self.face_type.value.title()} breadth must be positive")
        if self.height <= 0:
            raise ValueError(f"{self.face_type.value.title()} height must be positive")

    @property
    def clearance_area_length(self) -> float:
        """Perpendicular depth of the clearance area in front of the face."""
        return 0.0

    @property
    def inwards_normal(self) -> Vector2D:
        return self.inwards_direction.normal

    @property
    def vector_along_face(self) -> Vector2D:
        return self.inwards_direction.along

    def clearance_area(self) -> Area:
        """Rectangle in front of the face that must stay clear."""
        half_span = self.vector_along_face * (self.side_length / 2)
        return area_from_corners(
            self.position - half_span,
            self.position + half_span + self.inwards_normal * self.clearance_area_length,
        )


@dataclass(frozen=True)
class Wall(StaticFace):
    height: float = DEFAULT_WALL_HEIGHT

    face_type = StaticFaceType.WALL


@dataclass(frozen=True)
class Door(StaticFace):
    """Door whose clearance area is deep enough for the leaf to swing open."""

    height: float = DEFAULT_DOOR_HEIGHT

    face_type = StaticFaceType.DOOR

    @property
    def clearance_area_length(self) -> float:
        return self.side_length


@dataclass(frozen=True)
class Window(StaticFace):
    """Window with a passage-wide clearance area.

    Fittings lower than the window's elevation may stand in its clearance
    area, as long as no other clearance area overlaps there.

    Attributes:
        elevation: Height of the window sill above the floor in meters.
    """

    height: float = DEFAULT_WINDOW_HEIGHT
    elevation: float = DEFAULT_WINDOW_ELEVATION

    face_type = StaticFaceType.WINDOW

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.elevation < 0:
            raise ValueError("Window elevation must be non-negative")

    @property
    def clearance_area_length(self) -> float:
        return WINDOW_CLEARANCE_LENGTH


class Fitting:
    """A placed instance of a fitting model.

    A fitting starts at the origin in its default orientation, inside its own
    single-member placement unit.
    """

    def __init__(self, fitting_model: FittingModel) -> None:
        self.fitting_model = fitting_model
        self.position = Vector2D.zero()
        self._orientation = 0

        box = fitting_model.bounding_box
        self.faces = [
            ParticularFace(self, face, box.depth if face.facing.is_lateral else box.width)
            for face in fitting_model.fitting_type.faces
        ]

        self.placement_unit = PlacementUnit(self)

    def __repr__(self) -> str:
        return (
            f"Fitting({self.fitting_model.id!r}, position={self.position}, "
            f"orientation={self.orientation})"
        )

    @property
    def orientation(self) -> int:
        """Number of counterclockwise quarter turns from the default orientation."""
        return self._orientation

    @orientation.setter
    def orientation(self, value: int) -> None:
        self._orientation = normalize_rotation(value)

    @property
    def x_length(self) -> float:
        box = self.fitting_model.bounding_box
        return box.width if self.orientation % 2 == 0 else box.depth

    @property
    def y_length(self) -> float:
        box = self.fitting_model.bounding_box
        return box.depth if self.orientation % 2 == 0 else box.width

    @property
    def height(self) -> float:
        return self.fitting_model.bounding_box.height

    def clearance_length_in_direction(self, direction: int) -> float:
        facing = Facing(normalize_rotation(direction - self.orientation))
        return self.fitting_model.clearance_area_length(facing)

    def change_placement_unit(self, placement_unit: PlacementUnit) -> None:
        self.placement_unit = placement_unit

    def translate(self, offset: Vector2D) -> None:
        """Translate this fitting only.

        Usually the whole placement unit should be translated instead.
        """
        self.position = self.position + offset

    def rotate_placement_unit(self, rotation_delta: int) -> None:
        """Rotate this fitting's whole placement unit around this fitting."""
        self.placement_unit.rotate_around(self.position, rotation_delta)

    def rotate_around(self, nave: Vector2D, rotation_delta: int) -> None:
        """Rotate this fitting only, around a position.

        Usually the whole placement unit should be rotated with
        rotate_placement_unit() instead.
        """
        rotation_delta = normalize_rotation(rotation_delta)
        self.orientation = self.orientation + rotation_delta
        self.position = self.position.rotated(rotation_delta, about=nave)

    def footprint(self) -> Area:
        half = Vector2D(self.x_length / 2, self.y_length / 2)
        return (self.position - half, self.position + half)

    def clearance_strips(self) -> list[Area]:
        """Clearance areas outside each footprint edge, one per direction 0..3."""
        low, high = self.footprint()
        return [
            (Vector2D(high.x, low.y), Vector2D(high.x + self.clearance_length_in_direction(0), high.y)),
            (Vector2D(low.x, high.y), Vector2D(high.x, high.y + self.clearance_length_in_direction(1))),
            (Vector2D(low.x - self.clearance_length_in_direction(2), low.y), Vector2D(low.x, high.y)),
            (Vector2D(low.x, low.y - self.clearance_length_in_direction(3)), Vector2D(high.x, low.y)),
        ]

    def clearance_bounds(self) -> Area:
        """Footprint expanded by the clearance length on every side."""
        low, high = self.footprint()
        return (
            Vector2D(low.x - self.clearance_length_in_direction(2), low.y - self.clearance_length_in_direction(3)),
            Vector2D(high.x + self.clearance_length_in_direction(0), high.y + self.clearance_length_in_direction(1)),
        )

    def to_placement(self) -> FittingPlacement:
        return FittingPlacement.from_quarter_turns(
            self.position.x,
            self.position.y,
            self.orientation,
            self.fitting_model.representation,
        )


@dataclass(eq=False)
class ParticularFace:
    """Instance-level state of one face of a fitting.

    Attributes:
        fitting: Fitting this face belongs to.
        face: Catalog face (facing and face type).
        side_length: Length of the face in meters.
        reserved_length: Length of this face reserved by attached faces,
            including their surrounding clearance.
        attachments: Attacher faces and the relations they satisfy, in
            attachment order.
        placed_attacher_count: Number of attachers already laid out.
        filled_length: Length already used by laid out attachers.
    """

    fitting: Fitting
    face: Face
    side_length: float
    reserved_length: float = 0.0
    attachments: list[tuple[ParticularFace, SpatialRelation]] = field(default_factory=list)
    placed_attacher_count: int = 0
    filled_length: float = 0.0

    def __repr__(self) -> str:
        return (
            f"ParticularFace({self.fitting.fitting_model.id!r}, "
            f"{self.face.facing.name.lower()}, {self.face_type.id!r})"
        )

    @property
    def face_type(self) -> FaceType:
        return self.face.face_type

    @property
    def direction(self) -> Direction:
        return Direction(normalize_rotation(self.fitting.orientation + self.face.facing))

    @property
    def distance_from_fitting_center(self) -> float:
        box = self.fitting.fitting_model.bounding_box
        return box.width / 2 if self.face.facing.is_lateral else box.depth / 2

    @property
    def normal_vector(self) -> Vector2D:
        return self.direction.normal

    @property
    def vector_along_face(self) -> Vector2D:
        """Vector along the face in counterclockwise direction."""
        return self.direction.along

    @property
    def face_center_position(self) -> Vector2D:
        return self.fitting.position + self.normal_vector * self.distance_from_fitting_center

    @property
    def clearance_area_length(self) -> float:
        return self.fitting.fitting_model.clearance_area_length(self.face.facing)

    @property
    def surrounding_clearance_length(self) -> float:
        """Clearance of the two sides flanking this face."""
        model = self.fitting.fitting_model
        if self.face.facing.is_lateral:
            return model.clearance_area_length(Facing.BACK) + model.clearance_area_length(Facing.FRONT)
        return model.clearance_area_length(Facing.LEFT) + model.clearance_area_length(Facing.RIGHT)

    @property
    def free_length(self) -> float:
        return self.side_length - self.reserved_length

    def can_attach_face(self, attacher_face: ParticularFace, relation: SpatialRelation) -> bool:
        """Check if there is enough unreserved length left for an attacher face."""
        if self.face_type is not relation.support_face_type:
            return False
        required = attacher_face.side_length + attacher_face.surrounding_clearance_length
        return self.reserved_length == 0 or self.reserved_length + required < self.side_length

    def attach_face(self, attacher_face: ParticularFace, relation: SpatialRelation) -> bool:
        """Reserve length of this support face for an attacher face.

        Returns:
            Whether the attacher face was attached.
        """
        if not self.can_attach_face(attacher_face, relation):
            return False
        self.reserved_length += attacher_face.side_length + attacher_face.surrounding_clearance_length
        self.attachments.append((attacher_face, relation))
        return True

    def rotate_to_face(self, direction: Direction) -> None:
        """Rotate this face's placement unit so the face points against direction."""
        rotation_delta = direction.opposite - self.direction
        self.fitting.rotate_placement_unit(rotation_delta)

    def translate_to_distance_from_face(self, distance: float, support_face: ParticularFace) -> None:
        """Translate this face's placement unit to a distance from a support face.

        Multiple attachers of one support face are spread evenly over its free
        span in attachment order.
        """
        offset_out = support_face.normal_vector * (
            support_face.distance_from_fitting_center + distance + self.distance_from_fitting_center
        )

        offset_along = Vector2D.zero()
        if len(support_face.attachments) > 1:
            spacing = support_face.free_length / (len(support_face.attachments) + 1)
            trailing_clearance = self.fitting.clearance_length_in_direction(
                support_face.direction.rotated(-1)
            )
            offset_along = support_face.vector_along_face * (
                -support_face.side_length / 2
                + spacing * (support_face.placed_attacher_count + 1)
                + support_face.filled_length
                + trailing_clearance
                + self.side_length / 2
            )
        support_face.placed_attacher_count += 1
        support_face.filled_length += self.side_length + self.surrounding_clearance_length

        target = support_face.fitting.position + offset_out + offset_along
        self.fitting.placement_unit.translate(target - self.fitting.position)
