"""Placement units: rigid groups of fittings that are placed together.

Fittings attached to one another through spatial relations are merged into a
single placement unit. The unit computes its own extents, keeps the wall
distance constraints inherited from its members and enumerates the discrete
domain of placements it may take in a room.
"""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING

import numpy as np

from .value_objects import (
    Direction,
    LayoutWarning,
    PlacementCandidate,
    Vector2D,
    WallConstraint,
    WarningKind,
    normalize_rotation,
)

if TYPE_CHECKING:
    from .entities import Fitting, ParticularFace
    from .room import Room

__all__ = ["PlacementUnit"]

logger = logging.getLogger(__name__)

_SPAN_TOLERANCE = 1e-9


def _sweep(low: float, high: float, step: float) -> list[float]:
    """Evenly spaced positions from low to high, about one grid cell apart.

    Both ends are included exactly. An empty list means the range is
    negative, i.e. the unit does not fit along that axis.
    """
    span = high - low
    if span < -_SPAN_TOLERANCE:
        return []
    if span <= _SPAN_TOLERANCE:
        return [low]
    count = 1 + int(round(span / step))
    return [float(value) for value in np.linspace(low, high, max(count, 2))]


class PlacementUnit:
    """A rigid group of mutually attached fittings.

    Attributes:
        members: Fittings in this unit. Every member's ``placement_unit``
            refers back to this unit.
        wall_constraints: Required distances from the unit origin to walls.
        domain: Candidate placements, filled by set_domain().
    """

    def __init__(self, member: Fitting) -> None:
        self.members: list[Fitting] = []
        self.wall_constraints: list[WallConstraint] = []
        self.domain: list[PlacementCandidate] = []

        self._min = Vector2D.zero()
        self._max = Vector2D.zero()
        self._add_member(member)

    def __repr__(self) -> str:
        ids = ", ".join(member.fitting_model.id for member in self.members)
        return f"PlacementUnit([{ids}])"

    @property
    def x_length(self) -> float:
        return self._max.x - self._min.x

    @property
    def y_length(self) -> float:
        return self._max.y - self._min.y

    @property
    def middle_position(self) -> Vector2D:
        return (self._min + self._max) / 2

    @property
    def extents(self) -> tuple[Vector2D, Vector2D]:
        """Minimum and maximum corners covering all members and their clearance."""
        return (self._min, self._max)

    def absorb(self, other: PlacementUnit) -> None:
        """Move every member of another unit into this one.

        The other unit is left empty. Wall constraints of the other unit are
        carried over, as they describe the same rigid group.
        """
        if other is self:
            return
        for member in other.members:
            self._add_member(member)
        self.wall_constraints.extend(other.wall_constraints)
        other.members = []
        other.wall_constraints = []
        other.domain = []

    def _add_member(self, member: Fitting) -> None:
        member.change_placement_unit(self)
        low, high = member.clearance_bounds()
        if self.members:
            self._min = Vector2D(min(self._min.x, low.x), min(self._min.y, low.y))
            self._max = Vector2D(max(self._max.x, high.x), max(self._max.y, high.y))
        else:
            self._min, self._max = low, high
        self.members.append(member)

    def rotate_around(self, nave: Vector2D, rotation_delta: int) -> None:
        """Rotate all members, extents and wall constraints around a position.

        Args:
            nave: Position to rotate around.
            rotation_delta: Number of counterclockwise quarter turns.
        """
        rotation_delta = normalize_rotation(rotation_delta)
        if rotation_delta == 0:
            return

        for member in self.members:
            member.rotate_around(nave, rotation_delta)

        a = self._min.rotated(rotation_delta, about=nave)
        b = self._max.rotated(rotation_delta, about=nave)
        self._min = Vector2D(min(a.x, b.x), min(a.y, b.y))
        self._max = Vector2D(max(a.x, b.x), max(a.y, b.y))

        # The wall plane n.p = d maps to n'.p = d - n.c + n'.c
        rotated = []
        for constraint in self.wall_constraints:
            direction = constraint.direction.rotated(rotation_delta)
            distance = (
                constraint.distance
                - constraint.direction.normal.dot(nave)
                + direction.normal.dot(nave)
            )
            rotated.append(WallConstraint(direction, distance))
        self.wall_constraints = rotated

    def translate(self, offset: Vector2D) -> None:
        """Translate all members, extents and wall constraints."""
        for member in self.members:
            member.translate(offset)

        self._min = self._min + offset
        self._max = self._max + offset

        self.wall_constraints = [
            WallConstraint(c.direction, c.distance + offset.dot(c.direction.normal))
            for c in self.wall_constraints
        ]

    def set_origin_to_middle(self) -> None:
        self.translate(-self.middle_position)

    def add_wall_constraint(self, attacher_face: ParticularFace, wall_distance: float) -> None:
        """Require an attacher face to stand at a distance from a wall.

        Args:
            attacher_face: Face to be placed facing the wall.
            wall_distance: Gap between the face and the wall.
        """
        origin_to_wall = (
            attacher_face.face_center_position.dot(attacher_face.normal_vector) + wall_distance
        )
        self.wall_constraints.append(WallConstraint(attacher_face.direction, origin_to_wall))

    def trim_wall_constraints(self) -> bool:
        """Reduce wall constraints to a combination that can be satisfied.

        Duplicate directions collapse to the longest distance. Of two
        opposite directions only the longer one is kept.

        Returns:
            False if any constraint was merged or dropped.
        """
        if len(self.wall_constraints) <= 1:
            return True

        compatible = True
        distances: dict[Direction, float] = {}
        for constraint in self.wall_constraints:
            known = distances.get(constraint.direction)
            if known is None:
                distances[constraint.direction] = constraint.distance
            else:
                compatible = False
                distances[constraint.direction] = max(known, constraint.distance)

        for first, second in (
            (Direction.POSITIVE_X, Direction.NEGATIVE_X),
            (Direction.POSITIVE_Y, Direction.NEGATIVE_Y),
        ):
            if first in distances and second in distances:
                compatible = False
                if distances[first] < distances[second]:
                    del distances[first]
                else:
                    del distances[second]

        self.wall_constraints = [
            WallConstraint(direction, distances[direction])
            for direction in Direction
            if direction in distances
        ]
        return compatible

    def set_domain(self, room: Room) -> list[LayoutWarning]:
        """Enumerate the placements this unit may take in a room.

        Positions are relative to the unit's middle, which becomes its origin.

        Args:
            room: Room to generate placements for.

        Returns:
            Warnings about wall constraints that had to be dropped.
        """
        warnings: list[LayoutWarning] = []
        self.domain = []
        self.set_origin_to_middle()

        if not self.trim_wall_constraints():
            logger.warning(f"Wall constraints of {self!r} are incompatible and were trimmed")
            warnings.append(
                LayoutWarning(
                    kind=WarningKind.INCOMPATIBLE_WALL_CONSTRAINTS,
                    message=f"All wall relation constraints could not be satisfied for {self!r}",
                    suggestion="Remove conflicting wall relations from the fitting types",
                )
            )

        count = len(self.wall_constraints)
        if count == 0:
            self._set_free_domain(room)
        elif count == 1:
            self._set_wall_domain(room)
        elif count == 2:
            self._set_corner_domain(room)
        else:
            logger.warning(f"Too many wall constraints for {self!r}: {count}")
            warnings.append(
                LayoutWarning(
                    kind=WarningKind.TOO_MANY_WALL_CONSTRAINTS,
                    message=f"Too many wall relation constraints ({count}) for {self!r}",
                )
            )

        logger.debug(f"Domain of {self!r} has {len(self.domain)} candidates")
        return warnings

    def _set_free_domain(self, room: Room) -> None:
        cell = room.grid_cell_size
        footprints = (
            ((0, 2), self.x_length, self.y_length),
            ((1, 3), self.y_length, self.x_length),
        )
        for rotations, x_length, y_length in footprints:
            xs = _sweep((-room.width + x_length) / 2, (room.width - x_length) / 2, cell)
            ys = _sweep((-room.depth + y_length) / 2, (room.depth - y_length) / 2, cell)
            for x in xs:
                for y in ys:
                    for rotation in rotations:
                        self.domain.append(PlacementCandidate(Vector2D(x, y), rotation))

    def _set_wall_domain(self, room: Room) -> None:
        # Turn the unit so its wall constraint points towards direction 0
        self.rotate_around(Vector2D.zero(), -self.wall_constraints[0].direction)
        distance = self.wall_constraints[0].distance
        cell = room.grid_cell_size

        ys = _sweep((-room.depth + self.y_length) / 2, (room.depth - self.y_length) / 2, cell)
        for y in ys:
            self.domain.append(PlacementCandidate(Vector2D(room.width / 2 - distance, y), 0))
        for y in ys:
            self.domain.append(PlacementCandidate(Vector2D(-room.width / 2 + distance, y), 2))

        xs = _sweep((-room.width + self.y_length) / 2, (room.width - self.y_length) / 2, cell)
        for x in xs:
            self.domain.append(PlacementCandidate(Vector2D(x, room.depth / 2 - distance), 1))
        for x in xs:
            self.domain.append(PlacementCandidate(Vector2D(x, -room.depth / 2 + distance), 3))

    def _set_corner_domain(self, room: Room) -> None:
        directions = {c.direction for c in self.wall_constraints}
        for rotation in range(4):
            if {d.rotated(rotation) for d in directions} == {Direction.POSITIVE_X, Direction.POSITIVE_Y}:
                self.rotate_around(Vector2D.zero(), rotation)
                break

        distances = {c.direction: c.distance for c in self.wall_constraints}
        d0 = distances[Direction.POSITIVE_X]
        d1 = distances[Direction.POSITIVE_Y]
        half_w = room.width / 2
        half_d = room.depth / 2
        self.domain.extend(
            [
                PlacementCandidate(Vector2D(half_w - d0, half_d - d1), 0),
                PlacementCandidate(Vector2D(-half_w + d1, half_d - d0), 1),
                PlacementCandidate(Vector2D(-half_w + d0, -half_d + d1), 2),
                PlacementCandidate(Vector2D(half_w - d1, -half_d + d0), 3),
            ]
        )

    def shuffle_domain(self, rng: random.Random) -> None:
        rng.shuffle(self.domain)

    def fits(self, room: Room) -> bool:
        """Check whether every member can stand at its current placement."""
        for fitting in self.members:
            footprint = fitting.footprint()
            if not room.contains_area(*footprint):
                return False
            if not room.can_area_be_occupied(*footprint, fitting.height):
                return False
            for strip in fitting.clearance_strips():
                if not room.can_area_be_reserved(*strip):
                    return False
        return True

    def try_fit_at(self, candidate: PlacementCandidate, room: Room) -> bool:
        """Move the unit to a candidate placement and register it, if it fits.

        Returns:
            Whether the unit was moved and registered. On failure the unit is
            back at its default placement.
        """
        self.rotate_around(Vector2D.zero(), candidate.rotation)
        self.translate(candidate.position)

        if self.fits(room):
            self.place(room)
            return True

        self.translate(-candidate.position)
        self.rotate_around(Vector2D.zero(), -candidate.rotation)
        return False

    def place(self, room: Room) -> None:
        """Reserve clearance areas and occupy footprints of all members."""
        for fitting in self.members:
            for strip in fitting.clearance_strips():
                room.reserve_area(*strip)
            room.occupy_area(*fitting.footprint())

    def unplace(self, candidate: PlacementCandidate, room: Room) -> None:
        """Undo place() and move the unit back to its default placement.

        Assumes try_fit_at() succeeded with the same candidate.
        """
        for fitting in self.members:
            for strip in fitting.clearance_strips():
                room.unreserve_area(*strip)
            room.unoccupy_area(*fitting.footprint())

        self.translate(-candidate.position)
        self.rotate_around(Vector2D.zero(), -candidate.rotation)
