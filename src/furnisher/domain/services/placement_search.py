"""Depth-first backtracking search over placement unit domains."""

from __future__ import annotations

import logging

from ..placement_unit import PlacementUnit
from ..room import Room

__all__ = ["PlacementSearch"]

logger = logging.getLogger(__name__)


class PlacementSearch:
    """Assigns one domain candidate to every placement unit.

    A unit's candidates are tried in domain order. A candidate that fits is
    committed to the room grid before moving on to the next unit; when the
    remaining units cannot be placed it is rolled back exactly.

    Attributes:
        max_trials: Optional limit on the number of candidates tried. When it
            is exceeded the search unwinds and reports failure.
        trial_count: Number of candidates tried by the last search.
        budget_exhausted: Whether the last search stopped at max_trials.
    """

    def __init__(self, max_trials: int | None = None) -> None:
        if max_trials is not None and max_trials <= 0:
            raise ValueError("max_trials must be positive")
        self.max_trials = max_trials
        self.trial_count = 0
        self.budget_exhausted = False

    def search(self, units: list[PlacementUnit], room: Room) -> bool:
        """Place all units in the room.

        Args:
            units: Units with their domains set.
            room: Grid to place on. Left unchanged when the search fails.

        Returns:
            Whether every unit was placed.
        """
        self.trial_count = 0
        self.budget_exhausted = False
        found = self._place_from(units, 0, room)
        if found:
            logger.info(f"Found a layout for {len(units)} units after {self.trial_count} trials")
        elif self.budget_exhausted:
            logger.warning(f"Gave up after {self.trial_count} trials")
        else:
            logger.info(f"No layout exists for {len(units)} units ({self.trial_count} trials)")
        return found

    def _place_from(self, units: list[PlacementUnit], index: int, room: Room) -> bool:
        if index == len(units):
            return True

        unit = units[index]
        for candidate in unit.domain:
            if self.max_trials is not None and self.trial_count >= self.max_trials:
                self.budget_exhausted = True
                return False
            self.trial_count += 1

            if not unit.try_fit_at(candidate, room):
                continue
            logger.debug(
                f"Unit {index} {unit!r} placed at {candidate.position}, "
                f"rotation {candidate.rotation}"
            )

            if self._place_from(units, index + 1, room):
                return True

            unit.unplace(candidate, room)
            if self.budget_exhausted:
                return False

        return False
