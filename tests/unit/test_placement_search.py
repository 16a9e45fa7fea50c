"""Unit tests for the backtracking placement search.

These tests verify:
- Every unit is placed without overlap when a layout exists
- Exhaustive backtracking and the trial count when none exists
- The grid is restored after a failed search
- The optional trial budget
"""

import numpy as np
import pytest

from furnisher.domain import (
    Fitting,
    FittingCatalog,
    PlacementCandidate,
    PlacementSearch,
    Room,
    Vector2D,
)


def prepared_units(catalog: FittingCatalog, room: Room, *model_ids: str):
    units = [Fitting(model).placement_unit for model in catalog.resolve_models(model_ids)]
    for unit in units:
        unit.set_domain(room)
    return units


class TestPlacementSearch:
    """Tests for PlacementSearch."""

    def test_places_all_units(self, living_room_catalog: FittingCatalog, empty_room: Room) -> None:
        """Independent units are all placed on the grid."""
        units = prepared_units(living_room_catalog, empty_room, "box", "box", "low box")
        search = PlacementSearch()

        assert search.search(units, empty_room)
        grid = empty_room.obstruction_grid()
        assert np.count_nonzero(grid == -2) == 50 + 50 + 16
        assert search.trial_count >= 3

    def test_first_candidates_are_tried_in_order(
        self, living_room_catalog: FittingCatalog, empty_room: Room
    ) -> None:
        """With a free grid each unit takes its first candidate."""
        units = prepared_units(living_room_catalog, empty_room, "box")
        (box,) = units[0].members
        PlacementSearch().search(units, empty_room)
        first = units[0].domain[0]
        assert box.position == first.position
        assert box.orientation == first.rotation

    def test_backtracks_exhaustively(self, living_room_catalog: FittingCatalog) -> None:
        """Two units that never fit together exhaust all combinations."""
        room = Room(width=1.0, depth=1.0)
        units = prepared_units(living_room_catalog, room, "low box", "low box")
        for unit in units:
            unit.domain = [PlacementCandidate(Vector2D(0.0, 0.0), rotation) for rotation in range(4)]
        search = PlacementSearch()

        assert not search.search(units, room)
        assert search.trial_count == 4 + 4 * 4
        assert not search.budget_exhausted
        assert not np.any(room.obstruction_grid())

    def test_backtracking_finds_later_combination(
        self, living_room_catalog: FittingCatalog
    ) -> None:
        """A first unit blocking the second is moved on backtracking."""
        room = Room(width=1.2, depth=0.4)
        units = prepared_units(living_room_catalog, room, "low box", "low box")
        units[0].domain = [
            PlacementCandidate(Vector2D(0.0, 0.0), 0),
            PlacementCandidate(Vector2D(-0.4, 0.0), 0),
        ]
        units[1].domain = [
            PlacementCandidate(Vector2D(0.0, 0.0), 0),
            PlacementCandidate(Vector2D(0.2, 0.0), 0),
        ]
        search = PlacementSearch()

        assert search.search(units, room)
        assert search.trial_count == 1 + 2 + 1 + 1
        assert units[0].members[0].position == Vector2D(-0.4, 0.0)
        assert units[1].members[0].position == Vector2D(0.0, 0.0)

    def test_empty_domain_fails_immediately(
        self, living_room_catalog: FittingCatalog, empty_room: Room
    ) -> None:
        """A unit without candidates makes the search fail."""
        units = prepared_units(living_room_catalog, empty_room, "box")
        units[0].domain = []
        search = PlacementSearch()
        assert not search.search(units, empty_room)
        assert search.trial_count == 0

    def test_no_units_is_trivially_placed(self, empty_room: Room) -> None:
        """Searching for nothing succeeds."""
        assert PlacementSearch().search([], empty_room)

    def test_trial_budget(self, living_room_catalog: FittingCatalog) -> None:
        """The search gives up once the budget is spent and restores the grid."""
        room = Room(width=1.0, depth=1.0)
        units = prepared_units(living_room_catalog, room, "low box", "low box")
        for unit in units:
            unit.domain = [PlacementCandidate(Vector2D(0.0, 0.0), rotation) for rotation in range(4)]
        search = PlacementSearch(max_trials=7)

        assert not search.search(units, room)
        assert search.trial_count == 7
        assert search.budget_exhausted
        assert not np.any(room.obstruction_grid())

    def test_counters_reset_between_searches(self, living_room_catalog: FittingCatalog) -> None:
        """Each search starts counting from zero."""
        search = PlacementSearch()
        for _ in range(2):
            room = Room(width=5.0, depth=4.0)
            search.search(prepared_units(living_room_catalog, room, "box"), room)
        assert search.trial_count == 1

    @pytest.mark.parametrize("max_trials", [0, -5])
    def test_rejects_non_positive_budget(self, max_trials: int) -> None:
        """Budgets must be positive."""
        with pytest.raises(ValueError):
            PlacementSearch(max_trials=max_trials)
