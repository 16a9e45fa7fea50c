"""Unit tests for application commands and DTOs.

These tests verify:
- Input validation of placement requests
- Successful placement through the command
- Unknown models and invalid rooms are reported as errors
- Seed overrides for configured requests
"""

from furnisher.application import GeneratePlacementsCommand, PlacementInput, PlacementOutput
from furnisher.application.config import load_request_from_dict
from furnisher.domain import FittingCatalog, Furnisher, Room, WarningKind


def request(fittings: list[str], width: float = 5.0, **extra) -> dict:
    return {"room": {"width": width, "depth": 4.0}, "fittings": fittings, **extra}


class TestPlacementInput:
    """Tests for PlacementInput validation."""

    def test_valid_input(self) -> None:
        """Valid input has no errors."""
        assert PlacementInput(["sofa", "lamp"], seed=3).validate() == []

    def test_negative_seed(self) -> None:
        """Negative seeds are rejected."""
        assert PlacementInput(["sofa"], seed=-1).validate() == ["Seed cannot be negative"]

    def test_blank_model_id(self) -> None:
        """Blank model ids are rejected with their position."""
        assert PlacementInput(["sofa", "  "]).validate() == ["Fitting 1 has an empty model id"]


class TestPlacementOutput:
    """Tests for PlacementOutput."""

    def test_validity_follows_errors(self) -> None:
        """Output is valid exactly when it carries no errors."""
        assert PlacementOutput().is_valid
        assert not PlacementOutput(errors=["boom"]).is_valid


class TestGeneratePlacementsCommand:
    """Tests for GeneratePlacementsCommand."""

    def test_execute(self, living_room_catalog: FittingCatalog, empty_room: Room) -> None:
        """Placements come back in request order."""
        command = GeneratePlacementsCommand(living_room_catalog)
        output = command.execute(empty_room, PlacementInput(["sofa", "lamp", "box"], seed=11))

        assert output.is_valid
        assert output.found
        assert [p.representation.fitting_model_id for p in output.placements] == [
            "sofa",
            "lamp",
            "box",
        ]
        assert output.room is not None
        assert output.trial_count >= 2

    def test_execute_leaves_room_untouched(
        self, living_room_catalog: FittingCatalog, empty_room: Room
    ) -> None:
        """The caller's room grid is never modified."""
        command = GeneratePlacementsCommand(living_room_catalog)
        output = command.execute(empty_room, PlacementInput(["box"], seed=1))
        assert output.room is not empty_room
        assert not empty_room.obstruction_grid().any()

    def test_unknown_model(self, living_room_catalog: FittingCatalog, empty_room: Room) -> None:
        """Unknown model ids are reported and nothing is placed."""
        command = GeneratePlacementsCommand(living_room_catalog)
        output = command.execute(empty_room, PlacementInput(["sofa", "piano"], seed=1))
        assert not output.is_valid
        assert output.errors == ["Unknown fitting model 'piano'"]
        assert output.placements == []

    def test_invalid_input(self, living_room_catalog: FittingCatalog, empty_room: Room) -> None:
        """Invalid input is not passed on to the furnisher."""
        command = GeneratePlacementsCommand(living_room_catalog)
        output = command.execute(empty_room, PlacementInput(["box"], seed=-4))
        assert output.errors == ["Seed cannot be negative"]

    def test_no_layout(self, living_room_catalog: FittingCatalog) -> None:
        """A room too small gives a valid output without placements."""
        command = GeneratePlacementsCommand(living_room_catalog)
        output = command.execute(Room(width=0.8, depth=0.8), PlacementInput(["box"], seed=2))
        assert output.is_valid
        assert not output.found
        assert output.placements == []
        assert [w.kind for w in output.warnings] == [WarningKind.NO_LAYOUT]

    def test_execute_config_with_seed_override(self, living_room_catalog: FittingCatalog) -> None:
        """The seed argument overrides the request seed."""
        command = GeneratePlacementsCommand(living_room_catalog)
        config = load_request_from_dict(request(["sofa", "lamp"], seed=5))

        first = command.execute_config(config)
        second = command.execute_config(config, seed=5)
        assert first.placements == second.placements

    def test_execute_config_invalid_room(self, living_room_catalog: FittingCatalog) -> None:
        """Room construction errors are reported as errors."""
        command = GeneratePlacementsCommand(living_room_catalog)
        config = load_request_from_dict(request(["box"]))
        config.room.width = -1.0
        output = command.execute_config(config)
        assert output.errors == ["Invalid room: Room dimensions must be positive"]

    def test_custom_furnisher(self, living_room_catalog: FittingCatalog, empty_room: Room) -> None:
        """A configured furnisher, e.g. with a trial budget, is used."""
        furnisher = Furnisher(living_room_catalog, max_trials=1)
        command = GeneratePlacementsCommand(living_room_catalog, furnisher=furnisher)
        output = command.execute(empty_room, PlacementInput(["box", "box"], seed=3))
        assert output.trial_count == 1
        assert not output.found
