"""Application commands."""

from __future__ import annotations

import logging

from furnisher.application.config import PlacementRequestConfig, config_to_room
from furnisher.application.dtos import PlacementInput, PlacementOutput
from furnisher.domain import CatalogError, FittingCatalog, Furnisher, Room

logger = logging.getLogger(__name__)


class GeneratePlacementsCommand:
    """Command to generate fitting placements for a room."""

    def __init__(
        self,
        catalog: FittingCatalog,
        furnisher: Furnisher | None = None,
    ) -> None:
        self.catalog = catalog
        self.furnisher = furnisher or Furnisher(catalog)

    def execute(self, room: Room, placement_input: PlacementInput) -> PlacementOutput:
        """Execute the placement command.

        Args:
            room: Room to furnish. It is not modified.
            placement_input: Fitting model ids and seed.

        Returns:
            PlacementOutput with the placements, or errors if the input is
            invalid. Nothing is placed when any model id is unknown.
        """
        errors = placement_input.validate()
        if errors:
            return PlacementOutput(errors=errors)

        try:
            layout = self.furnisher.generate_layout(
                room,
                placement_input.fitting_model_ids,
                seed=placement_input.seed,
            )
        except CatalogError as e:
            logger.error(f"Cannot place fittings: {e}")
            return PlacementOutput(errors=[str(e)])

        return PlacementOutput(
            placements=layout.placements,
            warnings=layout.warnings,
            found=layout.found,
            room=layout.room,
            trial_count=layout.trial_count,
        )

    def execute_config(
        self, request: PlacementRequestConfig, seed: int | None = None
    ) -> PlacementOutput:
        """Execute the command for a loaded placement request.

        Args:
            request: Validated placement request.
            seed: Optional seed overriding the request's seed.
        """
        try:
            room = config_to_room(request.room)
        except ValueError as e:
            return PlacementOutput(errors=[f"Invalid room: {e}"])

        placement_input = PlacementInput(
            fitting_model_ids=list(request.fittings),
            seed=request.seed if seed is None else seed,
        )
        return self.execute(room, placement_input)
