"""Top-level service generating fitting layouts for a room."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Sequence

from ..catalog import FittingCatalog
from ..entities import Fitting
from ..room import Room
from ..value_objects import FittingPlacement, LayoutWarning, WarningKind
from .placement_search import PlacementSearch
from .relation_resolver import RelationResolver

__all__ = ["FittingLayout", "Furnisher", "make_rng"]

logger = logging.getLogger(__name__)


def make_rng(seed: int = 0) -> random.Random:
    """Create the random source for one generation call.

    A seed of 0 requests non-reproducible, time-based randomness.
    """
    if seed == 0:
        return random.Random()
    return random.Random(seed)


@dataclass
class FittingLayout:
    """Result of a layout generation.

    Attributes:
        placements: One placement per requested fitting, in request order.
            Empty when no layout was found.
        warnings: Non-fatal conditions met while generating the layout.
        found: Whether every fitting was placed.
        room: The room grid with the layout applied, when one was found.
        unit_count: Number of placement units searched.
        trial_count: Number of candidates tried by the search.
    """

    placements: list[FittingPlacement] = field(default_factory=list)
    warnings: list[LayoutWarning] = field(default_factory=list)
    found: bool = False
    room: Room | None = None
    unit_count: int = 0
    trial_count: int = 0


class Furnisher:
    """Places fitting models from a catalog into rooms.

    Each call resolves relations into placement units, derives every unit's
    domain, and searches a clone of the room, so the caller's room is never
    modified.

    Args:
        catalog: Catalog to resolve fitting model ids against.
        max_trials: Optional search budget, see PlacementSearch.
    """

    def __init__(self, catalog: FittingCatalog, max_trials: int | None = None) -> None:
        self.catalog = catalog
        self.max_trials = max_trials

    def generate_layout(
        self,
        room: Room,
        fitting_model_ids: Sequence[str],
        seed: int = 0,
    ) -> FittingLayout:
        """Generate a layout for the requested fitting models.

        Args:
            room: Room to furnish.
            fitting_model_ids: Model ids to place. Repeated ids place several
                fittings of the same model.
            seed: Random seed. 0 means time-based randomness.

        Returns:
            The generated layout, with empty placements when none was found.

        Raises:
            CatalogError: If a model id is not in the catalog. Nothing is
                placed in that case.
        """
        models = self.catalog.resolve_models(fitting_model_ids)
        rng = make_rng(seed)
        layout = FittingLayout()

        fittings = [Fitting(model) for model in models]
        resolution = RelationResolver(self.catalog, rng).resolve(fittings)
        layout.warnings.extend(resolution.warnings)

        work_room = room.clone()
        for unit in resolution.units:
            layout.warnings.extend(unit.set_domain(work_room))
            unit.shuffle_domain(rng)
        layout.unit_count = len(resolution.units)

        search = PlacementSearch(max_trials=self.max_trials)
        layout.found = search.search(resolution.units, work_room)
        layout.trial_count = search.trial_count

        if not layout.found:
            message = f"No layout found for {len(fittings)} fittings"
            if search.budget_exhausted:
                message += f" within {search.trial_count} trials"
            logger.warning(message)
            layout.warnings.append(
                LayoutWarning(
                    kind=WarningKind.NO_LAYOUT,
                    message=message,
                    suggestion="Try another seed, a larger room or fewer fittings",
                )
            )
            return layout

        layout.placements = [fitting.to_placement() for fitting in fittings]
        layout.room = work_room
        return layout

    def generate_placements(
        self,
        room: Room,
        fitting_model_ids: Sequence[str],
        seed: int = 0,
    ) -> list[FittingPlacement]:
        """Generate placements only; an empty list means no layout was found."""
        return self.generate_layout(room, fitting_model_ids, seed).placements
