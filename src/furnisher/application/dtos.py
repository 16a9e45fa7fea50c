"""Data Transfer Objects for the application layer."""

from __future__ import annotations

from dataclasses import dataclass, field

from furnisher.domain import FittingPlacement, LayoutWarning, Room


@dataclass
class PlacementInput:
    """Input DTO for a placement request."""

    fitting_model_ids: list[str]
    seed: int = 0

    def validate(self) -> list[str]:
        """Validate input and return list of error messages."""
        errors: list[str] = []
        if self.seed < 0:
            errors.append("Seed cannot be negative")
        for index, model_id in enumerate(self.fitting_model_ids):
            if not model_id.strip():
                errors.append(f"Fitting {index} has an empty model id")
        return errors


@dataclass
class PlacementOutput:
    """Output DTO containing the generated placements.

    Attributes:
        placements: Placement records in request order, empty when no layout
            was found.
        warnings: Non-fatal conditions met during generation.
        errors: Error messages if the request could not be processed.
        found: Whether a complete layout was found.
        room: Room grid with the layout applied, when one was found.
        trial_count: Number of candidates the search tried.
    """

    placements: list[FittingPlacement] = field(default_factory=list)
    warnings: list[LayoutWarning] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    found: bool = False
    room: Room | None = None
    trial_count: int = 0

    @property
    def is_valid(self) -> bool:
        """Check if the output is valid (no errors)."""
        return len(self.errors) == 0
