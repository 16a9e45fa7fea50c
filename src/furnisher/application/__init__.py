"""Application layer - commands, DTOs and configuration."""

from .commands import GeneratePlacementsCommand
from .dtos import PlacementInput, PlacementOutput

__all__ = [
    "GeneratePlacementsCommand",
    "PlacementInput",
    "PlacementOutput",
]
