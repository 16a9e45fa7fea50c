"""Output formatters for fitting placements."""

from __future__ import annotations

import json
from typing import Any

from furnisher.application.dtos import PlacementOutput
from furnisher.domain import FittingPlacement, LayoutWarning, Room


class PlacementListFormatter:
    """Formats placements as one line per fitting."""

    def __init__(self, precision: int = 3) -> None:
        self._precision = precision

    def format(self, placements: list[FittingPlacement]) -> str:
        if not placements:
            return "No fittings placed."
        return "\n".join(self.format_placement(placement) for placement in placements)

    def format_placement(self, placement: FittingPlacement) -> str:
        x = round(placement.x, self._precision)
        y = round(placement.y, self._precision)
        return (
            f"{placement.representation.fitting_type_id}: "
            f"({x:g} , {y:g}) and {placement.degrees} degrees turned."
        )


class WarningFormatter:
    """Formats layout warnings for display."""

    def format(self, warnings: list[LayoutWarning]) -> str:
        if not warnings:
            return ""
        lines = ["WARNINGS", "-" * 60]
        for warning in warnings:
            lines.append(f"  [{warning.kind.value}] {warning.message}")
            if warning.suggestion:
                lines.append(f"      Suggestion: {warning.suggestion}")
        return "\n".join(lines)


class GridFormatter:
    """Formats the occupancy grid of a room as ASCII art.

    The top row is the back of the room (positive Y). Legend:
    ``.`` free, ``1``-``9`` reservation count (``+`` above nine),
    ``#`` occupied, ``=`` occupied under a window clearance.
    """

    def format(self, room: Room) -> str:
        grid = room.obstruction_grid()
        columns, rows = grid.shape

        lines = [
            "OCCUPANCY GRID",
            "=" * max(columns, 14),
        ]
        for iy in reversed(range(rows)):
            lines.append("".join(self._cell_char(int(grid[ix, iy])) for ix in range(columns)))
        lines.append("")
        lines.append(
            f"Room: {room.width:g} x {room.depth:g} m, "
            f"{columns} x {rows} cells of {room.grid_cell_size:g} m"
        )
        return "\n".join(lines)

    @staticmethod
    def _cell_char(value: int) -> str:
        if value == -2:
            return "#"
        if value == -1:
            return "="
        if value == 0:
            return "."
        if value > 9:
            return "+"
        return str(value)


class JsonExporter:
    """Exports placement output as JSON."""

    def export(self, output: PlacementOutput) -> str:
        """Export placement output as JSON string."""
        if not output.is_valid:
            return json.dumps({"errors": output.errors}, indent=2)

        data = {
            "found": output.found,
            "placements": [self._format_placement(p) for p in output.placements],
            "warnings": [self._format_warning(w) for w in output.warnings],
            "trial_count": output.trial_count,
        }
        return json.dumps(data, indent=2)

    def _format_placement(self, placement: FittingPlacement) -> dict[str, Any]:
        return {
            "fitting_model_id": placement.representation.fitting_model_id,
            "fitting_type_id": placement.representation.fitting_type_id,
            "x": placement.x,
            "y": placement.y,
            "orientation": placement.orientation,
            "degrees": placement.degrees,
        }

    def _format_warning(self, warning: LayoutWarning) -> dict[str, Any]:
        data: dict[str, Any] = {"kind": warning.kind.value, "message": warning.message}
        if warning.suggestion:
            data["suggestion"] = warning.suggestion
        return data
