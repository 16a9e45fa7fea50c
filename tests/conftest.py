"""Pytest configuration and shared fixtures for furnisher tests."""

from __future__ import annotations

import random

import pytest

from furnisher.domain import (
    BoundingBox3D,
    Face,
    Facing,
    FittingCatalog,
    FittingModel,
    FittingType,
    Room,
    SpatialRelation,
)


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "slow: tests that take a long time to run")


# =============================================================================
# Catalog builders
# =============================================================================


def add_model(
    catalog: FittingCatalog,
    model_id: str,
    fitting_type: FittingType,
    width: float,
    depth: float,
    height: float = 0.8,
    clearances: dict[Facing, float] | None = None,
) -> FittingModel:
    """Register a fitting model with optional clearance areas."""
    model = FittingModel(model_id, fitting_type, BoundingBox3D(width, depth, height))
    for side, length in (clearances or {}).items():
        model.add_clearance_area(side, length)
    return catalog.add_fitting_model(model)


@pytest.fixture
def rng() -> random.Random:
    """Deterministic random source."""
    return random.Random(1234)


@pytest.fixture
def empty_catalog() -> FittingCatalog:
    """Catalog with only the built-in face types."""
    return FittingCatalog()


@pytest.fixture
def living_room_catalog() -> FittingCatalog:
    """Small catalog with a sofa, a lamp, a table, chairs and a bookcase.

    - sofa back faces a wall, lamps attach to the sofa sides
    - chairs attach to the long sides of the table
    - bookcase back faces a wall
    - box has no faces at all
    """
    catalog = FittingCatalog()
    wall = catalog.wall_face_type

    sofa_back = catalog.add_face_type("sofa_back")
    sofa_back.add_relation(SpatialRelation(wall, 0.05))
    sofa_side = catalog.add_face_type("sofa_side")
    lamp_back = catalog.add_face_type("lamp_back")
    lamp_back.add_relation(SpatialRelation(sofa_side, 0.05))
    table_side = catalog.add_face_type("table_side")
    chair_front = catalog.add_face_type("chair_front")
    chair_front.add_relation(SpatialRelation(table_side, 0.05))
    bookcase_back = catalog.add_face_type("bookcase_back")
    bookcase_back.add_relation(SpatialRelation(wall, 0.0))

    sofa = FittingType(
        "sofa",
        [
            Face(Facing.BACK, sofa_back),
            Face(Facing.LEFT, sofa_side),
            Face(Facing.RIGHT, sofa_side),
        ],
    )
    lamp = FittingType("floor_lamp", [Face(Facing.BACK, lamp_back)])
    table = FittingType(
        "table",
        [Face(Facing.BACK, table_side), Face(Facing.FRONT, table_side)],
    )
    chair = FittingType("chair", [Face(Facing.FRONT, chair_front)])
    bookcase = FittingType("bookcase", [Face(Facing.BACK, bookcase_back)])
    box = FittingType("box")
    for fitting_type in (sofa, lamp, table, chair, bookcase, box):
        catalog.add_fitting_type(fitting_type)

    add_model(catalog, "sofa", sofa, 2.0, 0.9, 0.85, {Facing.FRONT: 0.5})
    add_model(catalog, "lamp", lamp, 0.3, 0.3, 1.6)
    add_model(catalog, "table", table, 1.2, 0.8, 0.75)
    add_model(catalog, "chair", chair, 0.4, 0.4, 0.9, {Facing.BACK: 0.3})
    add_model(catalog, "bookcase", bookcase, 0.8, 0.4, 1.9, {Facing.FRONT: 0.6})
    add_model(catalog, "box", box, 1.0, 0.5, 0.5)
    add_model(catalog, "low box", box, 0.4, 0.4, 0.5)
    return catalog


@pytest.fixture
def empty_room() -> Room:
    """5 x 4 m room without doors or windows."""
    return Room(width=5.0, depth=4.0, height=2.6)
