"""Adapters converting configuration models to domain objects.

This module turns a validated CatalogConfig into a FittingCatalog, resolving
every cross reference by id, and a RoomConfig into a Room with its doors and
windows.
"""

import logging

from furnisher.application.config.schema import (
    CatalogConfig,
    DoorConfig,
    FacingConfig,
    RoomConfig,
    WindowConfig,
)
from furnisher.domain.catalog import (
    Face,
    FittingCatalog,
    FittingModel,
    FittingType,
    SpatialRelation,
)
from furnisher.domain.entities import Door, Window
from furnisher.domain.room import Room
from furnisher.domain.value_objects import BoundingBox3D, Direction, Facing, Vector2D

logger = logging.getLogger(__name__)


def _to_facing(facing: FacingConfig) -> Facing:
    return Facing.parse(facing.value)


def config_to_catalog(config: CatalogConfig) -> FittingCatalog:
    """Build a fitting catalog from its configuration.

    Face types are registered before their relations are resolved, so
    relations may reference face types declared later in the file.

    Args:
        config: Validated catalog configuration.

    Returns:
        A catalog containing every declared face type, fitting type and
        fitting model.

    Raises:
        CatalogError: If an entry references an unknown id.
    """
    catalog = FittingCatalog()

    for face_type_config in config.face_types:
        catalog.add_face_type(face_type_config.id)

    for face_type_config in config.face_types:
        face_type = catalog.face_type(face_type_config.id)
        for relation in face_type_config.relations:
            face_type.add_relation(
                SpatialRelation(
                    support_face_type=catalog.face_type(relation.support_face_type),
                    distance=relation.distance,
                )
            )

    for fitting_type_config in config.fitting_types:
        fitting_type = FittingType(fitting_type_config.id)
        for face in fitting_type_config.faces:
            fitting_type.add_face(Face(_to_facing(face.facing), catalog.face_type(face.face_type)))
        catalog.add_fitting_type(fitting_type)

    for model_config in config.fitting_models:
        box = model_config.bounding_box
        model = FittingModel(
            id=model_config.id,
            fitting_type=catalog.fitting_type(model_config.fitting_type),
            bounding_box=BoundingBox3D(box.width, box.depth, box.height),
        )
        for area in model_config.clearance_areas:
            if area.perpendicular_length > 0:
                model.add_clearance_area(_to_facing(area.side), area.perpendicular_length)
        catalog.add_fitting_model(model)

    logger.debug(
        f"Built catalog with {len(catalog.face_types)} face types, "
        f"{len(catalog.fitting_types)} fitting types and "
        f"{len(catalog.fitting_models)} fitting models"
    )
    return catalog


def _inward_direction(config: DoorConfig | WindowConfig) -> Direction:
    if config.inward_direction is not None:
        return Direction(config.inward_direction)
    return Direction.from_radians(config.inward_angle)


def config_to_door(config: DoorConfig) -> Door:
    kwargs = {}
    if config.height is not None:
        kwargs["height"] = config.height
    return Door(
        position=Vector2D(config.x, config.y),
        side_length=config.breadth,
        inwards_direction=_inward_direction(config),
        **kwargs,
    )


def config_to_window(config: WindowConfig) -> Window:
    kwargs = {}
    if config.height is not None:
        kwargs["height"] = config.height
    if config.elevation is not None:
        kwargs["elevation"] = config.elevation
    return Window(
        position=Vector2D(config.x, config.y),
        side_length=config.breadth,
        inwards_direction=_inward_direction(config),
        **kwargs,
    )


def config_to_room(config: RoomConfig) -> Room:
    """Convert a RoomConfig to a Room with its doors and windows.

    Args:
        config: Room configuration.

    Returns:
        A room with door and window clearance areas reserved.
    """
    return Room(
        width=config.width,
        depth=config.depth,
        height=config.height,
        grid_cell_size=config.grid_cell_size,
        doors=[config_to_door(door) for door in config.doors],
        windows=[config_to_window(window) for window in config.windows],
    )
