"""Configuration schema and loading system for fitting databases and placement requests.

Public API:
    - CatalogConfig: Root model of a fitting database
    - PlacementRequestConfig: Root model of a placement request
    - RoomConfig, DoorConfig, WindowConfig: Room description models
    - load_catalog / load_catalog_from_dict: Build a FittingCatalog from JSON
    - load_request / load_request_from_dict: Load a placement request
    - load_default_catalog / load_demo_request: Bundled data files
    - ConfigError: Exception for configuration errors
    - config_to_catalog / config_to_room: Convert configuration to domain objects

Example:
    >>> from pathlib import Path
    >>> from furnisher.application.config import load_request, ConfigError
    >>>
    >>> try:
    ...     request = load_request(Path("living-room.json"))
    ...     print(f"Room: {request.room.width}x{request.room.depth}")
    ... except ConfigError as e:
    ...     print(f"Error: {e}")
"""

from furnisher.application.config.adapter import config_to_catalog, config_to_room
from furnisher.application.config.loader import (
    ConfigError,
    load_catalog,
    load_catalog_config,
    load_catalog_from_dict,
    load_default_catalog,
    load_demo_request,
    load_request,
    load_request_from_dict,
    resolve_catalog_path,
)
from furnisher.application.config.schema import (
    SUPPORTED_VERSIONS,
    BoundingBoxConfig,
    CatalogConfig,
    ClearanceAreaConfig,
    DoorConfig,
    FaceConfig,
    FaceTypeConfig,
    FacingConfig,
    FittingModelConfig,
    FittingTypeConfig,
    PlacementRequestConfig,
    RoomConfig,
    SpatialRelationConfig,
    WindowConfig,
)

__all__ = [
    "SUPPORTED_VERSIONS",
    "BoundingBoxConfig",
    "CatalogConfig",
    "ClearanceAreaConfig",
    "ConfigError",
    "DoorConfig",
    "FaceConfig",
    "FaceTypeConfig",
    "FacingConfig",
    "FittingModelConfig",
    "FittingTypeConfig",
    "PlacementRequestConfig",
    "RoomConfig",
    "SpatialRelationConfig",
    "WindowConfig",
    "config_to_catalog",
    "config_to_room",
    "load_catalog",
    "load_catalog_config",
    "load_catalog_from_dict",
    "load_default_catalog",
    "load_demo_request",
    "load_request",
    "load_request_from_dict",
    "resolve_catalog_path",
]
