"""Configuration file loader with comprehensive error handling.

This module provides functionality to load and parse the JSON fitting
database and placement request files. It handles file system errors, JSON
parsing errors, Pydantic validation errors and unresolved catalog references
with clear, actionable error messages.
"""

import json
from importlib import resources
from pathlib import Path
from typing import Any

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from furnisher.application.config.adapter import config_to_catalog
from furnisher.application.config.schema import CatalogConfig, PlacementRequestConfig
from furnisher.domain.catalog import CatalogError, FittingCatalog

DATA_PACKAGE = "furnisher.data"
DEFAULT_CATALOG_FILE = "fitting_database.json"
DEMO_REQUEST_FILE = "demo_request.json"


class ConfigError(Exception):
    """Exception raised for configuration-related errors.

    Attributes:
        message: The primary error message
        error_type: Category of error (file_not_found, permission_denied,
            file_read_error, json_parse, validation, reference)
        path: Path to the configuration file (if applicable)
        details: Additional error details (line/column for JSON, validation errors, etc.)
    """

    def __init__(
        self,
        message: str,
        error_type: str = "unknown",
        path: Path | None = None,
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        self.message = message
        self.error_type = error_type
        self.path = path
        self.details = details or []
        super().__init__(message)

    def __str__(self) -> str:
        """Format error message for display."""
        return self.message


def _format_json_path(loc: tuple[str | int, ...]) -> str:
    """Format a Pydantic location tuple as a JSON path string.

    Args:
        loc: Tuple of path segments (strings for keys, ints for array indices)

    Returns:
        Formatted JSON path like "room.windows[0].breadth"

    Examples:
        >>> _format_json_path(("room", "width"))
        'room.width'
        >>> _format_json_path(("fitting_models", 2, "bounding_box", "depth"))
        'fitting_models[2].bounding_box.depth'
    """
    parts: list[str] = []
    for segment in loc:
        if isinstance(segment, int):
            if parts:
                parts[-1] = f"{parts[-1]}[{segment}]"
            else:
                parts.append(f"[{segment}]")
        else:
            parts.append(str(segment))
    return ".".join(parts)


def _extract_validation_errors(
    error: PydanticValidationError,
) -> list[dict[str, Any]]:
    """Extract and format validation errors from a Pydantic ValidationError.

    Returns:
        List of error dictionaries with path, message, value, and error_type
    """
    details: list[dict[str, Any]] = []
    for err in error.errors():
        details.append(
            {
                "path": _format_json_path(err["loc"]),
                "message": err["msg"],
                "value": err.get("input"),
                "error_type": err["type"],
            }
        )
    return details


def _format_validation_error_message(details: list[dict[str, Any]]) -> str:
    lines = ["Configuration validation failed:"]
    for detail in details:
        path = detail["path"] or "<root>"
        message = detail["message"]
        value = detail.get("value")
        if value is not None and not isinstance(value, (dict, list)):
            lines.append(f"  - {path}: {message} (got: {value!r})")
        else:
            lines.append(f"  - {path}: {message}")
    return "\n".join(lines)


def _read_json(path: Path) -> Any:
    """Read and parse a JSON file, mapping failures to ConfigError."""
    if not path.exists():
        raise ConfigError(
            message=f"Config file not found: {path}",
            error_type="file_not_found",
            path=path,
        )

    try:
        content = path.read_text(encoding="utf-8")
    except PermissionError:
        raise ConfigError(
            message=f"Permission denied reading config file: {path}",
            error_type="permission_denied",
            path=path,
        )
    except OSError as e:
        raise ConfigError(
            message=f"Error reading config file: {path}: {e}",
            error_type="file_read_error",
            path=path,
        )

    return _parse_json(content, path)


def _parse_json(content: str, path: Path | None) -> Any:
    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        source = f": {path}" if path is not None else ""
        raise ConfigError(
            message=f"Invalid JSON in config file{source} (line {e.lineno}, column {e.colno}): {e.msg}",
            error_type="json_parse",
            path=path,
            details=[
                {
                    "line": e.lineno,
                    "column": e.colno,
                    "message": e.msg,
                }
            ],
        )


def _validate(model: type[BaseModel], data: Any, path: Path | None = None) -> Any:
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        details = _extract_validation_errors(e)
        raise ConfigError(
            message=_format_validation_error_message(details),
            error_type="validation",
            path=path,
            details=details,
        )


def _build_catalog(config: CatalogConfig, path: Path | None = None) -> FittingCatalog:
    try:
        return config_to_catalog(config)
    except CatalogError as e:
        raise ConfigError(
            message=f"Invalid fitting database: {e}",
            error_type="reference",
            path=path,
            details=[{"message": str(e)}],
        ) from e


def load_catalog_config(path: Path) -> CatalogConfig:
    """Load and validate a fitting database from a JSON file, without resolving references."""
    return _validate(CatalogConfig, _read_json(path), path)


def load_catalog(path: Path) -> FittingCatalog:
    """Load a fitting database from a JSON file and build the catalog.

    Args:
        path: Path to the JSON fitting database

    Returns:
        A catalog with every declared face type, fitting type and model

    Raises:
        ConfigError: If the file cannot be loaded or validated.
            The error_type attribute indicates the specific error category:
            - "file_not_found": File does not exist
            - "permission_denied": File cannot be read
            - "json_parse": Invalid JSON syntax
            - "validation": Schema validation failed
            - "reference": An entry references an unknown id

    Example:
        >>> from pathlib import Path
        >>> try:
        ...     catalog = load_catalog(Path("fittings.json"))
        ... except ConfigError as e:
        ...     print(f"Error: {e}")
    """
    return _build_catalog(load_catalog_config(path), path)


def load_catalog_from_dict(data: dict[str, Any]) -> FittingCatalog:
    """Build a fitting catalog from a dictionary.

    Raises:
        ConfigError: If the data fails validation or has unknown references.
    """
    return _build_catalog(_validate(CatalogConfig, data))


def load_default_catalog() -> FittingCatalog:
    """Load the fitting database bundled with the package."""
    content = resources.files(DATA_PACKAGE).joinpath(DEFAULT_CATALOG_FILE).read_text(encoding="utf-8")
    return _build_catalog(_validate(CatalogConfig, _parse_json(content, None)))


def load_request(path: Path) -> PlacementRequestConfig:
    """Load and validate a placement request from a JSON file.

    Raises:
        ConfigError: If the file cannot be loaded or validated.
    """
    return _validate(PlacementRequestConfig, _read_json(path), path)


def load_request_from_dict(data: dict[str, Any]) -> PlacementRequestConfig:
    """Load and validate a placement request from a dictionary.

    Raises:
        ConfigError: If the data fails validation.
    """
    return _validate(PlacementRequestConfig, data)


def load_demo_request() -> PlacementRequestConfig:
    """Load the reference placement request bundled with the package."""
    content = resources.files(DATA_PACKAGE).joinpath(DEMO_REQUEST_FILE).read_text(encoding="utf-8")
    return _validate(PlacementRequestConfig, _parse_json(content, None))


def resolve_catalog_path(request: PlacementRequestConfig, request_path: Path) -> Path | None:
    """Path of the fitting database named by a request, relative to the request file."""
    if request.catalog is None:
        return None
    catalog_path = Path(request.catalog)
    if not catalog_path.is_absolute():
        catalog_path = request_path.parent / catalog_path
    return catalog_path
