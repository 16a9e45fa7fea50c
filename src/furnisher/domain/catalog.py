"""Fitting catalog: face types, spatial relations, fitting types and models.

Catalog records are shared read-only by every fitting instance placed from
them. Face types compare by identity, so relations always reference the exact
support face type object registered in the catalog.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from .value_objects import BoundingBox3D, Facing, RepresentationObject, StaticFaceType

__all__ = [
    "CatalogError",
    "Face",
    "FaceType",
    "FittingCatalog",
    "FittingModel",
    "FittingType",
    "SpatialRelation",
]


class CatalogError(Exception):
    """Raised for unknown, duplicate or inconsistent catalog entries."""


@dataclass(eq=False)
class FaceType:
    """Semantic type of a fitting face.

    Attributes:
        id: Unique identifier within the catalog.
        spatial_relations: Relations a face of this type can satisfy as an
            attacher, in declaration order.
    """

    id: str
    spatial_relations: list[SpatialRelation] = field(default_factory=list)

    def add_relation(self, relation: SpatialRelation) -> None:
        self.spatial_relations.append(relation)

    def __repr__(self) -> str:
        return f"FaceType({self.id!r})"


@dataclass(frozen=True, eq=False)
class SpatialRelation:
    """Required perpendicular distance from an attacher face to a support face.

    Attributes:
        support_face_type: Face type the attacher must face.
        distance: Gap between the attacher face and the support face.
    """

    support_face_type: FaceType
    distance: float

    def __post_init__(self) -> None:
        if self.distance < 0:
            raise ValueError("Relation distance must be non-negative")


@dataclass(frozen=True)
class Face:
    """A side of a fitting type paired with its semantic face type."""

    facing: Facing
    face_type: FaceType


@dataclass(eq=False)
class FittingType:
    """Kind of fitting, e.g. sofa or floor lamp, with its semantic faces."""

    id: str
    faces: list[Face] = field(default_factory=list)

    def add_face(self, face: Face) -> None:
        self.faces.append(face)

    def __repr__(self) -> str:
        return f"FittingType({self.id!r})"


@dataclass(eq=False)
class FittingModel:
    """Concrete fitting model with dimensions and clearance areas.

    Attributes:
        id: Unique model identifier.
        fitting_type: Type the model is an instance of.
        bounding_box: Dimensions in the default orientation.
        clearance_areas: Perpendicular clearance length per side. Sides
            without an entry have no clearance area.
    """

    id: str
    fitting_type: FittingType
    bounding_box: BoundingBox3D
    clearance_areas: dict[Facing, float] = field(default_factory=dict)

    def add_clearance_area(self, side: Facing, perpendicular_length: float) -> None:
        if perpendicular_length < 0:
            raise ValueError("Clearance area length must be non-negative")
        self.clearance_areas[side] = perpendicular_length

    def clearance_area_length(self, side: Facing) -> float:
        return self.clearance_areas.get(side, 0.0)

    @property
    def base_area(self) -> float:
        return self.bounding_box.base_area

    @property
    def representation(self) -> RepresentationObject:
        return RepresentationObject(self.id, self.fitting_type.id)

    def __repr__(self) -> str:
        return f"FittingModel({self.id!r})"


class FittingCatalog:
    """Registry of face types, fitting types and fitting models.

    The three static face types ``wall``, ``door`` and ``window`` are always
    present. Only ``wall`` relations currently affect placement; door and
    window support relations are recognized but inert.
    """

    def __init__(self) -> None:
        self._face_types: dict[str, FaceType] = {}
        self._fitting_types: dict[str, FittingType] = {}
        self._fitting_models: dict[str, FittingModel] = {}

        self.wall_face_type = self.add_face_type(StaticFaceType.WALL.value)
        self.door_face_type = self.add_face_type(StaticFaceType.DOOR.value)
        self.window_face_type = self.add_face_type(StaticFaceType.WINDOW.value)

    @property
    def face_types(self) -> list[FaceType]:
        return list(self._face_types.values())

    @property
    def fitting_types(self) -> list[FittingType]:
        return list(self._fitting_types.values())

    @property
    def fitting_models(self) -> list[FittingModel]:
        return list(self._fitting_models.values())

    def add_face_type(self, face_type_id: str) -> FaceType:
        if face_type_id in self._face_types:
            raise CatalogError(f"Duplicate face type '{face_type_id}'")
        face_type = FaceType(face_type_id)
        self._face_types[face_type_id] = face_type
        return face_type

    def add_fitting_type(self, fitting_type: FittingType) -> FittingType:
        if fitting_type.id in self._fitting_types:
            raise CatalogError(f"Duplicate fitting type '{fitting_type.id}'")
        for face in fitting_type.faces:
            self._check_registered(face.face_type)
        self._fitting_types[fitting_type.id] = fitting_type
        return fitting_type

    def add_fitting_model(self, fitting_model: FittingModel) -> FittingModel:
        if fitting_model.id in self._fitting_models:
            raise CatalogError(f"Duplicate fitting model '{fitting_model.id}'")
        if self._fitting_types.get(fitting_model.fitting_type.id) is not fitting_model.fitting_type:
            raise CatalogError(
                f"Fitting model '{fitting_model.id}' uses unregistered fitting type "
                f"'{fitting_model.fitting_type.id}'"
            )
        self._fitting_models[fitting_model.id] = fitting_model
        return fitting_model

    def face_type(self, face_type_id: str) -> FaceType:
        try:
            return self._face_types[face_type_id]
        except KeyError:
            raise CatalogError(f"Unknown face type '{face_type_id}'") from None

    def fitting_type(self, fitting_type_id: str) -> FittingType:
        try:
            return self._fitting_types[fitting_type_id]
        except KeyError:
            raise CatalogError(f"Unknown fitting type '{fitting_type_id}'") from None

    def fitting_model(self, fitting_model_id: str) -> FittingModel:
        try:
            return self._fitting_models[fitting_model_id]
        except KeyError:
            raise CatalogError(f"Unknown fitting model '{fitting_model_id}'") from None

    def resolve_models(self, fitting_model_ids: Iterable[str]) -> list[FittingModel]:
        """Look up every requested model, failing on the first unknown id."""
        return [self.fitting_model(model_id) for model_id in fitting_model_ids]

    def is_static_face_type(self, face_type: FaceType) -> bool:
        return face_type in (self.wall_face_type, self.door_face_type, self.window_face_type)

    def is_wall_face_type(self, face_type: FaceType) -> bool:
        return face_type is self.wall_face_type

    def _check_registered(self, face_type: FaceType) -> None:
        if self._face_types.get(face_type.id) is not face_type:
            raise CatalogError(f"Face type '{face_type.id}' is not registered in this catalog")
